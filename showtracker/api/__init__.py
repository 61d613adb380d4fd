"""HTTP API for showtracker."""
