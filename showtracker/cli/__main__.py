"""Entry point for running CLI as module.

Usage:
    python -m showtracker.cli parse ticket.eml --subject "Your EVENTIM order: ..."
"""

from showtracker.cli.main import main

if __name__ == "__main__":
    main()
