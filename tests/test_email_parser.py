"""End-to-end tests for parse()."""

from datetime import date

from showtracker.core.show_model import UNKNOWN, ParsedShow
from showtracker.parser import DateWindow, parse

HTML_CONFIRMATION = (
    "<html><body><h1>Your tickets</h1><table>"
    "<tr><td>Event:</td><td>Synthwave Nights</td></tr>"
    "<tr><td>Date:</td><td>15.03.2026</td></tr>"
    "<tr><td>Venue:</td><td>Columbiahalle, Columbiadamm 13-21, 10965 Berlin</td></tr>"
    "<tr><td>Promoter:</td><td>Trinity Music</td></tr>"
    "</table></body></html>"
)


class TestParseBasics:
    """Tests for the show/date requirement."""

    def test_newsletter_is_not_a_show(self, today):
        assert parse("Weekly Newsletter", "Check out our top picks!", today=today) is None

    def test_labelled_plain_text(self, today):
        parsed = parse("Your tickets", "Event: Jazz Night\nDate: 2025-11-03", today=today)

        assert parsed == ParsedShow(show="Jazz Night", date="2025-11-03")
        assert parsed.city == UNKNOWN
        assert parsed.venue == UNKNOWN

    def test_label_values_on_next_line(self, today):
        body = "Event:\nJazz Night\nDate:\n2025-11-03\nVenue:\nSO36"
        parsed = parse("Your tickets", body, today=today)

        assert parsed == ParsedShow(show="Jazz Night", date="2025-11-03", venue="SO36")

    def test_subject_used_as_show(self, today):
        parsed = parse("Concert reminder", "Your show is on 14.03.2025. Enjoy!", today=today)

        assert parsed.show == "Concert reminder"
        assert parsed.date == "2025-03-14"

    def test_subject_fallback_truncated(self, today):
        parsed = parse("T" * 250, "Date: 15.03.2026", today=today)

        assert parsed.show == "T" * 200

    def test_implausible_year(self, today):
        assert parse("Receipt", "Ref: 12345, 01.01.1999", today=today) is None

    def test_none_inputs(self, today):
        assert parse(None, None, today=today) is None

    def test_empty_subject_and_no_label(self, today):
        assert parse("", "Date: 15.03.2026", today=today) is None

    def test_repeatable(self, today):
        body = "Event: Jazz Night\nDate: 2025-11-03"
        assert parse("Tickets", body, today=today) == parse("Tickets", body, today=today)

    def test_custom_window(self, today):
        body = "Event: Jazz Night\nDate: 15.03.2026"
        assert parse("Tickets", body, today=today, window=DateWindow(0, 0)) is None


class TestParseVendor:
    """Tests for vendor profile precedence."""

    def test_eventim_body_line(self, today):
        parsed = parse("Ticket confirmation", "Synthwave Nights, Berlin, 05.03.2026", today=today)

        assert parsed.show == "Synthwave Nights"
        assert parsed.city == "Berlin"
        assert parsed.date == "2026-03-05"

    def test_eventim_line_in_html_block(self, today):
        """Text from a preceding element stays out of the show name."""
        body = "<p>Thanks for your order</p><p>Synthwave Nights, Berlin, 05.03.2026</p>"
        parsed = parse("", body, today=today)

        assert parsed == ParsedShow(show="Synthwave Nights", date="2026-03-05", city="Berlin")

    def test_vendor_city_beats_venue_address(self, today):
        subject = "Your EVENTIM order: Artist - order number 998877"
        body = "Venue: Somewhere Hall, 10115 Berlin\nArtist, Hamburg, 01.01.2026"
        parsed = parse(subject, body, today=today)

        assert parsed.show == "Artist"
        assert parsed.city == "Hamburg"
        assert parsed.venue == "Somewhere Hall"
        assert parsed.date == "2026-01-01"

    def test_vendor_date_beats_label_date(self, today):
        body = "Date: 20.09.2025\nSynthwave Nights, Berlin, 05.03.2026"
        parsed = parse("Ticket confirmation", body, today=today)

        assert parsed.date == "2026-03-05"


class TestParseFields:
    """Tests for venue and city extraction through parse()."""

    def test_html_confirmation(self, today):
        parsed = parse("Your tickets", HTML_CONFIRMATION, today=today)

        assert parsed == ParsedShow(
            show="Synthwave Nights",
            date="2026-03-15",
            city="Berlin",
            venue="Columbiahalle",
        )

    def test_german_confirmation(self, today):
        body = (
            "Veranstaltung: Die Ärzte\n"
            "Datum: 14.08.2026\n"
            "Veranstaltungsort: Waldbühne\n"
            "Stadt: berlin"
        )
        parsed = parse("Ihre Tickets", body, today=today)

        assert parsed == ParsedShow(
            show="Die Ärzte",
            date="2026-08-14",
            city="Berlin",
            venue="Waldbühne",
        )

    def test_month_name_and_where_label(self, today):
        body = "When: Saturday, March 15th, 2026\nWhere: Roundhouse, London"
        parsed = parse("Tickets for Arcade Fire", body, today=today)

        assert parsed.show == "Tickets for Arcade Fire"
        assert parsed.date == "2026-03-15"
        assert parsed.venue == "Roundhouse"
        assert parsed.city == UNKNOWN

    def test_sentence_city_becomes_unknown(self, today):
        body = (
            "Event: Jazz Night\n"
            "Date: 2025-11-03\n"
            "City: You can check your tickets at any time by logging in"
        )
        parsed = parse("Your tickets", body, today=today)

        assert parsed.city == UNKNOWN
        assert not parsed.has_city

    def test_date_value(self, today):
        parsed = parse("Your tickets", "Event: Jazz Night\nDate: 2025-11-03", today=today)
        assert parsed.date_value == date(2025, 11, 3)
