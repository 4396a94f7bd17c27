#!/usr/bin/env python3
"""Tests for reserve CLI formatting, table helpers and commands."""
import argparse
from datetime import date

import pytest

from models import DayCell, DayStatus, Reservation, TimeSlot, get_month_days
from reserve import (
    format_calendar_cell,
    main,
    make_calendar_table,
    make_reservation_table,
    make_schedule_table,
    parse_date,
    parse_month,
    truncate,
)


def make_reservation(start="09:00", end="11:00", rid=1, purpose=None):
    return Reservation(
        vehicle_id=1,
        date=date(2024, 6, 10),
        start_time=start,
        end_time=end,
        user_name="Sato",
        department="Sales",
        purpose=purpose,
        id=rid,
    )


# =============================================================================
# Formatting helpers
# =============================================================================


class TestParsers:
    """Tests for argparse type helpers."""

    def test_parse_date(self):
        assert parse_date("2024-06-10") == date(2024, 6, 10)

    def test_parse_date_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_date("06/10/2024")

    def test_parse_month(self):
        assert parse_month("2024-06") == date(2024, 6, 1)

    def test_parse_month_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_month("June")


class TestTruncate:
    """Tests for truncate."""

    def test_empty_returns_dash(self):
        assert truncate(None) == "-"
        assert truncate("") == "-"

    def test_short_text_unchanged(self):
        assert truncate("Client visit") == "Client visit"

    def test_long_text_truncated_with_ellipsis(self):
        assert truncate("deliver samples to the branch", max_len=15) == "deliver samp..."


class TestFormatCalendarCell:
    """Tests for format_calendar_cell."""

    def test_in_month_shows_symbol(self):
        cell = DayCell(date(2024, 6, 10))
        assert format_calendar_cell(cell, DayStatus.PARTIAL) == "10 △"

    def test_other_month_bracketed(self):
        cell = DayCell(date(2024, 5, 31), other_month=True)
        assert format_calendar_cell(cell, DayStatus.FULL) == "(31)"


# =============================================================================
# Table builders
# =============================================================================


class TestMakeCalendarTable:
    """Tests for make_calendar_table."""

    def test_six_rows_of_seven(self):
        rows = make_calendar_table(get_month_days(2024, 6), {})
        assert len(rows) == 6
        assert all(len(row) == 7 for row in rows)

    def test_statuses_applied(self):
        cells = get_month_days(2024, 6)
        rows = make_calendar_table(cells, {date(2024, 6, 10): DayStatus.FULL})
        assert rows[0][0] == "(26)"
        assert rows[0][6] == "1 ○"
        assert rows[2][1] == "10 ×"


class TestMakeScheduleTable:
    """Tests for make_schedule_table."""

    def test_free_and_reserved_rows(self):
        reservation = make_reservation()
        schedule = [TimeSlot(8), TimeSlot(9, [reservation])]
        rows = make_schedule_table(schedule)
        assert rows[0] == ["08:00 - 09:00", "Free", "-"]
        assert rows[1] == ["09:00 - 10:00", "Reserved", "Sato (Sales) 09:00-11:00"]


class TestMakeReservationTable:
    """Tests for make_reservation_table."""

    def test_converts_reservations_to_rows(self):
        rows = make_reservation_table([make_reservation(rid=4, purpose="Client visit")])
        assert rows == [
            ["4", "2024-06-10", "09:00-11:00", "Sato", "Sales", "Client visit"]
        ]

    def test_missing_purpose_dash(self):
        rows = make_reservation_table([make_reservation()])
        assert rows[0][5] == "-"


# =============================================================================
# Commands
# =============================================================================


class TestCommands:
    """End-to-end command tests against a temporary data directory."""

    @pytest.fixture
    def run(self, tmp_path):
        def _run(*argv):
            return main(["--data-dir", str(tmp_path), *argv])

        return _run

    def book(self, run, start, end, *extra):
        return run(
            "book", "1", "2024-06-10", start, end,
            "--user", "Sato", "--department", "Sales", *extra
        )

    def test_vehicles_lists_seed_fleet(self, run, capsys):
        assert run("vehicles") == 0
        out = capsys.readouterr().out
        assert "Company Car A (Sedan)" in out
        assert "Kei Car" in out

    def test_add_vehicle(self, run, tmp_path, capsys):
        assert run("add-vehicle", "Company Car C", "--type", "suv") == 0
        assert "id 4" in capsys.readouterr().out
        assert (tmp_path / "vehicles.json").exists()

    def test_add_vehicle_dry_run_saves_nothing(self, run, tmp_path):
        assert run("add-vehicle", "Company Car C", "--dry-run") == 0
        assert not (tmp_path / "vehicles.json").exists()

    def test_book_and_list(self, run, capsys):
        assert self.book(run, "09:00", "11:00", "--purpose", "Client visit") == 0
        assert "Reservation saved with id 1" in capsys.readouterr().out

        assert run("list", "1") == 0
        out = capsys.readouterr().out
        assert "Reservations: 1" in out
        assert "Client visit" in out

    def test_conflicting_booking_fails(self, run, capsys):
        self.book(run, "09:00", "11:00")
        capsys.readouterr()
        assert self.book(run, "10:00", "12:00") == 1
        assert "overlaps" in capsys.readouterr().out

    def test_invalid_interval_fails(self, run, capsys):
        assert self.book(run, "11:00", "09:00") == 1
        assert "Error:" in capsys.readouterr().out

    def test_book_dry_run_reports_availability(self, run, tmp_path, capsys):
        self.book(run, "09:00", "11:00")
        capsys.readouterr()
        assert self.book(run, "10:00", "12:00", "--dry-run") == 0
        assert "already booked" in capsys.readouterr().out

    def test_unknown_vehicle_fails(self, run, capsys):
        assert run("day", "99", "2024-06-10") == 1
        assert "Unknown vehicle id 99" in capsys.readouterr().out

    def test_day_schedule(self, run, capsys):
        self.book(run, "09:00", "11:00")
        capsys.readouterr()
        assert run("day", "1", "2024-06-10") == 0
        out = capsys.readouterr().out
        assert "partial" in out
        assert "Reserved" in out

    def test_calendar(self, run, capsys):
        self.book(run, "09:00", "11:00")
        capsys.readouterr()
        assert run("calendar", "1", "--month", "2024-06") == 0
        out = capsys.readouterr().out
        assert "Month:   2024-06" in out
        assert "10 △" in out

    def test_week(self, run, capsys):
        self.book(run, "09:00", "11:00")
        capsys.readouterr()
        assert run("week", "1", "--date", "2024-06-13") == 0
        out = capsys.readouterr().out
        assert "Week of: 2024-06-10" in out
        assert "09:00-11:00" in out

    def test_cancel(self, run, capsys):
        self.book(run, "09:00", "11:00")
        assert run("cancel", "1") == 0
        assert "Reservation deleted." in capsys.readouterr().out
        run("list", "1")
        assert "No reservations found." in capsys.readouterr().out

    def test_cancel_unknown_fails(self, run, capsys):
        assert run("cancel", "5") == 1

    def test_corrupt_data_reports_error(self, run, tmp_path, capsys):
        (tmp_path / "reservations.json").write_text("[{broken")
        assert run("vehicles") == 1
        assert "Corrupt" in capsys.readouterr().out
