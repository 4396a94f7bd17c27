#!/usr/bin/env python3
"""
Unified CLI for company vehicle reservations.

Commands:
  vehicles     - List vehicles
  add-vehicle  - Add a vehicle to the fleet
  calendar     - Show a month calendar of a vehicle's booking status
  week         - Show a vehicle's bookings for one week
  day          - Show a vehicle's hourly schedule for one day
  list         - List a vehicle's reservations
  book         - Create a reservation
  cancel       - Delete a reservation
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from tabulate import tabulate
from typing import Dict, List, Optional

import config
from models import (
    DayCell,
    DayStatus,
    DirectoryBlobStore,
    Reservation,
    ReservationError,
    ReservationStore,
    TimeSlot,
    VehicleType,
    get_month_days,
    get_week_days,
)

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# =============================================================================
# Formatting helpers
# =============================================================================


def parse_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (use YYYY-MM-DD)")


def parse_month(value: str) -> date:
    """argparse type for YYYY-MM months; returns the first of the month."""
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid month '{value}' (use YYYY-MM)")


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_time_range(reservation: Reservation) -> str:
    return f"{reservation.start_time}-{reservation.end_time}"


def format_booker(reservation: Reservation) -> str:
    """User name with department, e.g. 'Sato (Sales)'."""
    return f"{reservation.user_name} ({reservation.department})"


def format_calendar_cell(cell: DayCell, status: DayStatus) -> str:
    """Day number with status mark; padding days are bracketed."""
    if cell.other_month:
        return f"({cell.date.day})"
    return f"{cell.date.day} {status.symbol}"


# =============================================================================
# Table builders
# =============================================================================


def make_calendar_table(
    cells: List[DayCell], statuses: Dict[date, DayStatus]
) -> List[List[str]]:
    """Arrange calendar cells into week rows."""
    rows = []
    for start in range(0, len(cells), 7):
        week = cells[start : start + 7]
        rows.append(
            [
                format_calendar_cell(c, statuses.get(c.date, DayStatus.AVAILABLE))
                for c in week
            ]
        )
    return rows


def make_schedule_table(schedule: List[TimeSlot]) -> List[List[str]]:
    """Convert day schedule slots to table rows."""
    rows = []
    for slot in schedule:
        if slot.available:
            rows.append([slot.label, "Free", "-"])
            continue
        details = "; ".join(
            f"{format_booker(r)} {format_time_range(r)}" for r in slot.reservations
        )
        rows.append([slot.label, "Reserved", details])
    return rows


def make_reservation_table(reservations: List[Reservation]) -> List[List[str]]:
    """Convert reservations to table rows."""
    rows = []
    for r in reservations:
        rows.append(
            [
                str(r.id),
                r.date.isoformat(),
                format_time_range(r),
                r.user_name,
                r.department,
                truncate(r.purpose),
            ]
        )
    return rows


# =============================================================================
# Commands
# =============================================================================


def _require_vehicle(store: ReservationStore, vehicle_id: int):
    vehicle = store.get_vehicle(vehicle_id)
    if vehicle is None:
        print(f"Error: Unknown vehicle id {vehicle_id}")
        print("\nAvailable vehicles:")
        for v in store.vehicles:
            print(f"  {v.id}: {v.name}")
    return vehicle


def cmd_vehicles(store: ReservationStore, args) -> int:
    """List vehicles."""
    rows = [[v.id, v.name, v.type.value] for v in store.vehicles]
    print(tabulate(rows, headers=["ID", "Name", "Type"], tablefmt="simple"))
    return 0


def cmd_add_vehicle(store: ReservationStore, args) -> int:
    """Add a vehicle to the fleet."""
    print(f"Adding vehicle: {args.name} ({args.type})")
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    vehicle = store.add_vehicle(args.name, args.type)
    print(f"Vehicle saved with id {vehicle.id}.")
    return 0


def cmd_calendar(store: ReservationStore, args) -> int:
    """Show a month calendar of a vehicle's booking status."""
    vehicle = _require_vehicle(store, args.vehicle_id)
    if vehicle is None:
        return 1

    month = args.month or date.today().replace(day=1)
    cells = get_month_days(month.year, month.month)
    statuses = {
        c.date: store.get_day_status(vehicle.id, c.date)
        for c in cells
        if not c.other_month
    }

    print(f"Vehicle: {vehicle.name}")
    print(f"Month:   {month:%Y-%m}")
    print()
    print(
        tabulate(
            make_calendar_table(cells, statuses),
            headers=WEEKDAY_HEADERS,
            tablefmt="simple",
        )
    )
    print()
    print("○ available   △ partially booked   × fully booked")
    return 0


def cmd_week(store: ReservationStore, args) -> int:
    """Show a vehicle's bookings for one week."""
    vehicle = _require_vehicle(store, args.vehicle_id)
    if vehicle is None:
        return 1

    days = get_week_days(args.date or date.today())
    rows = []
    for day in days:
        day_reservations = [r for r in store.reservations_for(vehicle.id) if r.date == day]
        rows.append(
            [
                day.isoformat(),
                f"{day:%a}",
                store.get_day_status(vehicle.id, day).symbol,
                ", ".join(format_time_range(r) for r in day_reservations) or "-",
            ]
        )

    print(f"Vehicle: {vehicle.name}")
    print(f"Week of: {days[0].isoformat()}")
    print()
    print(
        tabulate(
            rows, headers=["Date", "Day", "Status", "Bookings"], tablefmt="simple"
        )
    )
    return 0


def cmd_day(store: ReservationStore, args) -> int:
    """Show a vehicle's hourly schedule for one day."""
    vehicle = _require_vehicle(store, args.vehicle_id)
    if vehicle is None:
        return 1

    schedule = store.get_day_schedule(vehicle.id, args.date)
    status = store.get_day_status(vehicle.id, args.date)

    print(f"Vehicle: {vehicle.name}")
    print(f"Date:    {args.date.isoformat()} ({args.date:%a})")
    print(f"Status:  {status.symbol} {status.value}")
    print()
    print(
        tabulate(
            make_schedule_table(schedule),
            headers=["Time", "Status", "Reservations"],
            tablefmt="simple",
        )
    )
    return 0


def cmd_list(store: ReservationStore, args) -> int:
    """List a vehicle's reservations."""
    vehicle = _require_vehicle(store, args.vehicle_id)
    if vehicle is None:
        return 1

    reservations = store.reservations_for(vehicle.id)
    if args.since:
        reservations = [r for r in reservations if r.date >= args.since]

    print(f"Vehicle: {vehicle.name}")
    print(f"Reservations: {len(reservations)}")
    print()

    if not reservations:
        print("No reservations found.")
        return 0

    headers = ["ID", "Date", "Time", "User", "Department", "Purpose"]
    print(
        tabulate(
            make_reservation_table(reservations), headers=headers, tablefmt="simple"
        )
    )
    return 0


def cmd_book(store: ReservationStore, args) -> int:
    """Create a reservation."""
    vehicle = _require_vehicle(store, args.vehicle_id)
    if vehicle is None:
        return 1

    draft = Reservation(
        vehicle_id=vehicle.id,
        date=args.date,
        start_time=args.start,
        end_time=args.end,
        user_name=args.user,
        department=args.department,
        purpose=args.purpose,
    )

    print(f"Booking {vehicle.name}:")
    print(f"  Date:       {draft.date.isoformat()}")
    print(f"  Time:       {format_time_range(draft)}")
    print(f"  User:       {format_booker(draft)}")
    if draft.purpose:
        print(f"  Purpose:    {draft.purpose}")
    print()

    if args.dry_run:
        available = store.check_availability(
            vehicle.id, draft.date, draft.start_time, draft.end_time
        )
        print("Slot is free." if available else "Slot is already booked.")
        print("(dry run - no changes made)")
        return 0

    reservation = store.add_reservation(draft)
    print(f"Reservation saved with id {reservation.id}.")
    return 0


def cmd_cancel(store: ReservationStore, args) -> int:
    """Delete a reservation."""
    reservation = store.get_reservation(args.reservation_id)
    if reservation is None:
        print(f"Error: Unknown reservation id {args.reservation_id}")
        return 1

    print("Deleting reservation:")
    print(f"  {reservation.date.isoformat()} {format_time_range(reservation)}")
    print(f"  {format_booker(reservation)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    store.delete_reservation(reservation.id)
    print("Reservation deleted.")
    return 0


COMMANDS = {
    "vehicles": cmd_vehicles,
    "add-vehicle": cmd_add_vehicle,
    "calendar": cmd_calendar,
    "week": cmd_week,
    "day": cmd_day,
    "list": cmd_list,
    "book": cmd_book,
    "cancel": cmd_cancel,
}

# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Company vehicle reservations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles
  %(prog)s add-vehicle "Company Car C" --type suv
  %(prog)s calendar 1 --month 2024-06
  %(prog)s week 1 --date 2024-06-12
  %(prog)s day 1 2024-06-10
  %(prog)s book 1 2024-06-10 09:00 11:00 --user Sato --department Sales \\
      --purpose "Client visit"
  %(prog)s cancel 3
""",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=config.DATA_DIR,
        help=f"Directory holding the reservation data (default: {config.DATA_DIR})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("vehicles", help="List vehicles")

    add_vehicle_parser = subparsers.add_parser(
        "add-vehicle", help="Add a vehicle to the fleet"
    )
    add_vehicle_parser.add_argument("name", type=str, help="Vehicle name")
    add_vehicle_parser.add_argument(
        "--type",
        choices=[t.value for t in VehicleType],
        default=VehicleType.SEDAN.value,
        help="Vehicle type (default: sedan)",
    )
    add_vehicle_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    calendar_parser = subparsers.add_parser(
        "calendar", help="Show a month calendar of booking status"
    )
    calendar_parser.add_argument("vehicle_id", type=int, help="Vehicle id")
    calendar_parser.add_argument(
        "--month",
        type=parse_month,
        help="Month in YYYY-MM format (default: this month)",
    )

    week_parser = subparsers.add_parser("week", help="Show bookings for one week")
    week_parser.add_argument("vehicle_id", type=int, help="Vehicle id")
    week_parser.add_argument(
        "--date",
        type=parse_date,
        help="Any date in the week, YYYY-MM-DD (default: today)",
    )

    day_parser = subparsers.add_parser("day", help="Show the hourly schedule for a day")
    day_parser.add_argument("vehicle_id", type=int, help="Vehicle id")
    day_parser.add_argument("date", type=parse_date, help="Date in YYYY-MM-DD format")

    list_parser = subparsers.add_parser("list", help="List a vehicle's reservations")
    list_parser.add_argument("vehicle_id", type=int, help="Vehicle id")
    list_parser.add_argument(
        "--since",
        type=parse_date,
        help="Show only reservations on or after date (YYYY-MM-DD)",
    )

    book_parser = subparsers.add_parser("book", help="Create a reservation")
    book_parser.add_argument("vehicle_id", type=int, help="Vehicle id")
    book_parser.add_argument("date", type=parse_date, help="Date in YYYY-MM-DD format")
    book_parser.add_argument("start", type=str, help="Start time (HH:MM)")
    book_parser.add_argument("end", type=str, help="End time (HH:MM, exclusive)")
    book_parser.add_argument("--user", type=str, required=True, help="Who books")
    book_parser.add_argument(
        "--department", type=str, required=True, help="Booker's department"
    )
    book_parser.add_argument("--purpose", type=str, help="Purpose of the trip")
    book_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Check availability without saving",
    )

    cancel_parser = subparsers.add_parser("cancel", help="Delete a reservation")
    cancel_parser.add_argument("reservation_id", type=int, help="Reservation id")
    cancel_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be deleted without saving",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        store = ReservationStore(DirectoryBlobStore(args.data_dir))
        return COMMANDS[args.command](store, args)
    except ReservationError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
