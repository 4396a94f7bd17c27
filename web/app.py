"""Flask web application for company vehicle reservations."""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from flask import Flask, abort, flash, redirect, render_template, request, url_for

import config
from models import (
    DayStatus,
    DirectoryBlobStore,
    Reservation,
    ReservationError,
    ReservationStore,
    VehicleType,
    get_month_days,
    get_week_days,
    get_week_start,
    month_start,
)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY
app.config["DATA_DIR"] = config.DATA_DIR

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def get_store() -> ReservationStore:
    """Load the store from the configured data directory."""
    return ReservationStore(DirectoryBlobStore(app.config["DATA_DIR"]))


def parse_month_arg(value: Optional[str]) -> date:
    """First of the month from a YYYY-MM query arg, defaulting to this month."""
    if value:
        try:
            return datetime.strptime(value, "%Y-%m").date()
        except ValueError:
            pass
    return date.today().replace(day=1)


def parse_date_arg(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def status_color(status: DayStatus) -> str:
    """Get Tailwind color classes for a day status."""
    colors = {
        DayStatus.AVAILABLE: "text-green-500",
        DayStatus.PARTIAL: "text-orange-500",
        DayStatus.FULL: "text-red-500",
    }
    return colors.get(status, "text-gray-500")


# Register template filters
app.jinja_env.filters["status_color"] = status_color


def _get_vehicle(store: ReservationStore, vehicle_id: int):
    vehicle = store.get_vehicle(vehicle_id)
    if vehicle is None:
        flash(f"Vehicle {vehicle_id} not found", "error")
    return vehicle


@app.route("/")
def index():
    """Dashboard listing vehicles with today's status."""
    store = get_store()
    today = date.today()
    vehicles = [
        {
            "vehicle": v,
            "status": store.get_day_status(v.id, today),
            "upcoming": sum(1 for r in store.reservations_for(v.id) if r.date >= today),
        }
        for v in store.vehicles
    ]
    return render_template(
        "index.html",
        vehicles=vehicles,
        vehicle_types=[t.value for t in VehicleType],
        today=today,
    )


@app.route("/vehicles", methods=["POST"])
def add_vehicle():
    """Handle add vehicle form submission."""
    name = request.form.get("name", "")
    vehicle_type = request.form.get("type") or VehicleType.SEDAN.value

    try:
        vehicle = get_store().add_vehicle(name, vehicle_type)
    except ReservationError as e:
        flash(str(e), "error")
        return redirect(url_for("index"))
    except ValueError:
        flash(f"Unknown vehicle type '{vehicle_type}'", "error")
        return redirect(url_for("index"))

    flash(f"Added vehicle: {vehicle.name}", "success")
    return redirect(url_for("index"))


@app.route("/vehicle/<int:vehicle_id>")
def vehicle_calendar(vehicle_id: int):
    """Month calendar with status marks, reservation list and booking form."""
    store = get_store()
    vehicle = _get_vehicle(store, vehicle_id)
    if vehicle is None:
        return redirect(url_for("index"))

    month = parse_month_arg(request.args.get("month"))
    cells = get_month_days(month.year, month.month)
    days = [
        {
            "cell": cell,
            "status": store.get_day_status(vehicle.id, cell.date),
        }
        for cell in cells
    ]
    weeks = [days[i : i + 7] for i in range(0, len(days), 7)]

    return render_template(
        "calendar.html",
        vehicle=vehicle,
        weeks=weeks,
        weekdays=WEEKDAYS,
        month=month,
        prev_month=month_start(month, -1),
        next_month=month_start(month, 1),
        reservations=store.reservations_for(vehicle.id),
        today=date.today(),
    )


@app.route("/vehicle/<int:vehicle_id>/week")
def vehicle_week(vehicle_id: int):
    """Week view, Monday to Sunday, of a vehicle's day schedules."""
    store = get_store()
    vehicle = _get_vehicle(store, vehicle_id)
    if vehicle is None:
        return redirect(url_for("index"))

    day = parse_date_arg(request.args.get("date")) or date.today()
    days = [
        {
            "date": d,
            "status": store.get_day_status(vehicle.id, d),
            "schedule": store.get_day_schedule(vehicle.id, d),
        }
        for d in get_week_days(day)
    ]
    week_start = get_week_start(day)

    return render_template(
        "week.html",
        vehicle=vehicle,
        days=days,
        week_start=week_start,
        prev_week=week_start - timedelta(days=7),
        next_week=week_start + timedelta(days=7),
    )


@app.route("/vehicle/<int:vehicle_id>/day/<day_str>")
def vehicle_day(vehicle_id: int, day_str: str):
    """Hourly schedule for one day."""
    store = get_store()
    vehicle = _get_vehicle(store, vehicle_id)
    if vehicle is None:
        return redirect(url_for("index"))

    day = parse_date_arg(day_str)
    if day is None:
        abort(404)

    return render_template(
        "day.html",
        vehicle=vehicle,
        day=day,
        weekday=WEEKDAYS[(day.weekday() + 1) % 7],
        status=store.get_day_status(vehicle.id, day),
        schedule=store.get_day_schedule(vehicle.id, day),
    )


@app.route("/vehicle/<int:vehicle_id>/reserve", methods=["POST"])
def reserve(vehicle_id: int):
    """Handle booking form submission."""
    store = get_store()
    vehicle = _get_vehicle(store, vehicle_id)
    if vehicle is None:
        return redirect(url_for("index"))

    day = parse_date_arg(request.form.get("date"))
    if day is None:
        flash("Please enter a valid date", "error")
        return redirect(url_for("vehicle_calendar", vehicle_id=vehicle_id))

    draft = Reservation(
        vehicle_id=vehicle.id,
        date=day,
        start_time=request.form.get("start_time", ""),
        end_time=request.form.get("end_time", ""),
        user_name=request.form.get("user_name", ""),
        department=request.form.get("department", ""),
        purpose=request.form.get("purpose") or None,
    )

    try:
        store.add_reservation(draft)
    except ReservationError as e:
        flash(str(e), "error")
        return redirect(
            url_for("vehicle_calendar", vehicle_id=vehicle_id, month=f"{day:%Y-%m}")
        )

    flash(
        f"Reserved {vehicle.name} on {day.isoformat()} "
        f"{draft.start_time}-{draft.end_time}",
        "success",
    )
    return redirect(
        url_for("vehicle_calendar", vehicle_id=vehicle_id, month=f"{day:%Y-%m}")
    )


@app.route("/reservation/<int:reservation_id>/delete", methods=["POST"])
def delete_reservation(reservation_id: int):
    """Handle reservation delete button."""
    store = get_store()
    reservation = store.get_reservation(reservation_id)
    store.delete_reservation(reservation_id)

    if reservation is None:
        return redirect(url_for("index"))

    flash("Reservation deleted", "success")
    return redirect(url_for("vehicle_calendar", vehicle_id=reservation.vehicle_id))


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
