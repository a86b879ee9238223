from flask import Blueprint, render_template, current_app
from extensions import pending_records
from services.pending_records_service import PendingRecordsAPIError

schedule_bp = Blueprint("schedule", __name__, url_prefix="/schedule")


@schedule_bp.route("/")
def this_week_schedule():
    """Render this week's schedule as computed by the backend"""
    try:
        entries = pending_records.client.get_schedule()
        error = None
    except PendingRecordsAPIError as e:
        current_app.logger.error(f"Error fetching schedule: {e}")
        entries = []
        error = "Failed to fetch schedule data"

    return render_template("schedule/this_week.html", entries=entries, error=error)
