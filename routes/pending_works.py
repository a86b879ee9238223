from flask import (
    Blueprint,
    render_template,
    request,
    jsonify,
    flash,
    redirect,
    url_for,
    abort,
    current_app,
)
from extensions import pending_records
from services.pending_records_service import PendingRecordsAPIError
from services.record_form import AddRecordForm, EditRecordForm
from utils.date_helpers import derive_dates
from utils.helpers import find_record, sort_records_by_order_date

pending_works_bp = Blueprint("pending_works", __name__, url_prefix="/pending_works")


def _get_record_or_404(record_id):
    """Fetch the collection and pick one record; the backend has no single-record GET."""
    record = find_record(pending_records.client.list_records(), record_id)
    if record is None:
        abort(404)
    return record


@pending_works_bp.route("/")
def list_pending_works():
    """Render the pending works table, earliest order first"""
    try:
        records = sort_records_by_order_date(pending_records.client.list_records())
    except PendingRecordsAPIError as e:
        current_app.logger.error(f"Error fetching pending records: {e}")
        flash("Failed to fetch records.", "error")
        records = []

    return render_template("pending_works/list.html", records=records)


@pending_works_bp.route("/new", methods=["GET", "POST"])
def create_record():
    """Add a new pending work"""
    client = pending_records.client

    if request.method == "POST":
        # srNo is counted at submit time, after validation passes
        form = AddRecordForm(client)
        form.load_form(request.form)
        message, category = form.submit()
        flash(message, category)

        if not form.is_closed:
            return render_template(
                "pending_works/form.html", form_data=form.data, edit_mode=False
            )
        return redirect(url_for("pending_works.list_pending_works"))

    form = AddRecordForm(client)
    return render_template("pending_works/form.html", form_data=form.data, edit_mode=False)


@pending_works_bp.route("/edit/<record_id>", methods=["GET", "POST"])
def edit_record(record_id):
    """Edit an existing pending work"""
    try:
        record = _get_record_or_404(record_id)
    except PendingRecordsAPIError as e:
        current_app.logger.error(f"Error loading record {record_id}: {e}")
        flash("Failed to fetch records.", "error")
        return redirect(url_for("pending_works.list_pending_works"))

    form = EditRecordForm(pending_records.client, record)

    if request.method == "POST":
        form.load_form(request.form)
        message, category = form.submit()
        flash(message, category)

        if form.is_closed:
            return redirect(url_for("pending_works.list_pending_works"))

    return render_template(
        "pending_works/form.html", form_data=form.data, record=record, edit_mode=True
    )


@pending_works_bp.route("/complete/<record_id>", methods=["POST"])
def complete_record(record_id):
    """Mark a pending work completed (removes it from the backend)"""
    try:
        pending_records.client.delete_record(record_id)
        flash("Record marked completed successfully.", "success")
    except PendingRecordsAPIError as e:
        current_app.logger.error(f"Failed to delete record {record_id}: {e}")
        flash("Failed to mark record completed.", "error")

    return redirect(url_for("pending_works.list_pending_works"))


@pending_works_bp.route("/deliver/<record_id>", methods=["GET", "POST"])
def deliver_record(record_id):
    """Delivery confirmation for a pending work"""
    try:
        record = _get_record_or_404(record_id)
    except PendingRecordsAPIError as e:
        current_app.logger.error(f"Error loading record {record_id}: {e}")
        flash("Failed to fetch records.", "error")
        return redirect(url_for("pending_works.list_pending_works"))

    if request.method == "POST":
        try:
            pending_records.client.mark_delivered(record.id)
            flash("Delivery confirmed.", "success")
        except NotImplementedError:
            current_app.logger.info(f"Delivery requested for {record.id}; not supported yet")
            flash("Delivery confirmation is not available yet.", "warning")
        return redirect(url_for("pending_works.list_pending_works"))

    return render_template("pending_works/deliver.html", record=record)


@pending_works_bp.route("/api/derive-dates")
def api_derive_dates():
    """Proposed report and delivery dates for a field-work date"""
    return jsonify(derive_dates(request.args.get("fwDoneOn", "")))
