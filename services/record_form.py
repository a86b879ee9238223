"""
Add/Edit form controllers for pending records.

A form goes editing -> submitting -> closed. A validation failure sends it
back to editing without touching the backend; every other outcome closes
the form and leaves a (message, category) feedback pair for flash().
"""

import logging

from services.pending_records_service import (
    DateUnavailableError,
    PendingRecordsAPIError,
    require_available_date,
)
from utils.date_helpers import derive_dates, today_iso
from utils.form_helpers import (
    CREATE_FIELDS,
    DEFAULT_FEE,
    EDIT_FIELDS,
    EDIT_REQUIRED_FIELDS,
    REQUIRED_FIELDS,
    build_create_payload,
    build_update_payload,
    validate_record_form,
    validation_message,
)
from utils.helpers import next_sr_no

logger = logging.getLogger(__name__)

EDITING = "editing"
SUBMITTING = "submitting"
CLOSED = "closed"

UNAVAILABLE_MESSAGE = "Proposed date is not available."


class FormClosedError(Exception):
    """Raised when a closed form is changed or submitted again."""


class RecordForm:
    fields = ()
    required_fields = REQUIRED_FIELDS
    require_fee = False
    success_message = ""
    failure_message = ""

    def __init__(self, client, initial=None):
        self.client = client
        self.data = self.initial_data()
        if initial:
            self.data.update(initial)
        self.state = EDITING
        self.feedback = None
        self.validation = None

    def initial_data(self):
        return {name: "" for name in self.fields}

    def _ensure_editing(self):
        if self.state != EDITING:
            raise FormClosedError(f"Form is {self.state}")

    def set_field(self, name, value):
        """Change handler for a single field."""
        self._ensure_editing()
        if name not in self.fields:
            raise KeyError(f"Unknown field: {name}")

        if name == "fwDoneOn":
            self.on_fw_done_on_change(value)
        else:
            self.data[name] = value

    def on_fw_done_on_change(self, value):
        # Overwrites whatever was typed into the derived fields
        derived = derive_dates(value)
        self.data["fwDoneOn"] = value
        self.data["proposedReportDate"] = derived["proposedReportDate"]
        self.data["deliveryDate"] = derived["deliveryDate"]

    def load_form(self, form):
        """Apply a posted form: plain fields first, then a changed fwDoneOn."""
        for name in self.fields:
            if name != "fwDoneOn" and name in form:
                self.set_field(name, form.get(name))

        if "fwDoneOn" in form and form.get("fwDoneOn") != self.data.get("fwDoneOn"):
            self.set_field("fwDoneOn", form.get("fwDoneOn"))

    def perform(self):
        """Issue the backend request; returns the success message."""
        raise NotImplementedError

    def submit(self):
        """
        Validate and submit the form.

        Returns:
            tuple: (message, category) suitable for flash()

        Raises:
            FormClosedError: If the form was already submitted
        """
        self._ensure_editing()
        self.state = SUBMITTING

        self.validation = validate_record_form(
            self.data, required=self.required_fields, require_fee=self.require_fee
        )
        if not self.validation["valid"]:
            self.state = EDITING
            self.feedback = (validation_message(self.validation), "error")
            return self.feedback

        try:
            message = self.perform()
            self.feedback = (message, "success")
        except DateUnavailableError as e:
            logger.warning(f"Create blocked: {e}")
            self.feedback = (UNAVAILABLE_MESSAGE, "error")
        except PendingRecordsAPIError as e:
            logger.error(f"{type(self).__name__} submit failed: {e}")
            self.feedback = (self.failure_message, "error")
        finally:
            self.state = CLOSED

        return self.feedback

    @property
    def is_closed(self):
        return self.state == CLOSED


class AddRecordForm(RecordForm):
    fields = CREATE_FIELDS
    success_message = "Record added successfully!"
    failure_message = "Failed to add record."

    def __init__(self, client, record_count=None, initial=None):
        # None means count the backend records at submit time
        self.record_count = record_count
        super().__init__(client, initial)

    def initial_data(self):
        today = today_iso()
        data = super().initial_data()
        data.update(
            fee=DEFAULT_FEE,
            orderDate=today,
            fwDoneOn=today,
            fieldWorkDone=today,
            paidOn=today,
        )
        data.update(derive_dates(today))
        return data

    def build_payload(self, record_count):
        return build_create_payload(self.data, sr_no=next_sr_no(record_count))

    def perform(self):
        require_available_date(self.client, self.data["fwDoneOn"])
        record_count = self.record_count
        if record_count is None:
            record_count = len(self.client.list_records())
        self.client.create_record(self.build_payload(record_count))
        return self.success_message


class EditRecordForm(RecordForm):
    fields = EDIT_FIELDS
    required_fields = EDIT_REQUIRED_FIELDS
    require_fee = True
    success_message = "Record updated successfully!"
    failure_message = "Failed to update record."

    def __init__(self, client, record):
        self.record = record
        super().__init__(client, record.edit_form_data())

    def build_payload(self):
        return build_update_payload(self.data)

    def perform(self):
        self.client.update_record(self.record.id, self.build_payload())
        return self.success_message
