"""
Form helper utilities for validating and normalizing pending record forms.

Provides the pre-submission validation shared by the Add and Edit forms,
and builds the JSON payloads sent to the pending records backend.

Reduces code duplication in create/edit route handlers.
"""

import math

from utils.date_helpers import parse_form_date

DEFAULT_FEE = 25000

# Substituted for blank optional fields at submission time
OPTIONAL_PLACEHOLDER = "-"

REQUIRED_FIELDS = (
    "clientName",
    "clientContactNo",
    "plotNo",
    "streetNo",
    "sector",
    "scheme",
    "plotSize",
    "orderDate",
    "fwDoneOn",
    "proposedReportDate",
    "deliveryDate",
)

DATE_FIELDS = (
    "orderDate",
    "fwDoneOn",
    "proposedReportDate",
    "deliveryDate",
    "proposedDate",
    "paidOn",
    "fieldWorkDone",
)

CREATE_FIELDS = (
    "clientName",
    "clientContactNo",
    "coName",
    "coPhone",
    "plotNo",
    "streetNo",
    "sector",
    "scheme",
    "plotSize",
    "fee",
    "orderDate",
    "fwDoneOn",
    "proposedReportDate",
    "deliveryDate",
    "fieldWorkDone",
    "paidOn",
    "reportDelivery",
)

EDIT_FIELDS = (
    "clientName",
    "clientContactNo",
    "coName",
    "coPhone",
    "plotNo",
    "plotSize",
    "streetNo",
    "sector",
    "scheme",
    "fee",
    "paidOn",
    "proposedDate",
    "fwDoneOn",
    "proposedReportDate",
    "deliveryDate",
)

# The edit form has no order date field
EDIT_REQUIRED_FIELDS = tuple(f for f in REQUIRED_FIELDS if f in EDIT_FIELDS)


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def coerce_fee(value, default=None):
    """
    Convert a fee form value to a number.

    Args:
        value: str, int, float or None
        default: Returned when value is blank

    Returns:
        int when the value is a whole number, float otherwise

    Raises:
        ValueError: If value is not blank and not numeric
    """
    if _is_blank(value):
        if default is None:
            raise ValueError("fee is required")
        return default

    if isinstance(value, bool):
        raise ValueError(f"Invalid fee: {value!r}")

    try:
        number = float(str(value).strip())
    except ValueError as e:
        raise ValueError(f"Invalid fee: {value!r}") from e

    if not math.isfinite(number):
        raise ValueError(f"Invalid fee: {value!r}")

    return int(number) if number.is_integer() else number


def validate_record_form(form, required=REQUIRED_FIELDS, require_fee=False):
    """
    Check a record form before it is submitted.

    Args:
        form: Flask request.form or dict-like object
        required: Field names that must be present and non-blank
        require_fee: If True a blank fee is missing (Edit), otherwise it
            falls back to DEFAULT_FEE (Add)

    Returns:
        dict with "valid", "missing_fields" (in declared order) and
        "invalid_fields" (present but not parseable)

    Example:
        result = validate_record_form(request.form)
        if not result["valid"]:
            flash(validation_message(result), "error")
    """
    missing = [name for name in required if _is_blank(form.get(name))]
    invalid = []

    fee = form.get("fee")
    if _is_blank(fee):
        if require_fee:
            missing.append("fee")
    else:
        try:
            coerce_fee(fee)
        except ValueError:
            invalid.append("fee")

    for name in DATE_FIELDS:
        if name in missing or _is_blank(form.get(name)):
            continue
        try:
            parse_form_date(form, name)
        except ValueError:
            invalid.append(name)

    return {
        "valid": not missing and not invalid,
        "missing_fields": missing,
        "invalid_fields": invalid,
    }


def validation_message(result):
    """User-facing summary of a failed validation result."""
    parts = []
    if result["missing_fields"]:
        parts.append("Missing required fields: " + ", ".join(result["missing_fields"]))
    if result["invalid_fields"]:
        parts.append("Invalid values for: " + ", ".join(result["invalid_fields"]))
    return ". ".join(parts) + "."


def _optional(value):
    return OPTIONAL_PLACEHOLDER if _is_blank(value) else value


def build_create_payload(form, sr_no):
    """
    Build the POST body for a new pending record.

    Args:
        form: Validated form data (dict-like)
        sr_no: Sequence number for the new record

    Returns:
        Dict ready to send to the create endpoint
    """
    return {
        "clientName": form.get("clientName"),
        "clientContactNo": form.get("clientContactNo"),
        "coName": _optional(form.get("coName")),
        "coPhoneNumber": _optional(form.get("coPhone")),
        "plotNo": form.get("plotNo"),
        "streetNo": form.get("streetNo"),
        "sector": form.get("sector"),
        "scheme": form.get("scheme"),
        "plotSize": form.get("plotSize"),
        "fee": coerce_fee(form.get("fee"), default=DEFAULT_FEE),
        "proposedDate": form.get("fwDoneOn"),
        "fwDoneOn": form.get("fwDoneOn"),
        "proposedReportDate": form.get("proposedReportDate"),
        "deliveryDate": form.get("deliveryDate"),
        "fieldWorkDone": form.get("fieldWorkDone"),
        "paidOn": form.get("paidOn") or None,
        "reportDelivery": form.get("reportDelivery") or "",
        "srNo": sr_no,
        "orderDate": form.get("orderDate"),
    }


def build_update_payload(form):
    """
    Build the PATCH body for an edited record.

    Only the edit form's fields that are present in form are sent.
    """
    payload = {}
    for name in EDIT_FIELDS:
        if name not in form:
            continue
        value = form.get(name)
        if name == "fee":
            payload["fee"] = coerce_fee(value)
        elif name == "coName":
            payload["coName"] = _optional(value)
        elif name == "coPhone":
            payload["coPhoneNumber"] = _optional(value)
        else:
            payload[name] = value
    return payload
