import logging

import requests
from flask import current_app, g

from models.pending_record import PendingRecord, ScheduleEntry
from utils.date_helpers import format_date_for_api

logger = logging.getLogger(__name__)


class PendingRecordsAPIError(Exception):
    """The backend could not be reached or answered with a non-2xx status."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class DateUnavailableError(Exception):
    """The backend reported the requested field-work date as unavailable."""

    def __init__(self, fw_done_on):
        super().__init__(f"{fw_done_on} is not available")
        self.fw_done_on = fw_done_on


class PendingRecordsClient:
    """Client for the pending records backend."""

    RESOURCE_PATH = "/api/pending-records/"

    def __init__(self, base_url, timeout=None, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.closed = False

    def _url(self, path=""):
        return f"{self.base_url}{self.RESOURCE_PATH}{path}"

    def _request(self, method, path="", **kwargs):
        if self.closed:
            raise PendingRecordsAPIError("Pending records client is closed")

        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise PendingRecordsAPIError(f"Could not reach {url}: {e}") from e

        if not response.ok:
            logger.error(f"{method} {url} returned {response.status_code}: {response.text}")
            raise PendingRecordsAPIError(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def _json(self, response):
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {response.url}: {e}")
            raise PendingRecordsAPIError("Backend returned invalid JSON") from e

    def list_records(self):
        """GET every pending record."""
        data = self._json(self._request("GET"))
        return [PendingRecord.from_api(item) for item in data]

    def create_record(self, payload):
        """POST a new record and return the created record as the backend sent it."""
        result = self._json(self._request("POST", json=payload))
        logger.info(f"Record added: srNo={payload.get('srNo')} client={payload.get('clientName')}")
        return result

    def update_record(self, record_id, changes):
        """PATCH the given fields of a record."""
        result = self._json(self._request("PATCH", str(record_id), json=changes))
        logger.info(f"Record {record_id} updated: {sorted(changes)}")
        return result

    def delete_record(self, record_id):
        """DELETE a record (marks the work as completed)."""
        self._request("DELETE", str(record_id))
        logger.info(f"Record {record_id} marked completed")

    def check_availability(self, fw_done_on):
        """Ask the backend whether the field-work date still has capacity."""
        body = {"fwDoneOn": format_date_for_api(fw_done_on)}
        result = self._json(self._request("POST", "check", json=body))
        is_available = bool(result.get("isAvailable")) if isinstance(result, dict) else False
        logger.info(f"Availability for {body['fwDoneOn']}: {is_available}")
        return is_available

    def get_schedule(self):
        """GET this week's schedule."""
        data = self._json(self._request("GET", "schedule"))
        return [ScheduleEntry.from_api(item) for item in data]

    def mark_delivered(self, record_id):
        """Confirm delivery of a record (no backend endpoint exists yet)."""
        # TODO: wire to the delivery endpoint once the backend defines one
        raise NotImplementedError("Delivery confirmation has no backend endpoint yet")

    def close(self):
        if not self.closed:
            self.session.close()
            self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def require_available_date(client, fw_done_on):
    """
    Gate a create on the backend's availability check.

    Raises:
        DateUnavailableError: If the backend reports the date unavailable
        PendingRecordsAPIError: If the check itself fails
    """
    if not client.check_availability(fw_done_on):
        raise DateUnavailableError(fw_done_on)


class PendingRecordsExtension:
    """Flask extension giving each request its own backend client.

    The client lives on flask.g and is closed when the app context tears
    down, so a request never leaves connections open behind it.
    """

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault("PENDING_RECORDS_API_URL", "http://localhost:8000")
        app.config.setdefault("PENDING_RECORDS_API_TIMEOUT", 10)
        app.extensions["pending_records"] = self
        app.teardown_appcontext(self.teardown)

    def create_client(self):
        return PendingRecordsClient(
            current_app.config["PENDING_RECORDS_API_URL"],
            timeout=current_app.config["PENDING_RECORDS_API_TIMEOUT"],
        )

    @property
    def client(self):
        if "pending_records_client" not in g:
            g.pending_records_client = self.create_client()
        return g.pending_records_client

    def teardown(self, exception):
        client = g.pop("pending_records_client", None)
        if client is not None:
            client.close()
