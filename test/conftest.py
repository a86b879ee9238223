"""
Pytest configuration file for pending works tests.

Contains shared fixtures, factories, mocks, and configuration for all tests.
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Skip the module-level app in app.py
os.environ["TESTING"] = "True"

from models.pending_record import PendingRecord, ScheduleEntry  # noqa: E402
from services.pending_records_service import (  # noqa: E402
    PendingRecordsClient,
    PendingRecordsExtension,
)


# --------------------
# Fixtures
# --------------------


@pytest.fixture(scope="function")
def app():
    """Fixture for creating a new Flask app for each test function."""
    from app import create_app
    from config import TestingConfig

    app = create_app(config_class=TestingConfig)

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def api_client(mocker):
    """Mock backend client handed out by the pending_records extension."""
    mock_client = MagicMock(spec=PendingRecordsClient)
    mock_client.list_records.return_value = []
    mock_client.get_schedule.return_value = []
    mock_client.check_availability.return_value = True
    mock_client.create_record.return_value = {"_id": "new-id"}
    mock_client.update_record.return_value = {}
    mock_client.mark_delivered.side_effect = NotImplementedError
    mocker.patch.object(PendingRecordsExtension, "create_client", return_value=mock_client)
    return mock_client


@pytest.fixture
def mock_session():
    """Mock requests.Session for PendingRecordsClient unit tests."""
    session = MagicMock()
    session.request.return_value = make_response(200, [])
    return session


def make_response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    response.url = "http://records.test/api/pending-records/"
    response.json.return_value = json_data
    return response


@pytest.fixture
def response_factory():
    return make_response


# --------------------
# Factories
# --------------------
class PendingRecordFactory:
    @staticmethod
    def api_data(**kwargs):
        defaults = {
            "_id": "rec-1",
            "srNo": 1,
            "clientName": "Ahmed Raza",
            "clientContactNo": "0300-1234567",
            "coName": "-",
            "coPhoneNumber": "-",
            "plotNo": "12",
            "streetNo": "4",
            "sector": "C",
            "scheme": "Model Town",
            "plotSize": "10 Marla",
            "fee": 25000,
            "orderDate": "2024-01-15",
            "fwDoneOn": "2024-06-01",
            "proposedDate": "2024-06-01",
            "proposedReportDate": "2024-06-13",
            "deliveryDate": "2024-06-18",
            "paidOn": "2024-01-15",
            "reportDelivery": "",
        }
        defaults.update(kwargs)
        return defaults

    @staticmethod
    def create(**kwargs):
        return PendingRecord.from_api(PendingRecordFactory.api_data(**kwargs))

    @staticmethod
    def create_batch(order_dates):
        return [
            PendingRecordFactory.create(_id=f"rec-{i}", srNo=i, orderDate=order_date)
            for i, order_date in enumerate(order_dates, start=1)
        ]


class ScheduleEntryFactory:
    @staticmethod
    def create(**kwargs):
        defaults = {
            "srNo": 1,
            "clientName": "Ahmed Raza",
            "plotNo": "12",
            "streetNo": "4",
            "sector": "C",
            "scheme": "Model Town",
            "proposedDate": "2024-03-08",
        }
        defaults.update(kwargs)
        return ScheduleEntry.from_api(defaults)


@pytest.fixture
def record_factory():
    return PendingRecordFactory


@pytest.fixture
def schedule_factory():
    return ScheduleEntryFactory


@pytest.fixture
def valid_form_data():
    """A complete Add form submission."""
    return {
        "clientName": "Ahmed Raza",
        "clientContactNo": "0300-1234567",
        "coName": "",
        "coPhone": "",
        "plotNo": "12",
        "streetNo": "4",
        "sector": "C",
        "scheme": "Model Town",
        "plotSize": "10 Marla",
        "fee": "",
        "orderDate": "2024-05-20",
        "fwDoneOn": "2024-06-01",
        "proposedReportDate": "2024-06-13",
        "deliveryDate": "2024-06-18",
    }


# --------------------
# Pytest markers and hooks
# --------------------
def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, isolated tests")
    config.addinivalue_line("markers", "integration: route tests through the Flask client")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "client" in item.fixturenames:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
