# tests/test_routers/test_dashboard_router.py
import unittest
import uuid
from datetime import date
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient

from app.main import app
from app.config.database import get_db
from app.core.exceptions import (
    InvalidStatusTransitionError,
    PermissionDeniedError,
    SlotUnavailableError,
    VendorNotFoundError,
    WorkerNotFoundError,
)
from app.models.appointment import AppointmentStatus

VENDOR_ID = uuid.uuid4()
SERVICE_ID = uuid.uuid4()
WORKER_ID = uuid.uuid4()
APPT_ID = uuid.uuid4()
BASE = f"/api/v1/dashboard/vendors/{VENDOR_ID}"


def _worker_with_schedule():
    return Obj(
        id=WORKER_ID,
        name="Alice",
        availabilities=[
            Obj(day_of_week=5, start_time="10:00", end_time="14:00", is_available=True),
            Obj(day_of_week=1, start_time="09:00", end_time="17:00", is_available=True),
        ],
        schedule_overrides=[
            Obj(date=date(2030, 1, 7), start_time=None, end_time=None, is_day_off=True, notes="Vacation"),
        ],
    )


def _appointment(status=AppointmentStatus.CONFIRMED, worker_id=WORKER_ID):
    return Obj(
        id=APPT_ID, vendor_id=VENDOR_ID, worker_id=worker_id, service_id=SERVICE_ID, user_id="user-1",
        start_time="2030-01-07T10:00:00+00:00", end_time="2030-01-07T10:30:00+00:00",
        status=status, notes=None,
    )


class DashboardRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)

    # --- public worker listing ---

    @patch("app.api.v1.public.vendors.WorkerService.list_workers_for_service")
    def test_service_workers(self, mock_list):
        mock_list.return_value = [Obj(id=WORKER_ID, name="Alice", photo_url=None, bio="Colorist")]
        resp = self.client.get(f"/api/v1/vendors/{VENDOR_ID}/services/{SERVICE_ID}/workers")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["name"], "Alice")
        self.assertEqual(resp.json()[0]["bio"], "Colorist")

    @patch("app.api.v1.public.vendors.WorkerService.list_workers_for_service")
    def test_service_workers_inactive_vendor_404(self, mock_list):
        mock_list.side_effect = VendorNotFoundError("Vendor not found or not active")
        resp = self.client.get(f"/api/v1/vendors/{VENDOR_ID}/services/{SERVICE_ID}/workers")
        self.assertEqual(resp.status_code, 404)

    # --- worker schedule ---

    @patch("app.api.v1.dashboard.workers.WorkerService.get_worker_schedule")
    def test_get_schedule_sorted_and_camel_cased(self, mock_get):
        mock_get.return_value = _worker_with_schedule()
        resp = self.client.get(f"{BASE}/workers/{WORKER_ID}/schedule")
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["workerId"], str(WORKER_ID))
        self.assertEqual([a["dayOfWeek"] for a in body["availabilities"]], [1, 5])
        self.assertEqual(body["overrides"][0]["date"], "2030-01-07")
        self.assertTrue(body["overrides"][0]["isDayOff"])

    @patch("app.api.v1.dashboard.workers.WorkerService.get_worker_schedule")
    def test_get_schedule_404(self, mock_get):
        mock_get.side_effect = WorkerNotFoundError("Worker not found")
        resp = self.client.get(f"{BASE}/workers/{WORKER_ID}/schedule")
        self.assertEqual(resp.status_code, 404)

    @patch("app.api.v1.dashboard.workers.WorkerService.replace_worker_schedule")
    def test_put_schedule(self, mock_replace):
        mock_replace.return_value = _worker_with_schedule()
        resp = self.client.put(
            f"{BASE}/workers/{WORKER_ID}/schedule",
            json={"availabilities": [{"dayOfWeek": 1, "startTime": "09:00", "endTime": "17:00"}]},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        payload = mock_replace.call_args.args[3]
        self.assertEqual(payload.availabilities[0].day_of_week, 1)
        self.assertIsNone(payload.overrides)

    @patch("app.api.v1.dashboard.workers.WorkerService.replace_worker_schedule")
    def test_put_schedule_foreign_worker_403(self, mock_replace):
        mock_replace.side_effect = PermissionDeniedError("Worker does not belong to vendor")
        resp = self.client.put(f"{BASE}/workers/{WORKER_ID}/schedule", json={"overrides": []})
        self.assertEqual(resp.status_code, 403)

    @patch("app.api.v1.dashboard.workers.WorkerService.replace_worker_schedule")
    def test_put_schedule_validation(self, mock_replace):
        bad_bodies = [
            {"availabilities": [{"dayOfWeek": 7, "startTime": "09:00", "endTime": "17:00"}]},
            {"availabilities": [{"dayOfWeek": 1, "startTime": "9:00", "endTime": "17:00"}]},
            {"availabilities": [{"dayOfWeek": 1, "startTime": "17:00", "endTime": "09:00"}]},
            {"availabilities": [
                {"dayOfWeek": 1, "startTime": "09:00", "endTime": "12:00"},
                {"dayOfWeek": 1, "startTime": "13:00", "endTime": "17:00"},
            ]},
            {"overrides": [{"date": "2030-01-07"}]},
        ]
        for body in bad_bodies:
            resp = self.client.put(f"{BASE}/workers/{WORKER_ID}/schedule", json=body)
            self.assertEqual(resp.status_code, 422, body)
        mock_replace.assert_not_called()

    # --- operating hours ---

    @patch("app.api.v1.dashboard.vendors.VendorService.replace_operating_hours")
    def test_put_operating_hours(self, mock_replace):
        mock_replace.return_value = {
            "vendor_id": VENDOR_ID,
            "timezone": "UTC",
            "operating_hours": {"monday": {"open": "09:00", "close": "17:00", "isClosed": False}},
        }
        resp = self.client.put(
            f"{BASE}/operating-hours",
            json={"operatingHours": {"monday": {"open": "09:00", "close": "17:00"}}},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["operatingHours"]["monday"]["isClosed"], False)

    def test_put_operating_hours_unknown_day_422(self):
        resp = self.client.put(
            f"{BASE}/operating-hours",
            json={"operatingHours": {"funday": {"open": "09:00", "close": "17:00"}}},
        )
        self.assertEqual(resp.status_code, 422)

    @patch("app.api.v1.dashboard.vendors.VendorService.get_operating_hours")
    def test_get_operating_hours_404(self, mock_get):
        mock_get.side_effect = VendorNotFoundError("Vendor not found")
        resp = self.client.get(f"{BASE}/operating-hours")
        self.assertEqual(resp.status_code, 404)

    # --- vendor appointments ---

    @patch("app.api.v1.dashboard.appointments.AppointmentQueryService.list_vendor_appointments")
    def test_list_vendor_appointments(self, mock_list):
        mock_list.return_value = {"vendor_id": str(VENDOR_ID), "total_appointments": 0, "appointments": []}
        resp = self.client.get(f"{BASE}/appointments?status=CONFIRMED&start_date=2030-01-07")
        self.assertEqual(resp.status_code, 200, resp.text)
        kwargs = mock_list.call_args.kwargs
        self.assertEqual(kwargs["status"], AppointmentStatus.CONFIRMED)
        self.assertEqual(kwargs["start_date"], date(2030, 1, 7))

    @patch("app.api.v1.dashboard.appointments.AppointmentQueryService.list_vendor_appointments")
    def test_list_vendor_appointments_unknown_vendor(self, mock_list):
        mock_list.return_value = None
        resp = self.client.get(f"{BASE}/appointments")
        self.assertEqual(resp.status_code, 404)

    def test_list_vendor_appointments_bad_range(self):
        resp = self.client.get(f"{BASE}/appointments?start_date=2030-01-08&end_date=2030-01-07")
        self.assertEqual(resp.status_code, 400)

    @patch("app.api.v1.dashboard.appointments.AppointmentService.update_status")
    def test_update_status(self, mock_update):
        mock_update.return_value = _appointment(AppointmentStatus.COMPLETED)
        resp = self.client.patch(f"{BASE}/appointments/{APPT_ID}/status", json={"status": "COMPLETED"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["status"], "COMPLETED")

    @patch("app.api.v1.dashboard.appointments.AppointmentService.update_status")
    def test_update_status_invalid_transition_409(self, mock_update):
        mock_update.side_effect = InvalidStatusTransitionError("Cannot change status")
        resp = self.client.patch(f"{BASE}/appointments/{APPT_ID}/status", json={"status": "CONFIRMED"})
        self.assertEqual(resp.status_code, 409)

    def test_update_status_unknown_value_422(self):
        resp = self.client.patch(f"{BASE}/appointments/{APPT_ID}/status", json={"status": "DONE"})
        self.assertEqual(resp.status_code, 422)

    @patch("app.api.v1.dashboard.appointments.AppointmentService.assign_worker")
    def test_assign_worker_conflict_409(self, mock_assign):
        mock_assign.side_effect = SlotUnavailableError("Worker already has an appointment at this time")
        resp = self.client.put(f"{BASE}/appointments/{APPT_ID}/assign-worker", json={"workerId": str(WORKER_ID)})
        self.assertEqual(resp.status_code, 409)

    @patch("app.api.v1.dashboard.appointments.AppointmentService.assign_worker")
    def test_unassign_worker(self, mock_assign):
        mock_assign.return_value = _appointment(worker_id=None)
        resp = self.client.put(f"{BASE}/appointments/{APPT_ID}/assign-worker", json={"workerId": None})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertIsNone(resp.json()["workerId"])
        self.assertIsNone(mock_assign.call_args.args[3])


if __name__ == "__main__":
    unittest.main()
