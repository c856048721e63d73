# tests/test_services/test_availability_service.py
import unittest
import uuid
from datetime import date, datetime, timezone

from app.models.appointment import AppointmentStatus
from app.models.vendor import VendorStatus
from app.services.availability.availability_service import (
    MSG_NO_SLOTS,
    MSG_NO_WORKERS,
    MSG_VENDOR_INACTIVE,
    MSG_WORKER_UNAVAILABLE,
    AvailabilityService,
    AvailabilityStatus,
)
from app.services.availability.repository import SQLAlchemyAvailabilityRepository
from tests.factories import (
    add_appointment,
    add_override,
    add_service,
    add_vendor,
    add_weekly,
    add_worker,
    make_engine,
    make_session_factory,
)

MONDAY = date(2030, 1, 7)
NOW = datetime(2030, 1, 1, 8, 0, tzinfo=timezone.utc)


def _utc(hh, mm=0, day=MONDAY):
    return datetime(day.year, day.month, day.day, hh, mm, tzinfo=timezone.utc)


class AvailabilityServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = make_engine()
        self.db = make_session_factory(self.engine)()
        self.repo = SQLAlchemyAvailabilityRepository(self.db)

        self.vendor = add_vendor(self.db)
        self.service = add_service(self.db, self.vendor, duration=30)
        self.alice = add_worker(self.db, self.vendor, "Alice", [self.service])
        self.bob = add_worker(self.db, self.vendor, "Bob", [self.service])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _slots(self, worker_id=None, day=MONDAY, now=NOW, **kwargs):
        return AvailabilityService.get_available_slots(
            self.repo,
            service_id=kwargs.get("service_id", self.service.id),
            vendor_id=kwargs.get("vendor_id", self.vendor.id),
            day=day,
            worker_id=worker_id,
            now=now,
            interval_minutes=15,
            lead_minutes=60,
        )

    def _times(self, result):
        return [s.time for s in result.slots]

    # --- happy path / merging ---

    def test_vendor_hours_fallback_lists_both_workers(self):
        result = self._slots()
        self.assertEqual(result.status, AvailabilityStatus.OK)
        self.assertIsNone(result.message)
        self.assertEqual(result.slots[0].time, "09:00")
        self.assertEqual(result.slots[-1].time, "16:30")
        self.assertEqual([w.name for w in result.slots[0].available_workers], ["Alice", "Bob"])

    def test_booked_worker_drops_out_of_slot(self):
        add_appointment(self.db, self.vendor, self.service, self.alice, _utc(10), _utc(10, 30))
        self.db.commit()

        by_time = {s.time: [w.name for w in s.available_workers] for s in self._slots().slots}
        self.assertEqual(by_time["10:00"], ["Bob"])
        self.assertEqual(by_time["09:30"], ["Alice", "Bob"])

    def test_cancelled_and_rejected_appointments_do_not_block(self):
        for status in (AppointmentStatus.CANCELLED_BY_USER, AppointmentStatus.REJECTED, AppointmentStatus.NO_SHOW):
            add_appointment(self.db, self.vendor, self.service, self.alice, _utc(10), _utc(10, 30), status=status)
        self.db.commit()

        by_time = {s.time: [w.name for w in s.available_workers] for s in self._slots().slots}
        self.assertEqual(by_time["10:00"], ["Alice", "Bob"])

    def test_slots_are_sorted_when_workers_have_different_hours(self):
        add_weekly(self.db, self.alice, 1, "13:00", "15:00")
        add_weekly(self.db, self.bob, 1, "09:00", "10:00")
        self.db.commit()

        times = self._times(self._slots())
        self.assertEqual(times, sorted(times))
        self.assertEqual(times[0], "09:00")
        self.assertEqual(times[-1], "14:30")

    def test_slots_are_unique_by_time(self):
        times = self._times(self._slots())
        self.assertEqual(len(times), len(set(times)))

    def test_repeat_calls_return_the_same_result(self):
        add_override(self.db, self.alice, MONDAY, "11:00", "12:00")
        self.db.commit()
        self.assertEqual(self._slots(), self._slots())

    # --- precedence ---

    def test_override_day_off_removes_worker(self):
        add_override(self.db, self.alice, MONDAY, is_day_off=True, notes="Vacation")
        self.db.commit()

        names = {w.name for s in self._slots().slots for w in s.available_workers}
        self.assertEqual(names, {"Bob"})

    def test_override_hours_beat_weekly_template(self):
        add_weekly(self.db, self.alice, 1, "09:00", "17:00")
        add_override(self.db, self.alice, MONDAY, "12:00", "13:00")
        self.db.commit()

        result = self._slots(worker_id=self.alice.id)
        self.assertEqual(self._times(result), ["12:00", "12:15", "12:30"])

    def test_weekly_template_unavailable_day(self):
        add_weekly(self.db, self.alice, 1, "09:00", "17:00", is_available=False)
        self.db.commit()

        result = self._slots(worker_id=self.alice.id)
        self.assertEqual(result.slots, [])
        self.assertEqual(result.message, MSG_NO_SLOTS)

    def test_vendor_closed_day_without_worker_rows(self):
        sunday = date(2030, 1, 6)
        result = self._slots(day=sunday)
        self.assertEqual(result.slots, [])
        self.assertEqual(result.message, MSG_NO_SLOTS)

    def test_weekly_template_opens_day_vendor_is_closed(self):
        add_weekly(self.db, self.alice, 0, "10:00", "11:00")
        self.db.commit()

        result = self._slots(day=date(2030, 1, 6))
        self.assertEqual(self._times(result), ["10:00", "10:15", "10:30"])

    # --- lead time ---

    def test_today_hides_slots_inside_lead_window(self):
        now = _utc(12, 10)
        times = self._times(self._slots(now=now))
        self.assertEqual(times[0], "13:15")

    def test_last_slot_inside_lead_window_leaves_nothing(self):
        fringe = add_service(self.db, self.vendor, name="Fringe", duration=15)
        self.alice.services.append(fringe)
        self.db.commit()

        # 16:45 is the last start before 17:00, and 16:50 + 60 minutes is past it
        result = self._slots(now=_utc(16, 50), service_id=fringe.id)
        self.assertEqual(result.slots, [])
        self.assertEqual(result.message, MSG_NO_SLOTS)

    def test_past_day_has_no_slots(self):
        result = self._slots(now=datetime(2030, 1, 8, 8, 0, tzinfo=timezone.utc))
        self.assertEqual(result.slots, [])
        self.assertEqual(result.message, MSG_NO_SLOTS)

    # --- vendor timezone ---

    def test_appointments_are_matched_in_vendor_local_time(self):
        self.vendor.timezone = "America/New_York"
        # 10:00 local is 15:00 UTC in January
        add_appointment(self.db, self.vendor, self.service, self.alice, _utc(15), _utc(15, 30))
        self.db.commit()

        by_time = {s.time: [w.name for w in s.available_workers] for s in self._slots().slots}
        self.assertEqual(by_time["10:00"], ["Bob"])
        self.assertEqual(by_time["15:00"], ["Alice", "Bob"])

    # --- preconditions ---

    def test_unknown_service(self):
        result = self._slots(service_id=uuid.uuid4())
        self.assertEqual(result.status, AvailabilityStatus.SERVICE_NOT_FOUND)
        self.assertFalse(result.found)

    def test_inactive_service_is_not_found(self):
        self.service.active = False
        self.db.commit()
        self.assertEqual(self._slots().status, AvailabilityStatus.SERVICE_NOT_FOUND)

    def test_service_of_another_vendor_is_not_found(self):
        other = add_vendor(self.db, name="Other")
        self.db.commit()
        self.assertEqual(self._slots(vendor_id=other.id).status, AvailabilityStatus.SERVICE_NOT_FOUND)

    def test_inactive_vendor_returns_message(self):
        self.vendor.status = VendorStatus.SUSPENDED
        self.db.commit()

        result = self._slots()
        self.assertEqual(result.status, AvailabilityStatus.OK)
        self.assertEqual(result.slots, [])
        self.assertEqual(result.message, MSG_VENDOR_INACTIVE)

    def test_worker_not_offering_service(self):
        carol = add_worker(self.db, self.vendor, "Carol")
        self.db.commit()

        result = self._slots(worker_id=carol.id)
        self.assertEqual(result.slots, [])
        self.assertEqual(result.message, MSG_WORKER_UNAVAILABLE)

    def test_unknown_worker(self):
        result = self._slots(worker_id=uuid.uuid4())
        self.assertEqual(result.message, MSG_WORKER_UNAVAILABLE)

    def test_no_workers_for_service(self):
        lonely = add_service(self.db, self.vendor, name="Beard trim")
        self.db.commit()

        result = self._slots(service_id=lonely.id)
        self.assertEqual(result.slots, [])
        self.assertEqual(result.message, MSG_NO_WORKERS)

    def test_single_worker_filter(self):
        result = self._slots(worker_id=self.bob.id)
        names = {w.name for s in result.slots for w in s.available_workers}
        self.assertEqual(names, {"Bob"})


if __name__ == "__main__":
    unittest.main()
