# tests/test_services/test_schedule_resolver.py
import unittest
from datetime import date, datetime
from types import SimpleNamespace as Obj
from zoneinfo import ZoneInfo

from app.services.availability.schedule_resolver import resolve_effective_schedule, vendor_hours_for

UTC = ZoneInfo("UTC")
MONDAY = date(2030, 1, 7)
SUNDAY = date(2030, 1, 6)


class FakeRepo:
    """Only the two schedule lookups the resolver uses"""

    def __init__(self, override=None, weekly=None):
        self.override = override
        self.weekly = weekly or {}
        self.requested_days = []

    def get_worker_override(self, worker_id, day):
        return self.override

    def get_worker_weekly_availability(self, worker_id, day_of_week):
        self.requested_days.append(day_of_week)
        return self.weekly.get(day_of_week)


def _vendor(hours=None):
    if hours is None:
        hours = {"monday": {"open": "09:00", "close": "17:00", "isClosed": False}}
    return Obj(id="v1", operating_hours=hours)


def _at(day, hh, mm, tz=UTC):
    return datetime(day.year, day.month, day.day, hh, mm, tzinfo=tz)


class ScheduleResolverTests(unittest.TestCase):

    # --- override ---

    def test_override_with_hours_wins_over_everything(self):
        repo = FakeRepo(
            override=Obj(is_day_off=False, start_time="12:00", end_time="15:00"),
            weekly={1: Obj(day_of_week=1, is_available=True, start_time="08:00", end_time="18:00")},
        )
        schedule = resolve_effective_schedule(repo, "w1", _vendor(), MONDAY, UTC)
        self.assertEqual(schedule.open_time, _at(MONDAY, 12, 0))
        self.assertEqual(schedule.close_time, _at(MONDAY, 15, 0))
        self.assertEqual(repo.requested_days, [])

    def test_override_day_off_means_off(self):
        repo = FakeRepo(
            override=Obj(is_day_off=True, start_time=None, end_time=None),
            weekly={1: Obj(day_of_week=1, is_available=True, start_time="09:00", end_time="17:00")},
        )
        self.assertIsNone(resolve_effective_schedule(repo, "w1", _vendor(), MONDAY, UTC))

    def test_override_without_times_means_off(self):
        repo = FakeRepo(override=Obj(is_day_off=False, start_time="10:00", end_time=None))
        self.assertIsNone(resolve_effective_schedule(repo, "w1", _vendor(), MONDAY, UTC))

    def test_override_with_malformed_times_means_off(self):
        repo = FakeRepo(override=Obj(is_day_off=False, start_time="9am", end_time="17:00"))
        with self.assertLogs("app.services.availability.schedule_resolver", level="WARNING"):
            self.assertIsNone(resolve_effective_schedule(repo, "w1", _vendor(), MONDAY, UTC))

    # --- weekly template ---

    def test_weekly_template_used_when_no_override(self):
        repo = FakeRepo(weekly={1: Obj(day_of_week=1, is_available=True, start_time="10:00", end_time="14:00")})
        schedule = resolve_effective_schedule(repo, "w1", _vendor(), MONDAY, UTC)
        self.assertEqual(schedule.open_time, _at(MONDAY, 10, 0))
        self.assertEqual(schedule.close_time, _at(MONDAY, 14, 0))

    def test_weekly_template_uses_sunday_zero(self):
        repo = FakeRepo()
        resolve_effective_schedule(repo, "w1", _vendor(), SUNDAY, UTC)
        resolve_effective_schedule(repo, "w1", _vendor(), MONDAY, UTC)
        self.assertEqual(repo.requested_days, [0, 1])

    def test_weekly_template_unavailable_means_off(self):
        repo = FakeRepo(weekly={1: Obj(day_of_week=1, is_available=False, start_time="09:00", end_time="17:00")})
        self.assertIsNone(resolve_effective_schedule(repo, "w1", _vendor(), MONDAY, UTC))

    def test_weekly_template_malformed_falls_back_to_vendor_hours(self):
        repo = FakeRepo(weekly={1: Obj(day_of_week=1, is_available=True, start_time="25:99", end_time="17:00")})
        with self.assertLogs("app.services.availability.schedule_resolver", level="WARNING"):
            schedule = resolve_effective_schedule(repo, "w1", _vendor(), MONDAY, UTC)
        self.assertEqual(schedule.open_time, _at(MONDAY, 9, 0))
        self.assertEqual(schedule.close_time, _at(MONDAY, 17, 0))

    # --- vendor hours ---

    def test_vendor_hours_used_without_worker_rows(self):
        schedule = resolve_effective_schedule(FakeRepo(), "w1", _vendor(), MONDAY, UTC)
        self.assertEqual(schedule.open_time, _at(MONDAY, 9, 0))

    def test_vendor_closed_day(self):
        vendor = _vendor({"monday": {"open": "09:00", "close": "17:00", "isClosed": True}})
        self.assertIsNone(resolve_effective_schedule(FakeRepo(), "w1", vendor, MONDAY, UTC))

    def test_vendor_missing_weekday_entry(self):
        self.assertIsNone(resolve_effective_schedule(FakeRepo(), "w1", _vendor(), SUNDAY, UTC))

    def test_vendor_without_operating_hours(self):
        self.assertIsNone(vendor_hours_for(Obj(id="v1", operating_hours=None), MONDAY, UTC))

    def test_vendor_malformed_hours_means_off(self):
        vendor = _vendor({"monday": {"open": "nine", "close": "17:00", "isClosed": False}})
        with self.assertLogs("app.services.availability.schedule_resolver", level="WARNING"):
            self.assertIsNone(vendor_hours_for(vendor, MONDAY, UTC))

    def test_times_are_anchored_in_vendor_zone(self):
        berlin = ZoneInfo("Europe/Berlin")
        schedule = resolve_effective_schedule(FakeRepo(), "w1", _vendor(), MONDAY, berlin)
        self.assertEqual(schedule.open_time, _at(MONDAY, 9, 0, berlin))
        # 09:00 CET is 08:00 UTC in January
        self.assertEqual(schedule.open_time.astimezone(UTC).hour, 8)


if __name__ == "__main__":
    unittest.main()
