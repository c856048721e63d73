# tests/test_services/test_vendor_service.py
import unittest
import uuid

from app.core.exceptions import VendorNotFoundError
from app.schemas.vendor import OperatingHoursUpdate
from app.services.vendor.vendor_service import VendorService
from tests.factories import add_vendor, make_engine, make_session_factory


class VendorServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = make_engine()
        self.db = make_session_factory(self.engine)()
        self.vendor = add_vendor(self.db, timezone="Europe/Oslo", operating_hours={})
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_get_operating_hours(self):
        result = VendorService.get_operating_hours(self.db, self.vendor.id)
        self.assertEqual(result["vendor_id"], self.vendor.id)
        self.assertEqual(result["timezone"], "Europe/Oslo")
        self.assertEqual(result["operating_hours"], {})

    def test_unknown_timezone_reports_default(self):
        self.vendor.timezone = "Mars/Olympus"
        self.db.commit()
        result = VendorService.get_operating_hours(self.db, self.vendor.id)
        self.assertEqual(result["timezone"], "UTC")

    def test_unknown_vendor(self):
        with self.assertRaises(VendorNotFoundError):
            VendorService.get_operating_hours(self.db, uuid.uuid4())

    def test_replace_operating_hours_stores_camel_case_keys(self):
        payload = OperatingHoursUpdate.model_validate({
            "operatingHours": {
                "Monday": {"open": "09:00", "close": "17:00"},
                "sunday": {"isClosed": True},
            }
        })
        result = VendorService.replace_operating_hours(self.db, self.vendor.id, payload.operating_hours)

        self.assertEqual(
            result["operating_hours"],
            {
                "monday": {"open": "09:00", "close": "17:00", "isClosed": False},
                "sunday": {"open": None, "close": None, "isClosed": True},
            }
        )

    def test_replace_drops_previous_days(self):
        self.vendor.operating_hours = {"friday": {"open": "09:00", "close": "12:00", "isClosed": False}}
        self.db.commit()

        payload = OperatingHoursUpdate.model_validate({"operatingHours": {"monday": {"open": "10:00", "close": "11:00"}}})
        result = VendorService.replace_operating_hours(self.db, self.vendor.id, payload.operating_hours)
        self.assertNotIn("friday", result["operating_hours"])


if __name__ == "__main__":
    unittest.main()
