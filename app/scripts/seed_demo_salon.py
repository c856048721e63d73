# ===== app/scripts/seed_demo_salon.py =====
"""
Seed a demo salon: one vendor, two services, two workers with weekly
templates and a couple of date overrides.

    python -m app.scripts.seed_demo_salon
"""
import logging
from datetime import date, timedelta

from app.config.database import SessionLocal, create_tables
from app.models.availability import WorkerAvailability, WorkerScheduleOverride
from app.models.service import Service
from app.models.vendor import Vendor, VendorStatus
from app.models.worker import Worker
from app.utils.my_logging import setup_logging

logger = logging.getLogger(__name__)

WEEKDAY_HOURS = {"open": "09:00", "close": "18:00", "isClosed": False}
CLOSED = {"open": None, "close": None, "isClosed": True}


def seed_demo_salon():
    db = SessionLocal()

    try:
        vendor = Vendor(
            name="Demo Hair Studio",
            address="1 Main Street",
            status=VendorStatus.ACTIVE,
            timezone="Europe/Berlin",
            operating_hours={
                "monday": WEEKDAY_HOURS,
                "tuesday": WEEKDAY_HOURS,
                "wednesday": WEEKDAY_HOURS,
                "thursday": WEEKDAY_HOURS,
                "friday": WEEKDAY_HOURS,
                "saturday": {"open": "10:00", "close": "14:00", "isClosed": False},
                "sunday": CLOSED,
            },
        )
        haircut = Service(vendor=vendor, name="Haircut", price=35, duration=30)
        coloring = Service(vendor=vendor, name="Coloring", price=80, duration=90)

        anna = Worker(vendor=vendor, name="Anna", services=[haircut, coloring])
        ben = Worker(vendor=vendor, name="Ben", services=[haircut])

        # Anna: Mon-Fri 09-17 (0=Sunday)
        anna.availabilities = [
            WorkerAvailability(day_of_week=day, start_time="09:00", end_time="17:00")
            for day in range(1, 6)
        ]
        # Ben: afternoons Tue-Sat, no template for the other days (vendor hours apply)
        ben.availabilities = [
            WorkerAvailability(day_of_week=day, start_time="12:00", end_time="18:00")
            for day in range(2, 7)
        ]

        next_week = date.today() + timedelta(days=7)
        anna.schedule_overrides = [
            WorkerScheduleOverride(date=next_week, is_day_off=True, notes="Vacation"),
        ]
        ben.schedule_overrides = [
            WorkerScheduleOverride(
                date=next_week + timedelta(days=1),
                start_time="08:00",
                end_time="12:00",
                notes="Morning shift",
            ),
        ]

        db.add_all([vendor, haircut, coloring, anna, ben])
        db.commit()
        logger.info(f"Seeded demo vendor {vendor.id} with services {haircut.id}, {coloring.id}")

    except Exception as e:
        db.rollback()
        logger.error(f"Error seeding demo salon: {e}", exc_info=True)
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    create_tables()
    seed_demo_salon()
