"""
Populate the database with the demo patients and a week of sessions
Usage: python seed_demo_data.py [--reset] [--seed N]
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from physioclinic import models  # noqa: E402
from physioclinic.database import Base, SessionLocal, engine  # noqa: E402
from physioclinic.demo_data import DEMO_PATIENTS, generate_demo_week  # noqa: E402

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def seed(reset: bool = False, seed_value: int = 7) -> int:
    """Insert demo data; returns the number of sessions created"""
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        if reset:
            logger.info("🧹 Removing existing patients (sessions and assessments cascade)")
            for patient in db.query(models.Patient).all():
                db.delete(patient)
            db.commit()

        if db.query(models.Patient).count():
            logger.info("Patients already present, nothing to do (use --reset to start over)")
            return 0

        id_map = {}
        for data in DEMO_PATIENTS:
            values = {k: v for k, v in data.items() if k != "id"}
            patient = models.Patient(**values)
            db.add(patient)
            db.flush()
            id_map[data["id"]] = patient.id
            logger.info(f"✅ Patient {patient.id}: {patient.full_name}")

        sessions = generate_demo_week(seed=seed_value)
        for item in sessions:
            db.add(
                models.TherapySession(
                    patient_id=id_map[item["patient_id"]],
                    label=item["label"],
                    starts_at=item["start"],
                    ends_at=item["end"],
                    status=item["status"].value,
                    notes=item["notes"],
                    notify=True,
                )
            )
        db.commit()
        logger.info(f"✅ {len(sessions)} sessions created for this week")
        return len(sessions)
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the clinic database with demo data")
    parser.add_argument("--reset", action="store_true", help="delete existing patients first")
    parser.add_argument("--seed", type=int, default=7, help="random seed for the session week")
    args = parser.parse_args()
    seed(reset=args.reset, seed_value=args.seed)
