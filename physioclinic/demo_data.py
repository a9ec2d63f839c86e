"""
Demo patients and a generated week of sessions for development and demos.

The generator is seeded so the same call always yields the same week.
"""

import random
from datetime import date, datetime, time, timedelta
from typing import Optional

from .enums import MaritalStatus, SessionStatus, Sex
from .shared.timeutils import clinic_now

# Standard slots: 8h, 9h, 10h, 14h, 15h, 16h, 17h
DEMO_HOURS = [8, 9, 10, 14, 15, 16, 17]

DEMO_PATIENTS = [
    {
        "id": 1,
        "full_name": "Maria Silva Santos",
        "email": "maria.silva@email.com",
        "phone": "(11) 99876-5432",
        "birth_date": date(1985, 3, 15),
        "registered_on": date(2024, 1, 15),
        "sex": Sex.F.value,
        "city": "São Paulo",
        "neighborhood": "Centro",
        "occupation": "Nurse",
        "home_address": "Rua das Flores, 123",
        "work_address": "Escola Municipal ABC",
        "nationality": "Brazilian",
        "marital_status": MaritalStatus.MARRIED.value,
    },
    {
        "id": 2,
        "full_name": "João Carlos Oliveira",
        "email": "joao.carlos@email.com",
        "phone": "(11) 98765-4321",
        "birth_date": date(1978, 8, 22),
        "registered_on": date(2024, 2, 1),
        "sex": Sex.M.value,
        "city": "São Paulo",
        "neighborhood": "Vila Madalena",
        "occupation": "Engineer",
        "home_address": "Av. Principal, 456",
        "work_address": "Empresa XYZ Ltda",
        "nationality": "Brazilian",
        "marital_status": MaritalStatus.SINGLE.value,
    },
    {
        "id": 3,
        "full_name": "Ana Paula Ferreira",
        "email": "ana.paula@email.com",
        "phone": "(11) 97654-3210",
        "birth_date": date(1992, 12, 10),
        "registered_on": date(2024, 2, 10),
        "sex": Sex.F.value,
        "city": "São Paulo",
        "neighborhood": "Moema",
        "occupation": "Lawyer",
        "home_address": "Rua da Alegria, 789",
        "work_address": "Escritório Jurídico ABC",
        "nationality": "Brazilian",
        "marital_status": MaritalStatus.DIVORCED.value,
    },
    {
        "id": 4,
        "full_name": "Roberto Costa",
        "email": "roberto.costa@email.com",
        "phone": "(11) 96543-2109",
        "birth_date": date(1960, 5, 30),
        "registered_on": date(2024, 1, 20),
        "sex": Sex.M.value,
        "city": "São Paulo",
        "neighborhood": "Liberdade",
        "occupation": "Retired",
        "home_address": "Praça Central, 321",
        "work_address": "",
        "nationality": "Brazilian",
        "marital_status": MaritalStatus.WIDOWED.value,
    },
    {
        "id": 5,
        "full_name": "Carla Mendes",
        "email": "carla.mendes@email.com",
        "phone": "(11) 95432-1098",
        "birth_date": date(1988, 9, 18),
        "registered_on": date(2024, 2, 15),
        "sex": Sex.F.value,
        "city": "São Paulo",
        "neighborhood": "Pinheiros",
        "occupation": "Designer",
        "home_address": "Rua Nova, 654",
        "work_address": "Studio Design Criativo",
        "nationality": "Brazilian",
        "marital_status": MaritalStatus.CIVIL_UNION.value,
    },
]


def _past_status(rng: random.Random) -> SessionStatus:
    roll = rng.random()
    if roll < 0.8:
        return SessionStatus.COMPLETED
    if roll < 0.95:
        return SessionStatus.NO_SHOW
    return SessionStatus.CANCELED


def generate_demo_week(
    today: Optional[date] = None,
    now: Optional[datetime] = None,
    seed: int = 7,
    patients: Optional[list[dict]] = None,
) -> list[dict]:
    """
    Two to five one-hour sessions per weekday (Monday to Friday) of the week
    containing ``today``.

    Sessions on past days are mostly completed; sessions earlier today are
    completed or no-shows; everything else is still scheduled.

    Returns:
        dicts with patient_id, label, start, end, status and notes, sorted by start
    """
    now = now or clinic_now()
    today = today or now.date()
    patients = patients or DEMO_PATIENTS
    rng = random.Random(seed)
    monday = today - timedelta(days=today.weekday())

    sessions = []
    for offset in range(5):
        day = monday + timedelta(days=offset)
        hours = rng.sample(DEMO_HOURS, rng.randint(2, 5))

        for hour in hours:
            patient = rng.choice(patients)
            start = datetime.combine(day, time(hour, 0))

            status = SessionStatus.SCHEDULED
            if day < today:
                status = _past_status(rng)
            elif day == today and hour < now.hour:
                status = SessionStatus.COMPLETED if rng.random() < 0.9 else SessionStatus.NO_SHOW

            sessions.append(
                {
                    "patient_id": patient["id"],
                    "label": f"{patient['full_name']} - Physiotherapy",
                    "start": start,
                    "end": start + timedelta(hours=1),
                    "status": status,
                    "notes": f"Physiotherapy session - {patient['full_name']}",
                }
            )

    return sorted(sessions, key=lambda s: s["start"])
