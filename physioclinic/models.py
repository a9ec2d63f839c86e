from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import SessionStatus
from .shared.timeutils import clinic_now


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=False)
    birth_date = Column(Date, nullable=True)
    registered_on = Column(Date, nullable=False)  # Server assigned, never updated
    sex = Column(String(10), nullable=True)  # F, M, Other
    city = Column(String(120), nullable=True)
    neighborhood = Column(String(120), nullable=True)
    occupation = Column(String(120), nullable=True)
    home_address = Column(String(500), nullable=True)
    work_address = Column(String(500), nullable=True)
    nationality = Column(String(120), nullable=True)
    marital_status = Column(String(20), nullable=True)

    created_at = Column(DateTime, default=clinic_now)
    updated_at = Column(DateTime, default=clinic_now, onupdate=clinic_now)

    sessions = relationship(
        "TherapySession", back_populates="patient", cascade="all, delete-orphan"
    )
    assessments = relationship(
        "Assessment", back_populates="patient", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Patient {self.id}: {self.full_name}>"


class TherapySession(Base):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False)
    label = Column(String(255), nullable=False)
    starts_at = Column(DateTime, nullable=False, index=True)  # Clinic-local wall clock
    ends_at = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default=SessionStatus.SCHEDULED.value)
    notes = Column(Text, nullable=True)
    notify = Column(Boolean, default=False)

    created_at = Column(DateTime, default=clinic_now)
    updated_at = Column(DateTime, default=clinic_now, onupdate=clinic_now)

    patient = relationship("Patient", back_populates="sessions")

    def __repr__(self):
        return f"<TherapySession {self.id}: patient={self.patient_id} {self.starts_at}>"


class Assessment(Base):
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False)
    assessment_date = Column(Date, nullable=False)

    # Diagnoses and clinical history
    clinical_diagnosis = Column(Text, nullable=True)
    physio_diagnosis = Column(Text, nullable=True)
    clinical_history = Column(Text, nullable=True)
    chief_complaint = Column(Text, nullable=True)
    lifestyle_habits = Column(Text, nullable=True)
    present_illness_history = Column(Text, nullable=True)
    past_illness_history = Column(Text, nullable=True)
    personal_background = Column(Text, nullable=True)
    family_background = Column(Text, nullable=True)
    previous_treatments = Column(Text, nullable=True)

    # Physical exam - presentation
    walking = Column(Boolean, default=False)
    walking_with_support = Column(Boolean, default=False)
    wheelchair = Column(Boolean, default=False)
    hospitalized = Column(Boolean, default=False)
    oriented = Column(Boolean, default=False)

    # Physical exam - exams, medication, surgeries
    has_complementary_exams = Column(Boolean, default=False)
    complementary_exams = Column(Text, nullable=True)
    uses_medication = Column(Boolean, default=False)
    medication = Column(Text, nullable=True)
    had_surgery = Column(Boolean, default=False)
    surgeries = Column(Text, nullable=True)

    # Physical exam - inspection / palpation
    inspection_normal = Column(Boolean, default=False)
    inspection_edema = Column(Boolean, default=False)
    inspection_incomplete_healing = Column(Boolean, default=False)
    inspection_erythema = Column(Boolean, default=False)
    inspection_other = Column(Boolean, default=False)
    inspection_other_description = Column(Text, nullable=True)

    semiology = Column(Text, nullable=True)
    specific_tests = Column(Text, nullable=True)
    pain_score = Column(Integer, nullable=False, default=0)  # 0-10

    # Therapeutic plan
    treatment_goals = Column(Text, nullable=True)
    therapeutic_resources = Column(Text, nullable=True)
    treatment_plan = Column(Text, nullable=True)

    created_at = Column(DateTime, default=clinic_now)
    updated_at = Column(DateTime, default=clinic_now)  # Bumped explicitly by the service

    patient = relationship("Patient", back_populates="assessments")
    progress_notes = relationship(
        "ProgressNote",
        back_populates="assessment",
        cascade="all, delete-orphan",
        order_by="ProgressNote.id",
    )


class ProgressNote(Base):
    __tablename__ = "progress_notes"

    id = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(
        Integer, ForeignKey("assessments.id", ondelete="CASCADE"), nullable=False
    )
    text = Column(Text, nullable=False)
    recorded_at = Column(DateTime, nullable=False, default=clinic_now)

    assessment = relationship("Assessment", back_populates="progress_notes")
