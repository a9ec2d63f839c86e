from datetime import date, datetime

from physioclinic.domain.assessments.service import progress_timeline
from physioclinic.models import Assessment, Patient, ProgressNote
from physioclinic.services.assessment_pdf import (
    NOT_INFORMED,
    SECTIONS,
    export_filename,
    render_assessment_pdf,
)

GENERATED_AT = datetime(2024, 6, 10, 14, 30)


def make_patient():
    return Patient(
        id=1,
        full_name="Maria Silva Santos",
        email="maria.silva@email.com",
        phone="(11) 99876-5432",
        birth_date=date(1985, 3, 15),
        home_address="Rua das Flores, 123",
        neighborhood="Centro",
        city="São Paulo",
    )


def make_assessment(notes=()):
    assessment = Assessment(
        id=1,
        patient_id=1,
        assessment_date=date(2024, 6, 3),
        clinical_diagnosis="Lumbar disc herniation",
        physio_diagnosis="",
        walking=True,
        oriented=True,
        uses_medication=True,
        medication="Ibuprofen",
        inspection_other=True,
        inspection_other_description="Scar tissue",
        pain_score=7,
    )
    for index, (text, recorded_at) in enumerate(notes, start=1):
        assessment.progress_notes.append(ProgressNote(id=index, text=text, recorded_at=recorded_at))
    return assessment


def rows_by_key(assessment, patient):
    return {section.key: section.render(assessment, patient) for section in SECTIONS}


def test_sections_are_in_document_order():
    assert [s.key for s in SECTIONS] == [
        "patient",
        "date",
        "diagnoses",
        "history",
        "physical_exam",
        "plan",
        "progress",
    ]


def test_empty_text_renders_placeholder():
    rows = rows_by_key(make_assessment(), make_patient())

    diagnoses = dict(rows["diagnoses"])
    assert diagnoses["Clinical diagnosis"] == "Lumbar disc herniation"
    assert diagnoses["Physiotherapy diagnosis"] == NOT_INFORMED
    assert dict(rows["patient"])["Occupation"] == NOT_INFORMED
    assert all(text == NOT_INFORMED for _, text in rows["plan"])


def test_physical_exam_rows():
    exam = dict(rows_by_key(make_assessment(), make_patient())["physical_exam"])

    assert exam["Presentation"] == "Walking, Oriented"
    assert exam["Medication"] == "Yes. Description: Ibuprofen"
    assert exam["Surgeries"] == "No"
    assert exam["Inspection / palpation"] == "Other: Scar tissue"
    assert exam["Pain assessment (0-10)"] == "7/10"


def test_patient_address_joins_present_parts():
    patient_rows = dict(rows_by_key(make_assessment(), make_patient())["patient"])

    assert patient_rows["Address"] == "Rua das Flores, 123, Centro, São Paulo"
    assert patient_rows["Birth date"] == "15/03/1985"


def test_progress_section_only_when_notes_exist():
    assert rows_by_key(make_assessment(), make_patient())["progress"] == []

    notes = [("Improved ROM", datetime(2024, 6, 10, 9, 0)), ("Less pain", datetime(2024, 6, 5, 9, 0))]
    progress = rows_by_key(make_assessment(notes), make_patient())["progress"]
    assert progress == [("05/06/2024", "Less pain"), ("10/06/2024", "Improved ROM")]


def test_timeline_is_newest_first():
    notes = [
        ("First", datetime(2024, 6, 5, 9, 0)),
        ("Third", datetime(2024, 6, 12, 9, 0)),
        ("Second", datetime(2024, 6, 10, 9, 0)),
    ]

    timeline = progress_timeline(make_assessment(notes))

    assert [n.text for n in timeline] == ["Third", "Second", "First"]


def test_export_filename():
    assert export_filename("Maria Silva  Santos", date(2024, 6, 3)) == (
        "Assessment_Maria_Silva_Santos_03-06-2024.pdf"
    )


def test_render_is_deterministic_for_fixed_timestamp():
    first = render_assessment_pdf(make_assessment(), make_patient(), generated_at=GENERATED_AT)
    second = render_assessment_pdf(make_assessment(), make_patient(), generated_at=GENERATED_AT)

    assert first.startswith(b"%PDF")
    assert first == second


def test_long_report_spans_pages():
    notes = [(f"Session {i}: " + "exercise progression " * 20, datetime(2024, 6, 3, 9, i)) for i in range(40)]

    short = render_assessment_pdf(make_assessment(), make_patient(), generated_at=GENERATED_AT)
    long = render_assessment_pdf(make_assessment(notes), make_patient(), generated_at=GENERATED_AT)

    assert long.startswith(b"%PDF")
    assert len(long) > len(short)
