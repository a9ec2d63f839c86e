"""
Assessment PDF Generator
Renders a clinical evaluation as a branded, paginated A4 document
"""

import dataclasses
import io
import logging
import re
from datetime import date, datetime
from typing import Any, Callable, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer

from ..config import CLINIC_NAME
from ..shared.timeutils import clinic_now

logger = logging.getLogger(__name__)

NOT_INFORMED = "Not informed"

BRAND_COLOR = colors.HexColor("#1a7b7d")
SECTION_FILL = colors.HexColor("#f0f0f0")
DARK_GRAY = colors.HexColor("#1e293b")

Row = tuple[Optional[str], str]


@dataclasses.dataclass(frozen=True)
class ReportSection:
    """
    One numbered block of the report.

    ``render`` returns (label, text) rows; a section that renders no rows is
    left out of the document.
    """

    key: str
    title: str
    render: Callable[[Any, Any], list[Row]]


def text_or_placeholder(value: Any) -> str:
    if value is None:
        return NOT_INFORMED
    text = str(value).strip()
    return text or NOT_INFORMED


def _yes_no(flag: Any) -> str:
    return "Yes" if flag else "No"


def _format_date(value: Optional[date]) -> str:
    return value.strftime("%d/%m/%Y") if value else NOT_INFORMED


def _flag_list(pairs: list[tuple[Any, str]]) -> str:
    chosen = [label for flag, label in pairs if flag]
    return ", ".join(chosen) if chosen else NOT_INFORMED


def _with_description(flag: Any, description: Any) -> str:
    if not flag:
        return "No"
    return f"Yes. Description: {text_or_placeholder(description)}"


def _patient_rows(assessment, patient) -> list[Row]:
    address_parts = [patient.home_address, patient.neighborhood, patient.city]
    address = ", ".join(part.strip() for part in address_parts if part and part.strip())
    return [
        ("Name", text_or_placeholder(patient.full_name)),
        ("Birth date", _format_date(patient.birth_date)),
        ("Email", text_or_placeholder(patient.email)),
        ("Phone", text_or_placeholder(patient.phone)),
        ("Occupation", text_or_placeholder(patient.occupation)),
        ("Address", text_or_placeholder(address)),
    ]


def _date_rows(assessment, patient) -> list[Row]:
    return [("Date", _format_date(assessment.assessment_date))]


def _diagnosis_rows(assessment, patient) -> list[Row]:
    return [
        ("Clinical diagnosis", text_or_placeholder(assessment.clinical_diagnosis)),
        ("Physiotherapy diagnosis", text_or_placeholder(assessment.physio_diagnosis)),
    ]


def _history_rows(assessment, patient) -> list[Row]:
    return [
        ("Clinical history", text_or_placeholder(assessment.clinical_history)),
        ("Chief complaint", text_or_placeholder(assessment.chief_complaint)),
        ("History of present illness", text_or_placeholder(assessment.present_illness_history)),
        ("History of past illness", text_or_placeholder(assessment.past_illness_history)),
        ("Personal background", text_or_placeholder(assessment.personal_background)),
        ("Family background", text_or_placeholder(assessment.family_background)),
        ("Lifestyle habits", text_or_placeholder(assessment.lifestyle_habits)),
        ("Previous treatments", text_or_placeholder(assessment.previous_treatments)),
    ]


def _physical_exam_rows(assessment, patient) -> list[Row]:
    presentation = _flag_list(
        [
            (assessment.walking, "Walking"),
            (assessment.walking_with_support, "Walking with support"),
            (assessment.wheelchair, "Wheelchair"),
            (assessment.hospitalized, "Hospitalized"),
            (assessment.oriented, "Oriented"),
        ]
    )
    other = None
    if assessment.inspection_other:
        other = f"Other: {text_or_placeholder(assessment.inspection_other_description)}"
    inspection = _flag_list(
        [
            (assessment.inspection_normal, "Normal"),
            (assessment.inspection_edema, "Edema"),
            (assessment.inspection_incomplete_healing, "Incomplete healing"),
            (assessment.inspection_erythema, "Erythema"),
            (other, other),
        ]
    )
    return [
        ("Presentation", presentation),
        (
            "Complementary exams",
            _with_description(assessment.has_complementary_exams, assessment.complementary_exams),
        ),
        ("Medication", _with_description(assessment.uses_medication, assessment.medication)),
        ("Surgeries", _with_description(assessment.had_surgery, assessment.surgeries)),
        ("Inspection / palpation", inspection),
        ("Semiology", text_or_placeholder(assessment.semiology)),
        ("Specific tests", text_or_placeholder(assessment.specific_tests)),
        ("Pain assessment (0-10)", f"{assessment.pain_score or 0}/10"),
    ]


def _plan_rows(assessment, patient) -> list[Row]:
    return [
        ("Treatment goals", text_or_placeholder(assessment.treatment_goals)),
        ("Therapeutic resources", text_or_placeholder(assessment.therapeutic_resources)),
        ("Treatment plan", text_or_placeholder(assessment.treatment_plan)),
    ]


def _progress_rows(assessment, patient) -> list[Row]:
    notes = sorted(assessment.progress_notes, key=lambda n: (n.recorded_at, n.id))
    return [(n.recorded_at.strftime("%d/%m/%Y"), text_or_placeholder(n.text)) for n in notes]


SECTIONS = [
    ReportSection("patient", "Patient details", _patient_rows),
    ReportSection("date", "Assessment date", _date_rows),
    ReportSection("diagnoses", "Diagnoses", _diagnosis_rows),
    ReportSection("history", "Clinical history", _history_rows),
    ReportSection("physical_exam", "Clinical / physical exam", _physical_exam_rows),
    ReportSection("plan", "Therapeutic plan", _plan_rows),
    ReportSection("progress", "Progress notes", _progress_rows),
]


def export_filename(patient_name: str, assessment_date: date) -> str:
    """``Assessment_<Name_With_Underscores>_<dd-mm-YYYY>.pdf``"""
    name = re.sub(r"\s+", "_", (patient_name or "").strip())
    return f"Assessment_{name}_{assessment_date.strftime('%d-%m-%Y')}.pdf"


def _numbered_canvas(footer_left: str, page_width: float, margin: float):
    """
    Canvas class that defers every page until the end so each footer can
    show the final page count.
    """

    class NumberedCanvas(canvas.Canvas):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            total = len(self._saved_page_states)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                self._draw_footer(total)
                super().showPage()
            super().save()

        def _draw_footer(self, total: int):
            self.saveState()
            self.setFont("Helvetica", 8)
            self.setFillColor(colors.grey)
            self.drawString(margin, margin / 2, footer_left)
            self.drawRightString(
                page_width - margin, margin / 2, f"Page {self.getPageNumber()} of {total}"
            )
            self.restoreState()

    return NumberedCanvas


class AssessmentPDFGenerator:
    """Generate the printable record of one assessment"""

    def __init__(self, assessment, patient, generated_at: Optional[datetime] = None):
        self.assessment = assessment
        self.patient = patient
        self.generated_at = generated_at or clinic_now()

        # PDF settings
        self.page_width, self.page_height = A4
        self.margin = 20 * mm
        self.header_height = 25 * mm

        styles = getSampleStyleSheet()
        self.section_style = ParagraphStyle(
            "SectionTitle",
            parent=styles["Heading2"],
            fontSize=12,
            textColor=DARK_GRAY,
            backColor=SECTION_FILL,
            borderPadding=(3, 4, 3, 4),
            spaceBefore=10,
            spaceAfter=8,
        )
        self.label_style = ParagraphStyle(
            "RowLabel",
            parent=styles["Normal"],
            fontName="Helvetica-Bold",
            fontSize=10,
            textColor=DARK_GRAY,
            spaceBefore=4,
            spaceAfter=1,
        )
        self.body_style = ParagraphStyle(
            "RowBody",
            parent=styles["Normal"],
            fontSize=10,
            leading=13,
            textColor=DARK_GRAY,
            spaceAfter=4,
        )

    def build_story(self) -> list:
        story = []
        number = 0
        for section in SECTIONS:
            rows = section.render(self.assessment, self.patient)
            if not rows:
                continue
            number += 1
            title = Paragraph(f"{number}. {escape(section.title.upper())}", self.section_style)
            # Keep a section title on the same page as its first row
            story.append(KeepTogether([title] + self._row_flowables(rows[0])))
            for row in rows[1:]:
                story.extend(self._row_flowables(row))
            story.append(Spacer(1, 4 * mm))
        return story

    def _row_flowables(self, row: Row) -> list:
        label, text = row
        body = escape(text).replace("\n", "<br/>")
        if label is None:
            return [Paragraph(body, self.body_style)]
        return [Paragraph(f"{escape(label)}:", self.label_style), Paragraph(body, self.body_style)]

    def _draw_header(self, canvas_obj, doc):
        """Brand band across the top of the first page"""
        canvas_obj.saveState()
        canvas_obj.setFillColor(BRAND_COLOR)
        canvas_obj.rect(
            0,
            self.page_height - self.header_height,
            self.page_width,
            self.header_height,
            stroke=0,
            fill=1,
        )
        canvas_obj.setFillColor(colors.white)
        canvas_obj.setFont("Helvetica-Bold", 15)
        canvas_obj.drawCentredString(
            self.page_width / 2,
            self.page_height - self.header_height / 2 - 5,
            f"{CLINIC_NAME.upper()} - PHYSIOTHERAPY ASSESSMENT",
        )
        canvas_obj.restoreState()

    def generate(self) -> bytes:
        """Generate PDF and return bytes"""
        logger.info(f"📄 Generating assessment PDF for assessment {self.assessment.id}")

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=self.margin,
            leftMargin=self.margin,
            topMargin=self.margin + self.header_height,
            bottomMargin=self.margin,
            title=f"Assessment - {self.patient.full_name}",
            author=CLINIC_NAME,
            invariant=1,
        )

        footer_left = f"Generated at: {self.generated_at.strftime('%d/%m/%Y %H:%M')}"
        doc.build(
            self.build_story(),
            onFirstPage=self._draw_header,
            canvasmaker=_numbered_canvas(footer_left, self.page_width, self.margin),
        )

        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"✅ Generated assessment PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes


def render_assessment_pdf(assessment, patient, generated_at: Optional[datetime] = None) -> bytes:
    """Render one assessment of ``patient`` to PDF bytes"""
    return AssessmentPDFGenerator(assessment, patient, generated_at).generate()
