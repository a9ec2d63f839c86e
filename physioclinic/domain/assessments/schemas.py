"""Assessment domain schemas - clinical evaluation form and progress notes"""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class ProgressNoteCreate(BaseModel):
    evolucao: str


class ProgressNoteResponse(BaseModel):
    id: int
    evolucao: str
    dataEvolucao: str


class AssessmentBase(BaseModel):
    """Every clinical field of the evaluation form"""

    dataAvaliacao: Optional[date] = None

    # Diagnoses and clinical history
    diagnosticoClinico: Optional[str] = None
    diagnosticoFisioterapeutico: Optional[str] = None
    historiaClinica: Optional[str] = None
    queixaPrincipal: Optional[str] = None
    habitosVida: Optional[str] = None
    hma: Optional[str] = None
    hmp: Optional[str] = None
    antecedentesPessoais: Optional[str] = None
    antecedentesFamiliares: Optional[str] = None
    tratamentosRealizados: Optional[str] = None

    # Physical exam
    deambulando: bool = False
    deambulandoComApoio: bool = False
    cadeiraDeRodas: bool = False
    internado: bool = False
    orientado: bool = False
    temExamesComplementares: bool = False
    examesComplementaresDescricao: Optional[str] = None
    usaMedicamentos: bool = False
    medicamentosDescricao: Optional[str] = None
    realizouCirurgia: bool = False
    cirurgiasDescricao: Optional[str] = None
    inspecaoNormal: bool = False
    inspecaoEdema: bool = False
    inspecaoCicatrizacaoIncompleta: bool = False
    inspecaoEritemas: bool = False
    inspecaoOutros: bool = False
    inspecaoOutrosDescricao: Optional[str] = None
    semiologia: Optional[str] = None
    testesEspecificos: Optional[str] = None
    avaliacaoDor: int = 0

    # Therapeutic plan
    objetivosTratamento: Optional[str] = None
    recursosTerapeuticos: Optional[str] = None
    planoTratamento: Optional[str] = None


class AssessmentCreate(AssessmentBase):
    clienteId: int


class AssessmentUpdate(AssessmentBase):
    """Full replace of the form - progress notes are not part of it"""

    clienteId: Optional[int] = None


class AssessmentResponse(AssessmentBase):
    id: int
    clienteId: int
    dataAvaliacao: date
    evolucoes: list[ProgressNoteResponse] = []
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    class Config:
        from_attributes = True


# Wire name -> column name
ASSESSMENT_FIELDS = {
    "dataAvaliacao": "assessment_date",
    "diagnosticoClinico": "clinical_diagnosis",
    "diagnosticoFisioterapeutico": "physio_diagnosis",
    "historiaClinica": "clinical_history",
    "queixaPrincipal": "chief_complaint",
    "habitosVida": "lifestyle_habits",
    "hma": "present_illness_history",
    "hmp": "past_illness_history",
    "antecedentesPessoais": "personal_background",
    "antecedentesFamiliares": "family_background",
    "tratamentosRealizados": "previous_treatments",
    "deambulando": "walking",
    "deambulandoComApoio": "walking_with_support",
    "cadeiraDeRodas": "wheelchair",
    "internado": "hospitalized",
    "orientado": "oriented",
    "temExamesComplementares": "has_complementary_exams",
    "examesComplementaresDescricao": "complementary_exams",
    "usaMedicamentos": "uses_medication",
    "medicamentosDescricao": "medication",
    "realizouCirurgia": "had_surgery",
    "cirurgiasDescricao": "surgeries",
    "inspecaoNormal": "inspection_normal",
    "inspecaoEdema": "inspection_edema",
    "inspecaoCicatrizacaoIncompleta": "inspection_incomplete_healing",
    "inspecaoEritemas": "inspection_erythema",
    "inspecaoOutros": "inspection_other",
    "inspecaoOutrosDescricao": "inspection_other_description",
    "semiologia": "semiology",
    "testesEspecificos": "specific_tests",
    "avaliacaoDor": "pain_score",
    "objetivosTratamento": "treatment_goals",
    "recursosTerapeuticos": "therapeutic_resources",
    "planoTratamento": "treatment_plan",
}
