"""Patient domain schemas - Pydantic models for validation"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, field_validator

from ...enums import MaritalStatus, Sex
from ...shared.validators import validate_br_phone, validate_email, validate_required_text


class PatientCreate(BaseModel):
    """Schema for creating (or fully replacing) a patient"""

    nome: str
    email: str
    telefone: str
    dataNascimento: Optional[date] = None
    sexo: Optional[Sex] = None
    cidade: Optional[str] = None
    bairro: Optional[str] = None
    profissao: Optional[str] = None
    enderecoResidencial: Optional[str] = None
    enderecoComercial: Optional[str] = None
    naturalidade: Optional[str] = None
    estadoCivil: Optional[MaritalStatus] = None

    @field_validator("nome")
    @classmethod
    def validate_name(cls, v):
        return validate_required_text(v, "nome")

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(validate_required_text(v, "email"))

    @field_validator("telefone")
    @classmethod
    def validate_phone(cls, v):
        return validate_br_phone(validate_required_text(v, "telefone"))


class PatientUpdate(BaseModel):
    """Schema for a partial update - only provided fields change"""

    nome: Optional[str] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    dataNascimento: Optional[date] = None
    sexo: Optional[Sex] = None
    cidade: Optional[str] = None
    bairro: Optional[str] = None
    profissao: Optional[str] = None
    enderecoResidencial: Optional[str] = None
    enderecoComercial: Optional[str] = None
    naturalidade: Optional[str] = None
    estadoCivil: Optional[MaritalStatus] = None

    @field_validator("nome")
    @classmethod
    def validate_name(cls, v):
        if v is not None:
            return validate_required_text(v, "nome")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        if v is not None:
            return validate_email(validate_required_text(v, "email"))
        return v

    @field_validator("telefone")
    @classmethod
    def validate_phone(cls, v):
        if v is not None:
            return validate_br_phone(validate_required_text(v, "telefone"))
        return v


class PatientResponse(BaseModel):
    """Schema for patient response"""

    id: int
    nome: str
    email: str
    telefone: str
    dataNascimento: Optional[date] = None
    dataCadastro: date
    sexo: Optional[str] = None
    cidade: Optional[str] = None
    bairro: Optional[str] = None
    profissao: Optional[str] = None
    enderecoResidencial: Optional[str] = None
    enderecoComercial: Optional[str] = None
    naturalidade: Optional[str] = None
    estadoCivil: Optional[str] = None

    class Config:
        from_attributes = True


# Wire name -> column name
PATIENT_FIELDS = {
    "nome": "full_name",
    "email": "email",
    "telefone": "phone",
    "dataNascimento": "birth_date",
    "sexo": "sex",
    "cidade": "city",
    "bairro": "neighborhood",
    "profissao": "occupation",
    "enderecoResidencial": "home_address",
    "enderecoComercial": "work_address",
    "naturalidade": "nationality",
    "estadoCivil": "marital_status",
}
