"""Enumerated values shared by the API schemas, the stores and the calendar"""

import enum


class SessionStatus(str, enum.Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"
    NO_SHOW = "NO_SHOW"


class Sex(str, enum.Enum):
    F = "F"
    M = "M"
    OTHER = "Other"


class MaritalStatus(str, enum.Enum):
    SINGLE = "SINGLE"
    MARRIED = "MARRIED"
    DIVORCED = "DIVORCED"
    WIDOWED = "WIDOWED"
    CIVIL_UNION = "CIVIL_UNION"
