from electoral_scoring.models.candidate import (
    AssetsDeclaration,
    CandidateData,
    CivilSentence,
    EducationRecord,
    EnhancedIntegrityData,
    ExperienceRecord,
    PenalSentence,
    ProfileFields,
)
from electoral_scoring.models.enumerations import (
    CargoType,
    CivilSentenceType,
    DiscrepancySeverity,
    EducationLevel,
    PresetType,
    RoleType,
    SeniorityLevel,
    TaxCondition,
    TaxStatus,
)

__all__ = [
    "AssetsDeclaration",
    "CandidateData",
    "CargoType",
    "CivilSentence",
    "CivilSentenceType",
    "DiscrepancySeverity",
    "EducationLevel",
    "EducationRecord",
    "EnhancedIntegrityData",
    "ExperienceRecord",
    "PenalSentence",
    "PresetType",
    "ProfileFields",
    "RoleType",
    "SeniorityLevel",
    "TaxCondition",
    "TaxStatus",
]
