"""
Candidate Input Models - Ranking Electoral
electoral_scoring/models/candidate.py

Per-candidate record bundle hydrated by the data layer and handed to the
scoring engine. Models are frozen: the engine never mutates its input.

Unknown keys are rejected. Categorical fields are closed enums and are
rejected at the boundary when out of range. Numeric fields are NOT
range-validated here; every calculator clamps its own inputs.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from electoral_scoring.models.enumerations import (
    CivilSentenceType,
    DiscrepancySeverity,
    EducationLevel,
    RoleType,
    SeniorityLevel,
    TaxCondition,
    TaxStatus,
)


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# BIOGRAPHICAL RECORDS
# =============================================================================


class EducationRecord(_FrozenModel):
    """One declared degree or course of study."""

    level: EducationLevel = Field(..., description="Highest level reached in this record")
    field: Optional[str] = Field(default=None, max_length=255)
    institution: Optional[str] = Field(default=None, max_length=255)
    year: Optional[int] = None
    is_verified: Optional[bool] = None


class ExperienceRecord(_FrozenModel):
    """One tenure. ``end_year=None`` means the tenure is ongoing."""

    role_type: RoleType = Field(..., description="Role classification used for relevance weighting")
    start_year: int
    end_year: Optional[int] = Field(
        default=None,
        description="Resolved against the reference year when absent",
    )
    role: Optional[str] = None
    organization: Optional[str] = None
    is_leadership: bool = False
    seniority_level: Optional[SeniorityLevel] = None


# =============================================================================
# LEGAL RECORDS
# =============================================================================


class PenalSentence(_FrozenModel):
    is_firm: bool = Field(..., description="True when no appeal is pending")
    description: Optional[str] = None
    year: Optional[int] = None


class CivilSentence(_FrozenModel):
    type: CivilSentenceType
    description: Optional[str] = None
    year: Optional[int] = None


# =============================================================================
# DISCLOSURE RECORDS
# =============================================================================


class AssetsDeclaration(_FrozenModel):
    """Sworn income and asset declaration (amounts in soles)."""

    total_income: float = 0
    public_salary: float = 0
    public_rent: float = 0
    other_public: float = 0
    private_salary: float = 0
    private_rent: float = 0
    other_private: float = 0
    vehicle_count: int = 0
    vehicle_total: float = 0
    real_estate_count: int = 0
    real_estate_total: float = 0

    @property
    def public_sources(self) -> List[float]:
        return [self.public_salary, self.public_rent, self.other_public]

    @property
    def private_sources(self) -> List[float]:
        return [self.private_salary, self.private_rent, self.other_private]

    @property
    def income_sources(self) -> List[float]:
        return self.public_sources + self.private_sources


class ProfileFields(_FrozenModel):
    """Which sections of the candidate's public profile are filled in."""

    education_count: int = 0
    experience_count: int = 0
    political_count: int = 0
    has_birth_date: bool = False
    has_dni: bool = False
    has_plan_url: bool = False
    has_djhv_url: bool = False
    has_penal_array: bool = False
    has_civil_array: bool = False


# =============================================================================
# AGGREGATE ROOTS
# =============================================================================


class CandidateData(_FrozenModel):
    """
    Everything the engine needs to score one candidate.

    Transparency inputs come either from the legacy percentage triple
    (``declaration_completeness``, ``declaration_consistency``,
    ``assets_quality``) or from the richer ``assets_declaration`` /
    ``profile_fields`` pair.
    """

    education: List[EducationRecord] = Field(default_factory=list)
    experience: List[ExperienceRecord] = Field(default_factory=list)
    penal_sentences: List[PenalSentence] = Field(default_factory=list)
    civil_sentences: List[CivilSentence] = Field(default_factory=list)
    party_resignations: int = 0

    # Legacy transparency triple (0-100 each)
    declaration_completeness: Optional[float] = None
    declaration_consistency: Optional[float] = None
    assets_quality: Optional[float] = None

    # Rich transparency inputs
    assets_declaration: Optional[AssetsDeclaration] = None
    profile_fields: Optional[ProfileFields] = None
    onpe_sanction_count: int = 0

    # Confidence inputs (0-100)
    verification_level: float = 0
    coverage_level: float = 0

    # Presidential plan-of-government viability (0-100), 4th pillar
    plan_viability: Optional[float] = None

    @property
    def has_legacy_transparency(self) -> bool:
        return any(
            v is not None
            for v in (
                self.declaration_completeness,
                self.declaration_consistency,
                self.assets_quality,
            )
        )

    @property
    def has_declared_transparency(self) -> bool:
        return self.assets_declaration is not None or self.profile_fields is not None


class EnhancedIntegrityData(CandidateData):
    """CandidateData plus the four extra integrity sources and incumbent data."""

    # Congressional voting record
    voting_integrity_penalty: float = 0
    voting_integrity_bonus: float = 0

    # SUNAT tax status
    tax_condition: Optional[TaxCondition] = None
    tax_status: Optional[TaxStatus] = None
    has_coactive_debts: bool = False
    coactive_debt_count: Optional[int] = None

    # Judicial cross-check against the sworn declaration
    has_judicial_discrepancy: bool = False
    discrepancy_severity: Optional[DiscrepancySeverity] = None
    undeclared_cases_count: int = 0

    # Companies linked to the candidate
    company_penal_cases: int = 0
    company_labor_issues: int = 0
    company_environmental_issues: int = 0
    company_consumer_complaints: int = 0

    # Incumbent performance
    is_incumbent: bool = False
    budget_execution_pct: Optional[float] = None
    audit_report_count: int = 0
    performance_score: Optional[float] = None
