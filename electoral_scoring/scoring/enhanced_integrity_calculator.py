# electoral_scoring/scoring/enhanced_integrity_calculator.py
"""
Enhanced Integrity Calculator - Ranking Electoral
--------------------------------------------------
Traditional integrity followed by four signed adjustments, applied in a
fixed order. Every intermediate subtotal is kept for the breakdown panel.

    1. Voting record   penalty ≤ 85, bonus ≤ 15, net = max(bonus − penalty, −85)
    2. Tax (SUNAT)     no_habido 50 | no_hallado 20
                       suspendido 15 | baja_definitiva/baja_provisional 10
                       coactive debts 20 × min(count, 3)           cap 85
    3. Omission        critical 60 | major 40 | minor 20 | none 0
                       + 10 per undeclared case                    cap 85
                       (only when a judicial discrepancy is flagged)
    4. Companies       penal ×40, labor ×20, environmental ×25,
                       consumer complaints > 5 → 15                cap 60

    after_traditional = traditional integrity total
    after_voting      = after_traditional + voting.net
    after_tax         = after_voting − tax
    after_judicial    = after_tax − omission
    final             = clamp(after_judicial − company, 0, 100)

Intermediate subtotals are NOT clamped: a voting bonus can lift
after_voting above 100 and a later penalty can take it below 0. Only the
final value is clamped.
"""
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Dict, Optional

import structlog

from electoral_scoring.models.candidate import EnhancedIntegrityData
from electoral_scoring.models.enumerations import DiscrepancySeverity, TaxCondition, TaxStatus
from electoral_scoring.scoring.integrity_calculator import IntegrityCalculator, IntegrityResult
from electoral_scoring.scoring.utils import ZERO, clamp, quantize, to_count, to_decimal

logger = structlog.get_logger(__name__)

MAX_VOTING_PENALTY = Decimal("85")
MAX_VOTING_BONUS = Decimal("15")

TAX_CONDITION_PENALTY: Dict[TaxCondition, Decimal] = {
    TaxCondition.NO_HABIDO: Decimal("50"),
    TaxCondition.NO_HALLADO: Decimal("20"),
}
TAX_STATUS_PENALTY: Dict[TaxStatus, Decimal] = {
    TaxStatus.SUSPENDIDO: Decimal("15"),
    TaxStatus.BAJA_DEFINITIVA: Decimal("10"),
    TaxStatus.BAJA_PROVISIONAL: Decimal("10"),
}
COACTIVE_DEBT_PENALTY = Decimal("20")
MAX_COACTIVE_DEBTS = 3
MAX_TAX_PENALTY = Decimal("85")

OMISSION_SEVERITY_PENALTY: Dict[DiscrepancySeverity, Decimal] = {
    DiscrepancySeverity.CRITICAL: Decimal("60"),
    DiscrepancySeverity.MAJOR: Decimal("40"),
    DiscrepancySeverity.MINOR: Decimal("20"),
    DiscrepancySeverity.NONE: ZERO,
}
UNDECLARED_CASE_PENALTY = Decimal("10")
MAX_OMISSION_PENALTY = Decimal("85")

COMPANY_PENAL_PENALTY = Decimal("40")
COMPANY_LABOR_PENALTY = Decimal("20")
COMPANY_ENVIRONMENTAL_PENALTY = Decimal("25")
COMPANY_CONSUMER_PENALTY = Decimal("15")
CONSUMER_COMPLAINT_THRESHOLD = 5
MAX_COMPANY_PENALTY = Decimal("60")


@dataclass
class VotingAdjustment:
    penalty: Decimal
    bonus: Decimal
    net: Decimal


@dataclass
class IntegritySubtotals:
    after_traditional: Decimal
    after_voting: Decimal
    after_tax: Decimal
    after_judicial: Decimal
    final: Decimal


@dataclass
class IntegrityBreakdown:
    """Signed contribution of every source plus the running subtotals."""
    traditional: Decimal  # after_traditional − 100
    voting: Decimal
    tax: Decimal
    omission: Decimal
    company: Decimal
    subtotals: IntegritySubtotals


@dataclass
class EnhancedIntegrityResult(IntegrityResult):
    """IntegrityResult extended with the four extra sources."""
    voting_penalty: Decimal = ZERO
    voting_bonus: Decimal = ZERO
    voting_net: Decimal = ZERO
    tax_penalty: Decimal = ZERO
    omission_penalty: Decimal = ZERO
    company_penalty: Decimal = ZERO
    breakdown: Optional[IntegrityBreakdown] = None


class EnhancedIntegrityCalculator:
    """Chain traditional integrity with voting, tax, omission and company sources."""

    def __init__(self, base: Optional[IntegrityCalculator] = None):
        self.base = base or IntegrityCalculator()

    def voting_adjustment(self, data: EnhancedIntegrityData) -> VotingAdjustment:
        penalty = min(max(to_decimal(data.voting_integrity_penalty), ZERO), MAX_VOTING_PENALTY)
        bonus = min(max(to_decimal(data.voting_integrity_bonus), ZERO), MAX_VOTING_BONUS)
        net = max(bonus - penalty, -MAX_VOTING_PENALTY)
        return VotingAdjustment(
            penalty=quantize(penalty),
            bonus=quantize(bonus),
            net=quantize(net),
        )

    def tax_penalty(self, data: EnhancedIntegrityData) -> Decimal:
        penalty = ZERO
        if data.tax_condition is not None:
            penalty += TAX_CONDITION_PENALTY.get(data.tax_condition, ZERO)
        if data.tax_status is not None:
            penalty += TAX_STATUS_PENALTY.get(data.tax_status, ZERO)
        if data.has_coactive_debts:
            debts = to_count(data.coactive_debt_count) or 1
            penalty += COACTIVE_DEBT_PENALTY * min(debts, MAX_COACTIVE_DEBTS)
        return min(penalty, MAX_TAX_PENALTY)

    def omission_penalty(self, data: EnhancedIntegrityData) -> Decimal:
        if not data.has_judicial_discrepancy:
            return ZERO
        penalty = OMISSION_SEVERITY_PENALTY.get(data.discrepancy_severity, ZERO)
        penalty += UNDECLARED_CASE_PENALTY * to_count(data.undeclared_cases_count)
        return min(penalty, MAX_OMISSION_PENALTY)

    def company_penalty(self, data: EnhancedIntegrityData) -> Decimal:
        penalty = (
            COMPANY_PENAL_PENALTY * to_count(data.company_penal_cases)
            + COMPANY_LABOR_PENALTY * to_count(data.company_labor_issues)
            + COMPANY_ENVIRONMENTAL_PENALTY * to_count(data.company_environmental_issues)
        )
        if to_count(data.company_consumer_complaints) > CONSUMER_COMPLAINT_THRESHOLD:
            penalty += COMPANY_CONSUMER_PENALTY
        return min(penalty, MAX_COMPANY_PENALTY)

    def calculate(self, data: EnhancedIntegrityData) -> EnhancedIntegrityResult:
        base = self.base.calculate(data)

        voting = self.voting_adjustment(data)
        tax = self.tax_penalty(data)
        omission = self.omission_penalty(data)
        company = self.company_penalty(data)

        after_traditional = base.total
        after_voting = after_traditional + voting.net
        after_tax = after_voting - tax
        after_judicial = after_tax - omission
        final = quantize(clamp(after_judicial - company))

        subtotals = IntegritySubtotals(
            after_traditional=quantize(after_traditional),
            after_voting=quantize(after_voting),
            after_tax=quantize(after_tax),
            after_judicial=quantize(after_judicial),
            final=final,
        )
        breakdown = IntegrityBreakdown(
            traditional=quantize(after_traditional - Decimal("100")),
            voting=voting.net,
            tax=-tax,
            omission=-omission,
            company=-company,
            subtotals=subtotals,
        )

        logger.debug(
            "enhanced_integrity_calculated",
            after_traditional=float(after_traditional),
            voting_net=float(voting.net),
            tax_penalty=float(tax),
            omission_penalty=float(omission),
            company_penalty=float(company),
            final=float(final),
        )

        base_fields = {f.name: getattr(base, f.name) for f in fields(IntegrityResult)}
        base_fields["total"] = final
        return EnhancedIntegrityResult(
            **base_fields,
            voting_penalty=voting.penalty,
            voting_bonus=voting.bonus,
            voting_net=voting.net,
            tax_penalty=tax,
            omission_penalty=omission,
            company_penalty=company,
            breakdown=breakdown,
        )
