# tests/test_integrity.py

"""
Integrity Tests - traditional penalties and the enhanced subtotal chain
"""

from decimal import Decimal

import pytest

from electoral_scoring.models import CivilSentence, PenalSentence
from electoral_scoring.models.enumerations import (
    CivilSentenceType,
    DiscrepancySeverity,
    TaxCondition,
    TaxStatus,
)
from electoral_scoring.scoring.enhanced_integrity_calculator import EnhancedIntegrityCalculator
from electoral_scoring.scoring.integrity_calculator import IntegrityCalculator, civil_multiplier


def firm(n=1):
    return [PenalSentence(is_firm=True, description=f"firm {i}") for i in range(n)]


def pending(n=1):
    return [PenalSentence(is_firm=False, description=f"pending {i}") for i in range(n)]


def civil(*types):
    return [CivilSentence(type=t, description=f"case {i}") for i, t in enumerate(types)]


# TRADITIONAL INTEGRITY


class TestIntegrityCalculator:
    """Tests for penal, civil and resignation penalties."""

    def test_clean_candidate_scores_100(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate())
        assert result.total == 100
        assert result.penal_penalty == 0
        assert result.total_civil_penalty == 0
        assert result.resignation_penalty == 0
        assert result.civil_penalties == []

    def test_one_firm_sentence(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(penal_sentences=firm(1)))
        assert result.penal_penalty == 70
        assert result.total == 30

    def test_two_firm_sentences(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(penal_sentences=firm(2)))
        assert result.penal_penalty == 85
        assert result.total == 15

    def test_pending_sentence_adds_35(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(penal_sentences=pending(1)))
        assert result.penal_penalty == 35
        assert result.total == 65

    def test_pending_sentences_capped_at_85(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(penal_sentences=pending(3)))
        assert result.penal_penalty == 85

    def test_firm_plus_pending_capped_at_85(self, make_candidate):
        result = IntegrityCalculator().calculate(
            make_candidate(penal_sentences=firm(1) + pending(1))
        )
        assert result.penal_penalty == 85
        assert result.firm_sentence_count == 1
        assert result.pending_sentence_count == 1

    def test_two_violence_sentences_capped_at_70(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(
            civil_sentences=civil(CivilSentenceType.VIOLENCE, CivilSentenceType.VIOLENCE)
        ))
        line = result.civil_penalties[0]
        assert line.type == CivilSentenceType.VIOLENCE
        assert line.count == 2
        assert line.raw_penalty == 75
        assert line.penalty == 70
        assert line.capped is True
        assert result.total == 30

    def test_three_laboral_sentences_capped_at_40(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(
            civil_sentences=civil(*[CivilSentenceType.LABORAL] * 3)
        ))
        line = result.civil_penalties[0]
        assert line.raw_penalty == Decimal("43.75")
        assert line.penalty == 40
        assert line.capped is True

    def test_multiplier_flattens_after_the_third_sentence(self):
        assert [civil_multiplier(i) for i in range(5)] == [
            Decimal("1.0"), Decimal("0.5"), Decimal("0.25"), Decimal("0.25"), Decimal("0.25"),
        ]

    def test_four_alimentos_sentences(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(
            civil_sentences=civil(*[CivilSentenceType.ALIMENTOS] * 4)
        ))
        line = result.civil_penalties[0]
        assert line.raw_penalty == Decimal("70")  # 35 + 17.5 + 8.75 + 8.75
        assert line.penalty == 50

    def test_single_sentence_not_capped(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(
            civil_sentences=civil(CivilSentenceType.CONTRACTUAL)
        ))
        assert result.civil_penalties[0].penalty == 15
        assert result.civil_penalties[0].capped is False
        assert result.civil_penalties_capped is False
        assert result.total == 85

    def test_total_civil_penalty_capped_at_85(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(civil_sentences=civil(
            CivilSentenceType.VIOLENCE,
            CivilSentenceType.VIOLENCE,
            CivilSentenceType.ALIMENTOS,
            CivilSentenceType.LABORAL,
            CivilSentenceType.CONTRACTUAL,
        )))
        assert len(result.civil_penalties) == 4
        assert result.total_civil_penalty == 85
        assert result.civil_penalties_capped is True
        assert result.total == 15

    def test_civil_lines_follow_first_appearance(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(civil_sentences=civil(
            CivilSentenceType.LABORAL,
            CivilSentenceType.VIOLENCE,
            CivilSentenceType.LABORAL,
        )))
        assert [line.type for line in result.civil_penalties] == [
            CivilSentenceType.LABORAL,
            CivilSentenceType.VIOLENCE,
        ]

    @pytest.mark.parametrize("resignations,expected", [
        (0, 0), (1, 5), (2, 10), (3, 10), (4, 15), (9, 15), (-2, 0),
    ])
    def test_resignation_tiers(self, make_candidate, resignations, expected):
        result = IntegrityCalculator().calculate(make_candidate(party_resignations=resignations))
        assert result.resignation_penalty == expected
        assert result.total == 100 - expected

    def test_total_floors_at_zero(self, make_candidate):
        result = IntegrityCalculator().calculate(make_candidate(
            penal_sentences=firm(2),
            civil_sentences=civil(CivilSentenceType.VIOLENCE),
            party_resignations=5,
        ))
        assert result.total == 0


# ENHANCED INTEGRITY


class TestVotingAdjustment:

    def test_no_voting_data(self, make_enhanced):
        result = EnhancedIntegrityCalculator().voting_adjustment(make_enhanced())
        assert (result.penalty, result.bonus, result.net) == (0, 0, 0)

    def test_penalty_capped_at_85(self, make_enhanced):
        result = EnhancedIntegrityCalculator().voting_adjustment(
            make_enhanced(voting_integrity_penalty=100)
        )
        assert result.penalty == 85

    def test_bonus_capped_at_15(self, make_enhanced):
        result = EnhancedIntegrityCalculator().voting_adjustment(
            make_enhanced(voting_integrity_bonus=50)
        )
        assert result.bonus == 15

    def test_net(self, make_enhanced):
        result = EnhancedIntegrityCalculator().voting_adjustment(
            make_enhanced(voting_integrity_penalty=30, voting_integrity_bonus=10)
        )
        assert result.net == -20

    def test_net_floor(self, make_enhanced):
        result = EnhancedIntegrityCalculator().voting_adjustment(
            make_enhanced(voting_integrity_penalty=200)
        )
        assert result.net == -85


class TestTaxPenalty:

    @pytest.mark.parametrize("overrides,expected", [
        ({}, 0),
        ({"tax_condition": TaxCondition.HABIDO}, 0),
        ({"tax_condition": TaxCondition.NO_HABIDO}, 50),
        ({"tax_condition": TaxCondition.NO_HALLADO}, 20),
        ({"tax_status": TaxStatus.SUSPENDIDO}, 15),
        ({"tax_status": TaxStatus.BAJA_DEFINITIVA}, 10),
        ({"tax_status": TaxStatus.BAJA_PROVISIONAL}, 10),
        ({"has_coactive_debts": True, "coactive_debt_count": 2}, 40),
        ({"has_coactive_debts": True, "coactive_debt_count": 10}, 60),
        ({"has_coactive_debts": True}, 20),
        ({"has_coactive_debts": False, "coactive_debt_count": 3}, 0),
    ])
    def test_tax_penalty(self, make_enhanced, overrides, expected):
        assert EnhancedIntegrityCalculator().tax_penalty(make_enhanced(**overrides)) == expected

    def test_capped_at_85(self, make_enhanced):
        data = make_enhanced(
            tax_condition=TaxCondition.NO_HABIDO,
            tax_status=TaxStatus.SUSPENDIDO,
            has_coactive_debts=True,
            coactive_debt_count=3,
        )
        assert EnhancedIntegrityCalculator().tax_penalty(data) == 85  # 50 + 15 + 60


class TestOmissionPenalty:

    def test_no_discrepancy(self, make_enhanced):
        assert EnhancedIntegrityCalculator().omission_penalty(make_enhanced()) == 0

    def test_severity_ignored_without_flag(self, make_enhanced):
        data = make_enhanced(discrepancy_severity=DiscrepancySeverity.CRITICAL, undeclared_cases_count=3)
        assert EnhancedIntegrityCalculator().omission_penalty(data) == 0

    @pytest.mark.parametrize("severity,cases,expected", [
        (DiscrepancySeverity.NONE, 0, 0),
        (DiscrepancySeverity.MINOR, 0, 20),
        (DiscrepancySeverity.MAJOR, 2, 60),
        (DiscrepancySeverity.CRITICAL, 1, 70),
        (DiscrepancySeverity.CRITICAL, 10, 85),
        (None, 2, 20),
    ])
    def test_severity_plus_cases(self, make_enhanced, severity, cases, expected):
        data = make_enhanced(
            has_judicial_discrepancy=True,
            discrepancy_severity=severity,
            undeclared_cases_count=cases,
        )
        assert EnhancedIntegrityCalculator().omission_penalty(data) == expected


class TestCompanyPenalty:

    def test_no_issues(self, make_enhanced):
        assert EnhancedIntegrityCalculator().company_penalty(make_enhanced()) == 0

    def test_penal_case(self, make_enhanced):
        assert EnhancedIntegrityCalculator().company_penalty(make_enhanced(company_penal_cases=1)) == 40

    def test_capped_at_60(self, make_enhanced):
        data = make_enhanced(
            company_penal_cases=2,
            company_labor_issues=3,
            company_environmental_issues=2,
        )
        assert EnhancedIntegrityCalculator().company_penalty(data) == 60

    def test_consumer_complaints_threshold(self, make_enhanced):
        calc = EnhancedIntegrityCalculator()
        assert calc.company_penalty(make_enhanced(company_consumer_complaints=5)) == 0
        assert calc.company_penalty(make_enhanced(company_consumer_complaints=6)) == 15


class TestEnhancedIntegrityCalculator:
    """Tests for the chained subtotal breakdown."""

    def test_clean_candidate(self, make_enhanced):
        result = EnhancedIntegrityCalculator().calculate(make_enhanced())
        assert result.total == 100
        assert result.breakdown.subtotals.final == 100

    def test_chained_subtotals(self, make_enhanced):
        result = EnhancedIntegrityCalculator().calculate(make_enhanced(
            penal_sentences=firm(1),
            voting_integrity_penalty=10,
            tax_condition=TaxCondition.NO_HALLADO,
        ))
        subtotals = result.breakdown.subtotals
        assert subtotals.after_traditional == 30
        assert subtotals.after_voting == 20
        assert subtotals.after_tax == 0
        assert subtotals.after_judicial == 0
        assert subtotals.final == 0
        assert result.total == 0

    def test_intermediate_subtotals_are_not_clamped(self, make_enhanced):
        result = EnhancedIntegrityCalculator().calculate(make_enhanced(
            penal_sentences=firm(2),
            voting_integrity_penalty=50,
            tax_condition=TaxCondition.NO_HABIDO,
        ))
        subtotals = result.breakdown.subtotals
        assert subtotals.after_traditional == 15
        assert subtotals.after_voting == -35
        assert subtotals.after_tax == -85
        assert result.total == 0

    def test_bonus_cannot_lift_final_above_100(self, make_enhanced):
        result = EnhancedIntegrityCalculator().calculate(make_enhanced(voting_integrity_bonus=50))
        assert result.breakdown.subtotals.after_voting == 115
        assert result.total == 100

    def test_all_sources_in_breakdown(self, make_enhanced):
        result = EnhancedIntegrityCalculator().calculate(make_enhanced(
            voting_integrity_penalty=5,
            tax_condition=TaxCondition.NO_HALLADO,
            has_judicial_discrepancy=True,
            discrepancy_severity=DiscrepancySeverity.MINOR,
            company_labor_issues=1,
        ))
        assert result.voting_penalty == 5
        assert result.tax_penalty == 20
        assert result.omission_penalty == 20
        assert result.company_penalty == 20
        assert result.breakdown.voting == -5
        assert result.breakdown.tax == -20
        assert result.breakdown.omission == -20
        assert result.breakdown.company == -20
        assert result.total == 35

    def test_keeps_traditional_fields(self, make_enhanced):
        result = EnhancedIntegrityCalculator().calculate(make_enhanced(
            civil_sentences=civil(CivilSentenceType.VIOLENCE, CivilSentenceType.VIOLENCE),
        ))
        assert result.civil_penalties[0].capped is True
        assert result.total_civil_penalty == 70
        assert result.breakdown.traditional == -70
        assert result.total == 30
