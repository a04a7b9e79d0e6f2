# tests/test_competence.py

"""
Competence Tests - education, interval merging, experience, leadership
"""

from decimal import Decimal

import pytest

from electoral_scoring.models import CandidateData, ExperienceRecord
from electoral_scoring.models.enumerations import (
    CargoType,
    EducationLevel,
    RoleType,
    SeniorityLevel,
)
from electoral_scoring.scoring.competence_calculator import CompetenceCalculator
from electoral_scoring.scoring.education_calculator import EDUCATION_POINTS, EducationCalculator
from electoral_scoring.scoring.experience_calculator import RELEVANCE_BY_CARGO, ExperienceCalculator
from electoral_scoring.scoring.interval_merger import ExperienceIntervalMerger
from electoral_scoring.scoring.leadership_calculator import LeadershipCalculator

REFERENCE_YEAR = 2026


# EDUCATION


class TestEducationCalculator:
    """Tests for level + depth education scoring."""

    def test_empty_education_scores_zero(self):
        result = EducationCalculator().calculate([])
        assert (result.level, result.depth, result.total) == (0, 0, 0)

    @pytest.mark.parametrize("level,expected", [
        (EducationLevel.SIN_INFORMACION, 0),
        (EducationLevel.PRIMARIA, 2),
        (EducationLevel.SECUNDARIA_COMPLETA, 6),
        (EducationLevel.TECNICO_COMPLETO, 10),
        (EducationLevel.UNIVERSITARIO_INCOMPLETO, 9),
        (EducationLevel.UNIVERSITARIO_COMPLETO, 14),
        (EducationLevel.MAESTRIA, 18),
        (EducationLevel.DOCTORADO, 22),
    ])
    def test_single_record_level_points(self, make_education, level, expected):
        result = EducationCalculator().calculate([make_education(level)])
        assert result.level == expected
        assert result.depth == 0
        assert result.total == expected

    def test_every_level_has_points(self):
        assert set(EDUCATION_POINTS) == set(EducationLevel)

    def test_five_degrees_hit_the_cap(self, make_education):
        """22 level + 4 extra degrees ≥ 10 points → depth capped at 8 → total 30."""
        records = [
            make_education(EducationLevel.DOCTORADO),
            make_education(EducationLevel.MAESTRIA),
            make_education(EducationLevel.TITULO_PROFESIONAL),
            make_education(EducationLevel.UNIVERSITARIO_COMPLETO),
            make_education(EducationLevel.TECNICO_COMPLETO),
        ]
        result = EducationCalculator().calculate(records)
        assert result.level == 22
        assert result.depth == 8
        assert result.total == 30

    def test_depth_ignores_records_below_ten_points(self, make_education):
        records = [
            make_education(EducationLevel.MAESTRIA),
            make_education(EducationLevel.UNIVERSITARIO_INCOMPLETO),  # 9
            make_education(EducationLevel.SECUNDARIA_COMPLETA),       # 6
        ]
        result = EducationCalculator().calculate(records)
        assert result.depth == 0
        assert result.total == 18

    def test_depth_counts_only_records_after_the_top_one(self, make_education):
        records = [
            make_education(EducationLevel.TITULO_PROFESIONAL),
            make_education(EducationLevel.MAESTRIA),
        ]
        result = EducationCalculator().calculate(records)
        assert result.level == 18
        assert result.depth == 2
        assert result.total == 20


# INTERVAL MERGER


class TestExperienceIntervalMerger:
    """Tests for tenure merging."""

    def test_fully_overlapping_tenures(self):
        result = ExperienceIntervalMerger().merge([(2010, 2020), (2012, 2016)], REFERENCE_YEAR)
        assert result.unique_years == 10
        assert result.raw_years == 14
        assert result.has_overlap is True
        assert len(result.intervals) == 1

    def test_adjacent_tenures_merge_without_overlap(self):
        result = ExperienceIntervalMerger().merge([(2015, 2020), (2010, 2015)], REFERENCE_YEAR)
        assert len(result.intervals) == 1
        assert result.intervals[0].start == 2010
        assert result.intervals[0].end == 2020
        assert result.unique_years == 10
        assert result.has_overlap is False

    def test_disjoint_tenures_stay_separate(self):
        result = ExperienceIntervalMerger().merge([(2000, 2004), (2010, 2012)], REFERENCE_YEAR)
        assert len(result.intervals) == 2
        assert result.unique_years == 6

    def test_open_end_uses_reference_year(self):
        assert ExperienceIntervalMerger().merge([(2020, None)], 2026).unique_years == 6
        assert ExperienceIntervalMerger().merge([(2020, None)], 2022).unique_years == 2

    def test_inverted_span_counts_zero_years(self):
        result = ExperienceIntervalMerger().merge([(2020, 2015), (2010, 2012)], REFERENCE_YEAR)
        assert result.raw_years == 2
        assert result.unique_years == 2

    def test_empty_input(self):
        result = ExperienceIntervalMerger().merge([], REFERENCE_YEAR)
        assert result.intervals == []
        assert result.unique_years == 0
        assert result.has_overlap is False


# EXPERIENCE


class TestExperienceCalculator:
    """Tests for total and cargo-relevant experience."""

    @pytest.mark.parametrize("years,expected", [
        (0, 0), (1, 0), (2, 6), (4, 6), (5, 12), (7, 12),
        (8, 16), (10, 16), (11, 20), (14, 20), (15, 25), (30, 25),
    ])
    def test_total_tiers(self, make_experience, years, expected):
        exp = [make_experience(start_year=2000, end_year=2000 + years)]
        result = ExperienceCalculator().calculate(exp, CargoType.SENADOR, REFERENCE_YEAR)
        assert result.experience_total == expected

    def test_total_uses_merged_years(self, make_experience):
        exp = [
            make_experience(start_year=2010, end_year=2020),
            make_experience(start_year=2012, end_year=2016),
        ]
        result = ExperienceCalculator().calculate(exp, CargoType.DIPUTADO, REFERENCE_YEAR)
        assert result.unique_years == 10
        assert result.experience_total == 16
        assert result.has_overlap is True

    def test_ten_year_electivo_alto_for_presidente_caps_at_25(self, make_experience):
        exp = [make_experience(role_type=RoleType.ELECTIVO_ALTO, start_year=2016, end_year=2026)]
        result = ExperienceCalculator().calculate(exp, CargoType.PRESIDENTE, REFERENCE_YEAR)
        assert result.experience_relevant == 25

    def test_parlamento_andino_weights_electivo_alto_lower(self, make_experience):
        exp = [make_experience(role_type=RoleType.ELECTIVO_ALTO, start_year=2020, end_year=2026)]
        result = ExperienceCalculator().calculate(exp, CargoType.PARLAMENTO_ANDINO, REFERENCE_YEAR)
        assert result.experience_relevant == Decimal("13.2")

    def test_per_record_years_capped_at_ten(self, make_experience):
        exp = [make_experience(role_type=RoleType.PARTIDARIO, start_year=1990, end_year=2026)]
        result = ExperienceCalculator().calculate(exp, CargoType.PRESIDENTE, REFERENCE_YEAR)
        assert result.experience_relevant == Decimal("6")  # 10 × 0.6

    def test_relevance_is_summed_per_record(self, make_experience):
        exp = [
            make_experience(role_type=RoleType.ACADEMIA, start_year=2020, end_year=2024),
            make_experience(role_type=RoleType.ACADEMIA, start_year=2020, end_year=2024),
        ]
        result = ExperienceCalculator().calculate(exp, CargoType.SENADOR, REFERENCE_YEAR)
        assert result.experience_relevant == Decimal("11.2")  # 2 × 4 × 1.4

    def test_empty_experience(self):
        result = ExperienceCalculator().calculate([], CargoType.PRESIDENTE, REFERENCE_YEAR)
        assert result.experience_total == 0
        assert result.experience_relevant == 0

    def test_relevance_table_is_complete(self):
        for cargo in CargoType:
            assert set(RELEVANCE_BY_CARGO[cargo]) == set(RoleType)


# LEADERSHIP


class TestLeadershipCalculator:
    """Tests for seniority + stability."""

    def test_no_leadership_records(self, make_experience):
        result = LeadershipCalculator().calculate([make_experience()], REFERENCE_YEAR)
        assert (result.seniority, result.stability, result.total) == (0, 0, 0)

    def test_leadership_without_seniority_is_ignored(self, make_experience):
        exp = [make_experience(is_leadership=True, seniority_level=None)]
        assert LeadershipCalculator().calculate(exp, REFERENCE_YEAR).total == 0

    @pytest.mark.parametrize("years,expected", [(1, 0), (2, 2), (3, 2), (4, 4), (6, 4), (7, 6), (20, 6)])
    def test_stability_tiers(self, make_experience, years, expected):
        exp = [make_experience(
            is_leadership=True,
            seniority_level=SeniorityLevel.JEFATURA,
            start_year=2000,
            end_year=2000 + years,
        )]
        result = LeadershipCalculator().calculate(exp, REFERENCE_YEAR)
        assert result.seniority == 8
        assert result.stability == expected

    def test_uses_highest_seniority_and_merged_years(self, make_experience):
        exp = [
            make_experience(is_leadership=True, seniority_level=SeniorityLevel.DIRECCION,
                            start_year=2010, end_year=2015),
            make_experience(is_leadership=True, seniority_level=SeniorityLevel.COORDINADOR,
                            start_year=2012, end_year=2018),
        ]
        result = LeadershipCalculator().calculate(exp, REFERENCE_YEAR)
        assert result.seniority == 14
        assert result.leadership_years == 8
        assert result.stability == 6
        assert result.total == 20


# COMPETENCE


class TestCompetenceCalculator:
    """Tests for the competence aggregate."""

    def test_sums_all_components(self, make_education, make_experience):
        data = CandidateData(
            education=[make_education(EducationLevel.MAESTRIA)],
            experience=[make_experience(
                start_year=2016,
                end_year=2026,
                is_leadership=True,
                seniority_level=SeniorityLevel.GERENCIA,
            )],
        )
        result = CompetenceCalculator().calculate(data, CargoType.PRESIDENTE, REFERENCE_YEAR)
        assert result.education.total == 18
        assert result.experience_total == 16
        assert result.experience_relevant == 25
        assert result.leadership.seniority == 10
        assert result.leadership.stability == 6
        assert result.total == 75

    def test_caps_at_100(self, make_education):
        data = CandidateData(
            education=[make_education(EducationLevel.DOCTORADO)] * 5,
            experience=[ExperienceRecord(
                role_type=RoleType.ELECTIVO_ALTO,
                start_year=2000,
                end_year=2026,
                is_leadership=True,
                seniority_level=SeniorityLevel.DIRECCION,
            )],
        )
        result = CompetenceCalculator().calculate(data, CargoType.PRESIDENTE, REFERENCE_YEAR)
        assert result.total == 100

    def test_empty_candidate_scores_zero(self):
        result = CompetenceCalculator().calculate(CandidateData(), CargoType.SENADOR, REFERENCE_YEAR)
        assert result.total == 0
