"""
scoring/ - Candidate Scoring Engine

Modules:
    utils.py                          - Decimal utilities
    interval_merger.py                - Tenure interval merging
    education_calculator.py           - Education level + depth
    experience_calculator.py          - Total and cargo-relevant experience
    leadership_calculator.py          - Seniority + stability
    competence_calculator.py          - Competence aggregate
    integrity_calculator.py           - Penal / civil / resignation penalties
    enhanced_integrity_calculator.py  - Voting, tax, omission, company chain
    transparency_calculator.py        - Disclosure completeness, consistency, quality
    confidence_calculator.py          - Verification + coverage
    performance_calculator.py         - Incumbent performance
    weighted_combiner.py              - Presets, normalization, composite, ranking
    engine.py                         - Full pipeline (ScoringEngine, score)
"""
