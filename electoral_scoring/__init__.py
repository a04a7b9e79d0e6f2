"""
Ranking Electoral - candidate scoring engine.

    from electoral_scoring import score
    result = score(candidate, "senador", reference_year=2026)
    result.scores["balanced"]
"""

__version__ = "1.0.0"

from electoral_scoring.scoring.engine import ScoreResult, ScoringEngine, score

__all__ = ["ScoreResult", "ScoringEngine", "score", "__version__"]
