"""Quality score and completeness computation."""

from .engine import ScoreCard, ScoringEngine, round_half_up

__all__ = ["ScoreCard", "ScoringEngine", "round_half_up"]
