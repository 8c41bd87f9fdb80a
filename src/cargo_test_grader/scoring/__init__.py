"""Scoring domain exports."""

from .batch_scorer import round_score, score_suite
from .score_models import ScoredTest

__all__ = ["ScoredTest", "round_score", "score_suite"]
