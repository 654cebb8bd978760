#!/usr/bin/env python3
"""
Scoring Module - job/seeker compatibility scoring.

Public API:
- calculate_match_score: 0-100 integer score for a (job, seeker) pair
- evaluate_match: same, with the per-factor breakdown
- rank_by_match: ordering helper that keeps "insufficient data" results
  below genuine matches
- MatchScore: dataclass for scored results

Modules:
- models.py: Data structures (MatchScore)
- components.py: The five sub-score calculations
- match_score.py: Weighted blend and ranking
"""

from core.scorer.models import MatchScore
from core.scorer.match_score import (
    calculate_match_score,
    calculate_components,
    evaluate_match,
    rank_by_match,
    top_matches,
)

__all__ = [
    'MatchScore',
    'calculate_match_score',
    'calculate_components',
    'evaluate_match',
    'rank_by_match',
    'top_matches',
]
