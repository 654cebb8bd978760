#!/usr/bin/env python3
"""
Match Score - weighted blend of the five sub-scores.

Key behavior:
- Each sub-score is normalized to [0, 1] before weighting.
- Sub-scores that cannot be computed are left out; the remaining weights are
  renormalized so missing profile data neither helps nor hurts.
- When nothing is computable the neutral score is returned and the result is
  flagged as insufficient data. Callers ranking results must not treat that
  neutral value as a genuine mid-quality match (see rank_by_match).

Inputs are read by attribute, so ORM rows (Job, SeekerProfile, Resume) and
plain objects with the same field names both work.
"""

import math
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from core.config_loader import ScorerConfig
from core.scorer.models import MatchScore, COMPONENT_NAMES
from core.scorer.components import (
    normalize_skills,
    calculate_skill_match,
    calculate_education_match,
    calculate_experience_match,
    calculate_location_match,
    calculate_salary_match,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

_DEFAULT_CONFIG = ScorerConfig()


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def calculate_components(job: Any, profile: Any, resume: Any = None) -> Dict[str, Optional[float]]:
    """Compute every sub-score; None marks a factor that was left out."""
    seeker_skills = normalize_skills(
        getattr(profile, 'skills', None),
        getattr(resume, 'extracted_skills', None) if resume is not None else None,
    )

    return {
        'skills': calculate_skill_match(
            getattr(job, 'skills_required', None),
            seeker_skills,
        ),
        'education': calculate_education_match(
            getattr(job, 'education_required', None),
            getattr(profile, 'education_level', None),
        ),
        'experience': calculate_experience_match(
            getattr(job, 'experience_required', None),
            getattr(profile, 'work_experience_years', None),
        ),
        'location': calculate_location_match(
            getattr(job, 'location', None),
            getattr(job, 'is_remote', False),
            getattr(profile, 'current_location', None),
        ),
        'salary': calculate_salary_match(
            getattr(job, 'salary_min', None),
            getattr(job, 'salary_max', None),
            getattr(job, 'salary_type', None),
            getattr(profile, 'expected_salary_min', None),
            getattr(profile, 'expected_salary_max', None),
        ),
    }


def evaluate_match(
    job: Any,
    profile: Any,
    resume: Any = None,
    config: Optional[ScorerConfig] = None,
) -> MatchScore:
    """
    Score a seeker against a job.

    Args:
        job: Job being evaluated
        profile: Seeker profile
        resume: Optional resume whose extracted skills supplement the profile
        config: Scorer weights; defaults when omitted

    Returns:
        MatchScore with the final 0-100 score and its sub-scores
    """
    config = config or _DEFAULT_CONFIG
    weights = config.weights()
    components = calculate_components(job, profile, resume)

    weighted_sum = 0.0
    total_weight = 0.0
    for name in COMPONENT_NAMES:
        value = components.get(name)
        weight = max(0.0, weights.get(name, 0.0))
        if value is None or weight == 0.0:
            continue
        weighted_sum += weight * value
        total_weight += weight

    if total_weight == 0.0:
        return MatchScore(
            score=config.neutral_score,
            components=components,
            insufficient_data=True,
        )

    score = _round_half_up(100.0 * weighted_sum / total_weight)
    score = min(max(score, 0), 100)

    return MatchScore(score=score, components=components)


def calculate_match_score(
    job: Any,
    profile: Any,
    resume: Any = None,
    config: Optional[ScorerConfig] = None,
) -> int:
    return evaluate_match(job, profile, resume, config).score


def _rank_key(pair: Tuple[Any, Optional[MatchScore]]) -> Tuple[int, int]:
    match = pair[1]
    if match is None:
        return (2, 0)
    if match.insufficient_data:
        return (1, 0)
    return (0, -match.score)


def rank_by_match(
    pairs: Iterable[Tuple[T, Optional[MatchScore]]]
) -> List[Tuple[T, Optional[MatchScore]]]:
    """
    Order (item, match) pairs best match first.

    Genuine scores come first (highest score first), then insufficient-data
    results, then unscored items. The sort is stable within each band.
    """
    return sorted(pairs, key=_rank_key)


def top_matches(
    pairs: Sequence[Tuple[T, Optional[MatchScore]]],
    limit: int,
) -> List[Tuple[T, Optional[MatchScore]]]:
    return rank_by_match(pairs)[:max(0, limit)]
