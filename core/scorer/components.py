#!/usr/bin/env python3
"""
Sub-score Calculations - the five independently normalized match factors.

Each function returns a float in [0, 1], or None when the inputs do not allow
the factor to be computed. None means "leave this factor out of the blend",
which is different from 0.0 ("computed, and it is a mismatch").

Factors:
- Skills: required skills vs. profile + resume skills
- Education: ordinal degree comparison
- Experience: years vs. seniority threshold
- Location: string heuristics (remote always matches)
- Salary: overlap of expected and offered ranges
"""

from typing import Any, Iterable, List, Optional, Set
import logging

logger = logging.getLogger(__name__)

EDUCATION_LEVELS = {
    'none': 0,
    'high_school': 1,
    'associate': 2,
    'bachelor': 3,
    'master': 4,
    'phd': 5,
}

EXPERIENCE_YEARS = {
    'entry': 0,
    'junior': 1,
    'mid': 3,
    'mid-level': 3,
    'senior': 5,
    'executive': 8,
}

EXACT_SKILL_CREDIT = 1.0
PARTIAL_SKILL_CREDIT = 0.7

EDUCATION_GAP_PENALTY = 0.3
EXPERIENCE_GAP_PENALTY = 0.2

LOCATION_EXACT = 1.0
LOCATION_CONTAINS = 0.8
LOCATION_SAME_REGION = 0.6
LOCATION_FLOOR = 0.3

SALARY_GAP_TOLERANCE = 0.3  # fraction of job_max beyond which a gap scores 0
SALARY_GAP_CEILING = 0.5


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric value %r", value)
        return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


def normalize_skills(*skill_lists: Optional[Iterable[Any]]) -> Set[str]:
    """Union skill lists case-insensitively, dropping blanks."""
    skills: Set[str] = set()
    for skill_list in skill_lists:
        if not skill_list:
            continue
        for skill in skill_list:
            text = _text(skill)
            if text:
                skills.add(text)
    return skills


def calculate_skill_match(
    required_skills: Optional[List[Any]],
    seeker_skills: Set[str],
) -> Optional[float]:
    if required_skills is None:
        return None
    if isinstance(required_skills, (str, bytes)) or not hasattr(required_skills, '__iter__'):
        logger.debug("Unusable skills_required %r", required_skills)
        return None

    required = [s for s in (_text(skill) for skill in required_skills) if s]
    if not required:
        return 1.0
    if not seeker_skills:
        return 0.0

    matched = 0.0
    for skill in required:
        if skill in seeker_skills:
            matched += EXACT_SKILL_CREDIT
        elif any(skill in own or own in skill for own in seeker_skills):
            matched += PARTIAL_SKILL_CREDIT

    return min(matched / len(required), 1.0)


def calculate_education_match(required: Any, seeker_level: Any) -> Optional[float]:
    # Unset seeker level omits the factor, even when the job requires nothing
    seeker_key = _text(seeker_level)
    if seeker_key is None:
        return None

    required_key = _text(required)
    if required_key is None or required_key == 'none':
        return 1.0

    required_rank = EDUCATION_LEVELS.get(required_key, 0)
    seeker_rank = EDUCATION_LEVELS.get(seeker_key, 0)

    if seeker_rank >= required_rank:
        return 1.0
    return max(0.0, 1.0 - EDUCATION_GAP_PENALTY * (required_rank - seeker_rank))


def experience_threshold(required: Any) -> Optional[float]:
    """Minimum years for a requirement given as a label or as a number."""
    years = _number(required)
    if years is not None:
        return max(0.0, years)

    label = _text(required)
    if label is None:
        return None
    return float(EXPERIENCE_YEARS.get(label, 0))


def calculate_experience_match(required: Any, seeker_years: Any) -> Optional[float]:
    threshold = experience_threshold(required)
    years = _number(seeker_years)
    if threshold is None or years is None:
        return None

    if years >= threshold:
        return 1.0
    return max(0.0, 1.0 - EXPERIENCE_GAP_PENALTY * (threshold - years))


def calculate_location_match(
    job_location: Any,
    is_remote: Any,
    seeker_location: Any,
) -> Optional[float]:
    job_loc = _text(job_location)
    seeker_loc = _text(seeker_location)
    if job_loc is None or seeker_loc is None:
        return None

    if is_remote:
        return 1.0
    if job_loc == seeker_loc:
        return LOCATION_EXACT
    if job_loc in seeker_loc or seeker_loc in job_loc:
        return LOCATION_CONTAINS

    # Leading token as a coarse region proxy ("Shanghai Pudong" vs "Shanghai Minhang")
    if job_loc.split(' ', 1)[0] == seeker_loc.split(' ', 1)[0]:
        return LOCATION_SAME_REGION

    return LOCATION_FLOOR


def calculate_salary_match(
    job_min: Any,
    job_max: Any,
    salary_type: Any,
    seeker_min: Any,
    seeker_max: Any,
) -> Optional[float]:
    if _text(salary_type) == 'negotiable':
        return 1.0

    bounds = [_number(v) for v in (job_min, job_max, seeker_min, seeker_max)]
    if any(b is None for b in bounds):
        return None
    j_min, j_max, s_min, s_max = bounds

    overlap_start = max(j_min, s_min)
    overlap_end = min(j_max, s_max)

    if overlap_start > overlap_end:
        if j_max <= 0:
            return 0.0
        gap = min(abs(j_min - s_max), abs(s_min - j_max))
        if gap > j_max * SALARY_GAP_TOLERANCE:
            return 0.0
        return max(0.0, SALARY_GAP_CEILING - (gap / j_max) * SALARY_GAP_CEILING)

    overlap = overlap_end - overlap_start
    job_range = j_max - j_min
    seeker_range = s_max - s_min

    job_ratio = overlap / job_range if job_range > 0 else 0.0
    seeker_ratio = overlap / seeker_range if seeker_range > 0 else 0.0

    return (job_ratio + seeker_ratio) / 2
