#!/usr/bin/env python3
"""
Scoring Models - Data structures for match scoring results.
"""

from typing import Dict, Optional
from dataclasses import dataclass, field


COMPONENT_NAMES = ('skills', 'education', 'experience', 'location', 'salary')


@dataclass(frozen=True)
class MatchScore:
    """Compatibility of one seeker with one job.

    components maps each sub-score name to a value in [0, 1], or None when the
    sub-score could not be computed and was left out of the blend.
    """
    score: int
    components: Dict[str, Optional[float]] = field(default_factory=dict)
    insufficient_data: bool = False

    @property
    def included(self) -> Dict[str, float]:
        return {k: v for k, v in self.components.items() if v is not None}

    def to_dict(self) -> Dict[str, object]:
        return {
            'score': self.score,
            'components': dict(self.components),
            'insufficient_data': self.insufficient_data,
        }
