#!/usr/bin/env python3
"""
Unit tests for the weighted match score and ranking helpers.
"""

import unittest
from types import SimpleNamespace

from core.config_loader import ScorerConfig
from core.scorer import (
    MatchScore,
    calculate_match_score,
    evaluate_match,
    rank_by_match,
    top_matches,
)


def make_job(**fields):
    values = dict(
        skills_required=None,
        education_required=None,
        experience_required=None,
        location=None,
        is_remote=False,
        salary_min=None,
        salary_max=None,
        salary_type=None,
    )
    values.update(fields)
    return SimpleNamespace(**values)


def make_profile(**fields):
    values = dict(
        skills=None,
        education_level=None,
        work_experience_years=None,
        current_location=None,
        expected_salary_min=None,
        expected_salary_max=None,
    )
    values.update(fields)
    return SimpleNamespace(**values)


class TestEvaluateMatch(unittest.TestCase):
    """Tests for the weighted blend."""

    def test_fully_empty_pair_is_neutral(self):
        result = evaluate_match(make_job(), make_profile())
        self.assertEqual(result.score, 50)
        self.assertTrue(result.insufficient_data)
        self.assertEqual(result.included, {})

    def test_salary_only_example(self):
        job = make_job(salary_min=8000, salary_max=12000, salary_type='monthly')
        profile = make_profile(expected_salary_min=10000, expected_salary_max=15000)

        result = evaluate_match(job, profile)

        self.assertEqual(result.score, 45)
        self.assertFalse(result.insufficient_data)
        self.assertEqual(list(result.included), ['salary'])

    def test_skill_example_contributes_twenty_weighted_points(self):
        job = make_job(skills_required=['python', 'sql'])
        profile = make_profile(skills=['Python', 'Django'])

        result = evaluate_match(job, profile)

        self.assertEqual(result.components['skills'], 0.5)
        self.assertEqual(result.score, 50)
        self.assertFalse(result.insufficient_data)

    def test_weighted_average_over_included_factors(self):
        # skills 0.5 (w40) + experience 1.0 (w20) -> 40/60 -> 67
        job = make_job(skills_required=['python', 'sql'], experience_required='junior')
        profile = make_profile(skills=['python'], work_experience_years=2)

        self.assertEqual(calculate_match_score(job, profile), 67)

    def test_rounds_half_up(self):
        config = ScorerConfig(
            weight_skills=1, weight_education=0, weight_experience=0,
            weight_location=0, weight_salary=0
        )
        job = make_job(skills_required=['a', 'b', 'c', 'd', 'e', 'f', 'g', 'h'])
        profile = make_profile(skills=['a', 'b', 'c', 'zzzz'])
        # 3 of 8 required skills -> 37.5 -> 38
        self.assertEqual(calculate_match_score(job, profile, config=config), 38)

    def test_resume_skills_are_used(self):
        job = make_job(skills_required=['python', 'sql'])
        profile = make_profile(skills=['python'])
        resume = SimpleNamespace(extracted_skills=['SQL'])

        self.assertEqual(calculate_match_score(job, profile, resume), 100)

    def test_score_is_clamped_integer(self):
        job = make_job(
            skills_required=['rust'],
            education_required='phd',
            experience_required='executive',
            location='Tokyo',
            salary_min=100, salary_max=200, salary_type='monthly'
        )
        profile = make_profile(
            skills=['cobol'],
            education_level='high_school',
            work_experience_years=0,
            current_location='Lima',
            expected_salary_min=90000, expected_salary_max=99000
        )

        score = calculate_match_score(job, profile)
        self.assertIsInstance(score, int)
        self.assertGreaterEqual(score, 0)
        self.assertLessEqual(score, 100)

    def test_custom_neutral_score(self):
        config = ScorerConfig(neutral_score=40)
        result = evaluate_match(make_job(), make_profile(), config=config)
        self.assertEqual(result.score, 40)
        self.assertTrue(result.insufficient_data)

    def test_negotiable_salary_is_full_match(self):
        job = make_job(salary_type='negotiable')
        result = evaluate_match(job, make_profile())
        self.assertEqual(result.components['salary'], 1.0)
        self.assertEqual(result.score, 100)


class TestRankByMatch(unittest.TestCase):
    """Tests for ordering scored results."""

    def test_insufficient_data_never_outranks_genuine_scores(self):
        neutral = MatchScore(score=50, insufficient_data=True)
        low = MatchScore(score=40)
        high = MatchScore(score=90)

        ranked = rank_by_match([('a', neutral), ('b', low), ('c', None), ('d', high)])

        self.assertEqual([item for item, _ in ranked], ['d', 'b', 'a', 'c'])

    def test_ties_keep_input_order(self):
        pairs = [('first', MatchScore(score=70)), ('second', MatchScore(score=70))]
        self.assertEqual([item for item, _ in rank_by_match(pairs)], ['first', 'second'])

    def test_top_matches_limits_results(self):
        pairs = [(i, MatchScore(score=i * 10)) for i in range(6)]
        best = top_matches(pairs, 2)
        self.assertEqual([item for item, _ in best], [5, 4])
        self.assertEqual(top_matches(pairs, 0), [])


if __name__ == "__main__":
    unittest.main()
