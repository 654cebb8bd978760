#!/usr/bin/env python3
"""
Unit tests for the five match sub-scores.
"""

import unittest

from core.scorer.components import (
    normalize_skills,
    calculate_skill_match,
    calculate_education_match,
    calculate_experience_match,
    calculate_location_match,
    calculate_salary_match,
    experience_threshold,
)


class TestSkillMatch(unittest.TestCase):

    def test_empty_requirement_is_full_match(self):
        self.assertEqual(calculate_skill_match([], set()), 1.0)
        self.assertEqual(calculate_skill_match([], {'python'}), 1.0)

    def test_absent_requirement_is_omitted(self):
        self.assertIsNone(calculate_skill_match(None, {'python'}))

    def test_seeker_without_skills_scores_zero(self):
        self.assertEqual(calculate_skill_match(['python'], set()), 0.0)

    def test_exact_matches_are_case_insensitive(self):
        seeker = normalize_skills(['Python', 'Django'])
        self.assertEqual(calculate_skill_match(['python', 'sql'], seeker), 0.5)

    def test_containment_earns_partial_credit(self):
        seeker = normalize_skills(['React Native'])
        self.assertAlmostEqual(calculate_skill_match(['react'], seeker), 0.7)

    def test_ratio_is_capped_at_one(self):
        seeker = normalize_skills(['java', 'javascript'])
        self.assertEqual(calculate_skill_match(['java'], seeker), 1.0)

    def test_resume_skills_supplement_profile(self):
        seeker = normalize_skills(['python'], ['SQL', '  '])
        self.assertEqual(seeker, {'python', 'sql'})
        self.assertEqual(calculate_skill_match(['python', 'sql'], seeker), 1.0)

    def test_string_requirement_is_rejected(self):
        self.assertIsNone(calculate_skill_match("python", {'python'}))


class TestEducationMatch(unittest.TestCase):

    def test_meeting_or_exceeding_requirement(self):
        levels = ['none', 'high_school', 'associate', 'bachelor', 'master', 'phd']
        for i, required in enumerate(levels):
            for seeker in levels[i:]:
                with self.subTest(required=required, seeker=seeker):
                    self.assertEqual(calculate_education_match(required, seeker), 1.0)

    def test_gap_penalty(self):
        self.assertAlmostEqual(calculate_education_match('master', 'bachelor'), 0.7)
        self.assertAlmostEqual(calculate_education_match('bachelor', 'high_school'), 0.4)

    def test_penalty_floors_at_zero(self):
        self.assertEqual(calculate_education_match('phd', 'high_school'), 0.0)

    def test_no_requirement(self):
        self.assertEqual(calculate_education_match(None, 'high_school'), 1.0)
        self.assertEqual(calculate_education_match('none', 'bachelor'), 1.0)

    def test_unset_seeker_level_is_omitted(self):
        self.assertIsNone(calculate_education_match('bachelor', None))
        self.assertIsNone(calculate_education_match('none', None))


class TestExperienceMatch(unittest.TestCase):

    def test_thresholds(self):
        self.assertEqual(experience_threshold('entry'), 0.0)
        self.assertEqual(experience_threshold('junior'), 1.0)
        self.assertEqual(experience_threshold('mid-level'), 3.0)
        self.assertEqual(experience_threshold('mid'), 3.0)
        self.assertEqual(experience_threshold('senior'), 5.0)
        self.assertEqual(experience_threshold('executive'), 8.0)
        self.assertEqual(experience_threshold('4'), 4.0)
        self.assertIsNone(experience_threshold(None))

    def test_meeting_threshold(self):
        self.assertEqual(calculate_experience_match('senior', 5), 1.0)
        self.assertEqual(calculate_experience_match('entry', 0), 1.0)

    def test_gap_penalty(self):
        self.assertAlmostEqual(calculate_experience_match('senior', 3), 0.6)
        self.assertAlmostEqual(calculate_experience_match(3, 1), 0.6)

    def test_penalty_floors_at_zero(self):
        self.assertEqual(calculate_experience_match('executive', 0), 0.0)

    def test_missing_side_is_omitted(self):
        self.assertIsNone(calculate_experience_match('senior', None))
        self.assertIsNone(calculate_experience_match(None, 4))


class TestLocationMatch(unittest.TestCase):

    def test_remote_job_always_matches(self):
        self.assertEqual(calculate_location_match('Tokyo', True, 'Berlin'), 1.0)

    def test_absent_location_is_omitted_even_for_remote(self):
        self.assertIsNone(calculate_location_match('Tokyo', True, None))
        self.assertIsNone(calculate_location_match(None, False, 'Berlin'))

    def test_heuristic_tiers(self):
        self.assertEqual(calculate_location_match('Berlin', False, 'berlin'), 1.0)
        self.assertEqual(calculate_location_match('Berlin', False, 'Berlin, Germany'), 0.8)
        self.assertEqual(calculate_location_match('Shanghai Pudong', False, 'Shanghai Minhang'), 0.6)
        self.assertEqual(calculate_location_match('Tokyo', False, 'Osaka'), 0.3)


class TestSalaryMatch(unittest.TestCase):

    def test_overlapping_ranges(self):
        score = calculate_salary_match(8000, 12000, 'monthly', 10000, 15000)
        self.assertAlmostEqual(score, 0.45)

    def test_negotiable_ignores_ranges(self):
        self.assertEqual(calculate_salary_match(None, None, 'negotiable', None, None), 1.0)
        self.assertEqual(calculate_salary_match(1000, 2000, 'negotiable', 50000, 90000), 1.0)

    def test_missing_bound_is_omitted(self):
        self.assertIsNone(calculate_salary_match(8000, 12000, 'monthly', 10000, None))
        self.assertIsNone(calculate_salary_match(None, 12000, 'monthly', 10000, 15000))

    def test_small_gap_decays(self):
        score = calculate_salary_match(8000, 10000, 'monthly', 11000, 13000)
        self.assertAlmostEqual(score, 0.45)

    def test_large_gap_scores_zero(self):
        self.assertEqual(calculate_salary_match(8000, 10000, 'monthly', 20000, 25000), 0.0)

    def test_zero_width_range_contributes_nothing(self):
        # overlap 0 at the shared point: both ratios are 0
        self.assertEqual(calculate_salary_match(10000, 10000, 'monthly', 10000, 10000), 0.0)


if __name__ == "__main__":
    unittest.main()
