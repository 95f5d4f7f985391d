"""
Unit tests for the deterministic team-opportunity scoring engine.
"""

import unittest
import logging

from liftout_matching.config import MATCH_WEIGHTS
from liftout_matching.insights import extract_insights
from liftout_matching.models import Recommendation, ScoreBreakdown
from liftout_matching.scoring_engine import (
    aggregate_score,
    calculate_availability_score,
    calculate_compensation_score,
    calculate_experience_score,
    calculate_industry_score,
    calculate_location_score,
    calculate_match_score,
    calculate_size_score,
    calculate_skills_score,
    get_recommendation,
    round_half_up,
)
from liftout_matching.tests.samples import make_opportunity, make_team

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


def members_with(*skills, status="active"):
    return [{"userId": "u1", "status": status, "skills": list(skills)}]


class TestSkillsScore(unittest.TestCase):
    """Test skills scoring."""

    def test_partial_required_match(self):
        """One of two required skills, no preferred skills listed."""
        team = make_team(members=members_with("Python", "SQL"))
        opportunity = make_opportunity(requiredSkills=["python", "Machine Learning"], preferredSkills=[])
        self.assertEqual(calculate_skills_score(team, opportunity), 35)

    def test_preferred_skills_add_thirty(self):
        team = make_team(members=members_with("Python", "SQL"))
        opportunity = make_opportunity(requiredSkills=["python", "Machine Learning"], preferredSkills=["sql"])
        self.assertEqual(calculate_skills_score(team, opportunity), 65)

    def test_no_skills_listed(self):
        """An opportunity listing no skills scores 70 whatever the team has."""
        opportunity = make_opportunity(requiredSkills=[], preferredSkills=[])
        self.assertEqual(calculate_skills_score(make_team(), opportunity), 70)
        self.assertEqual(calculate_skills_score(make_team(members=[]), opportunity), 70)

    def test_substring_match_in_either_direction(self):
        """'react' is contained in 'React Native'; 'go' is contained in 'golang'."""
        team = make_team(members=members_with("React Native"))
        opportunity = make_opportunity(requiredSkills=["react", "rust"], preferredSkills=[])
        self.assertEqual(calculate_skills_score(team, opportunity), 35)

        team = make_team(members=members_with("Go"))
        opportunity = make_opportunity(requiredSkills=["golang"], preferredSkills=[])
        self.assertEqual(calculate_skills_score(team, opportunity), 70)

    def test_inactive_members_do_not_count(self):
        team = make_team(members=members_with("Python", status="inactive"))
        opportunity = make_opportunity(requiredSkills=["python"], preferredSkills=[])
        self.assertEqual(calculate_skills_score(team, opportunity), 0)

    def test_full_match(self):
        team = make_team(members=members_with("Python", "Machine Learning", "Kubernetes"))
        self.assertEqual(calculate_skills_score(team, make_opportunity()), 100)


class TestIndustryScore(unittest.TestCase):

    def test_exact_match_ignores_case(self):
        team = make_team(industry="Fintech")
        self.assertEqual(calculate_industry_score(team, make_opportunity(industry="fintech")), 100)

    def test_related_industry(self):
        """Technology teams transfer into fintech."""
        team = make_team(industry="Technology")
        self.assertEqual(calculate_industry_score(team, make_opportunity(industry="fintech")), 75)

    def test_related_industry_by_containment(self):
        team = make_team(industry="healthcare")
        self.assertEqual(calculate_industry_score(team, make_opportunity(industry="biotech")), 75)

    def test_unrelated_industry(self):
        team = make_team(industry="retail")
        self.assertEqual(calculate_industry_score(team, make_opportunity(industry="fintech")), 40)

    def test_missing_industry(self):
        self.assertEqual(calculate_industry_score(make_team(industry=None), make_opportunity()), 50)
        self.assertEqual(calculate_industry_score(make_team(), make_opportunity(industry="")), 50)


class TestLocationScore(unittest.TestCase):

    def test_both_remote(self):
        team = make_team(remoteStatus="remote")
        self.assertEqual(calculate_location_score(team, make_opportunity(remotePolicy="remote")), 100)

    def test_remote_opportunity(self):
        team = make_team(remoteStatus="onsite")
        self.assertEqual(calculate_location_score(team, make_opportunity(remotePolicy="remote")), 90)

    def test_same_location(self):
        team = make_team(remoteStatus="onsite", location="New York")
        opportunity = make_opportunity(remotePolicy="onsite", location="new york")
        self.assertEqual(calculate_location_score(team, opportunity), 100)

    def test_hybrid(self):
        team = make_team(remoteStatus="hybrid", location="Austin")
        self.assertEqual(calculate_location_score(team, make_opportunity(remotePolicy="onsite")), 70)

    def test_remote_team_onsite_role(self):
        team = make_team(remoteStatus="remote")
        self.assertEqual(calculate_location_score(team, make_opportunity(remotePolicy="onsite")), 30)

    def test_other(self):
        team = make_team(remoteStatus="onsite", location="Austin")
        self.assertEqual(calculate_location_score(team, make_opportunity(remotePolicy="onsite")), 50)
        team = make_team(remoteStatus=None, location=None)
        self.assertEqual(calculate_location_score(team, make_opportunity(remotePolicy=None, location=None)), 50)


class TestSizeScore(unittest.TestCase):

    def test_within_range_inclusive(self):
        opportunity = make_opportunity(teamSizeMin=3, teamSizeMax=6)
        for size in (3, 4, 6):
            self.assertEqual(calculate_size_score(make_team(size=size), opportunity), 100)

    def test_below_minimum(self):
        opportunity = make_opportunity(teamSizeMin=3, teamSizeMax=6)
        self.assertEqual(calculate_size_score(make_team(size=1), opportunity), 70)

    def test_above_maximum(self):
        opportunity = make_opportunity(teamSizeMin=3, teamSizeMax=6)
        self.assertEqual(calculate_size_score(make_team(size=10), opportunity), 60)
        self.assertEqual(calculate_size_score(make_team(size=20), opportunity), 0)

    def test_size_falls_back_to_member_count(self):
        """Five active members, default bounds 1..20."""
        members = [{"userId": f"u{i}", "status": "active"} for i in range(5)]
        team = make_team(size=None, members=members)
        opportunity = make_opportunity(teamSizeMin=None, teamSizeMax=None)
        self.assertEqual(calculate_size_score(team, opportunity), 100)

    def test_unknown_size(self):
        team = make_team(size=None, members=[])
        opportunity = make_opportunity(teamSizeMin=None, teamSizeMax=None)
        self.assertEqual(calculate_size_score(team, opportunity), 85)


class TestCompensationScore(unittest.TestCase):

    def score(self, team_range, opportunity_range):
        team = make_team(salaryExpectationMin=team_range[0], salaryExpectationMax=team_range[1])
        opportunity = make_opportunity(compensationMin=opportunity_range[0], compensationMax=opportunity_range[1])
        return calculate_compensation_score(team, opportunity)

    def test_unset_ranges(self):
        self.assertEqual(self.score((None, None), (100000, 200000)), 70)
        self.assertEqual(self.score((100000, 200000), (None, None)), 70)

    def test_partial_overlap(self):
        # Overlap 120k-150k is 60% of the team range: 70 + 18
        self.assertEqual(self.score((100000, 150000), (120000, 200000)), 88)

    def test_full_overlap(self):
        self.assertEqual(self.score((100000, 150000), (50000, 200000)), 100)

    def test_overlap_rounds_half_up(self):
        # 75% overlap: 70 + 22.5 = 92.5
        self.assertEqual(self.score((100000, 200000), (125000, 300000)), 93)

    def test_team_above_budget(self):
        # Gap 50k against a 200k minimum: 70 - 25
        self.assertEqual(self.score((200000, 250000), (100000, 150000)), 45)

    def test_team_below_budget(self):
        # Gap 30k against a 150k minimum: 70 - 20
        self.assertEqual(self.score((100000, 120000), (150000, 200000)), 50)

    def test_large_gap_floors_at_zero(self):
        self.assertEqual(self.score((1000000, 1200000), (100000, 150000)), 0)

    def test_inverted_team_range_stays_in_bounds(self):
        """Team minimum above its maximum gives a negative gap; the score is capped at 100."""
        self.assertEqual(self.score((200000, 100000), (None, 300000)), 100)
        for opportunity_range in [(None, 300000), (50000, 90000), (150000, 400000)]:
            score = self.score((200000, 100000), opportunity_range)
            self.assertGreaterEqual(score, 0, opportunity_range)
            self.assertLessEqual(score, 100, opportunity_range)

    def test_zero_minimum_on_one_side(self):
        # Normalised against the larger of the two minimums
        self.assertEqual(self.score((0, 100000), (150000, 200000)), 37)
        self.assertEqual(self.score((150000, 200000), (0, 100000)), 37)


class TestExperienceAndAvailability(unittest.TestCase):

    def test_experience_tiers(self):
        cases = [(5, 100), (7, 100), (4.9, 85), (3, 85), (2, 70), (1, 55), (0.5, 40), (None, 40)]
        for years, expected in cases:
            self.assertEqual(calculate_experience_score(make_team(yearsWorkingTogether=years)), expected, years)

    def test_availability(self):
        cases = [("available", 100), ("selective", 70), ("engaged", 40), ("not_available", 0), (None, 0)]
        for status, expected in cases:
            self.assertEqual(calculate_availability_score(make_team(availabilityStatus=status)), expected, status)

    def test_unknown_availability_scores_zero(self):
        team = make_team(availabilityStatus="on_sabbatical")
        self.assertIsNone(team.availability_status)
        self.assertEqual(calculate_availability_score(team), 0)


class TestAggregation(unittest.TestCase):

    def test_weights_sum_to_one(self):
        self.assertAlmostEqual(sum(MATCH_WEIGHTS.values()), 1.0)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(78.5), 79)
        self.assertEqual(round_half_up(92.5), 93)
        self.assertEqual(round_half_up(78.4), 78)

    def test_all_perfect(self):
        self.assertEqual(aggregate_score({key: 100 for key in MATCH_WEIGHTS}), 100)

    def test_recommendation_tiers(self):
        cases = [(100, "excellent"), (85, "excellent"), (84, "good"), (70, "good"),
                 (69, "fair"), (55, "fair"), (54, "poor"), (0, "poor")]
        for total, tier in cases:
            self.assertEqual(get_recommendation(total), Recommendation(tier), total)

    def test_recommendation_is_monotonic(self):
        order = ["poor", "fair", "good", "excellent"]
        ranks = [order.index(get_recommendation(total).value) for total in range(101)]
        self.assertEqual(ranks, sorted(ranks))


class TestMatchScore(unittest.TestCase):
    """Test end-to-end match scores with sample records."""

    def test_good_match(self):
        """
        skills 70, industry 75, location 70, size 100, compensation 82,
        experience 85, availability 100 -> 78.8
        """
        score = calculate_match_score(make_team(), make_opportunity())

        self.assertEqual(score.breakdown.skills_match, 70)
        self.assertEqual(score.breakdown.industry_match, 75)
        self.assertEqual(score.breakdown.location_match, 70)
        self.assertEqual(score.breakdown.size_match, 100)
        self.assertEqual(score.breakdown.compensation_match, 82)
        self.assertEqual(score.breakdown.experience_match, 85)
        self.assertEqual(score.breakdown.availability_match, 100)
        self.assertEqual(score.total, 79)
        self.assertEqual(score.recommendation, Recommendation.GOOD)
        self.assertEqual(score.strengths, ["Highly cohesive team", "Verified credentials"])
        self.assertEqual(score.concerns, [])

    def test_dumped_by_alias_uses_camel_case_keys(self):
        """Serialized scores carry the camelCase keys clients read."""
        dumped = calculate_match_score(make_team(), make_opportunity()).model_dump(by_alias=True)

        self.assertEqual(dumped["breakdown"]["skillsMatch"], 70)
        self.assertEqual(dumped["breakdown"]["availabilityMatch"], 100)
        self.assertNotIn("skills_match", dumped["breakdown"])
        self.assertEqual(set(dumped), {"total", "breakdown", "recommendation", "strengths", "concerns"})

    def test_poor_match(self):
        team = make_team(
            industry="retail",
            location="Austin",
            remoteStatus="onsite",
            size=12,
            yearsWorkingTogether=0.5,
            availabilityStatus="engaged",
            verificationStatus="pending",
            salaryExpectationMin=300000,
            salaryExpectationMax=350000,
            members=members_with("Excel"),
        )
        score = calculate_match_score(team, make_opportunity())

        self.assertEqual(score.breakdown.compensation_match, 53)
        self.assertEqual(score.total, 31)
        self.assertEqual(score.recommendation, Recommendation.POOR)
        self.assertEqual(score.strengths, [])
        self.assertEqual(score.concerns, [
            "Skills gap may require training",
            "Industry transition needed",
            "Limited shared working history",
            "Compensation expectations may not align",
            "Verification pending",
        ])

    def test_sparse_records_do_not_raise(self):
        team = make_team(
            industry=None, location=None, remoteStatus=None, size=None, yearsWorkingTogether=None,
            availabilityStatus=None, verificationStatus=None, salaryExpectationMin=None,
            salaryExpectationMax=None, members=[],
        )
        opportunity = make_opportunity(
            industry=None, location=None, remotePolicy=None, teamSizeMin=None, teamSizeMax=None,
            compensationMin=None, compensationMax=None, requiredSkills=None, preferredSkills=None,
        )
        score = calculate_match_score(team, opportunity)
        self.assertGreaterEqual(score.total, 0)
        self.assertLessEqual(score.total, 100)
        self.assertEqual(score.breakdown.skills_match, 70)


class TestInsights(unittest.TestCase):

    def breakdown(self, **overrides):
        values = {key: 70 for key in MATCH_WEIGHTS}
        values.update(overrides)
        return ScoreBreakdown(**values)

    def test_strengths_in_rule_order(self):
        breakdown = self.breakdown(skills_match=95, industry_match=100, experience_match=100)
        strengths, concerns = extract_insights(make_team(), breakdown)
        self.assertEqual(strengths, [
            "Exceptional skills alignment",
            "Direct industry experience",
            "Highly cohesive team",
            "Verified credentials",
        ])
        self.assertEqual(concerns, [])

    def test_location_concern(self):
        _, concerns = extract_insights(make_team(verificationStatus=None), self.breakdown(location_match=30))
        self.assertEqual(concerns, ["Location/remote work mismatch"])

    def test_unverified_adds_nothing(self):
        strengths, concerns = extract_insights(make_team(verificationStatus="unverified"), self.breakdown())
        self.assertEqual((strengths, concerns), ([], []))


class TestDeterminism(unittest.TestCase):
    """Test that scoring is deterministic."""

    def test_match_score_determinism(self):
        team, opportunity = make_team(), make_opportunity()
        self.assertEqual(calculate_match_score(team, opportunity), calculate_match_score(team, opportunity))


if __name__ == "__main__":
    unittest.main()
