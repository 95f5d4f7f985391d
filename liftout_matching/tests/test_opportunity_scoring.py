"""
Unit tests for opportunity scoring from the team's side and the preview helpers.
"""

import unittest
import logging

from liftout_matching.config import FACTOR_DISPLAY_WEIGHTS, FACTOR_LABELS, OPPORTUNITY_MATCH_WEIGHTS
from liftout_matching.models import CompanyRef, Recommendation
from liftout_matching.opportunity_scoring import (
    calculate_company_quality,
    calculate_opportunity_compensation_score,
    calculate_opportunity_industry_score,
    calculate_opportunity_location_score,
    calculate_opportunity_match_score,
    calculate_opportunity_skills_score,
    calculate_urgency_score,
)
from liftout_matching.preview import (
    calculate_preview_score,
    get_factor_label,
    get_factor_weight,
    get_match_recommendation,
)
from liftout_matching.scoring_engine import calculate_match_score
from liftout_matching.tests.samples import make_opportunity, make_team

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


class TestOpportunityComponents(unittest.TestCase):

    def test_skills_half_credit_for_empty_side(self):
        team = make_team()
        self.assertEqual(
            calculate_opportunity_skills_score(team, make_opportunity(requiredSkills=[], preferredSkills=["sql"])), 65
        )
        self.assertEqual(
            calculate_opportunity_skills_score(team, make_opportunity(requiredSkills=["python"], preferredSkills=[])), 85
        )
        self.assertEqual(
            calculate_opportunity_skills_score(team, make_opportunity(requiredSkills=[], preferredSkills=[])), 70
        )

    def test_industry_matrix(self):
        team = make_team(industry="Financial Services")
        self.assertEqual(calculate_opportunity_industry_score(team, make_opportunity(industry="investment banking")), 95)

    def test_industry_matrix_reverse(self):
        team = make_team(industry="fintech")
        self.assertEqual(calculate_opportunity_industry_score(team, make_opportunity(industry="technology")), 85)

    def test_industry_shared_word(self):
        team = make_team(industry="health insurance")
        self.assertEqual(calculate_opportunity_industry_score(team, make_opportunity(industry="healthcare")), 65)

    def test_industry_fallbacks(self):
        self.assertEqual(calculate_opportunity_industry_score(make_team(industry="retail"), make_opportunity()), 40)
        self.assertEqual(calculate_opportunity_industry_score(make_team(industry=None), make_opportunity()), 50)
        self.assertEqual(calculate_opportunity_industry_score(make_team(industry="FinTech"), make_opportunity()), 100)

    def test_location(self):
        cases = [
            ("onsite", "remote", 100),
            ("remote", "hybrid", 70),
            ("remote", "onsite", 30),
            ("hybrid", "onsite", 75),
        ]
        for team_remote, opportunity_remote, expected in cases:
            team = make_team(remoteStatus=team_remote)
            opportunity = make_opportunity(remotePolicy=opportunity_remote)
            self.assertEqual(calculate_opportunity_location_score(team, opportunity), expected)

    def test_location_same_city_and_region(self):
        team = make_team(remoteStatus="onsite", location="Austin, TX")
        self.assertEqual(
            calculate_opportunity_location_score(team, make_opportunity(location="austin, tx")), 100
        )
        self.assertEqual(
            calculate_opportunity_location_score(team, make_opportunity(location="Dallas, TX")), 70
        )
        self.assertEqual(
            calculate_opportunity_location_score(team, make_opportunity(location="Denver, CO")), 50
        )

    def test_compensation(self):
        def score(team_range, opportunity_range):
            team = make_team(salaryExpectationMin=team_range[0], salaryExpectationMax=team_range[1])
            opportunity = make_opportunity(compensationMin=opportunity_range[0], compensationMax=opportunity_range[1])
            return calculate_opportunity_compensation_score(team, opportunity)

        self.assertEqual(score((150000, 200000), (180000, 250000)), 100)
        self.assertEqual(score((150000, 200000), (100000, 170000)), 85)
        self.assertEqual(score((200000, 250000), (100000, 150000)), 45)
        self.assertEqual(score((400000, 500000), (100000, 150000)), 20)
        self.assertEqual(score((None, None), (100000, 150000)), 70)

    def test_urgency(self):
        self.assertEqual(calculate_urgency_score(make_opportunity(urgency="critical")), 100)
        self.assertEqual(calculate_urgency_score(make_opportunity(urgency="low")), 50)
        self.assertEqual(calculate_urgency_score(make_opportunity(urgency=None)), 70)
        self.assertEqual(calculate_urgency_score(make_opportunity(urgency="whenever")), 70)

    def test_company_quality(self):
        verified = CompanyRef(verificationStatus="verified", logoUrl="https://example.com/logo.png", industry="fintech")
        self.assertEqual(calculate_company_quality(verified), 100)
        self.assertEqual(calculate_company_quality(CompanyRef(verificationStatus="pending")), 60)
        self.assertEqual(calculate_company_quality(CompanyRef()), 50)


class TestOpportunityMatchScore(unittest.TestCase):

    def test_weights_sum_to_one(self):
        self.assertAlmostEqual(sum(OPPORTUNITY_MATCH_WEIGHTS.values()), 1.0)

    def test_sample_match(self):
        """
        skills 70, industry 85, location 75, size 100, compensation 100,
        urgency 70, company 60 -> 80
        """
        score = calculate_opportunity_match_score(make_team(), make_opportunity())

        self.assertEqual(score.breakdown.industry_match, 85)
        self.assertEqual(score.breakdown.location_match, 75)
        self.assertEqual(score.breakdown.company_quality, 60)
        self.assertEqual(score.total, 80)
        self.assertEqual(score.recommendation, Recommendation.GOOD)
        self.assertEqual(score.strengths, ["Compensation meets expectations"])
        self.assertEqual(score.concerns, [])
        self.assertEqual(score.insights, ["3.5 years of team cohesion provides competitive advantage"])

    def test_insights(self):
        opportunity = make_opportunity(
            urgency="high",
            applicationCount=12,
            featured=True,
            company={"name": "Acme Capital", "verificationStatus": "verified"},
        )
        score = calculate_opportunity_match_score(make_team(yearsWorkingTogether=3), opportunity)

        self.assertIn("Featured opportunity", score.strengths)
        self.assertIn("Verified company", score.strengths)
        self.assertEqual(score.insights, [
            "High urgency - faster decision process expected",
            "Competitive opportunity with 12+ applications",
            "3 years of team cohesion provides competitive advantage",
        ])

    def test_concerns(self):
        team = make_team(industry="retail", size=12, members=[], remoteStatus="remote")
        score = calculate_opportunity_match_score(team, make_opportunity())
        self.assertEqual(score.concerns, [
            "Skills gap may require training",
            "Significant industry transition",
            "Location/remote work mismatch",
            "Team size doesn't match requirements",
        ])


class TestPreview(unittest.TestCase):

    def test_preview_score(self):
        # skills 50, industry 70 (containment)
        self.assertEqual(calculate_preview_score(["Python", "SQL"], ["python", "rust"], "Technology", "tech"), 58)

    def test_preview_without_skills(self):
        self.assertEqual(calculate_preview_score([], [], "fintech", "FinTech"), 70)

    def test_preview_unrelated_industry(self):
        self.assertEqual(calculate_preview_score(["Python"], ["python"], "retail", "fintech"), 76)

    def test_match_recommendation(self):
        self.assertEqual(get_match_recommendation(90)["label"], "Excellent Match")
        self.assertEqual(get_match_recommendation(72)["tier"], "good")
        self.assertEqual(get_match_recommendation(10)["label"], "Low Match")

    def test_factor_helpers(self):
        """Factor helpers are keyed by the camelCase breakdown keys sent to clients."""
        self.assertEqual(get_factor_label("skillsMatch"), "Skills Alignment")
        self.assertEqual(get_factor_label("mystery"), "mystery")
        self.assertEqual(get_factor_label("skills_match"), "skills_match")
        self.assertEqual(get_factor_weight("availabilityMatch"), 5)
        self.assertEqual(get_factor_weight("mystery"), 10)

    def test_every_breakdown_key_has_a_label(self):
        """Each key of a dumped breakdown resolves to a label and display weight."""
        for score in (
            calculate_match_score(make_team(), make_opportunity()),
            calculate_opportunity_match_score(make_team(), make_opportunity()),
        ):
            for key in score.model_dump(by_alias=True)["breakdown"]:
                self.assertIn(key, FACTOR_LABELS)
                self.assertIn(key, FACTOR_DISPLAY_WEIGHTS)


if __name__ == "__main__":
    unittest.main()
