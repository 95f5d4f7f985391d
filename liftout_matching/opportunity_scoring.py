"""
Opportunity scoring from the team's side.

When a team browses opportunities the weighting changes: urgency and the
hiring company's profile replace experience and availability, and industry,
location and compensation use more forgiving rules.
"""

import logging
from typing import Dict, List, Tuple

from .config import (
    OPPORTUNITY_MATCH_WEIGHTS, SKILLS_WEIGHTS, DEFAULT_SCORES, OPPORTUNITY_SKILLS_DEFAULTS,
    INDUSTRY_COMPATIBILITY_MATRIX, INDUSTRY_PARTIAL_WORD_SCORE, OPPORTUNITY_LOCATION_SCORES,
    OPPORTUNITY_COMPENSATION_SCORES, URGENCY_SCORES, URGENCY_DEFAULT, COMPANY_QUALITY,
    OPPORTUNITY_INSIGHT_MESSAGES, OPPORTUNITY_INSIGHT_THRESHOLDS,
)
from .models import (
    CompanyRef, Opportunity, OpportunityMatchScore, OpportunityScoreBreakdown,
    RemoteStatus, Team, VerificationStatus,
)
from .scoring_engine import (
    aggregate_score, calculate_size_score, count_matched_skills, get_recommendation, round_half_up,
)

logger = logging.getLogger(__name__)


def calculate_opportunity_skills_score(team: Team, opportunity: Opportunity) -> int:
    """
    Skills score with half credit for an empty side.

    - No required or preferred skills: 70
    - Required: ratio * 70, or 35 when none are listed
    - Preferred: ratio * 30, or 15 when none are listed
    """
    team_skills = [s.lower() for s in team.skills]
    required = [s.lower() for s in opportunity.required_skills]
    preferred = [s.lower() for s in opportunity.preferred_skills]

    if not required and not preferred:
        return DEFAULT_SCORES["skills_no_requirements"]

    score = 0.0
    if required:
        score += count_matched_skills(required, team_skills) / len(required) * SKILLS_WEIGHTS["required"]
    else:
        score += OPPORTUNITY_SKILLS_DEFAULTS["no_required"]

    if preferred:
        score += count_matched_skills(preferred, team_skills) / len(preferred) * SKILLS_WEIGHTS["preferred"]
    else:
        score += OPPORTUNITY_SKILLS_DEFAULTS["no_preferred"]

    return min(round_half_up(score), 100)


def calculate_opportunity_industry_score(team: Team, opportunity: Opportunity) -> int:
    """Exact match, then the compatibility matrix in both directions, then shared words."""
    team_industry = (team.industry or "").lower()
    opportunity_industry = (opportunity.industry or "").lower()

    if not team_industry or not opportunity_industry:
        return DEFAULT_SCORES["industry_unknown"]
    if team_industry == opportunity_industry:
        return 100

    compatibility = INDUSTRY_COMPATIBILITY_MATRIX.get(team_industry, {}).get(opportunity_industry)
    if compatibility:
        return compatibility

    reverse = INDUSTRY_COMPATIBILITY_MATRIX.get(opportunity_industry, {}).get(team_industry)
    if reverse:
        return reverse

    if any(word in opportunity_industry for word in team_industry.split(" ")):
        return INDUSTRY_PARTIAL_WORD_SCORE

    return DEFAULT_SCORES["industry_unrelated"]


def _region(location: str) -> str:
    return location.split(",")[-1].strip()


def calculate_opportunity_location_score(team: Team, opportunity: Opportunity) -> int:
    scores = OPPORTUNITY_LOCATION_SCORES
    team_location = (team.location or "").lower()
    opportunity_location = (opportunity.location or "").lower()
    team_remote = team.remote_status
    opportunity_remote = opportunity.remote_policy

    if opportunity_remote == RemoteStatus.REMOTE:
        return scores["remote_opportunity"]

    if team_remote == RemoteStatus.REMOTE:
        if opportunity_remote == RemoteStatus.HYBRID:
            return scores["remote_team_hybrid"]
        if opportunity_remote == RemoteStatus.ONSITE:
            return scores["remote_team_onsite"]

    if team_remote == RemoteStatus.HYBRID or opportunity_remote == RemoteStatus.HYBRID:
        return scores["hybrid"]

    if team_location and opportunity_location:
        if team_location == opportunity_location:
            return scores["same_location"]
        if _region(team_location) == _region(opportunity_location):
            return scores["same_region"]

    return scores["other"]


def calculate_opportunity_compensation_score(team: Team, opportunity: Opportunity) -> int:
    """
    Compensation score judged against the team's expectations.

    - Either side unset: 70
    - Budget max reaches the team max: 100
    - Budget max reaches the team min: 85
    - Below the team min: 70 - (gap / team_min) * 100, floored at 20
    """
    team_min = team.salary_expectation_min or 0
    team_max = team.salary_expectation_max or 0
    opp_min = opportunity.compensation_min or 0
    opp_max = opportunity.compensation_max or 0

    if not team_min and not team_max:
        return DEFAULT_SCORES["compensation_unset"]
    if not opp_min and not opp_max:
        return DEFAULT_SCORES["compensation_unset"]

    if opp_max >= team_max:
        return OPPORTUNITY_COMPENSATION_SCORES["meets_max"]
    if opp_max >= team_min:
        return OPPORTUNITY_COMPENSATION_SCORES["meets_min"]

    gap_percent = (team_min - opp_max) / team_min
    return max(OPPORTUNITY_COMPENSATION_SCORES["floor"], round_half_up(70 - gap_percent * 100))


def calculate_urgency_score(opportunity: Opportunity) -> int:
    if opportunity.urgency is None:
        return URGENCY_DEFAULT
    return URGENCY_SCORES.get(opportunity.urgency.value, URGENCY_DEFAULT)


def calculate_company_quality(company: CompanyRef) -> int:
    score = COMPANY_QUALITY["base"]

    if company.verification_status == VerificationStatus.VERIFIED:
        score += COMPANY_QUALITY["verified"]
    elif company.verification_status == VerificationStatus.PENDING:
        score += COMPANY_QUALITY["pending"]

    if company.logo_url:
        score += COMPANY_QUALITY["logo"]
    if company.industry:
        score += COMPANY_QUALITY["industry"]

    return min(score, 100)


def extract_opportunity_insights(
    team: Team,
    opportunity: Opportunity,
    breakdown: OpportunityScoreBreakdown
) -> Tuple[List[str], List[str], List[str]]:
    """Returns (strengths, concerns, insights) for an opportunity seen by a team."""
    t = OPPORTUNITY_INSIGHT_THRESHOLDS
    messages = OPPORTUNITY_INSIGHT_MESSAGES
    strengths: List[str] = []
    concerns: List[str] = []
    insights: List[str] = []

    if breakdown.skills_match >= t["skills_strength"]:
        strengths.append(messages["skills_strength"])
    if breakdown.industry_match >= t["industry_strength"]:
        strengths.append(messages["industry_strength"])
    if breakdown.compensation_match >= t["compensation_strength"]:
        strengths.append(messages["compensation_strength"])
    if opportunity.featured:
        strengths.append(messages["featured"])
    if opportunity.company.verification_status == VerificationStatus.VERIFIED:
        strengths.append(messages["verified_company"])

    if breakdown.skills_match < t["skills_concern"]:
        concerns.append(messages["skills_concern"])
    if breakdown.industry_match < t["industry_concern"]:
        concerns.append(messages["industry_concern"])
    if breakdown.compensation_match < t["compensation_concern"]:
        concerns.append(messages["compensation_concern"])
    if breakdown.location_match < t["location_concern"]:
        concerns.append(messages["location_concern"])
    if breakdown.size_match < t["size_concern"]:
        concerns.append(messages["size_concern"])

    if breakdown.urgency_bonus >= t["urgency"]:
        insights.append(messages["urgency"])
    if opportunity.application_count > t["competitive_applications"]:
        insights.append(f"Competitive opportunity with {opportunity.application_count}+ applications")
    if team.years_together >= t["cohesion_years"]:
        insights.append(f"{team.years_together:g} years of team cohesion provides competitive advantage")

    return strengths, concerns, insights


def calculate_opportunity_breakdown(team: Team, opportunity: Opportunity) -> Dict[str, int]:
    return {
        "skills_match": calculate_opportunity_skills_score(team, opportunity),
        "industry_match": calculate_opportunity_industry_score(team, opportunity),
        "location_match": calculate_opportunity_location_score(team, opportunity),
        "size_match": calculate_size_score(team, opportunity),
        "compensation_match": calculate_opportunity_compensation_score(team, opportunity),
        "urgency_bonus": calculate_urgency_score(opportunity),
        "company_quality": calculate_company_quality(opportunity.company),
    }


def calculate_opportunity_match_score(team: Team, opportunity: Opportunity) -> OpportunityMatchScore:
    """
    Calculate how attractive an opportunity is for a team.

    Returns:
        OpportunityMatchScore with total, breakdown, recommendation,
        strengths, concerns and neutral insights
    """
    breakdown = OpportunityScoreBreakdown(**calculate_opportunity_breakdown(team, opportunity))
    total = aggregate_score(breakdown.model_dump(), OPPORTUNITY_MATCH_WEIGHTS)
    strengths, concerns, insights = extract_opportunity_insights(team, opportunity, breakdown)

    logger.info(f"Opportunity {opportunity.id} for team {team.id}: {total}")

    return OpportunityMatchScore(
        total=total,
        breakdown=breakdown,
        recommendation=get_recommendation(total),
        strengths=strengths,
        concerns=concerns,
        insights=insights,
    )
