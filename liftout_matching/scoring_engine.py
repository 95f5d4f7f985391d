"""
Deterministic Scoring Engine

Scores how well a team fits an opportunity across seven dimensions and
combines them into a single 0-100 match score.

All scoring functions are deterministic - same inputs produce same outputs.
Missing fields never raise; they fall back to the neutral defaults in config.
"""

import logging
import math
from typing import Dict, Iterable, List, Mapping

from .config import (
    MATCH_WEIGHTS, SKILLS_WEIGHTS, RECOMMENDATION_THRESHOLDS, RECOMMENDATION_FLOOR,
    DEFAULT_SCORES, LOCATION_SCORES, SIZE_DEFAULTS, SIZE_PENALTIES,
    COMPENSATION_BASE, COMPENSATION_OVERLAP_BONUS, INDUSTRY_ADJACENCY,
    EXPERIENCE_SCORES, EXPERIENCE_FLOOR, AVAILABILITY_SCORES,
)
from .insights import extract_insights
from .models import (
    MatchScore, Opportunity, Recommendation, RemoteStatus, ScoreBreakdown, Team,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_half_up(value)))


def skill_matches(skill: str, candidate_skills: Iterable[str]) -> bool:
    """A skill matches when either lower-cased name contains the other."""
    return any(c in skill or skill in c for c in candidate_skills)


def count_matched_skills(wanted: List[str], have: List[str]) -> int:
    return sum(1 for skill in wanted if skill_matches(skill, have))


def calculate_skills_score(team: Team, opportunity: Opportunity) -> int:
    """
    Calculate skills match score (0-100).

    Formula:
    - No required or preferred skills: 70
    - (matched_required / total_required) * 70
      + (matched_preferred / total_preferred) * 30

    A team skill matches when it contains, or is contained in, the wanted
    skill (case-insensitive). An empty list contributes 0.
    """
    team_skills = [s.lower() for s in team.skills]
    required = [s.lower() for s in opportunity.required_skills]
    preferred = [s.lower() for s in opportunity.preferred_skills]

    if not required and not preferred:
        logger.debug(f"No skills specified on opportunity, score = {DEFAULT_SCORES['skills_no_requirements']}")
        return DEFAULT_SCORES["skills_no_requirements"]

    matched_required = count_matched_skills(required, team_skills)
    matched_preferred = count_matched_skills(preferred, team_skills)
    logger.debug(f"Required skills: {matched_required}/{len(required)}, "
                 f"preferred skills: {matched_preferred}/{len(preferred)}")

    score = (
        matched_required / max(len(required), 1) * SKILLS_WEIGHTS["required"] +
        matched_preferred / max(len(preferred), 1) * SKILLS_WEIGHTS["preferred"]
    )
    return clamp_score(score)


def is_related_industry(team_industry: str, opportunity_industry: str) -> bool:
    """Check the adjacency table for an industry the team can transfer into."""
    related = INDUSTRY_ADJACENCY.get(team_industry, [])
    return any(opportunity_industry in r or r in opportunity_industry for r in related)


def calculate_industry_score(team: Team, opportunity: Opportunity) -> int:
    """
    Calculate industry match score (0-100).

    - Either industry missing: 50
    - Exact (case-insensitive) match: 100
    - Listed as a related industry: 75
    - Otherwise: 40
    """
    team_industry = (team.industry or "").lower()
    opportunity_industry = (opportunity.industry or "").lower()

    if not team_industry or not opportunity_industry:
        return DEFAULT_SCORES["industry_unknown"]
    if team_industry == opportunity_industry:
        return 100
    if is_related_industry(team_industry, opportunity_industry):
        logger.debug(f"Industry: {team_industry} related to {opportunity_industry}")
        return DEFAULT_SCORES["industry_related"]
    return DEFAULT_SCORES["industry_unrelated"]


def calculate_location_score(team: Team, opportunity: Opportunity) -> int:
    """
    Calculate location / remote-policy match score (0-100).

    Rules are checked in order: both remote, remote opportunity, same
    location, either side hybrid, remote team for an onsite role, other.
    """
    team_location = (team.location or "").lower()
    opportunity_location = (opportunity.location or "").lower()
    team_remote = team.remote_status
    opportunity_remote = opportunity.remote_policy

    if team_remote == RemoteStatus.REMOTE and opportunity_remote == RemoteStatus.REMOTE:
        return LOCATION_SCORES["both_remote"]
    if opportunity_remote == RemoteStatus.REMOTE:
        return LOCATION_SCORES["remote_opportunity"]
    if team_location and opportunity_location and team_location == opportunity_location:
        return LOCATION_SCORES["same_location"]
    if team_remote == RemoteStatus.HYBRID or opportunity_remote == RemoteStatus.HYBRID:
        return LOCATION_SCORES["hybrid"]
    if team_remote == RemoteStatus.REMOTE and opportunity_remote == RemoteStatus.ONSITE:
        return LOCATION_SCORES["remote_team_onsite"]
    return LOCATION_SCORES["other"]


def calculate_size_score(team: Team, opportunity: Opportunity) -> int:
    """
    Calculate team size match score (0-100).

    Formula:
    - Within [min, max] (inclusive): 100
    - Below min: 100 - 15 * deficit, floored at 0
    - Above max: 100 - 10 * excess, floored at 0

    Unset bounds default to 1 and 20.
    """
    team_size = team.effective_size
    min_size = opportunity.team_size_min or SIZE_DEFAULTS["min"]
    max_size = opportunity.team_size_max or SIZE_DEFAULTS["max"]

    if min_size <= team_size <= max_size:
        return 100
    if team_size < min_size:
        deficit = min_size - team_size
        return max(0, 100 - deficit * SIZE_PENALTIES["per_missing_member"])
    excess = team_size - max_size
    return max(0, 100 - excess * SIZE_PENALTIES["per_extra_member"])


def calculate_compensation_score(team: Team, opportunity: Opportunity) -> int:
    """
    Calculate compensation match score (0-100).

    Formula:
    - Team expectations or opportunity budget unset: 70
    - Ranges overlap: 70 + (overlap / team_range) * 30, capped at 100
    - No overlap: 70 - (gap / max(team_min, opp_min)) * 100, clamped to [0, 100]

    A team range of zero width counts as 1.
    An inverted team range (min above max) can produce a negative gap; the
    result is still clamped.
    """
    team_min = team.salary_expectation_min or 0
    team_max = team.salary_expectation_max or 0
    opp_min = opportunity.compensation_min or 0
    opp_max = opportunity.compensation_max or 0

    if not team_min and not team_max:
        return DEFAULT_SCORES["compensation_unset"]
    if not opp_min and not opp_max:
        return DEFAULT_SCORES["compensation_unset"]

    overlap_min = max(team_min, opp_min)
    overlap_max = min(team_max, opp_max)

    if overlap_max >= overlap_min:
        overlap = overlap_max - overlap_min
        team_range = (team_max - team_min) or 1
        score = COMPENSATION_BASE + (overlap / team_range) * COMPENSATION_OVERLAP_BONUS
        logger.debug(f"Compensation overlap {overlap} of team range {team_range}")
        return min(round_half_up(score), 100)

    gap = team_min - opp_max if team_min > opp_max else opp_min - team_max
    normaliser = max(team_min, opp_min)
    if normaliser <= 0:
        logger.warning(f"Compensation gap {gap} has no positive minimum to normalise against, score = 0")
        return 0
    gap_percent = gap / normaliser
    logger.debug(f"Compensation gap {gap} ({gap_percent:.2%})")
    return clamp_score(COMPENSATION_BASE - gap_percent * 100)


def calculate_experience_score(team: Team) -> int:
    """Score years working together: >=5 100, >=3 85, >=2 70, >=1 55, else 40."""
    years = team.years_together
    for min_years, score in EXPERIENCE_SCORES:
        if years >= min_years:
            return score
    return EXPERIENCE_FLOOR


def calculate_availability_score(team: Team) -> int:
    """available 100, selective 70, engaged 40, anything else 0."""
    if team.availability_status is None:
        return 0
    return AVAILABILITY_SCORES.get(team.availability_status.value, 0)


def get_recommendation(total: int) -> Recommendation:
    for threshold, tier in RECOMMENDATION_THRESHOLDS:
        if total >= threshold:
            return Recommendation(tier)
    return Recommendation(RECOMMENDATION_FLOOR)


def aggregate_score(breakdown: Mapping[str, int], weights: Mapping[str, float] = MATCH_WEIGHTS) -> int:
    """Weighted sum of component scores, rounded half-up."""
    return round_half_up(sum(breakdown[key] * weight for key, weight in weights.items()))


def calculate_breakdown(team: Team, opportunity: Opportunity) -> Dict[str, int]:
    return {
        "skills_match": calculate_skills_score(team, opportunity),
        "industry_match": calculate_industry_score(team, opportunity),
        "location_match": calculate_location_score(team, opportunity),
        "size_match": calculate_size_score(team, opportunity),
        "compensation_match": calculate_compensation_score(team, opportunity),
        "experience_match": calculate_experience_score(team),
        "availability_match": calculate_availability_score(team),
    }


def calculate_match_score(team: Team, opportunity: Opportunity) -> MatchScore:
    """
    Calculate the match score of a team for an opportunity.

    Args:
        team: Team record
        opportunity: Opportunity record

    Returns:
        MatchScore with total, per-dimension breakdown, recommendation tier,
        strengths and concerns
    """
    breakdown = ScoreBreakdown(**calculate_breakdown(team, opportunity))
    total = aggregate_score(breakdown.model_dump())
    strengths, concerns = extract_insights(team, breakdown)

    logger.info(f"Team {team.id} vs opportunity {opportunity.id}: {total} "
                f"(skills={breakdown.skills_match}, industry={breakdown.industry_match}, "
                f"compensation={breakdown.compensation_match})")

    return MatchScore(
        total=total,
        breakdown=breakdown,
        recommendation=get_recommendation(total),
        strengths=strengths,
        concerns=concerns,
    )
