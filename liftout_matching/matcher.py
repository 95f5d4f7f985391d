"""
Main Matcher Module

Ranks candidates for a match request:
1. Cap the candidate pool
2. Score every candidate with the deterministic scoring engine
3. Drop candidates below the minimum score, sort best-first and truncate
"""

import logging
from typing import Iterable, List, Sequence, TypeVar

from .config import CANDIDATE_POOL_SIZE, DEFAULT_LIMIT, DEFAULT_MIN_SCORE
from .models import (
    Opportunity, OpportunityMatch, OpportunitySummary, Team, TeamMatch, TeamSummary, extract_team_skills,
)
from .opportunity_scoring import calculate_opportunity_match_score
from .scoring_engine import calculate_match_score

logger = logging.getLogger(__name__)

M = TypeVar("M", TeamMatch, OpportunityMatch)

ANONYMOUS_DESCRIPTION = "Team details hidden in anonymous mode. Express interest to learn more."
LOCATION_WITHHELD = "Location withheld"


def summarize_team(team: Team) -> TeamSummary:
    return TeamSummary(
        id=team.id,
        name=team.name,
        description=team.description,
        industry=team.industry,
        specialization=team.specialization,
        location=team.location,
        remote_status=team.remote_status,
        size=team.size,
        years_working_together=team.years_working_together,
        availability_status=team.availability_status,
        verification_status=team.verification_status,
        member_count=team.member_count,
        application_count=team.application_count,
        skills=extract_team_skills(team.members),
        visibility=team.visibility,
        is_anonymous=team.is_anonymous,
    )


def anonymize_team(summary: TeamSummary) -> TeamSummary:
    """
    Mask a team's identity while keeping the fields companies match on.

    Example:
        >>> anonymize_team(summary).name
        'Anonymous Team #A1B2C3'
    """
    return summary.model_copy(update={
        "name": f"Anonymous Team #{summary.id[-6:].upper()}",
        "description": ANONYMOUS_DESCRIPTION,
        "location": LOCATION_WITHHELD if summary.location else None,
    })


def summarize_opportunity(opportunity: Opportunity) -> OpportunitySummary:
    description = opportunity.description[:300] if opportunity.description else opportunity.description
    return OpportunitySummary(
        id=opportunity.id,
        title=opportunity.title,
        description=description,
        company=opportunity.company,
        industry=opportunity.industry,
        location=opportunity.location,
        remote_policy=opportunity.remote_policy,
        compensation={
            "min": opportunity.compensation_min,
            "max": opportunity.compensation_max,
            "currency": opportunity.compensation_currency,
        },
        team_size={"min": opportunity.team_size_min, "max": opportunity.team_size_max},
        required_skills=opportunity.required_skills,
        urgency=opportunity.urgency,
        featured=opportunity.featured,
        application_count=opportunity.application_count,
        created_at=opportunity.created_at,
    )


def rank_matches(matches: Iterable[M], min_score: int = DEFAULT_MIN_SCORE, limit: int = DEFAULT_LIMIT) -> List[M]:
    """Keep matches scoring at least min_score, best first, at most limit of them."""
    kept = [m for m in matches if m.score.total >= min_score]
    kept.sort(key=lambda m: m.score.total, reverse=True)
    return kept[:max(limit, 0)]


def find_matching_teams(
    opportunity: Opportunity,
    teams: Sequence[Team],
    min_score: int = DEFAULT_MIN_SCORE,
    limit: int = DEFAULT_LIMIT,
    pool_size: int = CANDIDATE_POOL_SIZE
) -> List[TeamMatch]:
    """
    Score candidate teams for an opportunity.

    Args:
        opportunity: The opportunity being filled
        teams: Candidate teams, already filtered for visibility
        min_score: Minimum total score to keep
        limit: Maximum number of matches returned
        pool_size: Only the first pool_size candidates are scored

    Returns:
        Matches sorted by total score (highest first); anonymous teams
        have their identity masked

    Example:
        >>> matches = find_matching_teams(opportunity, teams, min_score=60)
        >>> print(matches[0].score.total)
    """
    pool = list(teams)[:pool_size]
    logger.info(f"Matching {len(pool)} teams against opportunity {opportunity.id}")

    matches = []
    for team in pool:
        summary = summarize_team(team)
        if team.is_anonymized:
            summary = anonymize_team(summary)
        matches.append(TeamMatch(team=summary, score=calculate_match_score(team, opportunity)))

    ranked = rank_matches(matches, min_score, limit)
    logger.info(f"{len(ranked)} of {len(pool)} teams scored >= {min_score}")
    return ranked


def find_matching_opportunities(
    team: Team,
    opportunities: Sequence[Opportunity],
    min_score: int = DEFAULT_MIN_SCORE,
    limit: int = DEFAULT_LIMIT,
    pool_size: int = CANDIDATE_POOL_SIZE
) -> List[OpportunityMatch]:
    """Score open opportunities for a team, best first."""
    pool = list(opportunities)[:pool_size]
    logger.info(f"Matching {len(pool)} opportunities against team {team.id}")

    matches = [
        OpportunityMatch(
            opportunity=summarize_opportunity(opportunity),
            score=calculate_opportunity_match_score(team, opportunity),
        )
        for opportunity in pool
    ]

    ranked = rank_matches(matches, min_score, limit)
    logger.info(f"{len(ranked)} of {len(pool)} opportunities scored >= {min_score}")
    return ranked
