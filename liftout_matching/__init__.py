"""
Deterministic Team-Opportunity Matching System

This package scores intact teams against opportunities (and opportunities
against teams) with a weighted multi-factor model, and compares team and
company cultures across eight dimensions.

Usage:
    from liftout_matching import calculate_match_score

    score = calculate_match_score(team, opportunity)
    print(f"Match: {score.total} ({score.recommendation.value})")
"""

from .config import MATCH_WEIGHTS, OPPORTUNITY_MATCH_WEIGHTS
from .culture import (
    build_company_culture_profile,
    build_team_culture_profile,
    calculate_culture_compatibility,
)
from .matcher import find_matching_opportunities, find_matching_teams, rank_matches
from .opportunity_scoring import calculate_opportunity_match_score
from .preview import calculate_preview_score, get_match_recommendation
from .scoring_engine import calculate_match_score

__all__ = [
    "MATCH_WEIGHTS",
    "OPPORTUNITY_MATCH_WEIGHTS",
    "build_company_culture_profile",
    "build_team_culture_profile",
    "calculate_culture_compatibility",
    "calculate_match_score",
    "calculate_opportunity_match_score",
    "calculate_preview_score",
    "find_matching_opportunities",
    "find_matching_teams",
    "get_match_recommendation",
    "rank_matches",
]
__version__ = "1.0.0"
