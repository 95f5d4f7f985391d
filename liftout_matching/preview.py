"""
Quick match previews and display helpers.

The preview score only looks at skills and industry so it can be computed
from whatever a client already has on screen, before a full match request.
"""

from typing import Dict, List

from .config import (
    PREVIEW_WEIGHTS, PREVIEW_SCORES, MATCH_RECOMMENDATION_LABELS, FACTOR_LABELS,
    FACTOR_DISPLAY_WEIGHTS, FACTOR_DISPLAY_WEIGHT_DEFAULT,
)
from .scoring_engine import count_matched_skills, get_recommendation, round_half_up


def calculate_preview_score(
    team_skills: List[str],
    opportunity_skills: List[str],
    team_industry: str,
    opportunity_industry: str
) -> int:
    """
    Formula:
    - Skills: matched / total opportunity skills * 100 (50 with no skills listed)
    - Industry: 100 exact, 70 when one contains the other, else 40
    - Final: 0.6 * skills + 0.4 * industry
    """
    have = [s.lower() for s in team_skills]
    wanted = [s.lower() for s in opportunity_skills]

    if wanted:
        skills_score = count_matched_skills(wanted, have) / len(wanted) * 100
    else:
        skills_score = PREVIEW_SCORES["no_skills"]

    team_industry = (team_industry or "").lower()
    opportunity_industry = (opportunity_industry or "").lower()
    if team_industry == opportunity_industry:
        industry_score = PREVIEW_SCORES["industry_exact"]
    elif opportunity_industry in team_industry or team_industry in opportunity_industry:
        industry_score = PREVIEW_SCORES["industry_partial"]
    else:
        industry_score = PREVIEW_SCORES["industry_other"]

    return round_half_up(
        skills_score * PREVIEW_WEIGHTS["skills"] + industry_score * PREVIEW_WEIGHTS["industry"]
    )


def get_match_recommendation(score: int) -> Dict[str, str]:
    """Tier, label and description for a score."""
    tier = get_recommendation(score)
    label, description = MATCH_RECOMMENDATION_LABELS[tier.value]
    return {"tier": tier.value, "label": label, "description": description}


def get_factor_label(factor: str) -> str:
    return FACTOR_LABELS.get(factor, factor)


def get_factor_weight(factor: str) -> int:
    return FACTOR_DISPLAY_WEIGHTS.get(factor, FACTOR_DISPLAY_WEIGHT_DEFAULT)
