"""
Rule-based strengths and concerns for a team/opportunity match.

Rules are evaluated in a fixed order and every rule that fires adds one
message; lists are neither de-duplicated nor capped.
"""

from typing import List, Tuple

from .config import INSIGHT_THRESHOLDS, INSIGHT_MESSAGES
from .models import ScoreBreakdown, Team, VerificationStatus


def extract_insights(team: Team, breakdown: ScoreBreakdown) -> Tuple[List[str], List[str]]:
    """
    Derive human readable strengths and concerns from a score breakdown.

    Args:
        team: The scored team (its verification status is folded in)
        breakdown: Per-dimension scores

    Returns:
        (strengths, concerns)
    """
    t = INSIGHT_THRESHOLDS
    strengths: List[str] = []
    concerns: List[str] = []

    if breakdown.skills_match >= t["skills_strength"]:
        strengths.append(INSIGHT_MESSAGES["skills_strength"])
    elif breakdown.skills_match < t["skills_concern"]:
        concerns.append(INSIGHT_MESSAGES["skills_concern"])

    if breakdown.industry_match >= t["industry_strength"]:
        strengths.append(INSIGHT_MESSAGES["industry_strength"])
    elif breakdown.industry_match < t["industry_concern"]:
        concerns.append(INSIGHT_MESSAGES["industry_concern"])

    if breakdown.experience_match >= t["experience_strength"]:
        strengths.append(INSIGHT_MESSAGES["experience_strength"])
    elif breakdown.experience_match < t["experience_concern"]:
        concerns.append(INSIGHT_MESSAGES["experience_concern"])

    if breakdown.compensation_match < t["compensation_concern"]:
        concerns.append(INSIGHT_MESSAGES["compensation_concern"])

    if breakdown.location_match < t["location_concern"]:
        concerns.append(INSIGHT_MESSAGES["location_concern"])

    if team.verification_status == VerificationStatus.VERIFIED:
        strengths.append(INSIGHT_MESSAGES["verified"])
    elif team.verification_status == VerificationStatus.PENDING:
        concerns.append(INSIGHT_MESSAGES["verification_pending"])

    return strengths, concerns
