"""
Culture profiling and team/company culture compatibility.

Profiles place a team or a company on eight culture dimensions (0-100),
derived from style keywords and free-text culture descriptions. The
compatibility report compares seven of them (long-term orientation is
profiled but not compared) and turns the gaps into risks, strengths and an
integration plan.
"""

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from .config import (
    CULTURE_STYLE_TABLE, CULTURE_KEYWORDS, CULTURE_SCORE_BOUNDS,
    SIZE_ADJUSTMENTS, SIZE_NEUTRAL_ABOVE, SMALL_COMPANY_PENALTY, SMALL_COMPANY_FLOOR,
    TEAM_DEFAULT_WORKING_STYLE, TEAM_DEFAULT_COMMUNICATION_STYLE, CONFIDENCE_LEVELS,
    COMPARED_DIMENSIONS, COMPATIBILITY_LEVEL_THRESHOLDS, COMPATIBILITY_LEVEL_FLOOR,
    GAP_THRESHOLDS, RISK_PROBABILITY_BASE, RISK_PROBABILITY_CAP, CULTURE_RECOMMENDATIONS,
    INTEGRATION_TIMELINE_DAYS, INTEGRATION_EXTENDED_RISK_COUNT, INTEGRATION_PHASES,
    INTEGRATION_SUCCESS_METRICS,
)
from .models import (
    CommunicationStyleProfile, CompatibilityLevel, Company, CoreValue, CultureCompatibility,
    CultureDimensions, CultureProfile, DimensionCompatibility, EntityType, Impact,
    IntegrationPhase, IntegrationPlan, LeadershipStyle, RiskArea, StrengthArea, Team,
    TeamDynamics, WorkEnvironment,
)
from .scoring_engine import round_half_up

logger = logging.getLogger(__name__)


class StyleAttribute(str, Enum):
    COLLABORATION = "collaboration"
    HIERARCHY = "hierarchy"
    RESULTS = "results"
    DIRECTNESS = "directness"
    FORMALITY = "formality"
    OPENNESS = "openness"
    STRUCTURE = "structure"


class CultureTheme(str, Enum):
    INNOVATION = "innovation"
    HIERARCHY = "hierarchy"
    TEAM = "team"
    RISK = "risk"
    TRANSPARENCY = "transparency"
    RESULTS = "results"


def calculate_from_style(style: Optional[str], attribute: StyleAttribute, default: int) -> int:
    """
    Look up a style keyword (e.g. "agile", "formal") in the style table.

    Unknown styles, and known styles that say nothing about the attribute,
    return the default.
    """
    if not style:
        return default
    attributes = CULTURE_STYLE_TABLE.get(style.lower())
    if attributes is None:
        logger.debug(f"Unknown style '{style}', using default {default} for {attribute.value}")
        return default
    return attributes.get(attribute.value, default)


def calculate_from_culture(culture: Optional[str], theme: CultureTheme, default: int) -> int:
    """
    Score a theme from free text.

    The first positive keyword found adds the theme's boost and the first
    negative keyword found subtracts it; further hits are ignored. The result
    is clamped to [10, 95] whenever text is present.
    """
    if not culture:
        return default

    text = culture.lower()
    mapping = CULTURE_KEYWORDS[theme.value]
    score = default

    if any(word in text for word in mapping["positive"]):
        score += mapping["boost"]
    if any(word in text for word in mapping["negative"]):
        score -= mapping["boost"]

    low, high = CULTURE_SCORE_BOUNDS
    return max(low, min(high, score))


def calculate_from_size(employee_count: Optional[int], default: int) -> int:
    """Larger companies lean formal and structured; small ones lean informal."""
    if not employee_count:
        return default
    for above, boost, cap in SIZE_ADJUSTMENTS:
        if employee_count > above:
            return min(cap, default + boost)
    if employee_count > SIZE_NEUTRAL_ABOVE:
        return default
    return max(SMALL_COMPANY_FLOOR, default - SMALL_COMPANY_PENALTY)


def _confidence(entity_type: EntityType, has_text: bool) -> int:
    with_text, without_text = CONFIDENCE_LEVELS[entity_type.value]
    return with_text if has_text else without_text


def build_team_culture_profile(team: Team) -> CultureProfile:
    working_style = team.working_style or TEAM_DEFAULT_WORKING_STYLE
    communication_style = team.communication_style or TEAM_DEFAULT_COMMUNICATION_STYLE
    team_culture = team.team_culture or ""
    years = max(0.0, team.years_together)

    dimensions = CultureDimensions(
        power_distance=calculate_from_style(working_style, StyleAttribute.HIERARCHY, 45),
        individualism_vs_collectivism=calculate_from_style(working_style, StyleAttribute.COLLABORATION, 40),
        uncertainty_avoidance=calculate_from_style(communication_style, StyleAttribute.STRUCTURE, 60),
        long_term_orientation=70,
        innovation_vs_stability=calculate_from_culture(team_culture, CultureTheme.INNOVATION, 65),
        process_vs_results=calculate_from_style(working_style, StyleAttribute.RESULTS, 55),
        risk_tolerance=calculate_from_culture(team_culture, CultureTheme.RISK, 60),
        transparency_vs_confidentiality=calculate_from_style(communication_style, StyleAttribute.OPENNESS, 65),
    )

    dynamics = TeamDynamics(
        cohesion=min(95, round_half_up(60 + years * 10)),
        trust=min(95, round_half_up(65 + years * 8)),
        psychological_safety=70,
        diversity_appreciation=75,
        role_clarity=80,
        shared_goals=85,
        knowledge_sharing=75,
        adaptability=70,
    )

    return CultureProfile(
        id=f"culture-{team.id}",
        entity_id=team.id,
        entity_type=EntityType.TEAM,
        name=team.name,
        culture_dimensions=dimensions,
        team_dynamics=dynamics,
        communication_style=CommunicationStyleProfile(
            directness=calculate_from_style(communication_style, StyleAttribute.DIRECTNESS, 65),
            formality=calculate_from_style(communication_style, StyleAttribute.FORMALITY, 55),
            frequency=70,
        ),
        work_environment=WorkEnvironment(
            type=team.remote_status.value if team.remote_status else "hybrid",
            autonomy=75,
            collaboration=calculate_from_style(working_style, StyleAttribute.COLLABORATION, 80),
            formality_level=50,
        ),
        assessment_date=datetime.now(timezone.utc),
        confidence_level=_confidence(EntityType.TEAM, bool(team.team_culture)),
        last_updated=team.updated_at,
    )


def _core_values(company: Company) -> List[CoreValue]:
    values = []
    for i, value in enumerate(company.values):
        if isinstance(value, str):
            name, description = value, ""
        else:
            name, description = value.get("name") or "Value", value.get("description") or ""
        values.append(CoreValue(id=f"val-{i}", name=name, description=description))
    return values


def build_company_culture_profile(company: Company) -> CultureProfile:
    company_culture = company.company_culture or ""
    employees = company.employee_count

    dimensions = CultureDimensions(
        power_distance=calculate_from_culture(company_culture, CultureTheme.HIERARCHY, 55),
        individualism_vs_collectivism=calculate_from_culture(company_culture, CultureTheme.TEAM, 50),
        uncertainty_avoidance=calculate_from_size(employees, 55),
        long_term_orientation=75,
        innovation_vs_stability=calculate_from_culture(company_culture, CultureTheme.INNOVATION, 60),
        process_vs_results=calculate_from_culture(company_culture, CultureTheme.RESULTS, 50),
        risk_tolerance=calculate_from_culture(company_culture, CultureTheme.RISK, 55),
        transparency_vs_confidentiality=calculate_from_culture(company_culture, CultureTheme.TRANSPARENCY, 60),
    )

    return CultureProfile(
        id=f"culture-{company.id}",
        entity_id=company.id,
        entity_type=EntityType.COMPANY,
        name=company.name,
        culture_dimensions=dimensions,
        core_values=_core_values(company),
        communication_style=CommunicationStyleProfile(
            directness=70,
            formality=calculate_from_size(employees, 60),
            frequency=65,
        ),
        work_environment=WorkEnvironment(
            type="hybrid",
            autonomy=70,
            collaboration=65,
            formality_level=calculate_from_size(employees, 55),
        ),
        leadership_style=LeadershipStyle(),
        assessment_date=datetime.now(timezone.utc),
        confidence_level=_confidence(EntityType.COMPANY, bool(company_culture)),
        last_updated=company.updated_at,
    )


def generate_recommendation(dimension: str, team_score: int, company_score: int, gap: int) -> str:
    if gap < GAP_THRESHOLDS["strength"]:
        return f"Strong alignment on {dimension} - leverage this for smooth integration"

    templates = CULTURE_RECOMMENDATIONS.get(dimension)
    if templates is None:
        return f"Address {dimension} gap through targeted onboarding activities"

    team_higher, team_lower = templates
    return team_higher if team_score > company_score else team_lower


def get_compatibility_level(score: int) -> CompatibilityLevel:
    for threshold, level in COMPATIBILITY_LEVEL_THRESHOLDS:
        if score >= threshold:
            return CompatibilityLevel(level)
    return CompatibilityLevel(COMPATIBILITY_LEVEL_FLOOR)


def gap_impact(gap: int) -> Impact:
    if gap > GAP_THRESHOLDS["impact_high"]:
        return Impact.HIGH
    if gap > GAP_THRESHOLDS["impact_medium"]:
        return Impact.MEDIUM
    return Impact.LOW


def _slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def compare_dimensions(team_profile: CultureProfile, company_profile: CultureProfile) -> List[DimensionCompatibility]:
    team_dimensions = team_profile.culture_dimensions.model_dump()
    company_dimensions = company_profile.culture_dimensions.model_dump()
    results = []

    for key, name in COMPARED_DIMENSIONS.items():
        team_score = team_dimensions[key]
        company_score = company_dimensions[key]
        gap = abs(team_score - company_score)
        results.append(DimensionCompatibility(
            dimension=name,
            team_score=team_score,
            company_score=company_score,
            compatibility=max(0, 100 - gap),
            gap=gap,
            impact=gap_impact(gap),
            recommendation=generate_recommendation(name, team_score, company_score, gap),
        ))

    return results


def overall_compatibility(dimensions: List[DimensionCompatibility]) -> int:
    """Mean of the per-dimension compatibilities, rounded half-up."""
    return round_half_up(sum(d.compatibility for d in dimensions) / len(dimensions))


def identify_risk_areas(dimensions: List[DimensionCompatibility]) -> List[RiskArea]:
    return [
        RiskArea(
            id=f"risk-{_slug(d.dimension)}",
            description=f"Significant gap in {d.dimension} ({d.gap} points)",
            severity=Impact.HIGH if d.gap > GAP_THRESHOLDS["risk_high_severity"] else Impact.MEDIUM,
            probability=min(RISK_PROBABILITY_CAP, RISK_PROBABILITY_BASE + d.gap),
            mitigation_strategies=[d.recommendation],
        )
        for d in dimensions
        if d.gap > GAP_THRESHOLDS["risk"]
    ]


def identify_strength_areas(dimensions: List[DimensionCompatibility]) -> List[StrengthArea]:
    return [
        StrengthArea(
            id=f"strength-{_slug(d.dimension)}",
            description=f"Strong alignment on {d.dimension}",
            synergy=d.compatibility,
            leverage_opportunities=[f"Build on shared {d.dimension.lower()} for faster integration"],
        )
        for d in dimensions
        if d.gap < GAP_THRESHOLDS["strength"]
    ]


def build_integration_plan(team_id: str, company_id: str, risk_count: int) -> IntegrationPlan:
    extended = risk_count > INTEGRATION_EXTENDED_RISK_COUNT
    return IntegrationPlan(
        id=f"plan-{team_id}-{company_id}",
        timeline=INTEGRATION_TIMELINE_DAYS["extended" if extended else "standard"],
        phases=[IntegrationPhase(**phase) for phase in INTEGRATION_PHASES],
        success_metrics=list(INTEGRATION_SUCCESS_METRICS),
    )


def calculate_culture_compatibility(team: Team, company: Company) -> CultureCompatibility:
    """
    Compare a team's culture with a company's.

    Args:
        team: Team record (working style, communication style, culture text)
        company: Company record (culture text, employee count, values)

    Returns:
        CultureCompatibility with the per-dimension gaps, overall score and
        level, risk and strength areas and an integration plan
    """
    team_profile = build_team_culture_profile(team)
    company_profile = build_company_culture_profile(company)

    dimensions = compare_dimensions(team_profile, company_profile)
    overall = overall_compatibility(dimensions)
    risk_areas = identify_risk_areas(dimensions)
    strength_areas = identify_strength_areas(dimensions)

    logger.info(f"Culture compatibility team {team.id} / company {company.id}: {overall} "
                f"({len(risk_areas)} risks, {len(strength_areas)} strengths)")

    return CultureCompatibility(
        id=f"compat-{team.id}-{company.id}",
        team_profile_id=team_profile.id,
        company_profile_id=company_profile.id,
        overall_score=overall,
        compatibility_level=get_compatibility_level(overall),
        dimension_compatibility=dimensions,
        risk_areas=risk_areas,
        strength_areas=strength_areas,
        team_profile=team_profile,
        company_profile=company_profile,
        integration_plan=build_integration_plan(team.id, company.id, len(risk_areas)),
        assessment_date=datetime.now(timezone.utc),
        confidence_level=min(team_profile.confidence_level, company_profile.confidence_level),
    )
