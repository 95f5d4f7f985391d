"""
Domain records consumed by the scoring core and the result types it produces.

Records arrive from the persistence layer as camelCase documents; every model
also accepts snake_case field names. Dumped by alias, every model uses the
same camelCase keys. Categorical fields holding a value the platform does
not know are loaded as ``None`` and receive the documented neutral default
when scored.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)
RECORD_CONFIG = WIRE_CONFIG
RESULT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RemoteStatus(str, Enum):
    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    SELECTIVE = "selective"
    ENGAGED = "engaged"
    NOT_AVAILABLE = "not_available"


class VerificationStatus(str, Enum):
    VERIFIED = "verified"
    PENDING = "pending"
    UNVERIFIED = "unverified"


class TeamVisibility(str, Enum):
    PUBLIC = "public"
    ANONYMOUS = "anonymous"
    PRIVATE = "private"


class Urgency(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    STANDARD = "standard"
    LOW = "low"


class Recommendation(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class CompatibilityLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"
    MISMATCHED = "mismatched"


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EntityType(str, Enum):
    TEAM = "team"
    COMPANY = "company"


def _known_value(enum_cls):
    """Build a validator mapping unknown enum values to None."""
    known = {member.value for member in enum_cls}

    def check(value: Any) -> Any:
        if value is None or isinstance(value, enum_cls):
            return value
        return value if isinstance(value, str) and value in known else None

    return check


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


RemoteStatusField = Annotated[Optional[RemoteStatus], BeforeValidator(_known_value(RemoteStatus))]
AvailabilityField = Annotated[Optional[AvailabilityStatus], BeforeValidator(_known_value(AvailabilityStatus))]
VerificationField = Annotated[Optional[VerificationStatus], BeforeValidator(_known_value(VerificationStatus))]
VisibilityField = Annotated[Optional[TeamVisibility], BeforeValidator(_known_value(TeamVisibility))]
UrgencyField = Annotated[Optional[Urgency], BeforeValidator(_known_value(Urgency))]
SkillList = Annotated[List[str], BeforeValidator(_as_list)]
Score = Annotated[int, Field(ge=0, le=100)]


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

class TeamMember(BaseModel):
    model_config = RECORD_CONFIG

    user_id: Optional[str] = None
    status: str = "active"
    skills: SkillList = Field(default_factory=list)


def extract_team_skills(members: Iterable[TeamMember]) -> List[str]:
    """Union of active members' skills, first-seen order, case preserved."""
    seen: Dict[str, None] = {}
    for member in members:
        if member.status != "active":
            continue
        for skill in member.skills:
            seen.setdefault(skill, None)
    return list(seen)


class Team(BaseModel):
    """A team profile as stored by the platform."""

    model_config = RECORD_CONFIG

    id: str
    name: str = ""
    description: Optional[str] = None
    industry: Optional[str] = None
    specialization: Optional[str] = None
    location: Optional[str] = None
    remote_status: RemoteStatusField = None
    size: Optional[int] = None
    years_working_together: Optional[float] = None
    availability_status: AvailabilityField = None
    verification_status: VerificationField = None
    salary_expectation_min: Optional[float] = None
    salary_expectation_max: Optional[float] = None
    members: List[TeamMember] = Field(default_factory=list)
    visibility: VisibilityField = TeamVisibility.PUBLIC
    is_anonymous: bool = False
    allow_discovery: Optional[bool] = None
    deleted_at: Optional[datetime] = None
    working_style: Optional[str] = None
    communication_style: Optional[str] = None
    team_culture: Optional[str] = None
    application_count: int = 0
    updated_at: Optional[datetime] = None

    @property
    def active_members(self) -> List[TeamMember]:
        return [m for m in self.members if m.status == "active"]

    @property
    def skills(self) -> List[str]:
        """Union of active members' skills, first-seen order, case preserved."""
        return extract_team_skills(self.members)

    @property
    def member_count(self) -> int:
        return len(self.active_members)

    @property
    def effective_size(self) -> int:
        """Declared size, else active member count, else 0."""
        return self.size or self.member_count or 0

    @property
    def years_together(self) -> float:
        """Years working together, 0 when unknown."""
        return self.years_working_together or 0.0

    @property
    def is_anonymized(self) -> bool:
        return self.visibility == TeamVisibility.ANONYMOUS or self.is_anonymous


class CompanyRef(BaseModel):
    """The slice of a company embedded in an opportunity."""

    model_config = RECORD_CONFIG

    id: Optional[str] = None
    name: str = ""
    industry: Optional[str] = None
    logo_url: Optional[str] = None
    verification_status: VerificationField = None


class Opportunity(BaseModel):
    model_config = RECORD_CONFIG

    id: str
    title: str = ""
    description: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    remote_policy: RemoteStatusField = None
    team_size_min: Optional[int] = None
    team_size_max: Optional[int] = None
    compensation_min: Optional[float] = None
    compensation_max: Optional[float] = None
    compensation_currency: Optional[str] = None
    required_skills: SkillList = Field(default_factory=list)
    preferred_skills: SkillList = Field(default_factory=list)
    company_id: Optional[str] = None
    company: CompanyRef = Field(default_factory=CompanyRef)
    urgency: UrgencyField = None
    featured: bool = False
    boost_score: float = 0
    status: str = "active"
    expires_at: Optional[datetime] = None
    application_count: int = 0
    created_at: Optional[datetime] = None


class Company(BaseModel):
    model_config = RECORD_CONFIG

    id: str
    name: str = ""
    industry: Optional[str] = None
    company_culture: Optional[str] = None
    values: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    employee_count: Optional[int] = None
    verification_status: VerificationField = None
    logo_url: Optional[str] = None
    updated_at: Optional[datetime] = None


class TeamApplication(BaseModel):
    """An application joining a team to an opportunity."""

    model_config = RECORD_CONFIG

    id: str
    team_id: str
    opportunity_id: str


# ---------------------------------------------------------------------------
# Match results
# ---------------------------------------------------------------------------

class WireModel(BaseModel):
    """Base for values returned over the API: camelCase keys when dumped by alias."""

    model_config = WIRE_CONFIG


class ScoreBreakdown(BaseModel):
    model_config = RESULT_CONFIG

    skills_match: Score
    industry_match: Score
    location_match: Score
    size_match: Score
    compensation_match: Score
    experience_match: Score
    availability_match: Score


class MatchScore(BaseModel):
    model_config = RESULT_CONFIG

    total: Score
    breakdown: ScoreBreakdown
    recommendation: Recommendation
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)


class OpportunityScoreBreakdown(BaseModel):
    model_config = RESULT_CONFIG

    skills_match: Score
    industry_match: Score
    location_match: Score
    size_match: Score
    compensation_match: Score
    urgency_bonus: Score
    company_quality: Score


class OpportunityMatchScore(BaseModel):
    model_config = RESULT_CONFIG

    total: Score
    breakdown: OpportunityScoreBreakdown
    recommendation: Recommendation
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)


class TeamSummary(WireModel):
    """Team fields returned alongside a match, possibly anonymised."""

    id: str
    name: str
    description: Optional[str] = None
    industry: Optional[str] = None
    specialization: Optional[str] = None
    location: Optional[str] = None
    remote_status: Optional[RemoteStatus] = None
    size: Optional[int] = None
    years_working_together: Optional[float] = None
    availability_status: Optional[AvailabilityStatus] = None
    verification_status: Optional[VerificationStatus] = None
    member_count: int = 0
    application_count: int = 0
    skills: List[str] = Field(default_factory=list)
    visibility: Optional[TeamVisibility] = None
    is_anonymous: bool = False


class TeamMatch(WireModel):
    team: TeamSummary
    score: MatchScore


class OpportunitySummary(WireModel):
    id: str
    title: str
    description: Optional[str] = None
    company: CompanyRef
    industry: Optional[str] = None
    location: Optional[str] = None
    remote_policy: Optional[RemoteStatus] = None
    compensation: Dict[str, Any] = Field(default_factory=dict)
    team_size: Dict[str, Optional[int]] = Field(default_factory=dict)
    required_skills: List[str] = Field(default_factory=list)
    urgency: Optional[Urgency] = None
    featured: bool = False
    application_count: int = 0
    created_at: Optional[datetime] = None


class OpportunityMatch(WireModel):
    opportunity: OpportunitySummary
    score: OpportunityMatchScore


# ---------------------------------------------------------------------------
# Culture
# ---------------------------------------------------------------------------

class CultureDimensions(WireModel):
    power_distance: Score
    individualism_vs_collectivism: Score
    uncertainty_avoidance: Score
    long_term_orientation: Score
    innovation_vs_stability: Score
    process_vs_results: Score
    risk_tolerance: Score
    transparency_vs_confidentiality: Score


class TeamDynamics(WireModel):
    cohesion: Score
    trust: Score
    psychological_safety: Score
    diversity_appreciation: Score
    role_clarity: Score
    shared_goals: Score
    knowledge_sharing: Score
    adaptability: Score


class CommunicationStyleProfile(WireModel):
    directness: Score
    formality: Score
    frequency: Score


class WorkEnvironment(WireModel):
    type: str
    autonomy: Score
    collaboration: Score
    formality_level: Score


class CoreValue(WireModel):
    id: str
    name: str
    description: str = ""
    importance: Score = 80
    category: str = "performance"


class LeadershipStyle(WireModel):
    approach: str = "transformational"
    accessibility: Score = 70
    supportiveness: Score = 75
    vision_communication: Score = 80
    empowerment: Score = 70


class CultureProfile(WireModel):
    id: str
    entity_id: str
    entity_type: EntityType
    name: str
    culture_dimensions: CultureDimensions
    team_dynamics: Optional[TeamDynamics] = None
    communication_style: CommunicationStyleProfile
    work_environment: WorkEnvironment
    core_values: List[CoreValue] = Field(default_factory=list)
    leadership_style: Optional[LeadershipStyle] = None
    assessment_date: datetime
    confidence_level: Score
    last_updated: Optional[datetime] = None


class DimensionCompatibility(WireModel):
    dimension: str
    team_score: Score
    company_score: Score
    compatibility: Score
    gap: Score
    impact: Impact
    recommendation: str


class RiskArea(WireModel):
    id: str
    category: str = "values"
    description: str
    severity: Impact
    probability: Score
    impact: str = "May affect team integration and collaboration"
    mitigation_strategies: List[str] = Field(default_factory=list)
    timeframe: str = "short_term"


class StrengthArea(WireModel):
    id: str
    description: str
    synergy: Score
    leverage_opportunities: List[str] = Field(default_factory=list)


class IntegrationPhase(WireModel):
    id: str
    name: str
    duration: int
    activities: List[str] = Field(default_factory=list)


class IntegrationPlan(WireModel):
    id: str
    timeline: int
    phases: List[IntegrationPhase]
    success_metrics: List[str] = Field(default_factory=list)


class CultureCompatibility(WireModel):
    id: str
    team_profile_id: str
    company_profile_id: str
    overall_score: Score
    compatibility_level: CompatibilityLevel
    dimension_compatibility: List[DimensionCompatibility]
    risk_areas: List[RiskArea] = Field(default_factory=list)
    strength_areas: List[StrengthArea] = Field(default_factory=list)
    team_profile: CultureProfile
    company_profile: CultureProfile
    integration_plan: IntegrationPlan
    assessment_date: datetime
    confidence_level: Score
