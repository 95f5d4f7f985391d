from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from liftout_matching.models import (
    WIRE_CONFIG,
    CultureCompatibility,
    OpportunityMatch,
    TeamMatch,
)


class Settings(BaseModel):
    model_config = ConfigDict(protected_namespaces=())
    firebase_project_id: Optional[str] = None
    google_credentials_json: Optional[str] = None
    google_credentials_path: Optional[str] = None
    rate_limit_requests_per_minute: int = 60
    candidate_pool_size: int = 100
    log_level: str = "INFO"
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])


class SessionUser(BaseModel):
    """The authenticated caller, taken from a verified Firebase ID token."""
    id: str
    email: Optional[str] = None
    user_type: Optional[str] = Field(
        default=None,
        description="company|individual, from the userType custom claim"
    )


class ErrorResponse(BaseModel):
    error: str


class SuccessResponse(BaseModel):
    success: bool = True
    data: Any = None


class OpportunityRef(BaseModel):
    id: str
    title: str
    company: str
    industry: Optional[str] = None


class TeamMatchesData(BaseModel):
    opportunity: OpportunityRef
    matches: List[TeamMatch]
    total: int


class TeamMatchesResponse(SuccessResponse):
    data: TeamMatchesData


class TeamRef(BaseModel):
    id: str
    name: str
    industry: Optional[str] = None
    skills: List[str] = Field(default_factory=list)


class OpportunityMatchesData(BaseModel):
    team: TeamRef
    matches: List[OpportunityMatch]
    total: int


class OpportunityMatchesResponse(SuccessResponse):
    data: OpportunityMatchesData


class EntityName(BaseModel):
    id: str
    name: str


class CultureCompatibilityData(CultureCompatibility):
    team: EntityName
    company: EntityName


class PreviewRequest(BaseModel):
    """Request model for a quick skills/industry preview score (camelCase or snake_case keys)."""

    model_config = WIRE_CONFIG

    team_skills: List[str] = Field(default_factory=list)
    opportunity_skills: List[str] = Field(default_factory=list)
    team_industry: str = ""
    opportunity_industry: str = ""


class PreviewResult(BaseModel):
    score: int = Field(ge=0, le=100)
    tier: str
    label: str
    description: str
