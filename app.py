from __future__ import annotations

import logging
import os
import time
from typing import Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from firebase_admin import auth
from starlette.exceptions import HTTPException as StarletteHTTPException

from firestore_service import FirestoreService, get_firestore_service
from liftout_matching import __version__
from liftout_matching.config import DEFAULT_LIMIT, DEFAULT_MIN_SCORE
from liftout_matching.culture import (
    build_company_culture_profile,
    build_team_culture_profile,
    calculate_culture_compatibility,
)
from liftout_matching.matcher import find_matching_opportunities, find_matching_teams
from liftout_matching.models import Company, Team, TeamVisibility
from liftout_matching.preview import calculate_preview_score, get_match_recommendation
from models import (
    CultureCompatibilityData,
    EntityName,
    OpportunityMatchesData,
    OpportunityMatchesResponse,
    OpportunityRef,
    PreviewRequest,
    PreviewResult,
    SessionUser,
    Settings,
    SuccessResponse,
    TeamMatchesData,
    TeamMatchesResponse,
    TeamRef,
)


load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return Settings(
        firebase_project_id=os.getenv("FIREBASE_PROJECT_ID"),
        google_credentials_json=os.getenv("GOOGLE_APPLICATION_CREDENTIALS_JSON"),
        google_credentials_path=os.getenv("GOOGLE_APPLICATION_CREDENTIALS"),
        rate_limit_requests_per_minute=int(os.getenv("RATE_LIMIT_RPM", "60")),
        candidate_pool_size=int(os.getenv("CANDIDATE_POOL_SIZE", "100")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )


app = FastAPI(title="Liftout Matching API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory stores
LAST_REQUESTS_BY_IP: Dict[str, List[float]] = {}


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    field = ".".join(str(part) for part in errors[0].get("loc", ())) if errors else ""
    return JSONResponse(status_code=400, content={"error": f"{field}: {message}" if field else message})


async def rate_limit(request: Request, settings: Settings = Depends(get_settings)):
    ip = request.client.host if request.client else "unknown"
    window = 60.0
    max_req = settings.rate_limit_requests_per_minute
    now = time.time()
    bucket = LAST_REQUESTS_BY_IP.setdefault(ip, [])
    # prune
    while bucket and now - bucket[0] > window:
        bucket.pop(0)
    if len(bucket) >= max_req:
        raise HTTPException(status_code=429, detail="Rate limit exceeded")
    bucket.append(now)


def get_store(settings: Settings = Depends(get_settings)) -> FirestoreService:
    return get_firestore_service(settings)


def get_session_user(
    authorization: Optional[str] = Header(default=None),
    store: FirestoreService = Depends(get_store),
) -> SessionUser:
    """Verify the Firebase ID token in the Authorization header."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized")

    token = authorization[len("bearer "):].strip()
    try:
        claims = auth.verify_id_token(token)
    except (auth.InvalidIdTokenError, auth.UserDisabledError, ValueError) as e:
        logger.warning(f"Rejected ID token: {e}")
        raise HTTPException(status_code=401, detail="Unauthorized")

    return SessionUser(id=claims["uid"], email=claims.get("email"), user_type=claims.get("userType"))


@app.get("/")
async def root():
    return {"status": "ok", "version": __version__}


@app.get("/api/matching/teams", response_model=TeamMatchesResponse, dependencies=[Depends(rate_limit)])
def match_teams(
    opportunity_id: Optional[str] = Query(default=None, alias="opportunityId"),
    min_score: int = Query(default=DEFAULT_MIN_SCORE, alias="minScore"),
    limit: int = Query(default=DEFAULT_LIMIT),
    user: SessionUser = Depends(get_session_user),
    store: FirestoreService = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Find the teams that best fit an opportunity.

    Query Parameters:
        opportunityId: The opportunity to fill (required)
        minScore: Minimum total score (default 50)
        limit: Maximum number of matches (default 20)

    Returns:
        The opportunity summary and ranked team matches. Anonymous teams are
        only included for users of verified companies, with identity masked.
    """
    if not opportunity_id:
        raise HTTPException(status_code=400, detail="opportunityId is required")

    try:
        opportunity = store.get_opportunity(opportunity_id)
        if opportunity is None:
            raise HTTPException(status_code=404, detail="Opportunity not found")

        visibilities = [TeamVisibility.PUBLIC]
        if user.user_type == "company" and store.is_verified_company_user(user.id):
            visibilities.append(TeamVisibility.ANONYMOUS)

        teams = store.list_candidate_teams(visibilities, limit=settings.candidate_pool_size)
        matches = find_matching_teams(
            opportunity, teams, min_score, limit, pool_size=settings.candidate_pool_size
        )

        return TeamMatchesResponse(
            data=TeamMatchesData(
                opportunity=OpportunityRef(
                    id=opportunity.id,
                    title=opportunity.title,
                    company=opportunity.company.name,
                    industry=opportunity.industry,
                ),
                matches=matches,
                total=len(matches),
            )
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error finding team matches: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to find matching teams")


@app.get("/api/matching/opportunities", response_model=OpportunityMatchesResponse, dependencies=[Depends(rate_limit)])
def match_opportunities(
    team_id: Optional[str] = Query(default=None, alias="teamId"),
    min_score: int = Query(default=DEFAULT_MIN_SCORE, alias="minScore"),
    limit: int = Query(default=DEFAULT_LIMIT),
    user: SessionUser = Depends(get_session_user),
    store: FirestoreService = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Find the open opportunities that best fit a team."""
    if not team_id:
        raise HTTPException(status_code=400, detail="teamId is required")

    try:
        team = store.get_team(team_id)
        if team is None:
            raise HTTPException(status_code=404, detail="Team not found")

        opportunities = store.list_active_opportunities(limit=settings.candidate_pool_size)
        matches = find_matching_opportunities(
            team, opportunities, min_score, limit, pool_size=settings.candidate_pool_size
        )

        return OpportunityMatchesResponse(
            data=OpportunityMatchesData(
                team=TeamRef(id=team.id, name=team.name, industry=team.industry, skills=team.skills),
                matches=matches,
                total=len(matches),
            )
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error finding opportunity matches: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to find matching opportunities")


def _compatibility_response(team: Team, company: Company) -> SuccessResponse:
    compatibility = calculate_culture_compatibility(team, company)
    return SuccessResponse(
        data=CultureCompatibilityData(
            **compatibility.model_dump(),
            team=EntityName(id=team.id, name=team.name),
            company=EntityName(id=company.id, name=company.name),
        )
    )


@app.get("/api/culture", response_model=SuccessResponse)
def culture_assessment(
    team_id: Optional[str] = Query(default=None, alias="teamId"),
    company_id: Optional[str] = Query(default=None, alias="companyId"),
    application_id: Optional[str] = Query(default=None, alias="applicationId"),
    user: SessionUser = Depends(get_session_user),
    store: FirestoreService = Depends(get_store),
):
    """
    Culture assessment for team-company matching.

    Modes:
        applicationId: compatibility of the applying team with the
            opportunity's company
        teamId + companyId: compatibility of the given pair
        neither: company users get their company's culture profile, other
            users get the profiles of the teams they belong to
    """
    try:
        if application_id:
            application = store.get_application(application_id)
            if application is None:
                raise HTTPException(status_code=404, detail="Application not found")

            team = store.get_team(application.team_id)
            opportunity = store.get_opportunity(application.opportunity_id)
            company_ref = opportunity.company_id if opportunity else None
            company = store.get_company(company_ref) if company_ref else None
            if team is None or company is None:
                raise HTTPException(status_code=404, detail="Application not found")

            return _compatibility_response(team, company)

        if team_id and company_id:
            team = store.get_team(team_id)
            company = store.get_company(company_id)
            if team is None or company is None:
                raise HTTPException(status_code=404, detail="Team or company not found")

            return _compatibility_response(team, company)

        if user.user_type == "company":
            company = store.get_company_for_user(user.id)
            if company is None:
                raise HTTPException(status_code=404, detail="Company not found")
            return SuccessResponse(data=build_company_culture_profile(company))

        teams = store.list_user_teams(user.id)
        return SuccessResponse(data=[build_team_culture_profile(team) for team in teams])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching culture data: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch culture data")


@app.post("/api/matching/preview", response_model=SuccessResponse, dependencies=[Depends(rate_limit)])
async def match_preview(request: PreviewRequest):
    """Quick skills/industry preview score, no records required."""
    score = calculate_preview_score(
        request.team_skills,
        request.opportunity_skills,
        request.team_industry,
        request.opportunity_industry,
    )
    return SuccessResponse(data=PreviewResult(score=score, **get_match_recommendation(score)))
