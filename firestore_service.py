"""
Firestore service for fetching teams, opportunities and companies.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from liftout_matching.config import CANDIDATE_POOL_SIZE
from liftout_matching.models import (
    AvailabilityStatus, Company, CompanyRef, Opportunity, Team, TeamApplication,
    TeamVisibility, VerificationStatus,
)
from models import Settings

logger = logging.getLogger(__name__)

TEAMS = "teams"
OPPORTUNITIES = "opportunities"
COMPANIES = "companies"
APPLICATIONS = "teamApplications"
COMPANY_USERS = "companyUsers"


def _with_id(doc) -> Dict[str, Any]:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_discoverable(team: Team) -> bool:
    """Open for matching: available in some form, not deleted, not opted out of discovery."""
    return (
        team.availability_status != AvailabilityStatus.NOT_AVAILABLE
        and team.deleted_at is None
        and team.allow_discovery is not False
    )


def is_open(opportunity: Opportunity, now: datetime) -> bool:
    expires_at = _as_utc(opportunity.expires_at)
    return opportunity.status == "active" and (expires_at is None or expires_at > now)


class FirestoreService:
    """Service for reading marketplace records from Firebase Firestore."""

    _app = None
    _db = None

    def __init__(self, settings: Settings, db=None):
        """
        Initialize Firebase Admin SDK.

        Args:
            settings: Credentials and project configuration
            db: An existing Firestore client (skips SDK initialisation)
        """
        self.settings = settings
        if db is not None:
            self.db = db
            return

        if FirestoreService._app is None:
            self._initialize_firebase()
        if FirestoreService._db is None:
            FirestoreService._db = firestore.client()
            logger.info("Firestore client created")
        self.db = FirestoreService._db

    def _initialize_firebase(self):
        """
        Initialize Firebase Admin SDK with credentials from settings.

        Priority:
        1. GOOGLE_APPLICATION_CREDENTIALS_JSON (JSON string directly in env var)
        2. GOOGLE_APPLICATION_CREDENTIALS (file path to JSON file)
        3. FIREBASE_PROJECT_ID (for Application Default Credentials)
        """
        try:
            FirestoreService._app = firebase_admin.get_app()
            logger.info("Firebase already initialized")
            return
        except ValueError:
            pass

        credentials_json = self.settings.google_credentials_json
        credentials_path = self.settings.google_credentials_path
        project_id = self.settings.firebase_project_id

        if credentials_json:
            try:
                cred = credentials.Certificate(json.loads(credentials_json))
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in GOOGLE_APPLICATION_CREDENTIALS_JSON: {e}")
            FirestoreService._app = firebase_admin.initialize_app(cred)
            logger.info("Firebase initialized from JSON credentials")
        elif credentials_path:
            if not os.path.exists(credentials_path):
                raise FileNotFoundError(f"Service account file not found: {credentials_path}")
            FirestoreService._app = firebase_admin.initialize_app(credentials.Certificate(credentials_path))
            logger.info(f"Firebase initialized from service account file {credentials_path}")
        elif project_id:
            FirestoreService._app = firebase_admin.initialize_app(options={"projectId": project_id})
            logger.info(f"Firebase initialized with project ID {project_id}")
        else:
            raise ValueError(
                "No Firebase credentials found. Please set one of:\n"
                "  - GOOGLE_APPLICATION_CREDENTIALS_JSON (JSON string)\n"
                "  - GOOGLE_APPLICATION_CREDENTIALS (file path)\n"
                "  - FIREBASE_PROJECT_ID (for Application Default Credentials)"
            )

    def _get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self.db.collection(collection).document(doc_id).get()
        except Exception as e:
            raise RuntimeError(f"Failed to fetch {collection}/{doc_id}: {e}")
        return _with_id(doc) if doc.exists else None

    def _company_ref(self, company_id: Optional[str], cache: Dict[str, CompanyRef]) -> CompanyRef:
        if not company_id:
            return CompanyRef()
        if company_id not in cache:
            data = self._get(COMPANIES, company_id)
            cache[company_id] = CompanyRef.model_validate(data) if data else CompanyRef(id=company_id)
        return cache[company_id]

    def _attach_company(self, opportunity: Opportunity, cache: Dict[str, CompanyRef]) -> Opportunity:
        company = self._company_ref(opportunity.company_id, cache)
        return opportunity.model_copy(update={"company": company})

    def get_team(self, team_id: str) -> Optional[Team]:
        """
        Fetch a team with its members.

        Returns:
            Team or None if not found
        """
        data = self._get(TEAMS, team_id)
        return Team.model_validate(data) if data else None

    def get_company(self, company_id: str) -> Optional[Company]:
        data = self._get(COMPANIES, company_id)
        return Company.model_validate(data) if data else None

    def get_opportunity(self, opportunity_id: str) -> Optional[Opportunity]:
        """Fetch an opportunity with its company reference attached."""
        data = self._get(OPPORTUNITIES, opportunity_id)
        return self._attach_company(Opportunity.model_validate(data), {}) if data else None

    def get_application(self, application_id: str) -> Optional[TeamApplication]:
        data = self._get(APPLICATIONS, application_id)
        return TeamApplication.model_validate(data) if data else None

    def list_candidate_teams(
        self,
        visibilities: Iterable[TeamVisibility],
        limit: int = CANDIDATE_POOL_SIZE
    ) -> List[Team]:
        """
        Fetch discoverable teams with one of the given visibilities.

        Args:
            visibilities: Allowed visibility modes
            limit: Maximum number of teams returned

        Returns:
            Up to limit teams
        """
        query = self.db.collection(TEAMS).where(
            filter=FieldFilter("visibility", "in", [v.value for v in visibilities])
        )
        teams: List[Team] = []
        try:
            for doc in query.stream():
                team = Team.model_validate(_with_id(doc))
                if not is_discoverable(team):
                    continue
                teams.append(team)
                if len(teams) >= limit:
                    break
        except Exception as e:
            raise RuntimeError(f"Failed to fetch candidate teams: {e}")

        logger.info(f"Fetched {len(teams)} candidate teams")
        return teams

    def list_active_opportunities(self, limit: int = CANDIDATE_POOL_SIZE) -> List[Opportunity]:
        """
        Fetch open opportunities, featured and boosted first, newest first.

        Returns:
            Up to limit opportunities with their company references
        """
        query = self.db.collection(OPPORTUNITIES).where(filter=FieldFilter("status", "==", "active"))
        now = datetime.now(timezone.utc)
        cache: Dict[str, CompanyRef] = {}
        try:
            opportunities = [Opportunity.model_validate(_with_id(doc)) for doc in query.stream()]
        except Exception as e:
            raise RuntimeError(f"Failed to fetch active opportunities: {e}")

        opportunities = [o for o in opportunities if is_open(o, now)]
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        opportunities.sort(
            key=lambda o: (o.featured, o.boost_score, _as_utc(o.created_at) or epoch),
            reverse=True,
        )
        return [self._attach_company(o, cache) for o in opportunities[:limit]]

    def get_company_for_user(self, user_id: str) -> Optional[Company]:
        """Company the user belongs to, or None."""
        query = self.db.collection(COMPANY_USERS).where(filter=FieldFilter("userId", "==", user_id)).limit(1)
        try:
            docs = list(query.stream())
        except Exception as e:
            raise RuntimeError(f"Failed to fetch company membership for user {user_id}: {e}")
        if not docs:
            return None
        company_id = (docs[0].to_dict() or {}).get("companyId")
        return self.get_company(company_id) if company_id else None

    def is_verified_company_user(self, user_id: str) -> bool:
        company = self.get_company_for_user(user_id)
        return company is not None and company.verification_status == VerificationStatus.VERIFIED

    def list_user_teams(self, user_id: str) -> List[Team]:
        """Teams where the user is an active member."""
        query = self.db.collection(TEAMS).where(filter=FieldFilter("memberUserIds", "array_contains", user_id))
        try:
            teams = [Team.model_validate(_with_id(doc)) for doc in query.stream()]
        except Exception as e:
            raise RuntimeError(f"Failed to fetch teams for user {user_id}: {e}")
        return [t for t in teams if any(m.user_id == user_id for m in t.active_members)]


_firestore_service: Optional[FirestoreService] = None


def get_firestore_service(settings: Settings) -> FirestoreService:
    """Get or create the Firestore service singleton."""
    global _firestore_service
    if _firestore_service is None:
        _firestore_service = FirestoreService(settings)
    return _firestore_service
