"""
Configuration for the team/opportunity matching and culture scoring system.
Adjust weights, thresholds and lookup tables here.
"""

# Component weights for scoring a team against an opportunity (must sum to 1.0)
MATCH_WEIGHTS = {
    "skills_match": 0.30,
    "industry_match": 0.20,
    "compensation_match": 0.15,
    "size_match": 0.10,
    "location_match": 0.10,
    "experience_match": 0.10,
    "availability_match": 0.05,
}

# Component weights for scoring an opportunity from the team's side (must sum to 1.0)
OPPORTUNITY_MATCH_WEIGHTS = {
    "skills_match": 0.30,
    "industry_match": 0.20,
    "location_match": 0.10,
    "size_match": 0.10,
    "compensation_match": 0.15,
    "urgency_bonus": 0.05,
    "company_quality": 0.10,
}

# Skills scoring weights
SKILLS_WEIGHTS = {
    "required": 70,
    "preferred": 30,
}

# Recommendation tiers, checked top-down
RECOMMENDATION_THRESHOLDS = [
    (85, "excellent"),
    (70, "good"),
    (55, "fair"),
]
RECOMMENDATION_FLOOR = "poor"

# Neutral scores used when one side has no data
DEFAULT_SCORES = {
    "skills_no_requirements": 70,
    "industry_unknown": 50,
    "industry_related": 75,
    "industry_unrelated": 40,
    "compensation_unset": 70,
}

# Location scoring
LOCATION_SCORES = {
    "both_remote": 100,
    "remote_opportunity": 90,
    "same_location": 100,
    "hybrid": 70,
    "remote_team_onsite": 30,
    "other": 50,
}

# Team size scoring
SIZE_DEFAULTS = {
    "min": 1,
    "max": 20,
}
SIZE_PENALTIES = {
    "per_missing_member": 15,
    "per_extra_member": 10,
}

# Compensation scoring
COMPENSATION_BASE = 70
COMPENSATION_OVERLAP_BONUS = 30

# Industry transfer adjacency (team industry -> related opportunity industries)
INDUSTRY_ADJACENCY = {
    "financial services": ["fintech", "investment banking", "private equity", "consulting"],
    "technology": ["fintech", "healthcare technology", "enterprise software"],
    "healthcare": ["healthcare technology", "biotechnology", "pharmaceuticals"],
    "consulting": ["financial services", "technology", "strategy"],
}

# Years working together -> experience score, checked top-down
EXPERIENCE_SCORES = [
    (5, 100),
    (3, 85),
    (2, 70),
    (1, 55),
]
EXPERIENCE_FLOOR = 40

# Availability status -> score, anything else scores 0
AVAILABILITY_SCORES = {
    "available": 100,
    "selective": 70,
    "engaged": 40,
}

# Insight thresholds
INSIGHT_THRESHOLDS = {
    "skills_strength": 80,
    "skills_concern": 50,
    "industry_strength": 90,
    "industry_concern": 50,
    "experience_strength": 85,
    "experience_concern": 50,
    "compensation_concern": 60,
    "location_concern": 50,
}

INSIGHT_MESSAGES = {
    "skills_strength": "Exceptional skills alignment",
    "skills_concern": "Skills gap may require training",
    "industry_strength": "Direct industry experience",
    "industry_concern": "Industry transition needed",
    "experience_strength": "Highly cohesive team",
    "experience_concern": "Limited shared working history",
    "compensation_concern": "Compensation expectations may not align",
    "location_concern": "Location/remote work mismatch",
    "verified": "Verified credentials",
    "verification_pending": "Verification pending",
}

# Candidate pool and result paging
CANDIDATE_POOL_SIZE = 100
DEFAULT_MIN_SCORE = 50
DEFAULT_LIMIT = 20


# ---------------------------------------------------------------------------
# Opportunity-side scoring
# ---------------------------------------------------------------------------

OPPORTUNITY_SKILLS_DEFAULTS = {
    "no_required": 35,
    "no_preferred": 15,
}

INDUSTRY_COMPATIBILITY_MATRIX = {
    "financial services": {
        "fintech": 90,
        "investment banking": 95,
        "private equity": 90,
        "consulting": 75,
        "technology": 60,
    },
    "technology": {
        "fintech": 85,
        "healthcare technology": 80,
        "enterprise software": 90,
        "consulting": 65,
    },
    "healthcare": {
        "healthcare technology": 90,
        "biotechnology": 85,
        "pharmaceuticals": 80,
    },
    "consulting": {
        "financial services": 75,
        "technology": 70,
        "strategy": 90,
    },
}
INDUSTRY_PARTIAL_WORD_SCORE = 65

OPPORTUNITY_LOCATION_SCORES = {
    "remote_opportunity": 100,
    "remote_team_hybrid": 70,
    "remote_team_onsite": 30,
    "hybrid": 75,
    "same_location": 100,
    "same_region": 70,
    "other": 50,
}

OPPORTUNITY_COMPENSATION_SCORES = {
    "meets_max": 100,
    "meets_min": 85,
    "floor": 20,
}

URGENCY_SCORES = {
    "critical": 100,
    "high": 85,
    "standard": 70,
    "low": 50,
}
URGENCY_DEFAULT = 70

COMPANY_QUALITY = {
    "base": 50,
    "verified": 30,
    "pending": 10,
    "logo": 10,
    "industry": 10,
}

OPPORTUNITY_INSIGHT_MESSAGES = {
    "skills_strength": "Strong skills alignment",
    "industry_strength": "Direct industry experience",
    "compensation_strength": "Compensation meets expectations",
    "featured": "Featured opportunity",
    "verified_company": "Verified company",
    "skills_concern": "Skills gap may require training",
    "industry_concern": "Significant industry transition",
    "compensation_concern": "Below compensation expectations",
    "location_concern": "Location/remote work mismatch",
    "size_concern": "Team size doesn't match requirements",
    "urgency": "High urgency - faster decision process expected",
}

OPPORTUNITY_INSIGHT_THRESHOLDS = {
    "skills_strength": 80,
    "industry_strength": 90,
    "compensation_strength": 85,
    "skills_concern": 50,
    "industry_concern": 50,
    "compensation_concern": 60,
    "location_concern": 50,
    "size_concern": 70,
    "urgency": 85,
    "competitive_applications": 10,
    "cohesion_years": 3,
}


# ---------------------------------------------------------------------------
# Preview scoring and display helpers
# ---------------------------------------------------------------------------

PREVIEW_WEIGHTS = {
    "skills": 0.6,
    "industry": 0.4,
}
PREVIEW_SCORES = {
    "no_skills": 50,
    "industry_exact": 100,
    "industry_partial": 70,
    "industry_other": 40,
}

MATCH_RECOMMENDATION_LABELS = {
    "excellent": ("Excellent Match", "Highly compatible - strong alignment across key factors"),
    "good": ("Good Match", "Good compatibility - minor gaps that can be addressed"),
    "fair": ("Fair Match", "Moderate compatibility - some areas need attention"),
    "poor": ("Low Match", "Limited compatibility - significant gaps exist"),
}

# Keyed by breakdown keys as they appear in API responses
FACTOR_LABELS = {
    "skillsMatch": "Skills Alignment",
    "industryMatch": "Industry Fit",
    "locationMatch": "Location Match",
    "sizeMatch": "Team Size Fit",
    "compensationMatch": "Compensation",
    "experienceMatch": "Experience Level",
    "availabilityMatch": "Availability",
    "urgencyBonus": "Urgency Match",
    "companyQuality": "Company Profile",
}

FACTOR_DISPLAY_WEIGHTS = {
    "skillsMatch": 30,
    "industryMatch": 20,
    "compensationMatch": 15,
    "sizeMatch": 10,
    "locationMatch": 10,
    "experienceMatch": 10,
    "availabilityMatch": 5,
    "urgencyBonus": 5,
    "companyQuality": 10,
}
FACTOR_DISPLAY_WEIGHT_DEFAULT = 10


# ---------------------------------------------------------------------------
# Culture scoring
# ---------------------------------------------------------------------------

# Style keyword -> attribute -> score
CULTURE_STYLE_TABLE = {
    "collaborative": {"collaboration": 85, "hierarchy": 35, "results": 60},
    "hierarchical": {"collaboration": 50, "hierarchy": 75, "results": 65},
    "agile": {"collaboration": 80, "hierarchy": 30, "results": 75},
    "autonomous": {"collaboration": 45, "hierarchy": 25, "results": 70},
    "direct": {"directness": 85, "formality": 60, "openness": 75},
    "balanced": {"directness": 60, "formality": 55, "openness": 65, "structure": 60},
    "formal": {"directness": 50, "formality": 80, "openness": 45, "structure": 75},
    "open": {"directness": 70, "formality": 40, "openness": 85, "structure": 45},
}

# Theme -> positive/negative keywords and the boost applied on a hit
CULTURE_KEYWORDS = {
    "innovation": {
        "positive": ["innovate", "creative", "cutting-edge", "pioneer", "disrupt"],
        "negative": ["traditional", "conservative", "stable"],
        "boost": 20,
    },
    "hierarchy": {
        "positive": ["structured", "hierarchy", "formal", "process"],
        "negative": ["flat", "egalitarian", "democratic"],
        "boost": 25,
    },
    "team": {
        "positive": ["team", "collaborative", "together", "collective"],
        "negative": ["individual", "autonomous", "independent"],
        "boost": 25,
    },
    "risk": {
        "positive": ["bold", "risk", "aggressive", "ambitious"],
        "negative": ["cautious", "conservative", "safe"],
        "boost": 20,
    },
    "transparency": {
        "positive": ["transparent", "open", "honest", "candid"],
        "negative": ["confidential", "private", "discrete"],
        "boost": 20,
    },
    "results": {
        "positive": ["results", "performance", "achievement", "outcome"],
        "negative": ["process", "procedure", "methodology"],
        "boost": 15,
    },
}
CULTURE_SCORE_BOUNDS = (10, 95)

# Company size adjustments: (employees above, boost, cap); smallest companies get a penalty
SIZE_ADJUSTMENTS = [
    (10000, 20, 85),
    (1000, 10, 75),
]
SIZE_NEUTRAL_ABOVE = 100
SMALL_COMPANY_PENALTY = 15
SMALL_COMPANY_FLOOR = 35

TEAM_DEFAULT_WORKING_STYLE = "collaborative"
TEAM_DEFAULT_COMMUNICATION_STYLE = "balanced"

CONFIDENCE_LEVELS = {
    "team": (75, 50),
    "company": (80, 55),
}

# Dimension key -> human readable name; long_term_orientation is not compared
COMPARED_DIMENSIONS = {
    "power_distance": "Hierarchy Preference",
    "individualism_vs_collectivism": "Team vs Individual Focus",
    "uncertainty_avoidance": "Structure Preference",
    "innovation_vs_stability": "Innovation Orientation",
    "process_vs_results": "Process vs Results",
    "risk_tolerance": "Risk Tolerance",
    "transparency_vs_confidentiality": "Communication Openness",
}

COMPATIBILITY_LEVEL_THRESHOLDS = [
    (85, "excellent"),
    (70, "good"),
    (55, "moderate"),
    (40, "poor"),
]
COMPATIBILITY_LEVEL_FLOOR = "mismatched"

GAP_THRESHOLDS = {
    "impact_high": 40,
    "impact_medium": 20,
    "risk": 30,
    "risk_high_severity": 50,
    "strength": 15,
}
RISK_PROBABILITY_BASE = 50
RISK_PROBABILITY_CAP = 90

# Dimension -> (message when team score is higher, message when team score is lower or equal)
CULTURE_RECOMMENDATIONS = {
    "Hierarchy Preference": (
        "Team prefers more structure - clarify reporting lines and decision authority early",
        "Team is more egalitarian - provide autonomy while explaining company processes",
    ),
    "Team vs Individual Focus": (
        "Team values individual contribution - ensure clear personal accountability",
        "Team is more collaborative - emphasize team-based projects and shared goals",
    ),
    "Innovation Orientation": (
        "Team is innovation-driven - channel energy into R&D or improvement initiatives",
        "Team prefers stability - emphasize optimization over disruption initially",
    ),
    "Risk Tolerance": (
        "Team takes more risks - establish guardrails while allowing calculated experimentation",
        "Team is more cautious - build trust through gradual expansion of responsibilities",
    ),
}

INTEGRATION_TIMELINE_DAYS = {
    "standard": 90,
    "extended": 120,
}
INTEGRATION_EXTENDED_RISK_COUNT = 2

INTEGRATION_PHASES = [
    {
        "id": "phase-1",
        "name": "Cultural Discovery",
        "duration": 30,
        "activities": ["Team introduction sessions", "Culture ambassador pairing", "Values alignment workshop"],
    },
    {
        "id": "phase-2",
        "name": "Integration",
        "duration": 60,
        "activities": ["Process training", "Cross-team projects", "Feedback loops"],
    },
]

INTEGRATION_SUCCESS_METRICS = [
    "Team retention >95% at 6 months",
    "Cultural integration score >80%",
    "Performance metrics maintained",
]
