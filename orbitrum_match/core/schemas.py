"""Core data models for the matching engine.

Client requests and professional profiles are frozen snapshots. Scores are
attached through the ScoredProfessional wrapper, never written back onto the
profile.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    FiniteFloat,
    field_validator,
)
from pydantic.alias_generators import to_camel


class Urgency(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class WorkMode(str, Enum):
    ONSITE = "onsite"
    REMOTE = "remote"
    HYBRID = "hybrid"


class CommunicationStyle(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    TECHNICAL = "technical"


class ExperienceLevel(str, Enum):
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"


class WorkMethodology(str, Enum):
    AGILE = "agile"
    WATERFALL = "waterfall"
    OTHER = "other"


# Portuguese values used by the mobile app and older records.
_ALIASES: dict[type[Enum], dict[str, str]] = {
    Urgency: {"baixa": "low", "alta": "high", "urgente": "urgent"},
    WorkMode: {
        "presencial": "onsite",
        "remoto": "remote",
        "hibrido": "hybrid",
        "híbrido": "hybrid",
    },
    CommunicationStyle: {"técnico": "technical", "tecnico": "technical"},
    ExperienceLevel: {"pleno": "mid"},
    WorkMethodology: {},
}

# Display labels for explanations shown to Brazilian users.
WORK_MODE_LABELS: dict[WorkMode, str] = {
    WorkMode.ONSITE: "presencial",
    WorkMode.REMOTE: "remoto",
    WorkMode.HYBRID: "híbrido",
}


def normalize_enum_value(enum_cls: type[Enum], value: Any) -> Any:
    """Map a raw string (canonical or alias, any case) onto an enum value.

    Non-string values pass through untouched so pydantic reports them.
    """
    if isinstance(value, enum_cls) or not isinstance(value, str):
        return value
    key = value.strip().lower()
    return _ALIASES.get(enum_cls, {}).get(key, key)


def _dedupe(values: tuple[str, ...]) -> tuple[str, ...]:
    cleaned = (v.strip() for v in values)
    return tuple(dict.fromkeys(v for v in cleaned if v))


class _Model(BaseModel):
    """Frozen model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ClientLocation(_Model):
    latitude: FiniteFloat
    longitude: FiniteFloat
    city: str = ""
    state: str = ""


class ProfessionalLocation(ClientLocation):
    work_radius_km: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("work_radius_km", "workRadiusKm", "workRadius"),
    )


class ClientRequest(_Model):
    """A single search issued by a client."""

    project_type: str
    budget: float = Field(default=0.0, ge=0.0)
    urgency: Urgency = Urgency.NORMAL
    work_preference: WorkMode
    communication_style: CommunicationStyle
    experience_required: ExperienceLevel
    location: ClientLocation | None = None

    @field_validator("project_type")
    @classmethod
    def project_type_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "project_type must not be empty"
            raise ValueError(msg)
        return v.strip()

    @field_validator("urgency", mode="before")
    @classmethod
    def _normalize_urgency(cls, v: Any) -> Any:
        return normalize_enum_value(Urgency, v)

    @field_validator("work_preference", mode="before")
    @classmethod
    def _normalize_work_preference(cls, v: Any) -> Any:
        return normalize_enum_value(WorkMode, v)

    @field_validator("communication_style", mode="before")
    @classmethod
    def _normalize_communication_style(cls, v: Any) -> Any:
        return normalize_enum_value(CommunicationStyle, v)

    @field_validator("experience_required", mode="before")
    @classmethod
    def _normalize_experience(cls, v: Any) -> Any:
        return normalize_enum_value(ExperienceLevel, v)


class ProfessionalProfile(_Model):
    """A candidate professional, as loaded by the caller."""

    id: int | str
    name: str
    title: str = ""
    skills: tuple[str, ...] = ()
    specializations: tuple[str, ...] = ()
    experience_years: float = Field(default=0.0, ge=0.0)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    completed_projects: int = Field(default=0, ge=0)
    response_time_hours: float = Field(default=24.0, ge=0.0)
    hourly_rate: float = Field(default=0.0, ge=0.0)
    available: bool = True
    work_preferences: tuple[WorkMode, ...] = ()
    communication_style: CommunicationStyle = CommunicationStyle.TECHNICAL
    work_methodology: WorkMethodology = WorkMethodology.OTHER
    location: ProfessionalLocation | None = None

    @field_validator("skills", "specializations")
    @classmethod
    def _dedupe_terms(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _dedupe(v)

    @field_validator("work_preferences", mode="before")
    @classmethod
    def _normalize_work_preferences(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple, set, frozenset)):
            return tuple(normalize_enum_value(WorkMode, item) for item in v)
        return v

    @field_validator("work_preferences")
    @classmethod
    def _dedupe_work_preferences(cls, v: tuple[WorkMode, ...]) -> tuple[WorkMode, ...]:
        return tuple(dict.fromkeys(v))

    @field_validator("communication_style", mode="before")
    @classmethod
    def _normalize_communication_style(cls, v: Any) -> Any:
        return normalize_enum_value(CommunicationStyle, v)

    @field_validator("work_methodology", mode="before")
    @classmethod
    def _normalize_methodology(cls, v: Any) -> Any:
        v = normalize_enum_value(WorkMethodology, v)
        if isinstance(v, str) and v not in {m.value for m in WorkMethodology}:
            return WorkMethodology.OTHER
        return v


class SubScores(BaseModel):
    """Per-factor compatibility, each normalized to [0, 1]."""

    model_config = ConfigDict(frozen=True)

    technical: float = Field(ge=0.0, le=1.0)
    geographic: float = Field(ge=0.0, le=1.0)
    personal: float = Field(ge=0.0, le=1.0)
    availability: float = Field(ge=0.0, le=1.0)


class ScoredProfessional(BaseModel):
    """Wrapper that pairs a frozen ProfessionalProfile with its match score."""

    model_config = ConfigDict(frozen=True)

    professional: ProfessionalProfile
    ai_match_score: float = Field(default=0.0, ge=0.0, le=100.0)
    sub_scores: SubScores | None = None


class MatchResult(BaseModel):
    """A ranked professional together with its user-facing explanation."""

    model_config = ConfigDict(frozen=True)

    scored: ScoredProfessional
    explanation: str = ""


class MatchRunResult(BaseModel):
    """Summary of a single match run."""

    criteria: ClientRequest
    matches: list[MatchResult] = Field(default_factory=list)
    total_analyzed: int = Field(default=0, ge=0)
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime = Field(default_factory=datetime.now)
