"""Configuration models and YAML loader for the matching engine.

Every weight, threshold and contribution used by the scorer lives here as a
named field, so rules can be tuned from settings.yaml without touching the
scoring control flow.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from orbitrum_match.core.schemas import (
    CommunicationStyle,
    ExperienceLevel,
    Urgency,
    WorkMethodology,
)

# (threshold, points) pairs, evaluated top to bottom; first match wins.
Band = tuple[float, float]


def _check_descending(bands: list[Band]) -> list[Band]:
    thresholds = [t for t, _ in bands]
    if thresholds != sorted(thresholds, reverse=True):
        msg = "'at least' bands must be ordered by descending threshold"
        raise ValueError(msg)
    return bands


def _check_ascending(bands: list[Band]) -> list[Band]:
    thresholds = [t for t, _ in bands]
    if thresholds != sorted(thresholds):
        msg = "'at most' bands must be ordered by ascending threshold"
        raise ValueError(msg)
    return bands


class ScoringWeights(BaseModel):
    """Share of each sub-score in the final 0-100 score."""

    technical: float = Field(default=0.40, ge=0.0, le=1.0)
    geographic: float = Field(default=0.25, ge=0.0, le=1.0)
    personal: float = Field(default=0.20, ge=0.0, le=1.0)
    availability: float = Field(default=0.15, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "ScoringWeights":
        total = self.technical + self.geographic + self.personal + self.availability
        if abs(total - 1.0) > 1e-9:
            msg = f"scoring weights must sum to 1.0, got {total:g}"
            raise ValueError(msg)
        return self


class ExperienceRange(BaseModel):
    """Accepted years of experience for one seniority level."""

    min_years: float = Field(ge=0.0)
    max_years: float = Field(ge=0.0)
    optimal_years: float = Field(ge=0.0)

    @model_validator(mode="after")
    def optimal_within_range(self) -> "ExperienceRange":
        if not self.min_years <= self.optimal_years <= self.max_years:
            msg = "experience range must satisfy min_years <= optimal_years <= max_years"
            raise ValueError(msg)
        return self

    def contains(self, years: float) -> bool:
        return self.min_years <= years <= self.max_years


def _default_experience_ranges() -> dict[ExperienceLevel, ExperienceRange]:
    return {
        ExperienceLevel.JUNIOR: ExperienceRange(min_years=0, max_years=2, optimal_years=1),
        ExperienceLevel.MID: ExperienceRange(min_years=2, max_years=8, optimal_years=5),
        ExperienceLevel.SENIOR: ExperienceRange(min_years=5, max_years=20, optimal_years=10),
    }


class TechnicalRules(BaseModel):
    """Skills, experience and track record."""

    experience_ranges: dict[ExperienceLevel, ExperienceRange] = Field(
        default_factory=_default_experience_ranges,
    )
    experience_in_range_points: float = 0.4
    experience_optimal_points: float = 0.1
    skill_match_points: float = 0.3
    # completed_projects >= threshold
    completed_project_bands: list[Band] = Field(
        default_factory=lambda: [(10, 0.2), (5, 0.15), (1, 0.1)],
    )
    specialization_points: float = 0.1

    @field_validator("completed_project_bands")
    @classmethod
    def _bands_descending(cls, v: list[Band]) -> list[Band]:
        return _check_descending(v)


class GeographicRules(BaseModel):
    """Remote short-circuit, missing-location fallback and distance bands."""

    remote_match_score: float = Field(default=1.0, ge=0.0, le=1.0)
    missing_location_score: float = Field(default=0.5, ge=0.0, le=1.0)
    within_radius_score: float = Field(default=1.0, ge=0.0, le=1.0)
    extended_radius_factor: float = Field(default=1.5, ge=1.0)
    extended_radius_score: float = Field(default=0.7, ge=0.0, le=1.0)
    # distance_km <= threshold, checked after the radius rules
    distance_bands: list[Band] = Field(default_factory=lambda: [(50, 0.4), (200, 0.2)])
    beyond_bands_score: float = Field(default=0.1, ge=0.0, le=1.0)

    @field_validator("distance_bands")
    @classmethod
    def _bands_ascending(cls, v: list[Band]) -> list[Band]:
        return _check_ascending(v)


class MethodologyBonus(BaseModel):
    urgency: Urgency
    methodology: WorkMethodology
    points: float


def _default_cross_pairs() -> list[tuple[CommunicationStyle, CommunicationStyle]]:
    # (client, professional); order matters.
    return [
        (CommunicationStyle.FORMAL, CommunicationStyle.TECHNICAL),
        (CommunicationStyle.TECHNICAL, CommunicationStyle.FORMAL),
        (CommunicationStyle.CASUAL, CommunicationStyle.TECHNICAL),
    ]


def _default_methodology_bonuses() -> list[MethodologyBonus]:
    return [
        MethodologyBonus(urgency=Urgency.URGENT, methodology=WorkMethodology.AGILE, points=0.2),
        MethodologyBonus(urgency=Urgency.LOW, methodology=WorkMethodology.WATERFALL, points=0.1),
    ]


class PersonalRules(BaseModel):
    """Communication style, work mode and methodology fit."""

    style_match_points: float = 0.4
    cross_compatible_points: float = 0.2
    cross_compatible_pairs: list[tuple[CommunicationStyle, CommunicationStyle]] = Field(
        default_factory=_default_cross_pairs,
    )
    work_mode_match_points: float = 0.3
    methodology_bonuses: list[MethodologyBonus] = Field(
        default_factory=_default_methodology_bonuses,
    )
    baseline_points: float = 0.1


class AvailabilityRules(BaseModel):
    """Rating, responsiveness and current availability."""

    # rating >= threshold
    rating_bands: list[Band] = Field(default_factory=lambda: [(4.5, 0.4), (4.0, 0.3), (3.5, 0.2)])
    rating_floor_points: float = 0.1
    # response_time_hours <= threshold
    response_time_bands: list[Band] = Field(
        default_factory=lambda: [(2, 0.3), (8, 0.2), (24, 0.1)],
    )
    available_points: float = 0.3

    @field_validator("rating_bands")
    @classmethod
    def _rating_descending(cls, v: list[Band]) -> list[Band]:
        return _check_descending(v)

    @field_validator("response_time_bands")
    @classmethod
    def _response_ascending(cls, v: list[Band]) -> list[Band]:
        return _check_ascending(v)


class ScoringConfig(BaseModel):
    """Weights plus the rule table for each sub-score."""

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    technical: TechnicalRules = Field(default_factory=TechnicalRules)
    geographic: GeographicRules = Field(default_factory=GeographicRules)
    personal: PersonalRules = Field(default_factory=PersonalRules)
    availability: AvailabilityRules = Field(default_factory=AvailabilityRules)


class ExplanationConfig(BaseModel):
    """Wording and thresholds for match explanations."""

    lead_in: str = "Recomendado pela IA: "
    fallback_template: str = "Profissional qualificado com score de compatibilidade {score}%."
    min_experience_years: float = 5
    min_rating: float = 4.5
    max_response_hours: float = 8

    @field_validator("fallback_template")
    @classmethod
    def template_has_score(cls, v: str) -> str:
        if "{score}" not in v:
            msg = "fallback_template must contain a {score} placeholder"
            raise ValueError(msg)
        return v


class MatchingConfig(BaseModel):
    """Ranking options."""

    limit: int = Field(default=6, ge=0)
    max_workers: int | None = Field(default=None, ge=1)
    explain: bool = True


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    explanation: ExplanationConfig = Field(default_factory=ExplanationConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)

    def to_yaml(self) -> str:
        """Render the effective settings as YAML."""
        data = self.model_dump(mode="json")
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
