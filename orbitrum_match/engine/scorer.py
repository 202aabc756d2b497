"""Rule-based compatibility scoring between a client request and a professional.

Score range: 0-100, rounded to 2 decimals. Four sub-scores, each clamped to
[0, 1], are combined with the weights from ScoringConfig:

  technical     skills, experience, track record, specialization
  geographic    remote short-circuit, then distance vs. work radius
  personal      communication style, work mode, methodology, baseline
  availability  rating, response time, current availability
"""

from orbitrum_match.core.config import Band, ScoringConfig, ScoringWeights
from orbitrum_match.core.schemas import (
    ClientRequest,
    ProfessionalProfile,
    SubScores,
    WorkMode,
)
from orbitrum_match.engine.distance import distance_between

_DEFAULT_CONFIG = ScoringConfig()


def score_professional(
    client: ClientRequest,
    professional: ProfessionalProfile,
    config: ScoringConfig | None = None,
) -> float:
    """Return the 0-100 compatibility score for one professional."""
    config = config or _DEFAULT_CONFIG
    return combine(score_breakdown(client, professional, config), config.weights)


def score_breakdown(
    client: ClientRequest,
    professional: ProfessionalProfile,
    config: ScoringConfig | None = None,
) -> SubScores:
    """Compute the four normalized sub-scores."""
    config = config or _DEFAULT_CONFIG
    return SubScores(
        technical=technical_score(client, professional, config),
        geographic=geographic_score(client, professional, config),
        personal=personal_score(client, professional, config),
        availability=availability_score(professional, config),
    )


def combine(sub_scores: SubScores, weights: ScoringWeights) -> float:
    """Weight the sub-scores into a 0-100 score rounded to 2 decimals."""
    total = (
        sub_scores.technical * weights.technical
        + sub_scores.geographic * weights.geographic
        + sub_scores.personal * weights.personal
        + sub_scores.availability * weights.availability
    )
    return max(0.0, min(100.0, round(total * 100, 2)))


def technical_score(
    client: ClientRequest,
    professional: ProfessionalProfile,
    config: ScoringConfig | None = None,
) -> float:
    rules = (config or _DEFAULT_CONFIG).technical
    score = 0.0

    # Unknown levels simply earn nothing.
    exp_range = rules.experience_ranges.get(client.experience_required)
    if exp_range is not None and exp_range.contains(professional.experience_years):
        score += rules.experience_in_range_points
        if professional.experience_years == exp_range.optimal_years:
            score += rules.experience_optimal_points

    project = client.project_type.lower()
    if any(_overlaps(skill.lower(), project) for skill in professional.skills):
        score += rules.skill_match_points

    score += _at_least(professional.completed_projects, rules.completed_project_bands)

    if any(spec.lower() in project for spec in professional.specializations):
        score += rules.specialization_points

    return _clamp(score)


def geographic_score(
    client: ClientRequest,
    professional: ProfessionalProfile,
    config: ScoringConfig | None = None,
) -> float:
    rules = (config or _DEFAULT_CONFIG).geographic

    if client.work_preference == WorkMode.REMOTE and WorkMode.REMOTE in professional.work_preferences:
        return rules.remote_match_score

    if client.location is None or professional.location is None:
        return rules.missing_location_score

    distance = distance_between(client.location, professional.location)
    radius = professional.location.work_radius_km

    if distance <= radius:
        return rules.within_radius_score
    if distance <= radius * rules.extended_radius_factor:
        return rules.extended_radius_score
    for threshold, points in rules.distance_bands:
        if distance <= threshold:
            return points
    return rules.beyond_bands_score


def personal_score(
    client: ClientRequest,
    professional: ProfessionalProfile,
    config: ScoringConfig | None = None,
) -> float:
    rules = (config or _DEFAULT_CONFIG).personal
    score = 0.0

    if client.communication_style == professional.communication_style:
        score += rules.style_match_points
    elif (client.communication_style, professional.communication_style) in rules.cross_compatible_pairs:
        score += rules.cross_compatible_points

    if client.work_preference in professional.work_preferences:
        score += rules.work_mode_match_points

    for bonus in rules.methodology_bonuses:
        if client.urgency == bonus.urgency and professional.work_methodology == bonus.methodology:
            score += bonus.points
            break

    score += rules.baseline_points

    return _clamp(score)


def availability_score(
    professional: ProfessionalProfile,
    config: ScoringConfig | None = None,
) -> float:
    rules = (config or _DEFAULT_CONFIG).availability
    score = 0.0

    score += _at_least(professional.rating, rules.rating_bands, default=rules.rating_floor_points)

    score += _at_most(professional.response_time_hours, rules.response_time_bands)

    if professional.available:
        score += rules.available_points

    return _clamp(score)


def _overlaps(a: str, b: str) -> bool:
    """True if either string contains the other."""
    return a in b or b in a


def _at_least(value: float, bands: list[Band], default: float = 0.0) -> float:
    for threshold, points in bands:
        if value >= threshold:
            return points
    return default


def _at_most(value: float, bands: list[Band]) -> float:
    for threshold, points in bands:
        if value <= threshold:
            return points
    return 0.0


def _clamp(score: float) -> float:
    return max(0.0, min(1.0, score))
