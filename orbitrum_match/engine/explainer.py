"""Human-readable justification for a recommended professional."""

from orbitrum_match.core.config import ExplanationConfig
from orbitrum_match.core.schemas import WORK_MODE_LABELS, ClientRequest, ScoredProfessional
from orbitrum_match.engine.distance import distance_between


def explain_match(
    client: ClientRequest,
    scored: ScoredProfessional,
    config: ExplanationConfig | None = None,
) -> str:
    """Build a one-sentence explanation from the predicates that hold.

    Falls back to a sentence quoting the match score when none apply, so the
    result is never empty.
    """
    config = config or ExplanationConfig()
    professional = scored.professional
    reasons: list[str] = []

    if professional.experience_years >= config.min_experience_years:
        reasons.append(f"{_fmt(professional.experience_years)} anos de experiência comprovada")

    if professional.rating >= config.min_rating:
        reasons.append(f"avaliação excelente ({_fmt(professional.rating)}⭐)")

    if client.work_preference in professional.work_preferences:
        reasons.append(f"atende no formato {WORK_MODE_LABELS[client.work_preference]}")

    if client.location is not None and professional.location is not None:
        distance = distance_between(client.location, professional.location)
        if distance <= professional.location.work_radius_km:
            reasons.append(f"atende na sua região ({round(distance)}km)")

    if professional.response_time_hours <= config.max_response_hours:
        reasons.append(f"resposta rápida ({_fmt(professional.response_time_hours)}h)")

    if not reasons:
        return config.fallback_template.format(score=_fmt(scored.ai_match_score))
    return f"{config.lead_in}{', '.join(reasons)}."


def _fmt(value: float) -> str:
    """Render 10.0 as '10' and 4.8 as '4.8'."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
