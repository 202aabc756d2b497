"""Rank professionals for a client request by compatibility score."""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from orbitrum_match.core.config import ScoringConfig
from orbitrum_match.core.schemas import ClientRequest, ProfessionalProfile, ScoredProfessional
from orbitrum_match.engine.scorer import combine, score_breakdown

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 6


def score_one(
    client: ClientRequest,
    professional: ProfessionalProfile,
    config: ScoringConfig | None = None,
) -> ScoredProfessional:
    """Score a single professional and wrap it with its breakdown."""
    config = config or ScoringConfig()
    sub_scores = score_breakdown(client, professional, config)
    return ScoredProfessional(
        professional=professional,
        ai_match_score=combine(sub_scores, config.weights),
        sub_scores=sub_scores,
    )


def rank_professionals(
    client: ClientRequest,
    professionals: Sequence[ProfessionalProfile],
    limit: int = DEFAULT_LIMIT,
    config: ScoringConfig | None = None,
    max_workers: int | None = None,
) -> list[ScoredProfessional]:
    """Score every candidate and return the top ``limit`` by score, descending.

    Ties keep their input order (``list.sort`` is stable). With
    ``max_workers`` > 1 scoring runs on a thread pool; ``Executor.map``
    yields results in input order so the output is identical either way.
    """
    if limit <= 0 or not professionals:
        return []

    config = config or ScoringConfig()
    score = partial(score_one, client, config=config)

    if max_workers is not None and max_workers > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(professionals))) as executor:
            scored = list(executor.map(score, professionals))
    else:
        scored = [score(p) for p in professionals]

    scored.sort(key=lambda s: s.ai_match_score, reverse=True)
    logger.debug(
        "Ranked %d professionals for '%s', returning top %d",
        len(scored), client.project_type, min(limit, len(scored)),
    )
    return scored[:limit]
