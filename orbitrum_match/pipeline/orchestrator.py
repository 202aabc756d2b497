"""Orchestrator: wires ranking, explanations and JSON export.

Data flow:
  1. Rank candidates (score, stable sort, truncate)
  2. Explain each ranked match (optional)
  3. Summarise the run
"""

import json
import logging
from collections.abc import Sequence
from datetime import datetime

from orbitrum_match.core.config import Settings
from orbitrum_match.core.schemas import (
    ClientRequest,
    MatchResult,
    MatchRunResult,
    ProfessionalProfile,
)
from orbitrum_match.engine.explainer import explain_match
from orbitrum_match.engine.ranker import rank_professionals

logger = logging.getLogger(__name__)


def run_match(
    client: ClientRequest,
    professionals: Sequence[ProfessionalProfile],
    settings: Settings | None = None,
) -> MatchRunResult:
    """Rank ``professionals`` for ``client`` and explain the top matches."""
    settings = settings or Settings()
    started_at = datetime.now()

    logger.info(
        "Matching '%s' (urgency=%s, work_preference=%s) against %d professionals",
        client.project_type,
        client.urgency.value,
        client.work_preference.value,
        len(professionals),
    )

    ranked = rank_professionals(
        client,
        professionals,
        limit=settings.matching.limit,
        config=settings.scoring,
        max_workers=settings.matching.max_workers,
    )

    matches = [
        MatchResult(
            scored=s,
            explanation=explain_match(client, s, settings.explanation)
            if settings.matching.explain
            else "",
        )
        for s in ranked
    ]

    logger.info("Found %d compatible professionals", len(matches))

    return MatchRunResult(
        criteria=client,
        matches=matches,
        total_analyzed=len(professionals),
        started_at=started_at,
        finished_at=datetime.now(),
    )


def export_results_json(result: MatchRunResult) -> str:
    """Export a match run as a JSON string."""
    professionals = []
    for m in result.matches:
        entry = m.scored.professional.model_dump(mode="json")
        entry["ai_match_score"] = m.scored.ai_match_score
        entry["sub_scores"] = (
            m.scored.sub_scores.model_dump() if m.scored.sub_scores is not None else None
        )
        entry["ai_explanation"] = m.explanation
        professionals.append(entry)

    data = {
        "success": True,
        "criteria": result.criteria.model_dump(mode="json"),
        "total_analyzed": result.total_analyzed,
        "professionals": professionals,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
