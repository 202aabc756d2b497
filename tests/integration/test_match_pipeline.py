"""Integration test: records → rank → explain → export, and the CLI."""

import json
from pathlib import Path

import pytest

from main import main
from orbitrum_match.core.config import MatchingConfig, Settings
from orbitrum_match.core.schemas import ClientRequest, ProfessionalProfile
from orbitrum_match.pipeline.orchestrator import export_results_json, run_match
from orbitrum_match.pipeline.records import load_client_request, load_professionals

CLIENT_PATH = "data/client_request.example.yaml"
PROFESSIONALS_PATH = "data/professionals.example.yaml"


@pytest.fixture
def client() -> ClientRequest:
    return load_client_request(CLIENT_PATH)


@pytest.fixture
def professionals() -> list[ProfessionalProfile]:
    return load_professionals(PROFESSIONALS_PATH)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class TestRunMatch:
    def test_ranks_and_explains(
        self, client: ClientRequest, professionals: list[ProfessionalProfile],
    ) -> None:
        result = run_match(client, professionals)

        assert result.total_analyzed == 3
        names = [m.scored.professional.name for m in result.matches]
        assert names == ["Carlos Silva", "Ana Souza", "Bruno Lima"]

        scores = [m.scored.ai_match_score for m in result.matches]
        assert scores[0] == 100.0
        assert scores[1] == pytest.approx(44.5)
        assert scores[2] == pytest.approx(43.0)

        carlos, _, bruno = result.matches
        assert carlos.explanation.startswith("Recomendado pela IA: 10 anos de experiência")
        assert "atende na sua região" in carlos.explanation
        assert bruno.explanation == "Profissional qualificado com score de compatibilidade 43%."

    def test_respects_limit(
        self, client: ClientRequest, professionals: list[ProfessionalProfile],
    ) -> None:
        settings = Settings(matching=MatchingConfig(limit=1))
        result = run_match(client, professionals, settings)
        assert len(result.matches) == 1
        assert result.total_analyzed == 3

    def test_explanations_disabled(
        self, client: ClientRequest, professionals: list[ProfessionalProfile],
    ) -> None:
        settings = Settings(matching=MatchingConfig(explain=False, max_workers=2))
        result = run_match(client, professionals, settings)
        assert all(m.explanation == "" for m in result.matches)

    def test_no_candidates(self, client: ClientRequest) -> None:
        result = run_match(client, [])
        assert result.matches == []
        assert result.total_analyzed == 0

    def test_export_json(
        self, client: ClientRequest, professionals: list[ProfessionalProfile],
    ) -> None:
        data = json.loads(export_results_json(run_match(client, professionals)))

        assert data["success"] is True
        assert data["total_analyzed"] == 3
        assert data["criteria"]["urgency"] == "urgent"
        first = data["professionals"][0]
        assert first["name"] == "Carlos Silva"
        assert first["ai_match_score"] == 100.0
        assert first["sub_scores"]["technical"] == 1.0
        assert first["work_preferences"] == ["onsite"]
        assert first["ai_explanation"].startswith("Recomendado pela IA:")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestCli:
    def test_match_export_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "--client", CLIENT_PATH, "--professionals", PROFESSIONALS_PATH,
              "--limit", "2", "--export", "json"])
        data = json.loads(capsys.readouterr().out)
        assert [p["id"] for p in data["professionals"]] == [1, 2]

    def test_match_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "--client", CLIENT_PATH, "--professionals", PROFESSIONALS_PATH])
        out = capsys.readouterr().out
        assert "1. Carlos Silva - Encanador Residencial: 100.00" in out
        assert "3 of 3 professionals" in out

    def test_match_no_explain(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", "--client", CLIENT_PATH, "--professionals", PROFESSIONALS_PATH,
              "--no-explain"])
        assert "Recomendado pela IA" not in capsys.readouterr().out

    def test_missing_input_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["match", "--client", "/nonexistent.yaml", "--professionals", PROFESSIONALS_PATH])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_record_exits(self, tmp_path: Path) -> None:
        bad = tmp_path / "pros.yaml"
        bad.write_text("- id: 1\n  name: Ana\n  rating: 9\n")
        with pytest.raises(SystemExit) as exc:
            main(["match", "--client", CLIENT_PATH, "--professionals", str(bad)])
        assert exc.value.code == 1

    def test_show_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["show-config", "--config", "config/settings.yaml"])
        out = capsys.readouterr().out
        assert "weights:" in out
        assert "technical: 0.4" in out
