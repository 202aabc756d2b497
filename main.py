"""CLI entry point for the professional matching engine."""

import argparse
import logging
import sys

import yaml

from orbitrum_match.core.config import MatchingConfig, Settings
from orbitrum_match.core.schemas import MatchRunResult
from orbitrum_match.pipeline.orchestrator import export_results_json, run_match
from orbitrum_match.pipeline.records import load_client_request, load_professionals


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Orbitrum Connect matching engine - rank professionals for a client request",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- match subcommand ---
    match_parser = subparsers.add_parser("match", help="Rank professionals for a client request")
    match_parser.add_argument(
        "--client",
        required=True,
        help="Path to the client request (YAML or JSON)",
    )
    match_parser.add_argument(
        "--professionals",
        required=True,
        help="Path to the professional records (YAML or JSON list)",
    )
    match_parser.add_argument(
        "--config",
        help="Path to settings YAML file (default: built-in defaults)",
    )
    match_parser.add_argument(
        "--limit",
        type=int,
        help="Number of matches to return (overrides matching.limit)",
    )
    match_parser.add_argument(
        "--workers",
        type=int,
        help="Score on a thread pool with this many workers",
    )
    match_parser.add_argument(
        "--no-explain",
        action="store_true",
        help="Skip match explanations",
    )
    match_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )
    match_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- show-config subcommand ---
    config_parser = subparsers.add_parser(
        "show-config",
        help="Print the effective scoring weights and rules",
    )
    config_parser.add_argument(
        "--config",
        help="Path to settings YAML file (default: built-in defaults)",
    )
    config_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(args: argparse.Namespace) -> Settings:
    """Settings from --config (if given) with CLI overrides applied."""
    settings = Settings.from_yaml(args.config) if args.config else Settings()

    overrides: dict[str, object] = {}
    if getattr(args, "limit", None) is not None:
        overrides["limit"] = args.limit
    if getattr(args, "workers", None) is not None:
        overrides["max_workers"] = args.workers
    if getattr(args, "no_explain", False):
        overrides["explain"] = False
    if overrides:
        matching = MatchingConfig.model_validate(
            {**settings.matching.model_dump(), **overrides},
        )
        settings = settings.model_copy(update={"matching": matching})
    return settings


def print_summary(result: MatchRunResult) -> None:
    criteria = result.criteria
    print(
        f"\nMatched '{criteria.project_type}' ({criteria.experience_required.value}, "
        f"{criteria.work_preference.value}): {len(result.matches)} of "
        f"{result.total_analyzed} professionals"
    )
    for position, m in enumerate(result.matches, start=1):
        p = m.scored.professional
        print(f"  {position}. {p.name} - {p.title or 'no title'}: {m.scored.ai_match_score:.2f}")
        if m.explanation:
            print(f"     {m.explanation}")


def cmd_match(args: argparse.Namespace) -> None:
    """Handle match subcommand."""
    settings = load_settings(args)
    client = load_client_request(args.client)
    professionals = load_professionals(args.professionals)

    result = run_match(client, professionals, settings)

    if args.export == "json":
        print(export_results_json(result))
    else:
        print_summary(result)


def cmd_show_config(args: argparse.Namespace) -> None:
    """Handle show-config subcommand."""
    settings = load_settings(args)
    print(settings.to_yaml(), end="")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    handlers = {"match": cmd_match, "show-config": cmd_show_config}
    try:
        handlers[args.command](args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
