"""Command-line entry point: rank a candidate file against a set of filters."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from talentmatch.config.environment import EnvironmentConfig
from talentmatch.config.exceptions import ConfigurationError
from talentmatch.config.loader import load_config
from talentmatch.config.models import AppConfig
from talentmatch.logging import get_logger
from talentmatch.logging.config import configure_logging
from talentmatch.search.exceptions import RepositoryError
from talentmatch.search.repository import FileCandidateRepository
from talentmatch.search.service import CandidateSearchService

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level and format.

    Priority for both: CLI > environment > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    return app_config, env_config


def load_filters(filters_path: Optional[Path], filters_json: Optional[str]) -> Dict[str, Any]:
    """
    Read the raw filter payload from a file or an inline JSON string.

    Raises:
        ConfigurationError: If the payload cannot be read or is not an object
    """
    if filters_path and filters_json:
        raise ConfigurationError(
            "Use either --filters or --filters-json, not both",
        )

    try:
        if filters_path:
            with open(filters_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        elif filters_json:
            payload = json.loads(filters_json)
        else:
            return {}
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Failed to read filter payload: {e}",
            suggestions=[
                "Pass a JSON object such as '{\"skills\": [\"React\"], \"experience\": [\"mid\"]}'",
            ],
        )

    if not isinstance(payload, dict):
        raise ConfigurationError("Filter payload must be a JSON object")

    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="talentmatch - rank candidates against search filters by weighted match score"
    )
    parser.add_argument(
        "--candidates",
        type=Path,
        default=None,
        help="YAML or JSON file of candidate documents (default: $CANDIDATES_FILE)",
    )
    parser.add_argument(
        "--filters",
        type=Path,
        default=None,
        help="JSON file containing the filter payload",
    )
    parser.add_argument(
        "--filters-json",
        default=None,
        help="Filter payload as an inline JSON string",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results (default: scoring.default_limit, 0 = all)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one search and print the ranked results as JSON.

    Returns:
        Exit code (0 for success, 1 for configuration or repository errors)
    """
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
    except ConfigurationError as e:
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return 1

    configure_logging(
        level=env_config.log_level,
        format_type=env_config.log_format,
        environment=env_config.environment,
    )

    candidates_path = args.candidates or (
        Path(env_config.candidates_file) if env_config.candidates_file else None
    )
    if candidates_path is None:
        logger.error(
            "No candidate file given",
            extra={"event": "cli.candidates.missing"},
        )
        print("Error: pass --candidates or set CANDIDATES_FILE", file=sys.stderr)
        return 1

    try:
        raw_filters = load_filters(args.filters, args.filters_json)
        service = CandidateSearchService(
            FileCandidateRepository(candidates_path),
            scoring_config=app_config.scoring,
        )
        response = service.search(raw_filters, limit=args.limit)
    except ConfigurationError as e:
        logger.error(str(e), extra={"event": "cli.filters.invalid"})
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return 1
    except RepositoryError as e:
        logger.error(str(e), extra={"event": "cli.repository.failed"})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = {
        "searchId": response.search_id,
        "totalCandidates": response.total_candidates,
        "excludedInactive": response.excluded_inactive,
        "returned": response.returned_count,
        "criteria": response.criteria.to_raw(),
        "results": response.to_payload(),
    }
    print(json.dumps(output, indent=2, ensure_ascii=False, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
