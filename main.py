#!/usr/bin/env python3
"""Figma References - find Figma designs linked from the PRs behind a file's history."""

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from figma_references.config import Config, ConfigError
from figma_references.git_client import GitHistorySource
from figma_references.github_client import GitHubClient
from figma_references.reference_service import FigmaReferenceService
from figma_references.reporter import ConsoleSink, run_search
from figma_references.settings import save_github_token, token_provider_for


def setup_logging(verbose: bool = False, logs_dir: str = "logs") -> None:
    """Configure dual logging: console + CSV file.

    Args:
        verbose: If True, console shows DEBUG level.
        logs_dir: Directory for log files.
    """
    Path(logs_dir).mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_file = Path(logs_dir) / f"run-{timestamp}.csv"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter

    # Console handler (stderr) - CSV format for easy review
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s,%(levelname)s,%(name)s,%(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s,%(levelname)s,%(name)s,%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    logging.info(f"Logging to: {log_file}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find Figma links in the pull requests that touched a file"
    )
    parser.add_argument(
        "file_path",
        nargs="?",
        help="File whose git history is searched",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        help="PRs fetched concurrently per group (default: from env or 5)",
    )
    parser.add_argument(
        "--chunk-delay-ms",
        type=int,
        help="Pause between groups in milliseconds (default: from env or 100)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per result",
    )
    parser.add_argument(
        "--save-token",
        type=str,
        metavar="TOKEN",
        help="Store a GitHub token in the settings file and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="Path to .env file (default: .env)",
    )
    parser.add_argument(
        "--logs-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs)",
    )
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.logs_dir)
    logger = logging.getLogger(__name__)

    if os.path.exists(args.env_file):
        load_dotenv(args.env_file)
        logger.info(f"Loaded environment from {args.env_file}")

    # Command-line overrides win over the environment
    if args.chunk_size is not None:
        os.environ["FIGMA_REFS_CHUNK_SIZE"] = str(args.chunk_size)
    if args.chunk_delay_ms is not None:
        os.environ["FIGMA_REFS_CHUNK_DELAY_MS"] = str(args.chunk_delay_ms)

    try:
        config = Config.from_env()

        if args.save_token:
            save_github_token(args.save_token, config.settings_path)
            print(f"GitHub token saved to {config.settings_path}")
            return 0

        github = GitHubClient(token_provider_for(config.settings_path))
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    service = FigmaReferenceService(
        history_source=GitHistorySource(timeout_seconds=config.git_timeout_seconds),
        pr_fetcher=github.get_pr_details,
        chunk_config=config.chunk_config,
    )
    sink = ConsoleSink(as_json=args.json)

    ok = asyncio.run(run_search(service, args.file_path, sink))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
