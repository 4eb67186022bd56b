#!/usr/bin/env python3
"""
Spoiler Board Sync - CLI Entry Point

Usage:
    python -m spoiler_sync.main sync [--apply]
    python -m spoiler_sync.main reviews [--apply]

Both commands dry-run unless --apply is given.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from shared.http_utils import FetchError, PageFetcher
from shared.utils.logging_utils import log_error

from spoiler_sync.src.config import (
    CONFIG_FILE,
    SyncConfig,
    apply_env_overrides,
    load_config,
)
from spoiler_sync.src.crawler import SpoilerCrawler
from spoiler_sync.src.errors import ConfigError, ListNotFoundError, ReviewMatchError
from spoiler_sync.src.pipeline import ReviewPipeline, SyncPipeline
from spoiler_sync.src.trello_client import TrelloBoard


def setup_logging(log_file: str, verbose: bool = False):
    """
    Setup logging configuration.

    Status lines already go to the console through print, so the console
    handler is only added in verbose mode.

    Args:
        log_file: Path to log file (empty = no file)
        verbose: Also log DEBUG and above to the console
    """
    handlers: List[logging.Handler] = []

    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True  # Force reconfiguration if already configured
    )
    # requests/urllib3 debug lines would include the Trello credentials
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sync a Trello board with a set spoiler feed and set reviews"
    )
    parser.add_argument("--config", default=CONFIG_FILE, help="Path to config.json")
    parser.add_argument("--board-id", help="Trello board id (overrides config/env)")
    parser.add_argument("--apply", action="store_true",
                        help="Write to the board (default is a dry run)")
    parser.add_argument("--log-file", help="Write detailed logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")

    commands = parser.add_subparsers(dest="command", required=True)

    sync = commands.add_parser("sync", help="Add newly spoiled cards to the board")
    sync.add_argument("--url", dest="spoiler_url", help="Spoiler feed start URL")
    sync.add_argument("--limit", dest="new_card_limit", type=int,
                      help="Maximum number of new cards to add")

    reviews = commands.add_parser("reviews", help="Comment set review ratings on board cards")
    reviews.add_argument("--url", dest="review_urls", action="append",
                         help="Review page URL (repeatable, replaces configured list)")
    reviews.add_argument("--limit", dest="review_limit", type=int,
                         help="Maximum number of reviews to import")
    return parser


def resolve_config(args: argparse.Namespace) -> SyncConfig:
    """Merge config.json, environment and CLI flags into a SyncConfig."""
    settings = apply_env_overrides(load_config(args.config))

    for key in ("board_id", "log_file", "spoiler_url", "new_card_limit",
                "review_urls", "review_limit"):
        value = getattr(args, key, None)
        if value is not None:
            settings[key] = value
    if args.apply:
        settings["dry_run"] = False

    return SyncConfig.from_dict(settings)


async def run_command(command: str, cfg: SyncConfig) -> int:
    fetcher = PageFetcher(timeout=cfg.timeout)
    board = TrelloBoard(cfg.trello_api_key, cfg.trello_token, cfg.board_id, timeout=cfg.timeout)
    try:
        if command == "sync":
            crawler = SpoilerCrawler(fetcher.fetch)
            outcomes = await SyncPipeline(cfg, board, crawler).run()
        else:
            outcomes = await ReviewPipeline(cfg, board, fetcher.fetch).run()
    finally:
        fetcher.close()
        board.close()

    logging.info(f"{command}: {len(outcomes)} outcomes")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        cfg = resolve_config(args)
        setup_logging(cfg.log_file, args.verbose)
        cfg.require_board()
    except ConfigError as e:
        print(f"❌ Configuration error: {e}")
        print(f"Please edit {args.config} or set TRELLO_API_KEY, TRELLO_USER_TOKEN and BOARD_ID")
        return 1

    try:
        return asyncio.run(run_command(args.command, cfg))

    except KeyboardInterrupt:
        print()
        print("⚠ Interrupted by user")
        return 130

    except (ReviewMatchError, ListNotFoundError):
        # Already reported by the pipeline
        return 1

    except FetchError as e:
        log_error(print, str(e), exc=e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
