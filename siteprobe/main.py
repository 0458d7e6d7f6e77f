"""
Command line entry point for siteprobe.
"""

import argparse
import dataclasses
import logging
import sys
import traceback
from typing import Optional, Sequence

from dotenv import load_dotenv

from .config import MODES, ProbeConfig
from .core.exceptions import DriverStartError, InvalidConfigurationError, ScraperError
from .core.session import SeleniumSession
from .orchestrator import Orchestrator
from .output import RunArtifacts
from .utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="siteprobe",
        description="Explore a website, test its clickable elements and extract its content to CSV.",
    )
    parser.add_argument("urls", nargs="*", help="Target URLs (scrape) or base URL (other modes)")
    parser.add_argument("--mode", choices=MODES, help="What to run (default: MODE or scrape)")
    parser.add_argument("--browser", help="chrome or firefox (default: BROWSER or chrome)")
    parser.add_argument("--debug", action="store_true", default=None, help="Show the browser window")
    parser.add_argument("--output-dir", help="Where CSV and snapshot files go")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def resolve_config(args: argparse.Namespace, environ=None) -> ProbeConfig:
    """Environment first, command line arguments on top."""
    config = ProbeConfig.from_env(environ)
    overrides = {}
    if args.mode:
        overrides["mode"] = args.mode
    if args.browser:
        overrides["browser"] = args.browser.strip().lower()
    if args.debug:
        overrides["debug"] = True
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.urls:
        overrides["target_urls"] = tuple(args.urls)
        overrides["base_url"] = args.urls[0]

    config = dataclasses.replace(config, **overrides)
    config.validate()
    return config


def run(config: ProbeConfig) -> int:
    """Run one probe; returns the process exit status."""
    artifacts = RunArtifacts(config.output_dir)
    sink = artifacts.open_sink(config.mode)
    try:
        with SeleniumSession(config.browser, debug=config.debug, wait_timeout=config.wait_timeout) as session:
            summary = Orchestrator(session, sink, config, artifacts=artifacts).run()
    finally:
        sink.close()

    print("\n=== RUN COMPLETE ===")
    print(f"Mode: {summary.mode}")
    print(f"Unique URLs visited: {summary.locations_visited}")
    if summary.mode == "scrape":
        print(f"Total items scraped: {summary.items_scraped}")
    else:
        print(f"Total elements tested: {summary.attempts}")
    if summary.failed_locations:
        print(f"Locations that failed to load: {len(summary.failed_locations)}")
    if summary.sink_failures:
        print(f"⚠️  Rows that could not be written: {summary.sink_failures}")
    print(f"CSV: {sink.path.resolve()}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
    except InvalidConfigurationError as e:
        print(f"ERROR: {e}")
        return 2

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_file=config.log_file)

    print("🚀 Starting siteprobe")
    print("=" * 50)
    print(f"Mode: {config.mode}")
    print(f"Browser: {config.browser}")
    print(f"Debug mode: {config.debug}")
    print("=" * 50)

    try:
        return run(config)

    except KeyboardInterrupt:
        print("\n⚠️  Run interrupted by user")
        return 130

    except DriverStartError as e:
        print(f"\n❌ Browser could not be started: {e}")
        return 1

    except ScraperError as e:
        print(f"\n❌ Run failed: {e}")
        if config.debug:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
