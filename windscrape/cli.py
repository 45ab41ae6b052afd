"""CLI entry point for the Windguru forecast scraper."""

import argparse
import logging

from windscrape.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from windscrape.config.schema import ScraperConfig
from windscrape.ingest.deadline import Deadline
from windscrape.models.errors import ScrapeError
from windscrape.pipeline.batch import run_batch
from windscrape.pipeline.scrape_orchestrator import ScrapeOrchestrator
from windscrape.reporting.formatters import (
    describe_error,
    format_batch_json,
    format_batch_text,
    format_result_json,
    format_result_text,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="windscrape",
        description="Windguru forecast scraper",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # scrape
    scrape_p = sub.add_parser("scrape", help="Scrape one spot")
    scrape_p.add_argument("url", help="Windguru spot URL")
    scrape_p.add_argument("--json", action="store_true", help="Emit JSON")
    scrape_p.add_argument(
        "--timeout", type=float, default=None, help="Overall deadline in seconds"
    )

    # test-url
    test_p = sub.add_parser("test-url", help="Check that a spot URL can be scraped")
    test_p.add_argument("url", help="Windguru spot URL")

    # batch
    batch_p = sub.add_parser("batch", help="Scrape several spots concurrently")
    batch_p.add_argument("urls", nargs="+", help="Windguru spot URLs")
    batch_p.add_argument("--json", action="store_true", help="Emit JSON")
    batch_p.add_argument(
        "--workers", type=int, default=None, help="Concurrent scrapes"
    )

    # config show / get / set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Show a config value")
    get_p.add_argument("key", help="Dotted key, e.g. http.timeout_seconds")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "scrape":
        return _cmd_scrape(config, args)
    elif args.command == "test-url":
        return _cmd_test_url(config, args)
    elif args.command == "batch":
        return _cmd_batch(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_scrape(config: ScraperConfig, args) -> int:
    orchestrator = ScrapeOrchestrator.from_config(config)
    deadline = Deadline(args.timeout) if args.timeout else None
    try:
        result = orchestrator.scrape(args.url, deadline)
    except ScrapeError as e:
        print(f"Error ({e.reason}): {describe_error(e.reason)}")
        print(f"  {e}")
        return 1
    if args.json:
        print(format_result_json(result))
    else:
        print(format_result_text(result))
    return 0


def _cmd_test_url(config: ScraperConfig, args) -> int:
    orchestrator = ScrapeOrchestrator.from_config(config)
    ok = orchestrator.test_url(args.url)
    print(f"{args.url}: {'accessible' if ok else 'not accessible'}")
    return 0 if ok else 1


def _cmd_batch(config: ScraperConfig, args) -> int:
    orchestrator = ScrapeOrchestrator.from_config(config)
    workers = args.workers or config.batch.max_workers
    outcomes, summary = run_batch(orchestrator, args.urls, workers)
    if args.json:
        print(format_batch_json(outcomes, summary))
    else:
        print(format_batch_text(outcomes, summary))
    return 0 if summary.failed == 0 else 1


def _cmd_config(config: ScraperConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
        except (KeyError, IndexError, ValueError):
            print(f"Error: unknown key {args.key}")
            return 1
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        key = key.strip()
        try:
            updated = set_config_value(config, key, value.strip())
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        if args.config:
            save_config(updated, args.config)
        print(f"Set {key} = {get_config_value(updated, key)}")
        return 0
    else:
        print("Usage: windscrape config {show|get|set}")
        return 1
