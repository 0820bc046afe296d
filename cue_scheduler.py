"""
cue_scheduler.py

Command line entrypoint that turns an analyzed game into a cue schedule.

Integration
- Loads config (config.py) and the cue catalog (stock or --catalog / catalog_path)
- Loads analyzed events from JSON (schedule_io.py)
- Builds the schedule (schedule_builder.py) and prints it as JSON on stdout
- --print-config prints the effective validated config instead and skips the events

Exit codes
- 0 on success
- 2 when config, catalog or events cannot be loaded
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

import config as app_config_module
import schedule_builder
import schedule_io
from cue_catalog import CatalogLoadError, CueCatalog, default_catalog, load_catalog_json

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send log records to stderr so stdout stays pure JSON."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )
    root_logger.addHandler(console_handler)
    return root_logger


def _resolve_catalog(catalog_argument: Optional[str], configured_path: Optional[str]) -> CueCatalog:
    catalog_text = catalog_argument or configured_path
    if not catalog_text:
        return default_catalog()
    return load_catalog_json(Path(catalog_text))


def _build_argument_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(description="Build an audio/visual cue schedule for a chess game.")
    argument_parser.add_argument("--events", default=None, help="JSON file with analyzed game events.")
    argument_parser.add_argument("--config", default=None, help="Config JSON file. Searched for when omitted.")
    argument_parser.add_argument("--catalog", default=None, help="Cue catalog JSON file. Overrides catalog_path.")
    argument_parser.add_argument("--seed", type=int, default=None, help="Pin the random crowd reaction choice.")
    argument_parser.add_argument("--verbose", action="store_true", help="Debug logging on stderr.")
    argument_parser.add_argument(
        "--print-config", action="store_true", help="Print the effective config as JSON and exit."
    )
    return argument_parser


def main(argv: Optional[List[str]] = None) -> int:
    argument_parser = _build_argument_parser()
    parsed_args = argument_parser.parse_args(argv)
    if not parsed_args.print_config and not parsed_args.events:
        argument_parser.error("--events is required unless --print-config is given")
    configure_logging(verbose=bool(parsed_args.verbose))

    try:
        config_path = Path(parsed_args.config) if parsed_args.config else None
        app_config, resolved_path = app_config_module.load_config(config_path)
        if parsed_args.print_config:
            print(app_config_module.to_json(app_config))
            return 0
        catalog = _resolve_catalog(parsed_args.catalog, app_config.catalog_path)
        loaded = schedule_io.load_events_json(Path(parsed_args.events))
    except (OSError, ValueError, CatalogLoadError, schedule_io.EventFileError) as exception:
        logger.error("Failed to load inputs: %s", exception)
        error_payload = {"ok": False, "error": str(exception)}
        print(json.dumps(error_payload, ensure_ascii=False, indent=2))
        return 2

    engine_config = app_config_module.to_engine_config(app_config)
    choose = random.Random(parsed_args.seed).choice if parsed_args.seed is not None else random.choice

    schedule = schedule_builder.build_schedule(
        loaded.events,
        engine_config,
        catalog,
        evaluations=loaded.evaluations,
        choose=choose,
    )

    output_payload = {
        "ok": True,
        "config_path": str(resolved_path) if resolved_path is not None else None,
        "event_count": len(loaded.events),
        "schedule": schedule_io.schedule_to_payload(schedule, engine_config),
    }
    print(json.dumps(output_payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
