"""Normalise a stored Viator API response into catalogue records."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from viator_normalizer.config.settings import Settings
from viator_normalizer.core.logging import configure_logging
from viator_normalizer.tasks.normalize import PAYLOAD_KINDS, NormalizeTask


def main() -> None:
    parser = argparse.ArgumentParser(description="Normalise a stored Viator API response")
    parser.add_argument("--kind", choices=PAYLOAD_KINDS, required=True)
    parser.add_argument("--input", type=Path, required=True, help="JSON file holding the raw response")
    parser.add_argument("--output-dir", type=Path, help="Override the configured output directory")
    parser.add_argument("--filename", help="Output file name (defaults to <kind>.json)")
    parser.add_argument("--log-level", help="Override the configured log level")
    args = parser.parse_args()

    settings = Settings()
    if args.output_dir:
        settings.output_dir = args.output_dir
    if args.log_level:
        settings.log_level = args.log_level
    settings.ensure_directories()
    configure_logging(settings.log_level, settings.log_dir)

    task = NormalizeTask(settings.output_dir, max_season_days=settings.max_season_days)
    path = task.run_file(args.input, kind=args.kind, filename=args.filename)
    logging.info("Normalised %s payload written to %s", args.kind, path)


if __name__ == "__main__":
    main()
