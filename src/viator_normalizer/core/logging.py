"""Logging helpers."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FILENAME = "normalizer.log"


def configure_logging(level: str, log_dir: Optional[Path] = None) -> Optional[Path]:
    """Configure basic logging for CLI usage.

    Records always go to stderr; when ``log_dir`` is given they are also
    appended to ``normalizer.log`` inside it, whose path is returned.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_path: Optional[Path] = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / LOG_FILENAME
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
        force=True,
    )
    return log_path
