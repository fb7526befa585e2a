"""Resolve broker credentials stored in secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable

logger = logging.getLogger(__name__)

# Variables that may be provided as KEY_FILE instead of KEY
SECRET_VARIABLES = ("BROKER_UUID", "BROKER_TOKEN")


def load_secret_file_variables(keys: Iterable[str] = SECRET_VARIABLES) -> Dict[str, str]:
    """
    Expose the content of ``KEY_FILE`` through ``KEY`` for each given key.

    Follows the Docker secrets convention. A value already present in the
    environment always wins. Unreadable files are logged and skipped.

    Returns:
        Mapping of the keys that were populated to the file they came from.
    """
    loaded: Dict[str, str] = {}
    for key in keys:
        if os.environ.get(key):
            continue
        file_path = os.environ.get(f"{key}_FILE")
        if not file_path:
            continue
        try:
            os.environ[key] = Path(file_path).read_text(encoding="utf-8").strip()
        except FileNotFoundError as exc:
            logger.warning(
                "env.secret_file.missing",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        except UnicodeDecodeError as exc:
            logger.warning(
                "env.secret_file.decode_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        except OSError as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
            continue
        loaded[key] = file_path
    return loaded
