"""Resolve ``KEY_FILE`` environment variables (Docker secrets) into ``KEY``."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, MutableMapping, Optional

logger = logging.getLogger(__name__)

SECRET_SUFFIX = "_FILE"


def load_secret_file_variables(
    environ: Optional[MutableMapping[str, str]] = None,
) -> List[str]:
    """
    Expose the content of every ``KEY_FILE`` secret as ``KEY``.

    A ``KEY`` that is already set wins over its file. Unreadable files are
    logged and skipped, so a missing secret surfaces later as a settings
    default rather than as an import error.

    Returns:
        The keys that were populated.
    """
    env = os.environ if environ is None else environ
    resolved: List[str] = []

    for key, file_path in list(env.items()):
        if not key.endswith(SECRET_SUFFIX) or not file_path:
            continue
        target_key = key[: -len(SECRET_SUFFIX)]
        if env.get(target_key):
            continue
        try:
            env[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            logger.warning("env.secret_file.missing", extra={"key": key})
            continue
        except (UnicodeDecodeError, OSError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                extra={"key": key, "error": str(exc)},
            )
            continue
        resolved.append(target_key)

    return resolved
