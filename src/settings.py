"""
Settings and configuration for the deinflection service.

Every value can be overridden through the environment.
"""

import os
from pathlib import Path

# Optional custom rule catalog (yomichan deinflect.json layout, may be gzipped).
# When unset the bundled rule table is used.
_rules_path = os.environ.get("DEINFLECT_RULES_PATH", "").strip()
RULES_PATH: Path | None = Path(_rules_path) if _rules_path else None

# Server
HOST = os.environ.get("DEINFLECT_HOST", "0.0.0.0")
PORT = int(os.environ.get("DEINFLECT_PORT", "8000"))

# Request limits
MAX_WORD_LENGTH = int(os.environ.get("DEINFLECT_MAX_WORD_LENGTH", "100"))
MAX_TEXT_LENGTH = int(os.environ.get("DEINFLECT_MAX_TEXT_LENGTH", "200"))

# Debug mode
DEBUG = os.environ.get("DEINFLECT_DEBUG", "").lower() in ("1", "true", "yes")
LOG_LEVEL = "debug" if DEBUG else os.environ.get("DEINFLECT_LOG_LEVEL", "info").lower()
