"""
Session snapshot parsed from the JSON Claude Code pipes to a status line command.

Every field is optional. Anything missing, null, or of the wrong type falls
back to a default so a status line can always be rendered.
"""
import json
import logging
import math
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "Claude"
DEFAULT_CONTEXT_WINDOW = 200000
FALLBACK_FOLDER = "~"


@dataclass(frozen=True)
class SessionSnapshot:
    model_display_name: str = DEFAULT_MODEL
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    context_window_size: int = DEFAULT_CONTEXT_WINDOW
    total_cost_usd: float = 0
    total_lines_added: int = 0
    total_lines_removed: int = 0
    total_api_duration_ms: int = 0
    current_directory_path: str = ""

    @property
    def total_tokens(self):
        return self.total_input_tokens + self.total_output_tokens

    @property
    def folder_name(self):
        """Last path component of the workspace dir, or ~ if there is none"""
        name = os.path.basename(self.current_directory_path.rstrip(os.sep + (os.altsep or "")))
        return name or FALLBACK_FOLDER


def _section(data, key):
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _as_int(value, default):
    # bool is an int subclass, but true/false is never a count
    if value is None or isinstance(value, bool):
        return default
    try:
        if isinstance(value, str):
            value = float(value.strip())
        return int(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring non-integer value %r", value)
        return default


def _as_number(value, default):
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric value %r", value)
        return default
    if not math.isfinite(number):
        logger.debug("Ignoring non-finite value %r", value)
        return default
    return number


def _as_text(value, default):
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    logger.debug("Ignoring non-text value %r", value)
    return default


def snapshot_from_dict(data):
    """Build a SessionSnapshot from an already decoded JSON object"""
    if not isinstance(data, dict):
        logger.debug("Status input is not a JSON object: %s", type(data).__name__)
        data = {}

    model = _section(data, "model")
    context = _section(data, "context_window")
    cost = _section(data, "cost")
    workspace = _section(data, "workspace")

    return SessionSnapshot(
        model_display_name=_as_text(model.get("display_name"), DEFAULT_MODEL),
        total_input_tokens=_as_int(context.get("total_input_tokens"), 0),
        total_output_tokens=_as_int(context.get("total_output_tokens"), 0),
        context_window_size=_as_int(context.get("context_window_size"), DEFAULT_CONTEXT_WINDOW),
        total_cost_usd=_as_number(cost.get("total_cost_usd"), 0),
        total_lines_added=_as_int(cost.get("total_lines_added"), 0),
        total_lines_removed=_as_int(cost.get("total_lines_removed"), 0),
        total_api_duration_ms=_as_int(cost.get("total_api_duration_ms"), 0),
        current_directory_path=_as_text(workspace.get("current_dir"), ""),
    )


def parse_snapshot(text):
    """Parse status JSON text; malformed or empty input gives all defaults"""
    if not text or not text.strip():
        return SessionSnapshot()
    try:
        data = json.loads(text)
    except ValueError:
        logger.debug("Malformed status JSON, using defaults", exc_info=True)
        return SessionSnapshot()
    return snapshot_from_dict(data)
