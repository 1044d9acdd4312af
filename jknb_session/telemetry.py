#!/usr/bin/env python3
"""
================================================================================
jknb_session/telemetry.py - Event Log for Kernel Session Bridges
================================================================================

PURPOSE:
    Records what the kernel bridge and its collaborators did on behalf of a
    task: which session events were posted to the host, how delivery went,
    which comms were registered. The log is an append-only JSONL file that
    can be replayed when debugging a host/kernel conversation.

SECURITY:
    - Event content (printed items, display bundles, comm payloads) is never
      written, only its type, size and delivery status
    - All string fields are redacted, stripped of ANSI codes and truncated
    - File permissions are set to 0600 where possible

EVENT SCHEMA (v1.0 - FROZEN):
    {
        "event_version": "1.0",
        "ts": "ISO8601 timestamp",
        "level": "info|warn|error",
        "event_type": "session_event|comm_registry|...",
        "message": "human-readable message (truncated to 500 chars)",
        "task_id": "task the event belongs to",
        "data": {}
    }

================================================================================
"""

import atexit
import json
import os
import re
import stat
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

# =============================================================================
# CONFIGURATION - Adjust these for your needs
# =============================================================================

# Base directory for the event log
# TUNABLE: Read on every flush so a host can redirect it per process
DEFAULT_TELEMETRY_DIR = os.path.expanduser("~/.local/jknb_session")

# Batch size for event flushing - reduces IO overhead
# TUNABLE: Increase for less frequent writes, decrease for real-time updates
TELEMETRY_BATCH = int(os.environ.get("TELEMETRY_BATCH", "10"))

# Event log rotation
# TUNABLE: Max size in MB before rotation
EVENT_LOG_MAX_SIZE_MB = int(os.environ.get("EVENT_LOG_MAX_SIZE_MB", "50"))
# Number of rotated log files to keep
EVENT_LOG_RETENTION = int(os.environ.get("EVENT_LOG_RETENTION", "5"))

# =============================================================================
# EVENT SCHEMA VERSION (FROZEN - DO NOT CHANGE)
# =============================================================================

EVENT_VERSION = "1.0"

ALLOWED_EVENT_FIELDS: Set[str] = {
    "event_version",
    "ts",
    "level",
    "event_type",
    "message",
    "task_id",
    "data",
}

ALLOWED_LEVELS: Set[str] = {"info", "warn", "error"}

# =============================================================================
# SECRET REDACTION PATTERNS
# =============================================================================

SECRET_PATTERNS = [
    (r"ghp_[a-zA-Z0-9]{36}", "[GITHUB_TOKEN]"),
    (r"sk-[a-zA-Z0-9]{20,}", "[OPENAI_KEY]"),
    (r"Bearer\s+[\w\-]{20,}", "[BEARER_TOKEN]"),
    (r'(?i)(api[_-]?key|apikey|secret[_-]?key)\s*[:=]\s*["\']?[\w\-]{20,}', "[API_KEY]"),
    (r"AKIA[0-9A-Z]{16}", "[AWS_KEY]"),
    (r'token[_-]?(id|key)?\s*[:=]\s*["\']?[\w\-]{20,}', "[TOKEN]"),
]

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

MAX_MESSAGE_LENGTH = 500
MAX_FIELD_LENGTH = 200


def redact_secrets(text: str) -> str:
    """
    Redact secrets from text before writing to the event log.

    HOW IT WORKS:
        - Strips ANSI escape sequences
        - Replaces every SECRET_PATTERNS match with its placeholder
    """
    if not isinstance(text, str):
        return str(text)

    text = ANSI_ESCAPE.sub("", text)

    for pattern, replacement in SECRET_PATTERNS:
        text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)

    return text


def truncate_string(text: str, max_length: int) -> str:
    """Truncate string to max length."""
    if not isinstance(text, str):
        text = str(text)
    if len(text) > max_length:
        return text[: max_length - 3] + "..."
    return text


def sanitize_for_log(value: Any, max_length: int = MAX_MESSAGE_LENGTH) -> Any:
    """Redact, truncate and coerce a value to JSON-safe types."""
    if isinstance(value, str):
        return truncate_string(redact_secrets(value), max_length)
    elif isinstance(value, dict):
        return {str(k): sanitize_for_log(v, max_length) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [sanitize_for_log(v, max_length) for v in value]
    elif isinstance(value, (int, float, bool, type(None))):
        return value
    else:
        return truncate_string(redact_secrets(str(value)), max_length)


# =============================================================================
# GLOBAL STATE
# =============================================================================

_event_buffer: List[Dict[str, Any]] = []

_lock = threading.RLock()

_atexit_registered = False


# =============================================================================
# PATH MANAGEMENT
# =============================================================================


def is_enabled() -> bool:
    """Whether buffered events are persisted to disk."""
    return os.environ.get("JKNB_TELEMETRY_ENABLED", "true").lower() != "false"


def get_telemetry_dir() -> Path:
    """Get the telemetry directory (JKNB_TELEMETRY_DIR overrides the default)."""
    return Path(os.environ.get("JKNB_TELEMETRY_DIR", DEFAULT_TELEMETRY_DIR))


def get_events_path() -> Path:
    """Get the event log file path."""
    return get_telemetry_dir() / "events.jsonl"


# =============================================================================
# EVENT EMISSION
# =============================================================================


def emit_event(
    event_type: str,
    message: str,
    level: str = "info",
    task_id: Optional[str] = None,
    data: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Emit a telemetry event to the event log.

    HOW IT WORKS:
        1. Builds the event with the frozen schema version
        2. Drops unknown fields and sanitises the rest
        3. Appends it to the buffer
        4. Flushes the buffer when it reaches TELEMETRY_BATCH entries, or trims
           it to the last TELEMETRY_BATCH entries when persistence is disabled

    ARGS:
        event_type: Kind of event (session_event, comm_registry, ...)
        message: Human-readable message
        level: info, warn or error
        task_id: Task the event belongs to
        data: Small structured summary (never raw content)

    RETURNS:
        The sanitised event as buffered.
    """
    global _atexit_registered

    if level not in ALLOWED_LEVELS:
        level = "info"

    event = {
        "event_version": EVENT_VERSION,
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event_type": event_type,
        "message": message,
        "task_id": task_id,
        "data": data or {},
    }

    event = {k: v for k, v in event.items() if v is not None}
    event = {k: v for k, v in event.items() if k in ALLOWED_EVENT_FIELDS}

    event["message"] = sanitize_for_log(event.get("message", ""), MAX_MESSAGE_LENGTH)
    if "task_id" in event:
        event["task_id"] = sanitize_for_log(event["task_id"], MAX_FIELD_LENGTH)
    event["data"] = sanitize_for_log(event["data"], MAX_FIELD_LENGTH)

    with _lock:
        if not _atexit_registered:
            atexit.register(flush_events)
            _atexit_registered = True

        _event_buffer.append(event)

        if len(_event_buffer) >= TELEMETRY_BATCH:
            if is_enabled():
                flush_events()
            else:
                # Nothing is persisted: keep only the most recent batch
                del _event_buffer[:-TELEMETRY_BATCH]

    return event


def get_buffered_events() -> List[Dict[str, Any]]:
    """Return a copy of the events not yet flushed."""
    with _lock:
        return list(_event_buffer)


def clear_buffer() -> None:
    """Drop buffered events without writing them."""
    global _event_buffer
    with _lock:
        _event_buffer = []


def flush_events() -> None:
    """
    Flush event buffer to disk with rotation support.

    HOW IT WORKS:
        - Appends all buffered events to events.jsonl
        - Rotates the log when EVENT_LOG_MAX_SIZE_MB is exceeded
        - Keeps the buffer untouched when persistence is disabled

    SECURITY:
        - Sets file permissions to 0600
    """
    global _event_buffer

    with _lock:
        if not _event_buffer or not is_enabled():
            return

        events_file = get_events_path()

        try:
            if events_file.exists():
                size_mb = events_file.stat().st_size / (1024 * 1024)
                if size_mb >= EVENT_LOG_MAX_SIZE_MB:
                    _rotate_events_log(events_file)

            events_file.parent.mkdir(parents=True, exist_ok=True)

            with open(events_file, "a") as f:
                for event in _event_buffer:
                    f.write(json.dumps(event) + "\n")

            os.chmod(events_file, stat.S_IRUSR | stat.S_IWUSR)

        except OSError as e:
            print(f"[ERROR] Failed to write events: {e}", file=sys.stderr)

        _event_buffer = []


def _rotate_events_log(events_file: Path) -> None:
    """Rename events.jsonl to .1, .2, ... dropping the oldest over retention."""
    log_dir = events_file.parent

    oldest = log_dir / f"events.jsonl.{EVENT_LOG_RETENTION}"
    if oldest.exists():
        oldest.unlink()

    for i in range(EVENT_LOG_RETENTION - 1, 0, -1):
        src = log_dir / f"events.jsonl.{i}"
        dst = log_dir / f"events.jsonl.{i + 1}"
        if src.exists():
            src.rename(dst)

    events_file.rename(log_dir / "events.jsonl.1")


def read_events(path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Read back a flushed event log, skipping malformed lines."""
    path = path or get_events_path()
    if not path.exists():
        return []

    events = []
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return events
