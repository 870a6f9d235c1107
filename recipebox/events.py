# recipebox/events.py
"""
Event logging for RecipeBox.

Responsibilities:
- Provide a single log_event(...) function that:
  - Writes a JSONL record (ts, event, user_id, payload) to the event log file.
  - Emits the same event on the module logger at INFO level.
  - Never raises exceptions (event logging is strictly non-blocking).

- Provide small helper functions for the events the API emits:
  - log_user_initialized(...)
  - log_recipe_added(...)
  - log_recipe_deleted(...)
  - log_recipe_search_performed(...)
  - log_product_search_performed(...)
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# JSONL file with one event per line. Overridable via EVENT_LOG_FILE.
EVENT_LOG_FILE = Path(os.getenv("EVENT_LOG_FILE", "events.log"))


def _write_to_file(record: Dict[str, Any]) -> None:
    """
    Append a single JSON record to the event log as JSONL.
    Never raise exceptions.
    """
    try:
        path = Path(EVENT_LOG_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except Exception as exc:
        logger.debug("Failed to write event to %s: %s", EVENT_LOG_FILE, exc)


def log_event(
    event: str,
    user_id: Optional[str],
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Core event logger.

    Builds a record with keys ts, event, user_id, payload, logs it and appends
    it to the event log file. Never raises.
    """
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "user_id": user_id,
        "payload": payload or {},
    }

    logger.info("event=%s user_id=%s payload=%s", event, user_id, record["payload"])

    _write_to_file(record)


# ---------------------------------------------------------------------------
# Helper functions for common event types
# ---------------------------------------------------------------------------

def log_user_initialized(user_id: str, created: bool) -> None:
    """
    payload: {"created": true | false}
    """
    log_event("user_initialized", user_id, {"created": created})


def log_recipe_added(user_id: str, recipe_id: str, name: str) -> None:
    log_event("recipe_added", user_id, {"recipe_id": recipe_id, "name": name})


def log_recipe_deleted(user_id: str, recipe_id: str) -> None:
    log_event("recipe_deleted", user_id, {"recipe_id": recipe_id})


def log_recipe_search_performed(ingredients: str, found: bool) -> None:
    """
    payload:
    {
        "ingredients": "tomato,basil",
        "found": true
    }
    """
    log_event("recipe_search_performed", None, {"ingredients": ingredients, "found": found})


def log_product_search_performed(query: str) -> None:
    log_event("product_search_performed", None, {"query": query})
