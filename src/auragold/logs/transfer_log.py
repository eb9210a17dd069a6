from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional

logger = logging.getLogger("auragold.transfer")


def log_transfer_event(
    event: str,
    kind: str,
    mode: Optional[str] = None,
    level: int = logging.INFO,
    ts: Optional[int] = None,
    **extra: Any,
) -> None:
    """Emit a structured single-line JSON log for an import or export.

    Keys: event, kind, mode, ts, component, schema_version, plus any extras.
    """
    try:
        payload: Dict[str, Any] = {
            "event": str(event),
            "kind": str(kind),
            "mode": str(mode) if mode is not None else None,
            "ts": int(ts if ts is not None else int(time.time() * 1000)),
            "component": "transfer",
            "schema_version": "v1",
        }
        payload.update(extra)
        logger.log(level, json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str))
    except Exception:
        # Logging must never throw
        pass
