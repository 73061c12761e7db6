"""
Session Logging
===============

Optional JSONL log for one Name Sprout session. Each line is one event:
lifecycle (session_started, session_finished), generation
(generation_started, generation_finished, generation_discarded) or clipboard
(copied, copy_failed). Logging never raises into the UI; the first failed
write turns the logger off for the rest of the session.
"""

from __future__ import annotations

import json
import re
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_LABEL_RE = re.compile(r"[^a-z0-9._-]+")


def _slug(value: str) -> str:
    return _LABEL_RE.sub("-", value.strip().lower()).strip("-") or "unknown"


def session_log_name(backend: str, kind: str, run_id: str, now: datetime | None = None) -> str:
    """File name for a session log: `<UTC stamp>_<backend>_<kind>_<run id>.jsonl`."""
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%dT%H%M%SZ")
    return f"{stamp}_{_slug(backend)}_{_slug(kind)}_{run_id}.jsonl"


@dataclass
class RunLogger:
    """Append-only JSONL logger for one naming session."""

    enabled: bool
    run_id: str
    backend: str
    model: str
    kind: str
    log_file: Path | None = None
    _write_failed: bool = False
    _started: float = field(default_factory=time.monotonic, repr=False)

    @classmethod
    def create(
        cls,
        *,
        enabled: bool,
        base_dir: Path,
        backend: str,
        model: str,
        kind: str,
    ) -> "RunLogger":
        logger = cls(enabled=False, run_id=uuid.uuid4().hex[:8], backend=backend, model=model, kind=kind)
        if not enabled:
            return logger
        try:
            base_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            return logger
        logger.enabled = True
        logger.log_file = base_dir / session_log_name(backend, kind, logger.run_id)
        return logger

    @classmethod
    def disabled(cls) -> "RunLogger":
        return cls(enabled=False, run_id="", backend="", model="", kind="")

    def log_event(
        self,
        *,
        event_type: str,
        message: str,
        generation: int | None = None,
        meta: dict[str, Any] | None = None,
    ) -> None:
        if not self.enabled or self.log_file is None or self._write_failed:
            return

        record: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "elapsed_ms": int((time.monotonic() - self._started) * 1000),
            "run_id": self.run_id,
            "event_type": event_type,
            "message": message,
            "generation": generation,
            "backend": self.backend,
            "model": self.model,
            "kind": self.kind,
        }
        if meta:
            record["meta"] = meta
        self._append(self.log_file, json.dumps(record, ensure_ascii=False))

    def _append(self, log_file: Path, line: str) -> None:
        try:
            with log_file.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError:
            self._write_failed = True
