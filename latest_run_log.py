#!/usr/bin/env python3
"""
Print the newest Name Sprout session log, optionally with its last lines or
a per-event summary.

Example Usage:
    python latest_run_log.py
    python latest_run_log.py --tail 20
    python latest_run_log.py --summary --log-dir ./logs
"""

from __future__ import annotations

import argparse
import json
from collections import Counter, deque
from pathlib import Path

from config import get_settings


def find_latest_run_log(log_dir: Path) -> Path | None:
    """Newest `*.jsonl` file in log_dir by modification time (name breaks ties)."""
    if not log_dir.is_dir():
        return None
    logs = sorted(
        (path for path in log_dir.glob("*.jsonl") if path.is_file()),
        key=lambda path: (path.stat().st_mtime, path.name),
    )
    return logs[-1] if logs else None


def read_last_lines(path: Path, line_count: int) -> list[str]:
    if line_count <= 0:
        return []
    with path.open("r", encoding="utf-8") as handle:
        tail = deque(handle, maxlen=line_count)
    return [line.rstrip("\n") for line in tail]


def summarize_events(path: Path) -> Counter:
    """Count events by message; lines that are not JSON objects are counted as `invalid`."""
    counts: Counter = Counter()
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                counts["invalid"] += 1
                continue
            if not isinstance(record, dict):
                counts["invalid"] += 1
                continue
            counts[str(record.get("message", "unknown"))] += 1
    return counts


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Locate the latest session log and preview it.")
    parser.add_argument("--tail", type=int, default=0, help="Print the last N lines of the log")
    parser.add_argument("--summary", action="store_true", help="Print event counts for the log")
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory to search (default: NAMESPROUT_RUN_LOG_DIR or ./logs)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    log_dir = args.log_dir or Path(get_settings().run_log_dir)
    latest = find_latest_run_log(log_dir)
    if latest is None:
        print(f"No session logs found in {log_dir}")
        return 1

    print(latest)
    if args.summary:
        for message, count in sorted(summarize_events(latest).items()):
            print(f"  {message:<22} {count}")
    if args.tail > 0:
        print()
        print("\n".join(read_last_lines(latest, args.tail)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
