"""
Execution monitor: node status entries kept in shared["monitor"].

When ``shared["monitor"]["status_path"]`` is set the log is also persisted as
JSON after every update, written atomically via a temp file + os.replace.
"""
from __future__ import annotations

import json
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def atomic_write_json(path: str | Path, payload: Dict[str, Any]) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_name(f"{target.name}.{os.getpid()}_{uuid.uuid4().hex}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, target)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def init_monitor(shared: Dict[str, Any]) -> Dict[str, Any]:
    monitor = shared.get("monitor")
    if not isinstance(monitor, dict):
        monitor = {}
        shared["monitor"] = monitor

    if not monitor.get("start_time"):
        monitor["start_time"] = _now()
    monitor.setdefault("current_node", "")
    monitor.setdefault("execution_log", [])
    monitor.setdefault("error_log", [])
    monitor.setdefault("status_path", "")
    return monitor


def update_status(
    shared: Dict[str, Any],
    *,
    node_name: str,
    status: str,
    extra: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None,
) -> None:
    """Append a status entry and persist it when a status path is configured."""
    monitor = init_monitor(shared)
    monitor["current_node"] = node_name

    entry = {
        "time": _now(),
        "node": node_name,
        "status": status,
        "extra": extra or {},
        "error": error or "",
    }
    monitor["execution_log"].append(entry)
    if status == "failed":
        monitor["error_log"].append(entry)

    status_path = monitor.get("status_path")
    if status_path:
        atomic_write_json(status_path, {k: v for k, v in monitor.items() if k != "status_path"})
