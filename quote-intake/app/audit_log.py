"""Append-only JSONL audit trail for the Quote Intake tool.

One JSON object per line in date-partitioned files under data/audit/
(YYYY-MM-DD.jsonl). Written by the API and dashboard, never by the form
engine itself.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent.parent / "data" / "audit"


@dataclass
class AuditEntry:
    timestamp: str
    action: str            # branch_selected, submit_rejected, handed_off, submit_failed, cancelled
    session_id: str = ""
    branch_id: str = ""
    request_number: str = ""
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> AuditEntry:
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


def _file_for_date(date_str: str) -> Path:
    return DATA_DIR / f"{date_str}.jsonl"


def log_action(
    action: str,
    session_id: str = "",
    branch_id: str = "",
    request_number: str = "",
    details: dict | None = None,
) -> AuditEntry:
    """Append an entry to today's file and return it."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    now = datetime.now(timezone.utc)
    entry = AuditEntry(
        timestamp=now.isoformat(),
        action=action,
        session_id=session_id,
        branch_id=branch_id,
        request_number=request_number,
        details=details or {},
    )
    with _file_for_date(now.strftime("%Y-%m-%d")).open("a", encoding="utf-8") as f:
        f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")
    return entry


def _read_entries(path: Path) -> list[AuditEntry]:
    entries: list[AuditEntry] = []
    if not path.exists():
        return entries
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                entries.append(AuditEntry.from_dict(json.loads(line)))
    return entries


def _files_newest_first() -> list[Path]:
    if not DATA_DIR.exists():
        return []
    return sorted(DATA_DIR.glob("*.jsonl"), key=lambda p: p.stem, reverse=True)


def get_recent_entries(limit: int = 50) -> list[AuditEntry]:
    """Most recent entries across all files, newest first."""
    results: list[AuditEntry] = []
    for path in _files_newest_first():
        results.extend(reversed(_read_entries(path)))
        if len(results) >= limit:
            break
    return results[:limit]


def get_entries_for_request(request_number: str) -> list[AuditEntry]:
    """All entries mentioning *request_number*, newest first."""
    results: list[AuditEntry] = []
    for path in _files_newest_first():
        results.extend(e for e in reversed(_read_entries(path)) if e.request_number == request_number)
    return results
