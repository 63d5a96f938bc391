# data export: json or csv file built from the cached collections
# no backend round-trip; chat message text is redacted before it leaves

import csv
import io
import json
from datetime import datetime, timezone
from typing import Iterable, Optional

from hopeocd.config import settings

# export selector -> key in the export document
EXPORT_TYPES = {
    "mood": "moodEntries",
    "thoughts": "thoughtRecords",
    "erp": "erpSessions",
    "meditation": "meditationSessions",
    "sleep": "sleepSessions",
    "ai": "aiSessions",
}

DEFAULT_SELECTION = ["mood", "thoughts", "erp"]

CSV_SECTIONS = [
    (
        "moodEntries",
        "Mood Entries",
        ["Date", "Mood", "Anxiety", "Notes", "Triggers"],
        lambda r: [r.get("created_at"), r.get("mood"), r.get("anxiety"), r.get("notes", ""), "; ".join(r.get("triggers") or [])],
    ),
    (
        "thoughtRecords",
        "Thought Records",
        ["Date", "Situation", "Automatic Thought", "Emotion", "Evidence For", "Evidence Against", "Balanced Thought", "New Emotion"],
        lambda r: [
            r.get("created_at"), r.get("situation", ""), r.get("automatic_thought", ""), r.get("emotion", ""),
            r.get("evidence_for", ""), r.get("evidence_against", ""), r.get("balanced_thought", ""), r.get("new_emotion", ""),
        ],
    ),
    (
        "erpSessions",
        "ERP Sessions",
        ["Date", "Exposure", "Anxiety Before", "Anxiety After", "Duration", "Completed", "Notes"],
        lambda r: [
            r.get("created_at"), r.get("exposure", ""), r.get("anxiety_before"), r.get("anxiety_after"),
            r.get("duration"), str(bool(r.get("completed"))).lower(), r.get("notes", ""),
        ],
    ),
]


class ExportError(ValueError):
    pass


def redact_session(session: dict) -> dict:
    messages = []
    for msg in session.get("messages") or []:
        placeholder = "[User message]" if msg.get("role") == "user" else "[AI response]"
        messages.append({**msg, "content": placeholder})
    return {**session, "messages": messages}


def build_export_document(user: dict, snapshot: dict, selected: Iterable[str], now: Optional[datetime] = None) -> dict:
    selected = list(dict.fromkeys(selected))
    if not selected:
        raise ExportError("Select at least one data type to export")
    unknown = [s for s in selected if s not in EXPORT_TYPES]
    if unknown:
        raise ExportError(f"Unknown data types: {', '.join(unknown)}")

    now = now or datetime.now(timezone.utc)
    data = {}
    for selector in selected:
        key = EXPORT_TYPES[selector]
        rows = snapshot.get(key, [])
        if selector == "ai":
            rows = [redact_session(s) for s in rows]
        data[key] = rows

    return {
        "exportDate": now.isoformat(),
        "userId": user.get("id"),
        "userEmail": user.get("email"),
        "data": data,
    }


def to_csv(data: dict) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    for key, title, header, row_fn in CSV_SECTIONS:
        rows = data.get(key) or []
        if not rows:
            continue
        writer.writerow([title])
        writer.writerow(header)
        for row in rows:
            writer.writerow(row_fn(row))
        writer.writerow([])
    return buf.getvalue()


def build_export(user: dict, snapshot: dict, selected: Iterable[str], fmt: str = "json", now: Optional[datetime] = None):
    """returns (file content, file name, media type)"""
    if fmt not in ("json", "csv"):
        raise ExportError(f"Unsupported export format: {fmt}")

    now = now or datetime.now(timezone.utc)
    document = build_export_document(user, snapshot, selected, now)
    filename = f"{settings.EXPORT_FILE_PREFIX}-{now.date().isoformat()}.{fmt}"

    if fmt == "json":
        return json.dumps(document, indent=2, default=str), filename, "application/json"
    return to_csv(document["data"]), filename, "text/csv"
