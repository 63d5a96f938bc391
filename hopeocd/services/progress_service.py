# progress summary: stats and achievements computed from the cached collections

from hopeocd.services.backend import ERP, MOOD, THOUGHTS


def _average(rows: list[dict], field: str) -> float:
    values = [r[field] for r in rows if isinstance(r.get(field), (int, float))]
    if not values:
        return 0.0
    return round(sum(values) / len(values), 1)


def mood_trend(mood_entries: list[dict]) -> str:
    """compare the oldest and newest of the last seven entries (list is newest first)"""
    recent = list(reversed(mood_entries[:7]))
    if len(recent) < 2:
        return "stable"
    delta = recent[-1]["mood"] - recent[0]["mood"]
    if delta > 0:
        return "improving"
    if delta < 0:
        return "declining"
    return "stable"


def compute_progress(collections: dict[str, list[dict]]) -> dict:
    mood_entries = collections.get(MOOD, [])
    thought_records = collections.get(THOUGHTS, [])
    erp_sessions = collections.get(ERP, [])

    total_days = len(mood_entries)
    average_mood = _average(mood_entries, "mood")
    average_anxiety = _average(mood_entries, "anxiety")
    completed_erp = sum(1 for s in erp_sessions if s.get("completed"))
    completion_rate = round(completed_erp / len(erp_sessions) * 100) if erp_sessions else 0

    achievements = [
        {"title": "First Steps", "description": "Started tracking your mental health", "earned": total_days >= 1},
        {"title": "Consistent Tracker", "description": "Logged mood for 7 days", "earned": total_days >= 7},
        {"title": "Thought Explorer", "description": "Completed 5 thought records", "earned": len(thought_records) >= 5},
        {"title": "ERP Champion", "description": "Completed 10 ERP sessions", "earned": completed_erp >= 10},
        {"title": "Monthly Milestone", "description": "Tracked mood for 30 days", "earned": total_days >= 30},
        {
            "title": "Anxiety Warrior",
            "description": "Average anxiety under 5",
            "earned": average_anxiety < 5 and total_days >= 10,
        },
    ]

    weekly = []
    if total_days >= 7:
        weekly = [
            {"date": e.get("created_at"), "mood": e.get("mood")}
            for e in reversed(mood_entries[:7])
        ]

    return {
        "total_days": total_days,
        "average_mood": average_mood,
        "average_anxiety": average_anxiety,
        "thought_records": len(thought_records),
        "erp_sessions": len(erp_sessions),
        "completed_erp": completed_erp,
        "erp_completion_rate": completion_rate,
        "mood_trend": mood_trend(mood_entries),
        "achievements": achievements,
        "earned_count": sum(1 for a in achievements if a["earned"]),
        "weekly_mood": weekly,
    }
