# tests for the progress summary

from hopeocd.services.backend import ERP, MOOD, THOUGHTS
from hopeocd.services.progress_service import compute_progress, mood_trend


def _moods(*scores):
    """newest first, like the cache"""
    return [
        {"mood": m, "anxiety": 4, "created_at": f"2025-06-{20 - i:02d}T08:00:00+00:00"}
        for i, m in enumerate(scores)
    ]


class TestMoodTrend:
    def test_improving(self):
        assert mood_trend(_moods(7, 5, 4)) == "improving"

    def test_declining(self):
        assert mood_trend(_moods(3, 6)) == "declining"

    def test_single_entry_is_stable(self):
        assert mood_trend(_moods(5)) == "stable"

    def test_only_last_seven_count(self):
        assert mood_trend(_moods(5, 5, 5, 5, 5, 5, 5, 1)) == "stable"


class TestComputeProgress:
    def test_empty(self):
        stats = compute_progress({})
        assert stats["total_days"] == 0
        assert stats["average_mood"] == 0.0
        assert stats["erp_completion_rate"] == 0
        assert stats["earned_count"] == 0
        assert stats["weekly_mood"] == []

    def test_counts_and_achievements(self):
        stats = compute_progress({
            MOOD: _moods(8, 7, 6, 6, 5, 4, 6),
            THOUGHTS: [{}] * 5,
            ERP: [{"completed": True}, {"completed": False}],
        })
        assert stats["total_days"] == 7
        assert stats["average_mood"] == 6.0
        assert stats["completed_erp"] == 1
        assert stats["erp_completion_rate"] == 50
        earned = {a["title"] for a in stats["achievements"] if a["earned"]}
        assert earned == {"First Steps", "Consistent Tracker", "Thought Explorer"}
        assert [w["mood"] for w in stats["weekly_mood"]] == [6, 4, 5, 6, 6, 7, 8]


class TestProgressRoute:
    async def test_progress(self, user_client):
        resp = await user_client.get("/progress")
        assert resp.status_code == 200
        data = resp.json()
        assert data["totalDays"] == 2
        assert data["averageMood"] == 5.0
        assert data["averageAnxiety"] == 6.0
        assert data["moodTrend"] == "improving"
        assert data["erpCompletionRate"] == 0
        assert len(data["achievements"]) == 6
