# tests for json/csv data export

import json
from datetime import datetime, timezone

import pytest

from hopeocd.services.export_service import ExportError, build_export, build_export_document, redact_session, to_csv
from tests.conftest import SAMPLE_CHAT, SAMPLE_ERP, SAMPLE_MOOD, USER_EMAIL, USER_ID

USER = {"id": USER_ID, "email": USER_EMAIL}
SNAPSHOT = {
    "moodEntries": [SAMPLE_MOOD],
    "thoughtRecords": [],
    "erpSessions": [SAMPLE_ERP],
    "aiSessions": [SAMPLE_CHAT],
}
NOW = datetime(2025, 6, 14, 10, 30, tzinfo=timezone.utc)


class TestExportDocument:
    def test_only_selected_types(self):
        doc = build_export_document(USER, SNAPSHOT, ["mood"], NOW)
        assert list(doc["data"]) == ["moodEntries"]
        assert doc["userId"] == USER_ID
        assert doc["userEmail"] == USER_EMAIL
        assert doc["exportDate"] == NOW.isoformat()

    def test_empty_selection(self):
        with pytest.raises(ExportError):
            build_export_document(USER, SNAPSHOT, [], NOW)

    def test_unknown_selection(self):
        with pytest.raises(ExportError, match="horoscope"):
            build_export_document(USER, SNAPSHOT, ["mood", "horoscope"], NOW)

    def test_chat_messages_redacted(self):
        doc = build_export_document(USER, SNAPSHOT, ["ai"], NOW)
        messages = doc["data"]["aiSessions"][0]["messages"]
        assert [m["content"] for m in messages] == ["[AI response]"]
        # the cached session is untouched
        assert SAMPLE_CHAT["messages"][0]["content"].startswith("Good morning")

    def test_redact_user_message(self):
        session = redact_session({"messages": [{"role": "user", "content": "secret"}]})
        assert session["messages"][0]["content"] == "[User message]"


class TestFiles:
    def test_json_file_name(self):
        content, filename, media_type = build_export(USER, SNAPSHOT, ["mood", "erp"], "json", NOW)
        assert filename == "hope-for-ocd-data-2025-06-14.json"
        assert media_type == "application/json"
        assert set(json.loads(content)["data"]) == {"moodEntries", "erpSessions"}

    def test_csv_sections(self):
        text = to_csv({"moodEntries": [SAMPLE_MOOD], "erpSessions": [SAMPLE_ERP]})
        lines = text.splitlines()
        assert lines[0] == "Mood Entries"
        assert lines[1] == "Date,Mood,Anxiety,Notes,Triggers"
        assert "Checking behaviors" in lines[2]
        assert "ERP Sessions" in lines
        assert "Thought Records" not in lines

    def test_unsupported_format(self):
        with pytest.raises(ExportError):
            build_export(USER, SNAPSHOT, ["mood"], "xml", NOW)


class TestExportRoute:
    async def test_mood_only(self, user_client):
        resp = await user_client.get("/export", params={"types": "mood", "format": "json"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("application/json")
        assert 'filename="hope-for-ocd-data-' in resp.headers["content-disposition"]
        body = resp.json()
        assert list(body["data"]) == ["moodEntries"]
        assert len(body["data"]["moodEntries"]) == 2

    async def test_default_selection(self, user_client):
        body = (await user_client.get("/export")).json()
        assert set(body["data"]) == {"moodEntries", "thoughtRecords", "erpSessions"}

    async def test_comma_separated(self, user_client):
        body = (await user_client.get("/export?types=mood,ai")).json()
        assert set(body["data"]) == {"moodEntries", "aiSessions"}

    async def test_csv(self, user_client):
        resp = await user_client.get("/export", params={"types": "mood", "format": "csv"})
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.text.startswith("Mood Entries")

    async def test_empty_selection(self, user_client):
        resp = await user_client.get("/export?types=")
        assert resp.status_code == 400

    async def test_bad_format(self, user_client):
        resp = await user_client.get("/export", params={"types": "mood", "format": "pdf"})
        assert resp.status_code == 422
