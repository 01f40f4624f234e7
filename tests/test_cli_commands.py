# ==============================================================================
# Tests for CLI Commands
# ==============================================================================
"""
Tests for the report, data and config commands against the file store
configured by the shared fixtures.
"""

import json

from typer.testing import CliRunner

from pulse.app import app
from pulse.infrastructure.stores import get_event_store
from pulse.utils.config import Settings, get_settings

runner = CliRunner()

EVENTS = [
    {"id": "e1", "sessionId": "F1", "page": "/a", "timestamp": "2024-03-01T12:00:00Z"},
    {"id": "e2", "sessionId": "F1", "page": "/a", "timestamp": "2024-03-01T12:05:00Z"},
    {"id": "e3", "sessionId": "F1", "page": "/b", "timestamp": "2024-03-01T12:40:00Z"},
]


def _seed(records=EVENTS):
    store = get_event_store()
    for record in records:
        store.append(record)
    return store


# ==============================================================================
# Report
# ==============================================================================


class TestReport:
    """Tests for `pulse report`."""

    def test_json_empty(self):
        result = runner.invoke(app, ["report", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "totalViews": 0,
            "totalSessions": 0,
            "pagesPerSession": 0,
            "bounceRate": 0,
        }

    def test_json_totals(self):
        _seed()
        result = runner.invoke(app, ["report", "--json"])
        report = json.loads(result.stdout)
        assert report["totalViews"] == 3
        assert report["totalSessions"] == 2
        assert report["bounceRate"] == 50.0
        assert "sessions" not in report

    def test_json_with_sessions_and_breakdowns(self):
        _seed()
        result = runner.invoke(app, ["report", "--json", "-s", "-b"])
        report = json.loads(result.stdout)
        assert [s["id"] for s in report["sessions"]] == ["F1:0", "F1:1"]
        assert report["dailyCounts"] == [{"day": "2024-03-01", "count": 3}]

    def test_table_output(self):
        _seed()
        result = runner.invoke(app, ["report", "--breakdowns"])
        assert result.exit_code == 0
        assert "PULSE ANALYTICS" in result.output
        assert "Bounce Rate" in result.output
        assert "TOP REFERRERS" in result.output
        assert "Direct" in result.output
        assert "TOP PAGES" in result.output
        assert "/a" in result.output

    def test_table_no_data(self):
        result = runner.invoke(app, ["report"])
        assert result.exit_code == 0
        assert "No data yet" in result.output

    def test_unavailable_store_exits_nonzero(self, tmp_path):
        (tmp_path / "db.json").write_text("{corrupt")
        result = runner.invoke(app, ["report", "--json"])
        assert result.exit_code == 1
        assert "Event store unavailable" in json.loads(result.stdout)["error"]


# ==============================================================================
# Data
# ==============================================================================


class TestDataClear:
    """Tests for `pulse data clear`."""

    def test_clear_with_yes(self):
        store = _seed()
        result = runner.invoke(app, ["data", "clear", "-y"])
        assert result.exit_code == 0
        assert "file cleared" in result.output
        assert store.read_all() == []

    def test_declined_prompt_keeps_data(self):
        store = _seed()
        result = runner.invoke(app, ["data", "clear"], input="n\n")
        assert result.exit_code == 1
        assert len(store.read_all()) == 3


class TestDataImport:
    """Tests for `pulse data import`."""

    def test_import(self, tmp_path):
        export = tmp_path / "export.json"
        export.write_text(json.dumps(EVENTS + ["not-an-object"]))

        result = runner.invoke(app, ["data", "import", str(export)])

        assert result.exit_code == 0
        assert "Imported" in result.output
        assert "Skipped 1" in result.output
        assert get_event_store().read_all() == EVENTS

    def test_invalid_json(self, tmp_path):
        export = tmp_path / "export.json"
        export.write_text("{nope")
        result = runner.invoke(app, ["data", "import", str(export)])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_not_an_array(self, tmp_path):
        export = tmp_path / "export.json"
        export.write_text('{"id": "e1"}')
        result = runner.invoke(app, ["data", "import", str(export)])
        assert result.exit_code == 1
        assert "JSON array" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["data", "import", str(tmp_path / "missing.json")])
        assert result.exit_code != 0


# ==============================================================================
# Config
# ==============================================================================


class TestConfigShow:
    """Tests for `pulse config show`."""

    def test_json(self, tmp_path):
        result = runner.invoke(app, ["config", "show", "--json"])
        assert result.exit_code == 0
        config = json.loads(result.stdout)
        assert config["store"]["backends"] == ["file"]
        assert config["valkey"]["configured"] is False
        assert config["valkey"]["events_key"] == "pulse:events"
        assert config["file_store"]["path"] == str(tmp_path / "db.json")
        assert config["session"]["timeout_minutes"] == 30

    def test_session_timeout_from_environment(self, monkeypatch):
        monkeypatch.setenv("SESSION_TIMEOUT_MINUTES", "45")
        get_settings.cache_clear()
        result = runner.invoke(app, ["config", "show", "--json"])
        assert json.loads(result.stdout)["session"]["timeout_minutes"] == 45

    def test_human_readable(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Configuration" in result.output
        assert "not configured" in result.output

    def test_only_consumed_general_settings(self):
        result = runner.invoke(app, ["config", "show", "--json"])
        assert "debug" not in result.stdout
        assert "debug" not in Settings.model_fields
        assert "log_level" in Settings.model_fields
