"""Tests for the CLI report script (scripts/report.py).

Covers database and in-memory runs, CSV export, and the error handlers.
"""

from datetime import datetime
from unittest.mock import patch

import pandas as pd

from lpg_connect.errors import BackendUnavailableError
from lpg_connect.schemas import ApplicationStatistics, Status
from scripts.report import format_summary, main


class TestReportScript:
    """Tests for the main() entry point of the report script."""

    def test_custom_database_url(self, tmp_path, capsys):
        """A fresh database is seeded and summarized."""
        db_path = tmp_path / "lpg.db"
        result = main(["--database-url", f"sqlite:///{db_path}"])
        assert result == 0
        assert db_path.exists()
        out = capsys.readouterr().out
        assert "Total users: 2" in out
        assert "Total applications: 1" in out
        assert "PENDING: 1" in out

    def test_default_database_url_from_settings(self, tmp_path, monkeypatch):
        """Without --database-url the configured DATABASE_URL is used."""
        # Keep the default sqlite:///./lpg_connect.db inside the temp directory
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        assert main([]) == 0
        assert (tmp_path / "lpg_connect.db").exists()

    def test_volatile_flag(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["--volatile"]) == 0
        assert not (tmp_path / "lpg_connect.db").exists()
        assert "Latest application: n/a" in capsys.readouterr().out

    def test_export(self, tmp_path):
        export = tmp_path / "apps.csv"
        result = main(["--volatile", "--export", str(export)])
        assert result == 0
        df = pd.read_csv(export)
        assert len(df) == 1
        assert df.iloc[0]["name"] == "Priya Sharma"

    def test_export_to_missing_directory_returns_1(self, tmp_path):
        export = tmp_path / "missing" / "apps.csv"
        assert main(["--volatile", "--export", str(export)]) == 1

    def test_backend_error_returns_1(self):
        with patch(
            "scripts.report.create_store",
            side_effect=BackendUnavailableError("simulated"),
        ):
            assert main(["--volatile"]) == 1


class TestFormatSummary:
    """Tests for format_summary."""

    def test_lists_statuses_and_applicants(self):
        stats = ApplicationStatistics(
            total_users=3,
            total_applications=4,
            status_counts={Status.PENDING: 1, Status.APPROVED: 2, Status.REJECTED: 1},
            approval_rate=50.0,
            applications_by_user={"bob": 1, "alice": 3},
            latest_application_at=datetime(2024, 5, 1, 9, 30),
        )
        text = format_summary(stats)
        assert "APPROVED: 2" in text
        assert "Approval rate: 50.0%" in text
        assert text.index("Applications by alice") < text.index("Applications by bob")
        assert "Latest application: 2024-05-01T09:30:00" in text
