"""
Tests for the JSON to Supabase import script.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from agentscore.scripts import import_agents as importer


def _response(ok=True, text=""):
    response = MagicMock()
    response.ok = ok
    response.text = text
    return response


def _agents(count):
    return [{"name": f"Agent {i}", "location": "Limassol", "ads": i} for i in range(count)]


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Clean environment inside an empty working directory."""
    for name in ("SUPABASE_URL", "VITE_SUPABASE_URL",
                 "SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY", "IMPORT_BATCH_SIZE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    with patch.object(importer, "load_dotenv"):
        yield monkeypatch


class TestInsertRow:

    def test_maps_json_agent(self):
        row = importer.to_insert_row({
            "name": "CENTURY 21",
            "location": "Limassol",
            "url": "https://www.bazaraki.com/c/century21/",
            "ads": 932,
            "google_rating": 4.6,
            "google_review_count": 245,
            "google_reviews": ["Excellent", "Good"],
        })

        assert row == {
            "name": "CENTURY 21",
            "location": "Limassol",
            "bazaraki_url": "https://www.bazaraki.com/c/century21/",
            "listing_count": 932,
            "google_rating": 4.6,
            "google_reviews_count": 245,
            "sample_review": "Excellent",
        }

    def test_defaults(self):
        row = importer.to_insert_row({"name": "Larnaca Homes"})

        assert row["listing_count"] == 0
        assert row["google_rating"] is None
        assert row["google_reviews_count"] == 0
        assert row["sample_review"] is None


class TestImportAgents:

    def test_batches_of_fifty(self):
        session = MagicMock()
        session.post.return_value = _response()

        summary = importer.import_agents(_agents(120), "https://proj.supabase.co/", "anon",
                                         session=session)

        assert session.post.call_count == 3
        sizes = [len(call.kwargs["json"]) for call in session.post.call_args_list]
        assert sizes == [50, 50, 20]
        assert summary.inserted == 120
        assert summary.total == 120
        assert summary.errors == []

        call = session.post.call_args_list[0]
        assert call.args[0] == "https://proj.supabase.co/rest/v1/agents"
        assert call.kwargs["headers"]["apikey"] == "anon"
        assert call.kwargs["headers"]["Authorization"] == "Bearer anon"
        assert call.kwargs["headers"]["Prefer"] == "return=minimal"

    def test_failed_batch_does_not_abort(self):
        session = MagicMock()
        session.post.side_effect = [
            _response(),
            _response(ok=False, text='{"message": "duplicate key"}'),
            _response(),
        ]

        summary = importer.import_agents(_agents(120), "https://proj.supabase.co", "anon",
                                         session=session)

        assert summary.inserted == 70
        assert len(summary.errors) == 1
        assert summary.errors[0].batch == 50
        assert "duplicate key" in summary.errors[0].error

    def test_transport_error_recorded(self):
        session = MagicMock()
        session.post.side_effect = [requests.ConnectionError("reset"), _response()]

        summary = importer.import_agents(_agents(60), "https://proj.supabase.co", "anon",
                                         session=session)

        assert summary.inserted == 10
        assert summary.errors[0].batch == 0

    def test_rejects_batch_size_below_one(self):
        session = MagicMock()

        for batch_size in (0, -5):
            with pytest.raises(ValueError, match="at least 1"):
                importer.import_agents(_agents(3), "https://proj.supabase.co", "anon",
                                       batch_size=batch_size, session=session)

        session.post.assert_not_called()

    def test_posts_with_requests_without_session(self):
        with patch.object(importer.requests, "post", return_value=_response()) as mock_post:
            summary = importer.import_agents(_agents(3), "https://proj.supabase.co", "anon")

        mock_post.assert_called_once()
        assert summary.inserted == 3


class TestMain:

    def test_missing_credentials(self, env, capsys):
        with pytest.raises(SystemExit) as exc:
            importer.main([])

        assert exc.value.code == 1
        assert "Missing Supabase credentials" in capsys.readouterr().out

    def test_missing_key_only(self, env):
        env.setenv("SUPABASE_URL", "https://proj.supabase.co")

        with pytest.raises(SystemExit) as exc:
            importer.main([])
        assert exc.value.code == 1

    def test_unreadable_file(self, env, tmp_path):
        env.setenv("SUPABASE_URL", "https://proj.supabase.co")
        env.setenv("SUPABASE_ANON_KEY", "anon")

        with pytest.raises(SystemExit) as exc:
            importer.main(["--file", str(tmp_path / "missing.json")])
        assert exc.value.code == 1

    def test_dry_run(self, env, tmp_path, capsys):
        env.setenv("VITE_SUPABASE_URL", "https://proj.supabase.co")
        env.setenv("VITE_SUPABASE_ANON_KEY", "anon")
        path = tmp_path / "agents.json"
        path.write_text(json.dumps(_agents(3)), encoding="utf-8")

        with patch.object(importer, "import_agents") as mock_import:
            assert importer.main(["--file", str(path), "--dry-run"]) == 0

        mock_import.assert_not_called()
        assert "3 agents ready to insert" in capsys.readouterr().out

    def test_full_run(self, env, tmp_path, capsys):
        env.setenv("SUPABASE_URL", "https://proj.supabase.co")
        env.setenv("SUPABASE_ANON_KEY", "anon")
        path = tmp_path / "agents.json"
        path.write_text(json.dumps(_agents(3)), encoding="utf-8")

        with patch.object(importer, "import_agents",
                          return_value=importer.ImportSummary(total=3, inserted=3)) as mock_import:
            assert importer.main(["--file", str(path), "--batch-size", "2"]) == 0

        args, kwargs = mock_import.call_args
        assert args[1] == "https://proj.supabase.co"
        assert args[2] == "anon"
        assert kwargs["batch_size"] == 2
        assert "Inserted: 3 agents" in capsys.readouterr().out

    def test_failed_batches_exit_non_zero(self, env, tmp_path):
        env.setenv("SUPABASE_URL", "https://proj.supabase.co")
        env.setenv("SUPABASE_ANON_KEY", "anon")
        path = tmp_path / "agents.json"
        path.write_text(json.dumps(_agents(3)), encoding="utf-8")
        summary = importer.ImportSummary(
            total=3, inserted=0,
            errors=[importer.BatchError(batch=0, error="permission denied")],
        )

        with patch.object(importer, "import_agents", return_value=summary):
            with pytest.raises(SystemExit) as exc:
                importer.main(["--file", str(path)])
        assert exc.value.code == 1

    @pytest.mark.parametrize("value", ["0", "-5", "ten"])
    def test_invalid_batch_size_flag(self, env, value, capsys):
        with pytest.raises(SystemExit) as exc:
            importer.main(["--batch-size", value])

        assert exc.value.code == 2
        assert "--batch-size" in capsys.readouterr().err

    def test_invalid_batch_size_setting(self, env, tmp_path, capsys):
        env.setenv("SUPABASE_URL", "https://proj.supabase.co")
        env.setenv("SUPABASE_ANON_KEY", "anon")
        env.setenv("IMPORT_BATCH_SIZE", "0")
        path = tmp_path / "agents.json"
        path.write_text(json.dumps(_agents(3)), encoding="utf-8")

        with patch.object(importer, "import_agents") as mock_import:
            with pytest.raises(SystemExit) as exc:
                importer.main(["--file", str(path)])

        assert exc.value.code == 1
        mock_import.assert_not_called()
        assert "Invalid configuration" in capsys.readouterr().out
