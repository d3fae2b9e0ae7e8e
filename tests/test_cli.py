"""Tests for the command-line interface."""
import json

import httpx
import pytest
from conftest import json_response, reply_payload
from typer.testing import CliRunner

from geminichat.cli.app import app
from geminichat.llm import DEFAULT_MODEL_ID

runner = CliRunner()


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    """Point the CLI at a temporary settings file with no environment key."""
    path = tmp_path / "settings.json"
    monkeypatch.setenv("GEMINICHAT_SETTINGS_PATH", str(path))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINICHAT_LOG_LEVEL", raising=False)
    return path


@pytest.fixture
def use_client(monkeypatch, make_gemini_client):
    """Make the CLI use a client backed by the given fake HTTP handler."""
    def _use(handler):
        client = make_gemini_client(handler)
        monkeypatch.setattr("geminichat.cli.app.get_client", lambda: client)
        return client

    return _use


def _saved(path):
    return json.loads(path.read_text())


class TestConfigureCommand:
    """Tests for `geminichat configure`."""

    def test_saves_key_and_model(self, settings_path):
        """Test that options are written to the settings file."""
        result = runner.invoke(app, ["configure", "--api-key", "secret-key-123", "--model", "gemini-pro"])

        assert result.exit_code == 0
        assert _saved(settings_path)["api_key"] == "secret-key-123"
        assert _saved(settings_path)["selected_model_id"] == "gemini-pro"
        assert "secret-key-123" not in result.output
        assert "secr...-123" in result.output

    def test_shows_defaults(self, settings_path):
        """Test that a fresh installation reports no key and the default model."""
        result = runner.invoke(app, ["configure"])

        assert result.exit_code == 0
        assert "not set" in result.output
        assert DEFAULT_MODEL_ID in result.output
        assert not settings_path.exists()


class TestModelsCommand:
    """Tests for `geminichat models`."""

    def test_no_cache(self, settings_path):
        """Test the hint shown before the first refresh."""
        result = runner.invoke(app, ["models"])

        assert result.exit_code == 0
        assert "No cached models" in result.output

    def test_refresh(self, settings_path, use_client, catalog_payload):
        """Test that --refresh fetches and caches the catalog."""
        runner.invoke(app, ["configure", "--api-key", "k"])
        use_client(lambda request: json_response(catalog_payload))

        result = runner.invoke(app, ["models", "--refresh"])

        assert result.exit_code == 0
        assert _saved(settings_path)["available_model_ids"] == ["a"]

    def test_refresh_requires_key(self, settings_path):
        """Test that refreshing without a key exits with an error."""
        result = runner.invoke(app, ["models", "--refresh"])

        assert result.exit_code == 1
        assert "API Key is not set" in result.output

    def test_refresh_failure(self, settings_path, use_client):
        """Test that a failed refresh exits with the error message."""
        runner.invoke(app, ["configure", "--api-key", "k"])
        use_client(lambda request: httpx.Response(503, text=""))

        result = runner.invoke(app, ["models", "--refresh"])

        assert result.exit_code == 1
        assert "Error fetching models: 503" in result.output


class TestAskCommand:
    """Tests for `geminichat ask`."""

    def test_prints_reply(self, settings_path, use_client, tmp_path):
        """Test a one-shot exchange with HTML output."""
        runner.invoke(app, ["configure", "--api-key", "k"])
        use_client(lambda request: json_response(reply_payload("hi there")))
        html_path = tmp_path / "out.html"

        result = runner.invoke(app, ["ask", "Hello", "--html", str(html_path)])

        assert result.exit_code == 0
        assert "hi there" in result.output
        page = html_path.read_text()
        assert "<p>Hello</p>" in page
        assert "hi there" in page

    def test_model_override_is_not_saved(self, settings_path, use_client):
        """Test that --model applies to one request only."""
        runner.invoke(app, ["configure", "--api-key", "k"])
        client = use_client(lambda request: json_response(reply_payload("ok")))

        result = runner.invoke(app, ["ask", "Hello", "--model", "gemini-pro"])

        assert result.exit_code == 0
        assert client.requests[0].url.path.endswith("/models/gemini-pro:generateContent")
        assert _saved(settings_path)["selected_model_id"] == DEFAULT_MODEL_ID

    def test_uses_environment_key(self, settings_path, use_client, monkeypatch):
        """Test that GEMINI_API_KEY works without a stored key."""
        monkeypatch.setenv("GEMINI_API_KEY", "env-key")
        client = use_client(lambda request: json_response(reply_payload("ok")))

        result = runner.invoke(app, ["ask", "Hello"])

        assert result.exit_code == 0
        assert client.requests[0].url.params["key"] == "env-key"

    def test_error_exits(self, settings_path, use_client):
        """Test that exchange failures are reported with a non-zero exit."""
        runner.invoke(app, ["configure", "--api-key", "k"])
        use_client(lambda request: json_response({"promptFeedback": {"blockReason": "SAFETY"}}))

        result = runner.invoke(app, ["ask", "Hello"])

        assert result.exit_code == 1
        assert "Request Blocked by API: SAFETY" in result.output

    def test_missing_key(self, settings_path):
        """Test that asking without a key exits before any request."""
        result = runner.invoke(app, ["ask", "Hello"])

        assert result.exit_code == 1
        assert "API Key is not set" in result.output
