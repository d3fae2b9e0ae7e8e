"""Unit tests for the settings module."""
import json
import os
import stat
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from geminichat.llm import DEFAULT_MODEL_ID
from geminichat.settings import (
    InMemorySettingsStore,
    JsonFileSettingsStore,
    SettingsState,
    SettingsStore,
    create_settings_store,
    json_file,
)


class TestSettingsStore:
    """Tests for SettingsStore interface."""

    def test_settings_store_is_abstract(self):
        """Test that SettingsStore cannot be instantiated directly."""
        with pytest.raises(TypeError):
            SettingsStore()  # type: ignore


class TestSettingsState:
    """Tests for SettingsState model."""

    def test_defaults(self):
        """Test the state of a fresh installation."""
        state = SettingsState()

        assert state.api_key == ""
        assert state.selected_model_id == DEFAULT_MODEL_ID
        assert state.available_model_ids == []

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_model_becomes_default(self, value):
        """Test that a blank stored model is normalized to the default."""
        assert SettingsState(selected_model_id=value).selected_model_id == DEFAULT_MODEL_ID

    def test_missing_model_list_becomes_empty(self):
        """Test that a null catalog loads as an empty list."""
        assert SettingsState(available_model_ids=None).available_model_ids == []


class TestInMemorySettingsStore:
    """Tests for the accessor semantics shared by all backends."""

    def test_backend_type(self):
        """Test the backend identifier."""
        assert InMemorySettingsStore().backend_type == "memory"

    def test_credential_round_trip(self):
        """Test that the credential is stored trimmed."""
        store = InMemorySettingsStore()

        store.set_credential("  secret  ")

        assert store.get_credential() == "secret"

    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_blank_model_selection_stores_default(self, value):
        """Test that selecting a blank model selects the default."""
        store = InMemorySettingsStore(selected_model_id="gemini-pro")

        store.set_selected_model(value)

        assert store.get_selected_model() == DEFAULT_MODEL_ID

    def test_cached_ids_are_copied(self):
        """Test that callers cannot mutate the cached catalog in place."""
        store = InMemorySettingsStore()
        ids = ["a", "b"]

        store.set_cached_model_ids(ids)
        ids.append("c")
        store.get_cached_model_ids().append("d")

        assert store.get_cached_model_ids() == ["a", "b"]

    @given(st.lists(st.text()))
    def test_cached_ids_round_trip(self, ids: list[str]):
        """Property test: the catalog reads back exactly as written."""
        store = InMemorySettingsStore()
        store.set_cached_model_ids(ids)
        assert store.get_cached_model_ids() == ids


class TestJsonFileSettingsStore:
    """Tests for the JSON file backend."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test that a fresh installation has default settings."""
        store = JsonFileSettingsStore(tmp_path / "settings.json")

        assert store.get_state() == SettingsState()
        assert not (tmp_path / "settings.json").exists()

    def test_persists_across_instances(self, tmp_path):
        """Test that saved values are visible to a new store on the same file."""
        path = tmp_path / "nested" / "settings.json"
        store = JsonFileSettingsStore(path)
        store.set_credential("secret")
        store.set_selected_model("gemini-pro")
        store.set_cached_model_ids(["gemini-pro", "gemini-flash"])

        reloaded = JsonFileSettingsStore(path)

        assert reloaded.get_credential() == "secret"
        assert reloaded.get_selected_model() == "gemini-pro"
        assert reloaded.get_cached_model_ids() == ["gemini-pro", "gemini-flash"]
        assert json.loads(path.read_text())["selected_model_id"] == "gemini-pro"

    def test_file_is_private(self, tmp_path):
        """Test that the settings file is readable by the owner only."""
        path = tmp_path / "settings.json"
        JsonFileSettingsStore(path).set_credential("secret")

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_key_is_private_before_it_reaches_the_settings_path(self, tmp_path, monkeypatch):
        """Test that the key is only ever on disk in a 0600 file, even with umask 022."""
        path = tmp_path / "settings.json"
        written = []
        real_replace = json_file.os.replace

        def recording_replace(src, dst):
            written.append((stat.S_IMODE(os.stat(src).st_mode), Path(src).read_text()))
            real_replace(src, dst)

        monkeypatch.setattr(json_file.os, "replace", recording_replace)
        old_umask = os.umask(0o022)
        try:
            JsonFileSettingsStore(path).set_credential("SECRET")
        finally:
            os.umask(old_umask)

        [(mode, content)] = written
        assert "SECRET" in content
        assert mode == 0o600
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_leftover_temp_file_does_not_keep_its_mode(self, tmp_path):
        """Test that a stale readable temp file is not reused for the key."""
        path = tmp_path / "settings.json"
        stale = tmp_path / ".settings.json.tmp"
        stale.write_text("stale")
        stale.chmod(0o644)

        JsonFileSettingsStore(path).set_credential("SECRET")

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert not stale.exists()

    def test_failed_save_keeps_previous_file(self, tmp_path, monkeypatch):
        """Test that an interrupted save leaves the stored key intact."""
        path = tmp_path / "settings.json"
        JsonFileSettingsStore(path).set_credential("saved-key")
        before = path.read_text()

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(json_file.os, "replace", failing_replace)
        with pytest.raises(OSError):
            JsonFileSettingsStore(path).set_credential("new-key")
        monkeypatch.undo()

        assert path.read_text() == before
        assert not (tmp_path / ".settings.json.tmp").exists()
        assert JsonFileSettingsStore(path).get_credential() == "saved-key"

    @pytest.mark.parametrize("content", ["not json", '{"available_model_ids": 5}', "[]"])
    def test_corrupt_file_gives_defaults(self, tmp_path, content):
        """Test that an invalid file is ignored until the next save."""
        path = tmp_path / "settings.json"
        path.write_text(content)

        store = JsonFileSettingsStore(path)

        assert store.get_state() == SettingsState()
        assert path.read_text() == content

    def test_credential_fallback(self, tmp_path):
        """Test that the fallback key is used only while none is stored."""
        path = tmp_path / "settings.json"
        store = JsonFileSettingsStore(path, credential_fallback="env-key")

        assert store.get_credential() == "env-key"

        store.set_selected_model("gemini-pro")
        assert json.loads(path.read_text())["api_key"] == ""

        store.set_credential("saved-key")
        assert store.get_credential() == "saved-key"


class TestSettingsFactory:
    """Tests for create_settings_store."""

    def test_create_memory_store(self):
        """Test creating an in-memory store with initial fields."""
        store = create_settings_store("memory", api_key="k")

        assert isinstance(store, InMemorySettingsStore)
        assert store.get_credential() == "k"

    def test_create_file_store(self, tmp_path):
        """Test creating a file store."""
        store = create_settings_store("file", path=tmp_path / "s.json")

        assert isinstance(store, JsonFileSettingsStore)
        assert store.backend_type == "file"
        assert store.path == tmp_path / "s.json"

    def test_unknown_backend(self):
        """Test that unsupported backends raise ValueError."""
        with pytest.raises(ValueError, match="Unsupported settings backend"):
            create_settings_store("redis")
