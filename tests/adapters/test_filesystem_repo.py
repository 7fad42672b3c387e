# tests/adapters/test_filesystem_repo.py
"""
Tests for the filesystem color settings repository.
Storage lives under pytest's tmp_path.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import pytest

from colorizer.adapters.persistence.filesystem_repo import FileSystemColorSettingsRepository
from colorizer.adapters.persistence.schema import SCHEMA_VERSION
from colorizer.core.domain.models import ColorRule, build_default_rules
from tests.fakes import BLUE, GREEN, RED, FakeCompiler


@pytest.fixture
def store(compiler):
    return {
        "Default": build_default_rules(compiler),
        "team/backend": [
            ColorRule.compile("logger == db", compiler, background=RED),
            ColorRule.compile("level == DEBUG", compiler, foreground=BLUE),
        ],
        "Empty": [],
    }


def write_raw(repo, name, data):
    path = repo._get_file_path(name)
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, bytes):
        path.write_bytes(data)
    else:
        path.write_text(data, encoding="utf-8")
    return path


class TestSaveAndLoad:
    def test_round_trip(self, repo, store):
        assert repo.save("test", store) is True

        loaded = repo.load("test")

        assert loaded == store
        assert list(loaded) == ["Default", "team/backend", "Empty"]

    def test_predicates_are_recompiled(self, repo, store, settings_dir):
        repo.save("test", store)
        fresh_compiler = FakeCompiler()
        fresh = FileSystemColorSettingsRepository(str(settings_dir), fresh_compiler)

        loaded = fresh.load("test")

        assert "logger == db" in fresh_compiler.compiled
        assert loaded["team/backend"][0].evaluate({"matches": {"logger == db"}})

    def test_file_name_is_url_encoded(self, repo, store, settings_dir):
        repo.save("team/backend rules", store)

        assert (settings_dir / "team%2Fbackend+rules.colors").exists()
        assert repo.exists("team/backend rules")

    def test_save_overwrites(self, repo, store, compiler):
        repo.save("test", store)
        repo.save("test", {"Only": [ColorRule.compile("a", compiler, background=GREEN)]})

        loaded = repo.load("test")
        assert list(loaded) == ["Only"]
        assert loaded["Only"][0].background == GREEN

    def test_document_layout(self, repo, store, settings_dir):
        repo.save("test", store)

        document = json.loads((settings_dir / "test.colors").read_text(encoding="utf-8"))
        assert document["schema_version"] == SCHEMA_VERSION
        assert document["rule_sets"]["team/backend"][0] == {
            "expression": "logger == db",
            "background": {"r": 255, "g": 0, "b": 0},
            "foreground": None,
        }

    def test_custom_extension(self, settings_dir, compiler, store):
        repo = FileSystemColorSettingsRepository(str(settings_dir), compiler, extension=".json")
        repo.save("test", store)

        assert (settings_dir / "test.json").exists()


class TestMissingAndCorrupt:
    def test_missing_returns_none(self, repo):
        assert repo.load("missing") is None
        assert repo.exists("missing") is False

    @pytest.mark.parametrize("text", [
        "",
        "   \n",
        '{"schema_version": 1, "rule_sets": {"Default": [',
        '{"schema_version": 1, "rule_sets": {"Defa',
        b'{"schema_version": 1, "rule_sets": {"Caf\xc3',
    ])
    def test_truncated_is_absent_and_kept(self, repo, text):
        path = write_raw(repo, "test", text)

        assert repo.load("test") is None
        assert path.exists()

    @pytest.mark.parametrize("text", [
        "not json at all",
        '["a", "list"]',
        '{"schema_version": 1, "rule_sets": {"Default": [{"background": null}]}}',
        '{"schema_version": 1, "rule_sets": {"Default": [{"expression": "a", "background": {"r": 300, "g": 0, "b": 0}}]}}',
        '{"schema_version": 1, "rule_sets": []}',
        b"\xac\xed\x00\x05sr\x00\x11java.util.HashMap",
        b'{"schema_version": 1, "rule_sets": {"\xff\xfe": []}}',
    ])
    def test_corrupt_is_absent_and_deleted(self, repo, text):
        path = write_raw(repo, "test", text)

        assert repo.load("test") is None
        assert not path.exists()

    def test_deeply_nested_document_is_deleted(self, repo):
        depth = 200_000
        path = write_raw(repo, "test", '{"schema_version": 1, "rule_sets": ' + "[" * depth + "]" * depth + "}")

        assert repo.load("test") is None
        assert not path.exists()

    def test_newer_schema_version_is_kept(self, repo):
        path = write_raw(repo, "test", json.dumps({"schema_version": SCHEMA_VERSION + 1, "rule_sets": {}}))

        assert repo.load("test") is None
        assert path.exists()

    def test_uncompilable_rule_is_skipped(self, repo):
        document = {
            "schema_version": 1,
            "rule_sets": {"Default": [
                {"expression": "!! stale syntax", "background": {"r": 1, "g": 2, "b": 3}},
                {"expression": "level == WARN", "background": {"r": 4, "g": 5, "b": 6}},
            ]},
        }
        write_raw(repo, "test", json.dumps(document))

        loaded = repo.load("test")

        assert [r.expression for r in loaded["Default"]] == ["level == WARN"]

    def test_delete(self, repo, store):
        repo.save("test", store)

        assert repo.delete("test") is True
        assert repo.delete("test") is False
        assert repo.load("test") is None


class TestIOFailures:
    def test_failed_save_keeps_previous_file(self, repo, store, settings_dir, compiler, monkeypatch):
        repo.save("test", store)

        def failing_replace(src, dst):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", failing_replace)
        saved = repo.save("test", {"Other": [ColorRule.compile("a", compiler)]})
        monkeypatch.undo()

        assert saved is False
        assert list(repo.load("test")) == list(store)
        assert list(settings_dir.glob("*.tmp")) == []

    def test_temp_file_failure_is_reported(self, repo, store, monkeypatch):
        def failing_mkstemp(*args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(tempfile, "mkstemp", failing_mkstemp)

        assert repo.save("test", store) is False
        assert repo.exists("test") is False

    def test_unreadable_file_is_absent(self, repo, store, settings_dir, monkeypatch):
        repo.save("test", store)
        path = settings_dir / "test.colors"

        def failing_read_bytes(self):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "read_bytes", failing_read_bytes)

        assert repo.load("test") is None
        assert path.exists()


class TestHealthCheck:
    def test_health_check(self, repo, settings_dir):
        assert repo.health_check() is True
        settings_dir.mkdir(parents=True, exist_ok=True)
        assert repo.health_check() is True
