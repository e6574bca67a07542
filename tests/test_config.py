"""Tests for commitsmith.config module."""

from pathlib import Path

import pytest
import yaml

from commitsmith.commit_types import DEFAULT_COMMIT_TYPES, CommitType
from commitsmith.config import (
    DEFAULT_CONFIG,
    LOCAL_CONFIG_FILE,
    SCALAR_KEYS,
    ConfigContext,
    ConfigError,
    ConfigLayer,
    ConfigOverrides,
    load_config,
    load_layer,
    parse_layer,
    resolve,
)


def write_yaml(path: Path, data) -> Path:
    """Write data as YAML, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True)
    return path


@pytest.fixture
def context(temp_dir):
    """A config context with separate workdir and user config dirs."""
    workdir = temp_dir / "work"
    user_config_dir = temp_dir / "xdg"
    workdir.mkdir()
    user_config_dir.mkdir()
    return ConfigContext(workdir=workdir, user_config_dir=user_config_dir)


class TestDefaults:
    """Tests for the built-in defaults."""

    def test_default_scalars(self):
        """Test the default value of every flag."""
        config = resolve([])
        assert config.autocomplete is False
        assert config.breaking_changes is True
        assert config.emoji is False
        assert config.issues is True
        assert config.sign is False

    def test_default_commit_types(self):
        """Test that the built-in types are used by default."""
        config = resolve([])
        assert config.commit_types["feat"] == CommitType(
            name="feat", emoji="✨", description="A new feature"
        )
        assert len(config.commit_types) == len(DEFAULT_COMMIT_TYPES)

    def test_default_document_sets_every_key(self):
        """Test that the default document declares all keys."""
        for key in SCALAR_KEYS:
            assert key in DEFAULT_CONFIG
        assert DEFAULT_CONFIG["commit_types"]


class TestParseLayer:
    """Tests for parse_layer function."""

    def test_empty_document(self):
        """Test that an empty document declares nothing."""
        layer = parse_layer(None)
        assert layer == ConfigLayer()

    def test_partial_document(self):
        """Test that undeclared keys stay unset."""
        layer = parse_layer({"emoji": True})
        assert layer.emoji is True
        assert layer.sign is None
        assert layer.commit_types is None

    def test_coerces_string_booleans(self):
        """Test that "true" strings are accepted as booleans."""
        assert parse_layer({"emoji": "true"}).emoji is True

    def test_ignores_unknown_keys(self):
        """Test that unknown keys are ignored."""
        layer = parse_layer({"unknown": 1, "sign": True})
        assert layer.sign is True

    def test_rejects_non_mapping(self):
        """Test that a list document is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            parse_layer(["emoji"], "test.yaml")
        assert "test.yaml" in str(exc_info.value)

    def test_rejects_invalid_value(self):
        """Test that a non-boolean flag is rejected."""
        with pytest.raises(ConfigError):
            parse_layer({"emoji": "sometimes"})

    def test_rejects_commit_type_without_description(self):
        """Test that commit types must have a description."""
        with pytest.raises(ConfigError):
            parse_layer({"commit_types": [{"name": "feat"}]})


class TestLoadLayer:
    """Tests for load_layer function."""

    def test_missing_file_returns_none(self, temp_dir):
        """Test that a missing file is not an error."""
        assert load_layer(temp_dir / "missing.yaml") is None

    def test_loads_file(self, temp_dir):
        """Test loading a YAML file."""
        path = write_yaml(temp_dir / "c.yaml", {"issues": False})
        assert load_layer(path).issues is False

    def test_empty_file(self, temp_dir):
        """Test that an empty file is an empty layer."""
        path = temp_dir / "c.yaml"
        path.write_text("")
        assert load_layer(path) == ConfigLayer()

    def test_corrupted_file_raises(self, temp_dir):
        """Test that invalid YAML raises ConfigError."""
        path = temp_dir / "c.yaml"
        path.write_text("invalid: yaml: content: [")
        with pytest.raises(ConfigError) as exc_info:
            load_layer(path)
        assert "Failed to load config" in str(exc_info.value)


class TestResolve:
    """Tests for resolve function."""

    @pytest.mark.parametrize("key", SCALAR_KEYS)
    def test_later_source_overrides_earlier(self, key):
        """Test that a later declaration wins."""
        first = ConfigLayer(**{key: True})
        second = ConfigLayer(**{key: False})
        assert getattr(resolve([first, second]), key) is False
        assert getattr(resolve([second, first]), key) is True

    @pytest.mark.parametrize("key", SCALAR_KEYS)
    def test_omitting_source_does_not_change_value(self, key):
        """Test that a layer without the key leaves it alone."""
        declared = ConfigLayer(**{key: not DEFAULT_CONFIG[key]})
        assert getattr(resolve([declared, ConfigLayer()]), key) is (not DEFAULT_CONFIG[key])

    @pytest.mark.parametrize("key", SCALAR_KEYS)
    def test_overrides_win(self, key):
        """Test that per-invocation overrides have the highest precedence."""
        layer = ConfigLayer(**{key: True})
        overrides = ConfigOverrides(**{key: False})
        assert getattr(resolve([layer], overrides), key) is False

    def test_none_sources_skipped(self):
        """Test that missing sources are skipped."""
        config = resolve([None, ConfigLayer(emoji=True), None])
        assert config.emoji is True

    def test_commit_types_from_last_declaring_source(self):
        """Test that the last non-empty commit type list wins whole."""
        first = ConfigLayer(commit_types=[CommitType(name="a", description="a")])
        second = ConfigLayer(commit_types=[CommitType(name="b", description="b")])
        config = resolve([first, second, ConfigLayer()])
        assert list(config.commit_types) == ["b"]

    def test_empty_commit_type_list_does_not_replace(self):
        """Test that an empty list does not count as a declaration."""
        first = ConfigLayer(commit_types=[CommitType(name="a", description="a")])
        second = ConfigLayer(commit_types=[])
        config = resolve([first, second])
        assert list(config.commit_types) == ["a"]

    def test_workdir_recorded(self, temp_dir):
        """Test that the working directory is part of the result."""
        assert resolve([], workdir=temp_dir).workdir == temp_dir


class TestConfigContext:
    """Tests for ConfigContext."""

    def test_uses_xdg_config_home(self, temp_dir, monkeypatch):
        """Test that XDG_CONFIG_HOME is honored."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        context = ConfigContext.from_environment(temp_dir)
        assert context.user_config_dir == temp_dir
        assert context.user_config_path() == temp_dir / "commitsmith" / "config.yaml"

    def test_falls_back_to_home_config(self, temp_dir, monkeypatch):
        """Test the ~/.config fallback."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(temp_dir))
        context = ConfigContext.from_environment(temp_dir)
        assert context.user_config_dir == Path.home() / ".config"

    def test_local_config_path(self, temp_dir):
        """Test the repository-local config path."""
        context = ConfigContext(workdir=temp_dir, user_config_dir=temp_dir)
        assert context.local_config_path() == temp_dir / LOCAL_CONFIG_FILE

    def test_unknown_workdir_raises(self, mocker):
        """Test that a missing working directory raises ConfigError."""
        mocker.patch("commitsmith.config.Path.cwd", side_effect=FileNotFoundError("gone"))
        with pytest.raises(ConfigError) as exc_info:
            ConfigContext.from_environment()
        assert "working directory" in str(exc_info.value)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_no_documents_uses_defaults(self, context):
        """Test that missing documents fall back to the defaults."""
        config = load_config(context=context)
        assert config.breaking_changes is True
        assert "feat" in config.commit_types
        assert config.workdir == context.workdir

    def test_from_path(self, context, temp_dir):
        """Test loading commit types from an explicit path."""
        path = write_yaml(
            temp_dir / "my-config.yaml",
            {"commit_types": [{"name": "1234", "description": "test"}]},
        )
        config = load_config(ConfigOverrides(path=path), context)
        assert "1234" in config.commit_types

    def test_relative_path_is_resolved_against_workdir(self, context):
        """Test that a relative --config path is relative to the workdir."""
        write_yaml(context.workdir / "custom.yaml", {"sign": True})
        config = load_config(ConfigOverrides(path=Path("custom.yaml")), context)
        assert config.sign is True

    def test_missing_explicit_path_is_skipped(self, context, temp_dir):
        """Test that a missing explicit path is not an error."""
        config = load_config(ConfigOverrides(path=temp_dir / "nope.yaml"), context)
        assert config.issues is True

    def test_local_config(self, context):
        """Test the repository-local document."""
        write_yaml(
            context.workdir / LOCAL_CONFIG_FILE,
            {"commit_types": [{"name": "123", "description": "test"}]},
        )
        config = load_config(context=context)
        assert list(config.commit_types) == ["123"]

    def test_user_config(self, context):
        """Test the user-level document."""
        write_yaml(
            context.user_config_path(),
            {"commit_types": [{"name": "12345", "description": "test"}]},
        )
        config = load_config(context=context)
        assert list(config.commit_types) == ["12345"]

    def test_all_config_sources(self, context, temp_dir):
        """Test precedence across every source."""
        write_yaml(
            context.user_config_path(),
            {"commit_types": [{"name": "12345", "description": "test"}]},
        )
        write_yaml(context.workdir / LOCAL_CONFIG_FILE, {"emoji": "true"})
        custom = write_yaml(temp_dir / "custom.yaml", {"autocomplete": True})

        config = load_config(ConfigOverrides(path=custom, emoji=False), context)

        # from user config dir
        assert list(config.commit_types) == ["12345"]
        # set by local config, then overridden directly
        assert config.emoji is False
        # set by the explicit path
        assert config.autocomplete is True
        # defaults
        assert config.sign is False
        assert config.issues is True

    def test_local_overrides_user(self, context):
        """Test that the local document beats the user document."""
        write_yaml(context.user_config_path(), {"issues": False, "sign": True})
        write_yaml(context.workdir / LOCAL_CONFIG_FILE, {"issues": True})
        config = load_config(context=context)
        assert config.issues is True
        assert config.sign is True

    def test_invalid_local_config_raises(self, context):
        """Test that a present but invalid document is an error."""
        (context.workdir / LOCAL_CONFIG_FILE).write_text("emoji: [unclosed")
        with pytest.raises(ConfigError):
            load_config(context=context)

    def test_breaking_changes_override(self, context):
        """Test disabling breaking change questions."""
        config = load_config(ConfigOverrides(breaking_changes=False), context)
        assert config.breaking_changes is False

    def test_issues_override(self, context):
        """Test disabling issue questions."""
        config = load_config(ConfigOverrides(issues=False), context)
        assert config.issues is False
