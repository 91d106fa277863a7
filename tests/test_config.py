"""
Tests for the configuration system.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from config import (
    Config,
    PermissionsConfig,
    get_config,
    load_config,
    load_config_file,
    merge_configs,
    strip_jsonc_comments,
)
from core.permissions import OperationKind


class TestStripJSONComments:
    """Test JSONC comment stripping."""

    def test_single_line_comments(self):
        """Test that single-line comments are stripped."""
        jsonc = """
        {
            // This is a comment
            "key": "value"
        }
        """
        result = strip_jsonc_comments(jsonc)
        assert "//" not in result
        assert json.loads(result) == {"key": "value"}

    def test_multi_line_comments(self):
        """Test that multi-line comments are stripped."""
        jsonc = """
        {
            /* This is a
               multi-line comment */
            "key": "value"
        }
        """
        result = strip_jsonc_comments(jsonc)
        assert json.loads(result) == {"key": "value"}


class TestConfigModels:
    """Test Pydantic config models."""

    def test_permissions_config_defaults(self):
        """PermissionsConfig has the engine defaults."""
        permissions = PermissionsConfig()
        assert permissions.audit_capacity == 100
        assert permissions.prompt_timeout_seconds == 300.0
        assert permissions.session_grants == []
        assert permissions.batch_approval is False

    def test_config_defaults(self):
        config = Config()
        assert isinstance(config.permissions, PermissionsConfig)
        assert config.log_level is None

    def test_session_grants_parse_kind_values(self):
        """Grants are given by kind value."""
        permissions = PermissionsConfig(session_grants=["file_read", "git_pull"])
        assert permissions.session_grants == [OperationKind.FILE_READ, OperationKind.GIT_PULL]

    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            PermissionsConfig(audit_capacity=0)
        with pytest.raises(ValidationError):
            PermissionsConfig(session_grants=["teleport"])


class TestMergeConfigs:
    """Test deep merging."""

    def test_nested_override(self):
        base = {"permissions": {"audit_capacity": 50, "batch_approval": False}, "log_level": "INFO"}
        override = {"permissions": {"batch_approval": True}}
        merged = merge_configs(base, override)
        assert merged == {"permissions": {"audit_capacity": 50, "batch_approval": True}, "log_level": "INFO"}
        assert base["permissions"]["batch_approval"] is False


class TestConfigLoading:
    """Test config file loading."""

    def test_load_empty_config(self, temp_dir, isolated_home):
        """Loading with no files yields defaults."""
        config = load_config(temp_dir)
        assert config.permissions.audit_capacity == 100

    def test_load_json_config(self, temp_dir, isolated_home):
        (temp_dir / "gatekeeper.json").write_text(
            json.dumps({"permissions": {"audit_capacity": 25}, "log_level": "DEBUG"})
        )
        config = load_config(temp_dir)
        assert config.permissions.audit_capacity == 25
        assert config.log_level == "DEBUG"

    def test_load_jsonc_config(self, temp_dir, isolated_home):
        (temp_dir / "gatekeeper.jsonc").write_text(
            """
            {
                // Let reads through for the whole session
                "permissions": {"session_grants": ["file_read"]}
            }
            """
        )
        config = load_config(temp_dir)
        assert config.permissions.session_grants == [OperationKind.FILE_READ]

    def test_config_file_precedence(self, temp_dir, isolated_home):
        """The .jsonc project file wins over the .json one."""
        (temp_dir / "gatekeeper.json").write_text(json.dumps({"permissions": {"audit_capacity": 10}}))
        (temp_dir / "gatekeeper.jsonc").write_text(json.dumps({"permissions": {"audit_capacity": 20}}))
        config = load_config(temp_dir)
        assert config.permissions.audit_capacity == 20

    def test_project_overrides_global(self, temp_dir, isolated_home):
        """Project settings are merged over global ones."""
        global_dir = isolated_home / ".gatekeeper"
        global_dir.mkdir()
        (global_dir / "gatekeeper.jsonc").write_text(
            json.dumps({"permissions": {"audit_capacity": 40, "batch_approval": True}})
        )
        project = temp_dir / "project"
        project.mkdir()
        (project / "gatekeeper.json").write_text(json.dumps({"permissions": {"audit_capacity": 60}}))

        config = load_config(project)
        assert config.permissions.audit_capacity == 60
        assert config.permissions.batch_approval is True

    def test_malformed_file_is_skipped(self, temp_dir, isolated_home, caplog):
        path = temp_dir / "gatekeeper.json"
        path.write_text("{not json")
        assert load_config_file(path) is None
        assert load_config(temp_dir).permissions.audit_capacity == 100
        assert any("Failed to load config" in r.message for r in caplog.records)

    def test_non_object_file_is_skipped(self, temp_dir):
        path = temp_dir / "gatekeeper.json"
        path.write_text("[1, 2]")
        assert load_config_file(path) is None

    def test_invalid_settings_raise(self, temp_dir, isolated_home):
        (temp_dir / "gatekeeper.json").write_text(json.dumps({"permissions": {"audit_capacity": -1}}))
        with pytest.raises(ValidationError):
            load_config(temp_dir)


class TestConfigCache:
    """Test config caching."""

    def test_cache_returns_same_instance(self, temp_dir, isolated_home):
        """get_config returns the cached instance."""
        get_config.cache_clear()
        config1 = get_config(temp_dir)
        config2 = get_config(temp_dir)
        assert config1 is config2
        get_config.cache_clear()
