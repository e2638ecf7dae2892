"""Tests for parse profile loading."""

import pytest
import yaml

from vehicle_tables.ingest.parse_config import (
    PROFILE_ENV_VAR,
    ParseConfig,
    ProfileError,
    deep_merge,
    load_parse_config,
    profile_from_env,
)


def _write_profile(path, data):
    path.write_text(yaml.dump(data))
    return path


class TestDeepMerge:
    def test_nested_dicts(self):
        base = {"a": {"x": 1, "y": 2}}
        assert deep_merge(base, {"a": {"y": 3}}) == {"a": {"x": 1, "y": 3}}

    def test_lists_extend_without_duplicates(self):
        assert deep_merge({"l": ["a", "b"]}, {"l": ["b", "c"]}) == {"l": ["a", "b", "c"]}

    def test_scalar_replaced(self):
        assert deep_merge({"s": "old"}, {"s": "new"}) == {"s": "new"}

    def test_base_not_mutated(self):
        base = {"l": [1]}
        deep_merge(base, {"l": [2]})
        assert base == {"l": [1]}


class TestBaseProfile:
    def test_defaults(self):
        config = load_parse_config()
        assert config.id == "_base"
        assert config.frame_constructors == ["CFrame", "Frame"]
        assert config.vector_constructors == ["Vector2", "Vector3", "Color3"]
        assert "GunCaliber" in config.gun_keys
        assert "HullWeight" in config.hull_keys
        assert "TurretWeight" in config.turret_keys
        assert config.gun_section == "Shells"
        assert config.named_child_sections == ["Shells"]
        assert config.sections.td_attributes == "tdAttributes"
        assert len(config.sources) == 1

    def test_default_classmethod(self):
        assert ParseConfig.default().constructors == [
            "CFrame", "Frame", "Vector2", "Vector3", "Color3",
        ]


class TestUserProfiles:
    def test_user_profile_extends_lists(self, tmp_path):
        path = _write_profile(tmp_path / "tanks.yaml", {
            "id": "tanks",
            "constructors": {"vector": ["UDim2"]},
            "indicators": {"hull": ["EngineTorque"]},
        })
        config = load_parse_config(path)
        assert config.id == "tanks"
        assert config.vector_constructors[-1] == "UDim2"
        assert "EngineTorque" in config.hull_keys
        assert "HullWeight" in config.hull_keys
        assert config.sources[-1] == str(path.resolve())

    def test_inherits_chain(self, tmp_path):
        _write_profile(tmp_path / "parent.yaml", {
            "id": "parent", "named_child_sections": ["Ammo"],
        })
        child = _write_profile(tmp_path / "child.yaml", {
            "id": "child", "inherits": "parent",
            "sections": {"crew": "Crew"},
        })
        config = load_parse_config(child)
        assert config.id == "child"
        assert config.named_child_sections == ["Shells", "Ammo"]
        assert config.sections.crew == "Crew"
        assert len(config.sources) == 3

    def test_env_var_read_by_profile_from_env(self, tmp_path, monkeypatch):
        path = _write_profile(tmp_path / "env.yaml", {"id": "from_env"})
        monkeypatch.setenv(PROFILE_ENV_VAR, str(path))
        assert profile_from_env() == str(path)
        assert load_parse_config(profile_from_env()).id == "from_env"

    def test_unset_env_var(self):
        assert profile_from_env() is None

    def test_loader_ignores_env_var(self, tmp_path, monkeypatch):
        monkeypatch.setenv(PROFILE_ENV_VAR, str(tmp_path / "missing.yaml"))
        assert load_parse_config().id == "_base"
        assert ParseConfig.default().id == "_base"

    def test_missing_profile(self, tmp_path):
        with pytest.raises(ProfileError, match="not found"):
            load_parse_config(tmp_path / "nope.yaml")

    def test_unknown_parent(self, tmp_path):
        path = _write_profile(tmp_path / "orphan.yaml", {"inherits": "ghost"})
        with pytest.raises(ProfileError, match="ghost"):
            load_parse_config(path)

    def test_circular_inheritance(self, tmp_path):
        _write_profile(tmp_path / "a.yaml", {"inherits": "b"})
        path = _write_profile(tmp_path / "b.yaml", {"inherits": "a"})
        with pytest.raises(ProfileError, match="Circular"):
            load_parse_config(path)

    def test_non_mapping_profile(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ProfileError, match="mapping"):
            load_parse_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("a: [unclosed\n")
        with pytest.raises(ProfileError, match="Invalid YAML"):
            load_parse_config(path)
