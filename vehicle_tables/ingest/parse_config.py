"""Parse profile loader.

Loads and merges parse profiles with inheritance:
  _base.yaml -> parent profile (``inherits``) -> user profile

A profile names the constructor calls the scalar extractor recognises,
the classifier's indicator keys, and the sub-table keys the assembler
looks for inside each component.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

# Default location for parse profiles
PROFILES_DIR = Path(__file__).parent.parent / "profiles"

PROFILE_ENV_VAR = "VEHICLE_TABLES_PROFILE"


class ProfileError(ValueError):
    """A parse profile could not be loaded."""


@dataclass
class SectionKeys:
    """Keys of the sub-tables and fields read from each component body."""
    attributes: str = "attributes"
    config: str = "config"
    crew: str = "crew"
    td_attributes: str = "tdAttributes"
    ammo_mass: str = "ammoMass"


@dataclass
class ParseConfig:
    """Merged parse profile.

    Built by merging: _base.yaml -> inherited profile -> user profile
    """
    id: str = "_base"
    name: str = "Base vehicle table profile"
    frame_constructors: list[str] = field(default_factory=list)
    vector_constructors: list[str] = field(default_factory=list)
    hull_keys: list[str] = field(default_factory=list)
    gun_keys: list[str] = field(default_factory=list)
    turret_keys: list[str] = field(default_factory=list)
    gun_section: str = "Shells"
    named_child_sections: list[str] = field(default_factory=list)
    sections: SectionKeys = field(default_factory=SectionKeys)

    # Profile files that were merged (for debugging)
    sources: list[str] = field(default_factory=list)

    @classmethod
    def default(cls) -> "ParseConfig":
        """The shipped base profile."""
        return load_parse_config()

    @property
    def constructors(self) -> list[str]:
        return [*self.frame_constructors, *self.vector_constructors]


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override dict into base dict.

    - Dicts are merged recursively
    - Lists are concatenated, skipping scalars already present
    - Scalars are replaced by override
    """
    result = base.copy()

    for key, value in override.items():
        base_val = result.get(key)
        if isinstance(base_val, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_val, value)
        elif isinstance(base_val, list) and isinstance(value, list):
            merged = list(base_val)
            for item in value:
                if isinstance(item, dict) or item not in merged:
                    merged.append(item)
            result[key] = merged
        else:
            result[key] = value

    return result


def load_yaml_file(path: Path) -> dict:
    """Load a YAML profile, returning an empty dict if the file is missing."""
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProfileError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProfileError(f"Profile must be a mapping: {path}")
    return data


def _load_profile_chain(path: Path, seen: set[Path]) -> tuple[dict, list[str]]:
    """Load a user profile, resolving its ``inherits`` parent first."""
    path = path.resolve()
    if path in seen:
        raise ProfileError(f"Circular profile inheritance at {path}")
    seen.add(path)

    if not path.exists():
        raise ProfileError(f"Profile not found: {path}")
    data = load_yaml_file(path)

    merged: dict = {}
    sources: list[str] = []
    inherits = data.get("inherits")
    if inherits and inherits != "_base":
        parent_path = path.parent / f"{inherits}.yaml"
        if not parent_path.exists():
            raise ProfileError(
                f"Profile {path.name} inherits unknown profile '{inherits}'"
            )
        merged, sources = _load_profile_chain(parent_path, seen)

    return deep_merge(merged, data), sources + [str(path)]


def dict_to_parse_config(data: dict, sources: list[str]) -> ParseConfig:
    """Convert a merged profile dict to a ParseConfig."""
    constructors = data.get("constructors", {}) or {}
    indicators = data.get("indicators", {}) or {}
    sections = data.get("sections", {}) or {}
    defaults = SectionKeys()

    return ParseConfig(
        id=data.get("id", "_base"),
        name=data.get("name", "Unnamed profile"),
        frame_constructors=list(constructors.get("frame", [])),
        vector_constructors=list(constructors.get("vector", [])),
        hull_keys=list(indicators.get("hull", [])),
        gun_keys=list(indicators.get("gun", [])),
        turret_keys=list(indicators.get("turret", [])),
        gun_section=indicators.get("gun_section", "Shells"),
        named_child_sections=list(data.get("named_child_sections", [])),
        sections=SectionKeys(
            attributes=sections.get("attributes", defaults.attributes),
            config=sections.get("config", defaults.config),
            crew=sections.get("crew", defaults.crew),
            td_attributes=sections.get("td_attributes", defaults.td_attributes),
            ammo_mass=sections.get("ammo_mass", defaults.ammo_mass),
        ),
        sources=sources,
    )


def load_parse_config(
    profile_path: Optional[str | Path] = None,
    profiles_dir: Path = PROFILES_DIR,
) -> ParseConfig:
    """Load the merged parse profile: _base -> profile chain.

    Args:
        profile_path: Optional user profile YAML merged over the base.
        profiles_dir: Directory containing ``_base.yaml``.

    Returns:
        ParseConfig with the user profile merged over the base.
    """
    base_path = profiles_dir / "_base.yaml"
    merged = load_yaml_file(base_path)
    sources = [str(base_path)] if base_path.exists() else []

    if profile_path:
        user_data, user_sources = _load_profile_chain(Path(profile_path), set())
        merged = deep_merge(merged, user_data)
        sources.extend(user_sources)
        logger.info("Loaded parse profile %s", merged.get("id", profile_path))

    return dict_to_parse_config(merged, sources)



def profile_from_env() -> Optional[str]:
    """User profile path named by $VEHICLE_TABLES_PROFILE, if set."""
    return os.environ.get(PROFILE_ENV_VAR) or None
