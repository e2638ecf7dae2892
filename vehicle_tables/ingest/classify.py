"""Component classification.

Assigns each extracted component to a category from the keys present in
its ``config`` table. Values are ignored; only key presence counts.

Rules, in order:
  1. any hull key            -> hull
  2. any gun key, or Shells  -> gun
  3. any turret key          -> turret
  4. nothing matched         -> turret, with a diagnostic
"""

import logging
from typing import Optional

from . import diagnostics as diag
from .diagnostics import DiagnosticSink
from .models import Category
from .parse_config import ParseConfig

logger = logging.getLogger(__name__)


class ComponentClassifier:
    """Classifies components as guns, turrets or hulls."""

    def __init__(self, config: Optional[ParseConfig] = None):
        self.config = config or ParseConfig.default()
        self._hull_keys = set(self.config.hull_keys)
        self._gun_keys = set(self.config.gun_keys)
        self._turret_keys = set(self.config.turret_keys)

    def indicators(self, config: dict) -> dict[Category, set[str]]:
        """Indicator keys present in ``config``, per category."""
        keys = set(config)
        found = {
            Category.HULL: keys & self._hull_keys,
            Category.GUN: keys & self._gun_keys,
            Category.TURRET: keys & self._turret_keys,
        }
        if self._has_gun_section(config):
            found[Category.GUN].add(self.config.gun_section)
        return found

    def classify(
        self,
        config: dict,
        sink: Optional[DiagnosticSink] = None,
        component: Optional[str] = None,
    ) -> Category:
        """Decide the category of one component from its config mapping."""
        found = self.indicators(config)

        for category in (Category.HULL, Category.GUN, Category.TURRET):
            if found[category]:
                return category

        if sink is not None:
            sink.emit(
                diag.AMBIGUOUS_CLASSIFICATION,
                f"No indicator keys for {component or 'component'}, "
                "defaulting to turret",
                component=component,
            )
        return Category.TURRET

    def _has_gun_section(self, config: dict) -> bool:
        section = config.get(self.config.gun_section)
        return isinstance(section, dict) and len(section) > 0


def classify(config: dict, parse_config: Optional[ParseConfig] = None) -> Category:
    """Convenience wrapper around ComponentClassifier.classify."""
    return ComponentClassifier(parse_config).classify(config)
