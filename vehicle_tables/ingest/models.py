"""Data models for the vehicle table converter.

All intermediate representations passed between the extractors, the
classifier and the assembler.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


IDENTITY_ORIENTATION = [1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0]


# ---------------------------------------------------------------------------
# Typed values
# ---------------------------------------------------------------------------

@dataclass
class VectorValue:
    """A recognised ``Name.new(...)`` constructor other than a frame."""
    kind: str  # constructor name, e.g. Vector3, Color3
    components: list[float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "components": list(self.components)}


@dataclass
class FrameValue:
    """A frame constructor split into position and 3x3 orientation."""
    position: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    orientation: list[float] = field(
        default_factory=lambda: list(IDENTITY_ORIENTATION)
    )

    @classmethod
    def from_args(cls, args: list[float]) -> "FrameValue":
        """Build a frame from up to 12 numeric constructor arguments.

        Absent position slots are 0.0. With fewer than 4 arguments the
        orientation is the identity rotation; otherwise each absent
        orientation slot takes its identity entry.
        """
        position = [args[i] if i < len(args) else 0.0 for i in range(3)]
        if len(args) < 4:
            orientation = list(IDENTITY_ORIENTATION)
        else:
            orientation = [
                args[3 + i] if 3 + i < len(args) else IDENTITY_ORIENTATION[i]
                for i in range(9)
            ]
        return cls(position=position, orientation=orientation)

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "orientation": list(self.orientation),
        }


TypedValue = Union[str, float, bool, VectorValue, FrameValue]


def serialize_value(value):
    """Convert a TypedValue (or a nested mapping of them) to plain JSON data."""
    if isinstance(value, (VectorValue, FrameValue)):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------

class Category(Enum):
    """Component category decided by the classifier."""
    GUN = "gun"
    TURRET = "turret"
    HULL = "hull"

    @property
    def plural(self) -> str:
        return f"{self.value}s"


@dataclass
class Metadata:
    """The attributes/config/optional sections nested under a component."""
    attributes: dict = field(default_factory=dict)
    config: dict = field(default_factory=dict)
    crew: Optional[list[str]] = None
    td_attributes: Optional[dict] = None
    ammo_mass: Optional[float] = None

    def to_dict(self) -> dict:
        data = {
            "attributes": serialize_value(self.attributes),
            "config": serialize_value(self.config),
        }
        if self.crew is not None:
            data["crew"] = list(self.crew)
        if self.td_attributes is not None:
            data["tdAttributes"] = serialize_value(self.td_attributes)
        if self.ammo_mass is not None:
            data["ammoMass"] = self.ammo_mass
        return data


@dataclass
class Component:
    """One named entry of the source table."""
    name: str
    id: str  # digits exactly as written
    metadata: Metadata = field(default_factory=Metadata)
    category: Category = Category.TURRET

    def to_dict(self) -> dict:
        return {"id": self.id, "metadata": self.metadata.to_dict()}


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

@dataclass
class ParsedDocument:
    """Output of parsing one input text."""
    source: str = ""
    guns: dict[str, Component] = field(default_factory=dict)
    turrets: dict[str, Component] = field(default_factory=dict)
    hulls: dict[str, Component] = field(default_factory=dict)
    diagnostics: list = field(default_factory=list)

    def bucket(self, category: Category) -> dict[str, Component]:
        return getattr(self, category.plural)

    def add(self, component: Component) -> None:
        self.bucket(component.category)[component.name] = component

    def components(self) -> list[Component]:
        return [*self.guns.values(), *self.turrets.values(), *self.hulls.values()]

    def count(self) -> int:
        return len(self.guns) + len(self.turrets) + len(self.hulls)

    def to_dict(self) -> dict:
        return {
            category.plural: {
                name: comp.to_dict()
                for name, comp in self.bucket(category).items()
            }
            for category in Category
        }


@dataclass
class CombinedResult:
    """Components merged across every input document."""
    guns: dict[str, Component] = field(default_factory=dict)
    turrets: dict[str, Component] = field(default_factory=dict)
    hulls: dict[str, Component] = field(default_factory=dict)
    sources: list[str] = field(default_factory=list)
    last_updated: str = ""

    @property
    def count(self) -> dict[str, int]:
        counts = {
            "guns": len(self.guns),
            "turrets": len(self.turrets),
            "hulls": len(self.hulls),
        }
        counts["total"] = sum(counts.values())
        return counts

    def to_dict(self) -> dict:
        return {
            "guns": {n: c.to_dict() for n, c in self.guns.items()},
            "turrets": {n: c.to_dict() for n, c in self.turrets.items()},
            "hulls": {n: c.to_dict() for n, c in self.hulls.items()},
            "count": self.count,
            "sources": list(self.sources),
            "lastUpdated": self.last_updated,
        }
