"""
Component defaults configuration.

Placeholder geometry for newly created components and the fallback radius
used when an automatic radius cannot be resolved from the neighbors.

Usage:
    from rocket_airframe.config import ComponentDefaults

    defaults = ComponentDefaults.from_yaml("configs/defaults.yaml")
"""

import yaml
from dataclasses import dataclass, asdict, fields
from typing import Dict, Any
from pathlib import Path


@dataclass
class ComponentDefaults:
    """Default dimensions for new components (SI units)"""

    radius: float = 0.025  # m, also the unresolved auto-radius fallback
    thickness: float = 0.002  # m, wall thickness
    length_factor: float = 8.0  # default body tube length = factor * radius

    @property
    def body_tube_length(self) -> float:
        """Default length of a placeholder body tube (m)"""
        return self.length_factor * self.radius

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComponentDefaults":
        """
        Create defaults from a dictionary.

        Raises:
            ValueError: If the dictionary contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(
                f"Unknown component default(s): {', '.join(sorted(unknown))}"
            )
        return cls(**{k: float(v) for k, v in data.items()})

    @classmethod
    def from_yaml(cls, path: str) -> "ComponentDefaults":
        """Load defaults from a YAML file (empty file gives the built-in values)"""
        with open(Path(path), "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def save_yaml(self, path: str):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
