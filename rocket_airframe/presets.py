"""
Component presets (manufacturer catalog parts).

A preset carries the catalog dimensions of a part. Loading it into a
component overrides the component's geometry; changing that geometry
afterwards detaches the preset again.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .components import Material


class PresetType(Enum):
    """Kinds of catalog parts"""
    BODY_TUBE = "body_tube"
    NOSE_CONE = "nose_cone"
    INNER_TUBE = "inner_tube"


@dataclass(frozen=True)
class ComponentPreset:
    """Catalog part; dimensions in meters, mass in kg"""
    preset_type: PresetType
    manufacturer: str
    part_no: str
    outer_diameter: Optional[float] = None
    inner_diameter: Optional[float] = None
    length: Optional[float] = None
    material: Optional["Material"] = None
    mass: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.manufacturer} {self.part_no}"
