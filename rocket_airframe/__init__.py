"""
Rocket Airframe Module

Body tube and companion component models for a nose-to-tail rocket
airframe. Body tubes take their radius from their neighbors when no
explicit radius is set, report volume, CG and unit inertias, and can act
as single-motor mounts. Supports importing from OpenRocket .ork files.

Example usage:
    from rocket_airframe import RocketAirframe, BodyTube

    airframe = RocketAirframe.estes_alpha()
    tube = airframe.body_tubes()[0]

    print(f"Outer radius: {tube.outer_radius * 1000:.1f} mm")
    print(f"Volume: {tube.get_volume() * 1e6:.2f} cm^3")
"""

from .airframe import RocketAirframe
from .body_tube import BodyTube
from .components import (
    Component,
    InternalComponent,
    ExternalComponent,
    BodyComponent,
    SymmetricComponent,
    NoseCone,
    TrapezoidFinSet,
    InnerTube,
    MassObject,
    Material,
    CenterOfMass,
    NoseConeShape,
    FinCrossSection,
)
from .config import ComponentDefaults
from .context import ComponentContext
from .events import ChangeType, ComponentChangeEvent
from .motor_mount import Motor, MotorConfiguration, MotorMountConfigurations, IgnitionEvent
from .openrocket_parser import OpenRocketParser
from .presets import ComponentPreset, PresetType
from .strings import Translator

__all__ = [
    "RocketAirframe",
    "OpenRocketParser",
    "BodyTube",
    "Component",
    "InternalComponent",
    "ExternalComponent",
    "BodyComponent",
    "SymmetricComponent",
    "NoseCone",
    "TrapezoidFinSet",
    "InnerTube",
    "MassObject",
    "Material",
    "CenterOfMass",
    "NoseConeShape",
    "FinCrossSection",
    "ComponentDefaults",
    "ComponentContext",
    "ChangeType",
    "ComponentChangeEvent",
    "Motor",
    "MotorConfiguration",
    "MotorMountConfigurations",
    "IgnitionEvent",
    "ComponentPreset",
    "PresetType",
    "Translator",
]
