"""
Component change classification.

Setters on components return the kind of change they caused (or None when
the value was unchanged) and report it once to the notifier injected through
the component's context.
"""
from dataclasses import dataclass
from enum import Flag
from typing import Callable


class ChangeType(Flag):
    """What a component mutation invalidates"""
    AERODYNAMIC = 1
    MASS = 2
    GEOMETRY = AERODYNAMIC | MASS
    MOTOR = 4
    EVENT = 8


@dataclass(frozen=True)
class ComponentChangeEvent:
    """A single change reported by a component"""
    source: object
    change: ChangeType

    @property
    def is_geometry_change(self) -> bool:
        return bool(self.change & ChangeType.GEOMETRY)

    @property
    def is_motor_change(self) -> bool:
        return bool(self.change & ChangeType.MOTOR)


ChangeListener = Callable[[ComponentChangeEvent], None]
