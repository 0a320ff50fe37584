"""
Cylindrical body tube.

A body tube has a length, an outer radius and a wall thickness (or is filled
solid). The outer radius is either explicit or automatic; an automatic
radius is taken from the closest explicit radius in front of the tube, then
behind it, then from the configured default radius.

A body tube can also act as a motor mount. Motor configurations are kept in
an owned MotorMountConfigurations instance that the tube forwards to.
"""
import copy
import logging
from typing import Optional

import numpy as np

from .components import SymmetricComponent, CenterOfMass, InternalComponent, \
    ExternalComponent, BodyComponent, Material
from .events import ChangeType
from .motor_mount import Motor, MotorConfiguration, MotorMountConfigurations, \
    IgnitionEvent
from .presets import ComponentPreset, PresetType

logger = logging.getLogger(__name__)

EPSILON = 1e-8


def _equals(a: float, b: float) -> bool:
    """Float comparison used by setters that tolerate rounding noise"""
    return abs(a - b) <= EPSILON * max(1.0, abs(a), abs(b))


class BodyTube(SymmetricComponent):
    """
    Cylindrical body tube, optionally a motor mount.

    Args:
        length: Tube length (m); placeholder length when omitted
        radius: Explicit outer radius (m); automatic radius when omitted
        thickness: Wall thickness (m); default thickness when omitted
        filled: Solid rod instead of a tube
    """

    name_key = "BodyTube.BodyTube"
    preset_type = PresetType.BODY_TUBE

    def __init__(
        self,
        name: Optional[str] = None,
        position: float = 0.0,
        length: Optional[float] = None,
        radius: Optional[float] = None,
        thickness: Optional[float] = None,
        filled: bool = False,
        material: Optional[Material] = None,
        **kwargs,
    ):
        super().__init__(
            name=name,
            position=position,
            length=0.0,
            thickness=thickness,
            filled=filled,
            material=material,
            **kwargs,
        )
        defaults = self.context.defaults
        self._auto_radius = radius is None
        if radius is None:
            self._outer_radius = defaults.radius
        else:
            self._outer_radius = max(radius, 0.0)
            self._thickness = min(self._thickness, self._outer_radius)
        self._length = max(length if length is not None else defaults.body_tube_length, 0.0)

        self._motor_mount = False
        self._overhang = 0.0
        self._mount = MotorMountConfigurations()

    # Radius

    @property
    def outer_radius(self) -> float:
        """Effective outer radius (m), resolved from the neighbors if automatic"""
        if not self._auto_radius:
            return self._outer_radius

        r = None
        c = self.previous_symmetric_component()
        if c is not None:
            r = c.front_auto_radius()
        if r is None:
            c = self.next_symmetric_component()
            if c is not None:
                r = c.rear_auto_radius()
        if r is None:
            logger.debug(f"{self.name}: no neighbor radius, using default")
            r = self.context.defaults.radius
        return r

    def set_outer_radius(self, radius: float) -> Optional[ChangeType]:
        """
        Set an explicit outer radius and turn the automatic radius off.

        If the radius is smaller than the wall thickness, the thickness is
        reduced to the radius.
        """
        radius = max(radius, 0.0)
        if self._outer_radius == radius and not self._auto_radius:
            return None

        self._auto_radius = False
        self._outer_radius = radius
        if self._thickness > self._outer_radius:
            self._thickness = self._outer_radius
        self._clear_preset()
        return self._fire(ChangeType.GEOMETRY)

    @property
    def outer_radius_automatic(self) -> bool:
        return self._auto_radius

    def set_outer_radius_automatic(self, auto: bool) -> Optional[ChangeType]:
        if self._auto_radius == auto:
            return None
        self._auto_radius = auto
        self._clear_preset()
        return self._fire(ChangeType.GEOMETRY)

    @property
    def outer_diameter(self) -> float:
        return self.outer_radius * 2

    @property
    def fore_radius(self) -> float:
        return self.outer_radius

    @property
    def aft_radius(self) -> float:
        return self.outer_radius

    @property
    def fore_radius_automatic(self) -> bool:
        return self._auto_radius

    @property
    def aft_radius_automatic(self) -> bool:
        return self._auto_radius

    def _fore_radius_offer(self) -> Optional[float]:
        if self._auto_radius:
            return None
        return self._outer_radius

    def _aft_radius_offer(self) -> Optional[float]:
        if self._auto_radius:
            return None
        return self._outer_radius

    @property
    def inner_radius(self) -> float:
        if self._filled:
            return 0.0
        return max(self.outer_radius - self._thickness, 0.0)

    def set_inner_radius(self, radius: float) -> Optional[ChangeType]:
        return self.set_thickness(self.outer_radius - radius)

    def get_radius(self, x: float) -> float:
        """Outer radius at axial station x (constant along the tube)"""
        return self.outer_radius

    def get_inner_radius(self, x: float) -> float:
        """Inner radius at axial station x; zero if filled"""
        return self.inner_radius

    # Presets

    def load_preset(self, preset: ComponentPreset) -> ChangeType:
        """
        Apply catalog dimensions. Turns the automatic radius off.

        Raises:
            ValueError: If the preset is not a body tube preset
        """
        if preset.preset_type != self.preset_type:
            raise ValueError(
                f"Cannot load {preset.preset_type.value} preset {preset} into a body tube"
            )

        self._auto_radius = False
        if preset.outer_diameter is not None:
            self._outer_radius = max(preset.outer_diameter / 2, 0.0)
            if preset.inner_diameter is not None:
                self._thickness = max(
                    (preset.outer_diameter - preset.inner_diameter) / 2, 0.0
                )
                self._filled = False
            self._thickness = min(self._thickness, self._outer_radius)
        if preset.length is not None:
            self._length = max(preset.length, 0.0)
        if preset.material is not None:
            self.material = preset.material
        if preset.mass is not None:
            self.mass_override = preset.mass

        self.preset = preset
        return self._fire(ChangeType.GEOMETRY)

    # Geometry and mass

    def get_volume(self) -> float:
        r = self.outer_radius
        if self._filled:
            return _filled_volume(r, self._length)
        return _filled_volume(r, self._length) - _filled_volume(self.inner_radius, self._length)

    def get_component_cg(self) -> CenterOfMass:
        return CenterOfMass(self._length / 2, self.get_mass())

    def get_longitudinal_unit_inertia(self) -> float:
        # 1/12 * (3 * (r1^2 + r2^2) + h^2)
        return (3 * (self.inner_radius**2 + self.outer_radius**2) + self._length**2) / 12

    def get_rotational_unit_inertia(self) -> float:
        # 1/2 * (r1^2 + r2^2)
        return (self.inner_radius**2 + self.outer_radius**2) / 2

    def bounding_points(self) -> np.ndarray:
        """
        Corner points of a box enclosing the tube, shape (8, 3).

        Four points (x, +-r, +-r) at each end of the tube; the tube lies
        within their convex hull.
        """
        r = self.outer_radius
        points = []
        for x in (0.0, self._length):
            points.extend([(x, -r, -r), (x, r, -r), (x, r, r), (x, -r, r)])
        return np.array(points)

    def is_compatible(self, component_type: type) -> bool:
        """
        Body tubes accept any internal component, and external components
        that are not themselves part of the body shell.
        """
        if issubclass(component_type, InternalComponent):
            return True
        if issubclass(component_type, ExternalComponent) and \
                not issubclass(component_type, BodyComponent):
            return True
        return False

    # Motor mount

    def get_flight_configuration(self, config_id: str) -> Optional[MotorConfiguration]:
        return self._mount.get_flight_configuration(config_id)

    def set_flight_configuration(self, config_id: str,
                                 config: Optional[MotorConfiguration]):
        self._mount.set_flight_configuration(config_id, config)

    def clone_flight_configuration(self, old_config_id: str, new_config_id: str):
        self._mount.clone_flight_configuration(old_config_id, new_config_id)

    def get_default_flight_configuration(self) -> MotorConfiguration:
        return self._mount.get_default_flight_configuration()

    def set_default_flight_configuration(self, config: MotorConfiguration):
        self._mount.set_default_flight_configuration(config)

    def flight_configuration_ids(self):
        return self._mount.configuration_ids()

    def get_motor(self, config_id: str) -> Optional[Motor]:
        return self._mount.get_motor(config_id)

    def set_motor(self, config_id: str, motor: Optional[Motor]) -> Optional[ChangeType]:
        if self._mount.set_motor(config_id, motor):
            return self._fire(ChangeType.MOTOR)
        return None

    def get_motor_delay(self, config_id: str) -> Optional[float]:
        return self._mount.get_motor_delay(config_id)

    def set_motor_delay(self, config_id: str, delay: float) -> Optional[ChangeType]:
        if self._mount.set_motor_delay(config_id, delay):
            return self._fire(ChangeType.MOTOR)
        return None

    @property
    def motor_mount(self) -> bool:
        return self._motor_mount

    def set_motor_mount(self, mount: bool) -> Optional[ChangeType]:
        if self._motor_mount == mount:
            return None
        self._motor_mount = mount
        return self._fire(ChangeType.MOTOR)

    @property
    def motor_count(self) -> int:
        return 1

    @property
    def motor_mount_diameter(self) -> float:
        return self.inner_radius * 2

    # The ignition accessors act on the default flight configuration.

    @property
    def ignition_event(self) -> IgnitionEvent:
        return self.get_default_flight_configuration().ignition_event

    def set_ignition_event(self, event: IgnitionEvent) -> Optional[ChangeType]:
        if self.ignition_event == event:
            return None
        self.get_default_flight_configuration().ignition_event = event
        return self._fire(ChangeType.EVENT)

    @property
    def ignition_delay(self) -> float:
        return self.get_default_flight_configuration().ignition_delay

    def set_ignition_delay(self, delay: float) -> Optional[ChangeType]:
        if _equals(delay, self.ignition_delay):
            return None
        self.get_default_flight_configuration().ignition_delay = delay
        return self._fire(ChangeType.EVENT)

    @property
    def motor_overhang(self) -> float:
        return self._overhang

    def set_motor_overhang(self, overhang: float) -> Optional[ChangeType]:
        if _equals(self._overhang, overhang):
            return None
        self._overhang = overhang
        return self._fire(ChangeType.GEOMETRY)

    def get_motor_position(self, config_id: str) -> float:
        """
        Axial position of the motor front relative to the tube front (m).

        Raises:
            ValueError: If no motor is assigned to the configuration
        """
        motor = self.get_motor(config_id)
        if motor is None:
            raise ValueError(f"No motor with id {config_id} defined.")
        return self._length - motor.length + self._overhang

    def copy(self) -> 'BodyTube':
        """
        Copy of this tube, detached from any airframe.

        Motor configurations are copied, never shared with this tube.
        """
        tube = copy.copy(self)
        tube.airframe = None
        tube._mount = self._mount.copy()
        return tube


def _filled_volume(r: float, length: float) -> float:
    """Volume of a solid cylinder"""
    return np.pi * r * r * length
