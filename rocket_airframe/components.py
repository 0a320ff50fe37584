"""
Rocket component definitions for airframe modeling.

Each component represents a physical part of the rocket with geometry,
material properties, and methods to calculate mass and unit inertia.
Components are grouped into categories (internal, external, body) that
decide which components may be placed inside which.

Geometry is changed only through the set_* methods. Each returns the
ChangeType it caused, or None when the value did not change, and reports
the change once to the component's context.

All dimensions are in SI units (meters, kilograms).
"""
from dataclasses import dataclass
from typing import Optional, NamedTuple
from enum import Enum
import numpy as np

from .context import ComponentContext
from .events import ChangeType
from .presets import ComponentPreset, PresetType


class NoseConeShape(Enum):
    """Nose cone shape types"""
    OGIVE = "ogive"
    CONICAL = "conical"
    ELLIPTICAL = "elliptical"
    PARABOLIC = "parabolic"
    POWER_SERIES = "power_series"
    HAACK = "haack"


class FinCrossSection(Enum):
    """Fin cross-section shapes"""
    SQUARE = "square"
    ROUNDED = "rounded"
    AIRFOIL = "airfoil"
    DOUBLE_WEDGE = "double_wedge"


@dataclass
class Material:
    """Material properties for structural components"""
    name: str
    density: float  # kg/m^3

    @classmethod
    def balsa(cls) -> 'Material':
        return cls("Balsa", 160.0)

    @classmethod
    def plywood_birch(cls) -> 'Material':
        return cls("Birch Plywood", 630.0)

    @classmethod
    def fiberglass(cls) -> 'Material':
        return cls("Fiberglass", 1800.0)

    @classmethod
    def cardboard(cls) -> 'Material':
        return cls("Cardboard", 680.0)

    @classmethod
    def abs_plastic(cls) -> 'Material':
        return cls("ABS Plastic", 1050.0)

    @classmethod
    def from_name(cls, name: str) -> 'Material':
        """Get material by name, with fallback to cardboard"""
        materials = {
            'balsa': cls.balsa(),
            'birch plywood': cls.plywood_birch(),
            'plywood': cls.plywood_birch(),
            'fiberglass': cls.fiberglass(),
            'cardboard': cls.cardboard(),
            'abs plastic': cls.abs_plastic(),
            'abs': cls.abs_plastic(),
            'plastic': cls.abs_plastic(),
        }
        return materials.get(name.lower(), cls.cardboard())


class CenterOfMass(NamedTuple):
    """Axial CG offset from the component front (m) and component mass (kg)"""
    x: float
    mass: float


class Component:
    """Base class for rocket components"""

    name_key = ""
    preset_type: Optional[PresetType] = None

    def __init__(
        self,
        name: Optional[str] = None,
        position: float = 0.0,
        mass_override: Optional[float] = None,
        material: Optional[Material] = None,
        context: Optional[ComponentContext] = None,
    ):
        self.context = context if context is not None else ComponentContext()
        self.name = name if name is not None else self.component_name
        self.position = position  # Distance from nose tip (m)
        self.mass_override = mass_override  # kg, if set overrides calculated mass
        self.material = material if material is not None else Material.cardboard()
        self.preset: Optional[ComponentPreset] = None
        # Set by the enclosing RocketAirframe
        self.airframe = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, position={self.position!r})"

    @property
    def component_name(self) -> str:
        """Display name of this kind of component"""
        return self.context.translator.get(self.name_key)

    def _fire(self, change: ChangeType) -> ChangeType:
        self.context.notify(self, change)
        return change

    def _clear_preset(self):
        self.preset = None

    def get_volume(self) -> float:
        """Material volume (m^3). Override in subclasses."""
        return 0.0

    def get_mass(self) -> float:
        """Get component mass (override or calculated)"""
        if self.mass_override is not None:
            return self.mass_override
        return self._calculate_mass()

    def _calculate_mass(self) -> float:
        """Calculate mass from geometry and material"""
        return self.get_volume() * self.material.density

    def get_component_cg(self) -> CenterOfMass:
        """CG relative to the component front"""
        return CenterOfMass(0.0, self.get_mass())

    def get_cg_position(self) -> float:
        """Get center of gravity position from nose tip"""
        return self.position + self.get_component_cg().x

    def get_longitudinal_unit_inertia(self) -> float:
        """Inertia about a transverse axis through the CG, per unit mass (m^2)"""
        return 0.0

    def get_rotational_unit_inertia(self) -> float:
        """Inertia about the longitudinal axis, per unit mass (m^2)"""
        return 0.0

    def get_longitudinal_inertia(self) -> float:
        """Pitch/yaw moment of inertia about the component CG (kg*m^2)"""
        return self.get_mass() * self.get_longitudinal_unit_inertia()

    def get_rotational_inertia(self) -> float:
        """Roll moment of inertia about the component axis (kg*m^2)"""
        return self.get_mass() * self.get_rotational_unit_inertia()

    def is_compatible(self, component_type: type) -> bool:
        """Whether a component of the given class may be placed inside this one"""
        return False


class InternalComponent(Component):
    """Component placed inside the airframe (not exposed to the airflow)"""


class ExternalComponent(Component):
    """Component exposed to the airflow"""


class BodyComponent(ExternalComponent):
    """External component forming part of the body shell"""


class SymmetricComponent(BodyComponent):
    """
    Rotationally symmetric body component in the nose-to-tail chain.

    Symmetric components can take their radius automatically from their
    neighbors. A component asks its predecessor for a front contribution
    and its successor for a rear contribution; automatic neighbors pass the
    question further along the chain. The walk itself is done by the
    enclosing airframe over its component list.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        position: float = 0.0,
        length: float = 0.0,
        thickness: Optional[float] = None,
        filled: bool = False,
        **kwargs,
    ):
        super().__init__(name=name, position=position, **kwargs)
        if thickness is None:
            thickness = self.context.defaults.thickness
        self._length = max(length, 0.0)
        self._thickness = max(thickness, 0.0)
        self._filled = filled

    @property
    def fore_radius(self) -> float:
        raise NotImplementedError

    @property
    def aft_radius(self) -> float:
        raise NotImplementedError

    def _fore_radius_offer(self) -> Optional[float]:
        """Explicit fore radius, or None if it is automatic"""
        raise NotImplementedError

    def _aft_radius_offer(self) -> Optional[float]:
        """Explicit aft radius, or None if it is automatic"""
        raise NotImplementedError

    @property
    def length(self) -> float:
        return self._length

    def set_length(self, length: float) -> Optional[ChangeType]:
        length = max(length, 0.0)
        if self._length == length:
            return None
        self._length = length
        self._clear_preset()
        return self._fire(ChangeType.GEOMETRY)

    @property
    def thickness(self) -> float:
        return self._thickness

    def set_thickness(self, thickness: float) -> Optional[ChangeType]:
        """Set wall thickness, clamped to [0, largest radius]; clears filled"""
        thickness = min(max(thickness, 0.0), max(self.fore_radius, self.aft_radius))
        if self._thickness == thickness and not self._filled:
            return None
        self._thickness = thickness
        self._filled = False
        self._clear_preset()
        return self._fire(ChangeType.MASS)

    @property
    def filled(self) -> bool:
        return self._filled

    def set_filled(self, filled: bool) -> Optional[ChangeType]:
        if self._filled == filled:
            return None
        self._filled = filled
        self._clear_preset()
        return self._fire(ChangeType.MASS)

    def previous_symmetric_component(self) -> Optional['SymmetricComponent']:
        if self.airframe is None:
            return None
        return self.airframe.previous_symmetric_component(self)

    def next_symmetric_component(self) -> Optional['SymmetricComponent']:
        if self.airframe is None:
            return None
        return self.airframe.next_symmetric_component(self)

    def front_auto_radius(self) -> Optional[float]:
        """
        Radius this component offers to the component behind it.

        Automatic components defer towards the nose. Returns None when no
        component up to the front of the chain has an explicit radius.
        """
        if self.airframe is None:
            return self._aft_radius_offer()
        return self.airframe.walk_front_radius(self)

    def rear_auto_radius(self) -> Optional[float]:
        """
        Radius this component offers to the component in front of it.

        Automatic components defer towards the tail. Returns None when no
        component down to the end of the chain has an explicit radius.
        """
        if self.airframe is None:
            return self._fore_radius_offer()
        return self.airframe.walk_rear_radius(self)

    def get_component_cg(self) -> CenterOfMass:
        return CenterOfMass(self.length / 2, self.get_mass())


class NoseCone(SymmetricComponent):
    """
    Nose cone component.

    The tip radius is zero. The base radius is either explicit or automatic,
    in which case it follows the component behind the nose cone.
    """

    name_key = "NoseCone.NoseCone"
    preset_type = PresetType.NOSE_CONE

    def __init__(
        self,
        name: Optional[str] = None,
        position: float = 0.0,
        length: float = 0.07,
        base_diameter: Optional[float] = 0.024,  # None for automatic
        shape: NoseConeShape = NoseConeShape.OGIVE,
        shape_parameter: float = 1.0,  # Power for power series, etc.
        thickness: float = 0.002,
        material: Optional[Material] = None,
        **kwargs,
    ):
        super().__init__(
            name=name,
            position=position,
            length=length,
            thickness=thickness,
            material=material if material is not None else Material.abs_plastic(),
            **kwargs,
        )
        self.shape = shape
        self.shape_parameter = shape_parameter
        self._aft_radius_automatic = base_diameter is None
        if base_diameter is None:
            self._aft_radius = self.context.defaults.radius
        else:
            self._aft_radius = max(base_diameter / 2, 0.0)

    @property
    def fore_radius(self) -> float:
        return 0.0

    @property
    def aft_radius(self) -> float:
        if self._aft_radius_automatic:
            r = None
            c = self.next_symmetric_component()
            if c is not None:
                r = c.rear_auto_radius()
            if r is None:
                r = self.context.defaults.radius
            return r
        return self._aft_radius

    @property
    def base_diameter(self) -> float:
        return self.aft_radius * 2

    @property
    def aft_radius_automatic(self) -> bool:
        return self._aft_radius_automatic

    def set_aft_radius(self, radius: float) -> Optional[ChangeType]:
        """Set an explicit base radius; turns automatic mode off"""
        radius = max(radius, 0.0)
        if self._aft_radius == radius and not self._aft_radius_automatic:
            return None
        self._aft_radius_automatic = False
        self._aft_radius = radius
        if self._thickness > radius:
            self._thickness = radius
        self._clear_preset()
        return self._fire(ChangeType.GEOMETRY)

    def set_aft_radius_automatic(self, auto: bool) -> Optional[ChangeType]:
        if self._aft_radius_automatic == auto:
            return None
        self._aft_radius_automatic = auto
        self._clear_preset()
        return self._fire(ChangeType.GEOMETRY)

    def _fore_radius_offer(self) -> Optional[float]:
        return 0.0

    def _aft_radius_offer(self) -> Optional[float]:
        if self._aft_radius_automatic:
            return None
        return self._aft_radius

    def get_volume(self) -> float:
        """Approximate as hollow cone"""
        r = self.aft_radius
        slant_height = np.sqrt(self.length**2 + r**2)
        surface_area = np.pi * r * slant_height
        return surface_area * self.thickness

    def get_component_cg(self) -> CenterOfMass:
        """CG of hollow cone is approximately 2/3 from tip"""
        return CenterOfMass(self.length * 0.67, self.get_mass())

    def get_rotational_unit_inertia(self) -> float:
        """Thin-shell cone about axis: approximately (1/2) * r^2"""
        return 0.5 * self.aft_radius**2


class TrapezoidFinSet(ExternalComponent):
    """
    Trapezoidal fin set (most common fin shape).

    Represents a set of identical fins symmetrically arranged around the body.
    """

    name_key = "TrapezoidFinSet.TrapezoidFinSet"

    def __init__(
        self,
        name: Optional[str] = None,
        position: float = 0.0,
        num_fins: int = 4,
        root_chord: float = 0.05,
        tip_chord: float = 0.025,
        span: float = 0.04,  # semi-span, from body surface to tip
        sweep_length: float = 0.0,  # leading edge sweep
        thickness: float = 0.003,
        cross_section: FinCrossSection = FinCrossSection.SQUARE,
        material: Optional[Material] = None,
        **kwargs,
    ):
        super().__init__(
            name=name,
            position=position,
            material=material if material is not None else Material.plywood_birch(),
            **kwargs,
        )
        self.num_fins = num_fins
        self.root_chord = root_chord
        self.tip_chord = tip_chord
        self.span = span
        self.sweep_length = sweep_length
        self.thickness = thickness
        self.cross_section = cross_section

    @property
    def fin_area(self) -> float:
        """Area of single fin (trapezoid)"""
        return 0.5 * (self.root_chord + self.tip_chord) * self.span

    @property
    def total_fin_area(self) -> float:
        """Total area of all fins"""
        return self.fin_area * self.num_fins

    def get_volume(self) -> float:
        return self.fin_area * self.thickness * self.num_fins

    def get_single_fin_mass(self) -> float:
        """Mass of a single fin"""
        return self.get_mass() / self.num_fins

    def get_component_cg(self) -> CenterOfMass:
        """Approximate CG at 40% of root chord from leading edge"""
        return CenterOfMass(self.root_chord * 0.4, self.get_mass())


class InnerTube(InternalComponent):
    """Inner tube (motor tube, coupler) inside a body tube"""

    name_key = "InnerTube.InnerTube"
    preset_type = PresetType.INNER_TUBE

    def __init__(
        self,
        name: Optional[str] = None,
        position: float = 0.0,
        length: float = 0.07,
        outer_diameter: float = 0.020,
        inner_diameter: float = 0.018,
        material: Optional[Material] = None,
        **kwargs,
    ):
        super().__init__(name=name, position=position, material=material, **kwargs)
        self.length = max(length, 0.0)
        self.outer_diameter = max(outer_diameter, 0.0)
        self.inner_diameter = min(max(inner_diameter, 0.0), self.outer_diameter)

    @property
    def wall_thickness(self) -> float:
        return (self.outer_diameter - self.inner_diameter) / 2

    def get_volume(self) -> float:
        """Volume of hollow cylinder"""
        r_out = self.outer_diameter / 2
        r_in = self.inner_diameter / 2
        return np.pi * self.length * (r_out**2 - r_in**2)

    def get_component_cg(self) -> CenterOfMass:
        return CenterOfMass(self.length / 2, self.get_mass())

    def get_rotational_unit_inertia(self) -> float:
        r_out = self.outer_diameter / 2
        r_in = self.inner_diameter / 2
        return (r_in**2 + r_out**2) / 2


class MassObject(InternalComponent):
    """
    Generic mass object (payload, electronics, etc.)

    Used for components where we know the mass but not detailed geometry.
    """

    name_key = "MassObject.MassObject"

    def __init__(
        self,
        name: Optional[str] = None,
        position: float = 0.0,
        mass: float = 0.01,  # kg
        length: float = 0.02,  # m (for CG calculation)
        radius_of_gyration: float = 0.01,  # m (for inertia estimation)
        **kwargs,
    ):
        super().__init__(name=name, position=position, **kwargs)
        self.mass = mass
        self.length = length
        self.radius_of_gyration = radius_of_gyration

    def _calculate_mass(self) -> float:
        return self.mass

    def get_component_cg(self) -> CenterOfMass:
        return CenterOfMass(self.length / 2, self.get_mass())

    def get_rotational_unit_inertia(self) -> float:
        """Radius of gyration: I = m * k^2"""
        return self.radius_of_gyration**2
