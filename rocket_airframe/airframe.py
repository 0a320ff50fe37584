"""
RocketAirframe - ordered chain of rocket components.

Components are kept from nose to tail. The symmetric components among them
form the body chain that automatic radii are resolved along; other
components (fins, inner tubes, mass objects) are skipped by the chain.
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any
from pathlib import Path
import yaml

from .body_tube import BodyTube
from .components import (
    Component,
    SymmetricComponent,
    BodyComponent,
    NoseCone,
    TrapezoidFinSet,
    InnerTube,
    MassObject,
    Material,
    NoseConeShape,
)
from .context import ComponentContext
from .motor_mount import Motor, MotorConfiguration, IgnitionEvent

logger = logging.getLogger(__name__)

AUTO = "auto"


@dataclass
class RocketAirframe:
    """
    Physical definition of a rocket airframe as an ordered component chain.

    Attributes:
        name: Descriptive name for the airframe
        description: Optional longer description
        components: List of components from nose to tail
        source_file: Path to source file if loaded from .ork or .yaml
    """

    name: str
    description: str = ""
    components: List[Component] = field(default_factory=list)
    source_file: Optional[str] = None

    def __post_init__(self):
        """Attach the initial components to this airframe"""
        components, self.components = self.components, []
        for comp in components:
            self.add_component(comp)

    # Chain structure

    def add_component(self, component: Component, index: Optional[int] = None):
        """
        Insert a component into the chain (appended when index is None).

        Raises:
            ValueError: If the component already belongs to an airframe
        """
        if component.airframe is not None:
            raise ValueError(
                f"Component {component.name!r} already belongs to an airframe"
            )
        if index is None:
            self.components.append(component)
        else:
            self.components.insert(index, component)
        component.airframe = self
        logger.debug(f"Added {component.name!r} to {self.name!r}")

    def remove_component(self, component: Component):
        """Remove a component from the chain and detach it"""
        del self.components[self.index_of(component)]
        component.airframe = None
        logger.debug(f"Removed {component.name!r} from {self.name!r}")

    def move_component(self, component: Component, index: int):
        """Move a component to a new index in the chain"""
        del self.components[self.index_of(component)]
        self.components.insert(index, component)

    def index_of(self, component: Component) -> int:
        """
        Index of a component in the chain.

        Raises:
            ValueError: If the component is not in this airframe
        """
        for i, comp in enumerate(self.components):
            if comp is component:
                return i
        raise ValueError(f"Component {component.name!r} is not part of {self.name!r}")

    def previous_symmetric_component(
        self, component: Component
    ) -> Optional[SymmetricComponent]:
        """Closest symmetric component in front of the given one"""
        index = self.index_of(component)
        for comp in reversed(self.components[:index]):
            if isinstance(comp, SymmetricComponent):
                return comp
        return None

    def next_symmetric_component(
        self, component: Component
    ) -> Optional[SymmetricComponent]:
        """Closest symmetric component behind the given one"""
        index = self.index_of(component)
        for comp in self.components[index + 1:]:
            if isinstance(comp, SymmetricComponent):
                return comp
        return None

    def walk_front_radius(self, component: SymmetricComponent) -> Optional[float]:
        """
        First explicit aft radius from the given component towards the nose.

        Only automatic body tubes pass the question on; any other automatic
        component ends the walk. Returns None when no explicit radius is found.
        """
        index = self.index_of(component)
        for comp in reversed(self.components[:index + 1]):
            if isinstance(comp, SymmetricComponent):
                r = comp._aft_radius_offer()
                if r is not None or not isinstance(comp, BodyTube):
                    return r
        return None

    def walk_rear_radius(self, component: SymmetricComponent) -> Optional[float]:
        """
        First explicit fore radius from the given component towards the tail.

        Only automatic body tubes pass the question on; any other automatic
        component ends the walk. Returns None when no explicit radius is found.
        """
        index = self.index_of(component)
        for comp in self.components[index:]:
            if isinstance(comp, SymmetricComponent):
                r = comp._fore_radius_offer()
                if r is not None or not isinstance(comp, BodyTube):
                    return r
        return None

    def body_tubes(self) -> List[BodyTube]:
        return [c for c in self.components if isinstance(c, BodyTube)]

    # Reference dimensions

    @property
    def body_diameter(self) -> float:
        """Reference body diameter (m): largest body tube or nose cone base"""
        diameters = [bt.outer_diameter for bt in self.body_tubes()]
        if not diameters:
            diameters = [
                nc.base_diameter for nc in self.components if isinstance(nc, NoseCone)
            ]
        return max(diameters) if diameters else 0.024  # Default 24mm

    @property
    def body_radius(self) -> float:
        """Reference body radius (m)"""
        return self.body_diameter / 2

    @property
    def total_length(self) -> float:
        """Total length (m) covered by the body components"""
        max_extent = 0.0
        for comp in self.components:
            if isinstance(comp, BodyComponent) and hasattr(comp, "length"):
                max_extent = max(max_extent, comp.position + comp.length)
        return max_extent if max_extent > 0 else 0.45  # Default 45cm

    def get_fin_set(self) -> Optional[TrapezoidFinSet]:
        """Get the primary fin set (first TrapezoidFinSet found)"""
        for comp in self.components:
            if isinstance(comp, TrapezoidFinSet):
                return comp
        return None

    def summary(self) -> str:
        """Return a human-readable summary of the airframe"""
        lines = [
            f"Airframe: {self.name}",
            f"  Length: {self.total_length*1000:.1f} mm",
            f"  Diameter: {self.body_diameter*1000:.1f} mm",
            f"  Components: {len(self.components)}",
        ]

        for bt in self.body_tubes():
            radius_mode = "auto" if bt.outer_radius_automatic else "fixed"
            line = (
                f"  {bt.name}: {bt.length*1000:.1f} mm x "
                f"{bt.outer_diameter*1000:.1f} mm ({radius_mode})"
            )
            if bt.motor_mount:
                line += ", motor mount"
            lines.append(line)

        fin_set = self.get_fin_set()
        if fin_set:
            lines.append(f"  Fins: {fin_set.num_fins}x, span={fin_set.span*1000:.1f}mm")

        return "\n".join(lines)

    # Serialization methods

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "name": self.name,
            "description": self.description,
            "components": [self._component_to_dict(c) for c in self.components],
        }

    def _component_to_dict(self, comp: Component) -> Dict[str, Any]:
        """Convert a component to dictionary"""
        data = {
            "type": type(comp).__name__,
            "name": comp.name,
            "position": comp.position,
        }

        if comp.mass_override is not None:
            data["mass_override"] = comp.mass_override

        if isinstance(comp, NoseCone):
            data.update(
                {
                    "length": comp.length,
                    "base_diameter": AUTO if comp.aft_radius_automatic else comp.base_diameter,
                    "shape": comp.shape.value,
                    "thickness": comp.thickness,
                    "material": comp.material.name,
                }
            )
        elif isinstance(comp, BodyTube):
            data.update(
                {
                    "length": comp.length,
                    "outer_diameter": AUTO if comp.outer_radius_automatic else comp.outer_diameter,
                    "thickness": comp.thickness,
                    "filled": comp.filled,
                    "material": comp.material.name,
                }
            )
            if comp.motor_mount or comp.flight_configuration_ids() or comp.motor_overhang:
                data["motor_mount"] = self._motor_mount_to_dict(comp)
        elif isinstance(comp, TrapezoidFinSet):
            data.update(
                {
                    "num_fins": comp.num_fins,
                    "root_chord": comp.root_chord,
                    "tip_chord": comp.tip_chord,
                    "span": comp.span,
                    "sweep_length": comp.sweep_length,
                    "thickness": comp.thickness,
                    "material": comp.material.name,
                }
            )
        elif isinstance(comp, InnerTube):
            data.update(
                {
                    "length": comp.length,
                    "outer_diameter": comp.outer_diameter,
                    "inner_diameter": comp.inner_diameter,
                    "material": comp.material.name,
                }
            )
        elif isinstance(comp, MassObject):
            data.update(
                {
                    "mass": comp.mass,
                    "length": comp.length,
                    "radius_of_gyration": comp.radius_of_gyration,
                }
            )

        return data

    @staticmethod
    def _motor_mount_to_dict(tube: BodyTube) -> Dict[str, Any]:
        configurations = {}
        for config_id in tube.flight_configuration_ids():
            config = tube.get_flight_configuration(config_id)
            entry = {
                "ejection_delay": config.ejection_delay,
                "ignition_event": config.ignition_event.value,
                "ignition_delay": config.ignition_delay,
            }
            if config.motor is not None:
                motor = asdict(config.motor)
                motor["delays"] = list(config.motor.delays)
                entry["motor"] = motor
            configurations[config_id] = entry

        return {
            "enabled": tube.motor_mount,
            "overhang": tube.motor_overhang,
            "ignition_event": tube.ignition_event.value,
            "ignition_delay": tube.ignition_delay,
            "configurations": configurations,
        }

    def save_yaml(self, path: str):
        """Save airframe definition to YAML file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load_yaml(
        cls, path: str, context: Optional[ComponentContext] = None
    ) -> "RocketAirframe":
        """Load airframe from YAML file"""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls._from_dict(data, source_file=str(path), context=context)

    @classmethod
    def load(cls, path: str, context: Optional[ComponentContext] = None) -> "RocketAirframe":
        """
        Load airframe from file (auto-detect format).

        Supports .ork (OpenRocket) and .yaml/.yml files.

        Args:
            path: Path to airframe file
            context: Context given to every loaded component

        Returns:
            RocketAirframe instance
        """
        path = Path(path)

        if path.suffix.lower() == ".ork":
            from .openrocket_parser import OpenRocketParser

            return OpenRocketParser.parse(str(path), context=context)
        elif path.suffix.lower() in (".yaml", ".yml"):
            return cls.load_yaml(str(path), context=context)
        else:
            raise ValueError(f"Unsupported airframe file format: {path.suffix}")

    @classmethod
    def _from_dict(
        cls,
        data: Dict[str, Any],
        source_file: str = None,
        context: Optional[ComponentContext] = None,
    ) -> "RocketAirframe":
        """Create airframe from dictionary"""
        if context is None:
            context = ComponentContext()
        components = []

        for comp_data in data.get("components", []):
            comp_data = dict(comp_data)  # Copy to avoid mutation
            comp_type = comp_data.pop("type")

            # Get material if specified
            material_name = comp_data.pop("material", None)
            if material_name:
                comp_data["material"] = Material.from_name(material_name)

            if comp_type == "NoseCone":
                shape = NoseConeShape(comp_data.pop("shape", "ogive"))
                if comp_data.get("base_diameter") == AUTO:
                    comp_data["base_diameter"] = None
                components.append(NoseCone(**comp_data, shape=shape, context=context))

            elif comp_type == "BodyTube":
                components.append(cls._body_tube_from_dict(comp_data, context))

            elif comp_type == "TrapezoidFinSet":
                components.append(TrapezoidFinSet(**comp_data, context=context))

            elif comp_type in ("InnerTube", "MotorMount"):
                components.append(InnerTube(**comp_data, context=context))

            elif comp_type == "MassObject":
                components.append(MassObject(**comp_data, context=context))

            else:
                logger.warning(f"Skipping unknown component type {comp_type!r}")

        return cls(
            name=data.get("name", "Unnamed Airframe"),
            description=data.get("description", ""),
            components=components,
            source_file=source_file,
        )

    @staticmethod
    def _body_tube_from_dict(
        comp_data: Dict[str, Any], context: ComponentContext
    ) -> BodyTube:
        """Create a body tube, accepting 'auto' diameters and inner diameters"""
        mount_data = comp_data.pop("motor_mount", None)
        outer_d = comp_data.pop("outer_diameter", AUTO)
        inner_d = comp_data.pop("inner_diameter", None)

        radius = None if outer_d == AUTO else outer_d / 2
        if inner_d is not None and radius is not None and "thickness" not in comp_data:
            comp_data["thickness"] = (outer_d - inner_d) / 2

        tube = BodyTube(radius=radius, context=context, **comp_data)

        if mount_data:
            tube.set_motor_mount(bool(mount_data.get("enabled", True)))
            tube.set_motor_overhang(mount_data.get("overhang", 0.0))
            tube.set_ignition_event(
                IgnitionEvent.from_name(mount_data.get("ignition_event", "automatic"))
            )
            tube.set_ignition_delay(mount_data.get("ignition_delay", 0.0))
            for config_id, entry in (mount_data.get("configurations") or {}).items():
                motor = None
                motor_data = entry.get("motor")
                if motor_data:
                    motor_data = dict(motor_data)
                    motor_data["delays"] = tuple(motor_data.get("delays", ()))
                    motor = Motor(**motor_data)
                # Configurations without their own ignition settings use the default ones
                event = entry.get("ignition_event")
                tube.set_flight_configuration(
                    str(config_id),
                    MotorConfiguration(
                        motor=motor,
                        ejection_delay=entry.get("ejection_delay", 0.0),
                        ignition_event=(
                            IgnitionEvent.from_name(event) if event else tube.ignition_event
                        ),
                        ignition_delay=entry.get("ignition_delay", tube.ignition_delay),
                    ),
                )

        return tube

    # Factory methods for common rockets

    @classmethod
    def estes_alpha(cls, context: Optional[ComponentContext] = None) -> "RocketAirframe":
        """
        Create Estes Alpha III airframe.

        Classic beginner rocket designed for Estes C6 motors.
        Approximately 31cm long, 24mm diameter. The nose cone base radius
        follows the body tube.
        """
        if context is None:
            context = ComponentContext()
        body = BodyTube(
            name="Body Tube",
            position=0.07,
            length=0.24,
            radius=0.012,
            thickness=0.001,
            material=Material.cardboard(),
            context=context,
        )
        body.set_motor_mount(True)
        return cls(
            name="Estes Alpha III",
            description="Classic beginner rocket for C6 motors",
            components=[
                NoseCone(
                    name="Nose Cone",
                    position=0.0,
                    length=0.07,
                    base_diameter=None,
                    shape=NoseConeShape.OGIVE,
                    thickness=0.002,
                    material=Material.abs_plastic(),
                    context=context,
                ),
                body,
                TrapezoidFinSet(
                    name="Fins",
                    position=0.24,
                    num_fins=4,
                    root_chord=0.05,
                    tip_chord=0.025,
                    span=0.04,
                    thickness=0.002,
                    material=Material.balsa(),
                    context=context,
                ),
                InnerTube(
                    name="Motor Tube",
                    position=0.24,
                    length=0.07,
                    outer_diameter=0.020,
                    inner_diameter=0.018,
                    material=Material.cardboard(),
                    context=context,
                ),
            ],
        )

    @classmethod
    def high_power_minimum_diameter(
        cls, motor_diameter: float = 0.038, context: Optional[ComponentContext] = None
    ) -> "RocketAirframe":
        """
        Create a minimum-diameter high-power rocket.

        The body tube doubles as the motor mount; the aft body section takes
        its radius automatically from the forward one.

        Args:
            motor_diameter: Motor diameter in meters (default 38mm)
        """
        if context is None:
            context = ComponentContext()
        body_od = motor_diameter + 0.003  # Small clearance
        body_id = motor_diameter + 0.001

        aft_body = BodyTube(
            name="Aft Body Tube",
            position=0.45,
            length=0.30,
            thickness=(body_od - body_id) / 2,
            material=Material.fiberglass(),
            context=context,
        )
        aft_body.set_motor_mount(True)

        return cls(
            name=f"Min-D {motor_diameter*1000:.0f}mm",
            description=f"Minimum diameter rocket for {motor_diameter*1000:.0f}mm motors",
            components=[
                NoseCone(
                    name="Nose Cone",
                    position=0.0,
                    length=0.15,
                    base_diameter=body_od,
                    shape=NoseConeShape.OGIVE,
                    thickness=0.003,
                    material=Material.fiberglass(),
                    context=context,
                ),
                BodyTube(
                    name="Body Tube",
                    position=0.15,
                    length=0.30,
                    radius=body_od / 2,
                    thickness=(body_od - body_id) / 2,
                    material=Material.fiberglass(),
                    context=context,
                ),
                aft_body,
                TrapezoidFinSet(
                    name="Fins",
                    position=0.60,
                    num_fins=4,
                    root_chord=0.10,
                    tip_chord=0.05,
                    span=0.06,
                    thickness=0.003,
                    material=Material.fiberglass(),
                    context=context,
                ),
            ],
        )
