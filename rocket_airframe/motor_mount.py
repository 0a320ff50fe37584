"""
Motor mount configuration storage.

A mount holds one motor configuration per flight configuration id plus a
default configuration. Components that can carry a motor own one
MotorMountConfigurations instance and forward to it; copying the component
copies the instance so two components never share configurations.

All dimensions are in SI units (meters, kilograms, seconds).
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple, List


class IgnitionEvent(Enum):
    """When a motor is ignited during flight"""
    AUTOMATIC = "automatic"  # launch for the first stage, burnout of the previous stage otherwise
    LAUNCH = "launch"
    EJECTION = "ejection"
    BURNOUT = "burnout"
    NEVER = "never"

    @classmethod
    def from_name(cls, name: str) -> 'IgnitionEvent':
        """Get event by name, with fallback to AUTOMATIC"""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.AUTOMATIC


@dataclass(frozen=True)
class Motor:
    """Motor definition as seen by a mount"""
    designation: str
    manufacturer: str = ""
    diameter: float = 0.018  # m
    length: float = 0.070  # m
    total_mass: float = 0.0  # kg
    propellant_mass: float = 0.0  # kg
    delays: Tuple[float, ...] = ()  # available ejection delays (s)

    def __str__(self) -> str:
        return f"{self.manufacturer} {self.designation}".strip()


@dataclass
class MotorConfiguration:
    """Motor and ignition settings for one flight configuration"""
    motor: Optional[Motor] = None
    ejection_delay: float = 0.0  # s
    ignition_event: IgnitionEvent = IgnitionEvent.AUTOMATIC
    ignition_delay: float = 0.0  # s

    def copy(self) -> 'MotorConfiguration':
        return replace(self)


@dataclass
class MotorMountConfigurations:
    """
    Per-flight-configuration motor storage for a single motor mount.

    Lookups of unknown configuration ids return None rather than raising.
    Mutators return whether the stored value actually changed so the owning
    component can decide whether to report a change.
    """
    configurations: Dict[str, MotorConfiguration] = field(default_factory=dict)
    default_configuration: MotorConfiguration = field(default_factory=MotorConfiguration)

    def get_flight_configuration(self, config_id: str) -> Optional[MotorConfiguration]:
        return self.configurations.get(config_id)

    def set_flight_configuration(self, config_id: str,
                                 config: Optional[MotorConfiguration]):
        """Store a configuration for an id; None removes it"""
        if config is None:
            self.configurations.pop(config_id, None)
        else:
            self.configurations[config_id] = config

    def clone_flight_configuration(self, old_config_id: str, new_config_id: str):
        """Copy the settings of one configuration under a new id"""
        old = self.get_flight_configuration(old_config_id)
        if old is None:
            return
        self.set_flight_configuration(new_config_id, old.copy())

    def get_default_flight_configuration(self) -> MotorConfiguration:
        return self.default_configuration

    def set_default_flight_configuration(self, config: MotorConfiguration):
        self.default_configuration = config

    def get_motor(self, config_id: str) -> Optional[Motor]:
        config = self.get_flight_configuration(config_id)
        if config is None:
            return None
        return config.motor

    def set_motor(self, config_id: str, motor: Optional[Motor]) -> bool:
        """
        Assign a motor to a flight configuration.

        A configuration created here starts from the default configuration's
        settings.

        Returns:
            True if the stored motor changed
        """
        config = self.get_flight_configuration(config_id)
        if config is None:
            if motor is None:
                return False
            config = self.default_configuration.copy()
            config.motor = None
            self.set_flight_configuration(config_id, config)
        if config.motor == motor:
            return False
        config.motor = motor
        return True

    def get_motor_delay(self, config_id: str) -> Optional[float]:
        """Ejection delay for a configuration, None if it has no configuration"""
        config = self.get_flight_configuration(config_id)
        if config is None:
            return None
        return config.ejection_delay

    def set_motor_delay(self, config_id: str, delay: float) -> bool:
        """
        Set the ejection delay of a configuration, creating it if needed.

        Returns:
            True if the stored delay changed
        """
        config = self.get_flight_configuration(config_id)
        if config is None:
            config = self.default_configuration.copy()
            config.motor = None
            self.set_flight_configuration(config_id, config)
        elif config.ejection_delay == delay:
            return False
        config.ejection_delay = delay
        return True

    def configuration_ids(self) -> List[str]:
        return list(self.configurations)

    def copy(self) -> 'MotorMountConfigurations':
        """Deep copy: the result shares no configuration objects with self"""
        return MotorMountConfigurations(
            configurations={
                config_id: config.copy()
                for config_id, config in self.configurations.items()
            },
            default_configuration=self.default_configuration.copy(),
        )
