"""
Tests for airframe module - rocket airframe and companion components.
"""

import pytest
import numpy as np


class TestMaterial:
    """Tests for Material class."""

    def test_predefined_materials(self):
        """Test predefined material factory methods."""
        from rocket_airframe import Material

        balsa = Material.balsa()
        assert balsa.name == "Balsa"
        assert balsa.density == 160.0

        fiberglass = Material.fiberglass()
        assert fiberglass.name == "Fiberglass"
        assert fiberglass.density == 1800.0

        cardboard = Material.cardboard()
        assert cardboard.density == 680.0

    def test_from_name(self):
        """Test creating material by name."""
        from rocket_airframe import Material

        balsa = Material.from_name("balsa")
        assert balsa.density == 160.0

        # Case insensitive
        balsa2 = Material.from_name("BALSA")
        assert balsa2.density == 160.0

        # Unknown defaults to cardboard
        unknown = Material.from_name("unknown_material")
        assert unknown.density == 680.0


class TestNoseCone:
    """Tests for NoseCone component."""

    def test_default_values(self):
        """Test NoseCone default values."""
        from rocket_airframe import NoseCone

        nc = NoseCone(name="Test", position=0.0)

        assert nc.length == 0.07
        assert nc.base_diameter == pytest.approx(0.024)
        assert nc.thickness == 0.002
        assert nc.fore_radius == 0.0
        assert not nc.aft_radius_automatic

    def test_mass_calculation(self):
        """Test NoseCone mass calculation."""
        from rocket_airframe import NoseCone, Material

        nc = NoseCone(
            name="Test",
            position=0.0,
            length=0.07,
            base_diameter=0.024,
            thickness=0.002,
            material=Material.abs_plastic(),
        )

        mass = nc.get_mass()
        assert mass > 0
        assert mass < 0.1  # Reasonable upper bound

    def test_mass_override(self):
        """Test that mass_override is used when set."""
        from rocket_airframe import NoseCone

        nc = NoseCone(name="Test", position=0.0, mass_override=0.05)

        assert nc.get_mass() == 0.05

    def test_cg_position(self):
        """Test CG position calculation."""
        from rocket_airframe import NoseCone

        nc = NoseCone(name="Test", position=0.1, length=0.1)

        # CG should be approximately 2/3 from the tip
        cg = nc.get_cg_position()
        assert 0.15 < cg < 0.2

    def test_rotational_inertia(self):
        """Test roll inertia calculation."""
        from rocket_airframe import NoseCone

        nc = NoseCone(name="Test", position=0.0, mass_override=0.01)

        inertia = nc.get_rotational_inertia()
        assert inertia > 0
        assert inertia < 1e-4  # Small value for nose cone


class TestTrapezoidFinSet:
    """Tests for TrapezoidFinSet component."""

    def test_fin_area_calculation(self):
        """Test single fin area calculation."""
        from rocket_airframe import TrapezoidFinSet

        fins = TrapezoidFinSet(
            name="Test",
            position=0.0,
            num_fins=4,
            root_chord=0.05,
            tip_chord=0.025,
            span=0.04,
        )

        # Trapezoid area = 0.5 * (root + tip) * height
        expected_area = 0.5 * (0.05 + 0.025) * 0.04
        assert fins.fin_area == pytest.approx(expected_area, rel=0.01)
        assert fins.total_fin_area == pytest.approx(4 * fins.fin_area, rel=0.01)

    def test_single_fin_mass(self):
        """Test that the set mass is split evenly between fins."""
        from rocket_airframe import TrapezoidFinSet

        fins = TrapezoidFinSet(name="Test", num_fins=4, mass_override=0.01)

        assert fins.get_single_fin_mass() == pytest.approx(0.0025)

    def test_cg_at_40_percent_root_chord(self):
        """Test fin set CG position."""
        from rocket_airframe import TrapezoidFinSet

        fins = TrapezoidFinSet(name="Test", position=0.2, root_chord=0.05)

        assert fins.get_cg_position() == pytest.approx(0.22)


class TestInnerTube:
    """Tests for InnerTube component."""

    def test_mass_calculation(self):
        """Test inner tube mass calculation."""
        from rocket_airframe import InnerTube

        tube = InnerTube(
            name="Test",
            position=0.0,
            length=0.07,
            outer_diameter=0.020,
            inner_diameter=0.018,
        )

        assert tube.wall_thickness == pytest.approx(0.001)
        mass = tube.get_mass()
        assert mass > 0
        assert mass < 0.01  # Should be very light

    def test_inner_diameter_clamped(self):
        """Test that the inner diameter never exceeds the outer diameter."""
        from rocket_airframe import InnerTube

        tube = InnerTube(name="Test", outer_diameter=0.02, inner_diameter=0.03)

        assert tube.inner_diameter == pytest.approx(0.02)
        assert tube.get_volume() == pytest.approx(0.0)


class TestMassObject:
    """Tests for MassObject component."""

    def test_mass_returned(self):
        """Test that specified mass is returned."""
        from rocket_airframe import MassObject

        obj = MassObject(name="Payload", position=0.1, mass=0.05)

        assert obj.get_mass() == 0.05

    def test_inertia_from_radius_of_gyration(self):
        """Test roll inertia uses radius of gyration."""
        from rocket_airframe import MassObject

        obj = MassObject(name="Test", position=0.0, mass=0.1, radius_of_gyration=0.01)

        inertia = obj.get_rotational_inertia()
        expected = 0.1 * 0.01**2
        assert inertia == pytest.approx(expected, rel=0.01)


class TestRocketAirframe:
    """Tests for RocketAirframe class."""

    def test_estes_alpha_factory(self, estes_alpha_airframe):
        """Test Estes Alpha factory method."""
        airframe = estes_alpha_airframe

        assert airframe.name == "Estes Alpha III"
        assert len(airframe.components) >= 3
        assert all(c.airframe is airframe for c in airframe.components)

    def test_nose_cone_follows_body(self, estes_alpha_airframe):
        """Test that the automatic nose cone base matches the body tube."""
        from rocket_airframe import NoseCone

        nose = estes_alpha_airframe.components[0]
        assert isinstance(nose, NoseCone)
        assert nose.base_diameter == pytest.approx(0.024)

    def test_body_diameter(self, estes_alpha_airframe):
        """Test body diameter property."""
        airframe = estes_alpha_airframe

        # Estes Alpha uses 24mm body tubes
        assert airframe.body_diameter == pytest.approx(0.024, rel=0.01)
        assert airframe.body_radius == pytest.approx(0.012, rel=0.01)

    def test_total_length(self, estes_alpha_airframe):
        """Test total length calculation."""
        airframe = estes_alpha_airframe

        length = airframe.total_length
        assert length == pytest.approx(0.31)

    def test_empty_airframe_defaults(self):
        """Test reference dimensions of an empty airframe."""
        from rocket_airframe import RocketAirframe

        airframe = RocketAirframe(name="Empty")

        assert airframe.body_diameter == pytest.approx(0.024)
        assert airframe.total_length == pytest.approx(0.45)
        assert airframe.get_fin_set() is None

    def test_get_fin_set(self, estes_alpha_airframe):
        """Test getting fin set from airframe."""
        airframe = estes_alpha_airframe

        fins = airframe.get_fin_set()
        assert fins is not None
        assert fins.num_fins == 4

    def test_body_tubes(self, estes_alpha_airframe):
        """Test listing body tubes."""
        tubes = estes_alpha_airframe.body_tubes()

        assert len(tubes) == 1
        assert tubes[0].motor_mount

    def test_summary(self, estes_alpha_airframe):
        """Test summary output."""
        airframe = estes_alpha_airframe

        summary = airframe.summary()
        assert "Estes Alpha III" in summary
        assert "Length:" in summary
        assert "Diameter:" in summary
        assert "motor mount" in summary

    def test_save_and_load_yaml(self, estes_alpha_airframe, tmp_path, c6_motor):
        """Test saving and loading airframe from YAML."""
        from rocket_airframe import RocketAirframe, IgnitionEvent

        airframe = estes_alpha_airframe
        body = airframe.body_tubes()[0]
        body.set_motor("cfg-c6", c6_motor)
        body.set_motor_delay("cfg-c6", 5.0)
        body.set_ignition_event(IgnitionEvent.LAUNCH)
        yaml_path = tmp_path / "airframe.yaml"

        airframe.save_yaml(str(yaml_path))
        assert yaml_path.exists()

        loaded = RocketAirframe.load_yaml(str(yaml_path))

        assert loaded.name == airframe.name
        assert len(loaded.components) == len(airframe.components)
        assert loaded.components[0].aft_radius_automatic
        loaded_body = loaded.body_tubes()[0]
        assert loaded_body.outer_radius == pytest.approx(body.outer_radius)
        assert loaded_body.thickness == pytest.approx(body.thickness)
        assert loaded_body.motor_mount
        assert loaded_body.ignition_event == IgnitionEvent.LAUNCH
        assert loaded_body.get_motor("cfg-c6").designation == "C6"
        assert loaded_body.get_motor_delay("cfg-c6") == 5.0
        assert loaded_body.get_mass() == pytest.approx(body.get_mass(), rel=0.01)

    def test_yaml_keeps_motor_configurations(self, tmp_path):
        """Test that motors and per-configuration ignition settings survive a YAML round trip."""
        from rocket_airframe import (
            RocketAirframe, BodyTube, Motor, MotorConfiguration, IgnitionEvent
        )

        motor = Motor(
            designation="C6", manufacturer="Estes", diameter=0.018, length=0.070,
            total_mass=0.024, propellant_mass=0.0108, delays=(3.0, 5.0),
        )
        config = MotorConfiguration(
            motor=motor, ejection_delay=5.0,
            ignition_event=IgnitionEvent.BURNOUT, ignition_delay=0.25,
        )
        mount = BodyTube(name="Mount", length=0.3, radius=0.012)
        mount.set_motor_mount(True)
        mount.set_flight_configuration("cfg", config)
        spare = BodyTube(name="Spare", length=0.2, radius=0.012)
        spare.set_flight_configuration("cfg", config.copy())
        spare.set_motor_overhang(0.01)
        yaml_path = tmp_path / "mounts.yaml"

        RocketAirframe(name="Mounts", components=[mount, spare]).save_yaml(str(yaml_path))
        loaded_mount, loaded_spare = RocketAirframe.load_yaml(str(yaml_path)).body_tubes()

        assert loaded_mount.get_motor("cfg") == motor
        assert loaded_mount.get_flight_configuration("cfg") == config
        assert loaded_mount.ignition_event == IgnitionEvent.AUTOMATIC
        assert not loaded_spare.motor_mount
        assert loaded_spare.get_flight_configuration("cfg") == config
        assert loaded_spare.motor_overhang == pytest.approx(0.01)


class TestAirframeLoad:
    """Tests for loading airframes from files."""

    def test_load_yaml(self, sample_airframe_yaml):
        """Test loading from YAML file with automatic radii and a motor mount."""
        from rocket_airframe import RocketAirframe, IgnitionEvent

        airframe = RocketAirframe.load(sample_airframe_yaml)

        assert airframe.name == "Test Airframe"
        assert len(airframe.components) == 4
        assert airframe.source_file == sample_airframe_yaml

        nose, upper, booster, _ = airframe.components
        assert nose.base_diameter == pytest.approx(0.024)
        assert upper.thickness == pytest.approx(0.001)
        assert booster.outer_radius_automatic
        assert booster.outer_radius == pytest.approx(0.012)

        assert booster.motor_mount
        assert booster.motor_overhang == pytest.approx(0.005)
        assert booster.ignition_event == IgnitionEvent.LAUNCH
        assert booster.ignition_delay == pytest.approx(0.5)
        assert booster.get_motor_position("cfg-c6") == pytest.approx(0.15 - 0.07 + 0.005)

    def test_load_with_context(self, sample_airframe_yaml, change_events, recording_context):
        """Test that loaded components report to the given context."""
        from rocket_airframe import RocketAirframe

        airframe = RocketAirframe.load(sample_airframe_yaml, context=recording_context)
        change_events.clear()

        airframe.components[1].set_outer_radius(0.03)
        assert len(change_events) == 1
        assert airframe.components[2].outer_radius == pytest.approx(0.03)

    def test_unknown_component_type_skipped(self, tmp_path):
        """Test that unknown component types are skipped."""
        from rocket_airframe import RocketAirframe

        yaml_file = tmp_path / "odd.yaml"
        yaml_file.write_text(
            "name: Odd\ncomponents:\n- type: Parachute\n  name: Chute\n"
        )

        airframe = RocketAirframe.load(str(yaml_file))
        assert airframe.components == []

    def test_load_unsupported_format(self, tmp_path):
        """Test that unsupported formats raise error."""
        from rocket_airframe import RocketAirframe

        bad_file = tmp_path / "test.xyz"
        bad_file.write_text("invalid")

        with pytest.raises(ValueError, match="Unsupported"):
            RocketAirframe.load(str(bad_file))


class TestHighPowerAirframe:
    """Tests for high power rocket airframe."""

    def test_minimum_diameter_factory(self):
        """Test minimum diameter airframe factory."""
        from rocket_airframe import RocketAirframe

        airframe = RocketAirframe.high_power_minimum_diameter(motor_diameter=0.038)

        assert airframe.name == "Min-D 38mm"
        # Body should be slightly larger than motor
        assert airframe.body_diameter > 0.038
        assert airframe.body_diameter < 0.045

    def test_aft_body_follows_forward_body(self):
        """Test that the automatic aft body matches the forward body."""
        from rocket_airframe import RocketAirframe

        airframe = RocketAirframe.high_power_minimum_diameter(motor_diameter=0.038)
        forward, aft = airframe.body_tubes()

        assert aft.outer_radius_automatic
        assert aft.outer_radius == pytest.approx(forward.outer_radius)
        assert aft.motor_mount_diameter == pytest.approx(0.039)
        assert np.isclose(aft.get_volume(), forward.get_volume())
