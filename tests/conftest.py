"""
Pytest fixtures for airframe component tests.
"""
import pytest


@pytest.fixture
def change_events():
    """List collecting the change events reported through a context."""
    return []


@pytest.fixture
def recording_context(change_events):
    """Component context whose notifier appends to change_events."""
    from rocket_airframe import ComponentContext

    return ComponentContext(notifier=change_events.append)


@pytest.fixture
def c6_motor():
    """Estes C6 motor (18 x 70 mm)."""
    from rocket_airframe import Motor

    return Motor(
        designation="C6",
        manufacturer="Estes",
        diameter=0.018,
        length=0.070,
        total_mass=0.024,
        propellant_mass=0.0123,
        delays=(3.0, 5.0, 7.0),
    )


@pytest.fixture
def d12_motor():
    """Estes D12 motor (24 x 70 mm)."""
    from rocket_airframe import Motor

    return Motor(designation="D12", manufacturer="Estes", diameter=0.024, length=0.070)


@pytest.fixture
def sample_airframe_yaml(tmp_path):
    """YAML airframe with an automatic radius tube and a motor mount."""
    airframe_content = """
name: Test Airframe
description: Test airframe for unit tests
components:
- type: NoseCone
  name: Nose Cone
  position: 0.0
  length: 0.07
  base_diameter: auto
  shape: ogive
  thickness: 0.002
  material: ABS Plastic
- type: BodyTube
  name: Upper Tube
  position: 0.07
  length: 0.20
  outer_diameter: 0.024
  inner_diameter: 0.022
  material: Cardboard
- type: BodyTube
  name: Booster Tube
  position: 0.27
  length: 0.15
  outer_diameter: auto
  thickness: 0.001
  material: Cardboard
  motor_mount:
    overhang: 0.005
    ignition_event: launch
    ignition_delay: 0.5
    configurations:
      cfg-c6:
        ejection_delay: 5.0
        motor:
          designation: C6
          manufacturer: Estes
          diameter: 0.018
          length: 0.07
- type: TrapezoidFinSet
  name: Fins
  position: 0.35
  num_fins: 4
  root_chord: 0.05
  tip_chord: 0.025
  span: 0.04
  sweep_length: 0.0
  thickness: 0.002
  material: Balsa
"""
    airframe_file = tmp_path / "test_airframe.yaml"
    airframe_file.write_text(airframe_content)
    return str(airframe_file)


@pytest.fixture
def estes_alpha_airframe():
    """Get an Estes Alpha III airframe."""
    from rocket_airframe import RocketAirframe
    return RocketAirframe.estes_alpha()
