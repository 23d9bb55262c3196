"""
control.py

Thin wrappers around the parts of a vessel the flight programs command or
read. Each one holds the krpc object it talks to plus the shared Transport,
so every call comes back as a value or a TransportError.
"""

import logging

from lto_krpc import maths

logger = logging.getLogger(__name__)


class VehicleControl:
    def __init__(self, transport, control):
        self.transport = transport
        self.handle = control

    def set_throttle(self, level):
        level = maths.clamp(level, 0.0, 1.0)
        logger.debug("Setting throttle to [%d%%]", round(level * 100))
        self.transport.set(self.handle, 'throttle', level)

    def set_sas(self, enabled):
        self.transport.set(self.handle, 'sas', enabled)

    def set_rcs(self, enabled):
        self.transport.set(self.handle, 'rcs', enabled)

    def activate_next_stage(self):
        logger.debug("Activating next stage")
        return self.transport.call(self.handle.activate_next_stage)

    def add_node(self, ut, prograde=0., normal=0., radial=0.):
        """
        :param ut: when the maneuver happens, universal time in seconds
        :param prograde: delta-v along the direction of travel, m/s
        :param normal: delta-v normal to the orbital plane, m/s
        :param radial: delta-v away from the body, m/s

        :return: the krpc Node
        """
        logger.debug("Creating maneuver node at [%.1f] with prograde [%.2fm/s]", ut, prograde)
        return self.transport.call(self.handle.add_node, ut, prograde=prograde, normal=normal, radial=radial)

    def prelaunch(self):
        """
        SAS and RCS off, throttle all the way up
        """
        self.transport.batch() \
            .add_set(self.handle, 'sas', False) \
            .add_set(self.handle, 'rcs', False) \
            .add_set(self.handle, 'throttle', 1.0) \
            .unwrap()

    def launch(self, autopilot):
        """
        Light the first stage and hand pitch over to the autopilot, pointed straight up

        :param autopilot: AutoPilot wrapper for the same vessel
        """
        logger.debug("Engaging Auto Pilot")
        logger.debug("Setting target pitch & heading [90, 90]")
        self.transport.batch() \
            .add(self.handle.activate_next_stage) \
            .add(autopilot.handle.engage) \
            .add(autopilot.handle.target_pitch_and_heading, 90., 90.) \
            .unwrap()


class AutoPilot:
    def __init__(self, transport, auto_pilot):
        self.transport = transport
        self.handle = auto_pilot

    def engage(self):
        self.transport.call(self.handle.engage)

    def disengage(self):
        self.transport.call(self.handle.disengage)

    def target_pitch_and_heading(self, pitch, heading):
        logger.debug("Target pitch & heading [%.1f, %.1f]", pitch, heading)
        self.transport.call(self.handle.target_pitch_and_heading, pitch, heading)

    def set_target_pitch_and_heading(self, pitch, heading):
        """
        Same effect as target_pitch_and_heading, but as two property writes in one batch
        """
        self.transport.batch() \
            .add_set(self.handle, 'target_pitch', pitch) \
            .add_set(self.handle, 'target_heading', heading) \
            .unwrap()

    def set_reference_frame(self, reference_frame):
        self.transport.set(self.handle, 'reference_frame', reference_frame)

    def wait(self):
        """
        Blocks until the autopilot reports it is pointing where it was told to.
        """
        self.transport.call(self.handle.wait)


class FlightTelemetry:
    def __init__(self, transport, flight):
        self.transport = transport
        self.handle = flight

    def prograde(self):
        """
        :return: unit vector of the prograde direction, in the flight's reference frame
        """
        return self.transport.get(self.handle, 'prograde')


class Orbit:
    def __init__(self, transport, orbit):
        self.transport = transport
        self.handle = orbit

    def body(self):
        return self.transport.get(self.handle, 'body')

    def circularization_inputs(self):
        """
        :return: (gravitational parameter, apoapsis radius, semi-major axis)
        """
        body = self.body()
        return self.transport.batch() \
            .add_get(body, 'gravitational_parameter') \
            .add_get(self.handle, 'apoapsis') \
            .add_get(self.handle, 'semi_major_axis') \
            .unwrap()

    def ut_and_time_to_apoapsis(self):
        return self.transport.batch() \
            .add_get(self.transport.connection.space_center, 'ut') \
            .add_get(self.handle, 'time_to_apoapsis') \
            .unwrap()


class SpaceCenter:
    def __init__(self, transport):
        self.transport = transport
        self.handle = transport.connection.space_center

    def ut(self):
        return self.transport.get(self.handle, 'ut')

    def warp_to(self, ut, max_rails_rate, max_physics_rate):
        logger.debug("Warping to [%.1f]", ut)
        self.transport.call(self.handle.warp_to, ut, max_rails_rate, max_physics_rate)
