"""
Contains all the helper functions and programs for getting a craft from the
pad to a coasting apoapsis at the target altitude
"""

import collections
import logging

from lto_krpc import const
from lto_krpc import maths
from lto_krpc import util

logger = logging.getLogger(__name__)


def turn_angle_for(altitude, start, end):
    """
    How far over from vertical the vessel should be at the given altitude

    :param altitude: mean altitude in metres
    :param start: altitude the gravity turn begins at
    :param end: altitude the gravity turn is finished by

    :return: degrees from vertical, in [0, 90]
    """
    frac = maths.clamp(maths.normalize_to_range(altitude, start, end), 0.0, 1.0)
    return frac * 90.


class AscentState:
    """
    Everything the ascent needs to remember from one tick to the next.
    Only decide_ascent changes it.
    """
    def __init__(self, turn_angle=0.0, srb_separated=False, srb_fuel_seen_positive=False):
        self.turn_angle = turn_angle
        self.srb_separated = srb_separated
        self.srb_fuel_seen_positive = srb_fuel_seen_positive

    def __repr__(self):
        return 'AscentState(turn_angle={0!r}, srb_separated={1!r}, srb_fuel_seen_positive={2!r})'.format(
            self.turn_angle, self.srb_separated, self.srb_fuel_seen_positive)


# pitch is None when no new attitude command is needed this tick
AscentDecision = collections.namedtuple('AscentDecision', 'pitch stage done')


def decide_ascent(state, snapshot, plan):
    """
    One tick of the ascent. Each decision only looks at the reading it needs,
    so a bad fuel reading doesn't stop the pitch program and so on.

    :param state: AscentState, updated in place
    :param snapshot: TelemetrySnapshot for this tick
    :param plan: FlightPlan

    :return: AscentDecision
    """
    pitch = None
    stage = False
    done = False

    altitude = snapshot.altitude
    if altitude.ok and plan.turn_start_altitude < altitude.value < plan.turn_end_altitude:
        new_turn_angle = turn_angle_for(altitude.value, plan.turn_start_altitude, plan.turn_end_altitude)

        if abs(new_turn_angle - state.turn_angle) > const.TURN_HYSTERESIS:
            state.turn_angle = new_turn_angle
            pitch = 90. - new_turn_angle

    srb_fuel = snapshot.srb_fuel
    if srb_fuel.ok and not state.srb_separated:
        # the stream reads 0 until it has settled, so only trust an empty
        # reading once we've seen the boosters actually holding fuel
        if not state.srb_fuel_seen_positive and srb_fuel.value > 0:
            state.srb_fuel_seen_positive = True

        if srb_fuel.value <= 0 and state.srb_fuel_seen_positive:
            state.srb_separated = True
            stage = True

    apoapsis = snapshot.apoapsis
    if apoapsis.ok and apoapsis.value >= plan.approach_altitude:
        done = True

    return AscentDecision(pitch, stage, done)


class Ascend(util.Program):
    """
    Program object to fly the gravity turn and drop the boosters, until the
    apoapsis gets close to the target altitude
    """
    def __init__(self, reader, control, autopilot, plan, state=None):
        """
        :param reader: TelemetryReader
        :param control: VehicleControl
        :param autopilot: AutoPilot
        :param plan: FlightPlan
        :param state: AscentState to carry on from, a fresh one by default
        """
        super().__init__('Ascend')

        self.reader = reader
        self.control = control
        self.autopilot = autopilot
        self.plan = plan
        self.state = state or AscentState()

    def __call__(self):
        snapshot = self.reader.poll()
        if snapshot is None:
            return False

        decision = decide_ascent(self.state, snapshot, self.plan)

        if decision.pitch is not None:
            logger.debug("Gravity turn at [%.1f] degrees", self.state.turn_angle)
            self.autopilot.target_pitch_and_heading(decision.pitch, const.LAUNCH_HEADING)

        if decision.stage:
            logger.info("Detaching SRBs.")
            self.control.activate_next_stage()
            logger.info("SRB Separation confirmed.")

        if decision.done:
            logger.info("Approaching target apoapsis [%sm]", self.plan.target_altitude)
            return True

        return False


class FineTuneApoapsis(util.Program):
    """
    Creep the apoapsis up to the target at reduced throttle, then cut the engine
    """
    def __init__(self, reader, control, plan):
        super().__init__('FineTuneApoapsis')

        self.reader = reader
        self.control = control
        self.plan = plan
        self.throttled_down = False

    def __call__(self):
        if not self.throttled_down:
            self.control.set_throttle(self.plan.fine_tune_throttle)
            self.throttled_down = True

        snapshot = self.reader.poll()
        if snapshot is None or not snapshot.apoapsis.ok:
            return False

        if snapshot.apoapsis.value >= self.plan.target_altitude:
            logger.info("Target apoapsis reached.")
            self.control.set_throttle(0.0)
            return True

        return False


class CoastToAltitude(util.Program):
    """
    Wait, engines off, until the vessel is above the given altitude
    """
    def __init__(self, reader, altitude=const.ATMOSPHERE_EXIT_ALT):
        super().__init__('CoastToAltitude')

        self.reader = reader
        self.altitude = altitude

    def __call__(self):
        snapshot = self.reader.poll()
        if snapshot is None or not snapshot.altitude.ok:
            return False

        return snapshot.altitude.value >= self.altitude
