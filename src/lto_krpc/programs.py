"""
This file should contain all the programs that we can run from the console
"""

import itertools
import logging
import time

from lto_krpc import launch
from lto_krpc import maneuvers
from lto_krpc import node
from lto_krpc import util
from lto_krpc.config import FlightPlan
from lto_krpc.telemetry import StreamManager, TelemetryReader
from lto_krpc.transport import Transport, TransportError
from lto_krpc.vessel import util as vessel_util
from lto_krpc.vessel.control import AutoPilot, FlightTelemetry, Orbit, VehicleControl

logger = logging.getLogger(__name__)


def LaunchToOrbit(connection, plan=None, sleep=time.sleep):
    """
    Launches the active vessel into a circular orbit at the plan's target altitude

    :param connection: krpc connection to operate upon
    :param plan: FlightPlan, defaults to the stock one
    :param sleep: used for the countdown and the burn, swap out for testing

    :return: the BurnPlan that was flown
    """
    if plan is None:
        plan = FlightPlan()

    transport = Transport(connection)

    logger.info("Preparing to launch into low orbit.")
    logger.info("Planned flight parameters:")
    for line in plan.describe():
        logger.info(line)

    vessel = vessel_util.get_active_vessel(transport)
    logger.debug("Active vessel: %s", vessel)
    orbital_frame = transport.get(vessel, 'orbital_reference_frame')

    # 1. pre-launch set up
    control, flight, orbit, auto_pilot, srb_resources = transport.batch() \
        .add_get(vessel, 'control') \
        .add(vessel.flight, orbital_frame) \
        .add_get(vessel, 'orbit') \
        .add_get(vessel, 'auto_pilot') \
        .add(vessel.resources_in_decouple_stage, plan.srb_stage, True) \
        .unwrap()

    control = VehicleControl(transport, control)
    flight = FlightTelemetry(transport, flight)
    orbit = Orbit(transport, orbit)
    autopilot = AutoPilot(transport, auto_pilot)

    streams = StreamManager(transport)
    reader = TelemetryReader(streams,
                             streams.add_ut(),
                             streams.add_apoapsis_altitude(orbit.handle),
                             streams.add_mean_altitude(flight.handle),
                             streams.add_resource_amount(srb_resources, plan.srb_resource))

    control.prelaunch()

    # 2. launch
    logger.info("Pre-flight checks completed. Starting countdown.")
    util.countdown(plan.countdown, sleep=sleep)
    control.launch(autopilot)

    # 3. gravity turn and booster separation
    util.run_program(launch.Ascend(reader, control, autopilot, plan))

    # 4. bring the apoapsis up to target
    util.run_program(launch.FineTuneApoapsis(reader, control, plan))

    # 5. coast out of the atmosphere
    logger.info("Coasting out of atmosphere.")
    util.run_program(launch.CoastToAltitude(reader, plan.atmosphere_exit_altitude))

    # 6. plan and fly the circularization burn
    burn_plan, maneuver_node = maneuvers.CircularizationPlanner(transport, vessel, orbit, control)()
    node.ExecuteBurn(transport, burn_plan, maneuver_node, control, autopilot, flight, orbit,
                     streams, plan, sleep=sleep)()

    streams.remove_all()
    logger.info("Launch complete!")

    return burn_plan


def WatchStreams(connection, updates=None):
    """
    Log universal time and warp factor every time the server pushes an update.
    Handy for checking the stream connection works before flying anything.

    :param connection: krpc connection
    :param updates: stop after this many updates, None to run forever

    :return: how many updates were logged
    """
    transport = Transport(connection)
    streams = StreamManager(transport)
    ut = streams.add_ut()
    warp = streams.add_warp_factor()

    counter = itertools.count() if updates is None else range(updates)
    seen = 0
    for _ in counter:
        try:
            update = streams.recv_update()
        except TransportError as exc:
            logger.warning("Failed to get stream update: %s", exc)
            continue

        seen += 1
        ut_reading = update.get_result(ut)
        if ut_reading.ok:
            logger.info("ut: %s", ut_reading.value)
        warp_reading = update.get_result(warp)
        if warp_reading.ok:
            logger.info("warp: %s", warp_reading.value)

    streams.remove_all()
    return seen
