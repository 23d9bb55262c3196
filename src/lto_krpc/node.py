"""
Contains functionality to help us execute the planned circularization burn
"""

import logging
import time

from lto_krpc import maths
from lto_krpc.transport import TransportError
from lto_krpc.vessel.control import SpaceCenter

logger = logging.getLogger(__name__)


class ExecuteBurn:
    """
    Points the vessel along the node, warps up to the burn window and fires
    the engine for the planned duration. Nothing checks the resulting orbit.
    """
    def __init__(self, transport, plan, node, control, autopilot, flight, orbit, streams, flight_plan,
                 sleep=time.sleep):
        """
        :param transport: Transport
        :param plan: BurnPlan to execute
        :param node: the krpc Node created for the plan
        :param control: VehicleControl
        :param autopilot: AutoPilot
        :param flight: FlightTelemetry in the vessel's orbital reference frame
        :param orbit: Orbit wrapper
        :param streams: StreamManager to open the time-to-apoapsis stream on
        :param flight_plan: FlightPlan with the warp and cutoff settings
        :param sleep: what to block with while the engine burns
        """
        self.transport = transport
        self.plan = plan
        self.node = node
        self.control = control
        self.autopilot = autopilot
        self.flight = flight
        self.orbit = orbit
        self.streams = streams
        self.flight_plan = flight_plan
        self.space_center = SpaceCenter(transport)
        self.sleep = sleep

    def orient(self):
        """
        Hold the prograde direction in the node's reference frame and block
        until the autopilot says we're there. The autopilot's own wait decides
        what counts as converged.
        """
        logger.info("Orientating ship for circularization burn")
        reference_frame = self.transport.get(self.node, 'reference_frame')
        self.autopilot.set_reference_frame(reference_frame)

        direction = self.flight.prograde()
        pitch, heading = maths.direction_to_pitch_heading(direction)
        logger.debug("Prograde (%s) -> pitch [%.2f] heading [%.2f]", direction, pitch, heading)
        self.autopilot.set_target_pitch_and_heading(pitch, heading)

        logger.debug("Waiting until oriented.")
        self.autopilot.wait()

    def warp_to_burn(self):
        logger.info("Waiting until circularization burn")
        self.space_center.warp_to(self.plan.burn_start - self.flight_plan.warp_lead_time,
                                  self.flight_plan.warp_max_rails_rate,
                                  self.flight_plan.warp_max_physics_rate)

    def wait_for_burn(self):
        """
        Spin on the time-to-apoapsis stream until half the burn is left before apoapsis
        """
        tta_stream = self.streams.add_time_to_apoapsis(self.orbit.handle)
        half_burn = self.plan.burn_duration / 2.

        while True:
            try:
                update = self.streams.recv_update()
            except TransportError as exc:
                logger.warning("Failed to get telemetry update: %s", exc)
                continue

            tta = update.get_result(tta_stream)
            if tta.ok and tta.value - half_burn <= 0:
                return

    def burn(self):
        logger.info("Executing burn")
        self.control.set_throttle(1.0)

        # stop a touch early rather than overshoot, nothing corrects it afterwards
        duration = max(0.0, self.plan.burn_duration - self.flight_plan.burn_cutoff_margin)
        logger.debug("Sleeping for [%.2f] seconds.", duration)
        self.sleep(duration)

    def __call__(self):
        """
        :return: True if the burn was fired, False if there was nothing to burn
        """
        if self.plan.is_noop:
            logger.warning("Orbit is already circular (delta-v [%.2fm/s]), skipping burn", self.plan.delta_v)
            return False

        self.orient()
        self.warp_to_burn()
        logger.info("Ready to execute burn")
        self.wait_for_burn()
        self.burn()

        return True
