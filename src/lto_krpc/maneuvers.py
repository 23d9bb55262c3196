"""
Contains functions that plan the circularization burn at apoapsis
"""

import collections
import logging
import math

from lto_krpc import const
from lto_krpc import maths
from lto_krpc.vessel import util as vessel_util

logger = logging.getLogger(__name__)


class BurnPlan(collections.namedtuple('BurnPlan', 'epoch delta_v burn_duration')):
    """
    :param epoch: universal time of the maneuver (the apoapsis), seconds
    :param delta_v: prograde delta-v to apply, m/s
    :param burn_duration: seconds at full throttle
    """
    __slots__ = ()

    @property
    def burn_start(self):
        # centre the burn on the node
        return self.epoch - self.burn_duration / 2.

    @property
    def is_noop(self):
        """
        Already circular (or past it); there is nothing sensible to burn.
        """
        return self.delta_v <= 0 or self.burn_duration <= 0


def circularization_delta_v(mu, r_ap, a):
    """
    Delta-v needed at apoapsis to turn the current orbit into a circular one
    at the apoapsis radius (vis-viva equation)

    :param mu: gravitational parameter of the body being orbited
    :param r_ap: apoapsis radius, measured from the body's centre
    :param a: semi-major axis of the current orbit

    :return: delta-v in m/s, prograde
    """
    v1 = maths.vis_viva_speed(mu, r_ap, a)
    v2 = maths.circular_speed(mu, r_ap)

    return v2 - v1


def burn_duration(delta_v, thrust, isp, m0, g0=const.STANDARD_GRAVITY):
    """
    Given a delta-v, figure out how long the vessel needs to fire at full
    throttle to achieve it (rocket equation)

    :param delta_v: m/s
    :param thrust: available thrust, newtons
    :param isp: specific impulse, seconds
    :param m0: mass before the burn, kg
    :param g0: converts isp into exhaust velocity

    :return: time, in seconds, the burn will last
    """
    if thrust <= 0 or isp <= 0:
        raise ValueError('vessel has no usable engine (thrust={0}, isp={1})'.format(thrust, isp))

    isp_eff = isp * g0

    m1 = m0 / math.exp(delta_v / isp_eff)
    flow_rate = thrust / isp_eff

    return (m0 - m1) / flow_rate


def plan_circularization(mu, r_ap, a, thrust, isp, m0, ut, tta):
    """
    :param mu: gravitational parameter of the body
    :param r_ap: apoapsis radius
    :param a: semi-major axis
    :param thrust: available thrust
    :param isp: specific impulse in seconds
    :param m0: current vessel mass
    :param ut: current universal time
    :param tta: time to apoapsis

    :return: BurnPlan for the circularization at the coming apoapsis
    :raises ValueError: if a burn is needed but there is no engine to fly it
    """
    delta_v = circularization_delta_v(mu, r_ap, a)

    if delta_v <= 0 and (thrust <= 0 or isp <= 0):
        # nothing to burn, so it doesn't matter that nothing could
        return BurnPlan(ut + tta, delta_v, 0.0)

    duration = burn_duration(delta_v, thrust, isp, m0)

    return BurnPlan(ut + tta, delta_v, duration)


class PlanningError(Exception):
    """
    The vessel can't fly the circularization burn it needs.
    """
    pass


class CircularizationPlanner:
    """
    Reads what it needs from the vessel, computes the BurnPlan, and puts a
    prograde maneuver node on the apoapsis
    """
    def __init__(self, transport, vessel, orbit, control):
        """
        :param transport: Transport
        :param vessel: the krpc vessel (thrust, isp and mass are read from it)
        :param orbit: Orbit wrapper
        :param control: VehicleControl, used to add the node
        """
        self.transport = transport
        self.vessel = vessel
        self.orbit = orbit
        self.control = control

    def __call__(self):
        """
        :return: (BurnPlan, node)
        :raises PlanningError: if the vessel has no usable engine; no node is added
        """
        logger.info("Planning circularization burn")
        mu, r_ap, a = self.orbit.circularization_inputs()
        ut, tta = self.orbit.ut_and_time_to_apoapsis()
        thrust, isp, m0 = vessel_util.vehicle_state(self.transport, self.vessel)

        try:
            plan = plan_circularization(mu, r_ap, a, thrust, isp, m0, ut, tta)
        except ValueError as exc:
            raise PlanningError('cannot plan circularization: {0}'.format(exc)) from exc

        node = self.control.add_node(plan.epoch, prograde=plan.delta_v)

        logger.info("Circularization: [%.1fm/s] over [%.2fs]", plan.delta_v, plan.burn_duration)
        return plan, node
