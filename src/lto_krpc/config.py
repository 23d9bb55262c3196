"""
config.py

Flight parameters for a launch into a circular orbit. Everything defaults to
the values in const, pass keyword arguments to change them.
"""

from lto_krpc import const


class FlightPlan:
    def __init__(self,
                 target_altitude=const.TARGET_ALTITUDE,
                 turn_start_altitude=const.TURN_START_ALT,
                 turn_end_altitude=const.TURN_END_ALT,
                 approach_fraction=const.APOAPSIS_APPROACH_FRACTION,
                 fine_tune_throttle=const.FINE_TUNE_THROTTLE,
                 atmosphere_exit_altitude=const.ATMOSPHERE_EXIT_ALT,
                 srb_stage=const.SRB_STAGE,
                 srb_resource=const.RES_SOLID_FUEL,
                 countdown=const.COUNTDOWN_SECONDS,
                 warp_lead_time=const.WARP_LEAD_TIME,
                 warp_max_rails_rate=const.WARP_MAX_RAILS_RATE,
                 warp_max_physics_rate=const.WARP_MAX_PHYSICS_RATE,
                 burn_cutoff_margin=const.BURN_CUTOFF_MARGIN):
        """
        :param target_altitude: altitude of the circular orbit we want, metres
        :param turn_start_altitude: start pitching over here
        :param turn_end_altitude: be horizontal by here
        :param approach_fraction: fraction of the target apoapsis at which full-throttle ascent ends
        :param fine_tune_throttle: throttle used while creeping the apoapsis up to target
        :param atmosphere_exit_altitude: coast until we're above this before planning the burn
        :param srb_stage: decouple stage holding the solid boosters
        :param srb_resource: resource to watch for booster burnout
        :param countdown: seconds of countdown before ignition
        :param warp_lead_time: come out of warp this many seconds before the burn starts
        :param warp_max_rails_rate: max on-rails warp rate
        :param warp_max_physics_rate: max physics warp rate
        :param burn_cutoff_margin: cut the burn this many seconds short
        """
        if target_altitude <= 0:
            raise ValueError("Orbital altitude can't be below sea level")
        if turn_start_altitude >= turn_end_altitude:
            raise ValueError('turn start altitude ({0}) must be below turn end altitude ({1})'.format(
                turn_start_altitude, turn_end_altitude))
        if not 0.0 <= fine_tune_throttle <= 1.0:
            raise ValueError('fine tune throttle must be within [0, 1], got {0}'.format(fine_tune_throttle))
        if not 0.0 < approach_fraction <= 1.0:
            raise ValueError('approach fraction must be within (0, 1], got {0}'.format(approach_fraction))
        if burn_cutoff_margin < 0:
            raise ValueError('burn cutoff margin must not be negative')

        self.target_altitude = target_altitude
        self.turn_start_altitude = turn_start_altitude
        self.turn_end_altitude = turn_end_altitude
        self.approach_fraction = approach_fraction
        self.fine_tune_throttle = fine_tune_throttle
        self.atmosphere_exit_altitude = atmosphere_exit_altitude
        self.srb_stage = srb_stage
        self.srb_resource = srb_resource
        self.countdown = countdown
        self.warp_lead_time = warp_lead_time
        self.warp_max_rails_rate = warp_max_rails_rate
        self.warp_max_physics_rate = warp_max_physics_rate
        self.burn_cutoff_margin = burn_cutoff_margin

    @property
    def approach_altitude(self):
        return self.target_altitude * self.approach_fraction

    def describe(self):
        yield "Desired orbital altitude: [{0}m]".format(self.target_altitude)
        yield "Start of Gravity turn: [{0}m]".format(self.turn_start_altitude)
        yield "End of Gravity turn: [{0}m]".format(self.turn_end_altitude)
