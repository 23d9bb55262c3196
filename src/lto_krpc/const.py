RES_SOLID_FUEL = "SolidFuel"

# gravity turn, metres
TURN_START_ALT = 250.
TURN_END_ALT = 45000.
TURN_HYSTERESIS = 0.5
LAUNCH_HEADING = 90.

TARGET_ALTITUDE = 74000.
APOAPSIS_APPROACH_FRACTION = 0.9
FINE_TUNE_THROTTLE = 0.25
ATMOSPHERE_EXIT_ALT = 70500.

# decouple stage the boosters drop away in
SRB_STAGE = 2

STANDARD_GRAVITY = 9.82

WARP_LEAD_TIME = 5.
WARP_MAX_RAILS_RATE = 50.
WARP_MAX_PHYSICS_RATE = 4.
BURN_CUTOFF_MARGIN = 0.5

COUNTDOWN_SECONDS = 10

DEFAULT_ADDRESS = '127.0.0.1'
DEFAULT_RPC_PORT = 50000
DEFAULT_STREAM_PORT = 50001

# stream names
UT = 'ut'
MEAN_ALTITUDE = 'mean_altitude'
APOAPSIS_ALTITUDE = 'apoapsis_altitude'
TIME_TO_APOAPSIS = 'time_to_apoapsis'
WARP_FACTOR = 'warp_factor'
SRB_FUEL = 'srb_fuel'
