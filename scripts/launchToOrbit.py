"""
Run this script to launch the active vessel into a low circular orbit
"""
import sys

from lto_krpc import const
from lto_krpc import programs
from lto_krpc import util
from lto_krpc.config import FlightPlan

address = sys.argv[1] if len(sys.argv) > 1 else const.DEFAULT_ADDRESS

util.configure_logging()
connection = util.get_conn("Launch into Orbit", address=address)

targetAltitude = 80000

programs.LaunchToOrbit(connection, FlightPlan(target_altitude=targetAltitude))
