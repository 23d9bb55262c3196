"""
Console entry points. The only optional argument is the address of the
kRPC server; everything else flies with the stock FlightPlan.
"""
import logging
import sys

from lto_krpc import const
from lto_krpc import maneuvers
from lto_krpc import programs
from lto_krpc import util
from lto_krpc.transport import TransportError

logger = logging.getLogger(__name__)


def _address(argv):
    args = [arg for arg in argv if not arg.startswith('-')]
    return args[0] if args else const.DEFAULT_ADDRESS


def _verbosity(argv):
    return 1 if ('-v' in argv or '--verbose' in argv) else 0


def _run(name, program, argv):
    util.configure_logging(_verbosity(argv))
    address = _address(argv)

    logger.info("Connecting to kRPC at %s.", address)
    try:
        conn = util.get_conn(name, address=address)
        with conn:
            program(conn)
    except (TransportError, maneuvers.PlanningError) as exc:
        logger.error("Aborting flight: %s", exc)
        return 1
    except OSError as exc:
        logger.error("Could not connect to %s: %s", address, exc)
        return 1

    return 0


def launch_main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    return _run("Launch into Orbit", programs.LaunchToOrbit, argv)


def watch_main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    return _run("Stream Test", programs.WatchStreams, argv)


if __name__ == '__main__':
    sys.exit(launch_main())
