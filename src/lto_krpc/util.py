import logging
import time

import krpc

from lto_krpc import const

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'


def get_conn(name, address=const.DEFAULT_ADDRESS,
             rpc_port=const.DEFAULT_RPC_PORT, stream_port=const.DEFAULT_STREAM_PORT):
    logger.debug("Starting RPC connection to %s:%d (streams on %d)", address, rpc_port, stream_port)
    return krpc.connect(name=name, address=address, rpc_port=rpc_port, stream_port=stream_port)


def countdown(seconds, sleep=time.sleep):
    """
    Countdown that logs each second

    :param seconds: how many seconds to count down from
    :param sleep: what to block with, swap out for testing
    """
    for second in range(seconds):
        logger.info("T-%d...", seconds - second)
        sleep(1)

    logger.info("Ignition!")


def configure_logging(verbosity=0):
    """
    Only for entry points; library code never touches handlers.

    :param verbosity: 0 for INFO, 1 for DEBUG
    """
    level = logging.DEBUG if verbosity > 0 else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


class Program:
    """
    The base class for all looping programs that we'll run to accomplish a given task.
    Calling one performs a single tick and returns True once it's done.
    """
    def __init__(self, name):
        self.name = name
        self.ticks = 0

    def __call__(self):
        raise NotImplementedError("Subclass of Program has not been set up correctly. Implement a __call__ method.")


def run_program(program):
    """
    Tick the program until it reports it has finished.

    Telemetry receives block, so there is no sleep between ticks.

    :return: number of ticks it took
    """
    logger.debug("Running program %s", program.name)
    while not program():
        program.ticks += 1

    program.ticks += 1
    return program.ticks
