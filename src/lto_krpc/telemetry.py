"""
telemetry.py

Class and functions for reading data from the server
"""

import collections
import logging

from lto_krpc import const
from lto_krpc.transport import REMOTE_ERRORS, TransportError

logger = logging.getLogger(__name__)


class StaleOrMissing(Exception):
    """
    A subscribed value could not be resolved for this update.
    """
    def __init__(self, name, cause=None):
        self.name = name
        self.cause = cause

        msg = 'no value for {0}'.format(name)
        if cause is not None:
            msg = '{0}: {1}'.format(msg, cause)

        super().__init__(msg)


class Reading(collections.namedtuple('Reading', 'value error')):
    """
    One streamed value for one tick. There is intentionally no way to ask for
    a fallback value; if it failed, the decision depending on it is skipped.
    """
    __slots__ = ()

    @classmethod
    def success(cls, value):
        return cls(value, None)

    @classmethod
    def failure(cls, error):
        return cls(None, error)

    @property
    def ok(self):
        return self.error is None


TelemetrySnapshot = collections.namedtuple('TelemetrySnapshot', 'ut apoapsis altitude srb_fuel')


class StreamUpdate:
    """
    What a single receive gave us. Each handle is resolved on its own.
    """
    def __init__(self, names=None):
        self._names = names or {}

    def get_result(self, handle):
        name = self._names.get(id(handle), repr(handle))
        try:
            value = handle()
        except REMOTE_ERRORS as exc:
            return Reading.failure(StaleOrMissing(name, exc))

        if value is None:
            return Reading.failure(StaleOrMissing(name))

        return Reading.success(value)


class StreamManager:
    """
    Keeps track of the streams a flight program has opened, by name
    """
    def __init__(self, transport):
        self._transport = transport
        self._streams = collections.OrderedDict()

    def __contains__(self, name):
        return name in self._streams

    def _add_stream(self, name, *args):
        if name in self._streams:
            return self._streams[name]

        logger.debug("Opening stream %s", name)
        stream = self._transport.add_stream(*args)
        self._streams[name] = stream
        return stream

    def add_ut(self):
        return self._add_stream(const.UT, getattr, self._transport.connection.space_center, 'ut')

    def add_warp_factor(self):
        return self._add_stream(const.WARP_FACTOR, getattr, self._transport.connection.space_center, 'warp_factor')

    def add_mean_altitude(self, flight):
        return self._add_stream(const.MEAN_ALTITUDE, getattr, flight, 'mean_altitude')

    def add_apoapsis_altitude(self, orbit):
        return self._add_stream(const.APOAPSIS_ALTITUDE, getattr, orbit, 'apoapsis_altitude')

    def add_time_to_apoapsis(self, orbit):
        return self._add_stream(const.TIME_TO_APOAPSIS, getattr, orbit, 'time_to_apoapsis')

    def add_resource_amount(self, resources, resource, name=const.SRB_FUEL):
        return self._add_stream(name, resources.amount, resource)

    def get(self, name):
        return self._streams[name]

    def names(self):
        """
        :return: dict of id(stream) -> stream name, used to label failed readings
        """
        return dict((id(stream), name) for name, stream in self._streams.items())

    def recv_update(self, timeout=None):
        """
        Block until the next stream update arrives.

        :raises TransportError: if the receive itself fails
        """
        self._transport.wait_for_update(timeout)
        return StreamUpdate(self.names())

    def remove_all(self):
        for name, stream in list(self._streams.items()):
            logger.debug("Closing stream %s", name)
            self._transport.call(stream.remove)
            del self._streams[name]


class TelemetryReader:
    """
    Produces a TelemetrySnapshot per received update for the ascent phases
    """
    def __init__(self, streams, ut, apoapsis, altitude, srb_fuel, timeout=None):
        """
        :param streams: the StreamManager the handles belong to
        :param ut: universal time stream
        :param apoapsis: apoapsis altitude stream
        :param altitude: mean altitude stream
        :param srb_fuel: remaining booster fuel stream
        :param timeout: how long a single receive may block, None for forever
        """
        self.streams = streams
        self.handles = (ut, apoapsis, altitude, srb_fuel)
        self.timeout = timeout

    def read(self):
        """
        :return: TelemetrySnapshot for the next update
        :raises TransportError: if no update could be received
        """
        update = self.streams.recv_update(self.timeout)
        return TelemetrySnapshot(*[update.get_result(handle) for handle in self.handles])

    def poll(self):
        """
        Like read, but a failed receive is logged and comes back as None so the
        caller can simply try again on its next tick.
        """
        try:
            return self.read()
        except TransportError as exc:
            logger.warning("Failed to get telemetry update: %s", exc)
            return None
