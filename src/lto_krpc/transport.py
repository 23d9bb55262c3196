"""
transport.py

The one place that talks to the kRPC server. Every remote call, batched or
not, goes through a Transport so that failures come out as TransportError
with a description of what was being asked for.
"""

import collections
import logging

import krpc.error

logger = logging.getLogger(__name__)

# anything the client can throw at us while a call is in flight. RPCError,
# StreamError and the exception types the server declares for its services are
# all RuntimeErrors; the server's ArgumentException comes out as a ValueError.
REMOTE_ERRORS = (krpc.error.RPCError, krpc.error.StreamError, RuntimeError, ValueError, OSError)


class TransportError(Exception):
    """
    A remote call (or a stream receive) failed. These are fatal for the
    flight program; nothing below the CLI catches them.
    """
    def __init__(self, description, cause=None):
        self.description = description
        self.cause = cause

        msg = 'remote call failed: {0}'.format(description)
        if cause is not None:
            msg = '{0} ({1})'.format(msg, cause)

        super().__init__(msg)


def describe_call(func, args):
    """
    :param func: the callable that was (or will be) invoked remotely
    :param args: the positional arguments for it

    :return: a short human readable description of the call, for logs and errors
    """
    name = getattr(func, '__name__', repr(func))
    if func in (getattr, setattr) and len(args) >= 2:
        return '{0}.{1}'.format(type(args[0]).__name__, args[1])

    return '{0}({1})'.format(name, ', '.join(repr(a) for a in args))


class Result(collections.namedtuple('Result', 'value error')):
    """
    Outcome of a single call inside a batch. Exactly one of value/error is meaningful.
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

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.value


class BatchCall:
    """
    An ordered set of independent remote calls issued together. Each call
    succeeds or fails on its own; nothing here is transactional.
    """
    def __init__(self, transport):
        self._transport = transport
        self._calls = []

    def __len__(self):
        return len(self._calls)

    def add(self, func, *args, **kwargs):
        self._calls.append((func, args, kwargs))
        return self

    def add_get(self, obj, attr):
        return self.add(getattr, obj, attr)

    def add_set(self, obj, attr, value):
        return self.add(setattr, obj, attr, value)

    def execute(self):
        """
        Run every queued call in order.

        :return: list of Result, one per call, in the order they were added
        """
        results = []
        for func, args, kwargs in self._calls:
            description = describe_call(func, args)
            try:
                value = func(*args, **kwargs)
            except REMOTE_ERRORS as exc:
                logger.debug("Batched call %s failed: %s", description, exc)
                results.append(Result.failure(TransportError(description, exc)))
            else:
                results.append(Result.success(value))

        return results

    def unwrap(self):
        """
        Execute the batch and return the plain values

        :raises TransportError: for the first call that failed
        """
        return [result.unwrap() for result in self.execute()]


class Transport:
    """
    Wrapper around a krpc client connection.
    """
    def __init__(self, connection):
        self.connection = connection

    def call(self, func, *args, **kwargs):
        description = describe_call(func, args)
        logger.debug("Calling %s", description)
        try:
            return func(*args, **kwargs)
        except REMOTE_ERRORS as exc:
            logger.error("Remote call %s failed: %s", description, exc)
            raise TransportError(description, exc) from exc

    def get(self, obj, attr):
        return self.call(getattr, obj, attr)

    def set(self, obj, attr, value):
        return self.call(setattr, obj, attr, value)

    def batch(self):
        return BatchCall(self)

    def add_stream(self, func, *args):
        """
        Subscribe to a remote value

        :param func: the function (usually getattr) whose result should be streamed
        :return: the krpc stream handle
        """
        return self.call(self.connection.add_stream, func, *args)

    def wait_for_update(self, timeout=None):
        """
        Block until the server pushes the next stream update

        :param timeout: seconds to wait, None waits forever
        :raises TransportError: if the stream connection fails
        """
        try:
            with self.connection.stream_update_condition:
                self.connection.wait_for_stream_update(timeout)
        except REMOTE_ERRORS as exc:
            raise TransportError('stream update', exc) from exc
