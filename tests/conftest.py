"""
In-memory stand-ins for the bits of the krpc client the flight programs touch,
so the tests never need a running server.
"""
import threading

import krpc.error
import pytest

from lto_krpc.config import FlightPlan
from lto_krpc.telemetry import Reading, StaleOrMissing, TelemetrySnapshot
from lto_krpc.transport import Transport


class FakeStream:
    def __init__(self, func, args):
        self.func = func
        self.args = args
        self.removed = False

    def __call__(self):
        return self.func(*self.args)

    def remove(self):
        self.removed = True


class FakeResources:
    def __init__(self, amounts=None):
        self.amounts = dict(amounts or {})

    def amount(self, name):
        value = self.amounts[name]
        if isinstance(value, Exception):
            raise value
        return value


class FakeNode:
    def __init__(self, ut, prograde, normal, radial):
        self.ut = ut
        self.prograde = prograde
        self.normal = normal
        self.radial = radial
        self.reference_frame = 'node-frame'


class FakeControl:
    def __init__(self, log):
        self.throttle = 0.0
        self.sas = True
        self.rcs = True
        self.nodes = []
        self._log = log

    def __setattr__(self, name, value):
        if not name.startswith('_') and hasattr(self, '_log'):
            self._log.append(('set', name, value))
        super().__setattr__(name, value)

    def activate_next_stage(self):
        self._log.append(('activate_next_stage',))
        return []

    def add_node(self, ut, prograde=0., normal=0., radial=0.):
        node = FakeNode(ut, prograde, normal, radial)
        self._log.append(('add_node', ut, prograde, normal, radial))
        self.nodes.append(node)
        return node


class FakeAutoPilot:
    def __init__(self, log):
        self.reference_frame = None
        self.target_pitch = 0.0
        self.target_heading = 0.0
        self._log = log

    def __setattr__(self, name, value):
        if not name.startswith('_') and hasattr(self, '_log'):
            self._log.append(('set', name, value))
        super().__setattr__(name, value)

    def engage(self):
        self._log.append(('engage',))

    def disengage(self):
        self._log.append(('disengage',))

    def target_pitch_and_heading(self, pitch, heading):
        self._log.append(('target_pitch_and_heading', pitch, heading))

    def wait(self):
        self._log.append(('wait',))


class FakeBody:
    gravitational_parameter = 3.5316e12


class FakeOrbit:
    def __init__(self):
        self.body = FakeBody()
        self.apoapsis_altitude = 0.0
        self.apoapsis = 750000.
        self.semi_major_axis = 700000.
        self.time_to_apoapsis = 60.


class FakeFlight:
    def __init__(self):
        self.mean_altitude = 0.0
        self.prograde = (0.0, 1.0, 0.0)


class FakeVessel:
    def __init__(self, log):
        self.control = FakeControl(log)
        self.auto_pilot = FakeAutoPilot(log)
        self.orbit = FakeOrbit()
        self.flight_ = FakeFlight()
        self.resources = FakeResources({'SolidFuel': 0.0})
        self.orbital_reference_frame = 'orbital-frame'
        self.available_thrust = 50000.
        self.specific_impulse = 300.
        self.mass = 10000.

    def flight(self, reference_frame=None):
        return self.flight_

    def resources_in_decouple_stage(self, stage, cumulative=True):
        return self.resources


class FakeSpaceCenter:
    def __init__(self, vessel, log):
        self._log = log
        self.active_vessel = vessel
        self.ut = 1000.
        self.warp_factor = 0.0

    def warp_to(self, ut, max_rails_rate=100000., max_physics_rate=2.):
        self._log.append(('warp_to', ut, max_rails_rate, max_physics_rate))


class FakeConnection:
    """
    Each wait_for_stream_update applies the next frame of the script: a
    callable that pokes new values into the fake objects. Running out of
    frames fails the test rather than hanging it.
    """
    def __init__(self):
        self.log = []
        self.vessel = FakeVessel(self.log)
        self.space_center = FakeSpaceCenter(self.vessel, self.log)
        self.stream_update_condition = threading.Condition()
        self.streams = []
        self.script = []
        self.closed = False

    def add_stream(self, func, *args):
        stream = FakeStream(func, args)
        self.streams.append(stream)
        return stream

    def wait_for_stream_update(self, timeout=None):
        if not self.script:
            raise AssertionError('stream script exhausted')
        frame = self.script.pop(0)
        if frame is not None:
            frame(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True


class ScriptedReader:
    """
    Hands out prepared snapshots; None entries behave like a failed receive.
    """
    def __init__(self, snapshots):
        self.snapshots = list(snapshots)

    def poll(self):
        if not self.snapshots:
            raise AssertionError('reader script exhausted')
        return self.snapshots.pop(0)


class RecordingControl:
    def __init__(self):
        self.calls = []

    def set_throttle(self, level):
        self.calls.append(('set_throttle', level))

    def activate_next_stage(self):
        self.calls.append(('activate_next_stage',))


class RecordingAutoPilot:
    def __init__(self):
        self.calls = []

    def target_pitch_and_heading(self, pitch, heading):
        self.calls.append(('target_pitch_and_heading', pitch, heading))


def ok(value):
    return Reading.success(value)


def missing(name='value'):
    return Reading.failure(StaleOrMissing(name))


def snapshot(ut=ok(0.0), apoapsis=ok(0.0), altitude=ok(0.0), srb_fuel=ok(0.0)):
    return TelemetrySnapshot(ut, apoapsis, altitude, srb_fuel)


def rpc_error(msg='boom'):
    return krpc.error.RPCError(msg)


def service_error(name='InvalidOperationException', msg='not now'):
    # the client builds server-declared exceptions as RuntimeError subclasses
    return type(name, (RuntimeError,), {})(msg)


@pytest.fixture
def conn():
    return FakeConnection()


@pytest.fixture
def transport(conn):
    return Transport(conn)


@pytest.fixture
def plan():
    return FlightPlan()
