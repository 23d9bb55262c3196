import pytest

from lto_krpc import const
from lto_krpc import maneuvers
from lto_krpc import programs
from lto_krpc import util
from lto_krpc.cli import launch_to_orbit
from lto_krpc.transport import TransportError

from conftest import rpc_error


def frame(altitude=None, apoapsis=None, fuel=None, tta=None):
    def apply(c):
        if altitude is not None:
            c.vessel.flight_.mean_altitude = altitude
        if apoapsis is not None:
            c.vessel.orbit.apoapsis_altitude = apoapsis
        if fuel is not None:
            c.vessel.resources.amounts[const.RES_SOLID_FUEL] = fuel
        if tta is not None:
            c.vessel.orbit.time_to_apoapsis = tta
    return apply


def test_launch_to_orbit_flies_every_phase(conn):
    sleeps = []
    conn.script = [
        frame(altitude=0., fuel=0.),
        frame(altitude=1000., fuel=100.),
        frame(altitude=22625., fuel=0.),
        frame(altitude=50000., apoapsis=67000.),
        frame(apoapsis=74000.),
        frame(altitude=71000.),
        frame(tta=5.),
    ]

    burn_plan = programs.LaunchToOrbit(conn, sleep=sleeps.append)

    expected = maneuvers.plan_circularization(3.5316e12, 750000., 700000., 50000., 300., 10000., 1000., 60.)
    assert burn_plan.epoch == 1060.
    assert burn_plan.delta_v == pytest.approx(expected.delta_v)
    assert burn_plan.burn_duration == pytest.approx(expected.burn_duration)

    assert conn.script == []
    assert conn.log.count(('activate_next_stage',)) == 2
    assert ('add_node', 1060., pytest.approx(expected.delta_v), 0., 0.) in conn.log
    assert ('warp_to', pytest.approx(burn_plan.burn_start - 5.), 50., 4.) in conn.log

    throttles = [entry[2] for entry in conn.log if entry[:2] == ('set', 'throttle')]
    assert throttles == [1.0, 0.25, 0.0, 1.0]

    assert sleeps == [1] * 10 + [pytest.approx(expected.burn_duration - 0.5)]
    assert all(stream.removed for stream in conn.streams)


def test_launch_stops_on_transport_error(conn):
    def no_stage(stage, cumulative=True):
        raise rpc_error("no such stage")

    conn.vessel.resources_in_decouple_stage = no_stage

    with pytest.raises(TransportError):
        programs.LaunchToOrbit(conn, sleep=lambda s: None)


def test_watch_streams(conn):
    def tick(c):
        c.space_center.ut += 1.

    def drop(c):
        raise ConnectionResetError('blip')

    conn.script = [tick, drop, tick]

    assert programs.WatchStreams(conn, updates=3) == 2
    assert all(stream.removed for stream in conn.streams)


def test_countdown_logs_each_second(caplog):
    sleeps = []
    with caplog.at_level('INFO', logger='lto_krpc.util'):
        util.countdown(3, sleep=sleeps.append)

    assert sleeps == [1, 1, 1]
    assert [r.getMessage() for r in caplog.records] == ['T-3...', 'T-2...', 'T-1...', 'Ignition!']


def test_cli_exits_nonzero_on_transport_error(conn, monkeypatch):
    def explode(connection):
        raise TransportError('Vessel.control')

    monkeypatch.setattr(util, 'get_conn', lambda name, address: conn)
    monkeypatch.setattr(programs, 'LaunchToOrbit', explode)

    assert launch_to_orbit.launch_main(['10.0.0.2']) == 1
    assert conn.closed


def test_cli_exits_nonzero_when_burn_cannot_be_planned(conn, monkeypatch, caplog):
    def no_engine(connection):
        raise maneuvers.PlanningError('cannot plan circularization: no engine')

    monkeypatch.setattr(util, 'get_conn', lambda name, address: conn)
    monkeypatch.setattr(programs, 'LaunchToOrbit', no_engine)

    assert launch_to_orbit.launch_main([]) == 1
    assert 'no engine' in caplog.text


def test_cli_runs_program(conn, monkeypatch):
    seen = []
    monkeypatch.setattr(util, 'get_conn', lambda name, address: seen.append((name, address)) or conn)
    monkeypatch.setattr(programs, 'WatchStreams', lambda connection: None)

    assert launch_to_orbit.watch_main(['-v']) == 0
    assert seen == [("Stream Test", const.DEFAULT_ADDRESS)]
