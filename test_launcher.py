"""
Tests for the API server launcher and the --web entry point
"""
import subprocess

import pytest

import launcher
import tapcalc
from launcher import ApiServer


class FakeProcess:
    def __init__(self, args, ignore_terminate=False, **kwargs):
        self.args = args
        self.kwargs = kwargs
        self.pid = 4242
        self.returncode = None
        self.ignore_terminate = ignore_terminate
        self.calls = []

    def poll(self):
        return self.returncode

    def terminate(self):
        self.calls.append("terminate")
        if not self.ignore_terminate:
            self.returncode = 0

    def wait(self, timeout=None):
        self.calls.append("wait")
        if self.returncode is None:
            raise subprocess.TimeoutExpired(self.args, timeout)
        return self.returncode

    def kill(self):
        self.calls.append("kill")
        self.returncode = -9


@pytest.fixture
def spawned(monkeypatch):
    processes = []

    def fake_popen(args, **kwargs):
        process = FakeProcess(args, **kwargs)
        processes.append(process)
        return process

    monkeypatch.setattr(launcher.subprocess, "Popen", fake_popen)
    return processes


class TestApiServer:
    def test_start_runs_api_script(self, spawned):
        server = ApiServer(script="/srv/api.py", python="/usr/bin/python3")
        assert server.start() is True
        assert server.running
        assert spawned[0].args == ["/usr/bin/python3", "/srv/api.py"]
        assert spawned[0].kwargs["stdout"] is subprocess.DEVNULL

    def test_start_twice_spawns_once(self, spawned):
        server = ApiServer()
        server.start()
        server.start()
        assert len(spawned) == 1

    def test_stop_terminates(self, spawned, capsys):
        server = ApiServer()
        server.start()
        server.stop()
        assert spawned[0].calls == ["terminate", "wait"]
        assert not server.running
        assert "API server stopped" in capsys.readouterr().out

    def test_stop_kills_stubborn_process(self, monkeypatch):
        process = FakeProcess(["x"], ignore_terminate=True)
        monkeypatch.setattr(launcher.subprocess, "Popen", lambda args, **kw: process)
        server = ApiServer(stop_timeout=0)
        server.start()
        server.stop()
        assert process.calls == ["terminate", "wait", "kill", "wait"]

    def test_stop_without_start_is_noop(self):
        ApiServer().stop()

    def test_start_failure_is_reported(self, monkeypatch, capsys):
        def broken_popen(args, **kwargs):
            raise FileNotFoundError("no python")

        monkeypatch.setattr(launcher.subprocess, "Popen", broken_popen)
        server = ApiServer()
        assert server.start() is False
        assert not server.running
        assert "Failed to start API server" in capsys.readouterr().out


class RecordingServer:
    def __init__(self):
        self.events = []

    def start(self):
        self.events.append("start")

    def stop(self):
        self.events.append("stop")


def test_main_without_web_only_runs_gui():
    server = RecordingServer()
    shown = []
    tapcalc.main([], server=server, gui=lambda: shown.append(True))
    assert shown == [True]
    assert server.events == []


def test_main_with_web_wraps_gui_in_server():
    server = RecordingServer()
    tapcalc.main(["--web"], server=server, gui=lambda: server.events.append("gui"))
    assert server.events == ["start", "gui", "stop"]


def test_main_stops_server_when_gui_fails():
    server = RecordingServer()

    def crash():
        raise RuntimeError("no display")

    with pytest.raises(RuntimeError):
        tapcalc.main(["--web"], server=server, gui=crash)
    assert server.events == ["start", "stop"]
