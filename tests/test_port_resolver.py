"""Tests for engine port discovery."""

import psutil
import pytest

import port_resolver
from exceptions import PortNotFound
from helpers import Address, Connection, FakeProcess, listening
from port_resolver import resolve_port


@pytest.fixture
def processes(monkeypatch):
    running = []
    monkeypatch.setattr(port_resolver.psutil, "process_iter", lambda attrs=None: iter(running))
    return running


def test_explicit_port_is_returned_unchanged(processes):
    assert resolve_port(51000) == 51000


def test_no_matching_process(processes):
    processes.append(FakeProcess(1, "python.exe", listening(8000)))
    with pytest.raises(PortNotFound):
        resolve_port(0)


def test_first_listening_port_wins(processes):
    processes.append(FakeProcess(10, "msmdsrv.exe", listening(51234, 51235)))
    assert resolve_port(0) == 51234


def test_none_means_auto_detect(processes):
    processes.append(FakeProcess(10, "msmdsrv.exe", listening(51234)))
    assert resolve_port(None) == 51234


def test_process_order_then_socket_order(processes):
    processes.append(FakeProcess(10, "MSMDSRV.EXE", listening(52000)))
    processes.append(FakeProcess(11, "msmdsrv.exe", listening(51000)))
    assert resolve_port(0) == 52000


def test_name_match_ignores_exe_suffix(processes):
    processes.append(FakeProcess(10, "msmdsrv", listening(51234)))
    assert resolve_port(0, process_name="msmdsrv.exe") == 51234


def test_non_listening_and_zero_ports_are_ignored(processes):
    connections = [
        Connection(Address("127.0.0.1", 50000), "ESTABLISHED"),
        Connection(Address("0.0.0.0", 0), "LISTEN"),
    ]
    processes.append(FakeProcess(10, "msmdsrv.exe", connections))
    with pytest.raises(PortNotFound):
        resolve_port(0)


def test_failing_process_is_skipped(processes, caplog):
    processes.append(FakeProcess(10, "msmdsrv.exe", error=psutil.AccessDenied(pid=10)))
    processes.append(FakeProcess(11, "msmdsrv.exe", listening(51555)))
    assert resolve_port(0) == 51555
    assert "process 10" in caplog.text


def test_all_processes_failing_is_not_found(processes):
    processes.append(FakeProcess(10, "msmdsrv.exe", error=psutil.NoSuchProcess(pid=10)))
    with pytest.raises(PortNotFound):
        resolve_port(0)
