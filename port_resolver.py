from typing import List

import psutil

from exceptions import PortNotFound
from logger import logger
from settings import DEFAULT_PROCESS_NAME


def _matches(process_name: str | None, wanted: str) -> bool:
    if not process_name:
        return False
    name = process_name.lower()
    wanted = wanted.lower()
    return name == wanted or name.removesuffix(".exe") == wanted.removesuffix(".exe")


def find_engine_processes(process_name: str = DEFAULT_PROCESS_NAME) -> List[psutil.Process]:
    """Running processes whose name matches `process_name`, in enumeration order."""
    return [
        proc
        for proc in psutil.process_iter(["pid", "name"])
        if _matches(proc.info.get("name"), process_name)
    ]


def listening_ports(proc: psutil.Process) -> List[int]:
    """Non-zero local ports of the TCP sockets `proc` is listening on."""
    return [
        conn.laddr.port
        for conn in proc.net_connections(kind="tcp")
        if conn.status == psutil.CONN_LISTEN and conn.laddr and conn.laddr.port != 0
    ]


def resolve_port(explicit_port: int | None = None, process_name: str = DEFAULT_PROCESS_NAME) -> int:
    """
    Returns the port of a locally running engine instance.

    An explicit non-zero port is returned as-is. Otherwise every process named
    `process_name` is inspected and the first listening port found wins; when
    several instances are running there is no way to tell which one is meant.

    Args:
        explicit_port (int | None): Port given by the user, 0 or None to auto-detect.
        process_name (str): Executable name of the engine.

    Returns:
        int: The port to connect to.

    Raises:
        PortNotFound: If no process matches, or none of them is listening.
    """
    if explicit_port:
        return explicit_port

    processes = find_engine_processes(process_name)
    if not processes:
        raise PortNotFound(f"No running process named {process_name}")

    ports: List[int] = []
    for proc in processes:
        try:
            ports.extend(listening_ports(proc))
        except psutil.Error as e:
            logger.warning(f"Failed to inspect sockets of process {proc.pid}: {e}")

    if not ports:
        raise PortNotFound(f"Found {process_name} but it has no listening TCP sockets")

    if len(ports) > 1:
        logger.debug(f"Candidate ports {ports}, using {ports[0]}")
    logger.info(f"Detected engine on port {ports[0]}")
    return ports[0]
