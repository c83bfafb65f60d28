from __future__ import annotations
import socket
import logging

from prometheus_client import Counter, start_http_server

logger = logging.getLogger(__name__)

COMMANDS_SENT = Counter(
    "hand_commands_sent_total",
    "Total command bytes written to the hand",
    ["command"],
)
IDLE_ANIMATIONS_STARTED = Counter(
    "hand_idle_animations_started_total",
    "Total idle animation variants started by the rotation",
    ["variant"],
)
TRANSPORT_ERRORS = Counter("hand_transport_errors_total", "Total serial transport failures")

def _is_port_in_use(port: int, host: str = '0.0.0.0') -> bool:
    """Check if a port is already in use on the specified host."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        try:
            s.bind((host, port))
            return False
        except OSError:
            return True

def start_metrics_server(host: str, port: int) -> None:
    """
    Start the Prometheus metrics HTTP server.

    An already bound port is treated as a metrics server started by another
    process (e.g. a second CLI invocation) and only logged.
    """
    if _is_port_in_use(port, host):
        logger.warning(f"Metrics server port {port} is already in use on {host}. Assuming metrics server is already running.")
        return
    try:
        start_http_server(port, addr=host)
        logger.info(f"Started metrics server on {host}:{port} (http://{host}:{port}/metrics)")
    except OSError as e:
        if e.errno == 98:  # Address already in use
            logger.warning(f"Metrics server port {port} is already in use. Assuming metrics server is already running.")
        else:
            logger.error(f"Failed to start metrics server on port {port}: {e}")
            raise
