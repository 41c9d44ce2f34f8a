"""Startup helper: find the LAN address the API is reachable on."""
import socket
from contextlib import closing


def get_local_ip(probe_host: str = "8.8.8.8", probe_port: int = 80) -> str:
    """Return the address of the interface that routes to probe_host, else '127.0.0.1'.

    Connecting a UDP socket sends nothing; it only makes the OS choose a source address.
    """
    with closing(socket.socket(socket.AF_INET, socket.SOCK_DGRAM)) as s:
        try:
            s.connect((probe_host, probe_port))
            return str(s.getsockname()[0])
        except OSError:
            return "127.0.0.1"
