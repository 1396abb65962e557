"""Listen address parsing.

Accepts ``host:port``, ``:port`` and ``[host]:port``. The port may be a
number, a TCP service name such as ``http``, or empty for any free port.
"""

import ipaddress
import socket
from typing import Optional, Tuple


class AddressError(ValueError):
    pass


def _parse_port(text: str) -> int:
    # an empty port means "any free port"
    if not text:
        return 0
    if text.isdigit():
        port = int(text)
        if port > 65535:
            raise AddressError(f"invalid port {text!r}")
        return port
    try:
        return socket.getservbyname(text, "tcp")
    except OSError:
        raise AddressError(f"unknown port {text!r}") from None


def _check_host(host: str) -> None:
    try:
        ipaddress.ip_address(host)
        return
    except ValueError:
        pass
    try:
        socket.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise AddressError(f"cannot resolve host {host!r}: {e}") from None


def parse_address(text: str) -> Tuple[Optional[str], int]:
    """Split *text* into ``(host, port)``. ``host`` is None for all interfaces."""
    if text.startswith("["):
        end = text.find("]")
        if end < 0:
            raise AddressError(f"missing ']' in address {text!r}")
        host = text[1:end]
        rest = text[end + 1:]
        if not rest.startswith(":"):
            raise AddressError(f"missing port in address {text!r}")
        port = rest[1:]
    else:
        host, sep, port = text.rpartition(":")
        if not sep:
            raise AddressError(f"missing port in address {text!r}")
        if ":" in host:
            raise AddressError(f"too many colons in address {text!r}")

    port_number = _parse_port(port)
    if not host:
        return None, port_number
    _check_host(host)
    return host, port_number
