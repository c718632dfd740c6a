"""Single-datagram A2S_INFO transport.

Brief:
  One query is one connected UDP socket, one send and at most one receive,
  both bounded by an absolute deadline. Nothing is retransmitted: a lost
  query or reply simply times out.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
import time
from typing import Optional, Tuple

from .decoder import decode_info
from .errors import DialFailed, ReadTimeout, TransportFailure, WriteTimeout
from .models import ServerInfo

logger = logging.getLogger(__name__)

A2S_INFO_REQUEST = b"\xFF\xFF\xFF\xFFTSource Engine Query\x00"
DEFAULT_PORT = 27015
# Largest single-packet A2S reply.
MAX_PACKET_SIZE = 1400


def deadline_after(timeout_ms: Optional[float]) -> Optional[float]:
    """
    Brief: Convert a relative timeout to an absolute monotonic deadline.

    Inputs:
      - timeout_ms: milliseconds; None or <= 0 means no time limit

    Outputs:
      - float deadline on the time.monotonic() clock, or None
    """
    if not timeout_ms or timeout_ms <= 0:
        return None
    return time.monotonic() + timeout_ms / 1000.0


def parse_address(address: str) -> Tuple[str, int]:
    """
    Brief: Split ``host:port`` (port optional, default 27015).

    Example:
        >>> parse_address("127.0.0.1:27016")
        ('127.0.0.1', 27016)
        >>> parse_address("example.org")
        ('example.org', 27015)
    """
    address = str(address).strip()
    host, sep, port_s = address.rpartition(":")
    if not sep:
        host, port_s = address, ""
    if not host:
        raise DialFailed(f"invalid address {address!r}")
    if not port_s:
        return host, DEFAULT_PORT
    try:
        port = int(port_s)
    except ValueError:
        raise DialFailed(f"invalid port in address {address!r}")
    if not 0 < port <= 65535:
        raise DialFailed(f"port out of range in address {address!r}")
    return host, port


def _time_left(deadline: Optional[float], exc_type: type) -> Optional[float]:
    if deadline is None:
        return None
    left = deadline - time.monotonic()
    if left <= 0:
        raise exc_type("deadline exceeded")
    return left


def _resolve(host: str, port: int, deadline: Optional[float]) -> Tuple[str, int]:
    try:
        return str(ipaddress.IPv4Address(host)), port
    except ValueError:
        pass
    # Hostname lookup blocks in the system resolver and cannot be bounded by
    # the deadline; an overrun is reported once it returns.
    try:
        infos = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_DGRAM)
    except socket.gaierror as e:
        raise DialFailed(f"cannot resolve {host!r}: {e}")
    if not infos:
        raise DialFailed(f"no IPv4 address for {host!r}")
    _time_left(deadline, DialFailed)
    return infos[0][4]


def _dial(address: str, deadline: Optional[float] = None) -> socket.socket:
    host, port = parse_address(address)
    sockaddr = _resolve(host, port, deadline)
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as e:
        raise DialFailed(f"socket error: {e}")
    try:
        s.connect(sockaddr)
    except OSError as e:
        s.close()
        raise DialFailed(f"connect to {address} failed: {e}")
    return s


def exchange(
    address: str,
    deadline: Optional[float] = None,
    request: bytes = A2S_INFO_REQUEST,
) -> bytes:
    """
    Brief: Send one query datagram and read one reply.

    Inputs:
      - address: ``host:port`` of the game server (IPv4)
      - deadline: absolute time.monotonic() deadline, None for no limit
      - request: payload to send (defaults to the A2S_INFO query)

    Outputs:
      - bytes: the reply datagram

    Raises:
      - DialFailed, WriteTimeout, ReadTimeout, TransportFailure

    Example:
        >>> try:
        ...     exchange('203.0.113.1:27015', deadline_after(10))
        ... except TransportFailure:
        ...     pass
    """
    _time_left(deadline, WriteTimeout)
    s = _dial(address, deadline)
    try:
        s.settimeout(_time_left(deadline, WriteTimeout))
        try:
            sent = s.send(request)
        except socket.timeout:
            raise WriteTimeout(f"send to {address} timed out")
        except OSError as e:
            raise TransportFailure(f"send to {address} failed: {e}")
        if sent != len(request):
            raise TransportFailure(
                f"short send to {address}: {sent} of {len(request)} bytes"
            )

        s.settimeout(_time_left(deadline, ReadTimeout))
        try:
            data = s.recv(MAX_PACKET_SIZE)
        except socket.timeout:
            raise ReadTimeout(f"no reply from {address}")
        except OSError as e:
            raise TransportFailure(f"receive from {address} failed: {e}")
        logger.debug("Received %d bytes from %s", len(data), address)
        return data
    finally:
        s.close()


def get_info(address: str, deadline: Optional[float] = None) -> ServerInfo:
    """
    Brief: Query one server and decode its reply.

    Inputs:
      - address: ``host:port``
      - deadline: absolute monotonic deadline or None

    Outputs:
      - ServerInfo

    Raises the specific TransportFailure or ResponseError subclass so a
    caller querying a single address can tell failures apart.
    """
    return decode_info(exchange(address, deadline))
