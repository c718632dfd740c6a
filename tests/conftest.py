"""
Brief: Shared pytest configuration, A2S_INFO reply builders and UDP stubs.

Inputs:
  - None

Outputs:
  - None
"""

import os
import signal
import socket
import struct
import sys
import threading

import pytest

# Ensure 'src' is on sys.path so 'hldsinfo' package is importable in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


def _alarm_handler(signum, frame):
    raise TimeoutError("Test exceeded 10 seconds")


if hasattr(signal, "SIGALRM"):
    signal.signal(signal.SIGALRM, _alarm_handler)


@pytest.fixture(autouse=True)
def enforce_test_timeout():
    """
    Brief: Enforce a hard 10-second timeout for each test.

    Inputs:
      - None

    Outputs:
      - None: Cancels alarm after test
    """
    if hasattr(signal, "SIGALRM"):
        signal.alarm(10)
        try:
            yield
        finally:
            signal.alarm(0)
    else:
        yield


def _cstr(value):
    if isinstance(value, str):
        value = value.encode("latin-1")
    return value + b"\x00"


def build_extra(
    edf,
    port=27015,
    steamid=90071992547409921,
    sourcetv_port=27020,
    sourcetv_name="SourceTV",
    keywords="secure,alltalk",
    game_id=730,
):
    """Encode the optional tail for ``edf`` in wire order."""
    out = b""
    if edf & 0x80:
        out += struct.pack("<H", port)
    if edf & 0x10:
        out += struct.pack("<Q", steamid)
    if edf & 0x40:
        out += struct.pack("<H", sourcetv_port) + _cstr(sourcetv_name)
    if edf & 0x20:
        out += _cstr(keywords)
    if edf & 0x01:
        out += struct.pack("<Q", game_id)
    return out


def build_info_response(
    name="Test Server",
    map_name="de_dust2",
    folder="cstrike",
    game="Counter-Strike",
    app_id=10,
    players=3,
    max_players=16,
    bots=1,
    server_type="d",
    environment="l",
    visibility=0,
    vac=1,
    version="1.1.2.7",
    protocol=48,
    edf=0,
    extra=None,
    magic=b"\xff\xff\xff\xff",
    tag=b"I",
):
    """Encode a complete A2S_INFO reply."""
    if extra is None:
        extra = build_extra(edf)
    return (
        magic
        + tag
        + bytes([protocol])
        + _cstr(name)
        + _cstr(map_name)
        + _cstr(folder)
        + _cstr(game)
        + struct.pack("<H", app_id)
        + bytes([players, max_players, bots])
        + server_type.encode("latin-1")
        + environment.encode("latin-1")
        + bytes([visibility, vac])
        + _cstr(version)
        + bytes([edf])
        + extra
    )


@pytest.fixture
def info_response():
    """Brief: Builder for A2S_INFO replies, see build_info_response()."""
    return build_info_response


@pytest.fixture
def extra_tail():
    """Brief: Builder for the EDF-selected tail, see build_extra()."""
    return build_extra


class UDPInfoStub:
    """
    Brief: Local UDP server answering every datagram with a fixed reply.

    Inputs:
      - reply: bytes to send back, or None to stay silent

    Outputs:
      - address: ``127.0.0.1:<port>`` string
      - received: list of payloads seen
    """

    def __init__(self, reply=None):
        self.reply = reply
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(("127.0.0.1", 0))
        self.addr = self.sock.getsockname()
        self.address = f"{self.addr[0]}:{self.addr[1]}"
        self.received = []
        self._lock = threading.Lock()
        self._stop = False
        self.thread = threading.Thread(target=self._loop, daemon=True)

    def start(self):
        self.thread.start()
        return self

    def _loop(self):
        while not self._stop:
            try:
                self.sock.settimeout(0.1)
                data, peer = self.sock.recvfrom(4096)
            except OSError:
                continue
            with self._lock:
                self.received.append(data)
            if self.reply is None:
                continue
            try:
                self.sock.sendto(self.reply, peer)
            except OSError:
                pass

    def payloads(self):
        with self._lock:
            return list(self.received)

    def close(self):
        self._stop = True
        self.thread.join(timeout=1)
        self.sock.close()


@pytest.fixture
def udp_stub_factory():
    """Brief: Create started UDPInfoStub instances closed after the test."""
    stubs = []

    def _make(reply=None):
        stub = UDPInfoStub(reply).start()
        stubs.append(stub)
        return stub

    try:
        yield _make
    finally:
        for s in stubs:
            s.close()
