from __future__ import annotations

import struct

from .errors import Exhausted, MalformedResponse

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


class ByteCursor:
    """
    Sequential reader over a fixed byte buffer.

    Inputs:
      - data: bytes-like buffer (one received datagram)
      - encoding: codec used for strings and chars (default latin-1, which
        maps each byte to exactly one code point)

    Outputs:
      - Fixed-width little-endian integers and null-terminated strings.

    Every read advances ``offset`` by the bytes it consumed. A read that would
    pass the end raises Exhausted; the offset is then unspecified and the
    caller must stop decoding. Text that the configured codec cannot decode
    raises MalformedResponse.

    Example:
        >>> c = ByteCursor(b"\\x88\\x69abc\\x00")
        >>> c.read_uint16(), c.read_string(), c.offset
        (27016, 'abc', 6)
    """

    __slots__ = ("data", "offset", "encoding")

    def __init__(self, data: bytes, encoding: str = "latin-1"):
        self.data = bytes(data)
        self.offset = 0
        self.encoding = encoding

    @property
    def remaining(self) -> int:
        return max(0, len(self.data) - self.offset)

    def _take(self, n: int) -> bytes:
        end = self.offset + n
        if end > len(self.data):
            raise Exhausted(
                f"need {n} bytes at offset {self.offset}, have {self.remaining}"
            )
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def read_byte(self) -> int:
        return self._take(1)[0]

    def _decode(self, raw: bytes) -> str:
        try:
            return raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise MalformedResponse(f"undecodable {self.encoding} text: {e}")

    def read_char(self) -> str:
        return self._decode(self._take(1))

    def read_uint16(self) -> int:
        return _U16.unpack(self._take(2))[0]

    def read_uint32(self) -> int:
        return _U32.unpack(self._take(4))[0]

    def read_uint64(self) -> int:
        return _U64.unpack(self._take(8))[0]

    def read_string(self) -> str:
        """Read bytes up to a zero terminator; the terminator is consumed."""
        end = self.data.find(b"\x00", self.offset)
        if end < 0:
            self.offset = len(self.data)
            raise Exhausted("string terminator not found")
        raw = self.data[self.offset : end]
        self.offset = end + 1
        return self._decode(raw)
