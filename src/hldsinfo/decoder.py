"""A2S_INFO response decoder.

Brief:
  Turns one reply datagram into a ServerInfo. Field order is part of the wire
  contract; the optional tail is read in a fixed order no matter which EDF
  bits are set. Decoding is all-or-nothing: the first cursor failure aborts
  the whole decode and no partial record escapes.

Inputs:
  - data: raw reply bytes

Outputs:
  - ServerInfo, or MalformedResponse / Truncated
"""

from __future__ import annotations

import logging

from .cursor import ByteCursor
from .errors import MalformedResponse
from .models import EDF, ExtraData, ServerInfo

logger = logging.getLogger(__name__)

SIMPLE_RESPONSE_HEADER = 0xFFFFFFFF
INFO_RESPONSE_TAG = 0x49


def _decode_extra(cur: ByteCursor, edf: int) -> ExtraData:
    port = steamid = sourcetv_port = game_id = None
    sourcetv_name = keywords = None

    if edf & EDF.PORT:
        port = cur.read_uint16()
    if edf & EDF.STEAMID:
        steamid = cur.read_uint64()
    if edf & EDF.SOURCETV:
        sourcetv_port = cur.read_uint16()
        sourcetv_name = cur.read_string()
    if edf & EDF.KEYWORDS:
        keywords = cur.read_string()
    if edf & EDF.GAMEID:
        game_id = cur.read_uint64()

    return ExtraData(
        port=port,
        steamid=steamid,
        sourcetv_port=sourcetv_port,
        sourcetv_name=sourcetv_name,
        keywords=keywords,
        game_id=game_id,
    )


def decode_info(data: bytes, *, encoding: str = "latin-1") -> ServerInfo:
    """
    Brief: Decode an A2S_INFO reply.

    Inputs:
      - data: one received datagram
      - encoding: string codec (latin-1 keeps every byte)

    Outputs:
      - ServerInfo

    Raises:
      - MalformedResponse: magic is not 0xFFFFFFFF or tag is not 0x49
      - Truncated: the buffer ended inside a field

    Example:
        >>> decode_info(b"\\x00\\x00\\x00\\x00I")
        Traceback (most recent call last):
        ...
        hldsinfo.errors.MalformedResponse: unexpected response header 0x00000000
    """
    cur = ByteCursor(data, encoding=encoding)

    magic = cur.read_uint32()
    if magic != SIMPLE_RESPONSE_HEADER:
        raise MalformedResponse(f"unexpected response header 0x{magic:08X}")

    header = cur.read_byte()
    if header != INFO_RESPONSE_TAG:
        raise MalformedResponse(f"unexpected response tag 0x{header:02X}")

    protocol = cur.read_byte()
    name = cur.read_string()
    map_name = cur.read_string()
    folder = cur.read_string()
    game = cur.read_string()
    app_id = cur.read_uint16()
    players = cur.read_byte()
    max_players = cur.read_byte()
    bots = cur.read_byte()
    server_type = cur.read_char()
    environment = cur.read_char()
    visibility = cur.read_byte()
    vac = cur.read_byte()
    version = cur.read_string()
    edf = cur.read_byte()

    extra = _decode_extra(cur, edf)
    if cur.remaining:
        logger.debug("Ignoring %d trailing bytes after info response", cur.remaining)

    return ServerInfo(
        protocol=protocol,
        name=name,
        map=map_name,
        folder=folder,
        game=game,
        id=app_id,
        players=players,
        max_players=max_players,
        bots=bots,
        server_type=server_type,
        environment=environment,
        visibility=visibility,
        vac=vac,
        version=version,
        header=header,
        edf=edf,
        extra_data=extra,
    )
