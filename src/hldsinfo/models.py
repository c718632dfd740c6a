"""Immutable records produced by the info response decoder.

Brief:
  ServerInfo mirrors one A2S_INFO reply. ExtraData holds the optional tail
  whose fields are present only when their EDF bit is set. Fields that were
  not reported stay None and are left out of ``to_dict()`` so consumers can
  tell "not reported" apart from "reported as zero".
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class EDF(enum.IntFlag):
    """Extra Data Flags carried in the last byte of the base record."""

    PORT = 0x80
    STEAMID = 0x10
    SOURCETV = 0x40
    KEYWORDS = 0x20
    GAMEID = 0x01


KNOWN_EDF = EDF.PORT | EDF.STEAMID | EDF.SOURCETV | EDF.KEYWORDS | EDF.GAMEID


@dataclass(frozen=True)
class ExtraData:
    """Optional server fields selected by EDF.

    Inputs:
      - port: game port (EDF.PORT)
      - steamid: 64-bit server platform id (EDF.STEAMID)
      - sourcetv_port / sourcetv_name: spectator relay (EDF.SOURCETV)
      - keywords: free-text tags (EDF.KEYWORDS)
      - game_id: 64-bit application id (EDF.GAMEID)

    Outputs:
      - Immutable record; None means the field was not reported.
    """

    port: Optional[int] = None
    steamid: Optional[int] = None
    sourcetv_port: Optional[int] = None
    sourcetv_name: Optional[str] = None
    keywords: Optional[str] = None
    game_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key in (
            "port",
            "steamid",
            "sourcetv_port",
            "sourcetv_name",
            "keywords",
            "game_id",
        ):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out

    def is_empty(self) -> bool:
        return not self.to_dict()


@dataclass(frozen=True)
class ServerInfo:
    """Decoded A2S_INFO response.

    ``header`` and ``edf`` describe the wire framing and are not serialized.
    """

    protocol: int
    name: str
    map: str
    folder: str
    game: str
    id: int
    players: int
    max_players: int
    bots: int
    server_type: str
    environment: str
    visibility: int
    vac: int
    version: str
    header: int = 0x49
    edf: int = 0
    extra_data: ExtraData = field(default_factory=ExtraData)

    @property
    def flags(self) -> EDF:
        return EDF(self.edf & KNOWN_EDF)

    def to_dict(self) -> Dict[str, Any]:
        """
        Brief: Serializable mapping using the original JSON key names.

        Outputs:
          - dict with ``extra_data`` omitted entirely when no EDF bit was set,
            and individual extra fields omitted when their bit was unset.
        """
        out: Dict[str, Any] = {
            "protocol": self.protocol,
            "name": self.name,
            "map": self.map,
            "folder": self.folder,
            "game": self.game,
            "id": self.id,
            "players": self.players,
            "max_players": self.max_players,
            "bots": self.bots,
            "server_type": self.server_type,
            "environment": self.environment,
            "visibility": self.visibility,
            "vac": self.vac,
            "version": self.version,
        }
        extra = self.extra_data.to_dict()
        if extra:
            out["extra_data"] = extra
        return out
