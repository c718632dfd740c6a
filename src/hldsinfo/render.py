"""JSON rendering for collected server infos."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from .models import ServerInfo

INDENT = 4


def info_to_dict(info: Optional[ServerInfo]) -> Dict[str, Any]:
    """Serializable form of one result; an absent result becomes ``{}``."""
    if info is None:
        return {}
    return info.to_dict()


def render_infos(infos: Mapping[str, Optional[ServerInfo]]) -> str:
    """
    Brief: Render results as a JSON array, one element per address.

    Inputs:
      - infos: mapping returned by Fetcher.collect()

    Outputs:
      - str: JSON array; failed addresses appear as ``{}`` placeholders
    """
    items: List[Dict[str, Any]] = [info_to_dict(v) for v in infos.values()]
    return json.dumps(items, indent=INDENT, ensure_ascii=False)


def render_mapping(infos: Mapping[str, Optional[ServerInfo]]) -> str:
    """Render results as a JSON object keyed by address, ``null`` on failure."""
    out = {
        address: (info.to_dict() if info is not None else None)
        for address, info in infos.items()
    }
    return json.dumps(out, indent=INDENT, ensure_ascii=False)
