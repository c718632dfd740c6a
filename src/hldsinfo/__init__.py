"""hldsinfo package"""

from .decoder import decode_info
from .errors import (
    DialFailed,
    Exhausted,
    FetcherClosed,
    HLDSInfoError,
    MalformedResponse,
    ReadTimeout,
    ResponseError,
    TransportFailure,
    Truncated,
    UnexpectedResponse,
    WriteTimeout,
)
from .fetcher import Fetcher, fetch_all
from .models import EDF, ExtraData, ServerInfo
from .transport import A2S_INFO_REQUEST, deadline_after, exchange, get_info

__version__ = "0.1.0"

__all__ = [
    "A2S_INFO_REQUEST",
    "DialFailed",
    "EDF",
    "Exhausted",
    "ExtraData",
    "Fetcher",
    "FetcherClosed",
    "HLDSInfoError",
    "MalformedResponse",
    "ReadTimeout",
    "ResponseError",
    "ServerInfo",
    "TransportFailure",
    "Truncated",
    "UnexpectedResponse",
    "WriteTimeout",
    "deadline_after",
    "decode_info",
    "exchange",
    "fetch_all",
    "get_info",
]
