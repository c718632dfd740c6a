"""Exception hierarchy for server info queries.

Brief:
  Every failure raised by the cursor, decoder and transport derives from
  HLDSInfoError so callers of the single-address entry point can catch one
  base class, while the batch fetcher can isolate them per address.
"""


class HLDSInfoError(Exception):
    """Base class for all query failures."""

    pass


class TransportFailure(HLDSInfoError):
    """
    Brief: Socket open/send/receive error.

    Inputs:
    - message: description

    Outputs:
    - Exception instance
    """

    pass


class DialFailed(TransportFailure):
    """Address could not be parsed, resolved, or a socket could not be opened."""

    pass


class WriteTimeout(TransportFailure):
    """Deadline passed before the query payload was sent."""

    pass


class ReadTimeout(TransportFailure):
    """Deadline passed before a reply datagram arrived."""

    pass


class ResponseError(HLDSInfoError):
    """Reply datagram could not be decoded."""

    pass


class MalformedResponse(ResponseError):
    """Reply magic or header tag did not match an info response."""

    pass


# Name used by the original client library.
UnexpectedResponse = MalformedResponse


class Truncated(ResponseError):
    """Reply ended in the middle of a field."""

    pass


class Exhausted(Truncated):
    """A cursor read went past the end of its buffer."""

    pass


class FetcherClosed(RuntimeError):
    """submit() was called after the fetcher stopped accepting addresses."""

    pass
