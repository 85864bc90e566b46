"""Error types raised by the server and its wire protocol."""

from __future__ import annotations

import enum
from typing import Any


class ErrorSeverity(enum.Enum):
    """How an error affects the client connection it happened on."""

    CLIENT_FATAL = "client_fatal"
    NON_CRITICAL = "non_critical"


class SMOError(Exception):
    """Base class of every error raised by the server."""

    message = "Server error"

    def __init__(self, *args: Any) -> None:
        super().__init__(*(args or (self.message,)))


class InvalidIdError(SMOError):
    """A player id that is not known to the lobby."""

    message = "Invalid id"

    def __init__(self, guid: Any) -> None:
        super().__init__(self.message)
        self.guid = guid


class InvalidNameError(SMOError):
    """A player name that is not known to the lobby."""

    message = "Invalid username"

    def __init__(self, name: str) -> None:
        super().__init__(self.message)
        self.name = name


class InvalidConsoleArgError(SMOError):
    """A console command was given an argument it cannot use."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid console command argument: {detail}")
        self.detail = detail


class UdpNotInitializedError(SMOError):
    """A UDP write was attempted before the client's port was known."""

    message = "Udp not initialized"


class ServerShutdownError(SMOError):
    """The server is shutting down."""

    message = "Server being shutdown"


class ClientInitReason(enum.Enum):
    """Why a client could not join."""

    TOO_MANY_PLAYERS = "Too many players already connected"
    BANNED_IP = "Client IP address banned"
    BANNED_ID = "Client ID banned"
    BAD_HANDSHAKE = "Client handshake failed"
    DUPLICATE_CLIENT = "Duplicate name/id found"


class ClientInitError(SMOError):
    """A client failed to complete its initialisation."""

    def __init__(self, reason: ClientInitReason) -> None:
        super().__init__(f"Failed to initialize client: {reason.value}")
        self.reason = reason


class ChannelError(SMOError):
    """An internal message channel failed."""

    message = "Channel error"


class EncodingError(SMOError):
    """Data could not be encoded to or decoded from the wire format."""

    message = "Invalid encoding"


class NotEnoughDataError(EncodingError):
    """The buffer does not yet hold a complete frame."""

    message = "Not enough data"


class ConnectionResetError_(EncodingError):
    """The peer went away in the middle of a frame."""

    message = "Connection reset by peer"


class ConnectionClosedError(EncodingError):
    """The peer closed the connection cleanly."""

    message = "Connection closed by peer"


def severity(error: BaseException) -> ErrorSeverity:
    """Classify an error by whether it ends the client's session."""
    if isinstance(error, (ConnectionClosedError, ConnectionResetError_, ChannelError)):
        return ErrorSeverity.CLIENT_FATAL
    return ErrorSeverity.NON_CRITICAL