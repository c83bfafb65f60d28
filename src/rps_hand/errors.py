from __future__ import annotations


class HandError(Exception):
    """Base class for hand output failures surfaced to the game engine."""


class TransportOpenError(HandError):
    def __init__(self, port: str, detail: str):
        super().__init__(f"Could not open serial port {port}: {detail}")
        self.port = port
        self.detail = detail


class TransportWriteError(HandError):
    def __init__(self, command: int, detail: str):
        super().__init__(f"Could not write command {command}: {detail}")
        self.command = command
        self.detail = detail


class TransportClosedError(HandError):
    """Raised when the transport is used after it has been released."""
