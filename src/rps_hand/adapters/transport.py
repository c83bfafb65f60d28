from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import serial

from ..errors import TransportClosedError, TransportOpenError, TransportWriteError

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Byte channel to the hand: open once, write single bytes, close once."""

    @abstractmethod
    def open(self) -> None: ...

    @abstractmethod
    def write(self, data: bytes) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @property
    @abstractmethod
    def is_open(self) -> bool: ...


class SerialTransport(Transport):
    """pyserial-backed transport for the physical hand."""

    def __init__(self, port: str, baud_rate: int = 9600):
        self.port = port
        self.baud_rate = baud_rate
        self._serial: Optional[serial.Serial] = None

    @property
    def is_open(self) -> bool:
        return self._serial is not None

    def open(self) -> None:
        if self._serial is not None:
            return
        try:
            self._serial = serial.Serial(self.port, self.baud_rate)
        except (serial.SerialException, OSError) as e:
            logger.error(f"Failed to open {self.port} at {self.baud_rate} baud: {e}")
            raise TransportOpenError(self.port, str(e)) from e
        logger.info(f"Opened serial port {self.port} at {self.baud_rate} baud")

    def write(self, data: bytes) -> None:
        if self._serial is None:
            raise TransportClosedError(f"Serial port {self.port} is not open")
        try:
            written = self._serial.write(data)
        except (serial.SerialException, OSError) as e:
            raise TransportWriteError(data[0] if data else -1, str(e)) from e
        if written is not None and written < len(data):
            raise TransportWriteError(data[0], f"wrote {written} of {len(data)} bytes")

    def close(self) -> None:
        if self._serial is None:
            raise TransportClosedError(f"Serial port {self.port} already released")
        try:
            self._serial.close()
        finally:
            self._serial = None
        logger.info(f"Closed serial port {self.port}")


class LoopbackTransport(Transport):
    """In-memory transport that records every byte written (sim mode)."""

    def __init__(self):
        self.written: List[bytes] = []
        self._open = False
        self._released = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        if self._released:
            raise TransportOpenError("loopback", "transport already released")
        self._open = True

    def write(self, data: bytes) -> None:
        if not self._open:
            raise TransportClosedError("Loopback transport is not open")
        self.written.append(bytes(data))
        logger.info(f"[sim] hand <- {list(data)}")

    def close(self) -> None:
        if not self._open:
            raise TransportClosedError("Loopback transport already released")
        self._open = False
        self._released = True

    @property
    def commands(self) -> List[int]:
        """Written bytes decoded back to signed command values."""
        return [int.from_bytes(b, "big", signed=True) for b in self.written]
