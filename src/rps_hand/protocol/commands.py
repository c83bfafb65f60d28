"""
Command codes understood by the hand firmware.

Every command is a single signed byte. The numbering is a fixed contract with
the firmware and must not be renumbered:

- 0..2: moves (rock, paper, scissors), also used as neutral poses
- 4: turn wrist
- 5..14: finger relax/curl pairs, thumb first (odd = relax, even = curl)
"""

from __future__ import annotations
from enum import IntEnum
import struct

FINGER_COUNT = 5
FINGER_NAMES = ("thumb", "pointer", "middle", "ring", "pinky")

SIGNED_BYTE_MIN = -128
SIGNED_BYTE_MAX = 127


class Move(IntEnum):
    ROCK = 0
    PAPER = 1
    SCISSORS = 2


class HandCommand(IntEnum):
    TURN_WRIST = 4
    THUMB_RELAX = 5
    THUMB_CURL = 6
    POINTER_RELAX = 7
    POINTER_CURL = 8
    MIDDLE_RELAX = 9
    MIDDLE_CURL = 10
    RING_RELAX = 11
    RING_CURL = 12
    PINKY_RELAX = 13
    PINKY_CURL = 14


def _check_finger(finger: int) -> None:
    if not 0 <= finger < FINGER_COUNT:
        raise ValueError(f"finger index must be in 0..{FINGER_COUNT - 1}, got {finger}")


def relax_code(finger: int) -> int:
    _check_finger(finger)
    return finger * 2 + 5


def curl_code(finger: int) -> int:
    _check_finger(finger)
    return finger * 2 + 6


def previous_finger(finger: int) -> int:
    """Finger before ``finger`` in wave order, wrapping thumb back to pinky."""
    _check_finger(finger)
    return FINGER_COUNT - 1 if finger <= 0 else finger - 1


def to_byte(command: int) -> bytes:
    """Encode ``command`` as exactly one signed byte.

    Raises ValueError for values outside -128..127; those are programming
    errors, never runtime input.
    """
    value = int(command)
    if not SIGNED_BYTE_MIN <= value <= SIGNED_BYTE_MAX:
        raise ValueError(f"command {value} does not fit in a signed byte")
    return struct.pack("b", value)


def describe(command: int) -> str:
    """Human readable name for logs, e.g. ``PAPER`` or ``RING_CURL``."""
    for enum_cls in (Move, HandCommand):
        try:
            return enum_cls(command).name
        except ValueError:
            continue
    return str(int(command))
