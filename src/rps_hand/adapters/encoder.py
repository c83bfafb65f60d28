from __future__ import annotations
import logging

from ..errors import HandError
from ..obs.metrics import COMMANDS_SENT, TRANSPORT_ERRORS
from ..protocol.commands import describe, to_byte
from .transport import Transport

logger = logging.getLogger(__name__)


class CommandEncoder:
    """Writes one signed byte per command to the transport it owns.

    No buffering and no acknowledgement: ``send`` returns once the byte has
    been handed to the transport. Write failures propagate to the caller.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    def send(self, command: int) -> None:
        payload = to_byte(command)
        logger.debug(f"Sending {int(command)} ({describe(command)})")
        try:
            self.transport.write(payload)
        except HandError as e:
            TRANSPORT_ERRORS.inc()
            logger.error(f"Send of {int(command)} failed: {e}")
            raise
        COMMANDS_SENT.labels(command=describe(command)).inc()
