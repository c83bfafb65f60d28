"""Structured JSON logging for the demo driver."""

import logging
import sys
import json

class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""
    def format(self, record):
        log_record = {
            "level": record.levelname,
            "time": self.formatTime(record, self.datefmt),
            "message": record.getMessage(),
            "name": record.name
        }
        if isinstance(record.msg, dict):
            log_record.update(record.msg)
            log_record.pop("message", None)
        return json.dumps(log_record)

def get_logger(name="rps_hand.demo"):
    """Get a logger emitting one JSON object per line on stdout."""
    logger = logging.getLogger(name)
    if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger
