"""
Progress Listeners
******************

A :class:`ProgressListener` is notified while a payload is streamed to the device.
Long transactions take many chunks and each chunk is a round trip over USB,
so callers that display progress subclass it and override the hooks they need.
"""

import logging


class ProgressListener(object):
    """Receives notifications about an exchange with the device. Every hook does nothing by default."""

    def on_start(self) -> None:
        """Called once before the first command of an exchange is sent."""
        pass

    def on_chunk_processed(self, chunk: bytes) -> None:
        """
        Called after the device acknowledged a chunk and its checksums were verified.

        :param chunk: The bytes of the chunk that was sent
        """
        pass

    def on_end(self) -> None:
        """Called once after the device returned the final response."""
        pass


class LoggingProgressListener(ProgressListener):
    """Logs the progress of each exchange at debug level."""

    def __init__(self, logger: logging.Logger = logging.getLogger(__name__)) -> None:
        self.logger = logger
        self.sent = 0

    def on_start(self) -> None:
        self.sent = 0
        self.logger.debug("Exchange started")

    def on_chunk_processed(self, chunk: bytes) -> None:
        self.sent += len(chunk)
        self.logger.debug("Chunk of %d bytes acknowledged, %d bytes sent", len(chunk), self.sent)

    def on_end(self) -> None:
        self.logger.debug("Exchange finished after %d bytes", self.sent)
