"""SIGHUP-driven configuration reload flag.

The signal handler only sets a flag; the reload itself happens on the
next request (see :func:`sslstatus.app.factory.create_app`) so that it
runs in a normal thread context.
"""

from __future__ import annotations

import logging
import signal
import threading

log = logging.getLogger(__name__)


class ReloadSignal:
    """Thread-safe "reload requested" flag set by SIGHUP."""

    def __init__(self) -> None:
        self._reload_flag = threading.Event()

    @property
    def reload_requested(self) -> bool:
        """True if a SIGHUP was received and reload has not been consumed."""
        return self._reload_flag.is_set()

    def request_reload(self) -> None:
        """Flag a reload without a signal (programmatic trigger)."""
        self._reload_flag.set()

    def consume_reload(self) -> None:
        """Clear the reload flag after handling it."""
        self._reload_flag.clear()

    def register(self) -> None:
        """Register the SIGHUP handler.

        Must be called from the main thread.  A no-op where SIGHUP does
        not exist.
        """
        if not hasattr(signal, "SIGHUP"):
            log.debug("SIGHUP not available on this platform")
            return
        try:
            signal.signal(signal.SIGHUP, self._reload_handler)
            log.info("SIGHUP handler registered for config reload")
        except (ValueError, OSError):
            log.debug("Could not register SIGHUP handler (not main thread)")

    def _reload_handler(self, signum: int, frame) -> None:
        log.info("Received SIGHUP, flagging config reload")
        self._reload_flag.set()
