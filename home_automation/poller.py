"""
poller.py

Implements the Poller class that refreshes one device session on a fixed cadence.
The poller never re-enters a session: each cycle runs update() to completion before
the next one is scheduled, and the session's own lock serializes it against commands.
"""

import logging
import threading
from typing import Callable, Optional

from home_automation.devices.sessions.device_session import DeviceSession


class Poller:
    """
    Background loop calling session.update() every `interval` seconds.
    """

    def __init__(self, session: DeviceSession, interval: float,
                 callback: Optional[Callable[[DeviceSession], None]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Args:
            session: The session to refresh.
            interval: Seconds between the end of one cycle and the start of the next.
            callback: Called with the session after every cycle.
            logger: Optional logger instance.
        """
        self.session = session
        self.interval = interval
        self.callback = callback
        self.logger = logger or logging.getLogger(__name__)
        self.cycles = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll_once(self) -> None:
        """
        Runs a single update cycle and notifies the callback.
        """
        self.session.update()
        self.cycles += 1
        if self.callback is None:
            return
        try:
            self.callback(self.session)
        except Exception:
            self.logger.exception(f"Poll callback failed for {self.session.device_type}")

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=f"poller-{self.session.device_type}",
            daemon=True
        )
        self._thread.start()
        self.logger.debug(f"Polling {self.session.device_type} every {self.interval:.3f} s")

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Signals the loop to stop and waits for the running cycle to finish.
        """
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self.logger.debug(f"Stopped polling {self.session.device_type}")

    def _run(self) -> None:
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self.interval)
