"""Background polling engine for serverstats."""

import logging
import threading
from queue import Queue

import requests

from serverstats.config import CONNECT_TIMEOUT, EN, POLL_RATE, STATS_URL, Labels
from serverstats.fetcher import fetch_stats
from serverstats.formatter import format_error, format_stats

logger = logging.getLogger(__name__)


class StatsPoller:
    """
    Poller that fetches the stats endpoint and formats the result.

    Runs in a separate daemon thread and pushes display text to a thread-safe
    Queue once per cycle. Every failure inside a cycle becomes error text; the
    loop only ends when stop() is called.
    """

    def __init__(
        self,
        update_queue: Queue[str],
        url: str = STATS_URL,
        poll_rate: float = POLL_RATE,
        connect_timeout: float = CONNECT_TIMEOUT,
        labels: Labels = EN,
    ) -> None:
        """
        Initialize the StatsPoller.

        Args:
            update_queue: Thread-safe queue to push display text to.
            url: Stats endpoint to poll.
            poll_rate: Delay between cycles (in seconds). Default 1.0s.
            connect_timeout: Connect timeout for each request (in seconds).
            labels: Label table used for the display text.
        """
        self._queue = update_queue
        self._url = url
        self._poll_rate = max(0.1, poll_rate)
        self._connect_timeout = connect_timeout
        self._labels = labels
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    @poll_rate.setter
    def poll_rate(self, value: float) -> None:
        """Set the poll rate."""
        self._poll_rate = max(0.1, value)  # Minimum 0.1 seconds

    @property
    def is_running(self) -> bool:
        """Check if the poller thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the polling thread."""
        if self.is_running:
            return

        # Each thread owns its stop event
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._poll_loop,
            args=(self._stop_event,),
            daemon=True,
            name="StatsPoller",
        )
        self._thread.start()
        logger.info("Polling %s every %.1fs", self._url, self._poll_rate)

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop the polling thread.

        A thread still blocked in a request after the timeout exits on its
        own once the request returns, without publishing.

        Args:
            timeout: How long to wait for thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("Poller thread still busy after %.1fs, leaving it to finish", timeout)
            self._thread = None
            logger.info("Polling stopped")

    def poll_once(self) -> str:
        """Run one fetch and format attempt and return the display text."""
        with requests.Session() as session:
            return self._attempt(session)

    def _attempt(self, session: requests.Session) -> str:
        try:
            body = fetch_stats(session, self._url, self._connect_timeout)
            return format_stats(body, self._labels)
        except Exception as exc:
            logger.warning("Polling %s failed: %s", self._url, exc)
            return format_error(exc, self._labels)

    def _poll_loop(self, stop_event: threading.Event) -> None:
        """Main polling loop running in the background thread."""
        with requests.Session() as session:
            while not stop_event.is_set():
                text = self._attempt(session)

                # Stopped mid-cycle: leave the display alone
                if stop_event.is_set():
                    break
                self._queue.put(text)

                # Wait for poll_rate seconds or until stop is requested
                stop_event.wait(timeout=self._poll_rate)
