"""serverstats - Main Textual application."""

import argparse
import logging
from queue import Empty, Queue
from urllib.parse import urlsplit

from textual.app import App, ComposeResult
from textual.containers import VerticalScroll
from textual.reactive import reactive
from textual.widgets import Footer, Static

from serverstats.config import EN, LABELS, POLL_RATE, STATS_URL, Labels, get_labels, setup_logging
from serverstats.poller import StatsPoller

logger = logging.getLogger(__name__)


class StatsView(VerticalScroll):
    """Scrollable view holding the current display text."""

    DEFAULT_CSS = """
    StatsView {
        height: 1fr;
        padding: 1 2;
    }
    """

    text: reactive[str] = reactive("", init=False)

    def __init__(self, text: str = "", *args, **kwargs) -> None:
        """Initialize StatsView with its first text."""
        super().__init__(*args, **kwargs)
        self.set_reactive(StatsView.text, text)

    def compose(self) -> ComposeResult:
        """Compose the view."""
        yield Static(self.text, id="stats-text", markup=False)

    def watch_text(self, text: str) -> None:
        """Re-render when new text is published."""
        try:
            self.query_one("#stats-text", Static).update(text)
        except Exception:
            pass  # Widget not mounted yet


class ServerStatsApp(App):
    """Main serverstats application."""

    TITLE = "serverstats"
    SUB_TITLE = "Glances Server Monitor"

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        url: str = STATS_URL,
        labels: Labels = EN,
        poll_rate: float = POLL_RATE,
    ) -> None:
        """Initialize the ServerStatsApp."""
        super().__init__()
        self._labels = labels
        self._update_queue: Queue[str] = Queue()
        self._poller = StatsPoller(self._update_queue, url=url, poll_rate=poll_rate, labels=labels)
        host = urlsplit(url).hostname or url
        self._placeholder = labels.connecting.format(host=host)

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield StatsView(self._placeholder, id="stats-view")
        yield Footer()

    def on_mount(self) -> None:
        """Start the poller when the app is mounted."""
        self._poller.start()
        # Set up a timer to poll the queue for updates
        self.set_interval(0.25, self._check_for_updates)

    def on_unmount(self) -> None:
        """Stop the poller when the screen goes away."""
        self._poller.stop()

    def _check_for_updates(self) -> None:
        """Apply the newest text from the poller, if any."""
        # Drain the queue to get the most recent text
        text = None
        while True:
            try:
                text = self._update_queue.get_nowait()
            except Empty:
                break

        if text is not None:
            self._update_text(text)

    def _update_text(self, text: str) -> None:
        """Publish new display text to the view."""
        try:
            self.query_one("#stats-view", StatsView).text = text
        except Exception:
            logger.exception("Could not update the stats view")

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._poller.stop()
        self.exit()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line options; the endpoint itself is fixed."""
    parser = argparse.ArgumentParser(description="Live stats from a Glances server")
    parser.add_argument(
        "--locale",
        default="en",
        choices=sorted(LABELS),
        help="Language of the display text (default: en)",
    )
    parser.add_argument("--log-file", default=None, help="Log file path (default: ./serverstats.log)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every request")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entry point for serverstats application."""
    args = parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)
    app = ServerStatsApp(labels=get_labels(args.locale))
    app.run()


if __name__ == "__main__":
    main()
