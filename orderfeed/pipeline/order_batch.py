"""Order batch: stream the order file through the parser and submitter."""

import logging
import signal
from pathlib import Path

from orderfeed.execution.submitter import OrderSubmitter
from orderfeed.ingest.record_parser import parse_record

logger = logging.getLogger(__name__)

DEFAULT_ORDERS_PATH = "orders.txt"


class OrderFileError(Exception):
    """Raised when the order file cannot be opened or read."""


class OrderBatch:
    """Submits every valid record of an order file, in file order.

    Bad lines are skipped and failed submissions are logged; neither stops
    the batch. SIGINT/SIGTERM let the current line finish, then stop.
    """

    def __init__(
        self,
        submitter: OrderSubmitter,
        orders_path: str | Path = DEFAULT_ORDERS_PATH,
    ):
        self.submitter = submitter
        self.orders_path = Path(orders_path)
        self._running = False

    def run(self) -> bool:
        """Process the whole file. Returns False if stopped by a signal."""
        # Binary mode: lines split on b"\n" only and are decoded one at a
        # time, so a bad byte costs its own line and nothing else.
        try:
            f = open(self.orders_path, "rb")
        except OSError as e:
            raise OrderFileError(f"failed to open file: {e}") from e

        previous = self._setup_signals()
        self._running = True
        try:
            with f:
                lines = enumerate(f, start=1)
                while True:
                    try:
                        line_no, raw = next(lines)
                    except StopIteration:
                        break
                    except OSError as e:
                        raise OrderFileError(f"failed to read file: {e}") from e
                    if not self._running:
                        logger.info("Stopped before line %d", line_no)
                        return False
                    self.process_raw_line(line_no, raw)
        finally:
            self._running = False
            self._restore_signals(previous)
        return True

    def process_raw_line(self, line_no: int, raw: bytes) -> None:
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("line %d: not valid UTF-8: %s", line_no, e)
            return
        self.process_line(line_no, line)

    def process_line(self, line_no: int, line: str) -> None:
        parsed = parse_record(line)
        if parsed.error is not None:
            if not parsed.error.silent:
                logger.warning(
                    "line %d: error parsing %s: %s",
                    line_no, parsed.error.field, parsed.error.message,
                )
            return

        intent = parsed.intent
        print(
            f"FIGI: {intent.instrument_id}, Operation: {intent.direction.value}, "
            f"Price: {intent.price}, Count: {intent.quantity}"
        )
        self.submitter.submit(intent)

    def stop(self) -> None:
        self._running = False

    def _setup_signals(self) -> dict:
        def _stop(signum: int, frame: object) -> None:
            sig_name = signal.Signals(signum).name
            logger.info("Received %s, finishing current order...", sig_name)
            self.stop()

        previous = {}
        for sig in (signal.SIGINT, signal.SIGTERM):
            previous[sig] = signal.signal(sig, _stop)
        return previous

    def _restore_signals(self, previous: dict) -> None:
        for sig, handler in previous.items():
            # None: the old handler was not installed from Python
            if handler is not None:
                signal.signal(sig, handler)
