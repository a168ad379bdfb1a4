"""Application runner: wires the link, board and elevator together."""

from __future__ import annotations

import argparse
import queue
import sys
import threading
import time
from typing import Optional, Protocol, Sequence

from .board import DEFAULT_HOST, PORT_IN, PORT_OUT, TICKS_PER_SEC, Board, UdpLink
from .elevator import Elevator
from .signals import Signal

__all__ = ["QUEUE_SIZE", "QueueOverflowError", "Application", "main"]

QUEUE_SIZE = 5


class QueueOverflowError(RuntimeError):
    """Raised when the elevator's event queue is full."""


class _Link(Protocol):
    def send(self, message: str) -> None: ...

    def receive(self) -> Signal: ...


class Application:
    """Runs the elevator controller against a building link."""

    def __init__(
        self,
        link: _Link,
        *,
        queue_size: int = QUEUE_SIZE,
        ticks_per_sec: int = TICKS_PER_SEC,
    ) -> None:
        self.link = link
        self.board = Board(link)
        self.elevator = Elevator(self.board)
        self.ticks_per_sec = ticks_per_sec
        self._queue: "queue.Queue[Signal]" = queue.Queue(maxsize=queue_size)
        self._error: Optional[BaseException] = None
        self.elevator.start()

    def post(self, signal: Signal) -> None:
        """Queue a signal for the elevator."""
        try:
            self._queue.put_nowait(signal)
        except queue.Full:
            raise QueueOverflowError(f"event queue full, dropped {signal.name}") from None

    def process_pending(self) -> int:
        """Dispatch every queued signal; return how many were processed."""
        count = 0
        while True:
            try:
                signal = self._queue.get_nowait()
            except queue.Empty:
                return count
            self.elevator.dispatch(signal)
            count += 1

    def _receive_loop(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                signal = self.link.receive()
            except TimeoutError:
                continue
            except OSError:
                return
            try:
                self.post(signal)
            except QueueOverflowError as exc:
                self._error = exc
                stop_event.set()
                return

    def run(self, stop_event: threading.Event) -> None:
        """Process incoming signals and clock ticks until stop_event is set."""
        receiver = threading.Thread(
            target=self._receive_loop, args=(stop_event,), daemon=True
        )
        receiver.start()
        period = 1.0 / self.ticks_per_sec
        next_tick = time.monotonic() + period
        while not stop_event.is_set():
            now = time.monotonic()
            if now >= next_tick:
                self.elevator.tick()
                next_tick += period
                continue
            try:
                signal = self._queue.get(timeout=next_tick - now)
            except queue.Empty:
                continue
            self.elevator.dispatch(signal)
        receiver.join(timeout=1.0)
        if self._error is not None:
            raise self._error


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="elevador", description="Three-floor elevator controller over UDP."
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="address of the building")
    parser.add_argument("--port-in", type=int, default=PORT_IN, help="port to listen on")
    parser.add_argument("--port-out", type=int, default=PORT_OUT, help="port to send to")
    args = parser.parse_args(argv)

    status = 0
    stop = threading.Event()
    with UdpLink(args.host, args.port_out, args.port_in, timeout=0.2) as link:
        app = Application(link)
        try:
            app.run(stop)
        except KeyboardInterrupt:
            stop.set()
        except QueueOverflowError as exc:
            print(exc, file=sys.stderr)
            status = 1
    print("\nBye! Bye!")
    return status


if __name__ == "__main__":
    sys.exit(main())