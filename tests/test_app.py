import queue
import threading
import time

import pytest

from elevador.app import QUEUE_SIZE, Application, QueueOverflowError, main
from elevador.elevator import State
from elevador.signals import Signal


class FakeLink:
    def __init__(self):
        self.sent = []
        self.incoming = queue.Queue()
        self.closed = False

    def send(self, message):
        self.sent.append(message)

    def receive(self):
        if self.closed:
            raise OSError("closed")
        try:
            return self.incoming.get(timeout=0.02)
        except queue.Empty:
            raise TimeoutError from None


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_application_starts_elevator():
    link = FakeLink()
    app = Application(link)
    assert app.elevator.state is State.OPENING_DOOR
    assert link.sent[:2] == ["acionacarro1", "elevadordigito1"]


def test_post_then_process_pending():
    app = Application(FakeLink())
    app.post(Signal.PORTA_ABERTA1)
    assert app.process_pending() == 1
    assert app.elevator.state is State.DOOR_OPEN
    assert app.process_pending() == 0


def test_queue_overflow_raises():
    app = Application(FakeLink())
    for _ in range(QUEUE_SIZE):
        app.post(Signal.SOBE2)
    with pytest.raises(QueueOverflowError):
        app.post(Signal.SOBE2)
    assert app.process_pending() == QUEUE_SIZE


def test_run_processes_received_signals_and_ticks():
    link = FakeLink()
    app = Application(link, ticks_per_sec=2000)
    stop = threading.Event()
    runner = threading.Thread(target=app.run, args=(stop,))
    runner.start()
    try:
        link.incoming.put(Signal.PORTA_ABERTA1)
        link.incoming.put(Signal.CABINE2)
        reached = wait_for(lambda: app.elevator.state is State.CLOSING_DOOR)
    finally:
        stop.set()
        runner.join(timeout=5.0)
    assert reached is True
    assert app.elevator.floors[2].destination is True
    assert runner.is_alive() is False


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0