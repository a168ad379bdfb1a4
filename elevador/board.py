"""Board support: output commands to the simulated building over UDP."""

from __future__ import annotations

import socket
from enum import IntEnum
from typing import Iterator, Protocol

from .signals import Signal, UnknownSignalError, parse_signal

__all__ = [
    "TICKS_PER_SEC",
    "BUFLEN",
    "PORT_IN",
    "PORT_OUT",
    "DEFAULT_HOST",
    "FLOORS",
    "DoorDirection",
    "LcgRandom",
    "UdpLink",
    "Board",
]

TICKS_PER_SEC = 100
BUFLEN = 512
PORT_IN = 8888
PORT_OUT = 8889
DEFAULT_HOST = "127.0.0.1"
FLOORS = (1, 2, 3)

_MASK32 = 0xFFFFFFFF
_LCG_MULTIPLIER = 3 * 7 * 11 * 13 * 23


class DoorDirection(IntEnum):
    OPEN = -1
    STOP = 0
    CLOSE = 1


_DOOR_SUFFIX = {
    DoorDirection.OPEN: "-1",
    DoorDirection.STOP: "00",
    DoorDirection.CLOSE: "+1",
}


class LcgRandom:
    """Cheap 32-bit linear congruential pseudo-random generator."""

    def __init__(self, seed: int = 1234) -> None:
        self._state = 0
        self.seed(seed)

    def seed(self, value: int) -> None:
        self._state = value & _MASK32

    def next(self) -> int:
        """Advance the generator and return a 24-bit value."""
        self._state = (self._state * _LCG_MULTIPLIER) & _MASK32
        return self._state >> 8

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next()


class UdpLink:
    """Datagram link: sends commands out and receives input signals."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        send_port: int = PORT_OUT,
        listen_port: int | None = PORT_IN,
        listen_host: str = "",
        timeout: float | None = None,
    ) -> None:
        self._target = (host, send_port)
        self._sender = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        self._listener: socket.socket | None = None
        if listen_port is not None:
            listener = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
            try:
                listener.bind((listen_host, listen_port))
            except OSError:
                listener.close()
                self._sender.close()
                raise
            listener.settimeout(timeout)
            self._listener = listener

    @property
    def listen_address(self) -> tuple[str, int]:
        if self._listener is None:
            raise RuntimeError("link is not listening")
        return self._listener.getsockname()

    def send(self, message: str | bytes) -> None:
        data = message.encode("ascii") if isinstance(message, str) else bytes(message)
        self._sender.sendto(data, self._target)

    def receive(self) -> Signal:
        """Block until a datagram naming a known signal arrives; others are ignored."""
        if self._listener is None:
            raise RuntimeError("link is not listening")
        while True:
            data, _ = self._listener.recvfrom(BUFLEN)
            try:
                return parse_signal(data)
            except UnknownSignalError:
                continue

    def __iter__(self) -> Iterator[Signal]:
        while True:
            yield self.receive()

    def close(self) -> None:
        self._sender.close()
        if self._listener is not None:
            self._listener.close()

    def __enter__(self) -> "UdpLink":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class _Sender(Protocol):
    def send(self, message: str) -> None: ...


def _check_floor(floor: int) -> int:
    if floor not in FLOORS:
        raise ValueError(f"invalid floor {floor!r}")
    return floor


class Board:
    """Lamps, car, doors and floor display of the building."""

    def __init__(self, link: _Sender) -> None:
        self._link = link

    def _emit(self, message: str) -> None:
        self._link.send(message)

    def up_light(self, floor: int, on: bool) -> None:
        state = "on" if on else "off"
        self._emit(f"elevadorsobe{state}{_check_floor(floor)}")

    def down_light(self, floor: int, on: bool) -> None:
        state = "on" if on else "off"
        self._emit(f"elevadordesce{state}{_check_floor(floor)}")

    def cabin_light(self, floor: int, on: bool) -> None:
        state = "on" if on else "off"
        self._emit(f"elevadorcabine{state}{_check_floor(floor)}")

    def drive_car(self, floor: int) -> None:
        self._emit(f"acionacarro{_check_floor(floor)}")

    def drive_door(self, floor: int, direction: int) -> None:
        try:
            suffix = _DOOR_SUFFIX[DoorDirection(direction)]
        except ValueError:
            raise ValueError(f"invalid door direction {direction!r}") from None
        self._emit(f"acionaporta{_check_floor(floor)}{suffix}")

    def display(self, floor: int) -> None:
        self._emit(f"elevadordigito{_check_floor(floor)}")