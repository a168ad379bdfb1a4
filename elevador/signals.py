"""Signals exchanged between the elevator controller and the simulated building."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "Signal",
    "SignalKind",
    "UnknownSignalError",
    "parse_signal",
    "floor_of",
]


class SignalKind(Enum):
    """What a signal reports."""

    DOOR_REQUEST = "PORTA"
    UP_CALL = "SOBE"
    DOWN_CALL = "DESCE"
    CABIN_CALL = "CABINE"
    DOOR_OPENED = "PORTA_ABERTA"
    DOOR_CLOSED = "PORTA_FECHADA"
    FLOOR_REACHED = "ANDAR"
    STOPPED = "PARADO"


class UnknownSignalError(ValueError):
    """Raised when a message does not name any known signal."""


class Signal(Enum):
    """Published input signals, in their published order, keyed by wire name."""

    PORTA1 = "porta1"
    PORTA2 = "porta2"
    PORTA3 = "porta3"
    SOBE1 = "sobe1"
    SOBE2 = "sobe2"
    SOBE3 = "sobe3"
    DESCE1 = "desce1"
    DESCE2 = "desce2"
    DESCE3 = "desce3"
    CABINE1 = "cabine1"
    CABINE2 = "cabine2"
    CABINE3 = "cabine3"
    PORTA_ABERTA1 = "PortaAberta1"
    PORTA_ABERTA2 = "PortaAberta2"
    PORTA_ABERTA3 = "PortaAberta3"
    PORTA_FECHADA1 = "PortaFechada1"
    PORTA_FECHADA2 = "PortaFechada2"
    PORTA_FECHADA3 = "PortaFechada3"
    ANDAR1 = "Andar1"
    ANDAR2 = "Andar2"
    ANDAR3 = "Andar3"
    PARADO1 = "Parado1"
    PARADO2 = "Parado2"
    PARADO3 = "Parado3"

    @property
    def wire(self) -> str:
        """The text that carries this signal over the network."""
        return self.value

    @property
    def kind(self) -> SignalKind:
        return SignalKind(self.name[:-1])

    @property
    def floor(self) -> int:
        """The floor (or door) number the signal belongs to."""
        return int(self.name[-1])

    @classmethod
    def of(cls, kind: SignalKind, floor: int) -> "Signal":
        """Return the signal of the given kind for the given floor."""
        try:
            return cls[f"{kind.value}{floor}"]
        except KeyError:
            raise ValueError(f"no {kind.name} signal for floor {floor!r}") from None


_FLOOR_KINDS = frozenset(
    {
        SignalKind.UP_CALL,
        SignalKind.DOWN_CALL,
        SignalKind.CABIN_CALL,
        SignalKind.FLOOR_REACHED,
        SignalKind.STOPPED,
    }
)


def parse_signal(data: str | bytes) -> Signal:
    """Return the signal named by a received message.

    Byte messages are compared up to their first NUL byte.
    """
    if isinstance(data, (bytes, bytearray)):
        text = bytes(data).split(b"\0", 1)[0].decode("latin-1")
    else:
        text = data
    try:
        return Signal(text)
    except ValueError:
        raise UnknownSignalError(f"unknown signal {text!r}") from None


def floor_of(signal: Signal) -> int:
    """Return the floor a call or car-position signal refers to."""
    if signal.kind not in _FLOOR_KINDS:
        raise ValueError(f"{signal.name} does not refer to a floor")
    return signal.floor