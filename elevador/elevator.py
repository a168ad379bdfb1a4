"""The elevator controller: a flat state machine driven by building signals."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from .board import FLOORS, TICKS_PER_SEC, Board, DoorDirection
from .signals import Signal, SignalKind, floor_of

__all__ = ["DOOR_TIMEOUT", "State", "FloorCalls", "Elevator"]

DOOR_TIMEOUT = 5 * TICKS_PER_SEC

_CALL_KINDS = frozenset(
    {SignalKind.UP_CALL, SignalKind.DOWN_CALL, SignalKind.CABIN_CALL}
)


class State(Enum):
    """States of the elevator controller."""

    OPENING_DOOR = "opening door"
    DOOR_OPEN = "door open"
    CLOSING_DOOR = "closing door"
    GOING_UP = "going up"
    GOING_DOWN = "going down"


@dataclass
class FloorCalls:
    """Pending requests for one floor."""

    up: bool = False
    down: bool = False
    destination: bool = False


class Elevator:
    """Controller of a three-floor elevator car."""

    def __init__(self, board: Board) -> None:
        self._board = board
        self.position = 1
        self.going_up = True
        self.going_down = False
        self.floors: Dict[int, FloorCalls] = {floor: FloorCalls() for floor in FLOORS}
        self._state: Optional[State] = None
        self._timer = 0
        self._handlers: Dict[State, Callable[[Signal], Optional[State]]] = {
            State.OPENING_DOOR: self._on_opening_door,
            State.DOOR_OPEN: self._on_door_open,
            State.CLOSING_DOOR: self._on_closing_door,
            State.GOING_UP: self._on_going_up,
            State.GOING_DOWN: self._on_going_down,
        }
        self._entries: Dict[State, Callable[[], None]] = {
            State.OPENING_DOOR: self._enter_opening_door,
            State.DOOR_OPEN: self._enter_door_open,
            State.CLOSING_DOOR: self._enter_closing_door,
            State.GOING_UP: self._enter_going_up,
            State.GOING_DOWN: self._enter_going_down,
        }

    @property
    def state(self) -> Optional[State]:
        """The current state, or None before start()."""
        return self._state

    @property
    def door_timer(self) -> int:
        """Ticks left before the door timeout fires; 0 when not armed."""
        return self._timer

    # -- lifecycle -------------------------------------------------------

    def start(self) -> None:
        """Reset the building outputs and take the initial transition."""
        if self._state is not None:
            raise RuntimeError("elevator already started")
        self._board.drive_car(1)
        self._board.display(1)
        for floor in FLOORS:
            self._clear_up(floor)
            self._clear_down(floor)
            self._clear_cabin(floor)
            self._board.drive_door(floor, DoorDirection.CLOSE)
        self._enter(State.OPENING_DOOR)

    def dispatch(self, signal: Signal) -> None:
        """Process one input signal in the current state."""
        if self._state is None:
            raise RuntimeError("elevator not started")
        target = self._handlers[self._state](signal)
        if target is not None:
            self._enter(target)

    def tick(self) -> None:
        """Advance the door timer by one clock tick."""
        if self._timer == 0:
            return
        self._timer -= 1
        if self._timer == 0 and self._state is State.DOOR_OPEN:
            self._enter(State.CLOSING_DOOR)

    # -- decisions -------------------------------------------------------

    def destination_up(self) -> int:
        """Next floor to stop at when travelling up."""
        f2, f3 = self.floors[2], self.floors[3]
        if (f2.destination or f2.up) and self.position <= 2:
            return 2
        if (f3.destination or f3.up) and self.position <= 3:
            return 3
        return self.position

    def destination_down(self) -> int:
        """Next floor to stop at when travelling down."""
        f1, f2 = self.floors[1], self.floors[2]
        if (f2.destination or f2.down) and self.position >= 2:
            return 2
        if (f1.destination or f1.down) and self.position >= 1:
            return 1
        return self.position

    def should_go_up(self) -> bool:
        if self.going_down or self.destination_up() == self.position:
            return False
        f2, f3 = self.floors[2], self.floors[3]
        if self.position == 1:
            return f2.destination or f3.destination or f2.up or f3.up
        if self.position == 2:
            return f3.destination or f3.up
        return False

    def should_go_down(self) -> bool:
        if self.going_up or self.destination_down() == self.position:
            return False
        f1, f2 = self.floors[1], self.floors[2]
        if self.position == 2:
            return f1.destination or f1.down
        if self.position == 3:
            return f1.destination or f2.destination or f2.down or f1.down
        return False

    def _has_cabin_call(self) -> bool:
        return any(calls.destination for calls in self.floors.values())

    def _has_floor_call(self) -> bool:
        return any(calls.up or calls.down for calls in self.floors.values())

    # -- outputs ---------------------------------------------------------

    def _clear_up(self, floor: int) -> None:
        self.floors[floor].up = False
        self._board.up_light(floor, False)

    def _clear_down(self, floor: int) -> None:
        self.floors[floor].down = False
        self._board.down_light(floor, False)

    def _clear_cabin(self, floor: int) -> None:
        self.floors[floor].destination = False
        self._board.cabin_light(floor, False)

    def _register(self, signal: Signal) -> None:
        floor = signal.floor
        calls = self.floors[floor]
        if signal.kind is SignalKind.UP_CALL:
            if not calls.up:
                self._board.up_light(floor, True)
                calls.up = True
        elif signal.kind is SignalKind.DOWN_CALL:
            if not calls.down:
                self._board.down_light(floor, True)
                calls.down = True
        elif signal.kind is SignalKind.CABIN_CALL:
            self._board.cabin_light(floor, True)
            calls.destination = True

    def _update_position(self, floor: int) -> None:
        self.position = floor
        self._board.display(floor)

    def _arm_door_timer(self) -> None:
        if self._timer == 0:
            self._timer = DOOR_TIMEOUT

    def _promote_floor_calls(self) -> None:
        """Turn a pending landing call into a destination before leaving."""
        f1, f2, f3 = self.floors[1], self.floors[2], self.floors[3]
        if self.position == 3:
            if f2.down:
                f2.destination = True
            elif f1.down or f1.up:
                f1.destination = True
            elif f2.up:
                f2.destination = True
            return
        if self.position == 1:
            if f2.up:
                f2.destination = True
                return
            if f3.up or f3.down:
                f3.destination = True
                return
            if f2.down:
                f2.destination = True
                return
        # Floor 2, and floor 1 when nothing above matched.
        if self.going_up:
            if f3.up or f3.down:
                f3.destination = True
            elif f1.up or f1.down:
                f1.up = True
        else:
            if f1.up or f1.down:
                f1.up = True
            elif f3.up or f3.down:
                f3.destination = True

    # -- transitions and entry actions ----------------------------------

    def _enter(self, state: State) -> None:
        self._state = state
        self._entries[state]()

    def _enter_opening_door(self) -> None:
        pos = self.position
        self._board.drive_door(pos, DoorDirection.OPEN)
        self._clear_cabin(pos)
        if pos == 2:
            calls = self.floors[2]
            if self.going_up:
                if calls.up:
                    self._clear_up(pos)
                elif not self._has_cabin_call():
                    self._clear_down(pos)
            else:
                if calls.down:
                    self._clear_down(pos)
                elif not self._has_cabin_call():
                    self._clear_up(pos)
            return
        self._clear_cabin(pos)
        self._clear_up(pos)
        self._clear_down(pos)
        self.going_up = pos == 1
        self.going_down = pos != 1

    def _enter_door_open(self) -> None:
        if self.going_up and not self.should_go_up():
            self.going_up = False
        if self.going_down and not self.should_go_down():
            self.going_down = False
        if self._has_cabin_call() or self._has_floor_call():
            self._arm_door_timer()

    def _enter_closing_door(self) -> None:
        self._board.drive_door(self.position, DoorDirection.CLOSE)
        if not self._has_cabin_call() or self._has_floor_call():
            self._promote_floor_calls()

    def _enter_going_up(self) -> None:
        self.going_up = True
        self.going_down = False
        self._board.drive_car(self.destination_up())

    def _enter_going_down(self) -> None:
        self.going_down = True
        self.going_up = False
        self._board.drive_car(self.destination_down())

    # -- state handlers --------------------------------------------------

    def _on_opening_door(self, signal: Signal) -> Optional[State]:
        if signal.kind is SignalKind.DOOR_OPENED:
            return State.DOOR_OPEN
        if signal.kind in _CALL_KINDS and floor_of(signal) != self.position:
            self._register(signal)
        return None

    def _on_door_open(self, signal: Signal) -> Optional[State]:
        if signal.kind in _CALL_KINDS and floor_of(signal) != self.position:
            self._register(signal)
            self._arm_door_timer()
        return None

    def _on_closing_door(self, signal: Signal) -> Optional[State]:
        kind = signal.kind
        if kind is SignalKind.DOOR_CLOSED:
            if self.should_go_up():
                return State.GOING_UP
            if self.should_go_down():
                return State.GOING_DOWN
            return State.OPENING_DOOR
        if kind is SignalKind.DOOR_REQUEST:
            return State.OPENING_DOOR
        if kind in _CALL_KINDS:
            if floor_of(signal) == self.position:
                return State.OPENING_DOOR
            self._register(signal)
        return None

    def _on_going_up(self, signal: Signal) -> Optional[State]:
        kind = signal.kind
        if kind is SignalKind.FLOOR_REACHED:
            self._update_position(floor_of(signal))
        elif kind is SignalKind.STOPPED:
            self._update_position(floor_of(signal))
            return State.OPENING_DOOR
        elif kind in (SignalKind.UP_CALL, SignalKind.CABIN_CALL):
            self._register(signal)
            self._board.drive_car(self.destination_up())
        elif kind is SignalKind.DOWN_CALL:
            self._register(signal)
        return None

    def _on_going_down(self, signal: Signal) -> Optional[State]:
        kind = signal.kind
        if kind is SignalKind.FLOOR_REACHED:
            self._update_position(floor_of(signal))
        elif kind is SignalKind.STOPPED:
            self._update_position(floor_of(signal))
            return State.OPENING_DOOR
        elif kind in (SignalKind.DOWN_CALL, SignalKind.CABIN_CALL):
            self._register(signal)
            self._board.drive_car(self.destination_down())
        elif kind is SignalKind.UP_CALL:
            self._register(signal)
        return None