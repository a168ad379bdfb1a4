# elevador

A controller for a three-floor elevator. It listens for button presses and
sensor reports as UDP datagrams and answers with commands for lights, doors,
the car and the floor display, also as UDP datagrams.

## Installing

```
pip install .
```

## Running

```
elevador [--host HOST] [--port-in PORT] [--port-out PORT]
```

This starts the controller. By default it listens on UDP port 8888 for
incoming signals and sends commands to port 8889 on 127.0.0.1. Stop it with
Ctrl+C; it prints `Bye! Bye!` on the way out. If the controller's event
queue (5 signals) overflows, it prints the error and exits with status 1.

### Incoming signals (port 8888)

Each datagram holds one name. A byte message is compared up to its first NUL
byte:

| Signal                                          | Meaning                          |
|-------------------------------------------------|----------------------------------|
| `porta1` `porta2` `porta3`                      | door button on a floor           |
| `sobe1` `sobe2` `sobe3`                         | "up" call button on a floor      |
| `desce1` `desce2` `desce3`                      | "down" call button on a floor    |
| `cabine1` `cabine2` `cabine3`                   | floor button inside the car      |
| `PortaAberta1` … `PortaAberta3`                 | door reported open               |
| `PortaFechada1` … `PortaFechada3`               | door reported closed             |
| `Andar1` … `Andar3`                             | car passing a floor              |
| `Parado1` … `Parado3`                           | car stopped at a floor           |

Datagrams that do not match a name are ignored.

### Outgoing commands (port 8889)

- `elevadorsobeon<N>` / `elevadorsobeoff<N>`: up-call light on floor N
- `elevadordesceon<N>` / `elevadordesceoff<N>`: down-call light on floor N
- `elevadorcabineon<N>` / `elevadorcabineoff<N>`: car button light for floor N
- `acionacarro<N>`: move the car towards floor N
- `acionaporta<N>-1`, `acionaporta<N>00`, `acionaporta<N>+1`: open, stop or close the door on floor N
- `elevadordigito<N>`: show floor N on the display

## Using it from Python

```python
from elevador.signals import Signal, parse_signal
from elevador.board import Board, UdpLink
from elevador.elevator import Elevator, State

link = UdpLink(listen_port=None)   # send-only link to 127.0.0.1:8889
car = Elevator(Board(link))
car.start()              # lights off, doors closed, car at floor 1, door opening

car.dispatch(Signal.PORTA_ABERTA1)
car.dispatch(parse_signal(b"cabine3"))
assert car.state is State.DOOR_OPEN
```

- `elevador.signals`: `Signal` (the 24 input signals, with `wire`, `kind` and
  `floor`), `SignalKind`, `parse_signal()` (raises `UnknownSignalError` for
  unknown names) and `floor_of()`.
- `elevador.board`: `UdpLink` (send commands, `receive()` the next known
  signal, usable as a context manager), `Board` (`up_light`, `down_light`,
  `cabin_light`, `drive_car`, `drive_door`, `display`; invalid floors or door
  directions raise `ValueError`) and `LcgRandom`, a small 32-bit linear
  congruential generator.
- `elevador.elevator`: `Elevator`, with states `OPENING_DOOR`, `DOOR_OPEN`,
  `CLOSING_DOOR`, `GOING_UP` and `GOING_DOWN`, per-floor `FloorCalls`, and
  `should_go_up()`, `should_go_down()`, `destination_up()`,
  `destination_down()`.
- `elevador.app`: `Application` wires a link, board and elevator together;
  `post()` queues a signal, `process_pending()` dispatches the queue and
  `run(stop_event)` receives signals and drives the clock until the event is
  set. `main()` is what the `elevador` command starts.

`Elevator.tick()` advances the door timer. With the door open, the timer is
armed for 500 ticks (five seconds at 100 ticks per second) when calls are
pending or a call for another floor is registered; when it runs out the door
starts closing.

## What it does not do

The package is only the controller. It does not simulate the building: the
car, doors, sensors and buttons must be provided by another program that
sends the signals above and acts on the commands.