import socket

import pytest

from elevador.board import Board, DoorDirection, LcgRandom, UdpLink
from elevador.signals import Signal


class RecordingLink:
    def __init__(self):
        self.sent = []

    def send(self, message):
        self.sent.append(message)


@pytest.fixture
def board_and_link():
    link = RecordingLink()
    return Board(link), link


def test_lcg_first_value_from_default_seed():
    assert LcgRandom().next() == 332934


def test_lcg_reseed_repeats_sequence():
    rnd = LcgRandom(99)
    first = [rnd.next() for _ in range(5)]
    rnd.seed(99)
    assert [rnd.next() for _ in range(5)] == first


def test_lcg_values_fit_24_bits():
    rnd = LcgRandom(7)
    values = [rnd.next() for _ in range(200)]
    assert all(0 <= v < 2**24 for v in values)


def test_lcg_iteration_matches_next():
    a, b = LcgRandom(5), LcgRandom(5)
    it = iter(a)
    assert [next(it) for _ in range(4)] == [b.next() for _ in range(4)]


@pytest.mark.parametrize(
    "method, on, expected",
    [
        ("up_light", True, "elevadorsobeon2"),
        ("up_light", False, "elevadorsobeoff2"),
        ("down_light", True, "elevadordesceon2"),
        ("down_light", False, "elevadordesceoff2"),
        ("cabin_light", True, "elevadorcabineon2"),
        ("cabin_light", False, "elevadorcabineoff2"),
    ],
)
def test_lights(board_and_link, method, on, expected):
    board, link = board_and_link
    getattr(board, method)(2, on)
    assert link.sent == [expected]


def test_drive_car_and_display(board_and_link):
    board, link = board_and_link
    board.drive_car(3)
    board.display(1)
    assert link.sent == ["acionacarro3", "elevadordigito1"]


@pytest.mark.parametrize(
    "floor, direction, expected",
    [
        (1, -1, "acionaporta1-1"),
        (2, 0, "acionaporta200"),
        (3, 1, "acionaporta3+1"),
        (1, DoorDirection.CLOSE, "acionaporta1+1"),
    ],
)
def test_drive_door(board_and_link, floor, direction, expected):
    board, link = board_and_link
    board.drive_door(floor, direction)
    assert link.sent == [expected]


@pytest.mark.parametrize("floor", [0, 4, -1])
def test_invalid_floor(board_and_link, floor):
    board, link = board_and_link
    with pytest.raises(ValueError):
        board.drive_car(floor)
    assert link.sent == []


def test_invalid_door_direction(board_and_link):
    board, link = board_and_link
    with pytest.raises(ValueError):
        board.drive_door(1, 2)
    assert link.sent == []


def test_udp_round_trip_skips_unknown():
    with UdpLink(listen_port=0, listen_host="127.0.0.1", timeout=2.0) as receiver:
        port = receiver.listen_address[1]
        with UdpLink(send_port=port, listen_port=None) as sender:
            sender.send("not-a-signal")
            sender.send("sobe2")
            sender.send(b"Parado3")
            assert receiver.receive() is Signal.SOBE2
            assert receiver.receive() is Signal.PARADO3


def test_board_over_udp_reaches_peer():
    peer = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    peer.bind(("127.0.0.1", 0))
    peer.settimeout(2.0)
    try:
        with UdpLink(send_port=peer.getsockname()[1], listen_port=None) as link:
            Board(link).display(2)
            data, _ = peer.recvfrom(512)
        assert data == b"elevadordigito2"
    finally:
        peer.close()


def test_receive_times_out():
    with UdpLink(listen_port=0, listen_host="127.0.0.1", timeout=0.05) as link:
        with pytest.raises(socket.timeout):
            link.receive()


def test_receive_without_listener_raises():
    with UdpLink(listen_port=None) as link:
        with pytest.raises(RuntimeError):
            link.receive()