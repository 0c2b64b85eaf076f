import socket
import struct
from unittest import mock

import pytest

from echoping.errors import InvalidReplyError, PingError, SocketSetupError
from echoping.models import PingTarget
from echoping.packet import ICMP_ECHO, ICMP_ECHOREPLY, checksum
from echoping.session import PingSession

IDENT = 0x1234
_HEADER = struct.Struct("!BBHHH")
_IP_HEADER = bytes([0x45]) + bytes(19)


def echo_reply(request):
    return _IP_HEADER + bytes([ICMP_ECHOREPLY]) + request[1:]


def unreachable_reply(request):
    return _IP_HEADER + bytes([3]) + request[1:]


class FakeIcmpSocket:
    def __init__(self, inbound, peer, reply=echo_reply):
        self.inbound = inbound
        self.peer = peer
        self.reply = reply
        self.sent = []
        self.options = []
        self.closed = False

    def fileno(self):
        return self.inbound.fileno()

    def settimeout(self, value):
        self.inbound.setblocking(False)

    def setsockopt(self, level, name, value):
        self.options.append((level, name, value))

    def sendto(self, packet, address):
        self.sent.append((packet, address))
        if self.reply is not None:
            self.peer.send(self.reply(packet))

    def recv(self, size):
        return self.inbound.recv(size)

    def close(self):
        self.closed = True


@pytest.fixture
def pair():
    inbound, peer = socket.socketpair(socket.AF_UNIX, socket.SOCK_DGRAM)
    yield inbound, peer
    inbound.close()
    peer.close()


def open_session(fake, **kwargs):
    session = PingSession(PingTarget(ip="127.0.0.1", hostname="localhost"),
                          identifier=IDENT, **kwargs)
    with mock.patch.object(socket, "socket", return_value=fake):
        session.open()
    return session


def test_open_failure_raises_setup_error():
    session = PingSession(PingTarget(ip="127.0.0.1"), identifier=IDENT)
    with mock.patch.object(socket, "socket", side_effect=PermissionError):
        with pytest.raises(SocketSetupError):
            session.open()
    assert session.is_open is False


def test_open_sets_ttl(pair):
    fake = FakeIcmpSocket(*pair)
    session = open_session(fake)
    assert session.is_open
    assert (socket.IPPROTO_IP, socket.IP_TTL, 64) in fake.options


def test_run_without_open_raises():
    session = PingSession(PingTarget(ip="127.0.0.1"), identifier=IDENT)
    with pytest.raises(PingError):
        session.run()


def test_send_ping_builds_request(pair, capsys):
    fake = FakeIcmpSocket(*pair, reply=None)
    session = open_session(fake)
    session.send_ping()
    packet, address = fake.sent[0]
    icmp_type, code, _, ident, seq = _HEADER.unpack_from(packet)
    assert (icmp_type, code, ident, seq) == (ICMP_ECHO, 0, IDENT, 0)
    assert checksum(packet) == 0
    assert address == ("127.0.0.1", 0)
    assert "Packet sent to localhost" in capsys.readouterr().out


def test_receive_ping_records_rtt(pair):
    fake = FakeIcmpSocket(*pair)
    session = open_session(fake)
    session.send_ping()
    session.sequence += 1
    rtt = session.receive_ping()
    assert rtt >= 0
    assert session.stats.packets_received == 1
    assert session.stats.min_rtt == rtt


def test_receive_ping_without_data_returns_none(pair):
    fake = FakeIcmpSocket(*pair)
    session = open_session(fake)
    assert session.receive_ping() is None
    assert session.stats.packets_received == 0


def test_receive_ping_wrong_sequence_rejected(pair):
    fake = FakeIcmpSocket(*pair)
    session = open_session(fake)
    session.send_ping()
    session.sequence = 5
    with pytest.raises(InvalidReplyError):
        session.receive_ping()


def test_run_sends_and_receives(pair, capsys):
    fake = FakeIcmpSocket(*pair)
    session = open_session(fake, count=2, interval=0.01, timeout=5)
    stats = session.run()
    assert stats.packets_sent == 2
    assert stats.packets_received == 1
    assert stats.packets_lost == 0
    assert session.sequence == 2
    assert capsys.readouterr().out.count("Packet sent to localhost") == 2


def test_run_counts_timeouts_as_lost(pair):
    fake = FakeIcmpSocket(*pair, reply=None)
    session = open_session(fake, count=1, interval=0.05, timeout=0.01)
    stats = session.run()
    assert stats.packets_lost == 1
    assert stats.packets_sent == 0
    assert fake.sent == []


def test_run_invalid_reply_raises(pair):
    fake = FakeIcmpSocket(*pair, reply=unreachable_reply)
    session = open_session(fake, count=3, interval=0.01, timeout=5)
    with pytest.raises(InvalidReplyError):
        session.run()


def test_context_manager_closes(pair):
    fake = FakeIcmpSocket(*pair)
    session = PingSession(PingTarget(ip="127.0.0.1"), identifier=IDENT)
    with mock.patch.object(socket, "socket", return_value=fake):
        with session as entered:
            assert entered is session
            assert session.is_open
    assert fake.closed
    assert session.is_open is False
    session.close()
    assert session.is_open is False