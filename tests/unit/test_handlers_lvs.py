import socket

import pytest

from globaldefs.config.schema import NotifyScript
from globaldefs.core.builder import ConfigBuilder
from globaldefs.core.handlers import lvs_timeouts_handler
from globaldefs.core.tokens import TokenLine


def test_lvs_timeouts_order_independent(apply) -> None:
    first = apply("lvs_timeouts", "tcp", "10", "udp", "5").config.lvs

    other = ConfigBuilder()
    lvs_timeouts_handler(TokenLine.of("lvs_timeouts", "udp", "5", "tcp", "10"), other)

    assert first == other.config.lvs
    assert (first.tcp_timeout, first.udp_timeout, first.tcpfin_timeout) == (10, 5, 0)


def test_lvs_timeouts_ranges(apply, messages) -> None:
    builder = apply("lvs_timeouts", "tcp", "0", "tcpfin", "0", "udp", "2678401")
    lvs = builder.config.lvs
    assert lvs.tcp_timeout == 0
    assert lvs.tcpfin_timeout == 0
    assert lvs.udp_timeout == 0
    assert messages() == [
        "Invalid lvs_timeouts tcpfin (0) - ignoring",
        "Invalid lvs_timeouts udp (2678401) - ignoring",
    ]

    apply("lvs_timeouts", "udp", "2678400")
    assert lvs.udp_timeout == 2678400


def test_lvs_timeouts_requires_option(apply, messages) -> None:
    apply("lvs_timeouts", "tcp")
    assert messages() == ["lvs_timeouts requires at least one option"]


def test_sync_daemon_bad_id_keeps_leading_arguments(apply, messages) -> None:
    builder = apply("lvs_sync_daemon", "eth0", "VI_1", "id", "9999")
    syncd = builder.config.lvs.sync_daemon

    assert syncd.ifname == "eth0"
    assert syncd.vrrp_name == "VI_1"
    assert syncd.syncid is None
    assert messages() == ["Invalid lvs_sync_daemon id (9999) - defaulting to vrid"]


def test_sync_daemon_all_attributes(apply) -> None:
    builder = apply(
        "lvs_sync_daemon",
        "eth1",
        "VI_2",
        "ttl",
        "4",
        "id",
        "5",
        "maxlen",
        "1400",
        "port",
        "9000",
        "group",
        "239.1.1.1",
    )
    syncd = builder.config.lvs.sync_daemon

    assert (syncd.syncid, syncd.sync_maxlen, syncd.mcast_port, syncd.mcast_ttl) == (5, 1400, 9000, 4)
    assert syncd.mcast_group.family == socket.AF_INET
    assert syncd.mcast_group.host == "239.1.1.1"
    assert builder.diagnostics == []


def test_sync_daemon_legacy_positional_id(apply, messages) -> None:
    builder = apply("lvs_sync_daemon", "eth0", "VI_1", "12", "port", "9001")
    syncd = builder.config.lvs.sync_daemon

    assert syncd.syncid == 12
    assert syncd.mcast_port == 9001
    assert messages() == ['Please use keyword "id" before lvs_sync_daemon syncid value']


def test_sync_daemon_legacy_id_out_of_range(apply, messages) -> None:
    builder = apply("lvs_sync_daemon", "eth0", "VI_1", "300")
    assert builder.config.lvs.sync_daemon.syncid is None
    assert messages() == ["Invalid lvs_sync_daemon id (300) - defaulting to vrid"]


def test_sync_daemon_unicast_group(apply, messages) -> None:
    builder = apply("lvs_sync_daemon", "eth0", "VI_1", "group", "192.0.2.1")
    assert builder.config.lvs.sync_daemon.mcast_group is None
    assert messages() == ["lvs_sync_daemon group address 192.0.2.1 is not multicast - ignoring"]


def test_sync_daemon_first_wins(apply, messages) -> None:
    builder = apply("lvs_sync_daemon", "eth0", "VI_1")
    apply("lvs_sync_daemon", "eth1", "VI_2", "id", "7")

    syncd = builder.config.lvs.sync_daemon
    assert (syncd.ifname, syncd.vrrp_name, syncd.syncid) == ("eth0", "VI_1", None)
    assert messages() == ["lvs_sync_daemon has already been specified as eth0 VI_1 - ignoring"]


def test_sync_daemon_interface_capacity(apply, messages) -> None:
    builder = apply("lvs_sync_daemon", "i" * 16, "VI_1")
    assert builder.config.lvs.sync_daemon.ifname is None
    assert len(messages()) == 1


def test_lvs_flush_and_fifo(apply, messages) -> None:
    builder = apply("lvs_flush")
    apply("lvs_notify_fifo", "/run/lvs.fifo")
    apply("lvs_notify_fifo_script", "/usr/local/bin/lvs_fifo")
    apply("lvs_notify_fifo_script", "/usr/local/bin/other")

    lvs = builder.config.lvs
    assert lvs.flush is True
    assert lvs.notify_fifo.name == "/run/lvs.fifo"
    assert lvs.notify_fifo.script == NotifyScript(name="lvs_notify_fifo", command=("/usr/local/bin/lvs_fifo",))
    assert messages() == ["lvs_notify_fifo_script already specified - ignoring /usr/local/bin/other"]


def test_lvs_netlink_buffers(apply) -> None:
    builder = apply("lvs_netlink_cmd_rcv_bufs", "4194304")
    apply("lvs_netlink_cmd_rcv_bufs_force", "on")
    assert builder.config.lvs.netlink_cmd_rcv_bufs == 4194304
    assert builder.config.lvs.netlink_cmd_rcv_bufs_force is True


def test_sync_daemon_group_name_prefers_multicast_answer(apply, monkeypatch: pytest.MonkeyPatch) -> None:
    def _getaddrinfo(host, port, family=socket.AF_UNSPEC, type=0, proto=0, flags=0):
        if family == socket.AF_INET:
            return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("192.0.2.40", 0))]
        return [(socket.AF_INET6, socket.SOCK_STREAM, 6, "", ("ff05::8848", 0, 0, 0))]

    monkeypatch.setattr(socket, "getaddrinfo", _getaddrinfo)
    builder = apply("lvs_sync_daemon", "eth0", "VI_1", "group", "syncd-group.example")

    assert builder.config.lvs.sync_daemon.mcast_group.family == socket.AF_INET6
    assert builder.config.lvs.sync_daemon.mcast_group.host == "ff05::8848"
    assert builder.diagnostics == []
