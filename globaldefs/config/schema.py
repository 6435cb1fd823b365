"""Dataclasses for the global configuration record and tool settings."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
import ipaddress
import socket
from typing import Any


TIMER_HZ = 1_000_000
SMTP_DEFAULT_PORT = 25
LVS_SYNCD_DEFAULT_PORT = 8848

DEFAULT_IPSET_ADDRESS = "keepalived"
DEFAULT_IPSET_ADDRESS6 = "keepalived6"
DEFAULT_IPSET_ADDRESS_IFACE6 = "keepalived_if6"


@dataclass(frozen=True, slots=True)
class SocketAddress:
    family: int
    host: str
    port: int = 0

    @property
    def is_multicast(self) -> bool:
        address = ipaddress.ip_address(self.host.split("%", 1)[0])
        if self.family == socket.AF_INET:
            return address.version == 4 and address.is_multicast
        if self.family == socket.AF_INET6:
            return address.version == 6 and address.is_multicast
        return False

    def __str__(self) -> str:
        if self.family == socket.AF_INET6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True, slots=True)
class NotifyScript:
    name: str
    command: tuple[str, ...]


@dataclass(slots=True)
class NotifyFifoConfig:
    name: str | None = None
    script: NotifyScript | None = None


@dataclass(slots=True)
class AlertConfig:
    router_id: str | None = None
    email_from: str | None = None
    emails: list[str] = field(default_factory=list)
    smtp_server: SocketAddress | None = None
    smtp_helo_name: str | None = None
    smtp_connect_timeout: int = 30 * TIMER_HZ
    smtp_alert: bool | None = None
    smtp_alert_vrrp: bool | None = None
    smtp_alert_checker: bool | None = None
    no_email_faults: bool = False


@dataclass(slots=True)
class LvsSyncDaemonConfig:
    ifname: str | None = None
    vrrp_name: str | None = None
    syncid: int | None = None
    sync_maxlen: int = 0
    mcast_port: int = LVS_SYNCD_DEFAULT_PORT
    mcast_ttl: int = 1
    mcast_group: SocketAddress | None = None


@dataclass(slots=True)
class LvsConfig:
    tcp_timeout: int = 0
    tcpfin_timeout: int = 0
    udp_timeout: int = 0
    flush: bool = False
    sync_daemon: LvsSyncDaemonConfig = field(default_factory=LvsSyncDaemonConfig)
    notify_fifo: NotifyFifoConfig = field(default_factory=NotifyFifoConfig)
    netlink_cmd_rcv_bufs: int = 0
    netlink_cmd_rcv_bufs_force: bool = False
    netlink_monitor_rcv_bufs: int = 0
    netlink_monitor_rcv_bufs_force: bool = False


@dataclass(slots=True)
class VrrpConfig:
    mcast_group4: SocketAddress | None = None
    mcast_group6: SocketAddress | None = None
    garp_delay: int = 5 * TIMER_HZ
    garp_rep: int = 5
    garp_refresh: int = 0
    garp_refresh_rep: int = 1
    garp_lower_prio_delay: int | None = None
    garp_lower_prio_rep: int | None = None
    garp_interval: int = 0
    gna_interval: int = 0
    lower_prio_no_advert: bool = False
    higher_prio_send_advert: bool = False
    version: int = 2
    iptables_inchain: str = ""
    iptables_outchain: str = ""
    using_ipsets: bool = True
    ipset_address: str = DEFAULT_IPSET_ADDRESS
    ipset_address6: str = DEFAULT_IPSET_ADDRESS6
    ipset_address_iface6: str = DEFAULT_IPSET_ADDRESS_IFACE6
    check_unicast_src: bool = False
    skip_check_adv_addr: bool = False
    strict: bool = False
    dynamic_interfaces: bool = False
    default_interface: str | None = None
    notify_fifo: NotifyFifoConfig = field(default_factory=NotifyFifoConfig)
    netlink_cmd_rcv_bufs: int = 0
    netlink_cmd_rcv_bufs_force: bool = False
    netlink_monitor_rcv_bufs: int = 0
    netlink_monitor_rcv_bufs_force: bool = False


@dataclass(slots=True)
class ProcessConfig:
    priority: int = 0
    realtime_priority: int = 0
    rlimit_rtime: int = 0
    no_swap: bool = False


@dataclass(slots=True)
class ScriptConfig:
    user: str | None = None
    group: str | None = None
    uid: int | None = None
    gid: int | None = None
    script_security: bool = False
    child_wait_time: int = 0


@dataclass(slots=True)
class SnmpConfig:
    socket: str | None = None
    enable_traps: bool = False
    enable_vrrp: bool = False
    enable_rfcv2: bool = False
    enable_rfcv3: bool = False
    enable_checker: bool = False


@dataclass(slots=True)
class DbusConfig:
    enabled: bool = False
    service_name: str | None = None


@dataclass(slots=True)
class NamespaceConfig:
    network_namespace: str | None = None
    with_ipsets: bool = False
    instance_name: str | None = None
    use_pid_dir: bool = False


@dataclass(slots=True)
class GlobalConfig:
    alerts: AlertConfig = field(default_factory=AlertConfig)
    lvs: LvsConfig = field(default_factory=LvsConfig)
    vrrp: VrrpConfig = field(default_factory=VrrpConfig)
    vrrp_process: ProcessConfig = field(default_factory=ProcessConfig)
    checker_process: ProcessConfig = field(default_factory=ProcessConfig)
    bfd_process: ProcessConfig = field(default_factory=ProcessConfig)
    notify_fifo: NotifyFifoConfig = field(default_factory=NotifyFifoConfig)
    scripts: ScriptConfig = field(default_factory=ScriptConfig)
    snmp: SnmpConfig = field(default_factory=SnmpConfig)
    dbus: DbusConfig = field(default_factory=DbusConfig)
    namespace: NamespaceConfig = field(default_factory=NamespaceConfig)
    linkbeat_use_polling: bool = False


@dataclass(slots=True)
class FeatureConfig:
    vrrp: bool = True
    lvs: bool = True
    bfd: bool = True
    snmp: bool = True
    snmp_vrrp: bool = True
    snmp_rfcv2: bool = True
    snmp_rfcv3: bool = True
    snmp_checker: bool = True
    dbus: bool = True
    sched_rt: bool = True
    rlimit_rttime: bool = True
    libipset: bool = True
    net_namespace: bool = True
    ipvs_syncd_attributes: bool = True

    @property
    def snmp_rfc(self) -> bool:
        return self.snmp_rfcv2 or self.snmp_rfcv3

    def enabled(self, name: str) -> bool:
        if name not in FEATURE_NAMES and name != "snmp_rfc":
            raise ValueError(f"unknown feature '{name}'")
        return bool(getattr(self, name))


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    fmt: str = "ecs_json"
    sink: str = "stdout"
    file_path: str | None = None
    service_name: str = "globaldefs"


@dataclass(slots=True)
class AppSettings:
    features: FeatureConfig = field(default_factory=FeatureConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


FEATURE_NAMES = frozenset(item.name for item in fields(FeatureConfig))
VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
VALID_LOG_FORMATS = {"ecs_json", "text"}
VALID_LOG_SINKS = {"stdout", "file"}


def _parse_bool_value(raw: Any, *, field_name: str, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"'{field_name}' must be a boolean")


def _parse_features(raw: Any) -> FeatureConfig:
    if raw is None:
        return FeatureConfig()
    if not isinstance(raw, dict):
        raise ValueError("'features' must be an object")
    unknown = sorted(str(key) for key in raw if key not in FEATURE_NAMES)
    if unknown:
        raise ValueError(f"unknown feature flag(s): {', '.join(unknown)}")
    defaults = FeatureConfig()
    values = {
        name: _parse_bool_value(raw.get(name), field_name=f"features.{name}", default=getattr(defaults, name))
        for name in FEATURE_NAMES
    }
    return FeatureConfig(**values)


def _parse_logging(raw: Any) -> LoggingConfig:
    if raw is None:
        return LoggingConfig()
    if not isinstance(raw, dict):
        raise ValueError("'logging' must be an object")
    level = str(raw.get("level", "INFO")).upper()
    if level not in VALID_LOG_LEVELS:
        raise ValueError(f"invalid log level '{level}'")
    log_format = str(raw.get("format", "ecs_json"))
    if log_format not in VALID_LOG_FORMATS:
        raise ValueError(f"invalid log format '{log_format}'")
    sink = str(raw.get("sink", "stdout"))
    if sink not in VALID_LOG_SINKS:
        raise ValueError(f"invalid log sink '{sink}'")
    file_path = raw.get("file_path")
    if sink == "file" and not file_path:
        raise ValueError("log sink 'file' requires 'logging.file_path'")
    return LoggingConfig(
        level=level,
        fmt=log_format,
        sink=sink,
        file_path=str(file_path) if file_path else None,
        service_name=str(raw.get("service_name", "globaldefs")),
    )


def parse_settings(data: dict[str, Any]) -> AppSettings:
    if not isinstance(data, dict):
        raise ValueError("settings must be an object")
    return AppSettings(
        features=_parse_features(data.get("features")),
        logging=_parse_logging(data.get("logging")),
    )
