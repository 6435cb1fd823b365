"""Handlers for the directives of the global_defs section.

Each handler receives a :class:`TokenLine` whose arity has already been
checked by its :class:`Directive` entry, validates the arguments and either
mutates the record on the builder or reports why the line was refused.
Handlers never raise for bad input.
"""

from __future__ import annotations

from operator import attrgetter
import socket
from typing import Any, Callable, Iterable

from globaldefs.config.schema import (
    SMTP_DEFAULT_PORT,
    TIMER_HZ,
    GlobalConfig,
    NotifyScript,
)
from globaldefs.core.builder import ConfigBuilder
from globaldefs.core.registry import Directive, Handler
from globaldefs.core.scanner import SubOption, SubOptionScanner
from globaldefs.core.tokens import TokenLine
from globaldefs.core.validators import (
    MAX_TIMER_SECONDS,
    UINT8_MAX,
    UINT16_MAX,
    UINT32_MAX,
    UINT64_MAX,
    check_true_false,
    clamp,
    fits_capacity,
    parse_duration,
    parse_integer,
    parse_leading_integer,
    parse_multicast_address,
    parse_seconds,
    parse_socket_address,
    realtime_priority_bounds,
    resolve_script_user,
)


LVS_MAX_TIMEOUT = 86400 * 31
LVS_SYNC_MAXLEN_MAX = UINT16_MAX - 20 - 8
PROCESS_PRIORITY_MIN = -20
PROCESS_PRIORITY_MAX = 19

# Buffer capacities; a value must be strictly shorter than its capacity.
IFNAME_CAPACITY = 16
IPTABLES_CHAIN_CAPACITY = 28
IPSET_NAME_CAPACITY = 31
PATH_CAPACITY = 4096

VRRP = ("vrrp",)
LVS = ("lvs",)
BFD = ("bfd",)
SNMP = ("snmp",)
DBUS = ("dbus",)
NETNS = ("net_namespace",)

Section = Callable[[GlobalConfig], Any]

DIRECTIVES: list[Directive] = []


def _register(
    name: str,
    handler: Handler,
    *,
    requires: Iterable[str] = (),
    min_args: int = 0,
    missing: str | None = None,
) -> None:
    DIRECTIVES.append(
        Directive(
            name=name,
            handler=handler,
            requires=tuple(requires),
            min_args=min_args,
            missing=missing,
        )
    )


def directive(
    name: str,
    *,
    requires: Iterable[str] = (),
    min_args: int = 0,
    missing: str | None = None,
) -> Callable[[Handler], Handler]:
    def register(handler: Handler) -> Handler:
        _register(name, handler, requires=requires, min_args=min_args, missing=missing)
        return handler

    return register


def _root(config: GlobalConfig) -> GlobalConfig:
    return config


# --- generic setters -------------------------------------------------------


def _toggle_value(line: TokenLine, builder: ConfigBuilder) -> bool | None:
    token = line.arg(1)
    if token is None:
        return True
    value = check_true_false(token)
    if value is None:
        builder.report(line, f"Invalid value '{token}' for global {line.directive} specified", value=token)
    return value


def _toggle(section: Section, attribute: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        value = _toggle_value(line, builder)
        if value is not None:
            setattr(section(builder.config), attribute, value)

    return handler


def _set_string(section: Section, attribute: str, capacity: int | None = None) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        value = line[1]
        if capacity is not None and not fits_capacity(value, capacity):
            builder.report(
                line,
                f"{line.directive} '{value}' too long (maximum {capacity - 1} characters) - ignoring",
                value=value,
            )
            return
        setattr(section(builder.config), attribute, value)

    return handler


def _set_integer(section: Section, attribute: str, minimum: int, maximum: int) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        token = line[1]
        value = parse_integer(token, minimum, maximum)
        if value is None:
            builder.report(
                line,
                f"Invalid {line.directive} '{token}' - must be between {minimum} and {maximum}",
                value=token,
            )
            return
        setattr(section(builder.config), attribute, value)

    return handler


def _set_seconds(section: Section, attribute: str, minimum: int = 0, maximum: int = MAX_TIMER_SECONDS) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        token = line[1]
        ticks = parse_seconds(token, minimum, maximum)
        if ticks is None:
            builder.report(
                line,
                f"Invalid {line.directive} '{token}' - must be between {minimum} and {maximum} seconds",
                value=token,
            )
            return
        setattr(section(builder.config), attribute, ticks)

    return handler


def _set_interval(attribute: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        token = line[1]
        ticks = parse_duration(token)
        if ticks is None:
            builder.report(
                line,
                f"Invalid {line.directive} '{token}' - must be between 0 and {MAX_TIMER_SECONDS} seconds",
                value=token,
            )
            return
        setattr(builder.config.vrrp, attribute, ticks)
        if ticks >= TIMER_HZ:
            builder.report(
                line,
                f"The {line.directive} is very large - {token} seconds",
                value=token,
                outcome="success",
            )

    return handler


# --- root level ------------------------------------------------------------


@directive("net_namespace", requires=NETNS, min_args=1, missing="net_namespace requires a namespace name")
def net_namespace_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    # the namespace cannot change across a reload
    if builder.reloading:
        return
    namespace = builder.config.namespace
    if namespace.network_namespace:
        builder.report(
            line,
            f"Duplicate net_namespace definition {line[1]} - ignoring, already {namespace.network_namespace}",
            value=line[1],
        )
        return
    namespace.network_namespace = line[1]
    namespace.use_pid_dir = True


@directive("instance", min_args=1, missing="instance requires an instance name")
def instance_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    if builder.reloading:
        return
    namespace = builder.config.namespace
    if namespace.instance_name:
        builder.report(
            line,
            f"Duplicate instance definition {line[1]} - ignoring, already {namespace.instance_name}",
            value=line[1],
        )
        return
    namespace.instance_name = line[1]
    namespace.use_pid_dir = True


_register("linkbeat_use_polling", _toggle(_root, "linkbeat_use_polling"))
_register("namespace_with_ipsets", _toggle(attrgetter("namespace"), "with_ipsets"), requires=NETNS)
_register("use_pid_dir", _toggle(attrgetter("namespace"), "use_pid_dir"))
_register(
    "child_wait_time",
    _set_integer(attrgetter("scripts"), "child_wait_time", 0, UINT32_MAX),
    min_args=1,
    missing="child_wait_time requires a number of seconds",
)


# --- alerting --------------------------------------------------------------


@directive("smtp_server", min_args=1, missing="smtp_server requires a server address")
def smtp_server_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    host = line[1]
    port = SMTP_DEFAULT_PORT
    port_token = line.arg(2)
    if port_token is not None:
        port = parse_integer(port_token, 1, UINT16_MAX)
        if port is None:
            builder.report(line, f"Invalid smtp_server port '{port_token}' - ignoring", value=port_token)
            return
    address = parse_socket_address(host, port)
    if address is None:
        builder.report(line, f"Unable to resolve smtp_server '{host}' - ignoring", value=host)
        return
    builder.config.alerts.smtp_server = address


@directive("notification_email")
def email_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    if not line.block:
        builder.report(line, "Warning - empty notification_email block", outcome="unknown")
        return
    for entry in line.block:
        builder.add_email(entry)


_alerts = attrgetter("alerts")
_register("router_id", _set_string(_alerts, "router_id"), min_args=1)
_register("notification_email_from", _set_string(_alerts, "email_from"), min_args=1)
_register("smtp_helo_name", _set_string(_alerts, "smtp_helo_name"), min_args=1)
_register(
    "smtp_connect_timeout",
    _set_seconds(_alerts, "smtp_connect_timeout", minimum=1),
    min_args=1,
    missing="smtp_connect_timeout requires a number of seconds",
)
_register("smtp_alert", _toggle(_alerts, "smtp_alert"))
_register("smtp_alert_vrrp", _toggle(_alerts, "smtp_alert_vrrp"), requires=VRRP)
_register("smtp_alert_checker", _toggle(_alerts, "smtp_alert_checker"), requires=LVS)
_register("no_email_faults", _toggle(_alerts, "no_email_faults"), requires=VRRP)


# --- vrrp ------------------------------------------------------------------


def _mcast_group(attribute: str, family: int, family_label: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        token = line[1]
        address, valid = parse_multicast_address(token, family)
        if address is None:
            builder.report(
                line,
                f"Configuration error: Cant parse {line.directive} [{token}]. Skipping",
                value=token,
                level="ERROR",
            )
            return
        if not valid:
            setattr(builder.config.vrrp, attribute, None)
            builder.report(
                line,
                f"{line.directive} address {token} is not an {family_label} multicast address - ignoring",
                value=token,
            )
            return
        setattr(builder.config.vrrp, attribute, address)

    return handler


@directive("vrrp_version", requires=VRRP, min_args=1, missing="vrrp_version requires a version number")
def vrrp_version_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    version = parse_integer(line[1], 2, 3)
    if version is None:
        builder.report(line, f"VRRP Error : Version {line[1]} not valid, must be either 2 or 3", value=line[1])
        return
    builder.config.vrrp.version = version


@directive("vrrp_iptables", requires=VRRP)
def vrrp_iptables_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    vrrp = builder.config.vrrp
    vrrp.iptables_inchain = ""
    vrrp.iptables_outchain = ""
    inchain = line.arg(1)
    if inchain is not None:
        if not fits_capacity(inchain, IPTABLES_CHAIN_CAPACITY):
            builder.report(line, "VRRP Error : iptables in chain name too long - ignored", value=inchain)
            return
        vrrp.iptables_inchain = inchain
    outchain = line.arg(2)
    if outchain is not None:
        if not fits_capacity(outchain, IPTABLES_CHAIN_CAPACITY):
            builder.report(line, "VRRP Error : iptables out chain name too long - ignored", value=outchain)
            return
        vrrp.iptables_outchain = outchain


@directive("vrrp_ipsets", requires=VRRP + ("libipset",))
def vrrp_ipsets_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    vrrp = builder.config.vrrp
    address = line.arg(1)
    if address is None:
        vrrp.using_ipsets = False
        return
    if not fits_capacity(address, IPSET_NAME_CAPACITY):
        builder.report(line, "VRRP Error : ipset address name too long - ignored", value=address)
        return
    vrrp.ipset_address = address

    address6 = line.arg(2)
    if address6 is None:
        address6 = address[: IPSET_NAME_CAPACITY - 1] + "6"
    elif not fits_capacity(address6, IPSET_NAME_CAPACITY):
        builder.report(line, "VRRP Error : ipset IPv6 address name too long - ignored", value=address6)
        return
    vrrp.ipset_address6 = address6

    iface6 = line.arg(3)
    if iface6 is None:
        base = address6[:-1] if address6.endswith("6") else address6
        iface6 = base[: IPSET_NAME_CAPACITY - 4] + "_if6"
    elif not fits_capacity(iface6, IPSET_NAME_CAPACITY):
        builder.report(line, "VRRP Error : ipset IPv6 address_iface name too long - ignored", value=iface6)
        return
    vrrp.ipset_address_iface6 = iface6


_vrrp = attrgetter("vrrp")
_register("dynamic_interfaces", _toggle(_vrrp, "dynamic_interfaces"), requires=VRRP)
_register(
    "default_interface",
    _set_string(_vrrp, "default_interface", IFNAME_CAPACITY),
    requires=VRRP,
    min_args=1,
    missing="default_interface requires interface name",
)
_register(
    "vrrp_mcast_group4",
    _mcast_group("mcast_group4", socket.AF_INET, "IPv4"),
    requires=VRRP,
    min_args=1,
)
_register(
    "vrrp_mcast_group6",
    _mcast_group("mcast_group6", socket.AF_INET6, "IPv6"),
    requires=VRRP,
    min_args=1,
)
_register("vrrp_garp_master_delay", _set_seconds(_vrrp, "garp_delay"), requires=VRRP, min_args=1)
_register("vrrp_garp_master_repeat", _set_integer(_vrrp, "garp_rep", 1, UINT32_MAX), requires=VRRP, min_args=1)
_register(
    "vrrp_garp_master_refresh",
    _set_integer(_vrrp, "garp_refresh", 0, UINT32_MAX),
    requires=VRRP,
    min_args=1,
)
_register(
    "vrrp_garp_master_refresh_repeat",
    _set_integer(_vrrp, "garp_refresh_rep", 1, UINT32_MAX),
    requires=VRRP,
    min_args=1,
)
_register("vrrp_garp_lower_prio_delay", _set_seconds(_vrrp, "garp_lower_prio_delay"), requires=VRRP, min_args=1)
_register(
    "vrrp_garp_lower_prio_repeat",
    _set_integer(_vrrp, "garp_lower_prio_rep", 0, UINT32_MAX),
    requires=VRRP,
    min_args=1,
)
_register("vrrp_garp_interval", _set_interval("garp_interval"), requires=VRRP, min_args=1)
_register("vrrp_gna_interval", _set_interval("gna_interval"), requires=VRRP, min_args=1)
_register("vrrp_lower_prio_no_advert", _toggle(_vrrp, "lower_prio_no_advert"), requires=VRRP)
_register("vrrp_higher_prio_send_advert", _toggle(_vrrp, "higher_prio_send_advert"), requires=VRRP)
_register("vrrp_check_unicast_src", _toggle(_vrrp, "check_unicast_src"), requires=VRRP)
_register("vrrp_skip_check_adv_addr", _toggle(_vrrp, "skip_check_adv_addr"), requires=VRRP)
_register("vrrp_strict", _toggle(_vrrp, "strict"), requires=VRRP)


# --- lvs -------------------------------------------------------------------


def _lvs_timeout(keyword: str, attribute: str, minimum: int) -> SubOption:
    def apply(value: str, builder: ConfigBuilder) -> str | None:
        seconds = parse_integer(value, minimum, LVS_MAX_TIMEOUT)
        if seconds is None:
            return f"Invalid lvs_timeouts {keyword} ({value}) - ignoring"
        setattr(builder.config.lvs, attribute, seconds)
        return None

    return SubOption(keyword, apply)


LVS_TIMEOUTS_SCANNER = SubOptionScanner(
    "lvs_timeouts",
    [
        _lvs_timeout("tcp", "tcp_timeout", 0),
        _lvs_timeout("tcpfin", "tcpfin_timeout", 1),
        _lvs_timeout("udp", "udp_timeout", 1),
    ],
)


@directive("lvs_timeouts", requires=LVS, min_args=2, missing="lvs_timeouts requires at least one option")
def lvs_timeouts_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    LVS_TIMEOUTS_SCANNER.scan(line, 1, builder)


def _apply_syncid(value: str, builder: ConfigBuilder) -> str | None:
    syncid = parse_integer(value, 0, UINT8_MAX)
    if syncid is None:
        return f"Invalid lvs_sync_daemon id ({value}) - defaulting to vrid"
    builder.config.lvs.sync_daemon.syncid = syncid
    return None


def _syncd_integer(keyword: str, attribute: str, minimum: int, maximum: int) -> SubOption:
    def apply(value: str, builder: ConfigBuilder) -> str | None:
        number = parse_integer(value, minimum, maximum)
        if number is None:
            return f"Invalid lvs_sync_daemon {keyword} ({value}) - ignoring"
        setattr(builder.config.lvs.sync_daemon, attribute, number)
        return None

    return SubOption(keyword, apply, requires=("ipvs_syncd_attributes",))


def _apply_syncd_group(value: str, builder: ConfigBuilder) -> str | None:
    syncd = builder.config.lvs.sync_daemon
    address, valid = parse_multicast_address(value)
    if address is None:
        return f"Invalid lvs_sync_daemon group ({value}) - ignoring"
    if not valid:
        syncd.mcast_group = None
        return f"lvs_sync_daemon group address {value} is not multicast - ignoring"
    syncd.mcast_group = address
    return None


LVS_SYNCD_SCANNER = SubOptionScanner(
    "lvs_sync_daemon",
    [
        SubOption("id", _apply_syncid),
        _syncd_integer("maxlen", "sync_maxlen", 1, LVS_SYNC_MAXLEN_MAX),
        _syncd_integer("port", "mcast_port", 1, UINT16_MAX),
        _syncd_integer("ttl", "mcast_ttl", 1, UINT8_MAX),
        SubOption("group", _apply_syncd_group, requires=("ipvs_syncd_attributes",)),
    ],
)


@directive(
    "lvs_sync_daemon",
    requires=LVS + VRRP,
    min_args=2,
    missing="lvs_sync_daemon requires interface, VRRP instance",
)
def lvs_syncd_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    syncd = builder.config.lvs.sync_daemon
    if syncd.ifname:
        builder.report(
            line,
            f"lvs_sync_daemon has already been specified as {syncd.ifname} {syncd.vrrp_name} - ignoring",
        )
        return
    ifname, vrrp_name = line[1], line[2]
    if not fits_capacity(ifname, IFNAME_CAPACITY):
        builder.report(line, f"lvs_sync_daemon interface name '{ifname}' too long - ignoring", value=ifname)
        return
    if not fits_capacity(vrrp_name, IFNAME_CAPACITY):
        builder.report(
            line,
            f"lvs_sync_daemon vrrp interface name '{vrrp_name}' too long - ignoring",
            value=vrrp_name,
        )
        return
    syncd.ifname = ifname
    syncd.vrrp_name = vrrp_name

    start = 3
    legacy = line.arg(3)
    if legacy is not None and legacy.isascii() and legacy.isdigit():
        error = _apply_syncid(legacy, builder)
        builder.report(
            line,
            error or 'Please use keyword "id" before lvs_sync_daemon syncid value',
            value=legacy,
            outcome="failure" if error else "success",
        )
        start = 4
    LVS_SYNCD_SCANNER.scan(line, start, builder)


_lvs = attrgetter("lvs")
_register("lvs_flush", _toggle(_lvs, "flush"), requires=LVS)


# --- process control -------------------------------------------------------


def _set_clamped(
    line: TokenLine,
    builder: ConfigBuilder,
    target: Any,
    attribute: str,
    bounds: tuple[int, int],
    label: str,
) -> None:
    minimum, maximum = bounds
    token = line[1]
    value, clean = parse_leading_integer(token)
    clamped = clamp(value, minimum, maximum)
    if not clean:
        builder.report(line, f"Invalid {label} '{token}' - setting to {clamped}", value=token)
    elif value < minimum:
        builder.report(
            line,
            f"{label} {value} less than minimum {minimum} - setting to minimum",
            value=token,
            outcome="success",
        )
    elif value > maximum:
        builder.report(
            line,
            f"{label} {value} greater than maximum {maximum} - setting to maximum",
            value=token,
            outcome="success",
        )
    setattr(target, attribute, clamped)


def _process_priority(section: Section, process: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        _set_clamped(
            line,
            builder,
            section(builder.config),
            "priority",
            (PROCESS_PRIORITY_MIN, PROCESS_PRIORITY_MAX),
            f"{process} process priority",
        )

    return handler


def _realtime_priority(section: Section, process: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        _set_clamped(
            line,
            builder,
            section(builder.config),
            "realtime_priority",
            realtime_priority_bounds(),
            f"{process} process real-time priority",
        )

    return handler


def _rlimit_rtime(section: Section, process: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        token = line[1]
        limit = parse_integer(token, 0, UINT64_MAX)
        if limit is None:
            builder.report(line, f"Invalid {process} real-time limit - {token}", value=token)
            return
        section(builder.config).rlimit_rtime = limit

    return handler


def _register_process(process: str, attribute: str, requires: tuple[str, ...]) -> None:
    section = attrgetter(attribute)
    _register(
        f"{process}_priority",
        _process_priority(section, process),
        requires=requires,
        min_args=1,
        missing=f"No {process} process priority specified",
    )
    _register(f"{process}_no_swap", _toggle(section, "no_swap"), requires=requires)
    _register(
        f"{process}_rt_priority",
        _realtime_priority(section, process),
        requires=requires + ("sched_rt",),
        min_args=1,
        missing=f"No {process} process real-time priority specified",
    )
    _register(
        f"{process}_rlimit_rtime",
        _rlimit_rtime(section, process),
        requires=requires + ("sched_rt", "rlimit_rttime"),
        min_args=1,
        missing=f"No {process} real-time limit specified",
    )


_register_process("vrrp", "vrrp_process", VRRP)
_register_process("checker", "checker_process", LVS)
_register_process("bfd", "bfd_process", BFD)


# --- notify fifos ----------------------------------------------------------


def _notify_fifo(section: Section, prefix: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        fifo = section(builder.config)
        if fifo.name:
            builder.report(line, f"{prefix}notify_fifo already specified - ignoring {line[1]}", value=line[1])
            return
        fifo.name = line[1]

    return handler


def _notify_fifo_script(section: Section, prefix: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        fifo = section(builder.config)
        if fifo.script is not None:
            builder.report(
                line,
                f"{prefix}notify_fifo_script already specified - ignoring {line[1]}",
                value=line[1],
            )
            return
        fifo.script = NotifyScript(name=f"{prefix}notify_fifo", command=line.args)

    return handler


def _register_notify_fifo(prefix: str, attribute: str, requires: tuple[str, ...]) -> None:
    section = attrgetter(attribute)
    _register(
        f"{prefix}notify_fifo",
        _notify_fifo(section, prefix),
        requires=requires,
        min_args=1,
        missing=f"No {prefix}notify_fifo name specified",
    )
    _register(
        f"{prefix}notify_fifo_script",
        _notify_fifo_script(section, prefix),
        requires=requires,
        min_args=1,
        missing=f"No {prefix}notify_fifo_script specified",
    )


_register_notify_fifo("", "notify_fifo", ())
_register_notify_fifo("vrrp_", "vrrp.notify_fifo", VRRP)
_register_notify_fifo("lvs_", "lvs.notify_fifo", LVS)


# --- netlink receive buffers -----------------------------------------------


def _netlink_bufs(section: Section, attribute: str, label: str) -> Handler:
    def handler(line: TokenLine, builder: ConfigBuilder) -> None:
        token = line[1]
        size = parse_integer(token, 1, UINT32_MAX)
        if size is None:
            builder.report(line, f"{label}_rcv_bufs size ({token}) invalid", value=token)
            return
        setattr(section(builder.config), attribute, size)

    return handler


def _register_netlink(subsystem: str, requires: tuple[str, ...]) -> None:
    section = attrgetter(subsystem)
    for channel in ("cmd", "monitor"):
        label = f"{subsystem}_netlink_{channel}"
        attribute = f"netlink_{channel}_rcv_bufs"
        _register(
            f"{label}_rcv_bufs",
            _netlink_bufs(section, attribute, label),
            requires=requires,
            min_args=1,
            missing=f"{label}_rcv_bufs size missing",
        )
        _register(f"{label}_rcv_bufs_force", _toggle(section, f"{attribute}_force"), requires=requires)


_register_netlink("vrrp", VRRP)
_register_netlink("lvs", LVS)


# --- snmp and dbus ---------------------------------------------------------


@directive("snmp_socket", requires=SNMP, min_args=1, missing="SNMP error : snmp socket name missing")
def snmp_socket_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    if len(line) > 2:
        builder.report(line, "Too many parameters specified for snmp_socket - ignoring")
        return
    path = line[1]
    if not fits_capacity(path, PATH_CAPACITY):
        builder.report(line, "SNMP error : snmp socket name too long - ignored", value=path)
        return
    snmp = builder.config.snmp
    if snmp.socket:
        builder.report(line, f"SNMP socket already set to {snmp.socket} - ignoring", value=path)
        return
    snmp.socket = path


@directive("enable_snmp_rfc", requires=SNMP + ("snmp_rfc",))
def snmp_rfc_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    value = _toggle_value(line, builder)
    if value is None:
        return
    builder.config.snmp.enable_rfcv2 = value
    builder.config.snmp.enable_rfcv3 = value


_snmp = attrgetter("snmp")
_register("enable_traps", _toggle(_snmp, "enable_traps"), requires=SNMP)
_register("enable_snmp_vrrp", _toggle(_snmp, "enable_vrrp"), requires=SNMP + ("snmp_vrrp",))
# deprecated spelling of enable_snmp_vrrp
_register("enable_snmp_keepalived", _toggle(_snmp, "enable_vrrp"), requires=SNMP + ("snmp_vrrp",))
_register("enable_snmp_rfcv2", _toggle(_snmp, "enable_rfcv2"), requires=SNMP + ("snmp_rfcv2",))
_register("enable_snmp_rfcv3", _toggle(_snmp, "enable_rfcv3"), requires=SNMP + ("snmp_rfcv3",))
_register("enable_snmp_checker", _toggle(_snmp, "enable_checker"), requires=SNMP + ("snmp_checker",))

_dbus = attrgetter("dbus")
_register("enable_dbus", _toggle(_dbus, "enabled"), requires=DBUS)
_register("dbus_service_name", _set_string(_dbus, "service_name"), requires=DBUS, min_args=1)


# --- scripts ---------------------------------------------------------------


@directive("script_user", min_args=1, missing="No script username specified")
def script_user_handler(line: TokenLine, builder: ConfigBuilder) -> None:
    user = line[1]
    group = line.arg(2)
    ids = resolve_script_user(user, group)
    if ids is None:
        builder.report(line, f"Error setting global script uid/gid for {user}", value=user)
        return
    scripts = builder.config.scripts
    scripts.user = user
    scripts.group = group
    scripts.uid, scripts.gid = ids


_register("enable_script_security", _toggle(attrgetter("scripts"), "script_security"))
