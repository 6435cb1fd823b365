"""Token validators.

Every validator is a pure conversion from a token to a typed value. A
validator never raises for bad input; it returns ``None`` and leaves the
decision about the diagnostic to the calling handler.
"""

from __future__ import annotations

import grp
import ipaddress
import os
import pwd
import re
import socket

from globaldefs.config.schema import TIMER_HZ, SocketAddress


UINT8_MAX = 0xFF
UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFF_FFFF
UINT64_MAX = 0xFFFF_FFFF_FFFF_FFFF

# Largest number of whole seconds that still fits an unsigned 32-bit
# microsecond timer.
MAX_TIMER_SECONDS = UINT32_MAX // TIMER_HZ

# A literal holding either of these can only be a name, never an address.
NAME_ONLY_CHARS = frozenset("-/")

TRUE_WORDS = frozenset({"true", "on", "yes"})
FALSE_WORDS = frozenset({"false", "off", "no"})

_INTEGER_RE = re.compile(r"[+-]?\d+")
_LEADING_INTEGER_RE = re.compile(r"\s*([+-]?\d+)")
_DECIMAL_RE = re.compile(r"\+?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_integer(token: str, minimum: int, maximum: int) -> int | None:
    """Whole-token integer within ``[minimum, maximum]``."""
    if not _INTEGER_RE.fullmatch(token):
        return None
    value = int(token)
    if value < minimum or value > maximum:
        return None
    return value


def parse_leading_integer(token: str) -> tuple[int, bool]:
    """atoi-style parse: the leading integer, or 0 when there is none.

    The flag is true only when the whole token was consumed.
    """
    match = _LEADING_INTEGER_RE.match(token)
    if not match:
        return 0, False
    return int(match.group(1)), match.end() == len(token)


def clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


def check_true_false(token: str) -> bool | None:
    if token in TRUE_WORDS:
        return True
    if token in FALSE_WORDS:
        return False
    return None


def parse_seconds(token: str, minimum: int = 0, maximum: int = MAX_TIMER_SECONDS) -> int | None:
    """Whole seconds, returned in timer ticks (microseconds)."""
    seconds = parse_integer(token, minimum, maximum)
    if seconds is None:
        return None
    return seconds * TIMER_HZ


def parse_duration(token: str, maximum: float = MAX_TIMER_SECONDS) -> int | None:
    """Possibly fractional seconds, returned in timer ticks."""
    if not _DECIMAL_RE.fullmatch(token):
        return None
    seconds = float(token)
    if seconds < 0 or seconds > maximum:
        return None
    return round(seconds * TIMER_HZ)


def fits_capacity(value: str, capacity: int) -> bool:
    return len(value) < capacity


def parse_numeric_address(token: str, port: int = 0) -> SocketAddress | None:
    try:
        address = ipaddress.ip_address(token)
    except ValueError:
        return None
    family = socket.AF_INET if address.version == 4 else socket.AF_INET6
    return SocketAddress(family=family, host=str(address), port=port)


def resolve_address(token: str, port: int = 0, family: int = socket.AF_UNSPEC) -> SocketAddress | None:
    """First IPv4/IPv6 answer for ``token``, restricted to ``family`` when given."""
    try:
        results = socket.getaddrinfo(token, port or None, family=family, type=socket.SOCK_STREAM)
    except (OSError, UnicodeError):
        return None
    for result_family, _type, _proto, _canonname, sockaddr in results:
        if result_family in (socket.AF_INET, socket.AF_INET6):
            return SocketAddress(family=result_family, host=str(sockaddr[0]), port=port)
    return None


def parse_socket_address(token: str, port: int = 0, family: int = socket.AF_UNSPEC) -> SocketAddress | None:
    """Numeric literal first, then name resolution."""
    if not NAME_ONLY_CHARS.intersection(token):
        address = parse_numeric_address(token, port)
        if address is not None:
            return address
    return resolve_address(token, port, family=family)


def parse_multicast_address(token: str, family: int | None = None) -> tuple[SocketAddress | None, bool]:
    """Resolve a multicast group.

    Returns ``(address, is_valid_group)``. ``address`` is ``None`` when the
    token could not be resolved at all; ``is_valid_group`` is false when it
    resolved to a non-multicast address or to the wrong family.

    Without a ``family`` both families are tried and a multicast answer wins
    over a unicast one.
    """
    families = (family,) if family is not None else (socket.AF_INET, socket.AF_INET6)
    fallback = None
    for candidate in families:
        address = parse_socket_address(token, family=candidate)
        if address is None:
            continue
        if address.family == candidate and address.is_multicast:
            return address, True
        if fallback is None:
            fallback = address
    return fallback, False


def realtime_priority_bounds() -> tuple[int, int]:
    return os.sched_get_priority_min(os.SCHED_RR), os.sched_get_priority_max(os.SCHED_RR)


def resolve_script_user(user: str, group: str | None = None) -> tuple[int, int] | None:
    try:
        entry = pwd.getpwnam(user)
    except KeyError:
        return None
    if group is None:
        return entry.pw_uid, entry.pw_gid
    try:
        group_entry = grp.getgrnam(group)
    except KeyError:
        return None
    return entry.pw_uid, group_entry.gr_gid
