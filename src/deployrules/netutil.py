"""Local host detection for rule locations.

``is_localhost_or_loopback`` answers whether a host string, or the host
of a URL, designates the machine we are running on.
"""

import ipaddress
import logging
import socket
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

LOCALHOST_NAMES = {"localhost", "localhost.localdomain", "ip6-localhost", "ip6-loopback"}


def _parse_address(host: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    """Return ``host`` as an IP address if it is a literal, else None."""
    candidate = host.strip()
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    # Drop an IPv6 zone id ("fe80::1%eth0")
    candidate = candidate.split("%", 1)[0]
    try:
        return ipaddress.ip_address(candidate)
    except ValueError:
        return None


def _resolve(host: str) -> set[str]:
    """Resolve ``host`` to the set of its addresses; empty if it does not resolve."""
    try:
        infos = socket.getaddrinfo(host, None)
    except (socket.gaierror, UnicodeError, OSError) as e:
        logger.debug("Could not resolve %s: %s", host, e)
        return set()
    return {info[4][0] for info in infos}


def local_host_names(resolve: bool = True) -> set[str]:
    """Names the local machine answers to, lowercased."""
    names = set(LOCALHOST_NAMES)
    hostname = socket.gethostname()
    if hostname:
        names.add(hostname.lower())
        if resolve:
            names.add(socket.getfqdn(hostname).lower())
    return names


def local_addresses() -> set[ipaddress.IPv4Address | ipaddress.IPv6Address]:
    """Addresses assigned to the local machine, loopbacks included."""
    addresses = {ipaddress.ip_address("127.0.0.1"), ipaddress.ip_address("::1")}
    for raw in _resolve(socket.gethostname()):
        address = _parse_address(raw)
        if address is not None:
            addresses.add(address)
    return addresses


def _is_local_address(address: ipaddress.IPv4Address | ipaddress.IPv6Address, resolve: bool = True) -> bool:
    if address.is_loopback:
        return True
    # IPv4-mapped IPv6 (::ffff:127.0.0.1)
    mapped = getattr(address, "ipv4_mapped", None)
    if mapped is not None and mapped.is_loopback:
        return True
    return resolve and address in local_addresses()


def is_localhost_or_loopback(host: str | None, resolve: bool = True) -> bool:
    """Whether ``host`` is blank or designates the local machine.

    Args:
        host: Host name or address literal (IPv6 may be bracketed)
        resolve: Resolve host names through the system resolver

    Returns:
        True if host is blank, a loopback or local address, a local host
        name, or resolves to one of those addresses
    """
    if host is None or not host.strip():
        return True

    address = _parse_address(host)
    if address is not None:
        return _is_local_address(address, resolve)

    name = host.strip().rstrip(".").lower()
    if name in local_host_names(resolve):
        return True

    if not resolve:
        return False

    for raw in _resolve(name):
        resolved = _parse_address(raw)
        if resolved is not None and _is_local_address(resolved):
            return True
    return False


def is_url_localhost_or_loopback(url: str, resolve: bool = True) -> bool:
    """Apply ``is_localhost_or_loopback`` to the host part of a URL or URI.

    A URL that cannot be split (e.g. an unclosed IPv6 bracket) is remote.
    """
    try:
        host = urlsplit(url).hostname
    except ValueError as e:
        logger.debug("Unparseable URL %s: %s", url, e)
        return False
    return is_localhost_or_loopback(host, resolve=resolve)
