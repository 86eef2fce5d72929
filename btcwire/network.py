"""Discovery of peer addresses from a DNS seed and configured nodes."""

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Iterable

logger = logging.getLogger(__name__)


def get_active_nodes(
    dns_seed: str,
    port: int,
    custom_node_ips: Iterable[str],
    connect_to_dns_nodes: bool,
) -> list[ipaddress.IPv4Address]:
    """Collect IPv4 peers from the DNS seed (if enabled) followed by the custom nodes.

    Custom entries that are not valid IPv4 addresses are logged and skipped.
    """
    node_ips: list[ipaddress.IPv4Address] = []
    if connect_to_dns_nodes:
        node_ips.extend(get_nodes_from_dns_seed(dns_seed, port))
    for custom_node in custom_node_ips:
        try:
            node_ips.append(ipaddress.IPv4Address(custom_node))
        except ValueError as err:
            logger.error(
                "Could not parse manually configured node ip %s: %s. "
                "It must be an IPv4 address: xxx.x.x.x",
                custom_node,
                err,
            )
    return node_ips


def get_nodes_from_dns_seed(dns_seed: str, port: int) -> list[ipaddress.IPv4Address]:
    """Resolve the DNS seed and return its IPv4 addresses in resolver order."""
    try:
        results = socket.getaddrinfo(dns_seed, port, type=socket.SOCK_STREAM)
    except OSError as err:
        raise OSError(f"could not resolve DNS seed {dns_seed!r}: {err}") from err
    node_ips = [
        ipaddress.IPv4Address(sockaddr[0])
        for family, _type, _proto, _canonname, sockaddr in results
        if family == socket.AF_INET
    ]
    logger.info("Got %d ips from the DNS: %s", len(node_ips), [str(ip) for ip in node_ips])
    return node_ips