import ipaddress
import socket
from unittest import mock

import pytest

from btcwire.network import get_active_nodes, get_nodes_from_dns_seed


def _fake_results():
    return [
        (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.1", 18333)),
        (socket.AF_INET6, socket.SOCK_STREAM, 6, "", ("::1", 18333, 0, 0)),
        (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.2", 18333)),
    ]


def test_dns_seed_keeps_only_ipv4_in_order():
    with mock.patch("socket.getaddrinfo", return_value=_fake_results()) as resolver:
        ips = get_nodes_from_dns_seed("seed.example.com", 18333)
    assert ips == [ipaddress.IPv4Address("10.0.0.1"), ipaddress.IPv4Address("10.0.0.2")]
    assert resolver.call_args.args[:2] == ("seed.example.com", 18333)


def test_dns_seed_with_literal_address():
    assert get_nodes_from_dns_seed("127.0.0.1", 18333) == [ipaddress.IPv4Address("127.0.0.1")]


def test_dns_seed_resolution_failure_raises():
    with mock.patch("socket.getaddrinfo", side_effect=socket.gaierror("no such host")):
        with pytest.raises(OSError):
            get_nodes_from_dns_seed("seed.example.com", 18333)


def test_active_nodes_puts_dns_first_then_custom():
    with mock.patch("socket.getaddrinfo", return_value=_fake_results()):
        ips = get_active_nodes("seed.example.com", 18333, ["192.168.0.58"], True)
    assert [str(ip) for ip in ips] == ["10.0.0.1", "10.0.0.2", "192.168.0.58"]


def test_active_nodes_without_dns_does_not_resolve():
    with mock.patch("socket.getaddrinfo") as resolver:
        ips = get_active_nodes("seed.example.com", 18333, ["3.34.119.199"], False)
    assert ips == [ipaddress.IPv4Address("3.34.119.199")]
    assert resolver.call_count == 0


def test_invalid_custom_nodes_are_skipped():
    ips = get_active_nodes(
        "seed.example.com", 18333, ["not-an-ip", "3.34.119.199", "::1", "300.1.1.1"], False
    )
    assert ips == [ipaddress.IPv4Address("3.34.119.199")]


def test_dns_error_propagates_from_active_nodes():
    with mock.patch("socket.getaddrinfo", side_effect=socket.gaierror("no such host")):
        with pytest.raises(OSError):
            get_active_nodes("seed.example.com", 18333, ["3.34.119.199"], True)