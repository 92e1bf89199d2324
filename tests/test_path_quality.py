"""Tests for wifihealth/parsers/path_quality.py: ping, router and DNS parsing."""
import pytest

from conftest import DIG_STATS, NETWORK_INFO, PING_ALL_LOST, PING_OK, SCUTIL_DNS
from wifihealth.parsers.path_quality import (
    DnsState,
    PathQuality,
    build_dns_state,
    parse_dns_servers,
    parse_ping_output,
    parse_query_time,
    parse_router_ip,
)


class TestParsePingOutput:
    def test_full_statistics(self):
        result = parse_ping_output(PING_OK)
        assert result.latency_ms == pytest.approx(12.715)
        assert result.jitter_ms == pytest.approx(1.234)
        assert result.packet_loss_percent == pytest.approx(0.0)

    def test_all_lost_keeps_loss(self):
        result = parse_ping_output(PING_ALL_LOST)
        assert result.packet_loss_percent == pytest.approx(100.0)
        assert result.latency_ms is None
        assert result.jitter_ms is None

    def test_linux_rtt_mdev_line(self):
        text = (
            "3 packets transmitted, 3 received, 0% packet loss, time 2003ms\n"
            "rtt min/avg/max/mdev = 9.871/10.502/11.003/0.466 ms\n"
        )
        result = parse_ping_output(text)
        assert result.latency_ms == pytest.approx(10.502)
        assert result.jitter_ms == pytest.approx(0.466)
        assert result.packet_loss_percent == pytest.approx(0.0)

    def test_empty_is_unknown(self):
        result = parse_ping_output("")
        assert result == PathQuality()
        assert result.is_unknown

    def test_partial_loss(self):
        text = "3 packets transmitted, 2 packets received, 33.3% packet loss\n"
        assert parse_ping_output(text).packet_loss_percent == pytest.approx(33.3)

    def test_to_dict(self):
        assert PathQuality(latency_ms=1.0).to_dict() == {
            "latency_ms": 1.0, "jitter_ms": None, "packet_loss_percent": None,
        }


class TestParseRouterIp:
    def test_router_found(self):
        assert parse_router_ip(NETWORK_INFO) == "192.168.1.1"

    def test_router_none(self):
        assert parse_router_ip("IP address: 10.0.0.5\nRouter: none\n") is None

    def test_empty_router_does_not_read_next_line(self):
        assert parse_router_ip("Router:\n192.168.1.1\n") is None

    def test_missing(self):
        assert parse_router_ip("") is None


class TestParseDnsServers:
    def test_dedup_preserves_order(self):
        assert parse_dns_servers(SCUTIL_DNS) == ["192.168.1.1", "8.8.8.8"]

    def test_a_b_a_c(self):
        text = (
            "resolver #1\n  nameserver[0] : 10.0.0.1\n  nameserver[1] : 10.0.0.2\n"
            "resolver #2\n  nameserver[0] : 10.0.0.1\n  nameserver[1] : 10.0.0.3\n"
        )
        assert parse_dns_servers(text) == ["10.0.0.1", "10.0.0.2", "10.0.0.3"]

    def test_ipv6_server(self):
        text = "resolver #1\n  nameserver[0] : 2606:4700:4700::1111\n"
        assert parse_dns_servers(text) == ["2606:4700:4700::1111"]

    def test_no_servers(self):
        assert parse_dns_servers("DNS configuration\n") == []

    def test_empty_value_does_not_read_next_line(self):
        text = "resolver #1\n  nameserver[0] :\n  if_index : 4 (en0)\n"
        assert parse_dns_servers(text) == []


class TestParseQueryTime:
    def test_query_time(self):
        assert parse_query_time(DIG_STATS) == 23.0

    def test_unparseable(self):
        assert parse_query_time(";; connection timed out; no servers could be reached") is None


class TestBuildDnsState:
    def test_servers_and_latency(self):
        state = build_dns_state(SCUTIL_DNS, DIG_STATS)
        assert state.servers == ("192.168.1.1", "8.8.8.8")
        assert state.lookup_latency_ms == 23.0

    def test_failed_lookup_is_absent(self):
        state = build_dns_state(SCUTIL_DNS, None)
        assert state.servers == ("192.168.1.1", "8.8.8.8")
        assert state.lookup_latency_ms is None

    def test_no_servers_ignores_lookup(self):
        state = build_dns_state("", DIG_STATS)
        assert state == DnsState()

    def test_to_dict_lists_servers(self):
        data = build_dns_state(SCUTIL_DNS, DIG_STATS).to_dict()
        assert data == {"servers": ["192.168.1.1", "8.8.8.8"], "lookup_latency_ms": 23.0}
