"""
Snapshot collection from the macOS network tools.

Runs the OS commands, hands their output to the parsers and assembles
the results.  A command that cannot be run is logged and treated as
empty output, so every call returns a (possibly degraded) snapshot.

Usage:
    from wifihealth.monitoring.collector import WifiCollector

    collector = WifiCollector()
    metrics = collector.collect_metrics()
    verdict = collector.check_interference()
    speed = collector.run_speed_test()
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..diagnostics.interference import InterferenceAnalyzer, InterferenceVerdict
from ..parsers.link_state import LinkState, parse_current_ssid, parse_link_state
from ..parsers.neighbors import parse_neighbor_networks
from ..parsers.path_quality import (
    DnsState,
    PathQuality,
    build_dns_state,
    parse_ping_output,
    parse_router_ip,
)
from ..utils import common
from ..utils.system import CommandResult, run_command, validate_host
from . import speed_test
from .speed_test import SpeedTestResults

log = logging.getLogger("collector")

# (args, timeout=...) -> CommandResult
CommandRunner = Callable[..., CommandResult]


@dataclass(frozen=True)
class CollectorSettings:
    """Command parameters for a collection run."""

    interface: str = common.DEFAULT_INTERFACE
    internet_target: str = common.DEFAULT_INTERNET_TARGET
    ping_count: int = common.DEFAULT_PING_COUNT
    ping_timeout: int = common.DEFAULT_PING_TIMEOUT
    dns_probe_host: str = common.DEFAULT_DNS_PROBE_HOST
    command_timeout: int = common.DEFAULT_COMMAND_TIMEOUT

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, Any]]) -> "CollectorSettings":
        """Read the ``collector`` section; invalid values keep the defaults."""
        return cls(**common.valid_section_values(cfg, "collector"))


@dataclass(frozen=True)
class NetworkMetrics:
    """One full network-quality snapshot."""

    wifi: LinkState
    router_ip: Optional[str]
    router_ping: Optional[PathQuality]
    internet_ping: PathQuality
    dns: DnsState

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wifi": self.wifi.to_dict(),
            "router_ip": self.router_ip,
            "router_ping": self.router_ping.to_dict() if self.router_ping else None,
            "internet_ping": self.internet_ping.to_dict(),
            "dns": self.dns.to_dict(),
        }


class WifiCollector:
    """
    Gathers link, path-quality and DNS data by running OS commands.

    Args:
        settings: Command parameters (defaults from config constants).
        runner:   Callable used to execute commands; ``run_command``
                  unless replaced (tests pass canned outputs).
        analyzer: Interference analyzer for :meth:`check_interference`.
        speedtest_client: Factory for the speedtest-cli client used by
                  :meth:`run_speed_test`.
    """

    def __init__(
        self,
        settings: Optional[CollectorSettings] = None,
        runner: Optional[CommandRunner] = None,
        analyzer: Optional[InterferenceAnalyzer] = None,
        speedtest_client: Optional[speed_test.ClientFactory] = None,
    ):
        self.settings = settings or CollectorSettings()
        self._runner = runner or run_command
        self.analyzer = analyzer or InterferenceAnalyzer()
        self._speedtest_client = speedtest_client

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, Any]] = None,
                    runner: Optional[CommandRunner] = None) -> "WifiCollector":
        """Build a collector from a loaded config dict (or config.json)."""
        if cfg is None:
            cfg = common.load_config()
        return cls(
            settings=CollectorSettings.from_config(cfg),
            runner=runner,
            analyzer=InterferenceAnalyzer.from_config(cfg),
        )

    # ── Command execution ────────────────────────────────────
    def _exec(self, args: List[str]) -> CommandResult:
        return self._runner(args, timeout=self.settings.command_timeout)

    def _run(self, args: List[str]) -> Optional[str]:
        """Run a command; None unless it exited successfully."""
        rc, stdout, stderr = self._exec(args)
        if rc != 0:
            log.warning("%s failed (rc=%s): %s", args[0], rc, stderr.strip())
            return None
        return stdout

    # ── Link state ───────────────────────────────────────────
    def fetch_current_ssid(self) -> Optional[str]:
        """SSID from ``networksetup -getairportnetwork``."""
        output = self._run(
            ["networksetup", "-getairportnetwork", self.settings.interface]
        )
        if output is None:
            return None
        return parse_current_ssid(output)

    def fetch_adapter_status(self) -> str:
        """Raw ``system_profiler SPAirPortDataType`` text ("" on failure)."""
        output = self._run(["system_profiler", "SPAirPortDataType"])
        return output or ""

    def get_link_state(self, status_output: Optional[str] = None) -> LinkState:
        """Current link state.

        Args:
            status_output: Already-fetched adapter status text; fetched
                           when not given.
        """
        ssid = self.fetch_current_ssid()
        if status_output is None:
            status_output = self.fetch_adapter_status()
        return parse_link_state(status_output, current_ssid=ssid)

    # ── Path quality ─────────────────────────────────────────
    def get_router_ip(self) -> Optional[str]:
        output = self._run(["networksetup", "-getinfo", "Wi-Fi"])
        if output is None:
            return None
        return parse_router_ip(output)

    def ping(self, host: str) -> PathQuality:
        """Ping *host* and parse the statistics.

        Ping exits non-zero when probes are lost; its output is still
        parsed.  Only a command that could not run gives all-None.
        """
        if not validate_host(host):
            log.warning("Refusing to ping invalid host: %r", host)
            return PathQuality()

        rc, stdout, stderr = self._exec([
            "ping",
            "-c", str(self.settings.ping_count),
            "-t", str(self.settings.ping_timeout),
            host,
        ])
        if rc < 0:
            log.warning("ping %s could not run: %s", host, stderr.strip())
            return PathQuality()
        return parse_ping_output(stdout)

    # ── DNS ──────────────────────────────────────────────────
    def measure_dns_lookup(self, server: str) -> Optional[str]:
        """dig output for one lookup against *server*, or None on failure."""
        if not validate_host(server):
            log.debug("Skipping DNS lookup against %r", server)
            return None
        return self._run([
            "dig",
            f"@{server}",
            self.settings.dns_probe_host,
            "+noall",
            "+stats",
            "+tries=1",
            "+time=2",
        ])

    def get_dns_state(self) -> DnsState:
        resolver_output = self._run(["scutil", "--dns"]) or ""
        state = build_dns_state(resolver_output)
        if not state.servers:
            return state
        lookup_output = self.measure_dns_lookup(state.servers[0])
        return build_dns_state(resolver_output, lookup_output)

    # ── Snapshots ────────────────────────────────────────────
    def collect_metrics(self, status_output: Optional[str] = None) -> NetworkMetrics:
        """
        Gather a full snapshot.

        Link state, router discovery, the internet ping and DNS run
        concurrently; the router ping waits for router discovery.

        Args:
            status_output: Already-fetched adapter status text, shared
                           with :meth:`check_interference` by callers
                           that need both.
        """
        log.debug("collect_metrics: starting data collection")

        with ThreadPoolExecutor(max_workers=4) as executor:
            wifi_future = executor.submit(self.get_link_state, status_output)
            router_future = executor.submit(self.get_router_ip)
            internet_future = executor.submit(self.ping, self.settings.internet_target)
            dns_future = executor.submit(self.get_dns_state)

            router_ip = router_future.result()
            router_ping = None
            if router_ip:
                router_ping = executor.submit(self.ping, router_ip).result()
            else:
                log.debug("collect_metrics: no router IP found, skipping router ping")

            wifi = wifi_future.result()
            internet_ping = internet_future.result()
            dns = dns_future.result()

        log.debug(
            "collect_metrics: complete - wifi connected: %s, router: %s, internet ping: %sms",
            wifi.connected, router_ip, internet_ping.latency_ms,
        )

        return NetworkMetrics(
            wifi=wifi,
            router_ip=router_ip,
            router_ping=router_ping,
            internet_ping=internet_ping,
            dns=dns,
        )

    def check_interference(self, status_output: Optional[str] = None) -> InterferenceVerdict:
        """Analyze interference from the link state and scan listing.

        The adapter status is fetched once (unless given) and feeds both
        parsers.
        """
        log.debug("check_interference: starting analysis")
        if status_output is None:
            status_output = self.fetch_adapter_status()
        link = self.get_link_state(status_output)
        neighbors = parse_neighbor_networks(status_output)
        verdict = self.analyzer.analyze(link, neighbors)
        log.debug(
            "check_interference: complete - level: %s, nearby networks: %d",
            verdict.interference_level.value, len(verdict.neighbors),
        )
        return verdict

    # ── Throughput ───────────────────────────────────────────
    def run_speed_test(self) -> SpeedTestResults:
        """Throughput test; jitter comes from pinging the chosen server."""
        return speed_test.run_speed_test(self._speedtest_client, ping=self.ping)
