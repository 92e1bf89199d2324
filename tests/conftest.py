import json
import os
import sys
from types import SimpleNamespace

import pytest

# Ensure project root is on sys.path so wifihealth.* and launcher import
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

CI = os.environ.get('CI', 'false').lower() == 'true'


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "network: mark test as requiring real network tools"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip network tests in CI environment."""
    if not CI:
        return

    skip_network = pytest.mark.skip(reason="Network tests skipped in CI")
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


# ── Captured tool output ─────────────────────────────────────
ADAPTER_STATUS = """\
Wi-Fi:

      Software Versions:
          CoreWLAN: 16.0 (1657)
          CoreWLANKit: 16.0 (1657)

      Interfaces:
        en0:
          Card Type: Wi-Fi
          MAC Address: 14:7d:da:c0:ff:ee
          Locale: FCC
          Country Code: US
          Supported PHY Modes: 802.11 a/b/g/n/ac/ax
          Supported Channels: 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 36, 40, 44, 48, 149, 153
          Wake On Wireless: Supported
          AirDrop: Supported
          AirDrop Channel: 44
          Status: Connected

      Current Network Information:
        MyNetwork:
          PHY Mode: 802.11ax
          Channel: 149 (5GHz, 80MHz)
          Network Type: Infrastructure
          Security: WPA3 Personal
          Signal / Noise: -61 dBm / -90 dBm
          Transmit Rate: 576
          MCS Index: 9
"""

SCAN_LISTING = """
        Other Local Wi-Fi Networks:
                    Neighbor1:
                          PHY Mode: 802.11ax
                          Channel: 6 (2.4GHz, 20MHz)
                          Security: WPA2 Personal
                    Neighbor2:
                          PHY Mode: 802.11ac
                          Channel: 149 (5GHz, 80MHz)
                          Security: WPA2 Personal
        """

CURRENT_SSID = "Current Wi-Fi Network: MyNetwork\n"
NOT_ASSOCIATED = "You are not associated with an AirPort network.\n"

NETWORK_INFO = """\
DHCP Configuration
IP address: 192.168.1.23
Subnet mask: 255.255.255.0
Router: 192.168.1.1
Client ID:
IPv6: Automatic
"""

PING_OK = """
PING 1.1.1.1 (1.1.1.1): 56 data bytes
64 bytes from 1.1.1.1: icmp_seq=0 ttl=55 time=12.345 ms
64 bytes from 1.1.1.1: icmp_seq=1 ttl=55 time=14.567 ms
64 bytes from 1.1.1.1: icmp_seq=2 ttl=55 time=11.234 ms

--- 1.1.1.1 ping statistics ---
3 packets transmitted, 3 packets received, 0.0% packet loss
round-trip min/avg/max/stddev = 11.234/12.715/14.567/1.234 ms
"""

PING_ROUTER = """
PING 192.168.1.1 (192.168.1.1): 56 data bytes

--- 192.168.1.1 ping statistics ---
3 packets transmitted, 3 packets received, 0.0% packet loss
round-trip min/avg/max/stddev = 2.101/3.456/5.012/0.987 ms
"""

PING_ALL_LOST = """
PING 10.0.0.1 (10.0.0.1): 56 data bytes

--- 10.0.0.1 ping statistics ---
3 packets transmitted, 0 packets received, 100.0% packet loss
"""

PING_SPEED_SERVER = """
PING speedtest.example.net (203.0.113.10): 56 data bytes

--- speedtest.example.net ping statistics ---
3 packets transmitted, 3 packets received, 0.0% packet loss
round-trip min/avg/max/stddev = 17.902/18.611/19.730/0.802 ms
"""

SCUTIL_DNS = """
DNS configuration

resolver #1
  nameserver[0] : 192.168.1.1
  nameserver[1] : 8.8.8.8
  if_index : 6 (en0)
  flags    : Request A records

resolver #2
  nameserver[0] : 192.168.1.1
  flags    : Request A records
"""

DIG_STATS = """
;; Query time: 23 msec
;; SERVER: 192.168.1.1#53(192.168.1.1)
;; WHEN: Mon Jan 15 12:00:00 PST 2025
;; MSG SIZE  rcvd: 55
"""


class FakeRunner:
    """Command runner returning canned ``(rc, stdout, stderr)`` tuples.

    Responses are keyed by the command name, or by ``"ping <host>"`` for
    ping.  Unknown commands behave as if the tool is missing.
    """

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, args, timeout=30, suppress_errors=False):
        self.calls.append(list(args))
        key = args[0]
        if key == "ping":
            key = f"ping {args[-1]}"
        response = self.responses.get(key)
        if response is None:
            return -1, "", "Command not found"
        if isinstance(response, str):
            return 0, response, ""
        return response

    def commands(self):
        return [call[0] for call in self.calls]


class FakeSpeedtest:
    """Stand-in for ``speedtest.Speedtest``: fixed bits/s and ping figures.

    *error* is raised from get_best_server() when given.
    """

    def __init__(self, download=94_520_000.0, upload=11_260_000.0, ping=18.43,
                 host="speedtest.example.net:8080", error=None):
        self.server = {"host": host, "sponsor": "Example ISP"}
        self.results = SimpleNamespace(ping=ping)
        self._download = download
        self._upload = upload
        self._error = error
        self.calls = []

    def get_best_server(self):
        self.calls.append("get_best_server")
        if self._error is not None:
            raise self._error
        return self.server

    def download(self):
        self.calls.append("download")
        return self._download

    def upload(self):
        self.calls.append("upload")
        return self._upload


@pytest.fixture
def full_status():
    """Adapter status including the scan listing."""
    return ADAPTER_STATUS + SCAN_LISTING


@pytest.fixture
def healthy_responses(full_status):
    return {
        "system_profiler": full_status,
        "scutil": SCUTIL_DNS,
        "dig": DIG_STATS,
        "ping 1.1.1.1": PING_OK,
        "ping 192.168.1.1": PING_ROUTER,
        "ping speedtest.example.net": PING_SPEED_SERVER,
    }


class NetworksetupRunner(FakeRunner):
    """FakeRunner that tells the two networksetup sub-commands apart."""

    def __init__(self, responses, ssid_output=CURRENT_SSID, info_output=NETWORK_INFO):
        super().__init__(responses)
        self.ssid_output = ssid_output
        self.info_output = info_output

    def __call__(self, args, timeout=30, suppress_errors=False):
        if args[0] == "networksetup":
            self.calls.append(list(args))
            output = self.ssid_output if "-getairportnetwork" in args else self.info_output
            if output is None:
                return 1, "", "networksetup failed"
            return 0, output, ""
        return super().__call__(args, timeout=timeout, suppress_errors=suppress_errors)


@pytest.fixture
def healthy_runner(healthy_responses):
    return NetworksetupRunner(healthy_responses)


@pytest.fixture
def tmp_config(tmp_path):
    """Create a temporary config.json and return its path."""
    config = {
        "collector": {
            "interface": "en1",
            "internet_target": "9.9.9.9",
            "ping_count": 5,
        },
        "analyzer": {"channel_delta_24ghz": 4, "center_delta_5ghz_mhz": 20},
        "dashboard": {"host": "127.0.0.1", "port": 5050},
    }
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(config))
    return str(config_file)


@pytest.fixture
def bad_config(tmp_path):
    """Create an invalid JSON config file and return its path."""
    config_file = tmp_path / "config.json"
    config_file.write_text("{invalid json content")
    return str(config_file)
