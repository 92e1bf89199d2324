"""Tests for wifihealth/monitoring/speed_test.py: throughput test."""
import speedtest

from conftest import FakeRunner, FakeSpeedtest
from wifihealth.diagnostics.metric_status import MetricStatus, summarize_speed_test
from wifihealth.monitoring.collector import WifiCollector
from wifihealth.monitoring.speed_test import (
    SpeedTestResults,
    run_speed_test,
    server_host,
)
from wifihealth.parsers.path_quality import PathQuality


class TestRunSpeedTest:
    def test_converts_bits_to_mbps(self):
        results = run_speed_test(lambda: FakeSpeedtest())
        assert results.download_mbps == 94.52
        assert results.upload_mbps == 11.26
        assert results.latency_ms == 18.43
        assert results.jitter_ms is None

    def test_runs_in_order(self):
        client = FakeSpeedtest()
        run_speed_test(lambda: client)
        assert client.calls == ["get_best_server", "download", "upload"]

    def test_jitter_from_server_ping(self):
        pinged = []

        def ping(host):
            pinged.append(host)
            return PathQuality(latency_ms=18.6, jitter_ms=0.8, packet_loss_percent=0.0)

        results = run_speed_test(lambda: FakeSpeedtest(), ping=ping)
        assert pinged == ["speedtest.example.net"]
        assert results.jitter_ms == 0.8

    def test_library_error_gives_empty_results(self, caplog):
        error = speedtest.SpeedtestBestServerFailure("Unable to connect to servers")
        results = run_speed_test(lambda: FakeSpeedtest(error=error))
        assert results == SpeedTestResults()
        assert results.is_unknown
        assert "Speed test failed" in caplog.text

    def test_client_construction_error(self):
        def factory():
            raise OSError("Network is unreachable")

        assert run_speed_test(factory) == SpeedTestResults()

    def test_zero_figures_are_absent(self):
        results = run_speed_test(lambda: FakeSpeedtest(download=0, upload=0.0, ping=0))
        assert results.download_mbps is None
        assert results.upload_mbps is None
        assert results.latency_ms is None

    def test_to_dict(self):
        data = run_speed_test(lambda: FakeSpeedtest()).to_dict()
        assert data == {
            "download_mbps": 94.52,
            "upload_mbps": 11.26,
            "latency_ms": 18.43,
            "jitter_ms": None,
        }


class TestServerHost:
    def test_strips_port(self):
        assert server_host({"host": "speedtest.example.net:8080"}) == "speedtest.example.net"

    def test_without_port(self):
        assert server_host({"host": "speedtest.example.net"}) == "speedtest.example.net"

    def test_missing(self):
        assert server_host({}) is None
        assert server_host(None) is None


class TestCollectorSpeedTest:
    def test_pings_chosen_server(self, healthy_runner):
        collector = WifiCollector(runner=healthy_runner, speedtest_client=FakeSpeedtest)
        results = collector.run_speed_test()
        assert results.download_mbps == 94.52
        assert results.jitter_ms == 0.802
        assert ["ping", "-c", "3", "-t", "2", "speedtest.example.net"] in healthy_runner.calls

    def test_unpingable_server_leaves_jitter_absent(self):
        collector = WifiCollector(runner=FakeRunner({}), speedtest_client=FakeSpeedtest)
        results = collector.run_speed_test()
        assert results.upload_mbps == 11.26
        assert results.jitter_ms is None


class TestSpeedStatus:
    def test_summary(self):
        summary = summarize_speed_test(SpeedTestResults(
            download_mbps=94.5, upload_mbps=5.0, latency_ms=150.0, jitter_ms=None,
        ))
        assert summary == {
            "download": MetricStatus.GOOD,
            "upload": MetricStatus.WARNING,
            "latency": MetricStatus.BAD,
            "jitter": MetricStatus.NEUTRAL,
        }

    def test_failed_test_is_neutral(self):
        summary = summarize_speed_test(SpeedTestResults())
        assert set(summary.values()) == {MetricStatus.NEUTRAL}
