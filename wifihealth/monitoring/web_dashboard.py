"""
JSON HTTP surface for wifi-health snapshots.

Routes:
    GET /api/metrics       -- link, path-quality and DNS snapshot
    GET /api/interference  -- interference verdict and suggestions
    GET /api/status        -- per-metric good/warning/bad summary
    GET /api/speedtest     -- download/upload speed test (slow, ~30 s)
"""
import logging

from flask import Flask, jsonify

from version import __version__
from wifihealth.diagnostics.metric_status import (
    interference_status,
    summarize_metrics,
    summarize_speed_test,
)
from wifihealth.monitoring.collector import WifiCollector
from wifihealth.utils.common import (
    DEFAULT_DASHBOARD_HOST,
    DEFAULT_DASHBOARD_PORT,
    config_section,
    load_config,
    validate_hostname,
    validate_port,
)
from wifihealth.utils.log import setup_logging

log = logging.getLogger("dashboard")

app = Flask(__name__)


def get_collector():
    """Collector built from the current config file."""
    return WifiCollector.from_config(load_config())


@app.route('/api/metrics')
def metrics():
    return jsonify(get_collector().collect_metrics().to_dict())


@app.route('/api/interference')
def interference():
    return jsonify(get_collector().check_interference().to_dict())


@app.route('/api/status')
def status():
    collector = get_collector()
    # One system_profiler run feeds both snapshots
    status_output = collector.fetch_adapter_status()
    snapshot = collector.collect_metrics(status_output)
    verdict = collector.check_interference(status_output)

    summary = {name: value.value for name, value in summarize_metrics(snapshot).items()}
    summary["interference"] = interference_status(verdict.interference_level).value
    return jsonify({
        "version": __version__,
        "connected": snapshot.wifi.connected,
        "ssid": snapshot.wifi.ssid,
        "status": summary,
    })


@app.route('/api/speedtest')
def speed_test():
    results = get_collector().run_speed_test()
    status = {name: value.value for name, value in summarize_speed_test(results).items()}
    return jsonify({**results.to_dict(), "status": status})


def resolve_bind_address(cfg):
    """Validated (host, port) from the ``dashboard`` config section."""
    dash = config_section(cfg, "dashboard")
    host = dash.get('host', DEFAULT_DASHBOARD_HOST)
    port = dash.get('port', DEFAULT_DASHBOARD_PORT)

    ok, err = validate_hostname(host)
    if not ok:
        log.error("Invalid dashboard host: %s. Falling back to %s", err, DEFAULT_DASHBOARD_HOST)
        host = DEFAULT_DASHBOARD_HOST
    ok, err = validate_port(port)
    if not ok:
        log.error("Invalid dashboard port: %s. Falling back to %s", err, DEFAULT_DASHBOARD_PORT)
        port = DEFAULT_DASHBOARD_PORT

    if host == '0.0.0.0':
        log.warning("Dashboard binding to all interfaces (0.0.0.0). "
                    "No authentication is enabled. Restrict to 127.0.0.1 in production.")
    return host, port


def main():
    setup_logging()
    host, port = resolve_bind_address(load_config())
    log.info("Starting wifi-health API on %s:%s...", host, port)
    app.run(host=host, port=port)


if __name__ == '__main__':
    main()
