"""
Terminal report for a wifi-health snapshot.

Renders link, path-quality, DNS, interference and speed-test panels
with the box primitives from widgets.py.  Any of them may be omitted.
"""
from wifihealth.diagnostics.metric_status import (
    MetricStatus,
    download_status,
    interference_status,
    jitter_status,
    link_rate_status,
    loss_status,
    ping_status,
    signal_status,
    snr_status,
    speed_latency_status,
    upload_status,
)
from wifihealth.parsers.link_state import WifiGeneration
from wifihealth.ui.widgets import (
    C, cols, colorize,
    box_top, box_bot, box_row, box_centered, box_section, box_kv,
)


def _fmt(value, unit, status):
    if value is None:
        return colorize("--", MetricStatus.NEUTRAL)
    if isinstance(value, float):
        text = f"{value:.1f} {unit}"
    else:
        text = f"{value} {unit}"
    return colorize(text, status)


def _title(w):
    title = f"{C.BOLD}{C.GRN}WI-FI HEALTH{C.RST}  {C.DIM}Snapshot{C.RST}"
    return [box_top(w), box_centered(title, w), box_bot(w)]


def _wifi_panel(wifi, w):
    lines = [box_top(w), box_section("WI-FI", w)]
    if not wifi.connected:
        lines.append(box_row(f"{C.YLW}Not connected{C.RST}", w))
    else:
        lines.append(box_kv("SSID", wifi.ssid, w))
    band = wifi.frequency_band
    if isinstance(band, WifiGeneration):
        band = band.value
    lines.append(box_kv("PHY", band or "--", w))
    lines.append(box_kv("Channel", wifi.channel_descriptor or "--", w))
    lines.append(box_kv("Signal", _fmt(wifi.signal_dbm, "dBm", signal_status(wifi.signal_dbm)), w))
    lines.append(box_kv("Noise", _fmt(wifi.noise_dbm, "dBm", MetricStatus.NEUTRAL), w))
    lines.append(box_kv(
        "Link Rate",
        _fmt(wifi.link_rate_mbps, "Mbps", link_rate_status(wifi.link_rate_mbps)), w,
    ))
    lines.append(box_bot(w))
    return lines


def _ping_rows(label, result, w):
    if result is None:
        return [box_kv(label, colorize("not measured", MetricStatus.NEUTRAL), w)]
    return [
        box_kv(f"{label} latency", _fmt(result.latency_ms, "ms", ping_status(result.latency_ms)), w),
        box_kv(f"{label} jitter", _fmt(result.jitter_ms, "ms", jitter_status(result.jitter_ms)), w),
        box_kv(
            f"{label} loss",
            _fmt(result.packet_loss_percent, "%", loss_status(result.packet_loss_percent)), w,
        ),
    ]


def _network_panel(metrics, w):
    lines = [box_top(w), box_section("NETWORK", w)]
    lines.append(box_kv("Router", metrics.router_ip or "--", w))
    lines.extend(_ping_rows("Router", metrics.router_ping, w))
    lines.extend(_ping_rows("Internet", metrics.internet_ping, w))
    servers = ", ".join(metrics.dns.servers) or "none configured"
    lines.append(box_kv("DNS", servers, w))
    latency = metrics.dns.lookup_latency_ms
    lines.append(box_kv("DNS lookup", _fmt(latency, "ms", ping_status(latency)), w))
    lines.append(box_bot(w))
    return lines


def _interference_panel(verdict, w):
    lines = [box_top(w), box_section("INTERFERENCE", w)]
    level = verdict.interference_level
    lines.append(box_kv("Level", colorize(level.value, interference_status(level)), w))
    snr = _fmt(verdict.snr_db, "dB", snr_status(verdict.snr_db))
    lines.append(box_kv("SNR", f"{snr}  ({verdict.snr_quality.value})", w))
    lines.append(box_kv("Same channel", verdict.same_channel_count, w))
    lines.append(box_kv("Overlapping", verdict.overlapping_count, w))
    lines.append(box_kv("Nearby", len(verdict.neighbors), w))
    lines.append(box_section("SUGGESTIONS", w))
    for suggestion in verdict.suggestions:
        lines.append(box_row(f"- {suggestion}", w))
    lines.append(box_bot(w))
    return lines


def _speed_panel(results, w):
    lines = [box_top(w), box_section("SPEED TEST", w)]
    if results.is_unknown:
        lines.append(box_row(f"{C.YLW}Speed test failed{C.RST}", w))
    lines.append(box_kv(
        "Download", _fmt(results.download_mbps, "Mbps", download_status(results.download_mbps)), w,
    ))
    lines.append(box_kv(
        "Upload", _fmt(results.upload_mbps, "Mbps", upload_status(results.upload_mbps)), w,
    ))
    lines.append(box_kv(
        "Latency", _fmt(results.latency_ms, "ms", speed_latency_status(results.latency_ms)), w,
    ))
    lines.append(box_kv("Jitter", _fmt(results.jitter_ms, "ms", jitter_status(results.jitter_ms)), w))
    lines.append(box_bot(w))
    return lines


def render_report(metrics=None, verdict=None, width=None, speed=None):
    """Return the report as a list of lines."""
    w = width or min(cols() - 4, 72)
    lines = _title(w)
    if metrics is not None:
        lines += [""] + _wifi_panel(metrics.wifi, w)
        lines += [""] + _network_panel(metrics, w)
    if verdict is not None:
        lines += [""] + _interference_panel(verdict, w)
    if speed is not None:
        lines += [""] + _speed_panel(speed, w)
    return lines


def print_report(metrics=None, verdict=None, speed=None):
    print()
    for line in render_report(metrics, verdict, speed=speed):
        print(line)
    print()
