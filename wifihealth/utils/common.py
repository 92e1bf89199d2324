"""
Paths, defaults and the JSON config file.

config.json is optional.  It has three sections, all optional:

    collector   interface, internet_target, dns_probe_host,
                ping_count, ping_timeout, command_timeout
    analyzer    channel_delta_24ghz, center_delta_5ghz_mhz
    dashboard   host, port

Problems are reported as warnings and never stop a run; every consumer
falls back to its default for a value it cannot use.
"""
import json
import logging
import os

from . import system

log = logging.getLogger("config")


def get_real_user_home():
    """Home directory of the invoking user, also when run through sudo."""
    sudo_user = os.environ.get("SUDO_USER")
    if sudo_user:
        try:
            import pwd
            return pwd.getpwnam(sudo_user).pw_dir
        except (KeyError, ImportError):
            log.debug("SUDO_USER %r not resolvable, using ~", sudo_user)
    return os.path.expanduser("~")


# ── Paths ────────────────────────────────────────────────────
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

CONFIG_PATH = os.environ.get("WIFI_HEALTH_CONFIG", os.path.join(BASE_DIR, "config.json"))

# ── Collector defaults ───────────────────────────────────────
DEFAULT_INTERFACE = "en0"
DEFAULT_INTERNET_TARGET = "1.1.1.1"
DEFAULT_PING_COUNT = 3
DEFAULT_PING_TIMEOUT = 2
DEFAULT_DNS_PROBE_HOST = "google.com"
DEFAULT_COMMAND_TIMEOUT = 15

# ── API server defaults ──────────────────────────────────────
DEFAULT_DASHBOARD_HOST = "127.0.0.1"
DEFAULT_DASHBOARD_PORT = 5000

MAX_HOSTNAME_LEN = system.MAX_HOSTNAME_LEN

_UNSET = object()


# ── Validators: (ok, error_message) ──────────────────────────
# Host and interface rules live in utils.system; these add the messages.
def validate_hostname(host):
    """Check a host name or IP literal that will be put on a command line."""
    if not isinstance(host, str) or not host:
        return False, "hostname must be a non-empty string"
    if host.startswith('-'):
        return False, "hostname must not start with '-' (flag injection)"
    if len(host) > MAX_HOSTNAME_LEN:
        return False, f"hostname exceeds {MAX_HOSTNAME_LEN} characters"
    if not system.validate_host(host):
        return False, f"not an IP address or host name: {host!r}"
    return True, ""


def validate_port(port):
    if isinstance(port, bool) or not isinstance(port, int):
        return False, f"port must be an integer, got {type(port).__name__}"
    if not 1 <= port <= 65535:
        return False, f"port must be 1-65535, got {port}"
    return True, ""


def _validate_interface(name):
    if system.validate_interface(name):
        return True, ""
    return False, (
        f"must be alphanumeric, at most {system.MAX_INTERFACE_LEN} characters, "
        f"got {name!r}"
    )


def _validate_positive_int(value):
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return True, ""
    return False, f"must be a positive integer, got {value!r}"


def _validate_positive(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return True, ""
    return False, f"must be a positive number, got {value!r}"


# section -> key -> validator
CONFIG_SCHEMA = {
    "collector": {
        "interface": _validate_interface,
        "internet_target": validate_hostname,
        "dns_probe_host": validate_hostname,
        "ping_count": _validate_positive_int,
        "ping_timeout": _validate_positive_int,
        "command_timeout": _validate_positive_int,
    },
    "analyzer": {
        "channel_delta_24ghz": _validate_positive,
        "center_delta_5ghz_mhz": _validate_positive,
    },
    "dashboard": {
        "host": validate_hostname,
        "port": validate_port,
    },
}


def validate_config(cfg):
    """Return a list of human-readable problems; empty when *cfg* is usable.

    Unknown sections and keys are ignored.
    """
    if not isinstance(cfg, dict):
        return ["Config is not a JSON object"]

    warnings = []
    for section, checks in CONFIG_SCHEMA.items():
        values = cfg.get(section, {})
        if not isinstance(values, dict):
            warnings.append(f"{section} section must be a JSON object")
            continue
        for key, check in checks.items():
            if values.get(key) is None:
                continue
            ok, err = check(values[key])
            if not ok:
                warnings.append(f"{section}.{key}: {err}")
    return warnings


def valid_section_values(cfg, name):
    """Values of section *name* that pass CONFIG_SCHEMA.

    Consumers build their settings from this, so a value is used exactly
    when validate_config() has no warning for it.
    """
    section = config_section(cfg, name)
    values = {}
    for key, check in CONFIG_SCHEMA[name].items():
        value = section.get(key)
        if value is not None and check(value)[0]:
            values[key] = value
    return values


def load_config(fallback=_UNSET, path=None):
    """Read and validate config.json.

    Args:
        fallback: Returned when the file is missing, unreadable or not
                  JSON.  Defaults to ``{}``.
        path: Config file to read; CONFIG_PATH when not given.
    """
    if fallback is _UNSET:
        fallback = {}
    path = path or CONFIG_PATH
    try:
        with open(path, 'r') as f:
            cfg = json.load(f)
    except FileNotFoundError:
        log.debug("No config at %s, using defaults", path)
        return fallback
    except (json.JSONDecodeError, PermissionError) as e:
        log.warning("Ignoring config %s: %s", path, e)
        return fallback

    for warning in validate_config(cfg):
        log.warning(warning)
    return cfg


def config_section(cfg, name):
    """``cfg[name]`` when it is a dict, else an empty dict."""
    if not isinstance(cfg, dict):
        return {}
    section = cfg.get(name, {})
    return section if isinstance(section, dict) else {}
