"""
Subprocess helpers for the network tools.

Commands are always argument lists and never go through a shell.  Values
that end up on a command line (ping targets, DNS servers, interface
names) come from config or from parsed tool output, so they are checked
with validate_host() / validate_interface() first.
"""

import ipaddress
import logging
import re
import subprocess
from typing import Sequence, Tuple

log = logging.getLogger("system")

# (returncode, stdout, stderr)
CommandResult = Tuple[int, str, str]

# Return code used when the process could not be started or was killed
SPAWN_FAILED = -1

_HOSTNAME_RE = re.compile(r'^[a-zA-Z0-9.-]+$')
_INTERFACE_RE = re.compile(r'^[a-zA-Z0-9]+$')
MAX_HOSTNAME_LEN = 253
MAX_INTERFACE_LEN = 15


def validate_host(host) -> bool:
    """True for an IP literal or a plain DNS name that cannot pass as a flag."""
    if not isinstance(host, str) or not host or host.startswith('-'):
        return False
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return len(host) <= MAX_HOSTNAME_LEN and bool(_HOSTNAME_RE.match(host))
    return True


def validate_interface(name) -> bool:
    """True for a BSD-style interface name such as ``en0``."""
    return (
        isinstance(name, str)
        and len(name) <= MAX_INTERFACE_LEN
        and bool(_INTERFACE_RE.match(name))
    )


def run_command(
    args: Sequence[str],
    timeout: int = 30,
    suppress_errors: bool = False,
) -> CommandResult:
    """
    Run a network tool and capture its output.

    A non-zero exit status is passed through untouched: ping exits
    non-zero when probes are lost but still prints its statistics.

    Args:
        args: Command and arguments
        timeout: Seconds before the process is killed
        suppress_errors: Don't log spawn failures

    Returns:
        (returncode, stdout, stderr); returncode is SPAWN_FAILED when the
        tool is missing, could not be started, or timed out
    """
    argv = list(args)
    try:
        proc = subprocess.run(
            argv,
            shell=False,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        message = f"Timeout after {timeout}s"
    except FileNotFoundError:
        message = "Command not found"
    except OSError as e:
        message = str(e)
    else:
        return proc.returncode, proc.stdout or "", proc.stderr or ""

    if not suppress_errors:
        log.warning("%s could not run: %s", argv[0] if argv else "<empty>", message)
    return SPAWN_FAILED, "", message
