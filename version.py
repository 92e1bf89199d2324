"""
wifi-health version.

Read by setup.py before install, so this module must not import anything.
"""

MAJOR = 0
MINOR = 3
PATCH = 0
STATUS = "Beta"


def get_version() -> str:
    """``MAJOR.MINOR.PATCH-STATUS``, e.g. ``0.3.0-Beta``."""
    return f"{MAJOR}.{MINOR}.{PATCH}-{STATUS}"


__version__ = get_version()
