"""
Box-drawing primitives for the terminal report.

Every helper returns one indented line.  Widths count visible columns,
so values may carry ANSI colors without breaking the frame.
"""
import re
import shutil

from wifihealth.diagnostics.metric_status import MetricStatus


# ── ANSI Styling ─────────────────────────────────────────────
class C:
    """Terminal color codes."""
    RST  = '\033[0m'
    BOLD = '\033[1m'
    DIM  = '\033[2m'
    RED  = '\033[91m'
    GRN  = '\033[92m'
    YLW  = '\033[93m'
    CYN  = '\033[96m'
    WHT  = '\033[97m'


STATUS_COLORS = {
    MetricStatus.GOOD: C.GRN,
    MetricStatus.WARNING: C.YLW,
    MetricStatus.BAD: C.RED,
    MetricStatus.NEUTRAL: C.DIM,
}


# ── Frame Characters ─────────────────────────────────────────
BOX_H  = '─'
BOX_V  = '│'
BOX_TL = '┌'
BOX_TR = '┐'
BOX_BL = '└'
BOX_BR = '┘'
BOX_LT = '├'
BOX_RT = '┤'

INDENT = "  "
# "│ " + content + " │"
SIDE_COLS = 4

_ANSI_RE = re.compile(r'\033\[[0-9;]*m')


# ── Helpers ──────────────────────────────────────────────────
def strip_ansi(text):
    return _ANSI_RE.sub('', text)


def visible_len(text):
    """Column width of *text* once color codes are removed."""
    return len(strip_ansi(text))


def cols():
    """Terminal width, 80 when it cannot be determined."""
    return shutil.get_terminal_size((80, 24)).columns


def colorize(text, status):
    """Color *text* by MetricStatus; unknown statuses render white."""
    return f"{STATUS_COLORS.get(status, C.WHT)}{text}{C.RST}"


def _edge(w, left, right):
    return f"{INDENT}{C.DIM}{left}{BOX_H * (w - 2)}{right}{C.RST}"


def _side():
    return f"{C.DIM}{BOX_V}{C.RST}"


# ── Box Lines ────────────────────────────────────────────────
def box_top(w):
    return _edge(w, BOX_TL, BOX_TR)


def box_bot(w):
    return _edge(w, BOX_BL, BOX_BR)


def box_row(content, w):
    """Framed row of total width *w*; overlong content pushes the right edge out."""
    pad = max(0, w - SIDE_COLS - visible_len(content))
    return f"{INDENT}{_side()} {content}{' ' * pad} {_side()}"


def box_centered(content, w):
    """Framed row with *content* centered."""
    spare = max(0, w - SIDE_COLS - visible_len(content))
    left = spare // 2
    return box_row(f"{' ' * left}{content}{' ' * (spare - left)}", w)


def box_section(label, w):
    """Divider with *label* set in the middle of the rule."""
    tag = f" {label} "
    rule = max(0, w - 2 - len(tag))
    left = rule // 2
    return (
        f"{INDENT}{C.DIM}{BOX_LT}{BOX_H * left}{C.RST}"
        f"{C.BOLD}{C.CYN}{tag}{C.RST}"
        f"{C.DIM}{BOX_H * (rule - left)}{BOX_RT}{C.RST}"
    )


def box_kv(key, value, w):
    """``key:  value`` row with the key in cyan."""
    return box_row(f"{C.CYN}{key}:{C.RST}  {C.WHT}{value}{C.RST}", w)
