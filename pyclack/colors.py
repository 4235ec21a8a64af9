"""
Style helpers that wrap text in SGR escape codes.

Colors are switched off when NO_COLOR is set, and forced on with
FORCE_COLOR. Otherwise we emit them when stdout looks like a terminal.
"""

import os
import sys


def _detect():
    argv = sys.argv or []
    env = os.environ
    if "NO_COLOR" in env or "--no-color" in argv:
        return False
    if "FORCE_COLOR" in env or "--color" in argv:
        return True
    if sys.platform.startswith("win"):
        return True
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty()) and env.get("TERM") != "dumb"


_enabled = _detect()


def is_enabled():
    return _enabled


def set_enabled(flag):
    """Turn styling on or off for all helpers in this module."""
    global _enabled
    _enabled = bool(flag)


def _formatter(open, close):
    open_code = f"\x1b[{open}m"
    close_code = f"\x1b[{close}m"

    def format(text):
        text = str(text)
        if not _enabled:
            return text
        # Re-open our style wherever an inner style closes with the same code
        if close_code in text:
            text = text.replace(close_code, close_code + open_code)
        return open_code + text + close_code

    return format


dim = _formatter(2, 22)
inverse = _formatter(7, 27)
hidden = _formatter(8, 28)
strikethrough = _formatter(9, 29)

red = _formatter(31, 39)
green = _formatter(32, 39)
yellow = _formatter(33, 39)
magenta = _formatter(35, 39)
cyan = _formatter(36, 39)
gray = _formatter(90, 39)
