"""
Utilities to work with the terminal and escape sequences.

This borrows ideas from the heart of prompt_toolkit and Textual. We only
need a sensible subset of vt100, which works on Unix terminals, win10 and
up, and xterm.js (e.g. VSCode).

We don't use curses, because that's Unix only, and would require a whole
separate implementation for Windows. Only switching the terminal to raw
mode differs between the platforms, which is why the terminal context has
an implementation for Unix and one for Windows.
"""

from ._context import TerminalContext  # noqa
from ._output import TerminalOutput  # noqa
from ._input_reader import InputReader, read_keys, block  # noqa
from .input_keys import EscapeCodeDecoder  # noqa
