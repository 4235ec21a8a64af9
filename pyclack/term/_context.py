import sys
import logging


logger = logging.getLogger("pyclack")


class TerminalContext:
    """Context manager that puts the terminal in raw mode.

    Instantiating this class produces a class corresponding with the
    current platform. In raw mode keys are not echoed, input is not
    line-buffered, and ctrl+c arrives as a key instead of a signal.
    """

    def __new__(cls, **kwargs):
        if sys.platform.startswith("win"):
            from ._context_windows import WindowsTerminalContext as TerminalContext
        else:
            from ._context_unix import UnixTerminalContext as TerminalContext
        return super().__new__(TerminalContext)

    def __init__(self, stdin=None, stdout=None):
        self._entered = False

        stdin = stdin or sys.__stdin__
        stdout = stdout or sys.__stdout__
        self.fd_in = stdin.fileno()
        self.fd_out = stdout.fileno()

        self.is_tty = stdin.isatty()
        if not self.is_tty:
            logger.warning(f"Input is not a tty, not entering raw mode: {stdin}")

    def __enter__(self):
        if self._entered:
            raise RuntimeError("Can only enter the context state once.")
        self._entered = True
        if self.is_tty:
            self._store_terminal_mode()
            self._set_terminal_mode()
        return self

    def __exit__(self, *args):
        self._entered = False
        self.reset()

    def reset(self):
        """Reset the terminal to the state it was when the context was entered."""
        if self.is_tty:
            self._reset_terminal_mode()

    def wait_for_input(self, timeout):
        """Wait until there is input to read. Returns whether there is."""
        raise NotImplementedError()

    # For subclasses to implement

    def _store_terminal_mode(self):
        raise NotImplementedError()

    def _set_terminal_mode(self):
        raise NotImplementedError()

    def _reset_terminal_mode(self):
        raise NotImplementedError()
