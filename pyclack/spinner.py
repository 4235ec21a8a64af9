import logging
import threading
from functools import partial

from . import colors
from .prompts import BAR
from .term import TerminalOutput, block as block_terminal


logger = logging.getLogger("pyclack")


class Spinner:
    """Shows a message with animated dots while work is being done.

    Keyboard input is blocked between start() and stop(). Only one
    spinner should be running at a time, since both draw on the same lines.
    """

    def __init__(self, output=None, block=None, interval=0.3):
        self._output = output or TerminalOutput()
        self._block = block or partial(block_terminal, output=self._output)
        self._interval = interval
        self._lock = threading.Lock()
        self._message = ""
        self._dots = 0
        self._unblock = None
        self._stop_event = None
        self._thread = None

    @property
    def running(self):
        return self._thread is not None

    def start(self, message=""):
        if self.running:
            logger.warning("Spinner.start() called while already running, ignoring.")
            return
        if message.endswith("..."):
            message = message[:-3]
        self._message = message
        self._dots = 0

        self._unblock = self._block()
        try:
            self._output.write(self._frame(colors.magenta("◆"), message))
        except Exception:
            self._unblock, unblock = None, self._unblock
            unblock()
            raise

        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._loop, args=(self._stop_event,))
        self._thread.daemon = True
        self._thread.start()

    def stop(self, message=""):
        if not self.running:
            logger.warning("Spinner.stop() called while not running, ignoring.")
            return
        thread, self._thread = self._thread, None
        unblock, self._unblock = self._unblock, None
        try:
            with self._lock:
                self._stop_event.set()
                self._erase()
                self._output.write(self._frame(colors.gray("◆"), message))
        finally:
            try:
                if thread is not threading.current_thread():
                    thread.join()
            finally:
                unblock()

    def _loop(self, stop_event):
        while not stop_event.wait(self._interval):
            with self._lock:
                # Stopped while we were waiting for the lock
                if stop_event.is_set():
                    break
                try:
                    self._tick()
                except Exception as err:
                    logger.error(f"Error in spinner tick: {err}")

    def _tick(self):
        self._erase()
        dots = "." * self._dots
        self._output.write(self._frame(colors.magenta("◆"), self._message + dots))
        self._dots = 0 if self._dots > 2 else self._dots + 1

    def _erase(self):
        self._output.move_cursor(-999, -2)
        self._output.erase_down(2)

    def _frame(self, diamond, message):
        return f"{colors.gray(BAR)}\n{diamond}  {message}\n"


def spinner(*, output=None, block=None):
    """Create a Spinner, with start(message) and stop(message) methods."""
    return Spinner(output=output, block=block)
