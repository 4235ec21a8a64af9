import os
import sys
import signal
import _thread
import logging
import threading
from codecs import getincrementaldecoder

from .input_keys import EscapeCodeDecoder
from ._context import TerminalContext
from ._output import TerminalOutput


logger = logging.getLogger("pyclack")


def read_keys(fd):
    """Generator that reads from the given fd and yields decoded keys until EOF."""
    read = os.read
    decode_utf8 = getincrementaldecoder("utf-8")(errors="replace").decode
    decode_escapes = EscapeCodeDecoder().decode

    while True:
        bb = read(fd, 1024)
        if not bb:  # stdin is closed
            break
        # A keypress arrives in one read, so partial codes need not be kept
        yield from decode_escapes(decode_utf8(bb), flush=True)


class InputReader(threading.Thread):
    """A thread that reads keys from the terminal and passes them to a callback.

    It polls so that it can be stopped, which a blocking read would not allow.
    """

    def __init__(self, context, callback, poll_interval=0.05):
        super().__init__()
        self._context = context
        self._callback = callback
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()
        self.daemon = True

    def stop(self):
        self._stop_event.set()

    def run(self):
        logger.debug("input thread started")
        fd = self._context.fd_in
        decode_utf8 = getincrementaldecoder("utf-8")(errors="replace").decode
        decode_escapes = EscapeCodeDecoder().decode

        try:
            while not self._stop_event.is_set():
                if not self._context.wait_for_input(self._poll_interval):
                    continue
                bb = os.read(fd, 1024)
                if not bb:
                    break
                for key in decode_escapes(decode_utf8(bb), flush=True):
                    try:
                        self._callback(key)
                    except Exception as err:
                        logger.error(f"Error in handling input: {err}")
        except Exception as err:
            logger.error(f"input thread errored: {err}")
        else:
            logger.debug("input thread stopped")


def interrupt_main():
    """Raise KeyboardInterrupt in the main thread, also if it's sleeping."""
    if sys.platform.startswith("win"):
        _thread.interrupt_main()
    else:
        # A real signal wakes up a main thread that is in a blocking call
        os.kill(os.getpid(), signal.SIGINT)


def block(stdin=None, output=None, hide_cursor=True):
    """Suspend normal handling of keyboard input.

    Keys are read and discarded until the returned ``unblock()`` is called,
    so that typing does not mess up what is drawn on screen. Pressing
    ctrl+c restores the terminal and raises ``KeyboardInterrupt`` in the
    main thread.
    """
    output = output or TerminalOutput()
    stdin = stdin or sys.__stdin__

    lock = threading.Lock()
    released = False
    context = reader = None

    def release():
        nonlocal released
        with lock:
            if released:
                return
            released = True
            try:
                if context is not None:
                    context.__exit__(None, None, None)
            finally:
                if hide_cursor:
                    output.show_cursor()

    if hide_cursor:
        output.hide_cursor()

    if stdin is not None and stdin.isatty():
        context = TerminalContext(stdin=stdin)
        context.__enter__()

        def on_key(key):
            if key == "ctrl+c":
                # Restore the terminal before the main thread gets the interrupt
                reader.stop()
                release()
                interrupt_main()

        reader = InputReader(context, on_key)
        reader.start()

    def unblock():
        try:
            if reader is not None:
                reader.stop()
                if reader is not threading.current_thread():
                    reader.join()
        finally:
            release()

    return unblock
