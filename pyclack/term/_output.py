import sys


class TerminalOutput:
    """Writes text and cursor movements to a (terminal) file.

    All prompt output goes through an instance of this class, so that
    it can be pointed at something else, like an ``io.StringIO`` in tests.
    """

    def __init__(self, file=None):
        self._file = file

    @property
    def file(self):
        # Resolve lazily, so that a replaced sys.stdout is respected
        return self._file or sys.stdout

    def write(self, text):
        file = self.file
        buffer = getattr(file, "buffer", None)
        if buffer is not None:
            encoding = getattr(file, "encoding", None) or "utf-8"
            file.flush()
            buffer.write(text.encode(encoding, errors="replace"))
        else:
            file.write(text)
        self.flush()

    def flush(self):
        file = self.file
        buffer = getattr(file, "buffer", None)
        (buffer or file).flush()

    def move_cursor(self, dx, dy):
        """Move the cursor relative to its current position."""
        codes = ""
        if dx < 0:
            codes += f"\x1b[{-dx}D"
        elif dx > 0:
            codes += f"\x1b[{dx}C"
        if dy < 0:
            codes += f"\x1b[{-dy}A"
        elif dy > 0:
            codes += f"\x1b[{dy}B"
        if codes:
            self.write(codes)

    def erase_down(self, n=1):
        """Erase from the cursor to the end of the screen."""
        self.write("\x1b[J" * n)

    def hide_cursor(self):
        self.write("\x1b[?25l")

    def show_cursor(self):
        self.write("\x1b[?25h")
