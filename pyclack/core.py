"""
The prompt engine: state machines that turn keys into prompt state.

A prompt does not know what it looks like. It is given a render function
that maps a PromptSnapshot to a frame of text, and takes care of
replacing the previous frame with the new one whenever the state changes.
"""

import sys
import logging
from dataclasses import dataclass
from typing import Any, Sequence

from . import colors
from .term import TerminalContext, TerminalOutput, read_keys


logger = logging.getLogger("pyclack")


class PromptState:
    INITIAL = "initial"
    ACTIVE = "active"
    ERROR = "error"
    SUBMIT = "submit"
    CANCEL = "cancel"

    ALL = (INITIAL, ACTIVE, ERROR, SUBMIT, CANCEL)
    FINAL = (SUBMIT, CANCEL)


class _CancelType:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "CANCEL"

    def __bool__(self):
        return False


CANCEL = _CancelType()


def is_cancel(value):
    """Whether the result of a prompt means that the user cancelled it."""
    return value is CANCEL


@dataclass(frozen=True)
class PromptSnapshot:
    """What a render function gets to see of a prompt."""

    state: str
    value: Any = None
    value_with_cursor: str = ""
    options: Sequence[Any] = ()
    cursor: int = 0
    error: str = ""


class Prompt:
    """Base prompt: the lifecycle and the render cycle."""

    def __init__(self, render, validate=None, output=None):
        self._render_func = render
        self._validate = validate
        self._output = output or TerminalOutput()
        self._prev_frame = None

        self.state = PromptState.INITIAL
        self.value = None
        self.error = ""

    def snapshot(self):
        return PromptSnapshot(state=self.state, value=self.value, error=self.error)

    def prompt(self, keys=None):
        """Run the prompt until it is submitted or cancelled.

        Keys are read from the terminal (in raw mode), unless an iterable
        of key names is given. Returns the value, or CANCEL.
        """
        output = self._output
        output.hide_cursor()
        try:
            if keys is None:
                with TerminalContext(stdin=sys.__stdin__) as context:
                    self._run(read_keys(context.fd_in))
            else:
                self._run(keys)
        finally:
            output.write("\n")
            output.show_cursor()

        logger.debug(f"{self.__class__.__name__} finished in state {self.state}")
        if self.state == PromptState.SUBMIT:
            return self.value
        return CANCEL

    def _run(self, keys):
        self.render()
        for key in keys:
            self.on_key(key)
            self.render()
            if self.state in PromptState.FINAL:
                return
        # Input ran dry
        self.state = PromptState.CANCEL
        self.render()

    def on_key(self, key):
        if self.state == PromptState.INITIAL:
            self.state = PromptState.ACTIVE
        elif self.state == PromptState.ERROR:
            self.state = PromptState.ACTIVE
            self.error = ""

        if key in ("ctrl+c", "escape"):
            self.state = PromptState.CANCEL
        elif key == "enter":
            self.submit()
        else:
            self.handle_key(key)

    def handle_key(self, key):
        """Overload to process keys that are specific to a prompt kind."""
        pass

    def submit(self):
        if self._validate is not None:
            problem = self._validate(self.value)
            if problem:
                self.error = str(problem)
                self.state = PromptState.ERROR
                return
        self.state = PromptState.SUBMIT

    def render(self):
        frame = self._render_func(self.snapshot())
        if frame == self._prev_frame:
            return
        if self._prev_frame is not None:
            self.clear()
        self._output.write(frame)
        self._prev_frame = frame

    def clear(self):
        """Remove the previously written frame from the screen."""
        n = self._prev_frame.count("\n")
        self._output.move_cursor(-999, -n)
        self._output.erase_down()


class TextPrompt(Prompt):
    """A prompt for a line of text, with a movable cursor."""

    def __init__(self, render, validate=None, initial_value="", output=None):
        super().__init__(render, validate=validate, output=output)
        # Text left and right of the cursor
        self._in1 = initial_value or ""
        self._in2 = ""
        self.value = self._in1

    @property
    def cursor(self):
        return len(self._in1)

    @property
    def value_with_cursor(self):
        if not self._in2:
            return self._in1 + colors.inverse(colors.hidden("_"))
        return self._in1 + colors.inverse(self._in2[0]) + self._in2[1:]

    def snapshot(self):
        return PromptSnapshot(
            state=self.state,
            value=self.value,
            value_with_cursor=self.value_with_cursor,
            cursor=self.cursor,
            error=self.error,
        )

    def handle_key(self, key):
        if len(key) == 1 and key.isprintable():
            self._in1 += key
        elif key == "backspace":
            self._in1 = self._in1[:-1]
        elif key == "delete":
            self._in2 = self._in2[1:]
        elif key == "left":
            if self._in1:
                self._in2 = self._in1[-1] + self._in2
                self._in1 = self._in1[:-1]
        elif key == "right":
            if self._in2:
                self._in1 += self._in2[0]
                self._in2 = self._in2[1:]
        elif key == "home":
            self._in1, self._in2 = "", self._in1 + self._in2
        elif key == "end":
            self._in1, self._in2 = self._in1 + self._in2, ""
        elif key == "ctrl+u":
            self._in1 = ""
        self.value = self._in1 + self._in2


class ConfirmPrompt(Prompt):
    """A yes/no prompt."""

    def __init__(self, render, active="Yes", inactive="No", initial_value=True, output=None):
        super().__init__(render, output=output)
        self.active = active
        self.inactive = inactive
        self.value = bool(initial_value)

    def handle_key(self, key):
        if key in ("up", "down", "left", "right", "tab"):
            self.value = not self.value
        elif key in ("y", "Y"):
            self.value = True
            self.submit()
        elif key in ("n", "N"):
            self.value = False
            self.submit()


class SelectPrompt(Prompt):
    """A prompt to pick one from a list of options.

    The options are objects with a ``value`` attribute; the cursor is
    the index of the highlighted option.
    """

    UP_KEYS = ("up", "left", "k", "h")
    DOWN_KEYS = ("down", "right", "j", "l")

    def __init__(self, render, options, initial_value=None, output=None):
        super().__init__(render, output=output)
        self.options = tuple(options)
        if not self.options:
            raise ValueError("A select prompt needs at least one option.")
        self.cursor = 0
        for i, option in enumerate(self.options):
            if option.value == initial_value:
                self.cursor = i
                break
        self.value = self.options[self.cursor].value

    def snapshot(self):
        return PromptSnapshot(
            state=self.state,
            value=self.value,
            options=self.options,
            cursor=self.cursor,
            error=self.error,
        )

    def handle_key(self, key):
        if key in self.UP_KEYS:
            self.cursor = (self.cursor - 1) % len(self.options)
        elif key in self.DOWN_KEYS:
            self.cursor = (self.cursor + 1) % len(self.options)
        self.value = self.options[self.cursor].value
