"""
The look of the prompts.

Each prompt kind has a render function that maps a PromptSnapshot to the
frame that is shown for it. The frames share a title line with a symbol
that reflects the state, and a bar on the left that ties consecutive
prompts together:

    ┌  intro
    │
    ●  message
    │  value
    └
"""

from dataclasses import dataclass
from functools import partial
from typing import Any, Optional

from . import colors
from .core import PromptState, TextPrompt, ConfirmPrompt, SelectPrompt
from .term import TerminalOutput


BAR_START = "┌"
BAR = "│"
BAR_END = "└"


def symbol(state):
    """Get the (colored) glyph that represents the given prompt state."""
    if state in (PromptState.INITIAL, PromptState.ACTIVE):
        return colors.cyan("●")
    elif state == PromptState.CANCEL:
        return colors.red("■")
    elif state == PromptState.ERROR:
        return colors.yellow("▲")
    elif state == PromptState.SUBMIT:
        return colors.green("✔")
    raise ValueError(f"Invalid prompt state: {state!r}")


def _title(state, message):
    return f"{colors.gray(BAR)}\n{symbol(state)}  {message}\n"


# %% Text


def render_text(snapshot, message, placeholder=None):
    title = _title(snapshot.state, message)
    if placeholder:
        placeholder = colors.inverse(placeholder[0]) + colors.dim(placeholder[1:])
    else:
        placeholder = colors.inverse(colors.hidden("_"))
    value = snapshot.value or ""
    shown = snapshot.value_with_cursor if value else placeholder

    if snapshot.state == PromptState.ERROR:
        return (
            f"{title.strip()}\n"
            f"{colors.yellow(BAR)}  {shown}\n"
            f"{colors.yellow(BAR_END)}  {colors.yellow(snapshot.error)}\n"
        )
    elif snapshot.state == PromptState.SUBMIT:
        return f"{title}{colors.gray(BAR)}  {colors.dim(value)}"
    elif snapshot.state == PromptState.CANCEL:
        tail = f"\n{colors.gray(BAR)}" if value.strip() else ""
        return f"{title}{colors.gray(BAR)}  {colors.strikethrough(colors.dim(value))}{tail}"
    else:
        return f"{title}{colors.cyan(BAR)}  {shown}\n{colors.cyan(BAR_END)}\n"


def text(message, placeholder=None, validate=None, initial_value="", *, output=None, keys=None):
    """Ask for a line of text. Returns the text, or CANCEL.

    The validate function gets the value on submit, and returns an error
    message if it is not acceptable (or None if it is).
    """
    render = partial(render_text, message=message, placeholder=placeholder)
    prompt = TextPrompt(
        render,
        validate=validate,
        initial_value=initial_value,
        output=output,
    )
    return prompt.prompt(keys)


# %% Confirm


def render_confirm(snapshot, message, active="Yes", inactive="No"):
    title = _title(snapshot.state, message)
    label = active if snapshot.value else inactive

    if snapshot.state == PromptState.SUBMIT:
        return f"{title}{colors.gray(BAR)}  {colors.dim(label)}"
    elif snapshot.state == PromptState.CANCEL:
        return f"{title}{colors.gray(BAR)}  {colors.strikethrough(colors.dim(label))}\n{colors.gray(BAR)}"

    def choice(label, chosen):
        if chosen:
            return f"{colors.green('◼')} {label}"
        return f"{colors.dim('◻')} {colors.dim(label)}"

    choices = f"{choice(active, snapshot.value)} {colors.dim('/')} {choice(inactive, not snapshot.value)}"
    return f"{title}{colors.cyan(BAR)}  {choices}\n{colors.cyan(BAR_END)}\n"


def confirm(message, active="Yes", inactive="No", initial_value=True, *, output=None, keys=None):
    """Ask a yes/no question. Returns a bool, or CANCEL."""
    render = partial(render_confirm, message=message, active=active, inactive=inactive)
    prompt = ConfirmPrompt(
        render,
        active=active,
        inactive=inactive,
        initial_value=initial_value,
        output=output,
    )
    return prompt.prompt(keys)


# %% Select


@dataclass(frozen=True)
class Option:
    """An option to select. The label defaults to the value as a string."""

    value: Any
    label: Optional[str] = None
    hint: Optional[str] = None

    @property
    def display(self):
        return str(self.value) if self.label is None else self.label


def as_option(ob):
    if isinstance(ob, Option):
        return ob
    elif isinstance(ob, dict):
        if "value" not in ob:
            raise ValueError(f"Option needs a value: {ob!r}")
        return Option(**ob)
    raise TypeError(f"Option must be an Option or dict, not {ob.__class__.__name__}")


def render_option(option, visual_state):
    label = option.display
    if visual_state == "active":
        # No trailing space after the label when there is no hint
        hint = f" {colors.dim(f'({option.hint})')}" if option.hint else ""
        return f"{colors.green('◼')} {label}{hint}"
    elif visual_state == "selected":
        return colors.dim(label)
    elif visual_state == "cancelled":
        return colors.strikethrough(colors.dim(label))
    return f"{colors.dim('◻')} {colors.dim(label)}"


def render_select(snapshot, message):
    title = _title(snapshot.state, message)
    current = snapshot.options[snapshot.cursor]

    if snapshot.state == PromptState.SUBMIT:
        return f"{title}{colors.gray(BAR)}  {render_option(current, 'selected')}"
    elif snapshot.state == PromptState.CANCEL:
        return f"{title}{colors.gray(BAR)}  {render_option(current, 'cancelled')}\n{colors.gray(BAR)}"

    lines = [
        render_option(option, "active" if i == snapshot.cursor else "inactive")
        for i, option in enumerate(snapshot.options)
    ]
    sep = f"\n{colors.cyan(BAR)}  "
    return f"{title}{colors.cyan(BAR)}  {sep.join(lines)}\n{colors.cyan(BAR_END)}\n"


def select(message, options, initial_value=None, *, output=None, keys=None):
    """Let the user pick one of the options. Returns its value, or CANCEL.

    Options are Option objects or dicts with keys value, label and hint.
    """
    render = partial(render_select, message=message)
    prompt = SelectPrompt(
        render,
        [as_option(ob) for ob in options],
        initial_value=initial_value,
        output=output,
    )
    return prompt.prompt(keys)


# %% Static lines


def intro(title="", *, output=None):
    output = output or TerminalOutput()
    output.write(f"{colors.gray(BAR_START)}  {title}\n")


def outro(message="", *, output=None):
    output = output or TerminalOutput()
    output.write(f"{colors.gray(BAR)}\n{colors.gray(BAR_END)}  {colors.green(message)}\n\n")


def cancel(message="", *, output=None):
    output = output or TerminalOutput()
    output.write(f"{colors.gray(BAR_END)}  {colors.red(message)}\n\n")
