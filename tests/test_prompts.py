import io

import pytest

from pyclack import colors
from pyclack.core import PromptState, PromptSnapshot, CANCEL, is_cancel
from pyclack.prompts import (
    symbol,
    render_text,
    render_confirm,
    render_select,
    render_option,
    Option,
    as_option,
    text,
    confirm,
    select,
    intro,
    outro,
    cancel,
)
from pyclack.term import TerminalOutput


def make_output():
    file = io.StringIO()
    return TerminalOutput(file), file


def title(state, message):
    return f"{colors.gray('│')}\n{symbol(state)}  {message}\n"


# %% Symbols


def test_symbol():
    glyphs = {}
    for state in PromptState.ALL:
        glyph = symbol(state)
        assert glyph
        assert glyph == symbol(state)
        glyphs[state] = glyph

    assert glyphs["initial"] == glyphs["active"] == colors.cyan("●")
    assert glyphs["cancel"] == colors.red("■")
    assert glyphs["error"] == colors.yellow("▲")
    assert glyphs["submit"] == colors.green("✔")

    with pytest.raises(ValueError):
        symbol("bored")


# %% Text


def test_render_text_placeholder():
    snapshot = PromptSnapshot(state="active", value="")
    frame = render_text(snapshot, "Your name?", placeholder="name")
    expected = (
        title("active", "Your name?")
        + colors.cyan("│")
        + "  "
        + colors.inverse("n")
        + colors.dim("ame")
        + "\n"
        + colors.cyan("└")
        + "\n"
    )
    assert frame == expected

    # Without placeholder there is a hidden one, to show the cursor
    frame = render_text(snapshot, "Your name?")
    assert colors.inverse(colors.hidden("_")) in frame


def test_render_text_value():
    cursor = colors.inverse(colors.hidden("_"))
    snapshot = PromptSnapshot(state="active", value="bob", value_with_cursor="bob" + cursor)
    frame = render_text(snapshot, "Who?", placeholder="name")
    assert "ame" not in frame
    assert f"{colors.cyan('│')}  bob{cursor}\n" in frame


def test_render_text_error():
    snapshot = PromptSnapshot(state="error", value="a", value_with_cursor="a", error="too short")
    frame = render_text(snapshot, "Your name?")
    expected = (
        f"{colors.gray('│')}\n{symbol('error')}  Your name?\n"
        f"{colors.yellow('│')}  a\n"
        f"{colors.yellow('└')}  {colors.yellow('too short')}\n"
    )
    assert frame == expected


def test_render_text_submit_and_cancel():
    snapshot = PromptSnapshot(state="submit", value="bob")
    frame = render_text(snapshot, "Your name?")
    assert frame == title("submit", "Your name?") + f"{colors.gray('│')}  {colors.dim('bob')}"

    snapshot = PromptSnapshot(state="cancel", value="bob")
    frame = render_text(snapshot, "Your name?")
    struck = colors.strikethrough(colors.dim("bob"))
    assert frame == title("cancel", "Your name?") + f"{colors.gray('│')}  {struck}\n{colors.gray('│')}"

    # No extra bar when there was nothing typed
    snapshot = PromptSnapshot(state="cancel", value="  ")
    frame = render_text(snapshot, "Your name?")
    assert frame.endswith(colors.strikethrough(colors.dim("  ")))


def test_text_prompt():
    output, file = make_output()
    result = text("Your name?", keys=["b", "o", "b", "enter"], output=output)
    assert result == "bob"

    written = file.getvalue()
    assert written.startswith("\x1b[?25l")
    assert written.endswith("\n\x1b[?25h")
    # The previous frame (4 lines) is erased before drawing the next
    assert "\x1b[999D\x1b[4A\x1b[J" in written
    assert f"{colors.gray('│')}  {colors.dim('bob')}" in written


def test_text_prompt_editing():
    assert text("?", keys=["a", "c", "left", "b", "enter"], output=make_output()[0]) == "abc"
    assert text("?", keys=["b", "c", "home", "a", "end", "d", "enter"], output=make_output()[0]) == "abcd"
    assert text("?", keys=["a", "b", "c", "left", "left", "delete", "enter"], output=make_output()[0]) == "ac"
    assert text("?", keys=["a", "b", "backspace", "enter"], output=make_output()[0]) == "a"
    assert text("?", keys=["a", "f1", "tab", "enter"], output=make_output()[0]) == "a"
    assert text("?", initial_value="foo", keys=["enter"], output=make_output()[0]) == "foo"


def test_text_prompt_validation():
    def validate(value):
        if len(value) < 2:
            return "too short"

    output, file = make_output()
    result = text("Name?", validate=validate, keys=["a", "enter", "b", "enter"], output=output)
    assert result == "ab"
    assert colors.yellow("too short") in file.getvalue()


def test_text_prompt_cancel():
    output, file = make_output()
    result = text("Name?", keys=["a", "ctrl+c"], output=output)
    assert result is CANCEL
    assert is_cancel(result)
    assert symbol("cancel") in file.getvalue()

    # Running out of input also cancels
    assert is_cancel(text("Name?", keys=[], output=make_output()[0]))
    assert is_cancel(text("Name?", keys=["a"], output=make_output()[0]))


# %% Confirm


def test_render_confirm():
    snapshot = PromptSnapshot(state="active", value=True)
    frame = render_confirm(snapshot, "Sure?")
    yes = f"{colors.green('◼')} Yes"
    no = f"{colors.dim('◻')} {colors.dim('No')}"
    assert frame == title("active", "Sure?") + f"{colors.cyan('│')}  {yes} {colors.dim('/')} {no}\n{colors.cyan('└')}\n"

    snapshot = PromptSnapshot(state="initial", value=False)
    frame = render_confirm(snapshot, "Sure?", active="Sure", inactive="Nope")
    assert f"{colors.dim('◻')} {colors.dim('Sure')}" in frame
    assert f"{colors.green('◼')} Nope" in frame

    snapshot = PromptSnapshot(state="submit", value=False)
    frame = render_confirm(snapshot, "Sure?")
    assert frame == title("submit", "Sure?") + f"{colors.gray('│')}  {colors.dim('No')}"

    snapshot = PromptSnapshot(state="cancel", value=True)
    frame = render_confirm(snapshot, "Sure?")
    struck = colors.strikethrough(colors.dim("Yes"))
    assert frame == title("cancel", "Sure?") + f"{colors.gray('│')}  {struck}\n{colors.gray('│')}"


def test_confirm_prompt():
    assert confirm("Sure?", keys=["enter"], output=make_output()[0]) is True
    assert confirm("Sure?", keys=["right", "enter"], output=make_output()[0]) is False
    assert confirm("Sure?", keys=["left", "left", "enter"], output=make_output()[0]) is True
    assert confirm("Sure?", initial_value=False, keys=["enter"], output=make_output()[0]) is False
    assert confirm("Sure?", keys=["n"], output=make_output()[0]) is False
    assert confirm("Sure?", initial_value=False, keys=["y"], output=make_output()[0]) is True
    assert is_cancel(confirm("Sure?", keys=["escape"], output=make_output()[0]))


# %% Select


OPTIONS = [{"value": 1, "label": "A"}, {"value": 2, "label": "B"}]


def test_render_option():
    option = Option(3, hint="three")
    assert render_option(option, "active") == f"{colors.green('◼')} 3 {colors.dim('(three)')}"
    assert render_option(Option(3), "active") == f"{colors.green('◼')} 3"
    assert render_option(option, "inactive") == f"{colors.dim('◻')} {colors.dim('3')}"
    assert render_option(option, "selected") == colors.dim("3")
    assert render_option(option, "cancelled") == colors.strikethrough(colors.dim("3"))


def test_as_option():
    assert as_option({"value": 1}) == Option(1)
    assert as_option(Option(1, "one")) == Option(1, "one")
    with pytest.raises(ValueError):
        as_option({"label": "no value"})
    with pytest.raises(TypeError):
        as_option(1)


def test_render_select():
    options = tuple(as_option(ob) for ob in OPTIONS)
    snapshot = PromptSnapshot(state="active", value=2, options=options, cursor=1)
    frame = render_select(snapshot, "Pick")
    a = f"{colors.dim('◻')} {colors.dim('A')}"
    b = f"{colors.green('◼')} B"
    bar = colors.cyan("│")
    assert frame == title("active", "Pick") + f"{bar}  {a}\n{bar}  {b}\n{colors.cyan('└')}\n"

    snapshot = PromptSnapshot(state="submit", value=2, options=options, cursor=1)
    frame = render_select(snapshot, "Pick")
    assert frame == title("submit", "Pick") + f"{colors.gray('│')}  {colors.dim('B')}"
    assert "A" not in frame

    snapshot = PromptSnapshot(state="cancel", value=1, options=options, cursor=0)
    frame = render_select(snapshot, "Pick")
    struck = colors.strikethrough(colors.dim("A"))
    assert frame == title("cancel", "Pick") + f"{colors.gray('│')}  {struck}\n{colors.gray('│')}"


def test_select_prompt():
    options = OPTIONS + [{"value": 3, "label": "C"}]
    assert select("Pick", options, keys=["enter"], output=make_output()[0]) == 1
    assert select("Pick", options, keys=["down", "enter"], output=make_output()[0]) == 2
    assert select("Pick", options, keys=["up", "enter"], output=make_output()[0]) == 3
    assert select("Pick", options, keys=["j", "j", "j", "enter"], output=make_output()[0]) == 1
    assert select("Pick", options, initial_value=3, keys=["enter"], output=make_output()[0]) == 3
    assert select("Pick", options, initial_value=3, keys=["k", "enter"], output=make_output()[0]) == 2
    assert is_cancel(select("Pick", options, keys=["down", "ctrl+c"], output=make_output()[0]))


def test_select_prompt_needs_options():
    with pytest.raises(ValueError):
        select("Pick", [], keys=["enter"], output=make_output()[0])


# %% Static lines


def test_intro_outro_cancel():
    output, file = make_output()
    intro("hello", output=output)
    assert file.getvalue() == f"{colors.gray('┌')}  hello\n"

    output, file = make_output()
    outro("bye", output=output)
    assert file.getvalue() == f"{colors.gray('│')}\n{colors.gray('└')}  {colors.green('bye')}\n\n"

    output, file = make_output()
    cancel("stop", output=output)
    assert file.getvalue() == f"{colors.gray('└')}  {colors.red('stop')}\n\n"


def test_static_lines_are_repeatable():
    for func in (intro, outro, cancel):
        output, file = make_output()
        func("same", output=output)
        first = file.getvalue()
        func("same", output=output)
        assert file.getvalue() == first * 2


def test_static_lines_default_to_stdout(capsys):
    intro()
    assert capsys.readouterr().out == f"{colors.gray('┌')}  \n"


def test_text_prompt_placeholder():
    output, file = make_output()
    result = text("Name?", placeholder="name", keys=["a", "backspace", "enter"], output=output)
    assert result == ""
    placeholder = colors.inverse("n") + colors.dim("ame")
    assert file.getvalue().count(placeholder) == 2
