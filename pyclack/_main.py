import time

from .core import is_cancel
from .prompts import intro, outro, cancel, text, confirm, select
from .spinner import spinner


def main():
    """A small tour of the prompts."""

    intro("create-app")

    name = text(
        "What is your project called?",
        placeholder="my-app",
        validate=lambda value: None if value.strip() else "Please enter a name.",
    )
    if is_cancel(name):
        cancel("Operation cancelled.")
        return

    kind = select(
        "Pick a project type.",
        options=[
            {"value": "lib", "label": "Library"},
            {"value": "app", "label": "Application", "hint": "with a CLI"},
            {"value": "docs", "label": "Docs only"},
        ],
        initial_value="app",
    )
    if is_cancel(kind):
        cancel("Operation cancelled.")
        return

    install = confirm("Install dependencies?")
    if is_cancel(install):
        cancel("Operation cancelled.")
        return

    if install:
        s = spinner()
        s.start("Installing via pip...")
        done = False
        try:
            time.sleep(2)
            done = True
        finally:
            s.stop("Installed dependencies" if done else "Installation cancelled")

    outro(f"Created {kind} {name!r}. You're all set!")
