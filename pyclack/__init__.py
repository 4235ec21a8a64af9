"""
pyclack - pretty, minimal prompts for command-line apps.
"""

from .core import CANCEL, PromptState, PromptSnapshot, is_cancel  # noqa
from .prompts import text, confirm, select, intro, outro, cancel, symbol, Option  # noqa
from .spinner import Spinner, spinner  # noqa
from ._cli import cli  # noqa

__version__ = "0.1.0"
version_info = tuple(map(int, __version__.split(".")))
