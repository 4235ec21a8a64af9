from collections import deque

# %% Decoder


class EscapeCodeDecoder:
    """A streaming decoder that turns raw terminal input into key names.

    Printable characters are passed through as-is. Control characters and
    escape sequences become names like "enter", "up" or "ctrl+c".
    """

    def __init__(self):
        # A double escape would swallow the start of a following escape
        # code, so it's left out of the tree, and deduped at the end instead.
        map = KEY_MAP.copy()
        map.pop("\x1b\x1b")
        self._key_tree = build_tree(map)
        self._branch = self._key_tree
        self._chars = deque()

    def reset(self):
        self._branch = self._key_tree
        self._chars.clear()

    def decode(self, text, flush=False):
        """Decode the given string into a list of keys.

        Escape codes can be split between multiple calls. With flush, any
        pending partial code is resolved (a lonely escape char becomes
        "escape") instead of waiting for more input.
        """

        self._chars.extend(text)
        result = []

        while self._chars:
            c = self._chars.popleft()

            if c in self._branch:
                node = self._branch[c]
                if isinstance(node, dict):
                    self._branch = node
                else:
                    self._branch = self._key_tree
                    result.extend(node)
            elif self._branch is self._key_tree:
                result.append(c)
            else:
                # Mid-sequence, but this char does not continue it
                if "" in self._branch:
                    result.extend(self._branch[""])
                self._branch = self._key_tree
                self._chars.appendleft(c)

        if flush and self._branch is not self._key_tree:
            if "" in self._branch:
                result.extend(self._branch[""])
            self._branch = self._key_tree

        return dedupe_escapes(result)


def dedupe_escapes(keys):
    """Collapse pairs of escapes, because Windows sends two for one press."""
    result = []
    pending_escape = False
    for key in keys:
        if key == "escape" and pending_escape:
            pending_escape = False
            continue
        pending_escape = key == "escape"
        result.append(key)
    return result


def build_tree(map):
    """Build a tree from a flat map, so it can be walked char by char."""
    trunk = {}
    for text, keys in map.items():
        branch = trunk
        while len(text) > 1:
            char, text = text[0], text[1:]
            new_branch = branch.setdefault(char, {})
            if not isinstance(new_branch, dict):
                branch[char] = new_branch = {"": new_branch}
            branch = new_branch
        branch[text] = keys
    assert "" not in trunk
    return trunk


# %% Escape codes that prompts respond to

# A subset of the vt100 map used by Textual and prompt_toolkit. Keys that
# prompts do not act on decode to their name too, so that they can be
# ignored rather than show up as garbage in a text field.

KEY_MAP = {
    "\r": ("enter",),
    "\n": ("enter",),
    "\x01": ("home",),  # ctrl+a
    "\x03": ("ctrl+c",),
    "\x04": ("ctrl+d",),
    "\x05": ("end",),  # ctrl+e
    "\x08": ("backspace",),
    "\x7f": ("backspace",),
    "\x09": ("tab",),
    "\x15": ("ctrl+u",),
    "\x17": ("ctrl+w",),
    "\x1b": ("escape",),
    # Windows issues esc esc for a single press of escape key
    "\x1b\x1b": ("escape",),
    "\x1b[Z": ("shift+tab",),
    # Editing
    "\x1b[1~": ("home",),  # tmux
    "\x1b[2~": ("insert",),
    "\x1b[3~": ("delete",),
    "\x1b[4~": ("end",),  # tmux
    "\x1b[5~": ("pageup",),
    "\x1b[6~": ("pagedown",),
    "\x1b[7~": ("home",),  # rxvt
    "\x1b[8~": ("end",),  # rxvt
    # Cursor keys, normal and application mode
    "\x1b[A": ("up",),
    "\x1b[B": ("down",),
    "\x1b[C": ("right",),
    "\x1b[D": ("left",),
    "\x1b[H": ("home",),
    "\x1b[F": ("end",),
    "\x1bOA": ("up",),
    "\x1bOB": ("down",),
    "\x1bOC": ("right",),
    "\x1bOD": ("left",),
    "\x1bOH": ("home",),
    "\x1bOF": ("end",),
    # Function keys
    "\x1bOP": ("f1",),
    "\x1bOQ": ("f2",),
    "\x1bOR": ("f3",),
    "\x1bOS": ("f4",),
    # Bracketed paste markers
    "\x1b[200~": (),
    "\x1b[201~": (),
}
