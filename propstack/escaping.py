"""Reversible mapping between property keys and environment variable names.

Property keys are conventionally lowercase and dot-separated
(``db.host``) while environment variables are upper-snake-case
(``DB_HOST``). The encoding is:

    a-z  ->  A-Z
    .    ->  _
    _    ->  _u
    -    ->  _d

Everything else is passed through. Encoding never produces a lowercase
ASCII letter outside of an escape, so ``_u`` and ``_d`` cannot be
confused with an encoded ``.`` followed by a letter, and
``unescape(escape(key)) == key`` for every key without ASCII uppercase
letters. Mixed-case keys are reached through casing aliases instead.

The escape markers are lowercase, so they do not survive platforms that
uppercase environment variable names (Windows): ``MAX_uCONNECTIONS`` is
seen as ``MAX_UCONNECTIONS`` and decodes to ``max.uconnections``. Keys
containing ``_`` or ``-`` cannot be overridden from the environment there.
"""

import string

ESCAPE_CHAR = "_"
UNDERSCORE_MARKER = "u"
DASH_MARKER = "d"

_ENCODE_TABLE = {
    ".": ESCAPE_CHAR,
    "_": ESCAPE_CHAR + UNDERSCORE_MARKER,
    "-": ESCAPE_CHAR + DASH_MARKER,
    **{c: c.upper() for c in string.ascii_lowercase},
}
_DECODE_MARKERS = {UNDERSCORE_MARKER: "_", DASH_MARKER: "-"}


def escape(key: str) -> str:
    """Encode a property key as an environment variable name."""
    return "".join(_ENCODE_TABLE.get(c, c) for c in key)


def unescape(name: str) -> str:
    """Decode an environment variable name back into a property key."""
    result: list[str] = []
    i = 0
    while i < len(name):
        c = name[i]
        if c == ESCAPE_CHAR:
            marker = name[i + 1] if i + 1 < len(name) else ""
            if marker in _DECODE_MARKERS:
                result.append(_DECODE_MARKERS[marker])
                i += 2
                continue
            result.append(".")
        elif c in string.ascii_uppercase:
            result.append(c.lower())
        else:
            result.append(c)
        i += 1
    return "".join(result)


class EscapingCodec:
    """Key/name codec for one environment store.

    When disabled, both directions are the identity and environment
    variable names must already be literal property keys.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def encode(self, key: str) -> str:
        return escape(key) if self.enabled else key

    def decode(self, name: str) -> str:
        return unescape(name) if self.enabled else name

    def __repr__(self) -> str:
        return f"EscapingCodec(enabled={self.enabled})"
