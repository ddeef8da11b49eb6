"""satchel.sexp

Textual format of a persisted satchel: a Lisp-style list of one-string lists.

    (("/abs/path/one") ("/abs/path/two"))

Writing rules
- Each entry becomes `("<path>")`; entries are joined by a single space.
- Inside strings only `"` and `\\` are escaped (as `\\"` and `\\\\`).
- An empty satchel is written as `()` and a trailing newline is always added.

Reading rules
- Whitespace between tokens is ignored.
- `nil` is accepted as the empty list.
- Escapes `\\n` and `\\t` map to newline and tab; `\\` followed by any other character yields
  that character.
- Anything else (stray tokens, unterminated strings, inner lists that do not hold exactly
  one string) raises `ValueError`. The store turns that into `CorruptStore`.
"""

from __future__ import annotations

from typing import Sequence

_ESCAPES = {"n": "\n", "t": "\t"}


def serialize(satchel: Sequence[str]) -> str:
    inner = " ".join(f"({_quote(e)})" for e in satchel)
    return f"({inner})\n"


def deserialize(text: str) -> list[str]:
    reader = _Reader(text)
    reader.skip_ws()
    if reader.take_word("nil"):
        entries: list[str] = []
    else:
        entries = reader.read_outer()
    reader.skip_ws()
    if not reader.at_end():
        raise ValueError(f"unexpected trailing data at offset {reader.pos}")
    return entries


def _quote(s: str) -> str:
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


class _Reader:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return "" if self.at_end() else self.text[self.pos]

    def skip_ws(self) -> None:
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def expect(self, ch: str) -> None:
        if self.peek() != ch:
            found = repr(self.peek()) if not self.at_end() else "end of input"
            raise ValueError(f"expected {ch!r} at offset {self.pos}, found {found}")
        self.pos += 1

    def take_word(self, word: str) -> bool:
        end = self.pos + len(word)
        if self.text[self.pos : end] != word:
            return False
        if end < len(self.text) and not self.text[end].isspace():
            return False
        self.pos = end
        return True

    def read_outer(self) -> list[str]:
        self.expect("(")
        out: list[str] = []
        while True:
            self.skip_ws()
            if self.peek() == ")":
                self.pos += 1
                return out
            out.append(self.read_tuple())

    def read_tuple(self) -> str:
        self.expect("(")
        self.skip_ws()
        value = self.read_string()
        self.skip_ws()
        self.expect(")")
        return value

    def read_string(self) -> str:
        self.expect('"')
        buf: list[str] = []
        while True:
            if self.at_end():
                raise ValueError("unterminated string")
            ch = self.text[self.pos]
            self.pos += 1
            if ch == '"':
                return "".join(buf)
            if ch == "\\":
                if self.at_end():
                    raise ValueError("unterminated escape")
                nxt = self.text[self.pos]
                self.pos += 1
                buf.append(_ESCAPES.get(nxt, nxt))
            else:
                buf.append(ch)
