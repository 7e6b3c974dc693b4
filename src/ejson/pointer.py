"""
ejson — JSON Pointer addressing.

File: src/ejson/pointer.py

Purpose
- Represent RFC 6901 pointers as immutable token sequences.

What is included in this file
- Parsing from and rendering to the canonical slash-escaped text form.
- Child/parent derivation used by the validator cursor.
- Resolution of a pointer against a decoded JSON document.

Functional requirements
- ``Pointer.parse(p.render()) == p`` for every pointer.
- ``parent()`` on the root pointer returns the root pointer.

Non-functional requirements
- Pointers are hashable values; no operation mutates its receiver.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final

from jsonpointer import JsonPointer, JsonPointerException, escape

Token = str | int

_ARRAY_INDEX_PATTERN: Final[re.Pattern[str]] = re.compile(r"0|[1-9][0-9]*")


class PointerFormatError(ValueError):
    """Raised when pointer text is not a valid RFC 6901 pointer."""


class PointerResolutionError(LookupError):
    """Raised when a pointer does not address a node of a document."""

    def __init__(self, pointer: Pointer, message: str) -> None:
        self.pointer = pointer
        super().__init__(f"{pointer.render() or '<root>'}: {message}")


@dataclass(frozen=True, slots=True)
class Pointer:
    """Ordered sequence of unescaped tokens; the empty sequence is the document root."""

    tokens: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.tokens, tuple):
            if isinstance(self.tokens, (str, bytes)):
                raise TypeError("pointer tokens must be a sequence of strings, not a string")
            object.__setattr__(self, "tokens", tuple(self.tokens))
        for token in self.tokens:
            if not isinstance(token, str):
                raise TypeError(f"pointer tokens must be strings, got {type(token).__name__}")

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token]) -> Pointer:
        return cls(tuple(normalize_token(token) for token in tokens))

    @classmethod
    def parse(cls, text: str) -> Pointer:
        """Parse canonical pointer text, unescaping ``~1`` and ``~0`` in each token."""
        if not isinstance(text, str):
            raise TypeError(f"pointer text must be a string, got {type(text).__name__}")
        try:
            parts = JsonPointer(text).parts
        except JsonPointerException as exc:
            raise PointerFormatError(f"invalid json pointer {text!r}: {exc}") from exc
        return cls(tuple(parts))

    def render(self) -> str:
        return "".join("/" + escape(token) for token in self.tokens)

    def child(self, token: Token) -> Pointer:
        return Pointer((*self.tokens, normalize_token(token)))

    def parent(self) -> Pointer:
        if not self.tokens:
            return self
        return Pointer(self.tokens[:-1])

    @property
    def is_root(self) -> bool:
        return not self.tokens

    def resolve(self, document: object) -> object:
        """Return the node of ``document`` addressed by this pointer.

        Objects are indexed by key and arrays by canonical decimal index
        (no leading zeros, no ``-``). Scalars cannot be descended into.
        """
        node = document
        for depth, token in enumerate(self.tokens):
            location = Pointer(self.tokens[:depth])
            if isinstance(node, dict):
                if token not in node:
                    raise PointerResolutionError(location, f"object has no member {token!r}")
                node = node[token]
            elif isinstance(node, list):
                if not _ARRAY_INDEX_PATTERN.fullmatch(token):
                    raise PointerResolutionError(location, f"{token!r} is not an array index")
                index = int(token)
                if index >= len(node):
                    raise PointerResolutionError(
                        location, f"index {index} out of range for array of length {len(node)}"
                    )
                node = node[index]
            else:
                raise PointerResolutionError(
                    location, f"cannot descend into {type(node).__name__} with {token!r}"
                )
        return node

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Pointer({self.render()!r})"

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)


ROOT: Final[Pointer] = Pointer()


def normalize_token(token: Token) -> str:
    """Return the string form of a token; array indices become decimal text."""
    if isinstance(token, str):
        return token
    if isinstance(token, bool) or not isinstance(token, int):
        raise TypeError(f"pointer token must be a string or an index, got {type(token).__name__}")
    if token < 0:
        raise ValueError(f"pointer index must be >= 0, got {token}")
    return str(token)


def parse(text: str) -> Pointer:
    return Pointer.parse(text)


def render(pointer: Pointer) -> str:
    return pointer.render()


__all__ = [
    "ROOT",
    "Pointer",
    "PointerFormatError",
    "PointerResolutionError",
    "Token",
    "normalize_token",
    "parse",
    "render",
]
