# loom/normalizer.py
# Deterministic source normalizer for Loom programs.
# - Drops whitespace and 'quoted comments'
# - Keeps repeatable operators together with the digit run that follows them
# - Keeps the other reserved characters
# - Everything else is free-form comment text and disappears
# The output ("canonical text") is what the bracket index and interpreter consume.

from __future__ import annotations
from typing import List

REPEATABLE = frozenset("><^v+-")
RESERVED = frozenset("><^v+-?ox.*[]{}()")
DIGITS = frozenset("0123456789")
QUOTE = "'"


def is_repeatable(ch: str) -> bool:
    return ch in REPEATABLE


def is_reserved(ch: str) -> bool:
    return ch in RESERVED


def is_digit(ch: str) -> bool:
    # ASCII only; other Unicode digits are comment text.
    return ch in DIGITS


def normalize_loom_source(text: str) -> str:
    """Return the canonical instruction string for raw Loom source.

    Never raises: unknown characters are comments, and an opening quote
    without a partner is dropped on its own.
    """
    src = text or ""
    n = len(src)
    out: List[str] = []
    i = 0

    while i < n:
        ch = src[i]

        if ch.isspace():
            i += 1
            continue

        if ch == QUOTE:
            close = src.find(QUOTE, i + 1)
            # unclosed: drop only the quote itself
            i = close + 1 if close != -1 else i + 1
            continue

        if is_repeatable(ch):
            out.append(ch)
            i += 1
            while i < n and is_digit(src[i]):
                out.append(src[i])
                i += 1
            continue

        if is_reserved(ch):
            out.append(ch)
        i += 1

    return "".join(out)


def is_canonical(text: str) -> bool:
    return normalize_loom_source(text) == text
