# loom/tokenizer.py
# Repeat-count lexing for canonical Loom text, plus a flat token listing.
# Tokens:
#   {"type": "REPEAT"|"COMMAND"|"OPEN"|"CLOSE"|"UNKNOWN",
#    "value": str, "text": str, "count": int, "pos": int, "end": int}
# "pos" is the first character of the token, "end" the last one (inclusive),
# matching where the interpreter leaves its PC after dispatching it.

from __future__ import annotations
from typing import Dict, List, Tuple

from .normalizer import is_digit, is_repeatable

OPENERS = "[{("
CLOSERS = "]})"
FAMILIES = {"[": "[]", "]": "[]", "{": "{}", "}": "{}", "(": "()", ")": "()"}


def operator_count(code: str, pc: int) -> Tuple[int, int]:
    """Fuse the operator at ``pc`` with its digit runs and repetitions.

    The operator counts 1, each repetition of the same operator adds 1 and
    each digit run adds ``value - 1``. A different operator ends the run.
    Returns ``(count, last_pc)`` where ``last_pc`` is the last consumed index.
    """
    op = code[pc]
    n = len(code)
    count = 1
    i = pc
    while i + 1 < n:
        nxt = code[i + 1]
        if is_digit(nxt):
            start = i + 1
            j = start
            while j < n and is_digit(code[j]):
                j += 1
            count += int(code[start:j]) - 1
            i = j - 1
        elif nxt == op:
            count += 1
            i += 1
        else:
            break
    return count, i


def _emit(tokens: List[Dict], t: str, code: str, pos: int, end: int, count: int = 1):
    tokens.append({
        "type": t,
        "value": code[pos],
        "text": code[pos:end + 1],
        "count": count,
        "pos": pos,
        "end": end,
    })


def tokenize(code: str) -> List[Dict]:
    tokens: List[Dict] = []
    pc = 0
    n = len(code)
    while pc < n:
        ch = code[pc]
        if is_repeatable(ch):
            count, last = operator_count(code, pc)
            _emit(tokens, "REPEAT", code, pc, last, count)
            pc = last + 1
            continue
        if ch in OPENERS:
            _emit(tokens, "OPEN", code, pc, pc)
        elif ch in CLOSERS:
            _emit(tokens, "CLOSE", code, pc, pc)
        elif ch in "?ox.*":
            _emit(tokens, "COMMAND", code, pc, pc)
        else:
            _emit(tokens, "UNKNOWN", code, pc, pc)
        pc += 1
    return tokens
