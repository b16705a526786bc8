# loom/brackets.py
# Static bracket matching for canonical Loom text.
# Three families ([] {} ()) behave identically but must each close what they open;
# a closer of one family cannot end a loop opened by another.

from __future__ import annotations
from typing import Dict, List

from .errors import ParseErrorLoom
from .tokenizer import CLOSERS, FAMILIES, OPENERS


def build_bracket_index(code: str) -> Dict[int, int]:
    """Map every opener position to its closer and every closer back to its opener.

    Raises ParseErrorLoom (kind unmatched-opener / unmatched-closer /
    family-mismatch) naming the offending position.
    """
    index: Dict[int, int] = {}
    stack: List[int] = []

    for pos, ch in enumerate(code):
        if ch in OPENERS:
            stack.append(pos)
        elif ch in CLOSERS:
            if not stack:
                raise ParseErrorLoom(
                    f"unmatched closing bracket '{ch}' at PC = {pos}",
                    kind="unmatched-closer",
                    position=pos,
                )
            top = stack[-1]
            if FAMILIES[code[top]] != FAMILIES[ch]:
                raise ParseErrorLoom(
                    f"bracket family mismatch: '{ch}' at PC = {pos} "
                    f"cannot close '{code[top]}' opened at PC = {top}",
                    kind="family-mismatch",
                    position=pos,
                )
            stack.pop()
            index[top] = pos
            index[pos] = top

    if stack:
        pos = stack[-1]
        raise ParseErrorLoom(
            f"unmatched opening bracket '{code[pos]}' at PC = {pos}",
            kind="unmatched-opener",
            position=pos,
        )
    return index
