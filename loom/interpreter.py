"""Loom interpreter: a cursor walking a 32x32 grid of palette indices.

- Source is normalized to canonical text, brackets are matched once up front,
  then a single loop dispatches one canonical character per step.
- The grid is working memory; the screen only changes on commit (``x``),
  which also hands an immutable frame to the display sink.
- All cell and cursor arithmetic is modulo 32.
- Every run leaves a receipt: program hash, run id, logs, step/commit counts.
"""

from __future__ import annotations

import copy
import logging
import os
import random
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from .brackets import build_bracket_index
from .display import DisplaySink, Frame, HeadlessDisplay, SIZE
from .errors import LoomError, ProgramNotFoundLoom, RuntimeErrorLoom
from .normalizer import normalize_loom_source
from .palette import SCREEN_FILL
from .receipts import make_base_receipt
from .tokenizer import CLOSERS, OPENERS, operator_count

log = logging.getLogger(__name__)

SENTINEL = "\0"


class Interpreter:
    def __init__(
        self,
        display: Optional[DisplaySink] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        pacing: float = 0.0,
        max_steps: Optional[int] = None,
        wait_for_quit: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.display = display if display is not None else HeadlessDisplay()
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.pacing = float(pacing)
        self.max_steps = max_steps
        self.wait_for_quit = bool(wait_for_quit)
        self._sleep = sleep
        self.reset()

    # ---------- state
    def reset(self) -> None:
        self.grid: List[List[int]] = [[0] * SIZE for _ in range(SIZE)]
        self.screen: List[List[int]] = [[SCREEN_FILL] * SIZE for _ in range(SIZE)]
        self.x = 0
        self.y = 0
        self.pc = 0
        self.stack: List[int] = []
        self.code = ""
        self.bracket_index: Dict[int, int] = {}
        self.steps = 0
        self.commits = 0
        self.receipt: Dict[str, Any] = make_base_receipt("", seed=self.seed)

    @property
    def cell(self) -> int:
        return self.grid[self.y][self.x]

    @cell.setter
    def cell(self, value: int) -> None:
        self.grid[self.y][self.x] = value % SIZE

    def cell_at(self, x: int, y: int) -> int:
        return self.grid[y % SIZE][x % SIZE]

    def screen_at(self, x: int, y: int) -> int:
        return self.screen[y % SIZE][x % SIZE]

    def snapshot(self) -> Frame:
        return tuple(tuple(row) for row in self.screen)

    # ---------- entry points
    def run(self, source: str, *, path: Optional[str] = None) -> Frame:
        """Normalize raw source, execute it and return the final screen."""
        return self.execute(normalize_loom_source(source), path=path)

    def execute(self, code: str, *, path: Optional[str] = None) -> Frame:
        """Execute canonical text. Anything non-canonical is a runtime error."""
        self.reset()
        self.code = code
        self.receipt = make_base_receipt(code, path=path, seed=self.seed)
        try:
            self.bracket_index = build_bracket_index(code)
            self._loop(code + SENTINEL)
        except LoomError as e:
            self._fail(e)
            raise
        self._finish()
        if self.wait_for_quit:
            self.display.await_quit()
        return self.snapshot()

    # ---------- execution
    def _loop(self, code: str) -> None:
        while True:
            ch = code[self.pc]
            if ch == SENTINEL:
                return
            if self.max_steps is not None and self.steps >= self.max_steps:
                raise RuntimeErrorLoom(
                    f"step limit of {self.max_steps} reached at PC = {self.pc}",
                    kind="step-limit",
                    position=self.pc,
                )
            self.steps += 1
            self.exec_char(ch, code)
            self.pc += 1

    def exec_char(self, ch: str, code: str) -> None:
        if ch in "><^v+-":
            count, self.pc = operator_count(code, self.pc)
            if ch == ">":
                self.x = (self.x + count) % SIZE
            elif ch == "<":
                self.x = (self.x - count) % SIZE
            elif ch == "v":
                self.y = (self.y + count) % SIZE
            elif ch == "^":
                self.y = (self.y - count) % SIZE
            elif ch == "+":
                self.cell = self.cell + count
            else:
                self.cell = self.cell - count
            return

        if ch == "?":
            self.cell = self.rng.randrange(SIZE)
            return

        if ch == "o":
            self.x = 0
            self.y = 0
            return

        if ch == "x":
            self._commit()
            return

        if ch == ".":
            self.cell = 0
            return

        if ch == "*":
            self._breakpoint()
            return

        if ch in OPENERS:
            if self.cell == 0:
                self.pc = self.bracket_index[self.pc]
            else:
                self.stack.append(self.pc)
            return

        if ch in CLOSERS:
            if self.cell != 0:
                self.pc = self.stack[-1]
            else:
                self.stack.pop()
            return

        raise RuntimeErrorLoom(
            f"unexpected character at PC = {self.pc}: {ch!r}",
            kind="unexpected-character",
            position=self.pc,
        )

    def _commit(self) -> None:
        self.screen[self.y][self.x] = self.cell
        self.commits += 1
        log.debug("commit x=%d y=%d value=%d", self.x, self.y, self.cell)
        self.display.commit(self.snapshot())
        if self.pacing > 0:
            self._sleep(self.pacing)

    def _breakpoint(self) -> None:
        value = self.cell
        log.info("breakpoint x=%d y=%d pc=%d value=%d", self.x, self.y, self.pc, value)
        self.receipt["logs"].append({
            "level": "debug",
            "event": "breakpoint",
            "message": f"x: {self.x}, y: {self.y}, PC: {self.pc}, cell: {value}",
            "x": self.x,
            "y": self.y,
            "pc": self.pc,
            "value": value,
        })

    # ---------- receipts
    def _counters(self) -> None:
        self.receipt["stepCount"] = self.steps
        self.receipt["commitCount"] = self.commits
        self.receipt["final"] = {"x": self.x, "y": self.y, "pc": self.pc}

    def _finish(self) -> None:
        self._counters()
        self.receipt["status"] = "ok"
        log.debug("halted after %d steps, %d commits", self.steps, self.commits)

    def _fail(self, e: LoomError) -> None:
        self._counters()
        self.receipt["status"] = "error"
        self.receipt.update(e.to_receipt())
        self.receipt["logs"].append({"level": "error", "event": e.kind, "message": e.detail})
        self.display.on_error(e.kind, e.position, e.detail)


def looks_like_path(program: str) -> bool:
    if any(ch.isspace() or ch == "'" for ch in program):
        return False
    seps = {"/", os.sep}
    return any(s in program for s in seps) or program.endswith(".lm")


def load_program_text(program: str) -> Tuple[str, Optional[str]]:
    """Treat ``program`` as a file path when one exists, else as literal source.

    A path-like argument (``Programs/rand.lm``) that names no file raises
    ``ProgramNotFoundLoom`` instead of running its letters as instructions.
    """
    if isinstance(program, str) and "\n" not in program and "\r" not in program:
        try:
            candidate = Path(program)
            if candidate.is_file():
                return candidate.read_text(encoding="utf-8"), str(candidate)
        except (OSError, ValueError):
            pass
        if looks_like_path(program):
            raise ProgramNotFoundLoom(f"program file not found: {program}")
    return program, None


def run_loom_text(
    text: str,
    *,
    display: Optional[DisplaySink] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    max_steps: Optional[int] = None,
    path: Optional[str] = None,
) -> Tuple[Frame, Dict[str, Any]]:
    """Headless helper: run source text, return (final screen, receipt)."""
    interpreter = Interpreter(
        display,
        seed=seed,
        rng=rng,
        max_steps=max_steps,
        wait_for_quit=False,
    )
    screen = interpreter.run(text, path=path)
    return screen, copy.deepcopy(interpreter.receipt)


def run_program_from_file(
    program_path: str,
    *,
    display: Optional[DisplaySink] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    max_steps: Optional[int] = None,
) -> Tuple[Frame, Dict[str, Any]]:
    text = Path(program_path).read_text(encoding="utf-8")
    return run_loom_text(text, display=display, seed=seed, rng=rng, max_steps=max_steps, path=str(program_path))
