# loom/loom_cli.py
# CLI for running Loom programs; prints logs and receipts, opens the canvas.

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sys
from typing import Any, Dict, Iterator, List, Optional

from .config import DISPLAYS, ConfigError, LoomConfig, config_from_env
from .display import DisplaySink, HeadlessDisplay, TerminalDisplay
from .errors import DisplayErrorLoom, LoomError, ProgramNotFoundLoom, QuitRequested
from .interpreter import Interpreter, load_program_text
from .normalizer import normalize_loom_source
from .receipts import make_base_receipt, verify_receipt, write_receipt
from .tokenizer import tokenize

log = logging.getLogger("loom")


def _configure_logging(level: Optional[str]) -> None:
    if not level:
        return
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def make_display(config: LoomConfig) -> DisplaySink:
    if config.display == "none":
        return HeadlessDisplay()
    if config.display == "terminal":
        return TerminalDisplay()
    try:
        from .window import PygameDisplay
    except ImportError as e:
        raise DisplayErrorLoom(
            f"window display needs pygame ({e}); install loom-canvas[window] or use --display terminal"
        ) from e
    return PygameDisplay(cell_size=config.cell_size)


def _print_logs(receipt: Dict[str, Any]) -> None:
    for entry in receipt.get("logs") or []:
        print(entry.get("message") or json.dumps(entry, sort_keys=True))


def _attach_verify(receipt: Dict[str, Any]) -> None:
    receipt["verify"] = {"errors": verify_receipt(receipt), "warnings": []}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="loom",
        description="Run a Loom program on the 32x32 canvas.",
    )
    p.add_argument("program", nargs="?", help="Path to a Loom program (.lm), or the program text itself.")
    p.add_argument("--display", choices=DISPLAYS, default=None, help="Canvas backend (default: window, env LOOM_DISPLAY).")
    p.add_argument("--cell-size", type=int, default=None, help="Pixels per cell in the window (env LOOM_CELL_SIZE).")
    p.add_argument("--pacing-ms", type=float, default=None, help="Pause after each commit in ms (env LOOM_PACING_MS).")
    p.add_argument("--seed", type=int, default=None, help="Seed for '?' draws (env LOOM_SEED).")
    p.add_argument("--max-steps", type=int, default=None, help="Abort after this many instructions (env LOOM_MAX_STEPS).")
    p.add_argument("--log-level", default=None, help="Enable diagnostic logging at this level (env LOOM_LOG).")
    p.add_argument("--no-wait", action="store_true", help="Exit when the program halts instead of waiting for quit.")
    p.add_argument("--emit-canonical", action="store_true", help="Print the canonical program text and exit.")
    p.add_argument("--emit-tokens", action="store_true", help="Print the token listing as JSON lines and exit.")
    p.add_argument("--print-logs", action="store_true", help="Print receipt log lines (breakpoints, errors).")
    p.add_argument("--print-receipt", action="store_true", help="Print the run receipt JSON.")
    p.add_argument("--receipt-out", metavar="PATH", help="Write the run receipt to PATH (JSON).")
    p.add_argument("--verify", action="store_true", help="Validate the receipt against its schema and attach the result.")
    return p


def _record_error(receipt: Dict[str, Any], e: LoomError) -> None:
    if receipt.get("status") != "error":
        receipt["status"] = "error"
        receipt.update(e.to_receipt())
        receipt.setdefault("logs", []).append({"level": "error", "event": e.kind, "message": e.detail})


@contextlib.contextmanager
def _breakpoint_channel(enabled: bool) -> Iterator[None]:
    """Route '*' breakpoints to stderr for one run when logging is not configured."""
    if not enabled:
        yield
        return
    logger = logging.getLogger("loom.interpreter")
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("loom: %(message)s"))
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        yield
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


def main(argv: Optional[List[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    if not args.program:
        p.error("program path or text required (e.g., Programs/rand.lm)")

    try:
        config = config_from_env().merged({
            "display": args.display,
            "cell_size": args.cell_size,
            "pacing_ms": args.pacing_ms,
            "seed": args.seed,
            "max_steps": args.max_steps,
            "log_level": args.log_level,
        })
    except ConfigError as e:
        p.error(str(e))

    _configure_logging(config.log_level)

    try:
        text, path = load_program_text(args.program)
    except ProgramNotFoundLoom as e:
        receipt = make_base_receipt("", path=args.program, seed=config.seed)
        _record_error(receipt, e)
        print(f"loom: {e.detail}", file=sys.stderr)
        if args.verify:
            _attach_verify(receipt)
        write_receipt(args.receipt_out, receipt, args.print_receipt)
        return 1
    canonical = normalize_loom_source(text)

    if args.emit_canonical or args.emit_tokens:
        if args.emit_canonical:
            print(canonical)
        if args.emit_tokens:
            for tok in tokenize(canonical):
                print(json.dumps(tok, ensure_ascii=False))
        return 0

    receipt: Dict[str, Any] = make_base_receipt(canonical, path=path, seed=config.seed)
    rc = 0
    try:
        display = make_display(config)
        interpreter = Interpreter(
            display,
            seed=config.seed,
            pacing=config.pacing,
            max_steps=config.max_steps,
            wait_for_quit=not args.no_wait,
        )
        try:
            with _breakpoint_channel(not config.log_level):
                interpreter.execute(canonical, path=path)
        finally:
            receipt = interpreter.receipt
        if args.no_wait and isinstance(display, TerminalDisplay):
            display.paint()
    except QuitRequested:
        receipt["status"] = "ok"
        receipt.setdefault("logs", []).append(
            {"level": "info", "event": "quit", "message": "canvas closed before the program halted"}
        )
        receipt["stepCount"] = interpreter.steps
        receipt["commitCount"] = interpreter.commits
        receipt["final"] = {"x": interpreter.x, "y": interpreter.y, "pc": interpreter.pc}
    except LoomError as e:
        _record_error(receipt, e)
        print(f"loom: {e.kind}: {e.detail}", file=sys.stderr)
        rc = 1

    if args.verify:
        _attach_verify(receipt)
    if args.print_logs:
        _print_logs(receipt)
    write_receipt(args.receipt_out, receipt, args.print_receipt)
    if args.receipt_out:
        log.debug("wrote receipt %s", args.receipt_out)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
