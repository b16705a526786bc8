# loom/receipts.py
# Run receipts: a JSON-able record of one program run, validated against a local schema.

from __future__ import annotations
import datetime as _dt
import hashlib
import json
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "loom-receipt.schema.json"

_validator: Optional[Draft202012Validator] = None


def _now_utc_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def program_hash(canonical: str) -> str:
    return "sha256:" + hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def make_base_receipt(canonical: str, *, path: Optional[str] = None, seed: Optional[int] = None) -> Dict[str, Any]:
    program: Dict[str, Any] = {"hash": program_hash(canonical), "length": len(canonical)}
    if path:
        program["path"] = path
    return {
        "engine": "interpreter",
        "program": program,
        "run": {"timestamp": _now_utc_iso(), "uuid": str(uuid.uuid4()), "seed": seed},
        "logs": [],
        "status": "ok",
    }


def load_schema() -> Dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def _get_validator() -> Draft202012Validator:
    global _validator
    if _validator is None:
        schema = load_schema()
        Draft202012Validator.check_schema(schema)
        _validator = Draft202012Validator(schema)
    return _validator


def verify_receipt(receipt: Dict[str, Any]) -> List[str]:
    """Return schema violations as readable strings (empty when valid)."""
    errors = sorted(_get_validator().iter_errors(receipt), key=lambda e: list(e.path))
    out: List[str] = []
    for err in errors:
        where = "/".join(str(p) for p in err.path) or "<root>"
        out.append(f"{where}: {err.message}")
    return out


def write_receipt(path: Optional[str], receipt: Dict[str, Any], print_receipt: bool) -> None:
    dump = json.dumps(receipt, indent=2, sort_keys=True)
    if print_receipt:
        print(dump)
    if path:
        Path(path).write_text(dump + "\n", encoding="utf-8")
