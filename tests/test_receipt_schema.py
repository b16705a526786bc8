# tests/test_receipt_schema.py
import jsonschema
import pytest

from loom.interpreter import Interpreter, run_loom_text
from loom.display import HeadlessDisplay
from loom.errors import ParseErrorLoom
from loom.receipts import load_schema, make_base_receipt, program_hash, verify_receipt

SCHEMA = load_schema()


def validate(obj):
    jsonschema.validate(instance=obj, schema=SCHEMA, cls=jsonschema.Draft202012Validator)


def test_schema_itself_is_valid():
    jsonschema.Draft202012Validator.check_schema(SCHEMA)


def test_success_receipt_validates():
    _, receipt = run_loom_text("+4*x", seed=1)
    validate(receipt)  # should NOT raise
    assert verify_receipt(receipt) == []
    assert receipt["run"]["seed"] == 1


def test_error_receipt_validates():
    interp = Interpreter(HeadlessDisplay(), wait_for_quit=False)
    with pytest.raises(ParseErrorLoom):
        interp.run("+]")
    validate(interp.receipt)
    assert interp.receipt["kind"] == "unmatched-closer"


def test_base_receipt_needs_counters_to_pass():
    base = make_base_receipt("+x")
    problems = verify_receipt(base)
    assert problems
    assert any("stepCount" in p for p in problems)


def test_error_receipt_requires_reason():
    base = make_base_receipt("+]")
    base["status"] = "error"
    base["kind"] = "unmatched-closer"
    with pytest.raises(jsonschema.ValidationError):
        validate(base)


def test_breakpoint_coordinates_are_range_checked():
    _, receipt = run_loom_text("*")
    receipt["logs"][0]["x"] = 32
    with pytest.raises(jsonschema.ValidationError):
        validate(receipt)


def test_program_hash_format():
    h = program_hash("+x")
    assert h.startswith("sha256:") and len(h) == len("sha256:") + 64
    assert program_hash("+x") == program_hash("+x")
    assert program_hash("+x") != program_hash("+xx")
