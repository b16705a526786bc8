import sys, json
from pathlib import Path
import os

# ---- make the project root importable no matter where we run this file from ----
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from loom.normalizer import normalize_loom_source
from loom.tokenizer import tokenize
from loom.brackets import build_bracket_index
from loom.errors import ParseErrorLoom

def main(p: str):
    text = Path(p).read_text(encoding="utf-8")
    canonical = normalize_loom_source(text)

    print("=== Canonical text ===")
    for i in range(0, len(canonical), 64):
        print(f"{i:05d}  {canonical[i:i + 64]}")

    print("\n=== Tokens ===")
    for t in tokenize(canonical):
        print(json.dumps(t, ensure_ascii=False))

    print("\n=== Brackets ===")
    try:
        index = build_bracket_index(canonical)
    except ParseErrorLoom as e:
        print(f"{e.kind}: {e.detail}")
        return 1
    for opener in sorted(k for k, v in index.items() if k < v):
        print(f"{canonical[opener]} {opener:5d} -> {index[opener]:5d}")
    return 0

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python dev/debug_normalize_tokens.py <program.lm>")
        sys.exit(2)
    sys.exit(main(sys.argv[1]))
