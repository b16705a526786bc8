# loom/__main__.py
# `python -m loom Programs/rand.lm`
from .loom_cli import main

raise SystemExit(main())
