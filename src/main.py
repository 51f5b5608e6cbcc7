"""Run script.

Why it exists:
- Lets you run the CLI with `python -m main` from `src/` during development.
- Keeps a plain entry point besides the `vault-deploy` console script.
"""

from __future__ import annotations

import sys

# Rich prints ➜/✓; cp1252 Windows consoles cannot encode them.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
