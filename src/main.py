"""Run script.

Why it exists:
- Lets you run the CLI with `python -m main` during development.
- Keeps a simple entrypoint besides the `doggie-quiz` console script.
"""

from __future__ import annotations

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
