"""Module entry point for ``python -m cli``, same as the ``statdata`` script."""

from __future__ import annotations

from cli.main import main


if __name__ == "__main__":
    raise SystemExit(main())
