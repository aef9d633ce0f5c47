"""exec-ws CLI bootstrap."""

from __future__ import annotations

from execws.cli import app

if __name__ == "__main__":
    app()
