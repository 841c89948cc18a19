"""Ejecuta la CLI `meetings` desde el checkout, sin `pip install -e .`.

    python main.py rooms list --page-size 20
    python main.py doctor run

Añade `src/` al path (layout src) y delega en la misma app Typer que el
script `meetings` del paquete, con el mismo nombre de programa en la ayuda.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import app  # noqa: PLC0415

    app(prog_name="meetings")


if __name__ == "__main__":
    main()
