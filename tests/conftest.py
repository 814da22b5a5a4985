from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture
def database_dir(tmp_path: Path) -> Path:
    """A small database directory laid out by convention on disk."""
    root = tmp_path / "salesdb"
    (root / "procedure").mkdir(parents=True)
    (root / "view").mkdir()
    (root / "foobar").mkdir()

    (root / "procedure" / "get_orders_prc.sql").write_text(
        "create procedure sales.get_orders_prc as select 1", encoding="utf-8"
    )
    (root / "view" / "orders_vw.sql").write_text(
        "-- orders view\ncreate view [dbo].[orders_vw] as select 1 as id",
        encoding="utf-8",
    )
    (root / "procedure" / "notes.txt").write_text("not a script", encoding="utf-8")
    (root / "foobar" / "stray_prc.sql").write_text(
        "create procedure stray_prc as select 1", encoding="utf-8"
    )
    return root
