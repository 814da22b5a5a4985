from pathlib import Path

import pytest

from dbbuild.core.adapters.filesystem import LocalFileSystem
from dbbuild.core.diagnostics import CollectingDiagnosticSink
from dbbuild.core.parser import HeaderScriptParser
from dbbuild.core.repository import ScriptRepository
from dbbuild.core.scripts import DatabaseObjectType, Severity


def test_local_file_system_lists_immediate_children(database_dir: Path):
    fs = LocalFileSystem()
    (database_dir / "procedure" / "nested").mkdir()
    (database_dir / "procedure" / "nested" / "deep_prc.sql").write_text("x")

    directories = fs.list_directories(str(database_dir))
    files = fs.list_files(str(database_dir / "procedure"))

    assert [d.name for d in directories] == ["foobar", "procedure", "view"]
    assert directories[1].path == str(database_dir / "procedure")
    assert [f.name for f in files] == ["get_orders_prc.sql", "notes.txt"]


def test_local_file_system_strips_bom(tmp_path: Path):
    path = tmp_path / "bom.sql"
    path.write_bytes(b"\xef\xbb\xbfcreate view v as select 1")

    assert LocalFileSystem().read_text(str(path)) == "create view v as select 1"


def test_local_file_system_raises_for_missing_root(tmp_path: Path):
    with pytest.raises(OSError):
        LocalFileSystem().list_directories(str(tmp_path / "missing"))


def test_repository_scans_directory_on_disk(database_dir: Path):
    sink = CollectingDiagnosticSink()
    repository = ScriptRepository(
        str(database_dir),
        "localhost",
        "salesdb",
        LocalFileSystem(),
        HeaderScriptParser(),
        sink,
    )

    scripts = repository.get_all_scripts()

    by_name = {s.object_name: s for s in scripts}
    assert set(by_name) == {"get_orders_prc", "orders_vw"}
    assert by_name["get_orders_prc"].schema_name == "sales"
    assert by_name["get_orders_prc"].object_type == DatabaseObjectType.PROCEDURE
    assert by_name["orders_vw"].qualified_name == "dbo.orders_vw"
    assert all(s.database_name == "salesdb" for s in scripts)

    assert sorted(sink.messages(Severity.WARNING)) == [
        "Filtering out file because it is not a .sql file: "
        f"{database_dir / 'procedure' / 'notes.txt'}",
        "Filtering out file because its in an unsupported subdirectory: "
        f"{database_dir / 'foobar' / 'stray_prc.sql'}",
    ]


def test_local_file_system_decodes_utf16_with_bom(tmp_path: Path):
    path = tmp_path / "unicode.sql"
    path.write_bytes("create view v as select 1".encode("utf-16"))

    assert LocalFileSystem().read_text(str(path)) == "create view v as select 1"


def test_local_file_system_raises_decode_error_without_bom(tmp_path: Path):
    path = tmp_path / "latin1.sql"
    path.write_bytes(b"create view caf\xe9 as select 1")

    with pytest.raises(UnicodeDecodeError):
        LocalFileSystem().read_text(str(path))


def test_repository_skips_undecodable_file_on_disk(database_dir: Path):
    procedure_dir = database_dir / "procedure"
    (procedure_dir / "unicode_prc.sql").write_bytes(
        "create procedure unicode_prc as select 1".encode("utf-16")
    )
    (procedure_dir / "latin1_prc.sql").write_bytes(
        b"create procedure latin1_prc as select 'caf\xe9'"
    )
    sink = CollectingDiagnosticSink()
    repository = ScriptRepository(
        str(database_dir),
        "localhost",
        "salesdb",
        LocalFileSystem(),
        HeaderScriptParser(),
        sink,
    )

    scripts = repository.get_all_scripts()

    assert {s.object_name for s in scripts} == {
        "get_orders_prc",
        "orders_vw",
        "unicode_prc",
    }
    decoded = [m for m in sink.messages(Severity.WARNING) if "could not be decoded" in m]
    assert len(decoded) == 1
    assert decoded[0].startswith(
        "Filtering out file because it could not be decoded: "
        f"{procedure_dir / 'latin1_prc.sql'}"
    )
    assert len(sink.messages(Severity.WARNING)) == 3
