import questionary

from dbbuild.cli.tui import (
    _MAX_SCRIPT_NAME_WIDTH,
    _script_choice_title,
    _script_choices,
    _truncate,
)
from dbbuild.core.scripts import DatabaseObjectType, ScriptFile, ScriptObject


def _script(name: str, object_type: DatabaseObjectType, path: str = "") -> ScriptFile:
    return ScriptFile(
        database_name="db",
        script_object=ScriptObject(
            object_name=name,
            schema_name="dbo",
            object_type=object_type,
            original_text="",
        ),
        path=path,
    )


def test_script_choice_title_shows_name_before_path_and_aligns_path_column():
    first = _script_choice_title(
        _script("alpha", DatabaseObjectType.VIEW, "view/alpha.sql"), name_width=16
    )
    second = _script_choice_title(
        _script("beta", DatabaseObjectType.VIEW, "view/beta.sql"), name_width=16
    )

    assert first.startswith("dbo.alpha")
    assert second.startswith("dbo.beta")
    assert first.index("view/") == second.index("view/")
    assert first.endswith("view/alpha.sql")


def test_script_choice_title_truncates_long_names():
    long_name = "x" * (_MAX_SCRIPT_NAME_WIDTH + 10)
    rendered = _script_choice_title(
        _script(long_name, DatabaseObjectType.TABLE),
        name_width=_MAX_SCRIPT_NAME_WIDTH,
    )

    assert "..." in rendered
    assert _truncate(long_name, _MAX_SCRIPT_NAME_WIDTH).endswith("...")


def test_script_choices_are_grouped_by_object_type():
    scripts = [
        _script("orders_vw", DatabaseObjectType.VIEW),
        _script("zeta_prc", DatabaseObjectType.PROCEDURE),
        _script("alpha_prc", DatabaseObjectType.PROCEDURE),
    ]

    choices = _script_choices(scripts)

    separators = [c for c in choices if isinstance(c, questionary.Separator)]
    assert [s.line for s in separators] == ["── procedures ──", "── views ──"]
    picked = [c for c in choices if not isinstance(c, questionary.Separator)]
    assert [c.value.object_name for c in picked] == [
        "alpha_prc",
        "zeta_prc",
        "orders_vw",
    ]
    assert isinstance(choices[0], questionary.Separator)
    assert isinstance(choices[3], questionary.Separator)


def test_script_choices_empty_catalog():
    assert _script_choices([]) == []
