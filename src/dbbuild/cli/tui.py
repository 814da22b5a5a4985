"""Terminal UI utilities for dbbuild."""

from __future__ import annotations

from itertools import groupby

import questionary

from dbbuild.cli.common.tui_style import QUESTIONARY_STYLE_SELECT
from dbbuild.core.scripts import DatabaseObjectType, ScriptFile

_MAX_SCRIPT_NAME_WIDTH = 96


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _script_choice_title(script: ScriptFile, *, name_width: int) -> str:
    """Format one script choice as `<schema.name>  <file path>` with aligned path column."""
    short_name = _truncate(script.qualified_name, _MAX_SCRIPT_NAME_WIDTH)
    return f"{short_name.ljust(name_width)}  {script.path}".rstrip()


def _type_separator(object_type: DatabaseObjectType) -> questionary.Separator:
    """Group header shown above the scripts of one object type."""
    return questionary.Separator(f"── {object_type.value.lower()}s ──")


def _script_choices(scripts: list[ScriptFile]) -> list[questionary.Choice]:
    """
    Build checkbox choices grouped by object type.

    Groups follow the DatabaseObjectType declaration order; scripts within a
    group are sorted by qualified name.
    """
    type_order = {t: i for i, t in enumerate(DatabaseObjectType)}
    ordered = sorted(
        scripts, key=lambda s: (type_order[s.object_type], s.qualified_name.lower())
    )
    name_width = max(
        (len(_truncate(s.qualified_name, _MAX_SCRIPT_NAME_WIDTH)) for s in scripts),
        default=0,
    )

    choices: list[questionary.Choice] = []
    for object_type, group in groupby(ordered, key=lambda s: s.object_type):
        choices.append(_type_separator(object_type))
        choices.extend(
            questionary.Choice(
                title=_script_choice_title(s, name_width=name_width),
                value=s,
            )
            for s in group
        )
    return choices


def select_scripts(scripts: list[ScriptFile]) -> list[ScriptFile]:
    """Display a checkbox prompt, grouped by object type, to pick scripts.

    Args:
        scripts: A list of ScriptFile objects to choose from.

    Returns:
        A list of selected ScriptFile objects, or an empty list if none selected.
    """
    if not scripts:
        return []

    return (
        questionary.checkbox(
            "Select scripts:",
            choices=_script_choices(scripts),
            style=QUESTIONARY_STYLE_SELECT,
            instruction="Use ↑/↓, space, a (all), enter",
        ).ask()
        or []
    )
