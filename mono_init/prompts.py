"""Interactive prompts that collect a ``ScaffoldPlan``.

Answers already supplied on the command line are not asked again.  Any
cancelled prompt (Ctrl-C, Esc) raises ``KeyboardInterrupt`` before anything
touches the filesystem.
"""

from __future__ import annotations

from typing import Any

import questionary

from mono_init.scaffolder.plan import ProjectKind, ScaffoldPlan


def _ask(question: questionary.Question) -> Any:
    answer = question.ask()
    if answer is None:
        raise KeyboardInterrupt
    return answer


def _validate_name(value: str) -> bool | str:
    return bool(value.strip()) or "Project name is required."


def collect_plan(
    name: str | None = None,
    kind: str | None = None,
    install: bool | None = None,
    git: bool | None = None,
    *,
    assume_defaults: bool = False,
) -> ScaffoldPlan:
    """Ask for whatever is missing and return the resulting plan.

    Args:
        name: Project folder name; prompted for when ``None``.
        kind: ``web``, ``app`` or ``full``; prompted for when ``None``.
        install: Run ``pnpm install`` afterwards; prompted for when ``None``.
        git: Run ``git init`` afterwards; prompted for when ``None``.
        assume_defaults: Answer yes to the install/git questions instead of
            asking.

    Raises:
        KeyboardInterrupt: If the user cancels a prompt.
        pydantic.ValidationError: If *name* sanitizes to nothing.
    """
    if name is None:
        name = _ask(
            questionary.text(
                "Project name (folder):",
                default="",
                validate=_validate_name,
            )
        )

    if kind is None:
        kind = _ask(
            questionary.select(
                "What do you want to scaffold?",
                choices=[questionary.Choice(k.label, value=k.value) for k in ProjectKind],
            )
        )

    if install is None:
        install = True if assume_defaults else _ask(
            questionary.confirm("Install dependencies now (pnpm install)?", default=True)
        )

    if git is None:
        git = True if assume_defaults else _ask(
            questionary.confirm("Initialize a git repository?", default=True)
        )

    return ScaffoldPlan(
        project_name=name,
        kind=ProjectKind(kind),
        install=install,
        git=git,
    )
