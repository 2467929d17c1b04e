"""The scaffold plan: the immutable record of user choices for one run."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mono_init.utils import sanitize_folder_name


class ProjectKind(str, Enum):
    """Which front ends accompany the API."""

    WEB = "web"
    APP = "app"
    FULL = "full"

    @property
    def has_web(self) -> bool:
        return self in (ProjectKind.WEB, ProjectKind.FULL)

    @property
    def has_app(self) -> bool:
        return self in (ProjectKind.APP, ProjectKind.FULL)

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS: dict[ProjectKind, str] = {
    ProjectKind.WEB: "Web + API (Next.js + Express)",
    ProjectKind.APP: "App + API (Expo + Express)",
    ProjectKind.FULL: "Full monorepo (Web + App + API)",
}


def workspace_members(kind: ProjectKind) -> list[str]:
    """Return the ordered workspace member paths for *kind*.

    ``api`` is always present and first; ``web`` and ``app`` follow in that
    order when *kind* includes them.
    """
    members = ["api"]
    if kind.has_web:
        members.append("web")
    if kind.has_app:
        members.append("app")
    return members


class ScaffoldPlan(BaseModel):
    """User intent for a single scaffold run."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Folder-safe project name")
    kind: ProjectKind
    install: bool = Field(default=True, description="Run the package manager install step")
    git: bool = Field(default=True, description="Run git init after scaffolding")

    @field_validator("project_name")
    @classmethod
    def _sanitize_project_name(cls, value: str) -> str:
        sanitized = sanitize_folder_name(value)
        if not sanitized:
            raise ValueError("Project name is required.")
        if sanitized in (".", ".."):
            raise ValueError(f"'{sanitized}' is not a usable project folder name.")
        return sanitized

    def workspace_members(self) -> list[str]:
        return workspace_members(self.kind)
