"""Outcome records emitted on stdout when a model terminates."""

import json
from dataclasses import dataclass


@dataclass(frozen=True)
class Confirmation:
    """Yes/no answer; also the cancel shape of the wizard and multi-select."""
    confirmed: bool

    def to_dict(self) -> dict:
        return {"confirmed": self.confirmed}


@dataclass(frozen=True)
class Cancelled:
    """Nothing was selected."""

    def to_dict(self) -> dict:
        return {"selected": False}


@dataclass(frozen=True)
class ProjectSelected:
    project: str
    path: str

    def to_dict(self) -> dict:
        return {"project": self.project, "path": self.path, "selected": True}


@dataclass(frozen=True)
class MenuAction:
    """A main-menu decision; optional fields appear only when set."""
    action: str
    ai_tool: str
    name: str | None = None
    path: str | None = None
    ghost_display: str | None = None
    tab_title: str | None = None
    sound_name: str | None = None

    def to_dict(self) -> dict:
        d = {"action": self.action}
        if self.name is not None:
            d["name"] = self.name
        if self.path is not None:
            d["path"] = self.path
        d["ai_tool"] = self.ai_tool
        for key in ("ghost_display", "tab_title", "sound_name"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d


@dataclass(frozen=True)
class BranchSelected:
    branch: str

    def to_dict(self) -> dict:
        return {"branch": self.branch, "selected": True}


@dataclass(frozen=True)
class TerminalSelected:
    terminal: str

    def to_dict(self) -> dict:
        return {"terminal": self.terminal, "selected": True}


@dataclass(frozen=True)
class InstallRequested:
    terminal: str
    cask: str

    def to_dict(self) -> dict:
        return {"action": "install", "terminal": self.terminal, "cask": self.cask, "selected": False}


@dataclass(frozen=True)
class ToolSelected:
    tool: str

    def to_dict(self) -> dict:
        return {"tool": self.tool, "selected": True}


@dataclass(frozen=True)
class ToolsConfirmed:
    tools: tuple[str, ...]

    def to_dict(self) -> dict:
        return {"tools": list(self.tools), "confirmed": True}


@dataclass(frozen=True)
class ConfigAction:
    action: str

    def to_dict(self) -> dict:
        return {"action": self.action}


@dataclass(frozen=True)
class ProjectAdded:
    name: str
    path: str

    def to_dict(self) -> dict:
        return {"name": self.name, "path": self.path, "confirmed": True}


@dataclass(frozen=True)
class SettingsConfirmed:
    ghost_display: str
    tab_title: str
    sound_name: str | None = None

    def to_dict(self) -> dict:
        d = {"ghost_display": self.ghost_display, "tab_title": self.tab_title}
        if self.sound_name is not None:
            d["sound_name"] = self.sound_name
        d["confirmed"] = True
        return d


def to_json(outcome) -> str:
    """Single-line JSON for an outcome."""
    return json.dumps(outcome.to_dict(), separators=(",", ":"), ensure_ascii=False)
