#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ghost-tab-tui: interactive terminal pickers for the Ghost Tab launcher.

Each subcommand runs one model on the controlling terminal and prints a
single JSON line on stdout describing how it ended. Diagnostics go to
stderr and the log files.
"""

import termios
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

import git_utils
from config import log_level, projects_file_path, read_preference
from error_handler import (ProjectsFileError, TTYUnavailableError, handle_file_system_error,
                           handle_terminal_error)
from logging_config import get_logger, log_performance, set_console_logging, setup_logging
from models import DEFAULT_AI_TOOL, detect_ai_tools, detect_terminals
from path_utils import expand_path
from projects import load_projects
from ui.ai_tool_selector import AIToolSelector, MultiAIToolSelector
from ui.branch_picker import BranchPicker
from ui.config_menu import ConfigMenu
from ui.confirm_dialog import ConfirmDialog
from ui.logo import Logo
from ui.main_menu import MainMenu
from ui.outcomes import Cancelled, to_json
from ui.program import Model, Program
from ui.project_input import ProjectInput
from ui.project_selector import ProjectSelector
from ui.settings import SettingsMenu
from ui.terminal_selector import TerminalSelector
from ui.theme import theme_for_tool

__version__ = "1.0.0"

logger = get_logger(__name__)

app = typer.Typer(
    name="ghost-tab-tui",
    help="Interactive TUI components for Ghost Tab",
    no_args_is_help=True,
    add_completion=False,
)

# stdout is reserved for the outcome record
err_console = Console(stderr=True)

AI_TOOL_HELP = "AI tool for theming"


def _version_callback(value: bool):
    if value:
        typer.echo(f"ghost-tab-tui {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    ai_tool: str = typer.Option(DEFAULT_AI_TOOL, "--ai-tool", help=AI_TOOL_HELP),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """Interactive TUI components for Ghost Tab."""
    setup_logging(level=log_level())
    ctx.obj = {"ai_tool": ai_tool}


def _ai_tool(ctx: typer.Context, override: Optional[str]) -> str:
    """The --ai-tool given on the subcommand, else the one given before it."""
    if override:
        return override
    if ctx.obj and ctx.obj.get("ai_tool"):
        return ctx.obj["ai_tool"]
    return DEFAULT_AI_TOOL


def _fail(message: str):
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(code=1)


def _split_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _emit(outcome):
    typer.echo(to_json(outcome))


def run_model(model: Model, command: str):
    """Run a model on the terminal and print its outcome."""
    start = time.time()
    program = Program(model)
    set_console_logging(False)
    try:
        program.run()
    except TTYUnavailableError as e:
        set_console_logging(True)
        info = handle_terminal_error(e, command)
        _fail(info.user_message)
    except (OSError, termios.error) as e:
        set_console_logging(True)
        if not program.finished:
            info = handle_terminal_error(e, command)
            _fail(info.user_message)
        # The model already decided; only restoring the terminal failed
        logger.warning(f"Terminal cleanup failed after {command}: {e}")
    finally:
        set_console_logging(True)
        log_performance(logger, command, time.time() - start)

    outcome = model.outcome()
    if outcome is not None:
        _emit(outcome)


def _load_projects_or_fail(projects_file: Path):
    try:
        return load_projects(projects_file)
    except ProjectsFileError as e:
        handle_file_system_error(e, "load projects", projects_file)
        _fail(str(e))


@app.command()
def confirm(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="Question to ask"),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """Ask a yes/no question."""
    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    run_model(ConfirmDialog(message, theme), "confirm")


@app.command("show-logo")
def show_logo():
    """Show the animated logo for a moment."""
    run_model(Logo(), "show-logo")


@app.command("select-project")
def select_project(
    ctx: typer.Context,
    projects_file: Optional[Path] = typer.Option(None, "--projects-file", help="Path to the projects file"),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """Pick one of the saved projects."""
    path = projects_file or projects_file_path()
    projects = _load_projects_or_fail(path)
    if not projects:
        _emit(Cancelled())
        return
    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    run_model(ProjectSelector(projects, theme), "select-project")


@app.command("select-ai-tool")
def select_ai_tool(
    ctx: typer.Context,
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """Pick one installed AI tool."""
    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    run_model(AIToolSelector(detect_ai_tools(), theme), "select-ai-tool")


@app.command("multi-select-ai-tool")
def multi_select_ai_tool(
    ctx: typer.Context,
    current: str = typer.Option("", "--current", help="Comma-separated tools to start checked"),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """Check any number of installed AI tools."""
    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    model = MultiAIToolSelector(detect_ai_tools(), theme, current=_split_list(current))
    run_model(model, "multi-select-ai-tool")


@app.command("add-project")
def add_project(
    ctx: typer.Context,
    projects_file: Optional[Path] = typer.Option(
        None, "--projects-file", help="Reject paths already listed in this file"
    ),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """Ask for a project name and directory."""
    existing = []
    if projects_file is not None and projects_file.exists():
        existing = _load_projects_or_fail(projects_file)
    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    run_model(ProjectInput(theme, existing=existing), "add-project")


@app.command("settings-menu")
def settings_menu(
    ctx: typer.Context,
    ghost_display: str = typer.Option("animated", "--ghost-display", help="animated, static or none"),
    tab_title: str = typer.Option("full", "--tab-title", help="full or project"),
    sound_name: Optional[str] = typer.Option(None, "--sound-name", help="Notification sound, empty for off"),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """Edit the display settings on their own."""
    if sound_name is None:
        sound_name = read_preference("notification-sound")
    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    run_model(SettingsMenu(theme, ghost_display, tab_title, sound_name), "settings-menu")


@app.command("main-menu")
def main_menu(
    ctx: typer.Context,
    projects_file: Optional[Path] = typer.Option(None, "--projects-file", help="Path to the projects file"),
    ai_tools: str = typer.Option(DEFAULT_AI_TOOL, "--ai-tools", help="Comma-separated installed AI tools"),
    ghost_display: str = typer.Option("animated", "--ghost-display", help="animated, static or none"),
    tab_title: str = typer.Option("full", "--tab-title", help="full or project"),
    update_version: str = typer.Option("", "--update-version", help="Newer version to announce"),
    sound_name: Optional[str] = typer.Option(None, "--sound-name", help="Notification sound, empty for off"),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """The Ghost Tab home screen."""
    path = projects_file or projects_file_path()
    if path.exists():
        projects = _load_projects_or_fail(path)
    else:
        logger.info(f"No projects file at {path}; starting with an empty list")
        projects = []
    git_utils.populate_worktrees(projects)

    if sound_name is None:
        sound_name = read_preference("notification-sound")
    model = MainMenu(
        projects,
        _split_list(ai_tools),
        _ai_tool(ctx, ai_tool),
        ghost_display=ghost_display,
        tab_title=tab_title,
        sound_name=sound_name,
        update_version=update_version,
    )
    run_model(model, "main-menu")


@app.command("config-menu")
def config_menu(
    ctx: typer.Context,
    terminal_name: str = typer.Option("", "--terminal-name", help="Configured terminal to show"),
    version: str = typer.Option("", "--version", help="Installed Ghost Tab version"),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """The configuration menu."""
    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    run_model(ConfigMenu(theme, terminal_name, version), "config-menu")


@app.command("select-terminal")
def select_terminal(
    ctx: typer.Context,
    current: Optional[str] = typer.Option(None, "--current", help="Terminal to mark as current"),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """Pick a terminal emulator, or ask to install one."""
    if current is None:
        current = read_preference("terminal")
    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    run_model(TerminalSelector(detect_terminals(), theme, current), "select-terminal")


@app.command("select-branch")
def select_branch(
    ctx: typer.Context,
    project_path: str = typer.Option(..., "--project-path", help="Path to the git project"),
    ai_tool: Optional[str] = typer.Option(None, "--ai-tool", help=AI_TOOL_HELP),
):
    """Pick a branch for a new worktree."""
    repo = expand_path(project_path)
    if not Path(repo).is_dir():
        handle_file_system_error(NotADirectoryError(repo), "select branch", Path(repo))
        _fail(f"project path is not a directory: {project_path}")

    main_branch = git_utils.parse_main_branch(git_utils.worktree_porcelain(repo))
    branches = git_utils.list_branches(repo)
    available = git_utils.filter_available_branches(branches, git_utils.detect_worktrees(repo), main_branch)
    if not available:
        _emit(Cancelled())
        return

    theme = theme_for_tool(_ai_tool(ctx, ai_tool))
    run_model(BranchPicker(available, theme, repo), "select-branch")


if __name__ == "__main__":
    app()
