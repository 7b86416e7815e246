"""Git operations for Ghost Tab."""

import subprocess
from pathlib import Path
from typing import List

from logging_config import get_logger
from models import Project, Worktree
from path_utils import expand_path

logger = get_logger(__name__)

DETACHED = "(detached)"
_REMOTE_PREFIX = "origin/"


def run_git(args: List[str], cwd: Path | None = None, check: bool = True) -> subprocess.CompletedProcess[str]:
    """Run a git command with safe argument passing."""
    cmd = ["git"] + list(args)
    try:
        cp = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            check=check,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            text=True,
        )
        return cp
    except FileNotFoundError:
        raise RuntimeError("Git not found on PATH.")
    except subprocess.CalledProcessError as e:
        # surface stderr to caller
        raise RuntimeError(e.stderr.strip() or str(e))


def parse_branch_list(text: str) -> list[str]:
    """Parse `git branch -a --format=%(refname:short)` output.

    A remote-tracking ``origin/X`` is dropped when the local ``X`` exists;
    ``origin/HEAD`` entries are always dropped. Input order is kept.
    """
    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if line]
    local = {line for line in lines if not line.startswith(_REMOTE_PREFIX)}

    branches = []
    for line in lines:
        if line == "origin/HEAD" or line.startswith("origin/HEAD "):
            continue
        if line.startswith(_REMOTE_PREFIX) and line[len(_REMOTE_PREFIX):] in local:
            continue
        branches.append(line)
    return branches


def _parse_porcelain_blocks(text: str) -> list[Worktree]:
    """Parse every block of `git worktree list --porcelain`, main included."""
    results = []
    for block in text.replace("\r\n", "\n").split("\n\n"):
        path = None
        branch = ""
        for line in block.split("\n"):
            if line.startswith("worktree "):
                path = line[len("worktree "):]
            elif line.startswith("branch "):
                branch = line[len("branch "):].removeprefix("refs/heads/")
            elif line.strip() == "detached":
                branch = DETACHED
        if path is not None:
            results.append(Worktree(path=path, branch=branch))
    return results


def parse_worktree_list(text: str) -> list[Worktree]:
    """Parse porcelain output into secondary worktrees (the main one is dropped)."""
    return _parse_porcelain_blocks(text)[1:]


def parse_main_branch(text: str) -> str:
    """Branch checked out in the main worktree, or "" when unknown."""
    blocks = _parse_porcelain_blocks(text)
    if not blocks or blocks[0].branch == DETACHED:
        return ""
    return blocks[0].branch


def filter_available_branches(branches: list[str], worktrees: list[Worktree], main_branch: str) -> list[str]:
    """Drop the main branch and any branch already checked out in a worktree."""
    taken = {wt.branch for wt in worktrees}
    return [b for b in branches if b != main_branch and b not in taken]


def list_branches(repo_path: str) -> list[str]:
    """List local and remote branches of a repository; empty on failure."""
    try:
        cp = run_git(["-C", repo_path, "branch", "-a", "--format=%(refname:short)"])
    except RuntimeError as e:
        logger.info(f"Listing branches failed for {repo_path}: {e}")
        return []
    return parse_branch_list(cp.stdout)


def worktree_porcelain(repo_path: str) -> str:
    """Raw `git worktree list --porcelain` output; empty on failure."""
    try:
        return run_git(["-C", repo_path, "worktree", "list", "--porcelain"]).stdout
    except RuntimeError as e:
        logger.info(f"Listing worktrees failed for {repo_path}: {e}")
        return ""


def detect_worktrees(repo_path: str) -> list[Worktree]:
    """Secondary worktrees of a repository; empty when it is not a repository."""
    return parse_worktree_list(worktree_porcelain(repo_path))


def populate_worktrees(projects: list[Project]) -> None:
    """Attach the secondary worktrees to every project that is a directory."""
    for project in projects:
        path = expand_path(project.path)
        if Path(path).is_dir():
            project.worktrees = detect_worktrees(path)


def delete_branch(repo_path: str, branch: str) -> None:
    """Delete a local branch, or a remote-tracking ref without touching the remote."""
    if branch.startswith(_REMOTE_PREFIX):
        args = ["-C", repo_path, "branch", "-d", "-r", branch]
    else:
        args = ["-C", repo_path, "branch", "-D", branch]
    run_git(args)
    logger.info(f"Deleted branch {branch} in {repo_path}")
