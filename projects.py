"""Projects file I/O.

The file holds one ``name:path`` record per line. Names and paths may
themselves contain colons, so records are matched by whole-line
equality and never split for comparison.
"""

from pathlib import Path

from error_handler import ProjectsFileError
from logging_config import get_logger
from models import Project
from path_utils import normalize_project_path

logger = get_logger(__name__)


def parse_projects(text: str) -> list[Project]:
    """Parse projects file content, keeping file order and duplicates."""
    projects = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        name, sep, path = line.partition(":")
        if not sep or not name:
            logger.debug(f"Skipping malformed project line: {line!r}")
            continue
        projects.append(Project(name=name, path=path))
    return projects


def load_projects(projects_file: Path) -> list[Project]:
    """Load projects from a file; a missing or unreadable file is an error."""
    try:
        text = projects_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectsFileError(projects_file, "projects file not found")
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectsFileError(projects_file, f"cannot read projects file ({e})")
    return parse_projects(text)


def project_line(name: str, path: str) -> str:
    """The record for a project, without its newline."""
    return f"{name}:{path}"


def append_project(name: str, path: str, projects_file: Path) -> None:
    """Append a record, creating parent directories. No deduplication."""
    projects_file.parent.mkdir(parents=True, exist_ok=True)
    with projects_file.open("a", encoding="utf-8", newline="") as f:
        f.write(project_line(name, path) + "\n")
    logger.info(f"Added project {name!r} to {projects_file}")


def remove_project(line: str, projects_file: Path) -> bool:
    """Delete every record equal to line. Returns True if anything was removed.

    The file is left untouched when nothing matches.
    """
    # Compared as bytes; lines in other encodings pass through unchanged
    target = line.encode("utf-8")
    *records, tail = projects_file.read_bytes().split(b"\n")
    kept = [record for record in records if record != target]
    if len(kept) == len(records):
        return False

    projects_file.write_bytes(b"".join(record + b"\n" for record in kept) + tail)
    logger.info(f"Removed {line!r} from {projects_file}")
    return True


def is_duplicate_project(path: str, projects: list[Project]) -> bool:
    """Whether path names an already listed project, ignoring trailing slashes."""
    candidate = normalize_project_path(path)
    return any(normalize_project_path(p.path) == candidate for p in projects)
