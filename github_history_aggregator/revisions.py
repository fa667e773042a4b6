"""Local commit list via git rev-list."""

import subprocess
from pathlib import Path

from .errors import RevisionError

DEFAULT_REV_ARGS = ("--remotes",)


def read_rev_list(repo_dir: Path, args: tuple[str, ...] = DEFAULT_REV_ARGS) -> str:
    """Return `git rev-list <args> --format=oneline` output for repo_dir, verbatim."""
    repo_dir = Path(repo_dir)
    if not repo_dir.is_dir():
        raise RevisionError(f"Repository folder does not exist: {repo_dir}")
    cmd = ["git", "rev-list", *args, "--format=oneline"]
    try:
        result = subprocess.run(cmd, cwd=repo_dir, capture_output=True, text=True, check=True)
    except FileNotFoundError as e:
        raise RevisionError("git executable not found") from e
    except subprocess.CalledProcessError as e:
        raise RevisionError(f"git rev-list failed ({e.returncode}): {(e.stderr or '').strip()}") from e
    return result.stdout
