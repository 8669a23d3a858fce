"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides throwaway git repositories built with pygit2.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pygit2
import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local gitsift package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of gitsift modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("gitsift"):
        del sys.modules[module_name]

if TYPE_CHECKING:
    from collections.abc import Generator

AUTHOR = pygit2.Signature("Test User", "test@example.com", 1_700_000_000, 0)
COMMITTER = pygit2.Signature("Merge Bot", "bot@example.com", 1_700_000_100, 0)

CommitFiles = Callable[[pygit2.Repository, dict[str, bytes | None], str], str]


def _commit_files(
    repo: pygit2.Repository,
    files: dict[str, bytes | None],
    message: str,
) -> str:
    """Write, stage and commit files; a None value deletes the path.

    Returns:
        The new commit sha.
    """
    workdir = Path(repo.workdir)
    for path, data in files.items():
        target = workdir / path
        if data is None:
            target.unlink()
            repo.index.remove(path)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
            repo.index.add(path)
    repo.index.write()
    tree = repo.index.write_tree()
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return str(repo.create_commit("HEAD", AUTHOR, COMMITTER, message, tree, parents))


@pytest.fixture
def commit_files() -> CommitFiles:
    """Helper that commits a dict of path -> bytes (None deletes)."""
    return _commit_files


@pytest.fixture
def empty_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """A working copy with no commits."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"
    yield repo


@pytest.fixture
def temp_repo(empty_repo: pygit2.Repository) -> pygit2.Repository:
    """A working copy with one commit holding README.md and src/app.py."""
    _commit_files(
        empty_repo,
        {"README.md": b"# Test Repo\n", "src/app.py": b"def main():\n    return 1\n"},
        "Initial commit",
    )
    return empty_repo


@pytest.fixture
def xy_repo(empty_repo: pygit2.Repository) -> tuple[pygit2.Repository, str, str]:
    """Two commits: the first adds x.txt, the second removes it and adds y.txt.

    Returns:
        (repo, first_sha, second_sha)
    """
    first = _commit_files(empty_repo, {"x.txt": b"ex marks the spot\n"}, "add x")
    second = _commit_files(empty_repo, {"x.txt": None, "y.txt": b"why not\n"}, "swap x for y")
    return empty_repo, first, second
