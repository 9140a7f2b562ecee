"""Git operations used by the release pipeline.

Usage:
    from cikit.git import Repository

    repo = Repository(Path.cwd())
    branch = repo.current_branch()
"""

from cikit.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
