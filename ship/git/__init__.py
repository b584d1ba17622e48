"""Git operations module.

Usage:
    from ship.git import Repository

    match Repository(Path.cwd()).current_branch():
        case Ok(branch):
            print(branch)
        case Err(e):
            print(e.message)
"""

from ship.git.repository import GitError, Repository

__all__ = ["GitError", "Repository"]
