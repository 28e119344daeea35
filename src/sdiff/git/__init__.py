"""Git integration for sdiff."""

from sdiff.git.commands import GitError
from sdiff.git.driver import detect_diff_driver_args
from sdiff.git.resolver import GitResolver, is_git_ref

__all__ = ["GitError", "GitResolver", "detect_diff_driver_args", "is_git_ref"]
