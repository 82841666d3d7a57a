"""Git operations for fetching templates."""
from pathlib import Path
from typing import Optional

from gpc.core.logger import get_logger
from gpc.core.runner import CommandRunner
from gpc.models.source import GitReference

logger = get_logger(__name__)


class GitManager:
    """Clones template repositories with the git client."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def clone_command(self, reference: GitReference, destination: Path) -> list:
        """Build the ``git clone`` command for a reference.

        Branches and tags are selected with ``--branch``. A bare commit can't
        be, so it is checked out after cloning (see ``clone``).
        """
        command = ["git", "clone"]
        ref = reference.branch or reference.tag
        if ref:
            command += ["--branch", ref]
        command += [reference.url, str(destination)]
        return command

    def clone(self, reference: GitReference, destination: Path) -> None:
        """Clone a repository into ``destination``.

        Args:
            reference: Repository URL and optional branch, tag or commit
            destination: Directory to clone into

        Raises:
            CommandError: git exited with a non-zero status
        """
        logger.info(f"Cloning {reference.url}" + (f" ({reference.ref})" if reference.ref else ""))
        self.runner.run(self.clone_command(reference, destination))

        if reference.commit and not (reference.branch or reference.tag):
            self.checkout(destination, reference.commit)

    def checkout(self, repo_path: Path, ref: str) -> None:
        """Check out ``ref`` in an existing clone."""
        logger.info(f"Checking out {ref}")
        self.runner.run(["git", "-C", str(repo_path), "checkout", "--quiet", ref])
