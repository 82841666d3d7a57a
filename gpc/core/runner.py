"""Synchronous runner for the external tools gpc relies on (git, tar)."""
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from gpc.core.errors import CommandError
from gpc.core.logger import get_logger

logger = get_logger(__name__)


class CommandRunner:
    """Runs external commands to completion.

    Output of the child process goes straight to the terminal, the way a user
    would see it running ``git clone`` by hand. Tests pass any object with a
    compatible ``run`` method instead.
    """

    def run(self, args: Sequence[str], cwd: Optional[Union[str, Path]] = None) -> None:
        """Run a command and block until it exits.

        Args:
            args: Command and arguments, e.g. ``["git", "clone", url, dest]``
            cwd: Working directory for the command

        Raises:
            CommandError: If the executable is missing or exits non-zero
        """
        command = [str(arg) for arg in args]

        logger.debug(f"Running: {' '.join(command)}")
        try:
            subprocess.run(command, cwd=cwd, check=True)
        except subprocess.CalledProcessError as e:
            raise CommandError(command, e.returncode) from e
        except FileNotFoundError as e:
            raise CommandError(
                command,
                message=f"{command[0]} not found. Please install {command[0]} first.",
            ) from e
