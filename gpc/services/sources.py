"""
Template source resolution - populating the destination with a template.

Three strategies, selected by the kind of ``TemplateSource``:
    git clone → directory copy → archive download

Unlike a fallback chain, exactly one strategy runs; its failure is the run's
failure.
"""
import shutil
import tempfile
from pathlib import Path
from typing import Optional

import requests

from gpc.core.errors import DownloadError, TemplateSourceError
from gpc.core.logger import get_logger
from gpc.core.runner import CommandRunner
from gpc.models.source import SourceKind, TemplateSource
from gpc.services.archives import detect_archive_kind
from gpc.services.git_manager import GitManager

logger = get_logger(__name__)

VCS_DIR = ".git"
CHUNK_SIZE = 64 * 1024


class TemplateSourceResolver:
    """
    Fetches template content into a destination directory.

    Example:
        resolver = TemplateSourceResolver()
        resolver.resolve(
            TemplateSource.from_options(existing="./templates/go-service"),
            Path("./my-service"),
        )
    """

    def __init__(self, runner: Optional[CommandRunner] = None, git: Optional[GitManager] = None):
        self.runner = runner or CommandRunner()
        self.git = git or GitManager(self.runner)

    def resolve(self, source: TemplateSource, destination: Path) -> None:
        """Populate ``destination`` from ``source``.

        Raises:
            TemplateSourceError: Local template directory missing
            CommandError: git or tar failed
            DownloadError: Transfer failed or archive type unsupported
        """
        destination = Path(destination)
        logger.info(f"Fetching template from {source.describe()}")

        if source.kind is SourceKind.GIT:
            self.git.clone(source.git, destination)
        elif source.kind is SourceKind.DIRECTORY:
            self.copy_directory(source.directory, destination)
        else:
            self.download_and_extract(source.download_url, destination)

    def copy_directory(self, source_dir: Path, destination: Path) -> None:
        """Copy a local template, leaving out ``.git`` directories at any depth."""
        source_dir = Path(source_dir)
        if not source_dir.exists():
            raise TemplateSourceError(f"template directory not found: {source_dir}")
        if not source_dir.is_dir():
            raise TemplateSourceError(f"template source is not a directory: {source_dir}")

        logger.debug(f"Copying {source_dir} to {destination}")
        shutil.copytree(
            source_dir,
            destination,
            ignore=shutil.ignore_patterns(VCS_DIR),
            symlinks=True,
            dirs_exist_ok=True,
        )

    def download_and_extract(self, url: str, destination: Path) -> None:
        """Download a tarball and unpack it into ``destination``.

        The archive's top-level directory is stripped. The staging directory
        is removed whether or not extraction succeeds.
        """
        with tempfile.TemporaryDirectory(prefix="gpc-template-") as staging:
            logger.info(f"Downloading {url}")
            try:
                with requests.get(url, stream=True) as response:
                    response.raise_for_status()
                    kind = detect_archive_kind(response.headers.get("Content-Type"), url)

                    archive = Path(staging) / f"template{kind.suffix}"
                    with open(archive, "wb") as out:
                        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                            out.write(chunk)
            except requests.RequestException as e:
                raise DownloadError(f"Failed to download template: {e}") from e

            destination.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Extracting {archive.name} into {destination}")
            self.runner.run(kind.extract_command(str(archive), str(destination)))
