"""Template source and run options for a project creation."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import urlparse

from gpc.core.errors import AmbiguousTemplateSourceError, NoTemplateSourceError
from gpc.models.template import TemplateConfig

# Suffixes stripped when deriving a directory name from a source
_NAME_SUFFIXES = (".tar.gz", ".tar.xz", ".tar.bz2", ".tgz", ".txz", ".tbz2", ".tbz", ".zip", ".git")


class SourceKind(str, Enum):
    GIT = "git"
    DIRECTORY = "directory"
    DOWNLOAD = "download"


@dataclass(frozen=True)
class GitReference:
    """A git repository and the revision to check out."""

    url: str
    branch: Optional[str] = None
    tag: Optional[str] = None
    commit: Optional[str] = None

    @property
    def ref(self) -> Optional[str]:
        """Branch wins over tag, tag wins over commit."""
        return self.branch or self.tag or self.commit


@dataclass(frozen=True)
class TemplateSource:
    """Exactly one place a template is fetched from."""

    git: Optional[GitReference] = None
    directory: Optional[Path] = None
    download_url: Optional[str] = None

    def __post_init__(self):
        given = [kind for kind in SourceKind if self._value_for(kind)]
        if not given:
            raise NoTemplateSourceError()
        if len(given) > 1:
            names = ", ".join(kind.value for kind in given)
            raise AmbiguousTemplateSourceError(
                f"exactly one template source is allowed, got: {names}"
            )

    def _value_for(self, kind: SourceKind):
        if kind is SourceKind.GIT:
            return self.git.url if self.git else None
        if kind is SourceKind.DIRECTORY:
            return self.directory
        return self.download_url

    @property
    def kind(self) -> SourceKind:
        return next(kind for kind in SourceKind if self._value_for(kind))

    @classmethod
    def from_options(
        cls,
        repo: Optional[str] = None,
        branch: Optional[str] = None,
        tag: Optional[str] = None,
        commit: Optional[str] = None,
        existing: Optional[str] = None,
        download: Optional[str] = None,
    ) -> "TemplateSource":
        """Build a source from CLI-style option values (empty strings count as unset)."""
        git = GitReference(url=repo, branch=branch or None, tag=tag or None, commit=commit or None) if repo else None
        return cls(
            git=git,
            directory=Path(existing) if existing else None,
            download_url=download or None,
        )

    def describe(self) -> str:
        if self.kind is SourceKind.GIT:
            ref = f" ({self.git.ref})" if self.git.ref else ""
            return f"git repository {self.git.url}{ref}"
        if self.kind is SourceKind.DIRECTORY:
            return f"directory {self.directory}"
        return f"archive {self.download_url}"

    def default_destination(self) -> Path:
        """Directory name ``git clone`` would pick for this source."""
        if self.kind is SourceKind.DIRECTORY:
            raw = self.directory.resolve().name
        else:
            location = self.git.url if self.kind is SourceKind.GIT else self.download_url
            path = urlparse(location).path if "://" in location else location.split(":")[-1]
            raw = PurePosixPath(path.rstrip("/")).name

        name = raw
        for suffix in _NAME_SUFFIXES:
            if name.endswith(suffix) and len(name) > len(suffix):
                name = name[: -len(suffix)]
                break
        return Path(name or "project")


@dataclass(frozen=True)
class ProjectOptions:
    """Everything needed for one run, fixed before the pipeline starts."""

    source: TemplateSource
    destination: Path
    data: str = ""
    interactive: bool = True
    overwrite: bool = False
    coerce_prompt_input: bool = False

    def __post_init__(self):
        object.__setattr__(self, "destination", Path(self.destination))


@dataclass
class ProjectResult:
    """Outcome of a successful run, used for reporting."""

    destination: Path
    config: TemplateConfig
    variables: dict = field(default_factory=dict)
    rendered_files: list = field(default_factory=list)
