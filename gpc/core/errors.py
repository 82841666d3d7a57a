"""Exceptions raised while creating a project."""
from pathlib import Path
from typing import Optional, Sequence


class GpcError(Exception):
    """Base class for every project creation failure."""


class NoTemplateSourceError(GpcError):
    """Raised when no template source was given."""

    def __init__(self, message: str = "no template source provided"):
        super().__init__(message)


class AmbiguousTemplateSourceError(GpcError):
    """Raised when more than one template source was given."""


class DestinationExistsError(GpcError):
    """Raised when the destination exists and may not be overwritten."""

    def __init__(self, destination: Path):
        self.destination = destination
        super().__init__(f"directory already exists: {destination}")


class TemplateSourceError(GpcError):
    """Raised when a local template directory cannot be used."""


class CommandError(GpcError):
    """Raised when an external command (git, tar) fails."""

    def __init__(self, command: Sequence[str], returncode: Optional[int] = None, message: str = ""):
        self.command = list(command)
        self.returncode = returncode
        if not message:
            message = f"command '{' '.join(self.command)}' exited with status {returncode}"
        super().__init__(message)


class DownloadError(GpcError):
    """Raised when a template archive cannot be downloaded."""


class UnsupportedArchiveError(DownloadError):
    """Raised when the downloaded archive type cannot be extracted."""

    def __init__(self, content_type: str, hint: str = ""):
        self.content_type = content_type
        message = f"unsupported file type: {content_type or '<none>'}"
        if hint:
            message += f" ({hint})"
        super().__init__(message)


class DataParseError(GpcError):
    """Raised when inline data is neither a JSON object nor a YAML mapping."""


class TemplateConfigError(GpcError):
    """Raised when a .gpc.yml file exists but is invalid."""


class VariableError(GpcError):
    """Raised when prompt input cannot be converted to the variable's type."""


class RenderError(GpcError):
    """Raised when a template file cannot be read, compiled or rendered."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"failed to render {path}: {reason}")
