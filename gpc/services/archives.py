"""Recognizing downloadable template archives."""
from enum import Enum
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import urlparse

from gpc.core.errors import UnsupportedArchiveError

ZIP_HINT = "zip does not support --strip-components, use a tarball"


class ArchiveKind(Enum):
    """Tarball flavors that can be extracted, with their tar flag and file suffix."""

    GZIP = ("-xzf", ".tar.gz")
    XZ = ("-xJf", ".tar.xz")
    BZIP2 = ("-xjf", ".tar.bz2")

    @property
    def tar_flag(self) -> str:
        return self.value[0]

    @property
    def suffix(self) -> str:
        return self.value[1]

    def extract_command(self, archive: str, destination: str) -> list:
        """``tar`` invocation that drops the archive's top-level directory."""
        return ["tar", self.tar_flag, archive, "-C", destination, "--strip-components=1"]


CONTENT_TYPES = {
    "application/x-gzip": ArchiveKind.GZIP,
    "application/gzip": ArchiveKind.GZIP,
    "application/x-tgz": ArchiveKind.GZIP,
    "application/x-compressed-tar": ArchiveKind.GZIP,
    "application/x-xz": ArchiveKind.XZ,
    "application/x-xz-compressed-tar": ArchiveKind.XZ,
    "application/x-bzip2": ArchiveKind.BZIP2,
    "application/x-bzip": ArchiveKind.BZIP2,
    "application/x-bzip-compressed-tar": ArchiveKind.BZIP2,
}

ZIP_CONTENT_TYPES = {"application/zip", "application/x-zip-compressed"}

# Servers that don't know better send these; the URL is consulted instead
GENERIC_CONTENT_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

URL_SUFFIXES = [
    (".tar.gz", ArchiveKind.GZIP),
    (".tgz", ArchiveKind.GZIP),
    (".tar.xz", ArchiveKind.XZ),
    (".txz", ArchiveKind.XZ),
    (".tar.bz2", ArchiveKind.BZIP2),
    (".tbz2", ArchiveKind.BZIP2),
    (".tbz", ArchiveKind.BZIP2),
]


def normalize_content_type(content_type: Optional[str]) -> str:
    """'Application/X-Gzip; charset=binary' -> 'application/x-gzip'."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def kind_from_url(url: str) -> Optional[ArchiveKind]:
    """Guess the archive kind from the URL's file name."""
    name = PurePosixPath(urlparse(url).path).name.lower()
    if name.endswith(".zip"):
        raise UnsupportedArchiveError("application/zip", ZIP_HINT)
    for suffix, kind in URL_SUFFIXES:
        if name.endswith(suffix):
            return kind
    return None


def detect_archive_kind(content_type: Optional[str], url: str = "") -> ArchiveKind:
    """Pick the extraction strategy for a download.

    The server-declared content type decides. Only when it is missing or
    generic is the URL suffix used.

    Raises:
        UnsupportedArchiveError: zip archives and unknown types
    """
    normalized = normalize_content_type(content_type)

    if normalized in CONTENT_TYPES:
        return CONTENT_TYPES[normalized]

    if normalized in ZIP_CONTENT_TYPES:
        raise UnsupportedArchiveError(normalized, ZIP_HINT)

    if normalized in GENERIC_CONTENT_TYPES and url:
        kind = kind_from_url(url)
        if kind is not None:
            return kind

    raise UnsupportedArchiveError(normalized)
