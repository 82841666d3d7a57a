"""Tests for archive type detection."""
import pytest

from gpc.core.errors import UnsupportedArchiveError
from gpc.services.archives import ArchiveKind, detect_archive_kind, normalize_content_type


class TestDetectArchiveKind:
    """Test content-type driven archive dispatch."""

    @pytest.mark.parametrize("content_type,kind", [
        ("application/x-gzip", ArchiveKind.GZIP),
        ("application/gzip", ArchiveKind.GZIP),
        ("application/x-xz", ArchiveKind.XZ),
        ("application/x-bzip2", ArchiveKind.BZIP2),
    ])
    def test_supported_types(self, content_type, kind):
        assert detect_archive_kind(content_type) is kind

    def test_parameters_and_case_ignored(self):
        assert normalize_content_type("Application/X-Gzip; charset=binary") == "application/x-gzip"
        assert detect_archive_kind("Application/X-Gzip; charset=binary") is ArchiveKind.GZIP

    def test_zip_rejected(self):
        with pytest.raises(UnsupportedArchiveError) as exc_info:
            detect_archive_kind("application/zip", "https://example.com/t.tar.gz")

        assert "unsupported file type: application/zip" in str(exc_info.value)
        assert "--strip-components" in str(exc_info.value)

    def test_unknown_type_named_in_error(self):
        with pytest.raises(UnsupportedArchiveError, match="text/html"):
            detect_archive_kind("text/html", "https://example.com/t.tar.gz")

    def test_content_type_wins_over_url(self):
        assert detect_archive_kind("application/x-xz", "https://example.com/t.tar.gz") is ArchiveKind.XZ

    @pytest.mark.parametrize("url,kind", [
        ("https://example.com/releases/v1.tar.gz", ArchiveKind.GZIP),
        ("https://example.com/v1.tgz?token=abc", ArchiveKind.GZIP),
        ("https://example.com/v1.tar.xz", ArchiveKind.XZ),
        ("https://example.com/v1.tar.bz2", ArchiveKind.BZIP2),
    ])
    def test_url_fallback_for_generic_type(self, url, kind):
        assert detect_archive_kind("application/octet-stream", url) is kind
        assert detect_archive_kind(None, url) is kind

    def test_url_fallback_rejects_zip(self):
        with pytest.raises(UnsupportedArchiveError, match="application/zip"):
            detect_archive_kind("application/octet-stream", "https://example.com/v1.zip")

    def test_generic_type_with_unknown_url(self):
        with pytest.raises(UnsupportedArchiveError, match="application/octet-stream"):
            detect_archive_kind("application/octet-stream", "https://example.com/download")

    def test_extract_command_strips_top_directory(self):
        command = ArchiveKind.XZ.extract_command("/tmp/t.tar.xz", "out")

        assert command == ["tar", "-xJf", "/tmp/t.tar.xz", "-C", "out", "--strip-components=1"]
