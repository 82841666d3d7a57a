"""Tests for in-place template rendering."""
import os

import pytest

from gpc.core.errors import RenderError
from gpc.core.renderer import TemplateRenderer


@pytest.fixture
def project(tmp_path):
    (tmp_path / "README.md").write_text("# {{ Name }}\n")
    (tmp_path / "main.go").write_text("package {{ Name }}\n")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("Guide for {{.Name}}\n")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD.md").write_text("{{ broken")
    return tmp_path


class TestTemplateRenderer:
    """Test pattern matching and rendering of project files."""

    def test_renders_matching_files_only(self, project):
        renderer = TemplateRenderer(["*.md"])

        rendered = renderer.render_tree(project, {"Name": "demo"})

        assert (project / "README.md").read_text() == "# demo\n"
        assert (project / "docs" / "guide.md").read_text() == "Guide for demo\n"
        assert (project / "main.go").read_text() == "package {{ Name }}\n"
        assert sorted(p.name for p in rendered) == ["README.md", "guide.md"]

    def test_git_directory_is_skipped(self, project):
        TemplateRenderer(["*.md"]).render_tree(project, {"Name": "demo"})

        assert (project / ".git" / "HEAD.md").read_text() == "{{ broken"

    def test_pattern_matches_base_name(self, project):
        rendered = TemplateRenderer(["guide.md"]).render_tree(project, {"Name": "demo"})

        assert rendered == [project / "docs" / "guide.md"]

    def test_no_patterns_is_noop(self, project):
        assert TemplateRenderer([]).render_tree(project, {"Name": "demo"}) == []
        assert (project / "README.md").read_text() == "# {{ Name }}\n"

    def test_go_style_field_reference(self):
        renderer = TemplateRenderer(["*"])

        assert renderer.render_text("Hello {{.Name}}", {"Name": "World"}) == "Hello World"
        assert renderer.render_text("{{ .Name }}/{{- .Org }}", {"Name": "a", "Org": "b"}) == "a/b"

    def test_structured_values(self):
        renderer = TemplateRenderer(["*"])
        content = "{% for f in Features %}- {{ f }}\n{% endfor %}"

        assert renderer.render_text(content, {"Features": ["auth", "api"]}) == "- auth\n- api\n"

    def test_no_html_escaping(self):
        assert TemplateRenderer(["*"]).render_text("{{ X }}", {"X": "<a & b>"}) == "<a & b>"

    def test_plain_text_render_is_idempotent(self):
        renderer = TemplateRenderer(["*"])
        content = "no template syntax here\nsecond line\n"

        once = renderer.render_text(content, {"Name": "x"})

        assert once == content
        assert renderer.render_text(once, {"Name": "x"}) == once

    def test_file_mode_preserved(self, tmp_path):
        script = tmp_path / "run.sh"
        script.write_text("echo {{ Name }}\n")
        script.chmod(0o755)

        TemplateRenderer(["*.sh"]).render_tree(tmp_path, {"Name": "hi"})

        assert script.read_text() == "echo hi\n"
        assert os.stat(script).st_mode & 0o111

    def test_syntax_error_aborts_with_path(self, tmp_path):
        (tmp_path / "a.txt").write_text("fine {{ Name }}")
        (tmp_path / "b.txt").write_text("broken {% if %}")
        (tmp_path / "c.txt").write_text("never {{ Name }}")

        with pytest.raises(RenderError, match="b.txt"):
            TemplateRenderer(["*.txt"]).render_tree(tmp_path, {"Name": "x"})

        # Earlier files stay rendered, later ones are untouched
        assert (tmp_path / "a.txt").read_text() == "fine x"
        assert (tmp_path / "c.txt").read_text() == "never {{ Name }}"

    def test_binary_file_fails(self, tmp_path):
        (tmp_path / "logo.txt").write_bytes(b"\xff\xfe\x00\x81")

        with pytest.raises(RenderError):
            TemplateRenderer(["*.txt"]).render_tree(tmp_path, {})

    def test_crlf_line_endings_kept(self, tmp_path):
        script = tmp_path / "run.bat"
        script.write_bytes(b"echo {{ Name }}\r\nrem done\r\n")

        TemplateRenderer(["*.bat"]).render_tree(tmp_path, {"Name": "hi"})

        assert script.read_bytes() == b"echo hi\r\nrem done\r\n"

    def test_lf_line_endings_kept(self, tmp_path):
        script = tmp_path / "run.sh"
        script.write_bytes(b"echo {{ Name }}\nexit 0\n")

        TemplateRenderer(["*.sh"]).render_tree(tmp_path, {"Name": "hi"})

        assert script.read_bytes() == b"echo hi\nexit 0\n"

    def test_runtime_error_in_template_is_render_error(self, tmp_path):
        (tmp_path / "port.txt").write_text("{{ Port + 1 }}")

        with pytest.raises(RenderError, match="port.txt.*TypeError"):
            TemplateRenderer(["*.txt"]).render_tree(tmp_path, {"Port": "8080"})

        assert (tmp_path / "port.txt").read_text() == "{{ Port + 1 }}"

    def test_caret_negated_class(self, tmp_path):
        (tmp_path / "a.txt").write_text("{{ Name }}")
        (tmp_path / "b.txt").write_text("{{ Name }}")

        rendered = TemplateRenderer(["[^b]*.txt"]).render_tree(tmp_path, {"Name": "x"})

        assert rendered == [tmp_path / "a.txt"]
        assert (tmp_path / "b.txt").read_text() == "{{ Name }}"
