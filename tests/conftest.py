"""Shared test fixtures for gpc tests."""
import pytest
import yaml


class FakeRunner:
    """Records commands instead of running them.

    ``side_effect`` is called with the command, letting a test create the
    files git or tar would have produced, or raise to simulate a failure.
    """

    def __init__(self, side_effect=None):
        self.calls = []
        self.side_effect = side_effect

    def run(self, args, cwd=None):
        self.calls.append([str(arg) for arg in args])
        if self.side_effect:
            self.side_effect(list(args))


@pytest.fixture
def fake_runner():
    """Command runner that never spawns processes."""
    return FakeRunner()


@pytest.fixture
def make_template(tmp_path):
    """Build a template directory from a {relative path: content} mapping.

    A ``config`` mapping is written to .gpc.yml.
    """

    def _make(files, config=None, name="tpl"):
        root = tmp_path / name
        root.mkdir()
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        if config is not None:
            (root / ".gpc.yml").write_text(yaml.safe_dump(config))
        return root

    return _make


@pytest.fixture
def hello_template(make_template):
    """The classic main.txt / Name template."""
    return make_template(
        {"main.txt": "Hello {{.Name}}"},
        config={
            "templates": ["*.txt"],
            "variables": [{"name": "Name", "description": "Who to greet", "default": "World"}],
        },
    )
