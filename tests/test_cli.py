"""
Tests for the satisfy command line.
"""

import io
import json
import pytest
from click.testing import CliRunner
from unittest.mock import patch, MagicMock

from satisfy.cli import cli
from satisfy.config import get_default_config
from satisfy.exit_codes import CONFIG_ERROR, NO_VERSIONS_FOUND

WIDGET_URL = "https://github.com/acme/widget.git"
WIDGET_REFS = [
    f"{'1' * 40}\trefs/heads/main",
    f"{'2' * 40}\trefs/tags/v1.9.0",
    f"{'3' * 40}\trefs/tags/v2.0.0",
]


@pytest.fixture
def git():
    """Patch GitClient so no remote is contacted."""
    client = MagicMock()
    client.ls_remote.side_effect = lambda url: WIDGET_REFS if url == WIDGET_URL else []
    with patch('satisfy.cli.GitClient', return_value=client) as factory:
        factory.client = client
        yield factory


@pytest.fixture(autouse=True)
def settings():
    """Use default settings regardless of the user's ~/.satisfy."""
    with patch('satisfy.cli_utils.load_config', side_effect=get_default_config) as mock_config:
        yield mock_config


@pytest.fixture
def inputs(tmp_path):
    packages = tmp_path / "packages.json"
    packages.write_text(json.dumps({
        "acme/widget": {
            "url": WIDGET_URL,
            "minversion": "2.0",
            "defaults": {"description": "Widgets", "license": "MIT"}
        }
    }))
    base = tmp_path / "satis.json"
    base.write_text(json.dumps({
        "name": "Mirror",
        "homepage": "https://packages.example.com",
        "repositories": [{"type": "composer", "url": "https://packagist.org"}]
    }))
    return packages, base


class TestBuildCommand:
    """Tests for `satisfy build`."""

    def test_build_to_stdout(self, git, inputs):
        packages, base = inputs
        runner = CliRunner()

        result = runner.invoke(cli, ['build', str(packages), str(base), '-q'])

        assert result.exit_code == 0, result.output
        manifest = json.loads(result.stdout)
        assert manifest['name'] == "Mirror"
        repositories = manifest['repositories']
        assert repositories[0] == {"type": "composer", "url": "https://packagist.org"}
        assert [r['package']['version'] for r in repositories[1:]] == ["dev-main", "2.0.0"]
        package = repositories[2]['package']
        assert package['description'] == "Widgets; Autogenerated by satisfy"
        assert package['license'] == "MIT"
        assert package['dist'] == {
            "url": "https://api.github.com/repos/acme/widget/zipball/v2.0.0",
            "type": "zip",
        }

    def test_build_to_file(self, git, inputs, tmp_path):
        packages, base = inputs
        output = tmp_path / "public" / "satis.json"

        result = CliRunner().invoke(cli, ['build', str(packages), str(base), '-o', str(output)])

        assert result.exit_code == 0, result.output
        manifest = json.loads(output.read_text())
        assert len(manifest['repositories']) == 3

    def test_sort_and_no_branches(self, git, inputs):
        packages, base = inputs

        result = CliRunner().invoke(
            cli, ['build', str(packages), str(base), '--sort', '--no-branches', '-q']
        )

        assert result.exit_code == 0, result.output
        versions = [r['package']['version'] for r in json.loads(result.stdout)['repositories'][1:]]
        assert versions == ["2.0.0"]

    def test_git_settings_used(self, git, inputs, settings):
        config = get_default_config()
        config['git'] = {'binary': '/opt/git', 'timeout_seconds': 9}
        settings.side_effect = None
        settings.return_value = config
        packages, base = inputs

        CliRunner().invoke(cli, ['build', str(packages), str(base), '-q'])

        git.assert_called_once_with(binary='/opt/git', timeout=9)

    def test_missing_repositories_member(self, git, inputs, tmp_path):
        packages, _ = inputs
        base = tmp_path / "bad.json"
        base.write_text(json.dumps({"name": "Mirror"}))

        result = CliRunner().invoke(cli, ['build', str(packages), str(base)])

        assert result.exit_code == CONFIG_ERROR
        error = json.loads(result.stdout.strip().splitlines()[-1])
        assert error['type'] == "ConfigurationError"
        git.client.ls_remote.assert_not_called()

    def test_missing_packages_file(self, git, inputs, tmp_path):
        _, base = inputs

        result = CliRunner().invoke(cli, ['build', str(tmp_path / "nope.json"), str(base)])

        assert result.exit_code == CONFIG_ERROR

    def test_strict_empty_source(self, git, inputs, tmp_path):
        _, base = inputs
        packages = tmp_path / "empty.json"
        packages.write_text(json.dumps({"acme/empty": {"url": "https://example.com/empty.git"}}))

        lenient = CliRunner().invoke(cli, ['build', str(packages), str(base), '-q'])
        strict = CliRunner().invoke(cli, ['build', str(packages), str(base), '--strict'])

        assert lenient.exit_code == 0
        assert len(json.loads(lenient.stdout)['repositories']) == 1
        assert strict.exit_code == NO_VERSIONS_FOUND
        assert "No tags found for acme/empty" in strict.stdout


class TestRefsCommand:
    """Tests for `satisfy refs`."""

    def test_jsonl_rows(self, git):
        result = CliRunner().invoke(cli, ['refs', WIDGET_URL, '--min-version', '2.0', '--no-table'])

        assert result.exit_code == 0, result.output
        rows = [json.loads(line) for line in result.stdout.strip().splitlines()]
        assert [(r['version'], r['included']) for r in rows] == [
            ("dev-main", True),
            ("1.9.0", False),
            ("2.0.0", True),
        ]

    def test_table(self, git):
        with patch('satisfy.cli.render_versions_table') as render:
            result = CliRunner().invoke(cli, ['refs', WIDGET_URL, '--table'])

        assert result.exit_code == 0, result.output
        rows = render.call_args[0][0]
        assert len(rows) == 3
        assert render.call_args[1]['title'] == WIDGET_URL

    def test_invalid_min_version(self, git):
        result = CliRunner().invoke(cli, ['refs', WIDGET_URL, '--min-version', 'abc', '--no-table'])

        assert result.exit_code == CONFIG_ERROR


class TestConfigCommand:
    """Tests for `satisfy config show`."""

    def test_show(self):
        result = CliRunner().invoke(cli, ['config', 'show'])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == get_default_config()


class TestRenderVersionsTable:
    """Tests for the rich versions table."""

    def render(self, rows):
        from rich.console import Console
        from satisfy.render import render_versions_table

        console = Console(file=io.StringIO(), width=200, color_system=None)
        with patch('satisfy.render.console', console):
            render_versions_table(rows, title=WIDGET_URL)
        return console.file.getvalue()

    def test_rows_and_summary(self):
        output = self.render([
            {'version': '2.0.0', 'reference': 'v2.0.0', 'included': True,
             'dist': 'https://api.github.com/repos/acme/widget/zipball/v2.0.0'},
            {'version': '1.9.0', 'reference': 'v1.9.0', 'included': False, 'dist': None},
        ])

        assert '2.0.0' in output
        assert 'zipball/v2.0.0' in output
        assert '1 of 2 versions would be published' in output

    def test_no_rows(self):
        assert 'No versions found.' in self.render([])
