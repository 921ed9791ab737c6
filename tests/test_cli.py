"""
Tests for the namedroutes command line.
"""

import json

import pytest
from click.testing import CliRunner

from namedroutes import __version__
from namedroutes.cli.__main__ import cli
from namedroutes.cli.utils import CHECK, CROSS


@pytest.fixture
def runner():
    return CliRunner()


class TestPatternCommands:
    """Test commands that work on a single pattern."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_parse(self, runner):
        result = runner.invoke(cli, ["parse", "/users/{id}[/{action}]"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["type"] == "route"
        assert data["children"][1]["type"] == "placeholder"

    def test_parse_regex(self, runner):
        result = runner.invoke(cli, ["parse", "/users/{id}", "--regex"])
        assert result.exit_code == 0
        assert json.loads(result.output)["regex"] == "/users/(?P<_p0>[^/]+)/?"

    def test_parse_error(self, runner):
        result = runner.invoke(cli, ["parse", "/users/{id}]"])
        assert result.exit_code == 2
        assert "MismatchedBrackets" in result.output

    def test_parse_trailing_policy(self, runner):
        result = runner.invoke(cli, ["parse", "/a[/b]/c", "--policy", "trailing"])
        assert result.exit_code == 2
        assert "OptionalMisplaced" in result.output

    def test_build(self, runner):
        result = runner.invoke(cli, ["build", "/users/{id}", "-p", "id=5", "-p", "tab=posts"])
        assert result.exit_code == 0
        assert result.output == "/users/5?tab=posts\n"

    def test_build_bad_param(self, runner):
        result = runner.invoke(cli, ["build", "/users/{id}", "-p", "id"])
        assert result.exit_code == 2

    def test_match(self, runner):
        result = runner.invoke(cli, ["match", "/users/{id}", "/users/5?tab=posts"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"params": {"id": "5"}, "query": {"tab": "posts"}}

    def test_match_miss(self, runner):
        result = runner.invoke(cli, ["match", "/users/{id}", "/posts/5"])
        assert result.exit_code == 1
        assert CROSS in result.output

    def test_match_write_method(self, runner):
        result = runner.invoke(cli, ["match", "/users", "/users", "--method", "POST"])
        assert result.exit_code == 1


class TestConfigCommands:
    """Test commands that load a route table."""

    def test_routes(self, runner, json_config):
        result = runner.invoke(cli, ["routes", str(json_config)])
        assert result.exit_code == 0
        assert "users.show" in result.output
        assert "/users/{id}[/{action}]" in result.output

    def test_url(self, runner, yaml_config):
        result = runner.invoke(cli, ["url", str(yaml_config), "users.show", "-p", "id=5"])
        assert result.exit_code == 0
        assert result.output.strip() == "https://example.com/users/5"

    def test_url_unknown(self, runner, yaml_config):
        result = runner.invoke(cli, ["url", str(yaml_config), "nope"])
        assert result.exit_code == 2
        assert "not in the route list" in result.output

    def test_resolve(self, runner, json_config):
        result = runner.invoke(cli, ["resolve", str(json_config), "/app/users/5/edit"])
        assert result.exit_code == 0
        assert "users.show" in result.output
        assert CHECK in result.output

    def test_resolve_miss(self, runner, json_config):
        result = runner.invoke(cli, ["resolve", str(json_config), "/app/nothing/here"])
        assert result.exit_code == 1

    def test_invalid_config(self, runner, tmp_path):
        path = tmp_path / "routes.json"
        path.write_text(json.dumps({"routes": {"bad": "a/{id"}}))
        result = runner.invoke(cli, ["routes", str(path)])
        assert result.exit_code == 2
        assert "UnterminatedPlaceholder" in result.output
