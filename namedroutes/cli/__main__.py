"""namedroutes CLI - Main Entry Point.

Commands:
    parse    - Show the parsed tree of a pattern as JSON
    build    - Build a URL from a pattern and params
    match    - Match a URL against a pattern
    routes   - List the routes of a config file
    url      - Build the URL of a named route
    resolve  - Find the named route a URL belongs to
"""

import json
import logging
import sys
from typing import Dict, Sequence

import click

from . import __version__, __cli_name__
from .utils import CHECK, CROSS, error, info, kv, success, table
from ..compiler.builder import build_url
from ..compiler.compiler import compile_matcher
from ..compiler.parser import OptionalPolicy, parse_pattern
from ..config import ConfigError, ConfigLoader
from ..diagnostics.errors import PatternDiagnostic, RoutingError
from ..route import Route
from ..router import Router

_POLICY = click.Choice([p.value for p in OptionalPolicy])


def _parse_params(pairs: Sequence[str]) -> Dict[str, str]:
    """Turn ("id=5", "tab=posts") into a dict, keeping order."""
    params: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--param")
        params[key] = value
    return params


def _fail(exc: Exception) -> None:
    """Report an error and exit with status 2."""
    if isinstance(exc, PatternDiagnostic):
        error(exc.format())
    else:
        error(f"{CROSS} {exc}")
    sys.exit(2)


def _load_router(config_path: str) -> Router:
    try:
        return Router(ConfigLoader.load([config_path])).validate()
    except (ConfigError, PatternDiagnostic) as exc:
        _fail(exc)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.option('--verbose', '-v', is_flag=True, help='Debug logging to stderr')
@click.pass_context
def cli(ctx, verbose: bool):
    """Parse, build and match URL route patterns.

    \b
    Quick start:
      namedroutes parse '/users/{id}[/{action}]'
      namedroutes build '/users/{id}' -p id=5 -p tab=posts
      namedroutes match '/users/{id}' /users/5?tab=posts
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(name)s] - [%(levelname)s] - %(message)s")


@cli.command('parse')
@click.argument('pattern')
@click.option('--policy', type=_POLICY, default=OptionalPolicy.NESTED.value, help='Optional segment placement')
@click.option('--regex', is_flag=True, help='Also print the compiled matcher regex')
def parse_cmd(pattern: str, policy: str, regex: bool):
    """Show the parsed tree of PATTERN as JSON."""
    try:
        ast = parse_pattern(pattern, policy=OptionalPolicy(policy))
    except PatternDiagnostic as exc:
        _fail(exc)

    data = ast.to_dict()
    if regex:
        data["regex"] = compile_matcher(ast).source
    _echo_json(data)


@cli.command('build')
@click.argument('pattern')
@click.option('--param', '-p', 'params', multiple=True, help='Parameter as key=value (repeatable)')
def build_cmd(pattern: str, params: Sequence[str]):
    """Build a URL from PATTERN and params.

    Params the pattern does not use end up in the query string.
    """
    values = _parse_params(params)
    try:
        ast = parse_pattern(pattern)
    except PatternDiagnostic as exc:
        _fail(exc)
    click.echo(build_url(ast, values))


@cli.command('match')
@click.argument('pattern')
@click.argument('url')
@click.option('--method', '-m', default='GET', show_default=True, help='Method the route is declared for')
def match_cmd(pattern: str, url: str, method: str):
    """Match URL against PATTERN; exits with 1 when it does not match."""
    try:
        route = Route("cli", pattern, methods=[method]).validate()
    except PatternDiagnostic as exc:
        _fail(exc)

    result = route.matches_url(url)
    if result is None:
        error(f"{CROSS} {url} does not match {route.template}")
        sys.exit(1)
    _echo_json({"params": result.params, "query": result.query})


@cli.command('routes')
@click.argument('config_path', metavar='CONFIG', type=click.Path(exists=True, dir_okay=False))
def routes_cmd(config_path: str):
    """List the routes defined in CONFIG (JSON or YAML)."""
    router = _load_router(config_path)
    if router.config.url:
        kv("Base url", router.config.url)
    kv("Routes", str(len(router)))
    click.echo()
    table(
        headers=["Name", "Pattern", "Methods"],
        rows=[(r.name, r.template, ",".join(r.methods)) for r in router],
    )


@cli.command('url')
@click.argument('config_path', metavar='CONFIG', type=click.Path(exists=True, dir_okay=False))
@click.argument('name')
@click.option('--param', '-p', 'params', multiple=True, help='Parameter as key=value (repeatable)')
def url_cmd(config_path: str, name: str, params: Sequence[str]):
    """Build the URL of route NAME from CONFIG."""
    values = _parse_params(params)
    router = _load_router(config_path)
    try:
        click.echo(router.url(name, values))
    except RoutingError as exc:
        _fail(exc)


@cli.command('resolve')
@click.argument('config_path', metavar='CONFIG', type=click.Path(exists=True, dir_okay=False))
@click.argument('url')
def resolve_cmd(config_path: str, url: str):
    """Find which route in CONFIG the URL belongs to."""
    router = _load_router(config_path)
    resolved = router.resolve(url)
    if resolved is None:
        error(f"{CROSS} No route matches {url}")
        sys.exit(1)

    success(f"{CHECK} {resolved.name}")
    info(f"  {resolved.route.template}")
    _echo_json({"params": resolved.params, "query": resolved.query})


def main():
    """Entry point for `namedroutes` command."""
    cli(obj={})


if __name__ == '__main__':
    main()
