"""
Shared fixtures for namedroutes tests.
"""

import json

import pytest

from namedroutes import PatternCache, Router


@pytest.fixture
def route_table():
    """Route table in the named-routes export shape."""
    return {
        "url": "https://example.com/app",
        "routes": {
            "home": {"uri": "/", "methods": ["GET"]},
            "users.index": {"uri": "users", "methods": ["GET", "HEAD"]},
            "users.show": {"uri": "users/{id}[/{action}]", "methods": ["GET"]},
            "users.store": {"uri": "users", "methods": ["POST"]},
            "posts.show": {"uri": "posts/{post}", "methods": ["GET"]},
        },
    }


@pytest.fixture
def router(route_table):
    return Router.from_dict(route_table).validate()


@pytest.fixture
def cache():
    return PatternCache(max_size=8)


@pytest.fixture
def json_config(tmp_path, route_table):
    """Route table written to a JSON file."""
    path = tmp_path / "routes.json"
    path.write_text(json.dumps(route_table))
    return path


@pytest.fixture
def yaml_config(tmp_path):
    """Small route table written to a YAML file."""
    path = tmp_path / "routes.yaml"
    path.write_text(
        "url: https://example.com\n"
        "optional_policy: trailing\n"
        "routes:\n"
        "  users.show:\n"
        "    uri: users/{id}[/{action}]\n"
        "    methods: [get]\n"
        "  about: about\n"
    )
    return path
