from __future__ import annotations

import os

import pytest

from hotconf.core.naming import parse_name


@pytest.mark.parametrize(
    "name, expected",
    [
        ("log.toml", ("log", "toml", os.path.join("/etc/app", "log.toml"))),
        ("database.JSON", ("database", "json", os.path.join("/etc/app", "database.JSON"))),
        ("conf/app.yml", ("app", "yml", os.path.join("/etc/app", "conf/app.yml"))),
    ],
)
def test_name_with_extension(name, expected):
    assert parse_name(name, "/etc/app", "yaml") == expected


@pytest.mark.parametrize("default_type", ["yaml", "json", "ini"])
def test_name_without_extension_uses_default_type(default_type):
    name, source_type, path = parse_name("server", "/etc/app", default_type)
    assert name == "server"
    assert source_type == default_type
    assert path == os.path.join("/etc/app", f"server.{default_type}")


def test_relative_base_directory():
    assert parse_name("app", ".", "yaml") == ("app", "yaml", os.path.join(".", "app.yaml"))
