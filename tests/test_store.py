from __future__ import annotations

import threading
from datetime import datetime, timedelta

import pytest

from hotconf import FileStore, Store
from hotconf.core.errors import UnsupportedSourceType


def test_set_and_get_nested():
    store = Store()
    store.set("server", {"name": "hotconf", "HTTP": {"Port": 8080}})

    assert store.get("server.name") == "hotconf"
    assert store.get("server.http.port") == 8080
    assert store.get("SERVER.HTTP.PORT") == 8080
    assert store.get("server.http") == {"port": 8080}
    assert store.get("server.missing") is None
    assert store.get("server.name.deeper") is None


def test_set_replaces_whole_subtree():
    store = Store({"server": {"name": "a", "env": "dev"}, "log": {"level": "info"}})
    store.set("server", {"name": "b"})

    assert store.all_settings() == {"server": {"name": "b"}, "log": {"level": "info"}}


def test_set_creates_intermediate_maps():
    store = Store({"a": 1})
    store.set("a.b.c", 2)
    assert store.get("a.b.c") == 2


def test_set_empty_key():
    with pytest.raises(ValueError):
        Store().set("", 1)


def test_values_are_copied():
    source = {"list": [1, 2]}
    store = Store()
    store.set("x", source)
    source["list"].append(3)
    assert store.get("x.list") == [1, 2]

    got = store.get("x.list")
    got.append(4)
    assert store.get("x.list") == [1, 2]


def test_is_set_treats_null_as_unset():
    store = Store({"a": {"b": None}})
    assert not store.is_set("a.b")
    assert store.get("a.b") is None
    assert store.is_set("a")
    assert not store.is_set("a.c")
    assert not store.is_set("")


def test_env_overlay(monkeypatch):
    store = Store({"db": {"host": "localhost"}})
    monkeypatch.setenv("DB_HOST", "db.internal")
    assert store.get("db.host") == "localhost"

    store.automatic_env()
    assert store.get("db.host") == "db.internal"
    assert store.env_key("db.host") == "DB_HOST"

    store.set_env_prefix("app_")
    assert store.env_key("db.host") == "APP_DB_HOST"
    assert store.get("db.host") == "localhost"


def test_sub_is_detached():
    store = Store({"a": {"b": 1}})
    sub = store.sub("a")
    sub.set("b", 2)
    assert store.get("a.b") == 1
    assert store.sub("a.b") is None
    assert store.sub("missing") is None


def test_all_keys():
    store = Store({"a": {"b": 1, "c": {"d": 2}}, "e": 3})
    assert sorted(store.all_keys()) == ["a.b", "a.c.d", "e"]


def test_typed_getters_on_set_values():
    store = Store()
    store.set(
        "test",
        {
            "string": "hello",
            "bool": True,
            "int": 1,
            "float64": 1.0,
            "time": datetime(2024, 9, 2, 9, 58, 37),
            "duration": timedelta(seconds=1),
            "intSlice": [1, 2, 3],
            "stringSlice": ["a", "b", "c"],
            "stringMap": {"a": "b", "c": "d"},
            "stringMapStringSlice": {"a": ["b", "c"], "d": ["e", "f"]},
            "sizeInBytes": "1kb",
        },
    )

    assert store.has("test.string")
    assert not store.is_set("test.string11")
    assert store.get_string("test.string") == "hello"
    assert store.get_bool("test.bool") is True
    assert store.get_int("test.int") == 1
    assert store.get_float("test.float64") == 1.0
    assert store.get_time("test.time") == datetime(2024, 9, 2, 9, 58, 37)
    assert store.get_duration("test.duration") == timedelta(seconds=1)
    assert store.get_int_list("test.intSlice") == [1, 2, 3]
    assert store.get_string_list("test.stringSlice") == ["a", "b", "c"]
    assert store.get_string_map("test.stringMap") == {"a": "b", "c": "d"}
    assert store.get_string_map_string("test.stringMap") == {"a": "b", "c": "d"}
    assert store.get_string_map_string_list("test.stringMapStringSlice") == {
        "a": ["b", "c"],
        "d": ["e", "f"],
    }
    assert store.get_size_in_bytes("test.sizeInBytes") == 1024


def test_concurrent_readers_see_whole_subtrees():
    store = Store()
    old = {f"k{i}": "old" for i in range(50)}
    new = {f"k{i}": "new" for i in range(50)}
    store.set("ns", old)
    stop = threading.Event()
    torn = []

    def writer():
        while not stop.is_set():
            store.set("ns", new)
            store.set("ns", old)

    def reader():
        for _ in range(2000):
            values = set(store.get("ns").values())
            if len(values) != 1:
                torn.append(values)

    t = threading.Thread(target=writer)
    t.start()
    try:
        reader()
    finally:
        stop.set()
        t.join()
    assert torn == []


class TestFileStore:
    """Test reading files into a FileStore."""

    def test_read_in_config(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text("Name: hotconf\nnested:\n  Key: v\n")
        store = FileStore("app", "yaml", path)
        store.read_in_config()
        assert store.all_settings() == {"name": "hotconf", "nested": {"key": "v"}}

    def test_read_replaces_previous_tree(self, tmp_path):
        path = tmp_path / "app.json"
        path.write_text('{"a": 1, "b": 2}')
        store = FileStore("app", "json", path)
        store.read_in_config()
        path.write_text('{"a": 3}')
        store.read_in_config()
        assert store.all_settings() == {"a": 3}

    def test_read_missing_file(self, tmp_path):
        store = FileStore("app", "yaml", tmp_path / "app.yaml")
        with pytest.raises(FileNotFoundError):
            store.read_in_config()

    def test_read_unsupported_type(self, tmp_path):
        path = tmp_path / "app.xml"
        path.write_text("<a/>")
        store = FileStore("app", "xml", path)
        with pytest.raises(UnsupportedSourceType):
            store.read_in_config()

    def test_unmarshal_into_dict(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text("a: 1\n")
        store = FileStore("app", "yaml", path)
        store.read_in_config()
        target = {"stale": True}
        store.unmarshal(target)
        assert target == {"a": 1}
