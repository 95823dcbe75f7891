"""Tests for decoding configuration trees into bound targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from hotconf.core.decode import decode_into


@dataclass
class Http:
    host: str = "localhost"
    port: int = 80


@dataclass
class App:
    name: str = ""
    debug: bool = False
    http: Http = field(default_factory=Http)
    tags: List[str] = field(default_factory=list)


@dataclass
class Tagged:
    name: str = field(default="", metadata={"yaml": "app_name", "toml": "title"})
    secret: str = field(default="keep", metadata={"yaml": "-"})


@dataclass
class Worker:
    id: int = 0


@dataclass
class Pool:
    workers: List[Worker] = field(default_factory=list)
    by_name: Dict[str, Worker] = field(default_factory=dict)
    fallback: Optional[Worker] = None


class ModelTarget(BaseModel):
    name: str = ""
    port: int = 0
    level: str = Field(default="info", json_schema_extra={"yaml": "log_level"})


class TestDataclassTargets:
    """Test decoding into dataclass instances."""

    def test_populates_fields(self):
        app = App()
        decode_into(app, {"name": "hotconf", "debug": "true", "tags": ["a", "b"]})
        assert app == App(name="hotconf", debug=True, tags=["a", "b"])

    def test_missing_keys_keep_current_values(self):
        app = App(name="old", http=Http(host="example.org", port=8080))
        decode_into(app, {"http": {"port": "9090"}})
        assert app.name == "old"
        assert app.http == Http(host="example.org", port=9090)

    def test_keys_match_case_insensitively(self):
        app = App()
        decode_into(app, {"NAME": "x"})
        assert app.name == "x"

    def test_unknown_keys_are_ignored(self):
        app = App()
        decode_into(app, {"name": "x", "extra": 1})
        assert app.name == "x"

    def test_scalars_are_weakly_typed_into_strings(self):
        app = App()
        decode_into(app, {"name": 123})
        assert app.name == "123"

    def test_tag_name_selects_metadata_key(self):
        t = Tagged()
        decode_into(t, {"app_name": "a", "title": "b", "name": "c"}, "yaml")
        assert t.name == "a"

        decode_into(t, {"app_name": "a", "title": "b"}, "toml")
        assert t.name == "b"

        decode_into(t, {"name": "c"}, "json")
        assert t.name == "c"

    def test_dash_tag_skips_field(self):
        t = Tagged()
        decode_into(t, {"secret": "leaked"}, "yaml")
        assert t.secret == "keep"

    def test_nested_collections(self):
        pool = Pool()
        decode_into(
            pool,
            {
                "workers": [{"id": "1"}, {"id": 2}],
                "by_name": {"a": {"id": 3}},
                "fallback": {"id": 4},
            },
        )
        assert pool.workers == [Worker(1), Worker(2)]
        assert pool.by_name == {"a": Worker(3)}
        assert pool.fallback == Worker(4)

    def test_invalid_value_leaves_target_untouched(self):
        app = App(name="before", http=Http(port=1))
        with pytest.raises(ValidationError):
            decode_into(app, {"name": "after", "http": {"port": "noport"}})
        assert app == App(name="before", http=Http(port=1))


class TestOtherTargets:
    """Test pydantic models, mappings and unsupported targets."""

    def test_pydantic_model(self):
        m = ModelTarget()
        decode_into(m, {"name": "svc", "port": "8080", "log_level": "debug"}, "yaml")
        assert (m.name, m.port, m.level) == ("svc", 8080, "debug")

    def test_pydantic_model_invalid(self):
        m = ModelTarget(port=1)
        with pytest.raises(ValidationError):
            decode_into(m, {"port": "noport"})
        assert m.port == 1

    def test_validation_options(self):
        m = ModelTarget(port=1)
        with pytest.raises(ValidationError):
            decode_into(m, {"port": "8080"}, strict=True)
        assert m.port == 1

        decode_into(m, {"port": 8080}, strict=True)
        assert m.port == 8080

    def test_mapping_is_replaced(self):
        target = {"old": 1}
        decode_into(target, {"new": {"nested": 2}})
        assert target == {"new": {"nested": 2}}

    def test_unsupported_target(self):
        with pytest.raises(TypeError):
            decode_into(object(), {"a": 1})
