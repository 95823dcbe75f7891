"""Structural decoding of a configuration tree into caller-owned objects.

Supported targets:

* dataclass instances, validated with a pydantic ``TypeAdapter``;
* pydantic ``BaseModel`` instances, validated with ``model_validate``;
* mutable mappings, which are cleared and refilled.

Source keys are matched to fields through a *tag*: for dataclasses the
field's ``metadata[tag_name]``, for pydantic models
``json_schema_extra[tag_name]`` or the field alias. Fields without a tag
match on their own name. Matching is case-insensitive and a tag of ``"-"``
skips the field. Fields absent from the source keep their current value.

Decoding is all-or-nothing: the target is only touched after the whole
tree validated.
"""

from __future__ import annotations

import copy
import dataclasses
import typing
from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple, Union

from pydantic import BaseModel, TypeAdapter

from .cast import to_string

_SKIP = "-"


def _is_model_class(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseModel)


def _is_struct_class(tp: Any) -> bool:
    return isinstance(tp, type) and (dataclasses.is_dataclass(tp) or _is_model_class(tp))


def _unwrap_optional(tp: Any) -> Any:
    if typing.get_origin(tp) is Union:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _field_keys(cls: type, tag_name: str) -> Dict[str, Tuple[str, str, Any]]:
    """Map lower-cased source key -> (field name, output key, field type)."""
    keys: Dict[str, Tuple[str, str, Any]] = {}
    if _is_model_class(cls):
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            output = info.alias or name
            tag = extra.get(tag_name) or output
            if tag != _SKIP:
                keys[str(tag).lower()] = (name, output, info.annotation)
        return keys

    hints = typing.get_type_hints(cls)
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        tag = f.metadata.get(tag_name) or f.name
        if tag != _SKIP:
            keys[str(tag).lower()] = (f.name, f.name, hints.get(f.name, Any))
    return keys


def _coerce_leaf(tp: Any, value: Any) -> Any:
    # Scalars are weakly typed towards str fields, like most config loaders
    if _unwrap_optional(tp) is str and isinstance(value, (bool, int, float)):
        return to_string(value)
    return value


def _remap_value(tp: Any, value: Any, tag_name: str) -> Any:
    tp = _unwrap_optional(tp)
    if _is_struct_class(tp) and isinstance(value, Mapping):
        return _remap(tp, value, tag_name)
    origin = typing.get_origin(tp)
    if origin in (list, typing.List) and isinstance(value, list):
        args = typing.get_args(tp)
        if args:
            return [_remap_value(args[0], item, tag_name) for item in value]
    if origin in (dict, typing.Dict) and isinstance(value, Mapping):
        args = typing.get_args(tp)
        if len(args) == 2:
            return {k: _remap_value(args[1], v, tag_name) for k, v in value.items()}
    return _coerce_leaf(tp, value)


def _remap(cls: type, data: Mapping[str, Any], tag_name: str) -> Dict[str, Any]:
    """Rename ``data``'s keys to ``cls``'s field names, recursively."""
    fields = _field_keys(cls, tag_name)
    result: Dict[str, Any] = {}
    for key, value in data.items():
        entry = fields.get(str(key).lower())
        if entry is None:
            continue
        _, output, tp = entry
        result[output] = _remap_value(tp, value, tag_name)
    return result


def _current_values(obj: Any) -> Optional[Dict[str, Any]]:
    if isinstance(obj, BaseModel):
        return {
            (info.alias or name): getattr(obj, name)
            for name, info in type(obj).model_fields.items()
        }
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj) if f.init}
    return None


def _overlay(current: Any, incoming: Any) -> Any:
    """Overlay remapped ``incoming`` onto ``current`` nested objects."""
    if not isinstance(incoming, dict):
        return incoming
    base = _current_values(current)
    if base is None:
        return incoming
    merged = dict(base)
    for key, value in incoming.items():
        merged[key] = _overlay(base.get(key), value)
    return merged


def _assign(target: Any, validated: Any) -> None:
    if isinstance(target, BaseModel):
        for name in type(target).model_fields:
            setattr(target, name, getattr(validated, name))
        return
    for f in dataclasses.fields(target):
        setattr(target, f.name, getattr(validated, f.name))


def decode_into(
    target: Any, data: Mapping[str, Any], tag_name: str = "json", **options: Any
) -> None:
    """Populate ``target`` in place from ``data``.

    ``options`` are passed to pydantic validation, e.g. ``strict=True`` or
    ``context={...}``. They are ignored for mapping targets.

    Raises:
        pydantic.ValidationError: If a value cannot be converted to its field type.
        TypeError: If ``target`` is not a dataclass instance, pydantic model
            or mutable mapping.
    """
    if isinstance(target, MutableMapping):
        target.clear()
        target.update(copy.deepcopy(dict(data)))
        return

    cls = type(target)
    if not _is_struct_class(cls):
        raise TypeError(
            f"cannot decode into {cls.__name__}: expected a dataclass instance, "
            "a pydantic model or a mutable mapping"
        )

    merged = _overlay(target, _remap(cls, data, tag_name))
    if _is_model_class(cls):
        validated = cls.model_validate(merged, **options)
    else:
        validated = TypeAdapter(cls).validate_python(merged, **options)
    _assign(target, validated)
