"""Typed getters shared by stores and the config manager."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from . import cast


class ReadAccessors:
    """Mixin adding typed getters on top of ``get`` and ``is_set``.

    A missing key yields the type's zero value. The ``default_*`` variants
    return the caller's fallback when the key is absent and otherwise
    behave like the plain getter, even when the stored value happens to
    equal the fallback.
    """

    def get(self, key: str) -> Any:
        raise NotImplementedError

    def is_set(self, key: str) -> bool:
        raise NotImplementedError

    def has(self, key: str) -> bool:
        return self.is_set(key)

    def get_string(self, key: str) -> str:
        return cast.to_string(self.get(key))

    def get_bool(self, key: str) -> bool:
        return cast.to_bool(self.get(key))

    def get_int(self, key: str) -> int:
        return cast.to_int(self.get(key))

    def get_float(self, key: str) -> float:
        return cast.to_float(self.get(key))

    def get_time(self, key: str) -> Optional[datetime]:
        return cast.to_time(self.get(key))

    def get_duration(self, key: str) -> timedelta:
        return cast.to_duration(self.get(key))

    def get_int_list(self, key: str) -> List[int]:
        return cast.to_int_list(self.get(key))

    def get_string_list(self, key: str) -> List[str]:
        return cast.to_string_list(self.get(key))

    def get_string_map(self, key: str) -> Dict[str, Any]:
        return cast.to_string_map(self.get(key))

    def get_string_map_string(self, key: str) -> Dict[str, str]:
        return cast.to_string_map_string(self.get(key))

    def get_string_map_string_list(self, key: str) -> Dict[str, List[str]]:
        return cast.to_string_map_string_list(self.get(key))

    def get_size_in_bytes(self, key: str) -> int:
        return cast.to_size_in_bytes(self.get(key))

    def default(self, key: str, default_value: Any) -> Any:
        if not self.is_set(key):
            return default_value
        return self.get(key)

    def default_string(self, key: str, default_value: str) -> str:
        if not self.is_set(key):
            return default_value
        return self.get_string(key)

    def default_bool(self, key: str, default_value: bool) -> bool:
        if not self.is_set(key):
            return default_value
        return self.get_bool(key)

    def default_int(self, key: str, default_value: int) -> int:
        if not self.is_set(key):
            return default_value
        return self.get_int(key)

    def default_float(self, key: str, default_value: float) -> float:
        if not self.is_set(key):
            return default_value
        return self.get_float(key)

    def default_time(self, key: str, default_value: Optional[datetime]) -> Optional[datetime]:
        if not self.is_set(key):
            return default_value
        return self.get_time(key)

    def default_duration(self, key: str, default_value: timedelta) -> timedelta:
        if not self.is_set(key):
            return default_value
        return self.get_duration(key)

    def default_int_list(self, key: str, default_value: List[int]) -> List[int]:
        if not self.is_set(key):
            return default_value
        return self.get_int_list(key)

    def default_string_list(self, key: str, default_value: List[str]) -> List[str]:
        if not self.is_set(key):
            return default_value
        return self.get_string_list(key)

    def default_string_map(self, key: str, default_value: Dict[str, Any]) -> Dict[str, Any]:
        if not self.is_set(key):
            return default_value
        return self.get_string_map(key)

    def default_string_map_string(
        self, key: str, default_value: Dict[str, str]
    ) -> Dict[str, str]:
        if not self.is_set(key):
            return default_value
        return self.get_string_map_string(key)

    def default_string_map_string_list(
        self, key: str, default_value: Dict[str, List[str]]
    ) -> Dict[str, List[str]]:
        if not self.is_set(key):
            return default_value
        return self.get_string_map_string_list(key)

    def default_size_in_bytes(self, key: str, default_value: int) -> int:
        if not self.is_set(key):
            return default_value
        return self.get_size_in_bytes(key)
