from __future__ import annotations

import os
from typing import Tuple


def parse_name(name: str, config_path: str, default_type: str) -> Tuple[str, str, str]:
    """Resolve a short config name to ``(logical_name, source_type, file_path)``.

    ``"log.toml"`` resolves to ``("log", "toml", <config_path>/log.toml)``;
    ``"app"`` resolves to ``("app", default_type, <config_path>/app.<default_type>)``.
    """
    file_name = os.path.basename(name)
    stem, ext = os.path.splitext(file_name)
    if not ext:
        return name, default_type, os.path.join(config_path, f"{name}.{default_type}")
    return stem, ext[1:].lower(), os.path.join(config_path, name)
