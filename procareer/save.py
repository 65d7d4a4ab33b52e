# procareer/save.py
from __future__ import annotations

import json, os
from typing import Any, Dict

from .career import Career
from .config import SAVE_DIR, SCHEMA_VERSION


def migrate_save(blob: Dict[str, Any], version: int) -> Dict[str, Any]:
    """
    Bring an older blob up to the current schema.
    Version 0 saves were a bare career dict with no envelope.
    """
    if version > SCHEMA_VERSION:
        raise ValueError(f"save schema {version} is newer than supported ({SCHEMA_VERSION})")
    if version == 0 and "career" not in blob:
        blob = {"schema_version": SCHEMA_VERSION, "career": blob}
    out = dict(blob)
    out["schema_version"] = SCHEMA_VERSION
    return out


def save_path(name: str, directory: str = SAVE_DIR) -> str:
    return os.path.join(directory, f"{name}.json")


def dumps_career(career: Career) -> str:
    return json.dumps({"schema_version": SCHEMA_VERSION, "career": career.to_dict()}, indent=2)


def loads_career(text: str) -> Career:
    blob = json.loads(text)
    version = int(blob.get("schema_version", 0))
    data = migrate_save(blob, version)
    return Career.from_dict(data["career"])


def save_career(path: str, career: Career) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps_career(career))


def load_career(path: str) -> Career:
    with open(path, "r", encoding="utf-8") as f:
        return loads_career(f.read())
