"""Loading and saving of YAML/JSON documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from pagescore.utils.errors import InvalidConfigError

JSON_SUFFIXES = (".json",)


def load_document(path: Path | str) -> Any:
    """Load a YAML or JSON document from disk.

    JSON is picked by file suffix; everything else goes through the YAML
    loader.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidConfigError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidConfigError(f"Cannot read {path}: {e}", field=str(path)) from e

    try:
        if path.suffix.lower() in JSON_SUFFIXES:
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidConfigError(f"Cannot parse {path}: {e}", field=str(path)) from e


def dump_document(data: Any, format: str = "yaml") -> str:
    """Serialize a document as YAML or JSON text."""
    if format == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def save_document(data: Any, path: Path | str) -> Path:
    """Write a document, choosing the format from the file suffix."""
    path = Path(path)
    format = "json" if path.suffix.lower() in JSON_SUFFIXES else "yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_document(data, format), encoding="utf-8")
    return path
