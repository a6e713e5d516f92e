import json
from pathlib import Path
from typing import Any

from ..io.exceptions import DataParseError, DataWriteError


class JSONDocumentLoadError(DataParseError):
    pass


class JSONDocumentSaveError(DataWriteError):
    pass


def read_json_document(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise JSONDocumentLoadError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise JSONDocumentLoadError(f"Failed to read {path}: {exc}") from exc


def write_json_document(path: Path, payload: Any) -> None:
    # write-then-rename so a crash never leaves a truncated document behind
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
        tmp_path.replace(path)
    except (OSError, TypeError, ValueError) as exc:
        raise JSONDocumentSaveError(f"Failed to save {path}: {exc}") from exc
