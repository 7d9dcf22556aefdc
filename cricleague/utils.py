"""JSON file helpers shared by the document store and the config loader."""

import json
import logging
import os
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('cricleague.utils')


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a JSON file, validating it against a pydantic model when given.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        ValueError: If schema validation fails
    """
    path = Path(path)
    with open(path, encoding='utf-8') as f:
        data = json.load(f)

    if schema is None:
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} failed validation against {schema.__name__}')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def load_collection(path: Path | str) -> dict[str, dict[str, Any]]:
    """
    Documents stored in a collection file as {id: document}.

    A collection that was never written is empty.

    Raises:
        ValueError: If the file is not valid JSON or not an object of documents
    """
    path = Path(path)
    try:
        data = load_json(path)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        raise ValueError(f'Corrupt collection file {path}: {e.msg} (line {e.lineno})') from e

    if not isinstance(data, dict):
        raise ValueError(f'Corrupt collection file {path}: expected an object of documents')
    return data


def write_json_atomic(path: Path | str, data: Any) -> None:
    """
    Write JSON through a temporary file in the same directory, then rename it
    over the target. Readers see either the old file or the new one.

    Pydantic models are dumped in JSON mode first.

    Raises:
        TypeError: If data is not JSON-serializable (the target is left untouched)
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = data.model_dump(mode='json') if isinstance(data, BaseModel) else data

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.stem}-', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug(f'Wrote {path}')


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def new_document_id() -> str:
    """Generate a random 20-character document id."""
    return uuid.uuid4().hex[:20]
