"""JSON file helpers shared by the store and the configuration loader."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('wpstats.utils')


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
    default: Any = None,
) -> Any | T:
    """
    Load a JSON file, optionally validating it against a Pydantic model.

    Args:
        path: Path to JSON file
        schema: Optional Pydantic model to validate against
        default: Data to use when the file does not exist. When None, a
            missing file raises FileNotFoundError.

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist and no default was given
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        from wpstats.schemas import StoreFile
        store = load_json('data/store.json', schema=StoreFile, default={})
    """
    path = Path(path)

    if path.exists():
        logger.debug(f'Loading JSON from: {path}')
        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
            raise
    elif default is not None:
        logger.debug(f'{path} not found, using default')
        data = default
    else:
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'Schema validation failed for {path}: {e}')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write data as JSON, replacing the target file atomically.

    The payload is written to a temporary file in the same directory and
    moved over the target, so readers never see a half-written file.

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    json_data = data.model_dump(mode='json') if isinstance(data, BaseModel) else data

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=indent, ensure_ascii=False)
        os.replace(tmp_name, path)
    except (TypeError, OSError) as e:
        logger.error(f'Failed to write {path}: {e}')
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.debug(f'Saved JSON to: {path}')
