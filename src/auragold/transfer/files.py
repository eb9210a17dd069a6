from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Union

from ..errors import ImportFileError, MalformedJsonError

PathLike = Union[str, "os.PathLike[str]"]


def read_json_file(path: PathLike) -> Any:
    """Read a whole file and decode it as JSON.

    Raises ImportFileError if the file cannot be read and MalformedJsonError
    if its contents are not JSON.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ImportFileError(f"cannot read {path}: {e}") from e
    try:
        return json.loads(text)
    except ValueError as e:
        # JSONDecodeError, or an integer literal past the digit limit
        raise MalformedJsonError(f"invalid JSON in {path}: {e}") from e


def write_json_file(path: PathLike, data: Any) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        f.write(json.dumps(data, indent=2, ensure_ascii=False))
    return p
