from __future__ import annotations

import os
from typing import Union

from ..core.errors import OutputError


def write_bytes(data: bytes, destination: Union[str, os.PathLike]) -> str:
    """Write ``data`` to ``destination``, creating parent directories.

    Returns the path written. Any filesystem failure is raised as OutputError.
    """
    path = os.fspath(destination)
    try:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise OutputError(f"Could not write {path}: {e}")
    return path
