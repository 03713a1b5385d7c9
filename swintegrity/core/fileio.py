"""Atomic text writes for the host artifact and version targets.

Content goes to a temp file in the target's directory and is moved over
the target with ``os.replace``; a failed write leaves the old file intact.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path


def atomic_write_text(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """Replace ``target_path`` with ``content`` in one rename.

    Line endings are written exactly as given and an existing target keeps
    its permission bits. Raises ``OSError`` if the write or the rename
    fails; the temp file is removed in that case.
    """
    temp_fd = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        newline="",
        dir=str(target_path.parent),
        prefix=f".{target_path.name}.",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_fd.name)

    try:
        temp_fd.write(content)
        temp_fd.flush()
        temp_fd.close()
        if target_path.exists():
            os.chmod(temp_path, stat.S_IMODE(target_path.stat().st_mode))
        os.replace(temp_path, target_path)
    except BaseException:
        temp_fd.close()
        if temp_path.exists():
            temp_path.unlink()
        raise
