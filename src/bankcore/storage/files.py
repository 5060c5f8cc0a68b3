"""Whole-file text writes shared by the account store and transaction log."""

import os
from typing import Iterable

from bankcore.domain.errors import PersistenceError, persistence_failed


def write_lines(path: str, lines: Iterable[str]) -> None:
    """Replace ``path`` with ``lines``, one per line.

    The content goes to a sibling ``.tmp`` file first and is then renamed
    over the target, so a failed write leaves the previous file in place.

    Raises:
        PersistenceError: If the file cannot be written
    """
    tmp_path = f"{path}.tmp"
    try:
        with open(tmp_path, "w", encoding="ascii", errors="replace", newline="\n") as handle:
            for line in lines:
                handle.write(line)
                handle.write("\n")
        os.replace(tmp_path, path)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise PersistenceError(persistence_failed("write", path, e), path=path) from e
