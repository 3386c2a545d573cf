"""Transaction resource paths.

Jobs started from one configuration run share a transaction, addressed as
``/grabbit/transaction/<transactionID>[.<extension>]``.
"""

from __future__ import annotations

import re

_TRANSACTION_PATH = re.compile(r"/grabbit/transaction/(.+)$")
_EXTENSION = re.compile(r"\..+")


def transaction_id_from_path(path: str) -> str:
    """Extract the transaction id from a transaction resource path.

    Everything from the first "." followed by at least one character is
    removed, so a bare trailing dot is kept.

    Args:
        path: Resolution path, e.g. "/grabbit/transaction/123.json".

    Returns:
        The id without extension ("123"), or "" if the path is not a
        transaction resource.
    """
    match = _TRANSACTION_PATH.fullmatch(path)
    if not match:
        return ""
    return _EXTENSION.sub("", match.group(1), count=1)
