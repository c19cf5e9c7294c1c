"""Walks the resource path under a root, handing matching files to a callback."""

import collections
import logging
from typing import AnyStr
from typing import BinaryIO
from typing import Callable

from orbitalbase import classpath


logger = logging.getLogger(__name__)

OnEntry = Callable[[str, BinaryIO], None]


def _children(loader, path):
    prefix = path if path.endswith("/") or not path else path + "/"
    children = loader.list_resource(prefix)
    if not children:
        return []
    return [prefix + child for child in children]


def for_all_entries(root: AnyStr, file_suffix: AnyStr, on_entry: OnEntry, loader=None) -> int:
    """Calls on_entry(name, stream) for every resource under root ending in file_suffix.

    The walk is breadth first. Anything not ending in file_suffix is
    treated as a possible directory and listed; anything ending in it is
    opened as a file and is never listed. Streams are closed once the
    callback returns, or raises. Returns the number of entries delivered.
    """
    loader = loader or classpath.get_loader()
    root = root.lstrip("/")
    if root and not root.endswith("/"):
        root += "/"
    pending = collections.deque(_children(loader, root))
    delivered = 0
    while pending:
        name = pending.popleft()
        if not name.endswith(file_suffix):
            # May be a directory, definitely not a file we want.
            pending.extend(_children(loader, name))
            continue
        stream = loader.open_resource(name)
        if stream is None:
            logger.debug("skipping unreadable resource %s", name)
            continue
        with stream:
            on_entry(name, stream)
        delivered += 1
    logger.debug("delivered %d %s resources under %r", delivered, file_suffix, root)
    return delivered
