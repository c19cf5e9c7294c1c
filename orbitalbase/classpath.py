"""Resource path lookups.

A resource path is an ordered list of roots, each of them either a
directory or a zip archive. Resources are named with '/' separated
paths relative to a root, and the first root which contains a name
wins.
"""

import io
import logging
import os
import sys
import zipfile
from typing import AnyStr
from typing import BinaryIO
from typing import List
from typing import NamedTuple
from typing import Optional


logger = logging.getLogger(__name__)

RESOURCE_PATH_ENVAR = "ORBITALBASE_RESOURCE_PATH"


class ResourceLocation(NamedTuple):
    protocol: str
    path: str
    entry: Optional[str]

    @classmethod
    def file(cls, path):
        return cls(protocol="file", path=path, entry=None)

    @classmethod
    def zip(cls, archive, entry):
        return cls(protocol="zip", path=archive, entry=entry)


def _normalize(name: AnyStr) -> str:
    return name.lstrip("/")


def _zip_has(names, entry):
    if entry in names:
        return True
    prefix = entry if entry.endswith("/") else entry + "/"
    if prefix == "/":
        return bool(names)
    return any(n.startswith(prefix) for n in names)


class ResourceLoader:
    def __init__(self, roots=None):
        self.roots = [str(r) for r in (roots or [])]

    @classmethod
    def from_environment(cls):
        roots = []
        extra = os.environ.get(RESOURCE_PATH_ENVAR)
        if extra:
            roots.extend(p for p in extra.split(os.pathsep) if p)
        roots.extend(p for p in sys.path if p)
        return cls(roots)

    def get_resource(self, name: AnyStr) -> Optional[ResourceLocation]:
        name = _normalize(name)
        for root in self.roots:
            if os.path.isdir(root):
                candidate = os.path.join(root, name) if name else root
                if os.path.exists(candidate):
                    return ResourceLocation.file(candidate)
            elif zipfile.is_zipfile(root):
                with zipfile.ZipFile(root) as archive:
                    if _zip_has(archive.namelist(), name):
                        return ResourceLocation.zip(root, name)
        return None

    def open_resource(self, name: AnyStr) -> Optional[BinaryIO]:
        """Opens a resource for binary reading, or None if it is not a regular file."""
        location = self.get_resource(name)
        if location is None:
            return None
        if location.protocol == "file":
            if not os.path.isfile(location.path):
                return None
            return open(location.path, "rb")
        if location.protocol == "zip":
            if not location.entry or location.entry.endswith("/"):
                return None
            with zipfile.ZipFile(location.path) as archive:
                if location.entry not in archive.namelist():
                    return None
                return io.BytesIO(archive.read(location.entry))
        return None

    def list_resource(self, name: AnyStr) -> Optional[List[str]]:
        """Lists the immediate children of a directory resource.

        Returns None when the name does not resolve, does not name a
        directory, or resolves to a protocol without listings.
        """
        location = self.get_resource(name)
        if location is None:
            return None
        if location.protocol == "file":
            if not os.path.isdir(location.path):
                return None
            return sorted(os.listdir(location.path))
        if location.protocol == "zip":
            prefix = location.entry
            if prefix and not prefix.endswith("/"):
                prefix += "/"
            children = set()
            with zipfile.ZipFile(location.path) as archive:
                for entry in archive.namelist():
                    if not entry.startswith(prefix):
                        continue
                    child = entry[len(prefix):].split("/", 1)[0]
                    if child:
                        children.add(child)
            return sorted(children)
        logger.debug("no listing for %s resource %s", location.protocol, name)
        return None


_loader = None


def get_loader() -> ResourceLoader:
    global _loader
    if _loader is None:
        _loader = ResourceLoader.from_environment()
    return _loader


def set_loader(loader: Optional[ResourceLoader]) -> None:
    """Installs the process-wide resource loader.

    None restores the loader built from the environment on next use.
    """
    global _loader
    _loader = loader
