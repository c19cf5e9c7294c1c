"""Simple persistent key-value store.

Values live in a PersistentPropertyProvider. The default provider keeps
everything in memory, which adds little over the global properties;
install a provider backed by real storage with set_provider() as one of
the first start-up actions, before other threads read properties.

Reads "with fallback" consult the provider first, then the global
properties, then the caller's default.

Every function taking a key has a twin with a _for suffix which takes
(ns, field) instead and derives the key with
ns.persistent_property_key(field), so arbitrary objects can own a
namespace of properties:

    class Account(PersistentPropertyKey):
        def persistent_property_key(self, field):
            return "account.%d.%s" % (self.id, field)

    set_property_for(account, "theme", "dark")

"""

import threading
from typing import Any
from typing import AnyStr
from typing import List
from typing import NamedTuple
from typing import Optional

from orbitalbase import converters
from orbitalbase import properties
from orbitalbase.exceptions import NoPersistentProperty


_MISSING = object()


class PersistentProperty(NamedTuple):
    name: str
    value: str


class Response(NamedTuple):
    is_found: bool
    value: Optional[str]

    @classmethod
    def found(cls, value):
        return cls(is_found=True, value=value)


Response.not_found = Response(is_found=False, value=None)


class PersistentPropertyKey:
    """Maps a field of this object to a property key."""
    def persistent_property_key(self, field: Any) -> str:
        raise NotImplementedError()


class PersistentPropertyProvider:
    """Storage behind the persistent properties.

    set() and remove() must be atomic per key. None marks an absent
    property or previous value.
    """
    def retrieve_all(self) -> List[PersistentProperty]:
        raise NotImplementedError()

    def get(self, key: AnyStr) -> Optional[PersistentProperty]:
        raise NotImplementedError()

    def set(self, key: AnyStr, value: AnyStr) -> Optional[str]:
        raise NotImplementedError()

    def remove(self, key: AnyStr) -> Optional[str]:
        raise NotImplementedError()


class InMemoryPersistentPropertyProvider(PersistentPropertyProvider):
    def __init__(self):
        self.lock = threading.Lock()
        self.properties = {}

    def retrieve_all(self):
        with self.lock:
            return [PersistentProperty(k, v) for k, v in self.properties.items()]

    def get(self, key):
        with self.lock:
            if key not in self.properties:
                return None
            return PersistentProperty(key, self.properties[key])

    def set(self, key, value):
        with self.lock:
            previous = self.properties.get(key)
            self.properties[key] = value
            return previous

    def remove(self, key):
        with self.lock:
            return self.properties.pop(key, None)


_provider = InMemoryPersistentPropertyProvider()


def set_provider(provider: Optional[PersistentPropertyProvider]) -> None:
    """Installs the provider. None goes back to a fresh in-memory provider."""
    global _provider
    _provider = provider if provider is not None else InMemoryPersistentPropertyProvider()


def get_provider() -> PersistentPropertyProvider:
    return _provider


def lookup(key: AnyStr) -> Response:
    entry = _provider.get(key)
    if entry is None:
        return Response.not_found
    return Response.found(entry.value)


def get_property(key: AnyStr, default=_MISSING) -> Optional[str]:
    resp = lookup(key)
    if resp.is_found:
        return resp.value
    if default is _MISSING:
        raise NoPersistentProperty(key)
    return default


def set_property(key: AnyStr, value: AnyStr) -> Optional[str]:
    return _provider.set(key, value)


def remove_property(key: AnyStr) -> Optional[str]:
    return _provider.remove(key)


def get_all() -> List[PersistentProperty]:
    return _provider.retrieve_all()


def get_property_with_fallback(key: AnyStr, default=_MISSING) -> Optional[str]:
    if default is _MISSING:
        return get_property(key, properties.get_global_property(key))
    return get_property(key, properties.get_global_property(key, default))


def _fallback_text(key, default):
    if default is _MISSING:
        return get_property_with_fallback(key)
    return get_property_with_fallback(key, str(default))


def get_boolean_property_with_fallback(key: AnyStr, default=_MISSING) -> bool:
    if default is not _MISSING:
        default = converters.string_from_boolean(default)
    return converters.boolean_from_string(_fallback_text(key, default), key=key)


def get_long_property_with_fallback(key: AnyStr, default=_MISSING) -> int:
    return converters.long_from_string(_fallback_text(key, default), key=key)


def get_integer_property_with_fallback(key: AnyStr, default=_MISSING) -> int:
    return converters.int_from_string(_fallback_text(key, default), key=key)


def lookup_for(ns: PersistentPropertyKey, field: Any) -> Response:
    return lookup(ns.persistent_property_key(field))


def get_property_for(ns: PersistentPropertyKey, field: Any, default=_MISSING) -> Optional[str]:
    return get_property(ns.persistent_property_key(field), default)


def set_property_for(ns: PersistentPropertyKey, field: Any, value: AnyStr) -> Optional[str]:
    return set_property(ns.persistent_property_key(field), value)


def remove_property_for(ns: PersistentPropertyKey, field: Any) -> Optional[str]:
    return remove_property(ns.persistent_property_key(field))


def get_property_with_fallback_for(ns: PersistentPropertyKey, field: Any, default=_MISSING) -> Optional[str]:
    return get_property_with_fallback(ns.persistent_property_key(field), default)


def get_boolean_property_with_fallback_for(ns: PersistentPropertyKey, field: Any, default=_MISSING) -> bool:
    return get_boolean_property_with_fallback(ns.persistent_property_key(field), default)


def get_long_property_with_fallback_for(ns: PersistentPropertyKey, field: Any, default=_MISSING) -> int:
    return get_long_property_with_fallback(ns.persistent_property_key(field), default)


def get_integer_property_with_fallback_for(ns: PersistentPropertyKey, field: Any, default=_MISSING) -> int:
    return get_integer_property_with_fallback(ns.persistent_property_key(field), default)
