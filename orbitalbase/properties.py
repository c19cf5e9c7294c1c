"""Process-wide properties loaded from resource files.

Modules register their property files early in their life cycle:

    properties.add_property_file("myservice/defaults.properties")

Each distinct path is loaded at most once, so modules should use
unique names for their files. Later files win where keys overlap.

The table also provides a replaceable time source so tests can pin
the clock, and typed getters over the stored strings.
"""

import datetime
import logging
import threading
import time
from typing import AnyStr
from typing import Callable
from typing import Optional

from orbitalbase import classpath
from orbitalbase import converters
from orbitalbase.exceptions import LoadFailure


logger = logging.getLogger(__name__)

_MISSING = object()

_loaded_files = set()
_loaded_files_lock = threading.Lock()
_global_properties = {}


def system_time() -> int:
    return int(time.time() * 1000)


_time_source = system_time


def reset() -> None:
    """Forgets every loaded file and property, and restores the system clock."""
    global _time_source
    with _loaded_files_lock:
        _loaded_files.clear()
        _global_properties.clear()
    _time_source = system_time


def add_property_file(path: AnyStr, loader: Optional[classpath.ResourceLoader] = None) -> None:
    """Adds a resource property file to the global properties.

    A missing resource adds nothing and still counts as loaded. If the
    file cannot be read or parsed the path is released again so that a
    later call may retry, and LoadFailure is raised.
    """
    with _loaded_files_lock:
        if path in _loaded_files:
            return
        _loaded_files.add(path)
    loader = loader or classpath.get_loader()
    try:
        stream = loader.open_resource(path)
        if stream is None:
            logger.debug("property file %s not found", path)
            return
        with stream:
            loaded = converters.properties_from_bytes(stream.read())
    except LoadFailure as e:
        _release(path, e)
        raise
    except Exception as e:
        _release(path, e)
        raise LoadFailure(e) from e
    _global_properties.update(loaded)
    logger.debug("loaded %d properties from %s", len(loaded), path)


def _release(path, cause):
    with _loaded_files_lock:
        _loaded_files.discard(path)
    logger.warning("failed to load property file %s: %s", path, cause)


def get_property_name(cls: type, attribute: AnyStr) -> str:
    """Standard property name for an attribute of a class.

    get_property_name(MemberTracking, "max_results") gives
    "orbital.model.MemberTracking.attr.max_results".
    """
    return "%s.%s.attr.%s" % (cls.__module__, cls.__qualname__, attribute)


def get_nonzero_limited(provided: int, max_value: int) -> int:
    """Returns provided clamped into [1, max_value]; values below 1 mean max_value."""
    if max_value < 1:
        raise ValueError("max_value must be at least 1, got %d" % max_value)
    if provided < 1:
        provided = max_value
    return min(provided, max_value)


def is_assert_enabled() -> bool:
    return __debug__


def set_time_source(source: Optional[Callable[[], int]]) -> None:
    """Replaces the millisecond clock. None restores the system clock."""
    global _time_source
    _time_source = source or system_time


def get_current_time() -> int:
    return _time_source()


_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def get_current_date() -> datetime.datetime:
    return _EPOCH + datetime.timedelta(milliseconds=get_current_time())


def get_global_property(key: AnyStr, default: Optional[AnyStr] = None) -> Optional[str]:
    return _global_properties.get(key, default)


def get_boolean_global_property(key: AnyStr, default=_MISSING) -> bool:
    if default is _MISSING:
        return converters.boolean_from_string(get_global_property(key), key=key)
    return converters.boolean_from_string(get_global_property(key, converters.string_from_boolean(default)), key=key)


def get_long_global_property(key: AnyStr, default=_MISSING) -> int:
    if default is _MISSING:
        return converters.long_from_string(get_global_property(key), key=key)
    return converters.long_from_string(get_global_property(key, str(default)), key=key)
