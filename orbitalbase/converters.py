"""Tools for turning stored text into typed values.

Property values are always stored as strings. The typed getters in
properties and persistent parse them here, so every parse failure
surfaces as the same MalformedValue:

    n = long_from_string(get_global_property("pool.size"), key="pool.size")

"""

import re
from typing import AnyStr
from typing import Dict
from typing import Optional

import jproperties

from orbitalbase.exceptions import LoadFailure
from orbitalbase.exceptions import MalformedValue


LONG_MIN = -(1 << 63)
LONG_MAX = (1 << 63) - 1
INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1

_integer_ptrn = re.compile(r"[+-]?[0-9]+")


def boolean_from_string(x: Optional[AnyStr], key=None) -> bool:
    # Absent values read as false.
    if x is None:
        return False
    if x.lower() == "true":
        return True
    if x.lower() == "false":
        return False
    raise MalformedValue(key, x, "not a boolean")


def _bounded_integer(x, key, low, high):
    if x is None or not _integer_ptrn.fullmatch(x):
        raise MalformedValue(key, x, "not an integer")
    v = int(x)
    if v < low or v > high:
        raise MalformedValue(key, x, "out of range [%d, %d]" % (low, high))
    return v


def long_from_string(x: Optional[AnyStr], key=None) -> int:
    return _bounded_integer(x, key, LONG_MIN, LONG_MAX)


def int_from_string(x: Optional[AnyStr], key=None) -> int:
    return _bounded_integer(x, key, INT_MIN, INT_MAX)


def properties_from_bytes(x: bytes, encoding="iso-8859-1") -> Dict[str, str]:
    """Parses properties-file text into a plain dict of strings."""
    p = jproperties.Properties()
    try:
        p.load(x, encoding)
    except Exception as e:
        raise LoadFailure(e) from e
    return {key: p[key].data for key in p}


def string_from_boolean(x) -> str:
    """Text form of a boolean default; strings are kept as given."""
    if isinstance(x, str):
        return x
    return str(bool(x)).lower()
