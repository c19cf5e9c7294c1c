class NoPersistentProperty(KeyError):
    """A persistent property does not exist and no default was supplied."""
    pass


class MalformedValue(ValueError):
    """Propagates an error generated while parsing a stored value.

    Raised when a typed getter is applied to text which does not parse
    as the requested type.
    """
    def __init__(self, key, raw_value, exception, *args):
        super(MalformedValue, self).__init__(
            "could not parse value %r for key %r: %s" % (raw_value, key, exception), *args)
        self.key = key
        self.raw_value = raw_value
        self.exception = exception


class LoadFailure(Exception):
    pass
