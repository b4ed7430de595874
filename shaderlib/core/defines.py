"""
The define table: the set of macro name/value pairs that affect compilation.
"""

from collections.abc import Mapping


def coerce_define_value(value):
    """Convert a define value to the string that ends up in the source.
    Booleans become "1" or "0". None is returned as None (meaning "ignore").
    """
    if value is True:
        return "1"
    elif value is False:
        return "0"
    elif value is None:
        return None
    return str(value)


class DefineTable(Mapping):
    """A mapping of macro names to string values, with change detection.

    Each actual change bumps ``revision``. A reader that remembers the
    revision it last acted on sees every change exactly once, no matter how
    many other readers share the table.
    """

    def __init__(self, defines=None):
        self._defines = {}
        self._revision = 0
        if defines:
            self.define(defines)

    def __getitem__(self, name):
        return self._defines[name]

    def __iter__(self):
        return iter(self._defines)

    def __len__(self):
        return len(self._defines)

    def __repr__(self):
        return f"<DefineTable {self._defines!r} at rev {self._revision}>"

    @property
    def revision(self):
        """An integer that increases with each change to the table."""
        return self._revision

    def define(self, name, value=True):
        """Set a define, or a mapping of defines.

        Returns True if any value actually changed. Setting a name to the
        value it already has is a no-op.
        """
        if isinstance(name, Mapping):
            changed = [self.define(k, v) for k, v in name.items()]
            return any(changed)
        elif not isinstance(name, str):
            raise TypeError(f"Define name must be a str, not {name!r}")
        value = coerce_define_value(value)
        if value is None or self._defines.get(name) == value:
            return False
        self._defines[name] = value
        self._revision += 1
        return True

    def undefine(self, name):
        """Remove a define. Removing a name that is not defined is a no-op."""
        if self._defines.pop(name, None) is not None:
            self._revision += 1
        return self

    def as_dict(self):
        return dict(self._defines)

    def copy(self):
        return DefineTable(self._defines)

    def to_prologue(self):
        """Get the defines as ``#define NAME VALUE`` lines."""
        return "".join(f"#define {k} {v}\n" for k, v in self._defines.items())
