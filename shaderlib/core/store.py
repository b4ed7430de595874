"""
The fragment store: a namespace of named glsl source fragments, addressable
by slash-delimited, extension-less paths.
"""

import re
import posixpath
from collections.abc import Mapping

from ..utils import logger
from .templating import jinja_env, as_loader


def normalize_path(path):
    """Collapse duplicate slashes and drop leading slashes."""
    return re.sub(r"/+", "/", path).lstrip("/")


class FragmentStore:
    """A registry of glsl fragments.

    Fragments are immutable once registered, but can be overwritten by
    registering new source at the same path. The store never shrinks.
    """

    def __init__(self):
        self._fragments = {}
        self._revision = 0

    def __contains__(self, path):
        return path in self._fragments

    def __len__(self):
        return len(self._fragments)

    @property
    def revision(self):
        """An integer that increases each time a fragment is added or changed."""
        return self._revision

    def paths(self):
        """Get a sorted list of the registered paths."""
        return sorted(self._fragments)

    def source(self, path):
        """Get the raw source of the fragment at the given path, or None."""
        if isinstance(path, str):
            return self._fragments.get(path, None)
        return None

    def add(self, path, source=None):
        """Register a fragment.

        Can be called as ``add(path, source)`` or ``add(mapping)``, where the
        mapping can be nested. The keys of nested mappings are joined with
        slashes to form the paths.
        """
        if isinstance(path, str) and isinstance(source, str):
            path = normalize_path(path)
            if self._fragments.get(path, None) != source:
                self._fragments[path] = source
                self._revision += 1
        elif isinstance(path, Mapping) and source is None:
            self._add_nested([], path)
        else:
            raise TypeError(
                f"add() needs a path and source string, or a mapping. Not {path!r}"
            )
        return self

    def _add_nested(self, stack, scope):
        for key, value in scope.items():
            stack.append(str(key))
            if isinstance(value, Mapping):
                self._add_nested(stack, value)
            elif isinstance(value, str):
                self.add("/".join(stack), value)
            else:
                path = "/".join(stack)
                raise TypeError(f"Fragment {path!r} must be a str, not {value!r}")
            stack.pop()

    def load(self, loader, prefix="", extensions=None):
        """Register all fragments that the given loader can list.

        Parameters
        ----------
        loader: jinja2.BaseLoader | dict
            The loader to read the fragments from. Must support ``list_templates()``.
        prefix: str
            A path to register the fragments under.
        extensions: sequence of str | None
            If given, only names with one of these extensions are loaded.
        """
        loader = as_loader(loader)
        names = loader.list_templates()
        count = 0
        for name in names:
            ext = posixpath.splitext(name)[1]
            if extensions is not None and ext not in extensions:
                continue
            source, _, _ = loader.get_source(jinja_env, name)
            path = name[: len(name) - len(ext)] if ext else name
            self.add(f"{prefix}/{path}", source)
            count += 1
        logger.debug(f"Loaded {count} glsl fragments from {loader.__class__.__name__}.")
        return self

    def resolve(self, path, root="./"):
        """Get the canonical path for ``path``, treating ``root`` as the
        directory it is relative to. The extension is stripped.
        """
        root = posixpath.join("/", root)
        path = posixpath.splitext(path)[0]
        path = posixpath.normpath(posixpath.join(root, path))
        return normalize_path(path)
