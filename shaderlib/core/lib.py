"""
The ShaderLib ties the fragment store, the preprocessor and the compiled-text
cache together, and implements the final assembly of compiled shader text.
"""

import re

from ..utils import logger
from ..glsl import get_loader
from .cache import CompiledTextCache
from .hashing import hash_source, hash_from_value
from .preprocessor import Preprocessor, ANONYMOUS_NAME, root_for
from .store import FragmentStore


DEFAULT_PRECISION = "mediump float"

re_shader_name_guard = re.compile(
    r"\s?#ifndef SHADER_NAME[ \t]*\n#define SHADER_NAME\b.*\n#endif\n?\Z"
)
re_precision = re.compile(r"[ \t]*(?<!\w)precision\s+[a-z]+\s+\w+\s*;[ \t\r]*")
re_version = re.compile(r"\s*#\s*version\b")


class ShaderLib:
    """A library of glsl fragments, and the compiler that uses it.

    One ShaderLib belongs to one render context. All shader instances in that
    context share its fragments, its library-wide defines, and its cache of
    compiled text.

    Parameters
    ----------
    precision: str
        The float precision declared at the top of every compiled shader.
    version: str | None
        If given, a ``#version`` directive is added to shaders that have none.
    defines: dict | None
        Initial library-wide defines.
    middleware: sequence of callables
        Text transforms applied to every walked shader, in order.
    fragments: dict | None
        Extra (possibly nested) fragments to register.
    bundled: bool
        Whether to register the bundled glsl library. Default True.
    """

    def __init__(
        self,
        *,
        precision=DEFAULT_PRECISION,
        version=None,
        defines=None,
        middleware=(),
        fragments=None,
        bundled=True,
        preprocessor=None,
    ):
        self.precision = precision or DEFAULT_PRECISION
        self.version = version
        self.cache = CompiledTextCache()
        if preprocessor is None:
            preprocessor = Preprocessor(FragmentStore(), defines, middleware)
        else:
            preprocessor.define(defines or {})
            for ware in middleware:
                preprocessor.use(ware)
        self.preprocessor = preprocessor
        self.store = preprocessor.store
        if bundled:
            self.store.load(get_loader(), extensions=(".glsl",))
        if fragments:
            self.add(fragments)
        self._store_revision = self.store.revision

    # %% Store

    def add(self, path, source=None):
        """Register a fragment (``add(path, source)``) or a nested mapping of fragments."""
        self.store.add(path, source)
        return self

    def load(self, loader, prefix="", extensions=None):
        """Register the fragments from a jinja2 loader or dict."""
        self.store.load(loader, prefix, extensions)
        return self

    def resolve(self, path, root="./"):
        return self.store.resolve(path, root)

    def get(self, path):
        """Get the compiled text of the fragment at the given path, or None."""
        source = self.store.source(path)
        if source is None:
            return None
        return self.compile(path, source)

    def hash(self, source):
        return hash_source(source)

    # %% Defines and middleware

    @property
    def defines(self):
        """The library-wide DefineTable."""
        return self.preprocessor.defines

    def define(self, name, value=True):
        """Set a library-wide define (or mapping of defines). Returns whether anything changed."""
        return self.preprocessor.define(name, value)

    def undefine(self, name):
        self.preprocessor.undefine(name)
        return self

    def use(self, middleware):
        """Add a text transform to the preprocessor."""
        self.preprocessor.use(middleware)
        return self

    # %% Compiling

    def cache_key(self, name, source, defines=None):
        """Get the key under which the compiled form of source is cached.

        The name only takes part via the directory that relative includes
        resolve against, so the same source under different names shares an
        entry.
        """
        return hash_from_value(
            [
                source,
                root_for(name),
                list(self.preprocessor.active_defines(defines).items()),
                self.store.revision,
                len(self.preprocessor.middleware),
                self.precision,
                self.version,
            ]
        )

    def is_cached(self, source, name=None, defines=None):
        return self.cache_key(name, source, defines) in self.cache

    def compile(self, name, source=None, defines=None):
        """Compile glsl source into its final text.

        Resolves includes and defines, declares the precision, removes blank
        lines, and marks the text with the shader name. Can also be called as
        ``compile(source)``. Returns None for empty source.
        """
        if source is None and name:
            name, source = None, name
        name = name or ANONYMOUS_NAME
        if not source:
            return None

        # Entries for an older store revision can never be hit again
        if self.store.revision != self._store_revision:
            self.cache.clear(stats=False)
            self._store_revision = self.store.revision

        key = self.cache_key(name, source, defines)
        body = self.cache.get(key)
        if body is None:
            body = self._compile_body(name, source, defines)
            self.cache.set(key, body)
            logger.debug(f"Compiled {name!r} ({len(self.cache)} cached).")
        else:
            logger.debug(f"Compiled {name!r} from cache.")

        return self._add_name_marker(name, body)

    def _compile_body(self, name, source, defines):
        source = re_shader_name_guard.sub("", source)
        source = self.preprocessor.process(name, source, defines)
        source = self._inject_precision(source)
        lines = [line for line in source.splitlines() if line.strip()]
        return "\n".join(lines) + "\n"

    def _inject_precision(self, source):
        header = f"precision {self.precision};"
        source = re_precision.sub("", source)
        lines = source.splitlines()
        version_index = None
        for i, line in enumerate(lines):
            if re_version.match(line):
                version_index = i
                break
            elif line.strip():
                break
        if version_index is not None:
            version_line = lines.pop(version_index)
        elif self.version:
            version_line = f"#version {self.version}"
        else:
            version_line = None
        lines.insert(0, header)
        if version_line is not None:
            lines.insert(0, version_line.strip())
        return "\n".join(lines)

    def _add_name_marker(self, name, body):
        lines = body.splitlines(keepends=True)
        index = 2 if lines[0].startswith("#version") else 1
        lines.insert(index, f"// {name}\n")
        return "".join(lines)
