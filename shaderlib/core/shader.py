"""
The shader instance: the per-draw-call owner of a vertex/fragment source
pair and its compiled program.

Every frame, ``update()`` decides whether the program must be recompiled.
That happens when:

* the frame state has ``force_compile`` set;
* the instance defines (merged with the upstream defines from the frame
  state) or the library-wide defines changed;
* a slot has a source, but nothing was compiled for it yet;
* the text that a slot's source resolves to differs from the text that the
  current program was built from, and is not in the instance's memo of
  earlier compiles.

Otherwise the instance keeps its program, at the cost of resolving the
sources and comparing the text.
"""

import sys

from ..utils import logger, env_flag, print_numbered
from .defines import DefineTable
from .errors import ShaderError
from .hashing import hash_source, hash_from_value
from .preprocessor import ANONYMOUS_NAME
from .source import as_source


PRINT_SOURCE_ON_ERROR = env_flag("SHADERLIB_PRINT_SOURCE_ON_ERROR")

SLOTS = "vertex", "fragment"

# The number of earlier compiles (and programs) an instance keeps around
MEMO_SIZE = 16


def remember(memo, key, value):
    """Store a value in a memo dict, dropping the oldest entry when it is full."""
    if key not in memo and len(memo) >= MEMO_SIZE:
        memo.pop(next(iter(memo)))
    memo[key] = value


class ShaderInstance:
    """A vertex/fragment shader pair, compiled on demand.

    Parameters
    ----------
    context: RenderContext
        The context that provides the ShaderLib and the command layer.
    vertex: str | callable | Source | None
        The vertex shader source.
    fragment: str | callable | Source | None
        The fragment shader source.
    defines: dict | None
        Defines for this instance. These shadow the library-wide defines.
    name: str
        The name of the shader, used in diagnostics and to resolve relative includes.
    """

    def __init__(
        self, context, vertex=None, fragment=None, *, defines=None, name=None
    ):
        self._context = context
        self._lib = context.lib
        self._name = name or ANONYMOUS_NAME
        self._sources = {"vertex": as_source(vertex), "fragment": as_source(fragment)}
        self._defines = DefineTable(defines)

        # The text that the current program was built from, and the result
        self._resolved = {"vertex": None, "fragment": None}
        self._compiled = {"vertex": None, "fragment": None}

        # (slot, hash of resolved text) -> compiled text. Cleared when the defines
        # or the fragment store change.
        self._memo = {}
        self._store_revision = None

        # Pair hash -> program, so an identical pair is registered only once
        self._programs = {}
        self._program = None

        # The define revisions that the current program was compiled with
        self._defines_revision = None
        self._lib_defines_revision = None

        self.compile_count = 0

    def __repr__(self):
        return f"<ShaderInstance {self._name!r} at {hex(id(self))}>"

    @property
    def name(self):
        return self._name

    @property
    def defines(self):
        """The DefineTable of this instance."""
        return self._defines

    @property
    def compiled_vertex(self):
        """The compiled vertex shader text, or None."""
        return self._compiled["vertex"]

    @property
    def compiled_fragment(self):
        """The compiled fragment shader text, or None."""
        return self._compiled["fragment"]

    @property
    def program(self):
        """The program registered with the command layer, or None."""
        return self._program

    @property
    def is_compiled(self):
        """Whether the instance has a program for its current sources."""
        return self._program is not None

    def update(self, state, block):
        """Bring the program up-to-date for this frame, then call ``block(state)``.

        The state passed to ``block`` is the given state, with the fields
        ``vertex_shader``, ``fragment_shader``, ``defines`` and ``program``
        set.
        """
        state = dict(state or {})

        changed = set()
        if state.get("force_compile", False):
            changed.add("force")

        upstream_defines = state.get("defines", None)
        if upstream_defines:
            self._defines.define(upstream_defines)
        if self._defines_revision is None:
            changed.add("create")
        elif (
            self._defines.revision != self._defines_revision
            or self._lib.defines.revision != self._lib_defines_revision
        ):
            changed.add("defines")

        # Resolve the sources once per frame. Errors leave the state untouched.
        texts = {}
        for slot in SLOTS:
            source = self._sources[slot]
            if source is not None:
                texts[slot] = source.resolve(state)

        if changed:
            self._compile(texts, changed)
        else:
            self._check_sources(texts)

        new_state = dict(state)
        new_state["vertex_shader"] = self._compiled["vertex"]
        new_state["fragment_shader"] = self._compiled["fragment"]
        new_state["defines"] = self._lib.preprocessor.active_defines(self._defines)
        new_state["program"] = self._program
        block(new_state)

    def _check_sources(self, texts):
        stale = {}
        memo_hits = {}
        if self._lib.store.revision != self._store_revision:
            self._memo.clear()
        for slot, text in texts.items():
            key = slot, hash_source(text)
            if self._resolved[slot] is None:
                stale[slot] = "create"
            elif text != self._resolved[slot]:
                if key in self._memo:
                    memo_hits[slot] = self._memo[key]
                else:
                    stale[slot] = "source"

        if stale:
            self._compile(texts, set(stale.values()))
        elif memo_hits:
            for slot, compiled in memo_hits.items():
                self._resolved[slot] = texts[slot]
                self._compiled[slot] = compiled
            self._update_program()
            slots = ", ".join(sorted(memo_hits))
            logger.debug(f"{self} swapped to memoized {slots}.")

    def _compile(self, texts, reasons):
        lib = self._lib
        defines_revision = self._defines.revision
        lib_defines_revision = lib.defines.revision
        defines_changed = (
            defines_revision != self._defines_revision
            or lib_defines_revision != self._lib_defines_revision
        )

        if not texts:
            self._defines_revision = defines_revision
            self._lib_defines_revision = lib_defines_revision
            return

        # Compile all slots before committing anything
        compiled = {}
        for slot, text in texts.items():
            try:
                name = f"{self._name} ({slot})"
                compiled[slot] = lib.compile(name, text, self._defines)
            except ShaderError:
                if PRINT_SOURCE_ON_ERROR:
                    print_numbered(text, sys.stderr)
                raise

        if defines_changed or lib.store.revision != self._store_revision:
            self._memo.clear()
        for slot, text in texts.items():
            self._resolved[slot] = text
            self._compiled[slot] = compiled[slot]
            remember(self._memo, (slot, hash_source(text)), compiled[slot])
        self._store_revision = lib.store.revision
        self._defines_revision = defines_revision
        self._lib_defines_revision = lib_defines_revision
        self.compile_count += 1

        self._update_program()
        logger.info(f"{self} shader update: {', '.join(sorted(reasons))}.")

    def _update_program(self):
        vertex, fragment = self._compiled["vertex"], self._compiled["fragment"]
        if vertex is None and fragment is None:
            return
        key = hash_from_value([vertex, fragment])
        program = self._programs.get(key, None)
        if program is None:
            program = self._context.commands.create_program(vertex, fragment)
            remember(self._programs, key, program)
        self._program = program
