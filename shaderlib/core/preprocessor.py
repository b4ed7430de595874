"""
The directive walker. Resolves ``#include`` directives by splicing in
fragments from the store, normalizes ``#define`` directives, strips comments,
and injects the active defines.

Two include forms are supported:

* ``#include <light/ambient>`` resolves against the root of the store.
* ``#include "./ambient"`` (or ``#include "ambient"``) resolves relative to
  the directory of the including fragment.
"""

import re
import posixpath

from ..utils import logger
from .defines import DefineTable, coerce_define_value
from .errors import (
    IncludeFrame,
    IncludeSyntaxError,
    IncludeNotFoundError,
    CyclicIncludeError,
)
from .tokenizer import (
    tokenize_glsl,
    tokens_to_string,
    directive_of,
    COMMENT_TYPES,
    PREPROCESSOR,
)


ANONYMOUS_NAME = "<anonymous>"

# Marker line left behind by glslify-style tooling
GLSLIFY_MARKER = "#define GLSLIFY 1\n"

re_define = re.compile(r"(\s*#\s*define\s+)(\w+(?:\([^)]*\))?)(.*)", re.DOTALL)
re_include = re.compile(r"\s*#\s*include\s*(.*)", re.DOTALL)
re_inline_comment = re.compile(r"/\*[\s\S]*?\*/")
re_header_directive = re.compile(r"\s*#\s*(version|extension)\b")


def root_for(name):
    """Get the directory that relative includes in the named file resolve against."""
    if not name or name == ANONYMOUS_NAME:
        return "/"
    return posixpath.dirname(name) or "/"


def strip_inline_comments(data):
    """Replace the block comments in a directive with a space."""
    return re_inline_comment.sub(" ", data).rstrip(" \t")


def normalize_define(data):
    """Rewrite ``#define NAME`` (no value) to ``#define NAME 1``."""
    data = strip_inline_comments(data)
    match = re_define.match(data)
    if match and not match.group(3).strip():
        return match.group(1) + match.group(2) + " 1"
    return data


def inject_defines(source, defines):
    """Insert ``#define`` lines for the given defines, below any leading
    ``#version`` and ``#extension`` directives.
    """
    if not defines:
        return source
    prologue = DefineTable(defines).to_prologue()
    lines = source.splitlines(keepends=True)
    index = 0
    for i, line in enumerate(lines):
        if re_header_directive.match(line):
            index = i + 1
        elif line.strip():
            break
    lines.insert(index, prologue)
    return "".join(lines)


class Preprocessor:
    """Walks glsl source, splicing in includes from a fragment store.

    Holds the library-wide define table and the ordered list of text
    transform middleware.
    """

    def __init__(self, store, defines=None, middleware=()):
        self.store = store
        self.defines = DefineTable(defines)
        self.middleware = []
        for ware in middleware:
            self.use(ware)
        # Instrumentation: the number of completed directive walks
        self.walk_count = 0

    def define(self, name, value=True):
        """Set a library-wide define (or a mapping of defines). Returns whether anything changed."""
        return self.defines.define(name, value)

    def undefine(self, name):
        self.defines.undefine(name)
        return self

    def use(self, middleware):
        """Add a text transform, applied (in registration order) to the
        result of every walk. It receives the text and must return new text,
        or None to leave the text unchanged.
        """
        if not callable(middleware):
            raise TypeError(f"Middleware must be callable, not {middleware!r}")
        self.middleware.append(middleware)
        return self

    def active_defines(self, defines=None):
        """Get the library defines, shadowed by the given defines, as a dict."""
        active = self.defines.as_dict()
        if defines:
            for key, value in defines.items():
                value = coerce_define_value(value)
                if value is not None:
                    active[key] = value
        return active

    def process(self, name, source, defines=None):
        """Resolve includes and defines in the given source.

        Raises IncludeSyntaxError, IncludeNotFoundError or CyclicIncludeError
        when an include cannot be resolved.
        """
        name = name or ANONYMOUS_NAME
        tokens = []
        include_stack = []
        # Only count the name as an ancestor when it really is that fragment
        active = {name} if self.store.source(name) == source else set()
        self._visit(
            f"\n{source}\n", name, root_for(name), tokens, include_stack, active
        )
        text = tokens_to_string(tokens)

        text = inject_defines(text, self.active_defines(defines))
        for ware in self.middleware:
            result = ware(text)
            if result is not None:
                text = result
        text = text.replace(GLSLIFY_MARKER, "")

        self.walk_count += 1
        return text

    def _visit(self, source, file, root, tokens, include_stack, active):
        # The padding newline at the start means the source starts on line 1
        for token in tokenize_glsl(source, first_line=0):
            if token.type in COMMENT_TYPES:
                continue
            elif token.type != PREPROCESSOR:
                tokens.append(token)
                continue

            # Comments never reach the output, also not inside a directive
            token = token._replace(data=strip_inline_comments(token.data))
            directive = directive_of(token)
            if directive == "define":
                tokens.append(token._replace(data=normalize_define(token.data)))
            elif directive == "include":
                frame = IncludeFrame(file, token.line)
                path = self._resolve_include(token, root, [frame] + include_stack)
                fragment = self.store.source(path)
                if fragment is None:
                    raise IncludeNotFoundError(
                        f"glsl lib {path!r} not found.", path, [frame] + include_stack
                    )
                if path in active:
                    raise CyclicIncludeError(
                        f"glsl lib {path!r} includes itself.",
                        path,
                        [frame] + include_stack,
                    )
                logger.debug(f"Including {path!r} in {file!r}.")
                include_stack.insert(0, frame)
                active.add(path)
                try:
                    self._visit(
                        f"\n{fragment}\n",
                        path,
                        root_for(path),
                        tokens,
                        include_stack,
                        active,
                    )
                finally:
                    include_stack.pop(0)
                    active.discard(path)
            else:
                tokens.append(token)

    def _resolve_include(self, token, root, trace):
        arg = (re_include.match(token.data).group(1) or "").strip()
        if not arg:
            raise IncludeSyntaxError(
                "Unexpected end of #include. Expecting '<' or '\"'.", arg, trace
            )

        left, right = arg[0], arg[-1]
        if left not in ("<", '"'):
            msg = f"Unexpected token '{left}'. Expecting '<' or '\"'."
            raise IncludeSyntaxError(msg, left, trace)
        expected = ">" if left == "<" else '"'
        if len(arg) < 2:
            msg = f"Unexpected end of #include. Expecting '{expected}'."
            raise IncludeSyntaxError(msg, arg, trace)
        if right != expected:
            msg = f"Unexpected token '{right}'. Expecting '{expected}'."
            raise IncludeSyntaxError(msg, right, trace)

        path = arg[1:-1].strip()
        if not path:
            raise IncludeSyntaxError("Empty #include path.", arg, trace)

        if left == "<":
            return self.store.resolve(path, "/")
        if not path.startswith("."):
            path = "./" + path
        return self.store.resolve(path, root)
