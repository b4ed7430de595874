"""
Errors raised when composing shader source.
"""

from collections import namedtuple


IncludeFrame = namedtuple("IncludeFrame", ["path", "line"])


def format_include_stack(include_stack):
    """Format an include stack (innermost frame first) as trace lines."""
    return "".join(f"\n\tat (glsl) {path}:{line}" for path, line in include_stack)


class ShaderError(RuntimeError):
    """Base class for errors raised while compiling shader source."""

    def __init__(self, msg, include_stack=()):
        self.include_stack = tuple(include_stack)
        super().__init__(msg + format_include_stack(self.include_stack))


class IncludeSyntaxError(ShaderError, SyntaxError):
    """An include directive with malformed delimiters."""

    def __init__(self, msg, token, include_stack=()):
        self.token = token
        ShaderError.__init__(self, msg, include_stack)
        # SyntaxError formats itself from msg
        self.msg = self.args[0]

    def __str__(self):
        return self.args[0]


class IncludeNotFoundError(ShaderError, LookupError):
    """An include directive referring to a fragment that does not exist."""

    def __init__(self, msg, path, include_stack=()):
        self.path = path
        ShaderError.__init__(self, msg, include_stack)


class CyclicIncludeError(ShaderError):
    """A fragment that (directly or indirectly) includes itself."""

    def __init__(self, msg, path, include_stack=()):
        self.path = path
        ShaderError.__init__(self, msg, include_stack)
