"""
Shader sources. A shader slot (vertex or fragment) holds one of:

* ``Literal``: fixed glsl text.
* ``Generated``: a function that produces glsl text from the frame state.
* ``Template``: jinja2-templated glsl, rendered with the frame state.
"""

from .templating import compile_template, apply_templating


class Source:
    """Base class for shader sources."""

    def resolve(self, state):
        """Get the glsl text for the given frame state."""
        raise NotImplementedError()


class Literal(Source):
    """Fixed glsl text."""

    def __init__(self, text):
        if not isinstance(text, str):
            raise TypeError(f"Literal source must be a str, not {text!r}")
        self.text = text

    def __repr__(self):
        return f"<Literal {len(self.text)} chars>"

    def resolve(self, state):
        return self.text


class Generated(Source):
    """Glsl text produced by ``func(state)``.

    The function must not have side effects; it may be called every frame.
    Errors raised by it propagate to the caller.
    """

    def __init__(self, func):
        if not callable(func):
            raise TypeError(f"Generated source needs a callable, not {func!r}")
        self.func = func

    def __repr__(self):
        return f"<Generated by {getattr(self.func, '__name__', self.func)!r}>"

    def resolve(self, state):
        text = self.func(state)
        if not isinstance(text, str):
            raise TypeError(
                f"Shader source function {self.func!r} returned "
                f"{type(text).__name__}, not str."
            )
        return text


class Template(Source):
    """Templated glsl, rendered with the frame state.

    Uses jinja2 with ``{{ }}`` for expressions, ``{$ $}`` for blocks, and
    ``$$`` for line statements. Values in the frame state override the
    template variables given here.
    """

    def __init__(self, text, **template_vars):
        self.text = text
        self.template_vars = template_vars
        self._template = compile_template(text)

    def __repr__(self):
        return f"<Template {len(self.text)} chars>"

    def resolve(self, state):
        template_vars = dict(self.template_vars)
        template_vars.update(state)
        return apply_templating(self._template, **template_vars)


def as_source(value):
    """Get a Source object for the given value (or None)."""
    if value is None or isinstance(value, Source):
        return value
    elif isinstance(value, str):
        return Literal(value)
    elif callable(value):
        return Generated(value)
    else:
        raise TypeError(f"Shader source must be a str or callable, not {value!r}")
