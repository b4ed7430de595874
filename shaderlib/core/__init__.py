"""
This subpackage implements the shader module system: a store of named glsl
fragments, a preprocessor that splices includes and normalizes defines, a
cache of compiled text, and the per-draw-call shader instance that decides
when to recompile.


## A note about includes

Fragments are addressed by slash-delimited paths without extension. An
``#include <path>`` resolves against the root of the store, while
``#include "./path"`` resolves relative to the including fragment. Fragments
are spliced in as text, every time they are included; there are no include
guards, but a fragment that includes itself raises CyclicIncludeError.
"""

from .cache import CompiledTextCache  # noqa
from .context import RenderContext, CommandLayer, NullCommandLayer, Program  # noqa
from .defines import DefineTable  # noqa
from .errors import (  # noqa
    ShaderError,
    IncludeSyntaxError,
    IncludeNotFoundError,
    CyclicIncludeError,
    IncludeFrame,
)
from .hashing import hash_source, hash_from_value  # noqa
from .lib import ShaderLib, DEFAULT_PRECISION  # noqa
from .preprocessor import Preprocessor, ANONYMOUS_NAME  # noqa
from .shader import ShaderInstance  # noqa
from .source import Source, Literal, Generated, Template, as_source  # noqa
from .store import FragmentStore  # noqa
from .tokenizer import Token, tokenize_glsl, tokens_to_string  # noqa
