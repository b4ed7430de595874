"""
A small lexical scanner for GLSL. It does not attempt to understand the
language; it only splits the text in pieces that the directive walker
needs to tell apart: preprocessor directives, comments, whitespace, and
everything else.
"""

import re
from collections import namedtuple


Token = namedtuple("Token", ["type", "data", "line"])

PREPROCESSOR = "preprocessor"
BLOCK_COMMENT = "block-comment"
LINE_COMMENT = "line-comment"
WHITESPACE = "whitespace"
IDENT = "ident"
NUMBER = "number"
OTHER = "other"

COMMENT_TYPES = BLOCK_COMMENT, LINE_COMMENT


# A directive is only recognized where a line starts (see tokenize_glsl). It
# runs up to the end of the line or the start of a line comment. Backslash
# continuations and inline block comments are included.
re_directive = re.compile(r"[ \t]*#(?:\\\r?\n|/\*[\s\S]*?\*/|[^\n/]|/(?![/*]))*")

# Order matters: comments must win over the "/" operator.
matchers = {
    BLOCK_COMMENT: r"/\*[\s\S]*?(?:\*/|\Z)",
    LINE_COMMENT: r"//[^\n]*",
    # Whitespace never spans more than one newline, so that each line start
    # is seen by the tokenizer.
    WHITESPACE: r"[ \t\r\f\v]*\n|[ \t\r\f\v]+",
    IDENT: r"[A-Za-z_]\w*",
    NUMBER: r"0[xX][0-9a-fA-F]+[uU]?|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?[uUfFlL]*",
    OTHER: r"[\s\S]",
}

groups = list(matchers)
prog = re.compile("|".join(f"(?P<{g.replace('-', '_')}>{matchers[g]})" for g in groups))


def tokenize_glsl(source, first_line=1):
    """Split GLSL source into ``Token(type, data, line)`` objects.

    The ``line`` is the line number on which the token starts, counting from
    ``first_line``. A ``#`` starts a directive when only whitespace and
    block comments precede it on its line.
    """
    line = first_line
    pos = 0
    end = len(source)
    at_line_start = True
    while pos < end:
        match = re_directive.match(source, pos) if at_line_start else None
        if match is not None:
            token_type = PREPROCESSOR
        else:
            match = prog.match(source, pos)
            token_type = match.lastgroup.replace("_", "-")
        data = match.group()
        yield Token(token_type, data, line)
        line += data.count("\n")
        pos = match.end()
        # Block comments count as whitespace within the line
        if token_type == WHITESPACE:
            at_line_start = at_line_start or data.endswith("\n")
        elif token_type != BLOCK_COMMENT:
            at_line_start = False


def tokens_to_string(tokens):
    """Join tokens back into text."""
    return "".join(token.data for token in tokens)


def directive_of(token):
    """Get the keyword of a preprocessor token, e.g. "define" for ``#define X``."""
    match = re.match(r"\s*#\s*(\w*)", token.data)
    return match.group(1) if match else ""
