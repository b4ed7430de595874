from shaderlib.core.tokenizer import (
    Token,
    tokenize_glsl,
    tokens_to_string,
    directive_of,
)


def of_type(source, type):
    return [t.data for t in tokenize_glsl(source) if t.type == type]


def test_tokens_join_back_to_source():
    source = "#define X 1\n/* block */ float x = 1.0; // line\n  #include <a>\n"
    assert tokens_to_string(tokenize_glsl(source)) == source


def test_directives_only_at_line_start():
    source = "  #include <a>\nfloat y; # not\n"
    assert of_type(source, "preprocessor") == ["  #include <a>"]
    assert "#" in of_type(source, "other")


def test_directive_stops_at_line_comment():
    source = "#define A 1 // note\n"
    assert of_type(source, "preprocessor") == ["#define A 1 "]
    assert of_type(source, "line-comment") == ["// note"]


def test_directive_keeps_inline_block_comment():
    source = "#define B /* c */ 2\nx"
    assert of_type(source, "preprocessor") == ["#define B /* c */ 2"]
    assert of_type(source, "block-comment") == []


def test_directive_line_continuation():
    source = "#define LONG 1 + \\\n  2\nx"
    assert of_type(source, "preprocessor") == ["#define LONG 1 + \\\n  2"]
    assert of_type(source, "ident") == ["x"]


def test_comments():
    source = "a /* one\ntwo */ b // three\nc"
    assert of_type(source, "block-comment") == ["/* one\ntwo */"]
    assert of_type(source, "line-comment") == ["// three"]
    assert of_type(source, "ident") == ["a", "b", "c"]

    # An unterminated block comment runs to the end
    assert of_type("a /* b", "block-comment") == ["/* b"]


def test_numbers_and_idents():
    assert of_type("vec3 v = vec3(1.5e3f, .5, 0xFFu);", "number") == [
        "1.5e3f",
        ".5",
        "0xFFu",
    ]
    assert of_type("vec3 v;", "ident") == ["vec3", "v"]


def test_line_numbers():
    tokens = list(tokenize_glsl("a\nb\n/* x\n*/\n#y"))
    lines = {t.data: t.line for t in tokens if t.type != "whitespace"}
    assert lines == {"a": 1, "b": 2, "/* x\n*/": 3, "#y": 5}

    tokens = list(tokenize_glsl("\na", first_line=0))
    assert tokens[-1] == Token("ident", "a", 1)


def test_directive_of():
    assert directive_of(Token("preprocessor", "#define X", 1)) == "define"
    assert directive_of(Token("preprocessor", "  # include <a>", 1)) == "include"
    assert directive_of(Token("preprocessor", "#", 1)) == ""


def test_directive_after_block_comment():
    source = "/* c */ #include <a>\nx /* d */ #define B\n/* e\n*/ #define C\n"
    assert of_type(source, "preprocessor") == [" #include <a>", " #define C"]
    assert of_type(source, "block-comment") == ["/* c */", "/* d */", "/* e\n*/"]
