from pytest import raises

from shaderlib import Source, Literal, Generated, Template, as_source


def test_literal():
    source = Literal("void main() {}")
    assert source.resolve({}) == "void main() {}"
    assert source.resolve({"foo": 1}) == "void main() {}"
    with raises(TypeError):
        Literal(42)


def test_generated():
    source = Generated(lambda state: f"// {state['mode']}")
    assert source.resolve({"mode": "a"}) == "// a"
    assert source.resolve({"mode": "b"}) == "// b"

    with raises(TypeError):
        Generated("not callable")

    with raises(TypeError):
        Generated(lambda state: None).resolve({})

    def fail(state):
        raise ValueError("oops")

    with raises(ValueError):
        Generated(fail).resolve({})


def test_template():
    source = Template("vec4 color = vec4({{ r }}, 0.0, 0.0, 1.0);", r=1.0)
    assert source.resolve({}) == "vec4 color = vec4(1.0, 0.0, 0.0, 1.0);"
    # The frame state overrides the template vars
    assert source.resolve({"r": 0.5}) == "vec4 color = vec4(0.5, 0.0, 0.0, 1.0);"

    source = Template("$$ if use_fog\nfog_body\n$$ else\nplain_body\n$$ endif\n")
    text = source.resolve({"use_fog": True})
    assert "fog_body" in text and "plain_body" not in text
    text = source.resolve({"use_fog": False})
    assert "plain_body" in text and "fog_body" not in text

    with raises(ValueError) as err:
        Template("{{ missing }}").resolve({})
    assert "Cannot compose shader" in str(err.value)


def test_as_source():
    assert as_source(None) is None
    assert isinstance(as_source("main"), Literal)
    assert isinstance(as_source(lambda state: "main"), Generated)

    source = Template("main")
    assert as_source(source) is source

    with raises(TypeError):
        as_source(42)

    with raises(NotImplementedError):
        Source().resolve({})
