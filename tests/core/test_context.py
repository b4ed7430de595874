from pytest import raises

from shaderlib import (
    RenderContext,
    CommandLayer,
    NullCommandLayer,
    ShaderInstance,
    ShaderLib,
)


def test_context_defaults():
    ctx = RenderContext()
    assert isinstance(ctx.commands, NullCommandLayer)
    assert isinstance(ctx.lib, ShaderLib)
    assert "light/lambert" in ctx.lib.store


def test_context_lib_options():
    ctx = RenderContext(bundled=False, precision="highp float", defines={"A": 1})
    assert len(ctx.lib.store) == 0
    assert ctx.lib.compile("x", "main").startswith("precision highp float;\n")
    assert "A" in ctx.lib.defines


def test_contexts_are_independent():
    ctx1 = RenderContext(bundled=False)
    ctx2 = RenderContext(bundled=False)
    ctx1.lib.add("foo", "foo_body")
    assert "foo" in ctx1.lib.store
    assert "foo" not in ctx2.lib.store


def test_custom_command_layer():
    class RecordingLayer(CommandLayer):
        def __init__(self):
            self.calls = 0

        def create_program(self, vertex, fragment):
            self.calls += 1
            return ("program", self.calls)

    layer = RecordingLayer()
    ctx = RenderContext(layer, bundled=False)
    inst = ctx.shader("void main() {}", "void main() {}")
    assert isinstance(inst, ShaderInstance)

    inst.update({}, lambda state: None)
    assert inst.program == ("program", 1)
    assert layer.calls == 1


def test_invalid_command_layer():
    with raises(TypeError):
        RenderContext(object())
    with raises(NotImplementedError):
        CommandLayer().create_program("a", "b")
