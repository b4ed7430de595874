"""
The render context owns the ShaderLib (and thereby the fragment store and the
compiled-text cache) and the command layer that turns compiled text into
programs on the GPU. Nothing is global: components that need the library get
it from the context.
"""

from collections import namedtuple

from .lib import ShaderLib
from .shader import ShaderInstance


Program = namedtuple("Program", ["vertex", "fragment"])


class CommandLayer:
    """Define what the command layer must look like from the pov of a shader instance."""

    def create_program(self, vertex, fragment):
        """Create a program from the compiled vertex and fragment text.
        Either of these can be None. Returns an opaque program object.
        """
        raise NotImplementedError()


class NullCommandLayer(CommandLayer):
    """A command layer that does not talk to a GPU. Programs are plain records."""

    def __init__(self):
        self.programs = []

    def create_program(self, vertex, fragment):
        program = Program(vertex, fragment)
        self.programs.append(program)
        return program


class RenderContext:
    """The context in which shaders are compiled and drawn.

    Parameters
    ----------
    commands: CommandLayer | None
        The command layer. Default ``NullCommandLayer()``.
    lib_options:
        Keyword arguments for the ShaderLib.
    """

    def __init__(self, commands=None, **lib_options):
        if commands is None:
            commands = NullCommandLayer()
        elif not callable(getattr(commands, "create_program", None)):
            raise TypeError("The command layer must have a create_program() method.")
        self.commands = commands
        self.lib = ShaderLib(**lib_options)

    def shader(self, vertex=None, fragment=None, **kwargs):
        """Create a ShaderInstance in this context."""
        return ShaderInstance(self, vertex, fragment, **kwargs)
