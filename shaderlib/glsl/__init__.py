"""
This directory contains the glsl fragments of the bundled library. They are
registered in every ShaderLib (unless ``bundled=False``), under their path
relative to this directory without the ``.glsl`` extension. E.g.
``light/lambert.glsl`` can be included with ``#include <light/lambert>``.
"""

import jinja2


def get_loader():
    """Get a jinja2 loader for the bundled glsl fragments."""
    return jinja2.PackageLoader("shaderlib.glsl", ".")
