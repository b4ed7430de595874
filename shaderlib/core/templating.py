import jinja2


jinja_env = jinja2.Environment(
    block_start_string="{$",
    block_end_string="$}",
    variable_start_string="{{",
    variable_end_string="}}",
    line_statement_prefix="$$",
    undefined=jinja2.StrictUndefined,
)


def as_loader(loader):
    """Get a jinja2 loader for the given fragment source.

    Parameters
    ----------
    loader: jinja2.BaseLoader | dict
        A loader that can list its templates, or a dict mapping names to source.
    """
    if isinstance(loader, jinja2.BaseLoader):
        return loader
    elif isinstance(loader, dict):
        return jinja2.DictLoader(loader)
    else:
        raise TypeError(
            f"The given glsl loader must be a jinja2.BaseLoader or dict. Not {loader!r}"
        )


def compile_template(code):
    """Compile templated glsl into a jinja2 template object."""
    return jinja_env.from_string(code)


def apply_templating(template, **kwargs):
    if isinstance(template, str):
        template = compile_template(template)
    try:
        return template.render(**kwargs)
    except jinja2.UndefinedError as err:
        raise ValueError(f"Cannot compose shader: {err.args[0]}") from None
