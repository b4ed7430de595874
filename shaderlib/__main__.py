"""A very tiny CLI.

Invoke using e.g. ``python -m shaderlib version`` or
``python -m shaderlib compile myshader.frag -D USE_FOG``.
"""

import os
import sys
import argparse

import jinja2

import shaderlib


def parse_define(text):
    """Parse "NAME" or "NAME=VALUE" into a (name, value) tuple."""
    name, sep, value = text.partition("=")
    return name.strip(), (value if sep else True)


def main(argv=None):
    # Get argv so we can massage it
    if argv is None:
        argv = sys.argv[1:]

    # Defaults and aliases
    if not argv:
        argv = ["help"]
    if argv == ["--version"]:
        argv = ["version"]

    # Let the rest to argparse

    parser = argparse.ArgumentParser(
        prog="shaderlib",
        description="The (very basic) shaderlib CLI",
    )

    parser.add_argument(
        "command",
        action="store",
        help="The command to run: 'help', 'version', 'list' or 'compile'",
    )
    parser.add_argument("file", nargs="?", help="The glsl file to compile")
    parser.add_argument("--name", default=None, help="The shader name")
    parser.add_argument(
        "-D",
        "--define",
        action="append",
        default=[],
        metavar="NAME[=VALUE]",
        help="Add a define (can be repeated)",
    )
    parser.add_argument(
        "-I",
        "--include-dir",
        action="append",
        default=[],
        help="A directory with extra glsl fragments (can be repeated)",
    )
    parser.add_argument(
        "--precision",
        default=shaderlib.DEFAULT_PRECISION,
        help="The float precision to declare",
    )

    args = parser.parse_args(argv)
    command = args.command.lower()

    if command == "help":
        parser.print_help()
    elif command == "version":
        print("shaderlib v" + shaderlib.__version__)
    elif command == "list":
        lib = shaderlib.ShaderLib()
        for path in lib.store.paths():
            print(path)
    elif command == "compile":
        return compile_file(args)
    else:
        print(f"Invalid command '{command}'")
        return 2
    return 0


def compile_file(args):
    if not args.file:
        print("The compile command needs a file.", file=sys.stderr)
        return 2

    lib = shaderlib.ShaderLib(precision=args.precision)
    for dirname in args.include_dir:
        lib.load(jinja2.FileSystemLoader(dirname), extensions=(".glsl",))
    lib.define(dict(parse_define(d) for d in args.define))

    with open(args.file, "rb") as f:
        source = f.read().decode()
    name = args.name or os.path.basename(args.file)

    try:
        text = lib.compile(name, source)
    except shaderlib.ShaderError as err:
        print(err, file=sys.stderr)
        return 1
    sys.stdout.write(text or "")
    return 0


if __name__ == "__main__":
    sys.exit(main())
