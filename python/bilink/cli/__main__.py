import argparse
from typing import Any, List, Optional

from bilink.cli import (
    OUTPUT_FORMATS,
    autodetect_input,
    autodetect_output,
    render,
    reverse_refs,
)


def wrap_render(args: Any) -> None:
    input_params = autodetect_input(args.project_dir, args.include)
    output_dir = autodetect_output(args.output_dir, input_params)
    render(input_params, output_dir, args.format)


def wrap_refs(args: Any) -> None:
    input_params = autodetect_input(args.project_dir, args.include)
    for link in reverse_refs(input_params, args.id, args.name):
        print(link)


def run_cli(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser("bilink.cli")

    subparsers = parser.add_subparsers(required=True)

    render_subcommand = subparsers.add_parser(
        "render",
        help="Resolve the definitions and references of every document in a project and write the rendered documents out.",
    )
    render_subcommand.add_argument(
        "project_dir",
        type=str,
        help="The 'project' directory. Document paths, and thus links between documents, are relative to it.",
    )
    render_subcommand.add_argument(
        "-o",
        "--output-dir",
        type=str,
        required=True,
        help="The folder rendered documents are written to, at the same relative path they had in the project directory.",
    )
    render_subcommand.add_argument(
        "--include",
        type=str,
        nargs="+",
        default=None,
        help="Glob patterns, relative to the project directory, selecting the documents to process. Defaults to every markdown file.",
    )
    render_subcommand.add_argument(
        "--format",
        type=str,
        choices=OUTPUT_FORMATS,
        default="html",
        help="How definitions and references are rendered. 'html' emits anchors and links, 'plain' emits just the names.",
    )
    # If the render subcommand is selected, set `args.func = wrap_render`
    render_subcommand.set_defaults(func=wrap_render)

    refs_subcommand = subparsers.add_parser(
        "refs",
        help="Print the link address of every reference to a definition, one per line, in the order they appear in the corpus.",
    )
    refs_subcommand.add_argument(
        "project_dir",
        type=str,
        help="The 'project' directory. Document paths, and thus links between documents, are relative to it.",
    )
    refs_subcommand.add_argument(
        "--include",
        type=str,
        nargs="+",
        default=None,
        help="Glob patterns, relative to the project directory, selecting the documents to process. Defaults to every markdown file.",
    )
    which_def = refs_subcommand.add_mutually_exclusive_group(required=True)
    which_def.add_argument("--id", type=str, default=None, help="The definition id")
    which_def.add_argument(
        "--name", type=str, default=None, help="The definition name or alias"
    )
    refs_subcommand.set_defaults(func=wrap_refs)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    run_cli()
