import pathlib
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from bilink.corpus import DEFAULT_PATTERNS, Corpus, discover_documents, write_documents
from bilink.model import DefRenderer, RefRenderer
from bilink.renderers import (
    HtmlRefRenderer,
    html_def_renderer,
    plain_def_renderer,
    plain_ref_renderer,
)

OUTPUT_FORMATS = ("html", "plain")


@dataclass
class InputParams:
    project_dir: pathlib.Path
    patterns: Tuple[str, ...]


def autodetect_input(project_dir_arg: str, include_args: Optional[List[str]]) -> InputParams:
    """
    Given the required [project_dir] argument and the optional [--include] globs,
    determine the directory all documents are relative to and which documents to process.

    If [--include] is not supplied, every markdown file under [project_dir] is processed.
    """
    project_dir = pathlib.Path(project_dir_arg)
    if not project_dir.is_dir():
        raise ValueError(
            f"Project directory '{project_dir}' either doesn't exist or isn't a directory"
        )
    if include_args:
        patterns = tuple(include_args)
        print(f"Processing files in {project_dir} matching {list(patterns)}")
    else:
        patterns = DEFAULT_PATTERNS
        print(f"Processing files in {project_dir} matching the default {list(patterns)}")
    return InputParams(project_dir, patterns)


def autodetect_output(output_arg: str, input_params: InputParams) -> pathlib.Path:
    """
    Given a --output-dir argument, make sure it is a directory (creating it if necessary)
    and that it isn't inside the project directory.
    The project directory would have its inputs overwritten,
    and a subdirectory would have its outputs picked up as inputs on the next run.
    """
    output_dir = pathlib.Path(output_arg)
    if output_dir.exists() and not output_dir.is_dir():
        raise ValueError(
            f"Output directory {output_dir} exists but isn't a directory. Please make it a folder."
        )
    project_dir = input_params.project_dir.resolve()
    resolved_output_dir = output_dir.resolve()
    if resolved_output_dir == project_dir:
        raise ValueError(
            f"Output directory {output_dir} is the project directory, rendering would overwrite the inputs."
        )
    if project_dir in resolved_output_dir.parents:
        raise ValueError(
            f"Output directory {output_dir} is inside the project directory {input_params.project_dir}, "
            "rendered documents would be read as inputs next time."
        )
    if not output_dir.exists():
        print(f"Output directory {output_dir} does not exist, auto creating...")
        output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def renderers_for_format(requested_format: str) -> Tuple[DefRenderer, RefRenderer]:
    if requested_format == "html":
        return html_def_renderer, HtmlRefRenderer()
    if requested_format == "plain":
        return plain_def_renderer, plain_ref_renderer
    raise NotImplementedError(
        f"No renderers for format '{requested_format}', expected one of {OUTPUT_FORMATS}"
    )


def load_corpus(input: InputParams) -> Corpus:
    documents = discover_documents(input.project_dir, input.patterns)
    print(f"Found {len(documents)} documents")
    corpus = Corpus(documents)
    corpus.collect()
    print(f"Collected {len(corpus.bidoc.registry)} definitions")
    return corpus


def render(
    input: InputParams, output_dir: pathlib.Path, requested_format: str
) -> Dict[str, str]:
    def_renderer, ref_renderer = renderers_for_format(requested_format)
    corpus = load_corpus(input)
    rendered = corpus.render(def_renderer, ref_renderer)
    for out_path in write_documents(output_dir, rendered):
        print(f"Wrote {out_path}")
    return rendered


def reverse_refs(
    input: InputParams, id: Optional[str], name: Optional[str]
) -> Sequence[str]:
    # References are only recorded while rendering, so the corpus is rendered and the output discarded
    corpus = load_corpus(input)
    corpus.render(plain_def_renderer, plain_ref_renderer)
    return corpus.reverse_refs(id=id, name=name)
