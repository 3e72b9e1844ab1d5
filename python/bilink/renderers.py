"""Ready-made renderer callbacks.

The engine never decides what the output looks like - these are the renderers the CLI uses,
and a reasonable starting point for anything else.
"""

import html
import posixpath

from bilink.ids import default_ref_id
from bilink.model import Definition, RefIdGenerator, Reference


def html_def_renderer(d: Definition) -> str:
    return f'<span id="{html.escape(d.id)}">{html.escape(d.name)}</span>'


def plain_def_renderer(d: Definition) -> str:
    return d.name


def plain_ref_renderer(ref: Reference) -> str:
    return ref.name


def relative_href(ref: Reference) -> str:
    """The link from the document containing `ref` to its definition.

    Within a document this is just `#id`, otherwise it is the definition's path relative to the directory of the referencing document."""
    d = ref.definition
    if d.path == ref.path:
        return f"#{d.id}"
    rel = posixpath.relpath(d.path, posixpath.dirname(ref.path) or ".")
    return f"{rel}#{d.id}"


class HtmlRefRenderer:
    """Renders a reference as a link to its definition, wrapped in a span that a reverse link can target.

    The span id comes from the same RefIdGenerator the BiDoc uses, so `BiDoc.get_reverse_refs()` links land on it."""

    ref_id_generator: RefIdGenerator

    def __init__(self, ref_id_generator: RefIdGenerator = default_ref_id) -> None:
        self.ref_id_generator = ref_id_generator

    def __call__(self, ref: Reference) -> str:
        ref_id = html.escape(self.ref_id_generator(ref))
        href = html.escape(relative_href(ref))
        return f'<span id="{ref_id}"><a href="{href}">{html.escape(ref.name)}</a></span>'
