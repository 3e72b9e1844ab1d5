import re
import unicodedata

from bilink.model import Reference

# Anything that isn't a letter, digit, underscore or hyphen in any script
_SLUG_SEPARATORS = re.compile(r"[^\w-]+")


def slugify(name: str) -> str:
    """Create a slug suitable for anchors from `name`.

    Letters from any script are kept, so `slugify("数据")` is `"数据"`,
    whereas `slugify("Hello, World!")` is `"hello-world"`."""
    normalized = unicodedata.normalize("NFKC", name).lower()
    return _SLUG_SEPARATORS.sub("-", normalized).strip("-")


def default_ref_id(ref: Reference) -> str:
    """`<definition id>-ref-<n>` where n counts from 1"""
    return f"{ref.definition.id}-ref-{ref.index + 1}"
