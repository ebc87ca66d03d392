# src/autogypi/references.py
"""Classification of dependency references.

A dependency reference is either a package name handed to the resolver
(``nan``, ``@scope/pkg``) or a path joined onto the directory of the
configuration that declared it (``./vendor/foo``, ``../lib``).
"""

from enum import Enum


SCOPE_MARKER = "@"
PATH_SEPARATORS = ("/", "\\")


class ReferenceKind(Enum):
    NAME = "name"
    PATH = "path"


def classify_reference(reference: str) -> ReferenceKind:
    """Return whether `reference` is name-like or path-like.

    Scoped names (starting with "@") are always name-like, even though they
    contain a separator. Otherwise any separator makes the reference a path.
    """
    if reference.startswith(SCOPE_MARKER):
        return ReferenceKind.NAME
    if any(sep in reference for sep in PATH_SEPARATORS):
        return ReferenceKind.PATH
    return ReferenceKind.NAME


def is_name_reference(reference: str) -> bool:
    return classify_reference(reference) is ReferenceKind.NAME
