"""Path helpers shared by the parsers and the search service."""

import os

SEPARATOR = "/"


def relative_path(file_path: str, base_path: str) -> str:
    """
    Make ``file_path`` relative to ``base_path``.

    Rules:
    - a trailing separator on the base is ignored
    - the base itself (with or without trailing separator) becomes ``""``
    - a path under the base loses the ``<base>/`` prefix
    - anything else is returned unchanged, including sibling directories that
      merely share a textual prefix (``/a/bc/x`` against ``/a/b``)

    Examples:
        >>> relative_path("/a/b/c.md", "/a/b")
        'c.md'
        >>> relative_path("/a/bc/x", "/a/b")
        '/a/bc/x'
    """
    base = base_path
    if len(base) > 1 and base.endswith(SEPARATOR):
        base = base[:-1]

    if file_path == base or file_path == base + SEPARATOR:
        return ""

    prefix = base if base.endswith(SEPARATOR) else base + SEPARATOR
    if file_path.startswith(prefix):
        return file_path[len(prefix):]
    return file_path


def expand_tilde(file_path: str) -> str:
    """Expand a leading ``~`` or ``~/`` to ``$HOME``. ``~user`` is left alone."""
    home = os.environ.get("HOME", "")
    if file_path == "~":
        return home
    if file_path.startswith("~/"):
        return home + file_path[1:]
    return file_path
