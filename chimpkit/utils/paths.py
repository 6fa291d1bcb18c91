"""URL path joining helpers."""

from __future__ import annotations


def single_joining_slash(base: str, path: str) -> str:
    """Join two url parts with exactly one slash between them."""
    base_slash = base.endswith("/")
    path_slash = path.startswith("/")
    if base_slash and path_slash:
        return base + path[1:]
    if not base_slash and not path_slash:
        return base + "/" + path
    return base + path


def slash_join(*components: str | int) -> str:
    """Join path components with single slashes.

    ``slash_join("/hello", "world", "how/", "/you/", "doing/")`` gives
    ``"hello/world/how/you/doing"``: one leading and one trailing slash is
    removed from every component.
    """
    cleaned: list[str] = []
    for component in components:
        text = str(component)
        if text.startswith("/"):
            text = text[1:]
        if text.endswith("/"):
            text = text[:-1]
        cleaned.append(text)
    return "/".join(cleaned)
