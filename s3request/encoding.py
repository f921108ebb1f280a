"""Percent-encoding helpers for S3 request paths and query strings.

S3 and SigV4 expect RFC 3986 escaping: everything except the unreserved
characters (A-Z, a-z, 0-9, '-', '.', '_', '~') is escaped as %XX over the
UTF-8 bytes of the value.
"""

from urllib.parse import quote as _urlquote


def quote(value: str) -> str:
    """Escape a single path segment, query key or query value.

    Args:
        value: The raw string.

    Returns:
        The percent-encoded string. '/' is escaped as well.
    """
    return _urlquote(value, safe="~")


def encode_path(path: str) -> str:
    """Escape an object path segment by segment.

    Empty segments are dropped, but a leading and a trailing '/' on the
    input are preserved.

    Args:
        path: The raw path, e.g. "/bucket/my key".

    Returns:
        The encoded path, e.g. "/bucket/my%20key".
    """
    if not path:
        return path

    out = "/".join(quote(segment) for segment in path.split("/") if segment)

    if path.startswith("/"):
        out = "/" + out
    if path.endswith("/") and out != "/":
        out += "/"

    return out
