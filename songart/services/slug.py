"""
Title -> filename slugs.
"""
import re

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w\-]+", re.ASCII)
_HYPHEN_RUN = re.compile(r"-{2,}")


def slugify(text) -> str:
    """
    Lower-case, hyphen-delimited, filesystem-safe token for `text`.

    "Test Song" -> "test-song". Only ASCII word characters and hyphens
    survive, so slugging a slug returns it unchanged.
    """
    slug = str(text).lower()
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_WORD.sub("", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    return slug.strip("-")
