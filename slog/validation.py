from __future__ import annotations

import string
from typing import TYPE_CHECKING, Sequence

from .errors import DuplicateIdentifierError, InvalidIdentifierError

if TYPE_CHECKING:
    from .posts import Post

IDENTIFIER_CHARS = frozenset(string.ascii_lowercase)


def validate_identifier(value: str) -> None:
    for char in value:
        if char not in IDENTIFIER_CHARS:
            raise InvalidIdentifierError(value, char)


def check_duplicates(posts: Sequence[Post]) -> None:
    """Fail on the first pair of posts sharing an id.

    Posts are compared pairwise in input order, so the reported pair is the
    earliest collision. A run has tens to hundreds of posts.
    """
    for i, first in enumerate(posts):
        for second in posts[i + 1 :]:
            if first.id == second.id:
                raise DuplicateIdentifierError(first.id, first.source, second.source)
