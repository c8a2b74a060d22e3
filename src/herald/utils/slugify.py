"""Slug helpers used to derive integration identifiers from display names."""

import re
import unicodedata

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(text: str, *, max_length: int = 48) -> str:
    """Return a lowercase ASCII slug of `text` with single hyphens between words.

    Accented characters are folded to ASCII; anything else outside ``a-z0-9``
    becomes a separator. The result never starts or ends with a hyphen and
    may be empty when `text` has no usable characters.

    Examples:
        >>> slugify("Custom SMTP")
        'custom-smtp'
        >>> slugify("  Firebase Cloud Messaging ")
        'firebase-cloud-messaging'
    """
    folded = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    slug = _NON_SLUG.sub("-", folded.lower()).strip("-")
    return slug[:max_length].rstrip("-")
