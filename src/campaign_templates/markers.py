# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Metadata marker comments.

A marker is a comment whose whole text is ``!`` + payload + ``!``. The
match is strict: any character outside the two sentinels, whitespace
included, means the comment is an ordinary comment.
"""

import re

from .exceptions import MetadataFormatError

MARKER_SENTINEL = "!"

# Anchored on the whole comment text; DOTALL lets the payload span lines
_MARKER_RE = re.compile(r"\A!(?P<value>.*)!\Z", re.DOTALL)

# XML 1.0 forbids "--" inside a comment
_COMMENT_FORBIDDEN = "--"

# Characters XML 1.0 does not allow anywhere in a document
_XML_ILLEGAL_CHAR_RE = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


def match_marker(comment_text: str | None) -> str | None:
    """Returns the payload of a marker comment.

    Args:
        comment_text: Raw text of a comment node.

    Returns:
        Text between the sentinels, or None if the comment is not a marker.
    """
    if comment_text is None:
        return None
    match = _MARKER_RE.match(comment_text)
    if match is None:
        return None
    return match.group("value")


def wrap_payload(payload: str) -> str:
    """Builds marker comment text so the payload sits on its own lines.

    Raises:
        MetadataFormatError: If the payload cannot be stored in a comment.
    """
    if _COMMENT_FORBIDDEN in payload:
        raise MetadataFormatError("Metadata payload must not contain '--'")
    illegal = _XML_ILLEGAL_CHAR_RE.search(payload)
    if illegal is not None:
        raise MetadataFormatError(
            f"Metadata payload contains {illegal.group()!r}, which XML does not allow"
        )
    return f"{MARKER_SENTINEL}\n{payload}\n{MARKER_SENTINEL}"
