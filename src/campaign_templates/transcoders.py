# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Conversion between metadata payload strings and TemplateMetadata.

The processor depends only on the ``MetadataParser`` and
``MetadataFormatter`` protocols. ``KeyValueMetadataTranscoder`` is the
default implementation: one ``key: value`` property per line.
"""

import logging
import re
from typing import Protocol

from .exceptions import MetadataFormatError
from .models import TemplateMetadata

logger = logging.getLogger(__name__)

# Either separator is accepted on input; whichever comes first wins
_SEPARATOR_RE = re.compile(r"[:=]")

# Every boundary str.splitlines() breaks on
_LINE_BREAK_RE = re.compile(r"[\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029]")

# Keys mapped onto TemplateMetadata fields (compared case-insensitively)
_SCHEMA_KEY = "Schema"
_NAME_KEY = "Name"
_LABEL_KEY = "Label"
_RESERVED_KEYS = frozenset(
    key.casefold() for key in (_SCHEMA_KEY, _NAME_KEY, _LABEL_KEY)
)


class MetadataParser(Protocol):
    def parse(self, raw: str) -> TemplateMetadata: ...


class MetadataFormatter(Protocol):
    def format(self, metadata: TemplateMetadata) -> str: ...


class KeyValueMetadataTranscoder:
    """Reads and writes metadata as ``key: value`` lines."""

    def parse(self, raw: str) -> TemplateMetadata:
        """Parses a metadata payload.

        Blank lines are ignored. Each other line is split on the first
        ``:`` or ``=``.

        Args:
            raw: Payload text taken from a marker comment.

        Returns:
            The decoded metadata.

        Raises:
            MetadataFormatError: If a line has no separator or an empty key,
                or a key is repeated.
        """
        metadata = TemplateMetadata()
        seen: set[str] = set()

        for line_number, line in enumerate(raw.splitlines(), start=1):
            if not line.strip():
                continue

            separator = _SEPARATOR_RE.search(line)
            if separator is None:
                raise MetadataFormatError(
                    f"Line {line_number}: expected 'key: value', got {line.strip()!r}"
                )

            key = line[: separator.start()].strip()
            value = line[separator.end() :].strip()
            if not key:
                raise MetadataFormatError(f"Line {line_number}: empty property name")

            folded = key.casefold()
            if folded in seen:
                raise MetadataFormatError(
                    f"Line {line_number}: duplicate property {key!r}"
                )
            seen.add(folded)

            if folded == _SCHEMA_KEY.casefold():
                metadata.schema = value
            elif folded == _NAME_KEY.casefold():
                metadata.name = value
            elif folded == _LABEL_KEY.casefold():
                metadata.label = value
            else:
                metadata.additional_properties[key] = value

        logger.debug("Parsed metadata: %s", metadata)
        return metadata

    def format(self, metadata: TemplateMetadata) -> str:
        """Formats metadata as a payload, named fields first.

        Raises:
            MetadataFormatError: If a value spans more than one line or has
                surrounding whitespace, or a key is empty, padded, contains a
                separator, collides with a named field or repeats another key
                ignoring case.
        """
        properties: list[tuple[str, str]] = [
            (key, value)
            for key, value in (
                (_SCHEMA_KEY, metadata.schema),
                (_NAME_KEY, metadata.name),
                (_LABEL_KEY, metadata.label),
            )
            if value is not None
        ]
        for key in metadata.additional_properties:
            if key.casefold() in _RESERVED_KEYS:
                raise MetadataFormatError(
                    f"Additional property {key!r} collides with a named field"
                )
        properties.extend(metadata.additional_properties.items())

        lines = []
        seen: set[str] = set()
        for key, value in properties:
            if (
                not key.strip()
                or key != key.strip()
                or _SEPARATOR_RE.search(key)
                or _LINE_BREAK_RE.search(key)
            ):
                raise MetadataFormatError(f"Invalid property name {key!r}")
            if key.casefold() in seen:
                raise MetadataFormatError(
                    f"Property {key!r} differs from another only by case"
                )
            seen.add(key.casefold())
            if _LINE_BREAK_RE.search(value):
                raise MetadataFormatError(
                    f"Value of property {key!r} must be a single line"
                )
            if value != value.strip():
                raise MetadataFormatError(
                    f"Value of property {key!r} has surrounding whitespace"
                )
            lines.append(f"{key}: {value}")
        return "\n".join(lines)
