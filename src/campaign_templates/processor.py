# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Extraction and insertion of template metadata in XML documents.

Metadata is stored as a single marker comment (see ``markers``). On
extraction the whole document is scanned and more than one marker is an
error: picking one of several could silently apply stale metadata.
"""

import logging
from dataclasses import dataclass

from lxml import etree

from .document import (
    XmlDocument,
    find_comments,
    parse_document,
    prepend_comment,
    remove_node,
    serialize_document,
)
from .exceptions import MalformedDocumentError, MetadataError, MultipleMetadataError
from .markers import match_marker, wrap_payload
from .models import Template, TemplateMetadata
from .transcoders import KeyValueMetadataTranscoder, MetadataFormatter, MetadataParser

logger = logging.getLogger(__name__)


@dataclass
class MarkerScan:
    """Outcome of scanning a document for marker comments.

    Attributes:
        count: Number of marker comments found.
        marker: The marker comment if exactly one was found.
        payload: Payload of that marker.
    """

    count: int = 0
    marker: etree._Comment | None = None
    payload: str | None = None

    @property
    def is_ambiguous(self) -> bool:
        """True if more than one marker was found."""
        return self.count > 1


def scan_markers(document: XmlDocument) -> MarkerScan:
    """Finds marker comments, last comment in the document first.

    Every comment is checked so that duplicates are always counted.
    """
    scan = MarkerScan()
    for comment in reversed(find_comments(document)):
        payload = match_marker(comment.text)
        if payload is None:
            continue
        scan.count += 1
        if scan.count == 1:
            scan.marker = comment
            scan.payload = payload

    if scan.is_ambiguous:
        scan.marker = None
        scan.payload = None
    return scan


class XmlMetadataProcessor:
    """Splits XML template files into code and metadata, and back again.

    Args:
        parser: Decodes marker payloads. Defaults to
            ``KeyValueMetadataTranscoder``.
        formatter: Encodes metadata into payloads. Defaults to
            ``KeyValueMetadataTranscoder``.
    """

    def __init__(
        self,
        parser: MetadataParser | None = None,
        formatter: MetadataFormatter | None = None,
    ) -> None:
        default = KeyValueMetadataTranscoder()
        self._parser = parser if parser is not None else default
        self._formatter = formatter if formatter is not None else default

    def extract_metadata(self, text: str) -> Template:
        """Extracts the code and metadata from raw XML file content.

        Args:
            text: Raw XML file content.

        Returns:
            Template with the marker removed from the code. Metadata is
            empty if the document has no marker.

        Raises:
            TypeError: If text is None.
            MetadataError: If the XML is malformed.
            MultipleMetadataError: If more than one marker is present.
            MetadataFormatError: If the marker payload cannot be parsed.
        """
        if text is None:
            raise TypeError("text must not be None")

        document = self._parse(text)

        scan = scan_markers(document)
        if scan.is_ambiguous:
            raise MultipleMetadataError(scan.count)

        metadata = TemplateMetadata()
        if scan.marker is not None:
            remove_node(document, scan.marker)
            metadata = self._parser.parse(scan.payload)
            logger.debug("Extracted metadata marker")
        else:
            logger.debug("No metadata marker found")

        return Template(code=serialize_document(document), metadata=metadata)

    def insert_metadata(self, template: Template) -> str:
        """Converts code and metadata into raw XML file content.

        The marker becomes the first node of the document.

        Args:
            template: Code and metadata. The code must not already hold a
                marker.

        Returns:
            Raw XML file content.

        Raises:
            TypeError: If template is None.
            MetadataError: If the code is malformed XML.
            MetadataFormatError: If the metadata cannot be written as a
                marker.
        """
        if template is None:
            raise TypeError("template must not be None")

        payload = self._formatter.format(template.metadata)
        marker_text = wrap_payload(payload)

        document = self._parse(template.code)
        prepend_comment(document, marker_text)
        logger.debug("Inserted metadata marker")

        return serialize_document(document)

    @staticmethod
    def _parse(text: str) -> XmlDocument:
        try:
            return parse_document(text)
        except MalformedDocumentError as e:
            raise MetadataError(f"Could not read template XML: {e}") from e
