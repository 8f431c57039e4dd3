# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the campaign_templates test suite."""

import pytest

from campaign_templates import TemplateMetadata, XmlMetadataProcessor

# -- Sample documents --

PLAIN_XML = "<root><child/></root>"

PLAIN_XML_PRETTY = "<root>\n  <child/>\n</root>\n"

DECLARED_XML = '<?xml version="1.0" encoding="utf-8"?>\n<root><child/></root>'

MARKED_XML = (
    "<!--!\nSchema: nms:delivery\nName: cus:welcome\n!-->\n"
    "<root>\n  <child/>\n</root>\n"
)

TWO_MARKERS_XML = "<!--!\nid=1\n!--><root><!--!\nid=2\n!--><child/></root>"


class RecordingTranscoder:
    """Transcoder that stores payloads verbatim and records calls."""

    def __init__(self) -> None:
        self.parsed: list[str] = []
        self.formatted: list[TemplateMetadata] = []

    def parse(self, raw: str) -> TemplateMetadata:
        self.parsed.append(raw)
        return TemplateMetadata(additional_properties={"raw": raw})

    def format(self, metadata: TemplateMetadata) -> str:
        self.formatted.append(metadata)
        return metadata.additional_properties.get("raw", "")


# -- Fixtures --


@pytest.fixture
def processor() -> XmlMetadataProcessor:
    """Processor with the default key/value transcoder."""
    return XmlMetadataProcessor()


@pytest.fixture
def recording_transcoder() -> RecordingTranscoder:
    """Transcoder that records every parse and format call."""
    return RecordingTranscoder()


@pytest.fixture
def sample_metadata() -> TemplateMetadata:
    """Metadata with named fields and an additional property."""
    return TemplateMetadata(
        schema="nms:delivery",
        name="cus:welcome",
        label="Welcome email",
        additional_properties={"id": "42"},
    )
