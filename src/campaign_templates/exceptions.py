# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for campaign_templates."""


class CampaignTemplatesError(Exception):
    """Base exception for all campaign_templates errors."""


class MalformedDocumentError(CampaignTemplatesError):
    """Document text is not well-formed XML."""


class MetadataFormatError(CampaignTemplatesError):
    """Metadata payload does not follow the metadata grammar."""


class MetadataError(CampaignTemplatesError):
    """Metadata could not be extracted from or inserted into a document."""


class MultipleMetadataError(MetadataError):
    """More than one metadata marker was found in a document.

    Attributes:
        count: Number of marker comments found.
    """

    def __init__(self, count: int) -> None:
        super().__init__(f"Found {count} metadata comments, expected at most one")
        self.count = count
