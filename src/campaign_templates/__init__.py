# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""campaign_templates - Embed template metadata in XML files."""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    CampaignTemplatesError,
    MalformedDocumentError,
    MetadataError,
    MetadataFormatError,
    MultipleMetadataError,
)
from .models import Template, TemplateMetadata
from .processor import XmlMetadataProcessor
from .transcoders import (
    KeyValueMetadataTranscoder,
    MetadataFormatter,
    MetadataParser,
)

try:
    __version__ = version("campaign-templates")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "XmlMetadataProcessor",
    "Template",
    "TemplateMetadata",
    "KeyValueMetadataTranscoder",
    "MetadataParser",
    "MetadataFormatter",
    "CampaignTemplatesError",
    "MalformedDocumentError",
    "MetadataError",
    "MetadataFormatError",
    "MultipleMetadataError",
]
