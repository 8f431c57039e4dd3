# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Template data model."""

from dataclasses import dataclass, field


@dataclass
class TemplateMetadata:
    """Metadata stored alongside a template's code.

    Attributes:
        schema: Schema of the template, e.g. ``nms:delivery``.
        name: Namespaced template name, e.g. ``cus:welcome``.
        label: Human-readable label.
        additional_properties: Any further properties, in insertion order.
    """

    schema: str | None = None
    name: str | None = None
    label: str | None = None
    additional_properties: dict[str, str] = field(default_factory=dict)


@dataclass
class Template:
    """Template code paired with its metadata.

    Attributes:
        code: Document text without the metadata marker.
        metadata: Decoded metadata.
    """

    code: str
    metadata: TemplateMetadata = field(default_factory=TemplateMetadata)
