# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""XML document handling for metadata markers.

Wraps an lxml tree together with the facts about the original XML
declaration that lxml does not keep, so a document serializes back
without gaining or losing a declaration.
"""

import logging
import re
from dataclasses import dataclass

from lxml import etree

from .exceptions import MalformedDocumentError

logger = logging.getLogger(__name__)

OUTPUT_ENCODING = "UTF-8"

# The declaration may only be preceded by a byte order mark
_DECLARATION_RE = re.compile(r"\A\ufeff?<\?xml\s(?P<attributes>.*?)\?>", re.DOTALL)
_STANDALONE_RE = re.compile(r"""standalone\s*=\s*["'](?P<value>yes|no)["']""")


@dataclass
class XmlDocument:
    """A parsed XML document.

    Attributes:
        tree: Parsed lxml tree, owned by a single caller.
        has_declaration: True if the source text started with an XML
            declaration.
        standalone: Declared standalone flag, None if not declared.
    """

    tree: etree._ElementTree
    has_declaration: bool = False
    standalone: bool | None = None


def _secure_xml_parser() -> etree.XMLParser:
    """Returns a new parser; lxml parser instances are not thread-safe."""
    # Text is always handed to libxml2 as UTF-8, whatever the declaration
    # says. Blank text is dropped so pretty printing can re-indent.
    return etree.XMLParser(
        encoding="utf-8",
        remove_blank_text=True,
        resolve_entities=False,
        no_network=True,
    )


def _read_declaration(text: str) -> tuple[bool, bool | None]:
    """Returns (has_declaration, standalone) for the source text."""
    declaration = _DECLARATION_RE.match(text)
    if declaration is None:
        return False, None

    standalone = _STANDALONE_RE.search(declaration.group("attributes"))
    if standalone is None:
        return True, None
    return True, standalone.group("value") == "yes"


def parse_document(text: str) -> XmlDocument:
    """Parses XML text into a document.

    Args:
        text: XML document text.

    Returns:
        The parsed document.

    Raises:
        MalformedDocumentError: If the text is not well-formed XML.
    """
    try:
        root = etree.fromstring(text.encode("utf-8"), _secure_xml_parser())
    except etree.XMLSyntaxError as e:
        logger.debug("XML parsing error: %s", e)
        raise MalformedDocumentError(f"Invalid XML document: {e}") from e

    has_declaration, standalone = _read_declaration(text)
    return XmlDocument(
        tree=root.getroottree(),
        has_declaration=has_declaration,
        standalone=standalone,
    )


def find_comments(document: XmlDocument) -> list[etree._Comment]:
    """Returns all comments in document order, root-level ones included."""
    return document.tree.xpath("//comment()")


def remove_node(document: XmlDocument, node: etree._Element) -> None:
    """Detaches a node from the document in place.

    Text following the node in mixed content stays in the document.
    """
    parent = node.getparent()
    if parent is None:
        if node is document.tree.getroot():
            raise ValueError("The root element cannot be removed")
        # Root-level siblings have no parent element; appending the node
        # elsewhere unlinks it from the document.
        etree.Element("detached").append(node)
        return

    if node.tail:
        previous = node.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + node.tail
        else:
            parent.text = (parent.text or "") + node.tail
        node.tail = None
    parent.remove(node)


def prepend_comment(document: XmlDocument, text: str) -> etree._Comment:
    """Inserts a comment as the first node of the document.

    The comment goes before the root element and any root-level comment
    or processing instruction. A declaration is still serialized first.

    Returns:
        The inserted comment.
    """
    comment = etree.Comment(text)
    root = document.tree.getroot()
    # Preceding siblings are yielded nearest first
    preceding = list(root.itersiblings(preceding=True))
    first = preceding[-1] if preceding else root
    first.addprevious(comment)
    return comment


def serialize_document(document: XmlDocument) -> str:
    """Serializes the document with two-space indentation.

    The declaration is written only if the source had one, and always
    declares the encoding the text was actually produced in.
    """
    options = {}
    if document.has_declaration and document.standalone is not None:
        options["standalone"] = document.standalone

    xml_bytes = etree.tostring(
        document.tree,
        encoding=OUTPUT_ENCODING,
        xml_declaration=document.has_declaration,
        pretty_print=True,
        **options,
    )
    return xml_bytes.decode(OUTPUT_ENCODING)
