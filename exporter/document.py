"""
Document gate - parse, check and serialize an AIM document.

Only documents whose root element is ImageAnnotation are sent to the AIM
Data Service. Anything else fails with InvalidDocument, which the service
reports as REJECTED.
"""

import logging
import os
from pathlib import Path
from typing import Union

from lxml import etree

from config.constants import EXPECTED_ROOT_TAG
from exporter.errors import InvalidDocument

logger = logging.getLogger(__name__)

DocumentSource = Union[str, os.PathLike, bytes]


def _parser() -> etree.XMLParser:
    # Parsers are not thread safe; one per call.
    # Internal entities are expanded so the serialized root stands alone;
    # external ones are never loaded. Text nodes stay under libxml2's 10 MB cap.
    return etree.XMLParser(resolve_entities="internal", no_network=True, huge_tree=False)


def read_document(source: DocumentSource) -> bytes:
    """
    Return the raw bytes of a document.

    Args:
        source: Path to the staged file, or the document bytes themselves

    Raises:
        InvalidDocument if the file cannot be read
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    try:
        return Path(source).read_bytes()
    except OSError as e:
        raise InvalidDocument(f"Unable to read document {source}: {e}") from e


def parse_document(source: DocumentSource) -> etree._Element:
    """
    Parse a document and return its root element.

    Args:
        source: Path to the staged file, or the document bytes themselves

    Returns:
        Root element of the parsed tree

    Raises:
        InvalidDocument if the document cannot be read or is not well-formed XML
    """
    data = read_document(source)
    try:
        root = etree.fromstring(data, parser=_parser())
    except (etree.LxmlError, ValueError, LookupError) as e:
        raise InvalidDocument(f"Unparsable document: {e}") from e

    # A reference that survived parsing would be undeclared once the
    # DOCTYPE is dropped from the payload.
    unresolved = next(root.iter(etree.Entity), None)
    if unresolved is not None:
        raise InvalidDocument(f"Unresolved entity reference ({unresolved.text})")
    return root


def tag_name(element: etree._Element) -> str:
    """
    Qualified tag name of an element as written in the document.

    "aim:ImageAnnotation" when the element uses a prefix, plain
    "ImageAnnotation" otherwise (including default namespaces).
    """
    localname = etree.QName(element).localname
    return f"{element.prefix}:{localname}" if element.prefix else localname


def check_root(root: etree._Element, expected: str = EXPECTED_ROOT_TAG) -> etree._Element:
    """
    Make sure the root element is the one the AIM Data Service accepts.

    Raises:
        InvalidDocument with root_tag set when the tag does not match
    """
    root_tag = tag_name(root)
    if root_tag != expected:
        raise InvalidDocument(f"Illegal root ({root_tag})", root_tag=root_tag)
    return root


def serialize(root: etree._Element) -> str:
    """Canonical text of the root element: no XML declaration, nothing outside the root."""
    return etree.tostring(root, encoding="unicode", with_tail=False)


def load_export_payload(source: DocumentSource) -> str:
    """
    Parse, check and serialize a document in one step.

    Returns:
        Text to send to the AIM Data Service

    Raises:
        InvalidDocument
    """
    return serialize(check_root(parse_document(source)))
