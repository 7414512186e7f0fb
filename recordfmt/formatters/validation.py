"""
lxml helpers for checking and comparing formatted XML records.
"""

from lxml import etree
import structlog

from ..types import FormatterError, Keys

logger = structlog.get_logger(__name__)


def parse_record(xml_content: str, strip_whitespace: bool = False) -> etree._Element:
    """
    Parse a formatted record and check it is rooted at ``<record>``.

    Args:
        xml_content: Output of an XML formatter
        strip_whitespace: Drop whitespace-only text between elements

    Returns:
        The root element

    Raises:
        FormatterError: If the content is not a well-formed record
    """
    parser = etree.XMLParser(remove_blank_text=strip_whitespace, resolve_entities=False)
    try:
        root = etree.fromstring(xml_content.encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        raise FormatterError(f"Invalid XML record: {e}") from e

    if root.tag != Keys.RECORD:
        raise FormatterError(f"Expected root element '{Keys.RECORD}', found '{root.tag}'")
    return root


def canonicalize(xml_content: str, strip_whitespace: bool = True) -> str:
    """
    Return the C14N form of a record.

    With ``strip_whitespace`` the indentation added by pretty printing is
    removed, so pretty and compact output of the same record compare equal.
    """
    root = parse_record(xml_content, strip_whitespace=strip_whitespace)
    return etree.tostring(root, method="c14n").decode("utf-8")


def is_well_formed(xml_content: str) -> bool:
    """Check whether the content parses as a single record document."""
    try:
        parse_record(xml_content)
    except FormatterError as e:
        logger.debug("Record is not well formed", error=str(e))
        return False
    return True
