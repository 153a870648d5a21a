"""Placeholder substitution strategy.

Replaces literal placeholder tokens inside the DrawingML text runs
(``<a:t>``) of a slide document while leaving every other node,
attribute and formatting element untouched.
"""

import logging

from lxml import etree

from biodata.interfaces.errors import XmlParseError
from biodata.strategies.template_engine.models import ReplacementSet

logger = logging.getLogger(__name__)

DRAWINGML_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
TEXT_RUN_TAG = f"{{{DRAWINGML_NS}}}t"


def substitute_text(text: str, replacements: ReplacementSet) -> tuple[str, int]:
    """Apply every replacement to one text run.

    Tokens are applied in the set's order, each replacing all of its
    literal occurrences.

    Args:
        text: Content of a single text run.
        replacements: Tokens and values to substitute.

    Returns:
        The new text and the number of token occurrences replaced.
    """
    count = 0
    for token, value in replacements.items():
        hits = text.count(token)
        if hits:
            text = text.replace(token, value)
            count += hits
    return text, count


class PlaceholderSubstituter:
    """Fills placeholder tokens in slide XML.

    Uses lxml so that only the ``a:t`` nodes that actually contain a
    token are rewritten; the rest of the tree serializes back as parsed.
    """

    def __init__(self) -> None:
        self._parser = etree.XMLParser(
            resolve_entities=False,
            remove_blank_text=False,
            no_network=True,
        )

    def parse(self, xml: bytes | str) -> etree._Element:
        """Parse a slide document.

        Raises:
            XmlParseError: If the input is not well-formed XML.
        """
        if isinstance(xml, str):
            xml = xml.encode("utf-8")
        try:
            return etree.fromstring(xml, self._parser)
        except etree.XMLSyntaxError as e:
            raise XmlParseError(f"Invalid slide XML: {e}") from e

    def substitute_tree(self, root: etree._Element, replacements: ReplacementSet) -> int:
        """Rewrite matching text runs of a parsed document in place.

        Returns:
            Number of token occurrences replaced.
        """
        total = 0
        for node in root.iter(TEXT_RUN_TAG):
            if not node.text:
                continue
            new_text, count = substitute_text(node.text, replacements)
            if count:
                node.text = new_text
                total += count
        return total

    @staticmethod
    def serialize(root: etree._Element) -> bytes:
        """Serialize a document, keeping its standalone declaration."""
        tree = root.getroottree()
        return etree.tostring(
            tree,
            xml_declaration=True,
            encoding="UTF-8",
            standalone=tree.docinfo.standalone,
        )

    def substitute(self, xml: bytes | str, replacements: ReplacementSet) -> bytes:
        """Return the document with every placeholder token replaced.

        Args:
            xml: The slide document.
            replacements: Tokens and values to substitute.

        Returns:
            The rewritten document as UTF-8 bytes.

        Raises:
            XmlParseError: If the input is not well-formed XML.
        """
        root = self.parse(xml)
        count = self.substitute_tree(root, replacements)
        logger.debug(f"Substituted {count} placeholder occurrences")
        return self.serialize(root)
