"""XPath metadata extraction for the Ventana XML packet.

The level-0 directory of a Ventana slide carries an XML document in its
XMLPacket tag. Scan metadata lives in attributes of a single element:

    EncodeInfo (root node)
      SlideInfo
        ServerDirectory
        LabelImage
        iScan
          AOI0
        ...
      SlideStitchInfo
        ...
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any

from lxml import etree

from bifslide.utils.logging import get_logger
from bifslide.ventana.exceptions import BadDataError, FormatNotSupportedError
from bifslide.ventana.types import (
    ISCAN_ATTRIBUTES,
    ISCAN_XPATH,
    PROPERTY_NAME_MPP_X,
    PROPERTY_NAME_MPP_Y,
    PROPERTY_NAME_OBJECTIVE_POWER,
    PropertyMap,
)

if TYPE_CHECKING:
    from types import TracebackType

logger = get_logger(__name__)

_PARSER_OPTIONS: dict[str, Any] = {
    "no_network": True,
    "resolve_entities": False,
    "recover": False,
}

# ASCII decimal literals only, without "_" digit separators
_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class XPathMetadataReader:
    """Single-result XPath queries over a parsed XML fragment.

    The parsed document and its XPath evaluator are released by ``close()``,
    which the context manager calls on every exit path.

    Usage:
        with XPathMetadataReader.from_string(xml) as reader:
            reader.set_property_from_attribute(
                properties, "ventana.magnification", ISCAN_XPATH, "Magnification"
            )
    """

    __slots__ = ("_document", "_evaluator")

    def __init__(self, document: etree._ElementTree) -> None:
        self._document: etree._ElementTree | None = document
        self._evaluator: etree.XPathDocumentEvaluator | None = etree.XPathEvaluator(
            document
        )

    @classmethod
    def from_string(cls, xml: str | bytes) -> XPathMetadataReader:
        """Parse ``xml`` and return a reader over it.

        Raises:
            FormatNotSupportedError: If the XML is not well-formed.
        """
        if isinstance(xml, str):
            xml = xml.encode("utf-8")
        parser = etree.XMLParser(**_PARSER_OPTIONS)
        try:
            root = etree.fromstring(xml, parser=parser)
        except etree.XMLSyntaxError as e:
            raise FormatNotSupportedError("Could not parse XML") from e
        # lxml may hand back None instead of raising for some empty inputs
        if root is None:
            raise FormatNotSupportedError("Could not parse XML")
        return cls(root.getroottree())

    def _ensure_open(self) -> etree.XPathDocumentEvaluator:
        evaluator = self._evaluator
        if evaluator is None:
            raise RuntimeError("XPathMetadataReader is closed")
        return evaluator

    def evaluate(self, query: str) -> list[etree._Element] | None:
        """Run ``query`` and return the matching elements.

        Returns:
            A non-empty list of elements, or None when nothing matched or
            the query does not select nodes.
        """
        evaluator = self._ensure_open()
        result = evaluator(query)
        if not isinstance(result, list):
            return None
        nodes = [node for node in result if isinstance(node, etree._Element)]
        return nodes or None

    def set_property_from_attribute(
        self,
        properties: PropertyMap | None,
        property_name: str,
        query: str,
        attribute_name: str,
    ) -> None:
        """Copy an attribute of the first node matching ``query`` into ``properties``.

        Missing nodes or attributes are ignored.
        """
        nodes = self.evaluate(query)
        if nodes is None:
            return
        value = nodes[0].get(attribute_name)
        if properties is not None and value is not None:
            properties[property_name] = value

    def set_property_from_text(
        self,
        properties: PropertyMap | None,
        property_name: str,
        query: str,
    ) -> None:
        """Copy the text of the first node matching ``query`` into ``properties``."""
        nodes = self.evaluate(query)
        if nodes is None:
            return
        value = "".join(nodes[0].itertext())
        if properties is not None:
            properties[property_name] = value

    def close(self) -> None:
        """Release the parsed document and evaluator."""
        self._evaluator = None
        self._document = None

    def __enter__(self) -> XPathMetadataReader:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and release the document."""
        self.close()


def duplicate_int_property(properties: PropertyMap, src: str, dest: str) -> None:
    """Copy ``src`` to ``dest`` when its value is a base-10 integer."""
    value = properties.get(src)
    if value is None:
        return
    if _INT_RE.fullmatch(value.strip()) is None:
        logger.debug("Not an integer property", property=src, value=value)
        return
    properties[dest] = str(int(value))


def duplicate_float_property(properties: PropertyMap, src: str, dest: str) -> None:
    """Copy ``src`` to ``dest`` when its value is a finite float."""
    value = properties.get(src)
    if value is None:
        return
    if _FLOAT_RE.fullmatch(value.strip()) is None:
        logger.debug("Not a float property", property=src, value=value)
        return
    number = float(value)
    if not math.isfinite(number):
        return
    properties[dest] = repr(number)


def parse_scan_info(
    xml: str | bytes,
    properties: PropertyMap | None,
    *,
    require_core: bool = False,
) -> None:
    """Extract iScan attributes from the level-0 XML packet into ``properties``.

    Args:
        xml: XML packet of the level-0 directory.
        properties: Property sink; None runs the validation only.
        require_core: Report a missing Magnification or ScanRes attribute
            as bad data.

    Raises:
        FormatNotSupportedError: If the XML cannot be parsed.
        BadDataError: If the XML does not contain exactly one iScan element,
            or a core attribute is missing and ``require_core`` is set.
    """
    with XPathMetadataReader.from_string(xml) as reader:
        nodes = reader.evaluate(ISCAN_XPATH)
        if nodes is None:
            raise BadDataError("No iScan element found")
        if len(nodes) != 1:
            raise BadDataError("Multiple iScan elements found")

        iscan = nodes[0]
        if require_core:
            for attribute in ("Magnification", "ScanRes"):
                if iscan.get(attribute) is None:
                    raise BadDataError(f"Missing iScan attribute: {attribute}")

        for property_name, attribute in ISCAN_ATTRIBUTES:
            reader.set_property_from_attribute(
                properties, property_name, ISCAN_XPATH, attribute
            )

    if properties is None:
        return

    # copy magnification and resolution to standard properties
    duplicate_int_property(
        properties, "ventana.magnification", PROPERTY_NAME_OBJECTIVE_POWER
    )
    duplicate_float_property(properties, "ventana.resolution", PROPERTY_NAME_MPP_X)
    duplicate_float_property(properties, "ventana.resolution", PROPERTY_NAME_MPP_Y)
    logger.debug(
        "Parsed iScan metadata",
        magnification=properties.get("ventana.magnification"),
        resolution=properties.get("ventana.resolution"),
    )
