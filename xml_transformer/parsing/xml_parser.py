"""
XML-to-tree parsing for the record transform.

This module turns an XML payload into an untyped document tree of dicts,
lists and strings using lxml, in the shape a generic XML unmarshaller
produces, so that path expressions can address elements by name.
"""

import logging

from typing import Any, Dict

from lxml import etree

from ..interfaces import XMLParserInterface
from ..exceptions import XMLParsingError


TEXT_KEY = ""


class XMLParser(XMLParserInterface):
    """
    Converts XML payloads into document trees.

    Conversion rules:
    - The root element becomes the single top-level key of the tree
    - An element with no attributes and no child elements becomes its stripped text
    - Any other element becomes a dict: attributes first, then child elements
    - Repeated child element names are collected into a list in document order
    - Non-whitespace text of an element that also has attributes or children
      is kept under the empty-string key
    - Namespace prefixes are removed from element and attribute names

    Parsing is strict: lxml recovery is disabled so malformed markup raises
    XMLParsingError instead of producing a partial tree. A new lxml parser is
    built for every call, so one XMLParser can be shared between threads.
    """
    
    def __init__(self):
        self.logger = logging.getLogger(__name__)
    
    def parse_to_tree(self, xml_content: str) -> Dict[str, Any]:
        """
        Parse XML content into a document tree.
        
        Args:
            xml_content: Raw XML content as string
            
        Returns:
            Single-key dict mapping the root element name to its converted content
            
        Raises:
            XMLParsingError: If the content is not a string or is not well-formed XML
        """
        if not isinstance(xml_content, str):
            raise XMLParsingError(f"XML content must be a string, got {type(xml_content).__name__}",
                                  xml_content)
        
        cleaned_xml = self._clean_xml_content(xml_content)
        if not cleaned_xml:
            raise XMLParsingError("XML content is empty", xml_content)
        
        parser = etree.XMLParser(
            recover=False,
            resolve_entities="internal",  # Security: expand only entities declared in the document
            no_network=True,  # Security: disable network access
            remove_comments=True,
            remove_pis=True
        )
        
        try:
            root = etree.fromstring(cleaned_xml.encode('utf-8'), parser)
        except etree.XMLSyntaxError as e:
            self.logger.error(f"Failed to parse XML: {e}")
            raise XMLParsingError(str(e), xml_content) from e
        
        return {self._clean_tag_name(root.tag): self._element_to_node(root)}
    
    def _element_to_node(self, element) -> Any:
        """Convert one element (recursively) into a string or dict node."""
        attributes = self.extract_attributes(element)
        # External entity references are left unresolved and show up as children with non-string tags
        children = [child for child in element if isinstance(child.tag, str)]
        
        if not attributes and not children:
            return (element.text or '').strip()
        
        node: Dict[str, Any] = dict(attributes)
        repeated = set()
        for child in children:
            name = self._clean_tag_name(child.tag)
            value = self._element_to_node(child)
            if name not in node:
                node[name] = value
            elif name in repeated:
                node[name].append(value)
            else:
                node[name] = [node[name], value]
                repeated.add(name)
        
        text = ''.join([element.text or ''] + [child.tail or '' for child in element]).strip()
        if text:
            node[TEXT_KEY] = text
        
        return node
    
    def extract_attributes(self, element) -> Dict[str, str]:
        """
        Extract attributes from an XML element.
        
        Args:
            element: XML element to extract attributes from
            
        Returns:
            Dictionary of attribute names (without namespace) to values
        """
        return {
            self._clean_tag_name(name): value
            for name, value in element.attrib.items()
        }
    
    def _clean_xml_content(self, xml_content: str) -> str:
        """
        Remove byte-order marks and hidden leading characters.
        
        Args:
            xml_content: Raw XML content
            
        Returns:
            Cleaned XML content
        """
        if xml_content.startswith('\ufeff'):
            xml_content = xml_content[1:]
            self.logger.debug("Removed UTF-8 BOM from XML content")
        
        while xml_content and ord(xml_content[0]) < 32 and xml_content[0] not in '\t\n\r':
            xml_content = xml_content[1:]
            self.logger.debug("Removed hidden leading character")
        
        return xml_content.strip()
    
    def _clean_tag_name(self, tag: str) -> str:
        """
        Clean tag name by removing namespace URI or prefix.
        
        Args:
            tag: Raw tag name, possibly in {namespace}name or prefix:name form
            
        Returns:
            Tag name without namespace
        """
        if tag.startswith('{'):
            end_ns = tag.find('}')
            if end_ns > 0:
                return tag[end_ns + 1:]
        
        if ':' in tag:
            return tag.split(':', 1)[1]
        
        return tag
