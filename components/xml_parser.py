"""
XML parsing utilities for Premiere project files.
Handles loading, safe parsing and timeline container discovery.
"""
import gzip
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from config import config
from components.errors import ConfigurationError, DocumentParseError
from components.logger import get_logger

logger = get_logger()

TIME_UNIT_FRAMES = 'frames'
TIME_UNIT_TICKS = 'ticks'
TIME_UNITS = (TIME_UNIT_FRAMES, TIME_UNIT_TICKS)

# Attributes that define an element's identity (ObjectURef/ObjectRef only point at one)
CONTAINER_ID_ATTRS = ('ObjectID', 'ObjectUID', 'id')

@dataclass
class ParsedProject:
    """Container for parsed Premiere project data."""
    root: Element
    time_unit: str
    containers: List[Element] = field(default_factory=list)
    top_level_containers: List[Element] = field(default_factory=list)
    container_map: Dict[str, Element] = field(default_factory=dict)

def decode_project_bytes(data: bytes) -> str:
    """
    Decode the raw bytes of a .prproj (gzipped) or plain XML file.

    Args:
        data: File content

    Returns:
        XML content as string
    """
    try:
        # Try to decompress, assuming it's a gzipped .prproj
        xml_data = gzip.decompress(data)
        logger.debug("Successfully decompressed gzipped project file")
    except (gzip.BadGzipFile, OSError):
        # If it fails, it's likely already unzipped XML
        xml_data = data
        logger.debug("File appears to be uncompressed XML")

    return xml_data.decode('utf-8-sig', errors='replace')

def load_project_file(path: str) -> str:
    """
    Reads a .prproj (gzipped) or unzipped XML file and returns its content as a string.

    Args:
        path: Path to the project file

    Returns:
        XML content as string
    """
    logger.info(f"Loading project file: {path}")

    with open(path, "rb") as f:
        data = f.read()

    return decode_project_bytes(data)

def ln(tag: Any) -> str:
    """
    Extract local name from namespaced XML tag.

    Args:
        tag: XML tag, potentially with namespace

    Returns:
        Local tag name without namespace
    """
    if not isinstance(tag, str):
        # Comments and processing instructions
        return ''
    return tag.split('}')[-1] if '}' in tag else tag

def lname(el: Element) -> str:
    """Lowercased local name of an element."""
    return ln(el.tag).lower()

def int_or_none(s: Any) -> Optional[int]:
    """
    Safely convert a value to integer, returning None on failure.

    Args:
        s: Value to convert

    Returns:
        Integer value or None if conversion fails
    """
    if s is None:
        return None
    if isinstance(s, str):
        s = s.strip()
    try:
        return int(s)
    except (ValueError, TypeError):
        try:
            return int(float(s))
        except (ValueError, TypeError, OverflowError):
            return None

def child_text(el: Element, names: Iterable[str]) -> Optional[str]:
    """First non-empty text of a direct child whose local name is in names."""
    wanted = {n.lower() for n in names}
    for child in el:
        if lname(child) in wanted and child.text and child.text.strip():
            return child.text.strip()
    return None

def descendant_text(el: Element, names: Iterable[str]) -> Optional[str]:
    """First non-empty text of any descendant whose local name is in names."""
    wanted = {n.lower() for n in names}
    for d in el.iter():
        if d is el:
            continue
        if lname(d) in wanted and d.text and d.text.strip():
            return d.text.strip()
    return None

def first_attr(el: Element, names: Iterable[str]) -> Optional[str]:
    """Value of the first attribute in names that is present and non-empty."""
    for name in names:
        value = el.get(name)
        if value and value.strip():
            return value.strip()
    return None

def is_sequence(el: Element) -> bool:
    return lname(el) in config.SEQUENCE_TAGS

def is_container(el: Element) -> bool:
    """A sequence element with content, as opposed to a bare reference to one."""
    return is_sequence(el) and len(el) > 0

def sequence_name(seq_elem: Element) -> Optional[str]:
    """Name of a sequence, preferring its own Name child over nested ones."""
    return child_text(seq_elem, ('name',)) or descendant_text(seq_elem, ('name',))

def container_ids(seq_elem: Element) -> List[str]:
    return [seq_elem.get(a).strip() for a in CONTAINER_ID_ATTRS if seq_elem.get(a) and seq_elem.get(a).strip()]

def container_key(seq_elem: Element) -> str:
    """Stable identity of a container for cycle detection."""
    ids = container_ids(seq_elem)
    return ids[0] if ids else f"element:{id(seq_elem)}"

def detect_time_unit(root: Element) -> str:
    """
    Guess whether timeline values are frames or ticks from the document dialect.

    Native .prproj documents (root PremiereData) store ticks; xmeml exports store frames.
    """
    if ln(root.tag).lower() == 'premieredata':
        return TIME_UNIT_TICKS
    return TIME_UNIT_FRAMES

def _walk_containers(el: Element, inside_container: bool) -> Iterator[Tuple[Element, bool]]:
    for child in el:
        if is_container(child):
            yield child, not inside_container
            yield from _walk_containers(child, True)
        else:
            yield from _walk_containers(child, inside_container)

def index_project(root: Element, time_unit: Optional[str] = None) -> ParsedProject:
    """
    Collect the timeline containers of an already parsed document.

    Args:
        root: Root XML element
        time_unit: 'frames' or 'ticks'; detected from the document when None

    Returns:
        ParsedProject for the document
    """
    if time_unit is not None and time_unit not in TIME_UNITS:
        raise ConfigurationError(f"Unknown time unit {time_unit!r}; expected one of {', '.join(TIME_UNITS)}")

    containers = []
    top_level = []
    container_map = {}
    if is_container(root):
        containers.append(root)
        top_level.append(root)
    for el, is_top in _walk_containers(root, is_container(root)):
        containers.append(el)
        if is_top:
            top_level.append(el)
    for el in containers:
        for cid in container_ids(el):
            container_map[cid] = el

    unit = time_unit or detect_time_unit(root)
    logger.debug(f"Found {len(containers)} timeline containers ({len(top_level)} top level), time unit '{unit}'")

    return ParsedProject(
        root=root,
        time_unit=unit,
        containers=containers,
        top_level_containers=top_level,
        container_map=container_map,
    )

class XMLProjectParser:
    """Parser for Premiere XML project files."""

    def parse(self, xml_content: str, time_unit: Optional[str] = None) -> ParsedProject:
        """
        Parse XML content and index its timeline containers.

        Args:
            xml_content: XML content as string
            time_unit: 'frames' or 'ticks'; detected from the document when None

        Returns:
            ParsedProject containing the parsed data

        Raises:
            DocumentParseError: If the content is not well-formed or is rejected by defusedxml
            ConfigurationError: If time_unit is not a known unit
        """
        if time_unit is not None and time_unit not in TIME_UNITS:
            raise ConfigurationError(f"Unknown time unit {time_unit!r}; expected one of {', '.join(TIME_UNITS)}")

        logger.info("Parsing XML content")
        try:
            root = ET.fromstring(xml_content)
        except (ET.ParseError, DefusedXmlException) as e:
            raise DocumentParseError(str(e)) from e

        return index_project(root, time_unit)

    def list_named_sequences(self, root: Element) -> List[str]:
        """
        List all named sequences in the project.

        Args:
            root: Root XML element

        Returns:
            List of sequence names in document order
        """
        seqs = []
        for e in root.iter():
            if is_container(e):
                name = sequence_name(e)
                if name:
                    seqs.append(name)
        return seqs
