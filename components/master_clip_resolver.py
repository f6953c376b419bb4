"""
Builds the lookup table of master clips (clip definitions) for one project.
"""
from dataclasses import dataclass
from typing import Dict
from xml.etree.ElementTree import Element
from config import config
from components.logger import get_logger
from components.xml_parser import descendant_text, first_attr, lname

logger = get_logger()

@dataclass(frozen=True)
class MasterClipEntry:
    """One media file as defined once at project level."""
    id: str
    display_name: str
    media_path: str

def build_lookup(root: Element) -> Dict[str, MasterClipEntry]:
    """
    Scan the document for clip-definition nodes.

    The identifier may sit under ObjectID, ObjectURef, ObjectUID or id, tried
    in that order. Definitions without an identifier or a media path are
    dropped. When two definitions share an identifier the later one wins.

    Args:
        root: Root XML element

    Returns:
        Map of identifier to MasterClipEntry
    """
    lookup: Dict[str, MasterClipEntry] = {}
    definition_tags = set(config.CLIP_DEFINITION_TAGS)
    dropped = 0

    for el in root.iter():
        if lname(el) not in definition_tags:
            continue
        clip_id = first_attr(el, config.CLIP_ID_ATTRS)
        media_path = descendant_text(el, config.MEDIA_PATH_TAGS)
        if not clip_id or not media_path:
            dropped += 1
            continue
        if clip_id in lookup:
            logger.debug(f"Master clip '{clip_id}' defined more than once; keeping the later definition")
        lookup[clip_id] = MasterClipEntry(
            id=clip_id,
            display_name=descendant_text(el, ('name',)) or '',
            media_path=media_path,
        )

    logger.debug(f"Built master clip lookup with {len(lookup)} entries ({dropped} definitions without id or media path)")
    return lookup
