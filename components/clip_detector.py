"""
Clip type detection for Premiere timeline items.
Determines clip types (Video, Image, GraphicElement) from media file extensions.
"""
from enum import Enum
from typing import Optional
from config import config

class ClipType(str, Enum):
    VIDEO = 'Video'
    IMAGE = 'Image'
    GRAPHIC_ELEMENT = 'GraphicElement'

class ClipTypeDetector:
    """Detects clip types based on file extensions."""

    def __init__(self):
        """Initialize the clip type detector with extension sets from config."""
        self.video_exts = config.VIDEO_EXT
        self.image_exts = config.IMAGE_EXT

    def find_extension_in_string(self, s: Optional[str]) -> str:
        """
        Extract the lowercased text after the last dot of a filename.

        Args:
            s: Filename to inspect

        Returns:
            Extension without the dot, or '' if there is none
        """
        if not s or '.' not in s:
            return ''
        return s.rsplit('.', 1)[1].lower()

    def detect_clip_type(self, filename: Optional[str]) -> ClipType:
        """
        Determine clip type from a filename.

        Anything that is not a known video or image extension is treated as a
        graphic element (titles, MOGRTs, adjustment layers and the like).
        """
        ext = self.find_extension_in_string(filename)
        if ext in self.video_exts:
            return ClipType.VIDEO
        if ext in self.image_exts:
            return ClipType.IMAGE
        return ClipType.GRAPHIC_ELEMENT
