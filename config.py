"""
Configuration settings for the Premiere clip extractor.
Centralizes all constants and configuration values.
"""
from dataclasses import dataclass, field
from typing import Set, Tuple
import os

@dataclass
class Config:
    # Application settings
    SECRET_KEY: str = field(default_factory=lambda: os.environ.get('FLASK_SECRET_KEY', ''))
    MAX_UPLOAD_SIZE: int = 500 * 1024 * 1024  # 500 MB
    CSV_FILENAME: str = 'premiere_clips.csv'
    INSTANCES_CSV_FILENAME: str = 'premiere_clip_instances.csv'

    # Timeline settings
    DEFAULT_FPS: int = 25
    TICKS_PER_SECOND: int = 254016000000  # Premiere Pro ticks
    ROUND_UP_FRAME: int = 13  # Remainder frame at which a timecode rounds up to the next second
    MAX_NESTING_DEPTH: int = 32
    EXPAND_NESTED_SEQUENCES: bool = True

    # Element and attribute vocabulary (matched case-insensitively on local names)
    CLIP_DEFINITION_TAGS: Tuple[str, ...] = ('masterclip',)
    CLIP_ID_ATTRS: Tuple[str, ...] = ('ObjectID', 'ObjectURef', 'ObjectUID', 'id')
    MEDIA_PATH_TAGS: Tuple[str, ...] = (
        'pathurl', 'actualmediafilepath', 'mediapath', 'filepath', 'absolutepath', 'path'
    )
    SEQUENCE_TAGS: Tuple[str, ...] = ('sequence',)
    FLAT_CLIP_TAGS: Tuple[str, ...] = ('clipitem',)
    COMPONENT_TAGS: Tuple[str, ...] = (
        'component', 'clipcomponent', 'trackitem', 'cliptrackitem',
        'videocliptrackitem', 'audiocliptrackitem'
    )
    REFERENCE_TAGS: Tuple[str, ...] = (
        'masterclip', 'masterclipref', 'clipref', 'reference', 'ref', 'subclip', 'sequence', 'sequenceref'
    )
    REFERENCE_ATTRS: Tuple[str, ...] = ('itemid', 'ObjectRef', 'ObjectURef')
    TRACK_TAGS: Tuple[str, ...] = (
        'track', 'videotrack', 'audiotrack', 'videocliptrack', 'audiocliptrack'
    )
    IN_POINT_FIELDS: Tuple[str, ...] = ('start', 'in', 'inpoint')
    OUT_POINT_FIELDS: Tuple[str, ...] = ('end', 'out', 'outpoint')

    # File extension sets for clip type detection (no leading dot)
    VIDEO_EXT: Set[str] = field(default_factory=lambda: {
        'mp4', 'mov', 'avi', 'mkv', 'webm', 'wmv'
    })

    IMAGE_EXT: Set[str] = field(default_factory=lambda: {
        'jpg', 'jpeg', 'png', 'gif', 'tiff', 'tif', 'bmp', 'svg'
    })

    # Upload validation
    ALLOWED_EXT: Set[str] = field(default_factory=lambda: {'.prproj', '.xml'})

# Create a singleton instance
config = Config()
