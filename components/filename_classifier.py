"""
Derives display name, source provider, media id and clip type from a media path.
"""
from dataclasses import dataclass
from typing import Optional
from config import config
from components.clip_detector import ClipType, ClipTypeDetector
from components.source_resolver import MediaSource, SourceResolver

@dataclass(frozen=True)
class ClassifiedClip:
    display_name: str
    type: ClipType
    source: MediaSource
    id: str

_source_resolver = SourceResolver()
_type_detector = ClipTypeDetector()

def extract_filename(media_path: Optional[str]) -> str:
    """
    Return the part of a path or URL after the last slash, without any query string.

    Windows separators are treated like forward slashes.
    """
    if not media_path:
        return ''
    name = media_path.replace('\\', '/').rsplit('/', 1)[-1]
    return name.split('?', 1)[0]

def strip_project_extension(name: Optional[str]) -> str:
    """Remove a trailing .prproj or .xml extension, leaving other dots alone."""
    if not name:
        return ''
    name = name.strip()
    if '.' not in name:
        return name
    base, ext = name.rsplit('.', 1)
    known = {e.lstrip('.') for e in config.ALLOWED_EXT}
    return base if ext.lower() in known else name

def display_name_from_filename(filename: str, fallback_name: Optional[str] = None) -> str:
    """
    Drop the leading provider/id segment and the extension from a filename.

    'COLOURBOX4567_sunset_beach.mp4' -> 'sunset_beach'. When nothing is left
    the fallback name (usually the master clip's Name) is used instead.
    """
    segments = filename.split('_')
    name = '_'.join(segments[1:])
    if '.' in name:
        name = name[:name.rfind('.')]
    if name:
        return name
    return strip_project_extension(fallback_name)

def classify(media_path: str, fallback_name: Optional[str] = None) -> ClassifiedClip:
    """
    Classify a media file from its path.

    Args:
        media_path: Path or URL of the media file
        fallback_name: Name to show when the filename yields no display name

    Returns:
        ClassifiedClip with display name, type, source and id
    """
    filename = extract_filename(media_path)
    source_match = _source_resolver.resolve(filename)
    return ClassifiedClip(
        display_name=display_name_from_filename(filename, fallback_name),
        type=_type_detector.detect_clip_type(filename),
        source=source_match.source,
        id=source_match.media_id,
    )
