import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

class MediaSource(str, Enum):
    """Stock providers recognised from filename conventions."""
    COLOURBOX = 'Colourbox'
    IMAGO = 'Imago'
    ARTLIST = 'Artlist'
    OTHER = 'Other'

NO_ID = '-'

@dataclass(frozen=True)
class SourceMatch:
    """A dataclass to hold the results of a source recognition match."""
    source: MediaSource
    media_id: str = NO_ID

class SourceResolver:
    """
    Resolves media filenames to source providers using a registry of tokens
    and id patterns. The registry is checked in order and the first provider
    whose token appears in the filename wins, even if its id pattern fails.
    """
    def __init__(self):
        self._registry: List[Dict[str, Any]] = [
            {
                "source": MediaSource.COLOURBOX,
                "token": "COLOURBOX",
                "regex": re.compile(r"COLOURBOX(\d+)", re.IGNORECASE),
            },
            {
                "source": MediaSource.IMAGO,
                "token": "IMAGO",
                "regex": re.compile(r"IMAGO(\d+)", re.IGNORECASE),
            },
            {
                "source": MediaSource.ARTLIST,
                "token": "ARTLIST",
                # Artlist downloads lead with their numeric id
                "regex": re.compile(r"^(\d+)_"),
            },
        ]
        self.default_match = SourceMatch(source=MediaSource.OTHER)

    def resolve(self, filename: str) -> SourceMatch:
        """
        Find the source provider and media id for a filename.

        Args:
            filename: Bare media filename (no directory part)

        Returns:
            A SourceMatch, or the default 'Other' match with id '-'
        """
        if not filename:
            return self.default_match

        upper = filename.upper()
        for entry in self._registry:
            if entry["token"] not in upper:
                continue
            match = entry["regex"].search(filename)
            return SourceMatch(
                source=entry["source"],
                media_id=match.group(1) if match else NO_ID
            )

        return self.default_match
