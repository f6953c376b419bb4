"""
Groups clip occurrences into one record per distinct clip.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple
from components.clip_detector import ClipType
from components.filename_classifier import classify
from components.logger import get_logger
from components.source_resolver import MediaSource
from components.time_converter import timecode_range
from components.timeline_walker import ClipOccurrence

logger = get_logger()

RecordKey = Tuple[str, MediaSource, str, ClipType]

@dataclass
class AggregatedClipRecord:
    """A distinct clip with every timeline range it is used in."""
    display_name: str
    type: ClipType
    source: MediaSource
    id: str
    timecode_ranges: List[str] = field(default_factory=list)

    @property
    def key(self) -> RecordKey:
        return (self.display_name, self.source, self.id, self.type)

def aggregate(occurrences: Iterable[ClipOccurrence]) -> List[AggregatedClipRecord]:
    """
    Merge occurrences that classify to the same (name, source, id, type).

    Ranges keep the order the occurrences arrive in; records keep the order
    their key was first seen.

    Args:
        occurrences: Clip occurrences in traversal order

    Returns:
        List of AggregatedClipRecord
    """
    records: Dict[RecordKey, AggregatedClipRecord] = {}
    count = 0

    for occurrence in occurrences:
        count += 1
        classified = classify(occurrence.media_path, occurrence.resolved_name)
        key = (classified.display_name, classified.source, classified.id, classified.type)
        record = records.get(key)
        if record is None:
            record = AggregatedClipRecord(
                display_name=classified.display_name,
                type=classified.type,
                source=classified.source,
                id=classified.id,
            )
            records[key] = record
        record.timecode_ranges.append(timecode_range(occurrence.in_time, occurrence.out_time))

    logger.debug(f"Aggregated {count} occurrences into {len(records)} clips")
    return list(records.values())

def sort_chronologically(records: Iterable[AggregatedClipRecord]) -> List[AggregatedClipRecord]:
    """
    Order records by their earliest timecode range.

    Compares the HH:MM:SS strings directly, which matches chronological order
    for timelines shorter than 24 hours.
    """
    return sorted(records, key=lambda r: min(r.timecode_ranges))
