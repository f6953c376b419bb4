"""
End-to-end clip extraction for one project document.
"""
import threading
from typing import List, Optional, Tuple
from components.aggregator import AggregatedClipRecord, aggregate, sort_chronologically
from components.errors import ExtractionBusyError, NoTimelineError
from components.logger import get_logger
from components.master_clip_resolver import build_lookup
from components.timeline_walker import ClipOccurrence, TimelineWalker
from components.xml_parser import XMLProjectParser

logger = get_logger()

# Only one extraction runs at a time; overlapping requests are rejected
_run_lock = threading.Lock()

def extract_project(xml_content: str,
                    frame_rate: Optional[int] = None,
                    time_unit: Optional[str] = None,
                    expand_nested: Optional[bool] = None,
                    sort: bool = False) -> Tuple[List[AggregatedClipRecord], List[ClipOccurrence]]:
    """
    Extract grouped clip records and the per-instance occurrences from project XML.

    Args:
        xml_content: XML content as string
        frame_rate: Frames per second (defaults to config.DEFAULT_FPS)
        time_unit: 'frames' or 'ticks'; detected from the document when None
        expand_nested: Flatten nested sequences into their parents
        sort: Order records and occurrences by earliest timecode instead of first appearance

    Returns:
        Tuple of (records, occurrences)

    Raises:
        DocumentParseError: If the XML cannot be parsed
        NoTimelineError: If the document holds no sequence
        ConfigurationError: If frame_rate or time_unit is invalid
        ExtractionBusyError: If another extraction is still running
    """
    if not _run_lock.acquire(blocking=False):
        raise ExtractionBusyError("another project is still being processed")
    try:
        project = XMLProjectParser().parse(xml_content, time_unit=time_unit)
        if not project.containers:
            raise NoTimelineError("the document contains no sequence")

        lookup = build_lookup(project.root)
        walker = TimelineWalker(project, lookup, frame_rate=frame_rate, expand_nested=expand_nested)
        occurrences = list(walker.walk())
        records = aggregate(occurrences)
        logger.info(f"Extracted {len(records)} clips ({len(occurrences)} instances) "
                    f"from {len(project.containers)} sequences")

        if sort:
            records = sort_chronologically(records)
            occurrences = sorted(occurrences, key=lambda o: o.in_time.raw)
        return records, occurrences
    finally:
        _run_lock.release()

def extract_clips(xml_content: str,
                  frame_rate: Optional[int] = None,
                  time_unit: Optional[str] = None,
                  expand_nested: Optional[bool] = None,
                  sort: bool = False) -> List[AggregatedClipRecord]:
    """Extract aggregated clip records from project XML. See extract_project."""
    records, _occurrences = extract_project(xml_content, frame_rate, time_unit, expand_nested, sort)
    return records
