import csv
import io
from typing import Iterable, List, Sequence, Tuple
from components.aggregator import AggregatedClipRecord
from components.filename_classifier import classify
from components.time_converter import time_value_to_timecode
from components.timeline_walker import ClipOccurrence

TABLE_HEADERS = ["Name", "Type", "Source", "ID", "Timecodes"]
INSTANCE_HEADERS = ["Track Type", "Track", "Name", "In", "Out", "Sequence"]

def records_to_table(records: Iterable[AggregatedClipRecord]) -> Tuple[List[str], List[List[str]]]:
    """
    Takes aggregated clip records and prepares them for the results table and CSV.
    Each record becomes one row; its timecode ranges go on separate lines of one cell.
    """
    rows = []
    for record in records:
        rows.append([
            record.display_name,
            record.type.value,
            record.source.value,
            record.id,
            "\n".join(record.timecode_ranges),
        ])
    return list(TABLE_HEADERS), rows

def occurrences_to_table(occurrences: Iterable[ClipOccurrence]) -> Tuple[List[str], List[List[str]]]:
    """
    One row per clip instance with its track, display name and in/out timecodes.
    Clips nested in another sequence carry the outer clip's track.
    """
    rows = []
    for occurrence in occurrences:
        name = classify(occurrence.media_path, occurrence.resolved_name).display_name
        rows.append([
            occurrence.track_type or '',
            str(occurrence.track_index) if occurrence.track_index is not None else '',
            name,
            time_value_to_timecode(occurrence.in_time),
            time_value_to_timecode(occurrence.out_time),
            occurrence.sequence_name or '',
        ])
    return list(INSTANCE_HEADERS), rows

def to_csv_string(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Header row first, then one line per row; values with commas or newlines are quoted."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    writer.writerows(rows)
    return output.getvalue()

def records_to_csv(records: Iterable[AggregatedClipRecord]) -> str:
    headers, rows = records_to_table(records)
    return to_csv_string(headers, rows)

def occurrences_to_csv(occurrences: Iterable[ClipOccurrence]) -> str:
    headers, rows = occurrences_to_table(occurrences)
    return to_csv_string(headers, rows)
