"""End-to-end tests for the extraction pipeline."""

import pytest

from components import extractor
from components.clip_detector import ClipType
from components.errors import (
    ConfigurationError,
    DocumentParseError,
    ExtractionBusyError,
    ExtractionError,
    NoTimelineError,
)
from components.extractor import extract_clips, extract_project
from components.source_resolver import MediaSource


def test_sunset_example(sunset_xml):
    records = extract_clips(sunset_xml)
    assert len(records) == 1
    record = records[0]
    assert record.display_name == "sunset"
    assert record.type == ClipType.VIDEO
    assert record.source == MediaSource.COLOURBOX
    assert record.id == "4567"
    assert record.timecode_ranges == ["00:00:00 - 00:00:04", "00:00:20 - 00:00:24"]


def test_unresolvable_reference_does_not_fail_the_run(sunset_xml):
    # The masterclipid attribute takes precedence over the child element
    xml = sunset_xml.replace('<clipitem id="clipitem-2">', '<clipitem id="clipitem-2" masterclipid="MISSING">')
    records = extract_clips(xml)
    assert len(records) == 1
    assert records[0].timecode_ranges == ["00:00:00 - 00:00:04"]


def test_all_occurrences_unresolvable_gives_empty_result(sunset_xml):
    assert extract_clips(sunset_xml.replace('ObjectID="M1"', 'ObjectID="OTHER"')) == []


def test_sort_option(sunset_xml):
    xml = sunset_xml.replace("""<masterclip ObjectID="M1">""", """<masterclip ObjectID="M0">
      <pathurl>/clips/IMAGO1_early.jpg</pathurl>
    </masterclip>
    <masterclip ObjectID="M1">""").replace(
        "</track>",
        "<clipitem><masterclipid>M0</masterclipid><start>25</start><end>50</end></clipitem></track>",
    )
    assert [r.display_name for r in extract_clips(xml)] == ["sunset", "early"]
    assert [r.display_name for r in extract_clips(xml, sort=True)] == ["sunset", "early"]
    later = xml.replace("<start>0</start>", "<start>1000</start>").replace("<end>100</end>", "<end>1100</end>")
    later = later.replace("<start>500</start>", "<start>1500</start>").replace("<end>600</end>", "<end>1600</end>")
    assert [r.display_name for r in extract_clips(later, sort=True)] == ["early", "sunset"]


def test_malformed_xml():
    with pytest.raises(DocumentParseError) as info:
        extract_clips("<project><sequence>")
    assert isinstance(info.value, ValueError)
    assert "Invalid project XML" in str(info.value)


def test_entity_declarations_are_rejected():
    xml = '<!DOCTYPE p [<!ENTITY a "aaaa">]><project>&a;</project>'
    with pytest.raises(DocumentParseError):
        extract_clips(xml)


@pytest.mark.parametrize("xml", [
    "<project><masterclip ObjectID='M1'><pathurl>/a.mp4</pathurl></masterclip></project>",
    "<project><clipitem><sequence id='only-a-reference'/></clipitem></project>",
])
def test_no_timeline(xml):
    with pytest.raises(NoTimelineError):
        extract_clips(xml)


def test_invalid_configuration(sunset_xml):
    with pytest.raises(ConfigurationError):
        extract_clips(sunset_xml, frame_rate=0)
    with pytest.raises(ConfigurationError):
        extract_clips(sunset_xml, time_unit="seconds")


def test_concurrent_run_is_rejected(sunset_xml):
    assert extractor._run_lock.acquire(blocking=False)
    try:
        with pytest.raises(ExtractionBusyError) as info:
            extract_clips(sunset_xml)
        assert isinstance(info.value, ExtractionError)
    finally:
        extractor._run_lock.release()
    # The guard is released again after a failed run
    with pytest.raises(DocumentParseError):
        extract_clips("not xml")
    assert len(extract_clips(sunset_xml)) == 1


def test_extract_project_returns_instances(sunset_xml):
    records, occurrences = extract_project(sunset_xml)
    assert len(records) == 1
    assert [(o.track_type, o.track_index, o.sequence_name) for o in occurrences] == [
        ("Video", 1, "Main"), ("Video", 1, "Main")
    ]
    assert [o.in_time.raw for o in occurrences] == [0, 500]


def test_transition_placeholder_start_keeps_clip(sunset_xml):
    # xmeml writes -1 as the start of a clip that begins under a transition
    xml = sunset_xml.replace(
        "<start>500</start>", "<start>-1</start><in>10</in>"
    ).replace("<end>600</end>", "<end>600</end><out>120</out>")
    records = extract_clips(xml)
    assert records[0].timecode_ranges == ["00:00:00 - 00:00:04", "00:00:00 - 00:00:24"]
