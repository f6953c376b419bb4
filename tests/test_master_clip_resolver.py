"""Tests for the master clip lookup."""

from components.master_clip_resolver import MasterClipEntry, build_lookup


def _lookup(parse, body):
    return build_lookup(parse(f"<project>{body}</project>").root)


def test_object_id(parse):
    lookup = _lookup(parse, """
        <MasterClip ObjectID="M1">
          <Name>Sunset</Name>
          <Media><ActualMediaFilePath>/clips/COLOURBOX4567_sunset.mp4</ActualMediaFilePath></Media>
        </MasterClip>
    """)
    assert lookup == {"M1": MasterClipEntry("M1", "Sunset", "/clips/COLOURBOX4567_sunset.mp4")}


def test_object_uref_fallback_and_precedence(parse):
    lookup = _lookup(parse, """
        <masterclip ObjectURef="U1"><pathurl>/a.mp4</pathurl></masterclip>
        <masterclip ObjectID="I2" ObjectURef="U2"><pathurl>/b.mp4</pathurl></masterclip>
    """)
    assert set(lookup) == {"U1", "I2"}
    assert lookup["U1"].display_name == ""


def test_entries_without_id_or_path_are_dropped(parse):
    lookup = _lookup(parse, """
        <masterclip><pathurl>/no-id.mp4</pathurl></masterclip>
        <masterclip ObjectID="NOPATH"><name>Nothing</name></masterclip>
        <masterclip ObjectID="BLANK"><pathurl>   </pathurl></masterclip>
        <masterclip ObjectID="OK"><pathurl>/ok.mp4</pathurl></masterclip>
    """)
    assert list(lookup) == ["OK"]


def test_last_definition_wins(parse):
    lookup = _lookup(parse, """
        <masterclip ObjectID="M1"><name>First</name><pathurl>/first.mp4</pathurl></masterclip>
        <masterclip ObjectID="M1"><name>Second</name><pathurl>/second.mp4</pathurl></masterclip>
    """)
    assert lookup["M1"] == MasterClipEntry("M1", "Second", "/second.mp4")


def test_reference_without_path_does_not_overwrite(parse):
    lookup = _lookup(parse, """
        <masterclip ObjectID="M1"><pathurl>/real.mp4</pathurl></masterclip>
        <sequence><masterclip ObjectURef="M1"/></sequence>
    """)
    assert lookup["M1"].media_path == "/real.mp4"


def test_namespaced_tags(parse):
    lookup = build_lookup(parse("""
        <p:project xmlns:p="urn:example">
          <p:MasterClip ObjectID="N1"><p:pathurl>/ns.mov</p:pathurl></p:MasterClip>
        </p:project>
    """).root)
    assert lookup["N1"].media_path == "/ns.mov"
