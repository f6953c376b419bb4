import pytest

from components.xml_parser import XMLProjectParser


SUNSET_PROJECT = """<?xml version="1.0" encoding="UTF-8"?>
<project>
  <bin>
    <masterclip ObjectID="M1">
      <name>Sunset</name>
      <pathurl>file:///Volumes/Media/clips/COLOURBOX4567_sunset.mp4</pathurl>
    </masterclip>
  </bin>
  <sequence id="sequence-1">
    <name>Main</name>
    <media>
      <video>
        <track>
          <clipitem id="clipitem-1">
            <masterclipid>M1</masterclipid>
            <start>0</start>
            <end>100</end>
          </clipitem>
          <clipitem id="clipitem-2">
            <masterclipid>M1</masterclipid>
            <start>500</start>
            <end>600</end>
          </clipitem>
        </track>
      </video>
    </media>
  </sequence>
</project>
"""


@pytest.fixture
def sunset_xml():
    return SUNSET_PROJECT


@pytest.fixture
def parse():
    """Parse an XML string into a ParsedProject."""
    parser = XMLProjectParser()

    def _parse(xml_content, time_unit=None):
        return parser.parse(xml_content, time_unit=time_unit)

    return _parse
