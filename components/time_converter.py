"""
Time conversion utilities for Premiere timeline data.
Handles conversion between ticks, frames, seconds, and timecode formats.
"""
from dataclasses import dataclass
from typing import Union
from config import config
from components.errors import ConfigurationError

@dataclass(frozen=True)
class TimeValue:
    """A raw frame or tick count together with its unit scale and frame rate."""
    raw: int
    units_per_second: int
    frame_rate: int

def _check_rates(units_per_second: int, frame_rate: int) -> None:
    if frame_rate is None or frame_rate <= 0:
        raise ConfigurationError(f"Frame rate must be a positive integer, got {frame_rate!r}")
    if units_per_second is None or units_per_second <= 0:
        raise ConfigurationError(f"Units per second must be a positive integer, got {units_per_second!r}")

def round_frame_count(frame_count: int, frame_rate: int) -> int:
    """
    Snap a frame count to a whole second.

    A remainder of ROUND_UP_FRAME frames or more rounds up to the next second,
    anything below rounds down. The threshold does not scale with the frame rate.

    Args:
        frame_count: Number of frames
        frame_rate: Frames per second

    Returns:
        Frame count on a second boundary
    """
    _check_rates(frame_rate, frame_rate)
    remainder = frame_count % frame_rate
    if remainder >= config.ROUND_UP_FRAME:
        return frame_count + (frame_rate - remainder)
    return frame_count - remainder

def tc_from_seconds(s: Union[int, float]) -> str:
    """
    Converts seconds to HH:MM:SS timecode string.

    Args:
        s: Time in seconds

    Returns:
        Formatted timecode string
    """
    s_round = int(round(float(s)))
    if s_round < 0:
        sign = '-'
        s_abs = -s_round
    else:
        sign = ''
        s_abs = s_round

    hh = s_abs // 3600
    mm = (s_abs % 3600) // 60
    ss = s_abs % 60

    return f"{sign}{hh:02d}:{mm:02d}:{ss:02d}"

def to_timecode(raw_units: int, units_per_second: int, frame_rate: int) -> str:
    """
    Convert an editor time value into an HH:MM:SS timecode.

    Args:
        raw_units: Frame count or tick count
        units_per_second: Number of raw units in one second (frame_rate for frames)
        frame_rate: Frames per second

    Returns:
        Timecode string rounded to whole seconds

    Raises:
        ConfigurationError: If frame_rate or units_per_second is not positive
    """
    _check_rates(units_per_second, frame_rate)
    # floor(raw / (units_per_second / frame_rate)) without float error
    frame_count = (raw_units * frame_rate) // units_per_second
    frame_count = round_frame_count(frame_count, frame_rate)
    return tc_from_seconds(frame_count // frame_rate)

def frames_to_timecode(frames: int, frame_rate: int = config.DEFAULT_FPS) -> str:
    """Timecode for a plain frame count."""
    return to_timecode(frames, frame_rate, frame_rate)

def ticks_to_timecode(ticks: int, frame_rate: int = config.DEFAULT_FPS,
                      ticks_per_second: int = config.TICKS_PER_SECOND) -> str:
    """Timecode for a Premiere tick count."""
    return to_timecode(ticks, ticks_per_second, frame_rate)

def time_value_to_timecode(value: TimeValue) -> str:
    return to_timecode(value.raw, value.units_per_second, value.frame_rate)

def timecode_range(in_time: TimeValue, out_time: TimeValue) -> str:
    """Render an in/out pair as 'HH:MM:SS - HH:MM:SS'."""
    return f"{time_value_to_timecode(in_time)} - {time_value_to_timecode(out_time)}"
