"""
Timeline walking for Premiere projects.
Finds clip instances on every timeline, resolves them to master clips and
flattens nested sequences into one ordered list of occurrences.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple, Union
from xml.etree.ElementTree import Element
from config import config
from components.errors import ConfigurationError
from components.logger import get_logger
from components.master_clip_resolver import MasterClipEntry
from components.time_converter import TimeValue
from components.xml_parser import (
    CONTAINER_ID_ATTRS, TIME_UNIT_TICKS, ParsedProject, child_text, container_key,
    first_attr, index_project, int_or_none, is_container, is_sequence, lname, sequence_name
)

logger = get_logger()

@dataclass(frozen=True)
class TrackContext:
    """Type ('Video'/'Audio') and 1-based index of the track holding a clip."""
    track_type: Optional[str] = None
    track_index: Optional[int] = None

@dataclass(frozen=True)
class ClipOccurrence:
    """One placement of a master clip on a timeline."""
    master_clip_id: str
    resolved_name: str
    media_path: str
    in_time: TimeValue
    out_time: TimeValue
    sequence_name: Optional[str] = None
    track_type: Optional[str] = None
    track_index: Optional[int] = None

# Clip instance shapes found in different project file generations

@dataclass(frozen=True)
class FlatClip:
    """A clipitem carrying its own timing and a masterclipid."""
    node: Element
    reference: Optional[str]
    sequence_ref: Optional[Element] = None

@dataclass(frozen=True)
class WrappedClip:
    """A component wrapper whose nested reference node points at the master clip."""
    node: Element
    reference: str

@dataclass(frozen=True)
class ComponentClip:
    """A component wrapper that names the master clip in its own itemid."""
    node: Element
    reference: str

ClipInstance = Union[FlatClip, WrappedClip, ComponentClip]

def _iter_own(el: Element) -> Iterator[Element]:
    """Descendants of el in document order, not entering nested timeline containers."""
    for child in el:
        yield child
        if not is_container(child):
            yield from _iter_own(child)

def _find_nested_reference(wrapper: Element) -> Optional[str]:
    reference_tags = set(config.REFERENCE_TAGS)
    for d in _iter_own(wrapper):
        if lname(d) in reference_tags:
            ref = first_attr(d, config.REFERENCE_ATTRS)
            if ref:
                return ref
    return None

def match_clip_instance(el: Element) -> Optional[ClipInstance]:
    """
    Match an element against the known clip instance shapes.

    The first applicable shape wins. Returns None for anything that is not a
    clip instance, including component wrappers with no usable reference.
    """
    tag = lname(el)
    if tag in config.FLAT_CLIP_TAGS:
        reference = el.get('masterclipid') or child_text(el, ('masterclipid',))
        sequence_ref = next((c for c in el if is_sequence(c)), None)
        return FlatClip(node=el, reference=reference.strip() if reference else None,
                        sequence_ref=sequence_ref)
    if tag in config.COMPONENT_TAGS:
        ref = _find_nested_reference(el)
        if ref:
            return WrappedClip(node=el, reference=ref)
        own = el.get('itemid')
        if own and own.strip():
            return ComponentClip(node=el, reference=own.strip())
    return None

def _attr_ci(el: Element, name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in el.attrib.items():
        if key.lower() == wanted:
            return value
    return None

def read_time_point(instance: ClipInstance, names: Iterable[str]) -> Optional[int]:
    """
    Read an in or out point from a clip instance.

    Each candidate name is tried as an attribute, then as child text (direct
    children for flat clips, any descendant outside nested sequences for
    wrappers). The first present field decides; a non-numeric value yields
    None. Negative values are kept, xmeml writes -1 for a start hidden under
    a transition.
    """
    node = instance.node
    for name in names:
        raw = _attr_ci(node, name)
        if raw is None:
            if isinstance(instance, FlatClip):
                raw = child_text(node, (name,))
            else:
                raw = next((d.text for d in _iter_own(node)
                            if lname(d) == name.lower() and d.text and d.text.strip()), None)
        if raw is None:
            continue
        value = int_or_none(raw)
        if value is None:
            logger.debug(f"Ignoring {lname(node)} with non-numeric {name} value {raw!r}")
        return value
    return None

class TimelineWalker:
    """Walks the timeline containers of a parsed project."""

    def __init__(self, project: ParsedProject, lookup: Dict[str, MasterClipEntry],
                 frame_rate: Optional[int] = None, expand_nested: Optional[bool] = None,
                 max_depth: Optional[int] = None):
        """
        Initialize the timeline walker.

        Args:
            project: Parsed project with indexed containers
            lookup: Master clip lookup from build_lookup
            frame_rate: Frames per second (defaults to config.DEFAULT_FPS)
            expand_nested: Flatten nested sequences into their parents
            max_depth: Maximum nesting depth followed
        """
        self.project = project
        self.lookup = lookup
        self.frame_rate = config.DEFAULT_FPS if frame_rate is None else frame_rate
        if not isinstance(self.frame_rate, int) or self.frame_rate <= 0:
            raise ConfigurationError(f"Frame rate must be a positive integer, got {self.frame_rate!r}")
        self.expand_nested = config.EXPAND_NESTED_SEQUENCES if expand_nested is None else expand_nested
        self.max_depth = config.MAX_NESTING_DEPTH if max_depth is None else max_depth
        if project.time_unit == TIME_UNIT_TICKS:
            self.units_per_second = config.TICKS_PER_SECOND
        else:
            self.units_per_second = self.frame_rate
        # Containers entered by the current walk, by element identity
        self._walked = set()

    def iter_instances(self, seq_elem: Element) -> Iterator[Tuple[ClipInstance, TrackContext]]:
        """
        Yield the clip instances of one container in document order with their track.

        Matched instances are not searched further and nested containers are
        left to their own walk.
        """
        counters: Dict[Optional[str], int] = {}
        track_tags = set(config.TRACK_TAGS)

        def visit(el: Element, group_type: Optional[str], track: TrackContext):
            for child in el:
                if is_sequence(child):
                    continue
                instance = match_clip_instance(child)
                if instance is not None:
                    yield instance, track
                    continue

                tag = lname(child)
                child_group = group_type
                child_track = track
                if tag in ('video', 'audio'):
                    child_group = tag.capitalize()
                elif tag in track_tags:
                    if tag.startswith('video'):
                        track_type = 'Video'
                    elif tag.startswith('audio'):
                        track_type = 'Audio'
                    else:
                        track_type = group_type
                    counters[track_type] = counters.get(track_type, 0) + 1
                    child_track = TrackContext(track_type, counters[track_type])
                yield from visit(child, child_group, child_track)

        yield from visit(seq_elem, None, TrackContext())

    def nested_target(self, instance: ClipInstance) -> Optional[Element]:
        """The timeline container a clip instance places, if it is a nested sequence."""
        if isinstance(instance, FlatClip):
            if instance.reference and instance.reference in self.lookup:
                return None
            seq = instance.sequence_ref
            if seq is None:
                return None
            if is_container(seq):
                return seq
            ref = first_attr(seq, CONTAINER_ID_ATTRS + ('ObjectURef', 'ObjectRef'))
            return self.project.container_map.get(ref) if ref else None

        if instance.reference in self.lookup:
            return None
        return self.project.container_map.get(instance.reference)

    def root_containers(self):
        """
        Containers to start walking from, in document order.

        With nested expansion, sequences that some clip places as a sub-timeline
        are reached through that clip and are not walked again on their own.
        """
        if not self.expand_nested:
            return list(self.project.containers)

        referenced = set()
        for seq in self.project.containers:
            for instance, _track in self.iter_instances(seq):
                target = self.nested_target(instance)
                if target is not None:
                    referenced.add(id(target))

        roots = [seq for seq in self.project.top_level_containers if id(seq) not in referenced]
        if not roots:
            logger.warning("Every top-level sequence is nested in another one; walking all of them")
            roots = list(self.project.top_level_containers)
        return roots

    def resolve(self, instance: ClipInstance) -> Optional[MasterClipEntry]:
        if not instance.reference:
            logger.warning(f"Skipping {lname(instance.node)} without a master clip reference")
            return None
        entry = self.lookup.get(instance.reference)
        if entry is None:
            logger.warning(f"Skipping clip instance: master clip '{instance.reference}' not found")
        return entry

    def _time(self, raw: int) -> TimeValue:
        return TimeValue(raw, self.units_per_second, self.frame_rate)

    def walk_container(self, seq_elem: Element, offset_raw: int = 0,
                       visiting: FrozenSet[str] = frozenset(), depth: int = 0,
                       outer_track: Optional[TrackContext] = None) -> Iterator[ClipOccurrence]:
        """
        Recursively yield the occurrences of one container.

        Args:
            seq_elem: Sequence element to walk
            offset_raw: Start of this container on the outermost timeline, in raw units
            visiting: Keys of the containers on the current nesting path
            depth: Current nesting depth
            outer_track: Track of the clip that placed this container, if nested
        """
        self._walked.add(id(seq_elem))
        key = container_key(seq_elem)
        visiting = visiting | {key}
        seq_name = sequence_name(seq_elem)

        for instance, track in self.iter_instances(seq_elem):
            if outer_track is not None:
                track = outer_track

            in_raw = read_time_point(instance, config.IN_POINT_FIELDS)
            out_raw = read_time_point(instance, config.OUT_POINT_FIELDS)
            if in_raw is None or out_raw is None:
                logger.debug(f"Skipping clip instance '{instance.reference}' in '{seq_name}': missing in/out point")
                continue

            nested = self.nested_target(instance)
            if nested is not None:
                if not self.expand_nested:
                    logger.debug(f"Not expanding nested sequence '{sequence_name(nested)}' in '{seq_name}'")
                    continue
                nested_key = container_key(nested)
                if nested_key in visiting:
                    logger.warning(f"Sequence '{sequence_name(nested)}' contains itself; not expanding it again")
                    continue
                if depth + 1 > self.max_depth:
                    logger.warning(f"Nesting deeper than {self.max_depth} levels below '{seq_name}'; skipping")
                    continue
                yield from self.walk_container(nested, offset_raw + in_raw, visiting, depth + 1, track)
                continue

            entry = self.resolve(instance)
            if entry is None:
                continue

            yield ClipOccurrence(
                master_clip_id=entry.id,
                resolved_name=entry.display_name or (child_text(instance.node, ('name',)) or ''),
                media_path=entry.media_path,
                in_time=self._time(offset_raw + in_raw),
                out_time=self._time(offset_raw + out_raw),
                sequence_name=seq_name,
                track_type=track.track_type,
                track_index=track.track_index,
            )

    def walk(self) -> Iterator[ClipOccurrence]:
        """
        Yield the occurrences of every root container in document order.

        A top-level sequence left out of the roots because a clip places it, but
        never entered through that clip (missing in/out point, depth cap), is
        walked on its own afterwards.
        """
        self._walked = set()
        for seq_elem in self.root_containers():
            logger.debug(f"Walking sequence '{sequence_name(seq_elem) or container_key(seq_elem)}'")
            yield from self.walk_container(seq_elem)

        for seq_elem in self.project.top_level_containers:
            if id(seq_elem) not in self._walked:
                logger.info(f"Sequence '{sequence_name(seq_elem) or container_key(seq_elem)}' was not reached through its parent; walking it on its own")
                yield from self.walk_container(seq_elem)

def walk(document: Union[ParsedProject, Element], lookup: Dict[str, MasterClipEntry],
         frame_rate: Optional[int] = None, time_unit: Optional[str] = None,
         expand_nested: Optional[bool] = None) -> Iterator[ClipOccurrence]:
    """
    Yield every clip occurrence of a document.

    Args:
        document: ParsedProject, or a root element to index
        lookup: Master clip lookup
        frame_rate: Frames per second (defaults to config.DEFAULT_FPS)
        time_unit: 'frames' or 'ticks' when walking a bare element
        expand_nested: Flatten nested sequences into their parents

    Returns:
        One-shot iterator of ClipOccurrence
    """
    project = document if isinstance(document, ParsedProject) else index_project(document, time_unit)
    return TimelineWalker(project, lookup, frame_rate, expand_nested).walk()
