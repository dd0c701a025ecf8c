"""
Side-by-side placement of overlapping sessions within one day column.

Sessions are grouped into clusters: an interval joins the first cluster that
has any member overlapping it. Grouping is therefore transitive, and two
sessions that do not overlap each other can share a cluster through a third
one. Each member of a cluster gets its position in the cluster as column
index and the cluster size as column count.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from .types import PositionedSession

logger = logging.getLogger(__name__)

DEFAULT_MARGIN = 1.0
DEFAULT_GAP = 0.5


@dataclass(frozen=True)
class Interval:
    """Half-open vertical extent ``[start, end)`` in pixels."""
    key: Any
    start: float
    end: float

    def overlaps(self, other):
        if self.start == other.start:
            return True
        return self.start < other.end and other.start < self.end


def cluster_intervals(intervals: Iterable[Interval]) -> List[List[Interval]]:
    ordered = sorted(intervals, key=lambda interval: interval.start)
    clusters: List[List[Interval]] = []

    for interval in ordered:
        for cluster in clusters:
            if any(member.overlaps(interval) for member in cluster):
                cluster.append(interval)
                break
        else:
            clusters.append([interval])

    return clusters


def assign_columns(intervals: Iterable[Interval]) -> Dict[Any, Tuple[int, int]]:
    """
    Assign each interval a column within its cluster.

    Returns:
        Mapping of interval key to (column_index, cluster_size)
    """
    assignments = {}
    for cluster in cluster_intervals(intervals):
        for index, interval in enumerate(cluster):
            assignments[interval.key] = (index, len(cluster))
    return assignments


def column_geometry(index: int, size: int, margin: float = DEFAULT_MARGIN,
                    gap: float = DEFAULT_GAP) -> Tuple[float, float]:
    """
    Horizontal geometry of one column, in percent of the day column.

    Returns:
        Tuple of (left, width)
    """
    slot = (100 - 2 * margin) / size
    return margin + slot * index, slot - gap


def position_sessions(sessions, mapper, min_height=24, margin=DEFAULT_MARGIN,
                      gap=DEFAULT_GAP) -> List[PositionedSession]:
    """
    Lay out one day's sessions on the time grid.

    Args:
        sessions: same-day sessions (start_time and duration_minutes required);
            sessions starting outside the mapper's hours are skipped
        mapper: TimeGridMapper
        min_height: minimum pixel height so very short sessions stay visible

    Returns:
        List of PositionedSession sorted by top offset
    """
    positioned = []
    for session in sessions:
        if not mapper.contains(session.start_time):
            logger.debug("Session %s starts outside the grid window; not drawn",
                         getattr(session, 'pk', None))
            continue
        top = mapper.time_to_offset(session.start_time)
        height = max(mapper.duration_to_height(session.duration_minutes), min_height)
        positioned.append(PositionedSession(session=session, top=top, height=height))

    positioned.sort(key=lambda item: item.top)

    intervals = [
        Interval(key=index, start=item.top, end=item.bottom)
        for index, item in enumerate(positioned)
    ]
    for index, (column, size) in assign_columns(intervals).items():
        item = positioned[index]
        item.column = column
        item.cluster_size = size
        item.left, item.width = column_geometry(column, size, margin, gap)

    return positioned
