from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Interval:
    start: int
    end: int
    ongoing: bool = False
    label: Optional[str] = None

    @property
    def length(self):
        return max(0, self.end - self.start)

    def to_dict(self):
        data = {"start": self.start, "end": self.end, "ongoing": self.ongoing}
        if self.label:
            data["label"] = self.label
        return data


@dataclass(frozen=True)
class Timeline:
    spans: List[Interval] = field(default_factory=list)
    raw_years: int = 0
    unique_years: int = 0
    has_overlap: bool = False

    def to_dict(self):
        return {
            "raw_years": self.raw_years,
            "unique_years": self.unique_years,
            "has_overlap": self.has_overlap,
            "spans": [span.to_dict() for span in self.spans],
        }


def make_interval(start, end, as_of_year, label=None):
    """Build an interval, resolving an open end to ``as_of_year``.

    Returns None when the start year is unknown.
    """
    if start is None:
        return None
    if end is None:
        return Interval(start=start, end=max(start, as_of_year), ongoing=True, label=label)
    return Interval(start=start, end=end, ongoing=False, label=label)


def build_timeline(intervals):
    intervals = [item for item in intervals if item is not None]
    raw_years = sum(item.length for item in intervals)
    valid = sorted(
        (item for item in intervals if item.length > 0),
        key=lambda item: (item.start, item.end),
    )

    spans = []
    for item in valid:
        if spans and item.start <= spans[-1].end:
            current = spans[-1]
            end, ongoing = current.end, current.ongoing
            if item.end > end:
                end, ongoing = item.end, item.ongoing
            elif item.end == end and item.ongoing:
                ongoing = True
            spans[-1] = Interval(current.start, end, ongoing, _join_labels(current.label, item.label))
            continue
        spans.append(Interval(item.start, item.end, item.ongoing, item.label))

    unique_years = sum(span.length for span in spans)
    return Timeline(
        spans=spans,
        raw_years=raw_years,
        unique_years=unique_years,
        has_overlap=raw_years > unique_years,
    )


def _join_labels(first, second):
    if not second or second == first:
        return first
    if not first:
        return second
    if second in first.split("; "):
        return first
    return f"{first}; {second}"
