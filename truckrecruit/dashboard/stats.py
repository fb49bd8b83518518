"""Pure aggregate helpers over already-fetched rows."""

from collections import Counter
from collections.abc import Callable, Iterable


def average(values: Iterable[float]) -> float:
    """Arithmetic mean; 0 for an empty input."""
    items = list(values)
    if not items:
        return 0
    return sum(items) / len(items)


def percentage(used: float, limit: float | None) -> int:
    """round(100 * used / limit); 0 when the limit is 0 or missing."""
    if not limit:
        return 0
    return round(100 * used / limit)


def distribution(items: Iterable, key: Callable[[object], str | None]) -> list[dict]:
    """Count items per label and attach each label's share of the total, largest first."""
    counts = Counter(label for label in (key(i) for i in items) if label)
    total = sum(counts.values())
    return [
        {"label": label, "count": count, "percentage": percentage(count, total)}
        for label, count in counts.most_common()
    ]


def experience_bucket(years: int | None) -> str:
    years = years or 0
    if years <= 2:
        return "0-2 years"
    if years <= 5:
        return "3-5 years"
    if years <= 10:
        return "6-10 years"
    return "10+ years"


def region_of(location: str | None) -> str | None:
    """'Dallas, TX' -> 'TX'; free-form locations are used as-is."""
    if not location:
        return None
    parts = [p.strip() for p in location.split(",") if p.strip()]
    return parts[-1] if parts else None
