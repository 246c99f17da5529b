"""Consolidación ADGI: solo retiros (take), agrupados por material."""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List

from ..models.history import ADGI_DONE, ADGI_PENDING, TakeEntry
from .stats import SORT_NEWEST, SORT_OLDEST

STATUS_ALL = "all"


@dataclass
class AdgiGroup:
    material_id: str
    material_description: str
    user: str
    first_timestamp: datetime
    last_timestamp: datetime
    total_quantity: int = 0
    bin_numbers: List[int] = field(default_factory=list)
    entries: List[TakeEntry] = field(default_factory=list)

    @property
    def all_done(self):
        return all(e.adgi.is_done for e in self.entries)

    @property
    def adgi_status(self):
        return ADGI_DONE if self.all_done else ADGI_PENDING

    def add(self, entry):
        self.entries.append(entry)
        self.total_quantity += entry.quantity
        if entry.bin_number not in self.bin_numbers:
            self.bin_numbers.append(entry.bin_number)
        self.first_timestamp = min(self.first_timestamp, entry.timestamp)
        self.last_timestamp = max(self.last_timestamp, entry.timestamp)


def consolidate(history):
    """Agrupa los retiros por material_id en orden de primera aparición."""
    groups = {}
    for entry in history:
        if not entry.is_take:
            continue

        group = groups.get(entry.material_id)
        if group is None:
            group = AdgiGroup(
                material_id=entry.material_id,
                material_description=entry.material_description,
                user=entry.user,
                first_timestamp=entry.timestamp,
                last_timestamp=entry.timestamp,
            )
            groups[entry.material_id] = group
        group.add(entry)

    for group in groups.values():
        group.bin_numbers.sort()
    return list(groups.values())


def filter_groups(groups, search="", status=STATUS_ALL, sort=SORT_NEWEST):
    term = (search or "").strip().lower()

    filtrados = [
        g for g in groups
        if (
            not term
            or term in g.material_id.lower()
            or term in g.material_description.lower()
            or term in g.user.lower()
        )
        and (status in (None, "", STATUS_ALL) or g.adgi_status == status)
    ]

    if sort == SORT_OLDEST:
        return sorted(filtrados, key=lambda g: g.first_timestamp)
    return sorted(filtrados, key=lambda g: g.last_timestamp, reverse=True)


def adgi_stats(history, today=None):
    today = today or date.today()
    takes = [h for h in history if h.is_take]
    return {
        "total_takes": len(takes),
        "pending": sum(1 for h in takes if h.adgi.status == ADGI_PENDING),
        "done": sum(1 for h in takes if h.adgi.status == ADGI_DONE),
        "today_takes": sum(1 for h in takes if h.timestamp.date() == today),
    }
