from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo

from ..dates.resolver import local_date
from .model import Exemption


@dataclass(frozen=True)
class ExemptionIndex:
    """Effective exemptions grouped by member, built once per request."""

    by_member: Mapping[str, Tuple[Exemption, ...]] = field(default_factory=dict)

    @classmethod
    def build(cls, exemptions: Iterable[Exemption], tz: ZoneInfo) -> "ExemptionIndex":
        grouped = defaultdict(list)
        for exemption in exemptions:
            if not exemption.is_effective:
                continue
            # Stored bounds may be timestamps; compare on the organization's calendar.
            normalized = replace(
                exemption,
                start_date=local_date(exemption.start_date, tz),
                end_date=local_date(exemption.end_date, tz) if exemption.end_date else None,
            )
            grouped[normalized.member_id].append(normalized)
        return cls(by_member={member_id: tuple(items) for member_id, items in grouped.items()})

    def exemption_for(self, member_id: str, day: date) -> Optional[Exemption]:
        for exemption in self.by_member.get(member_id, ()):
            if exemption.covers(day):
                return exemption
        return None

    def is_exempted(self, member_id: str, day: date) -> bool:
        return self.exemption_for(member_id, day) is not None
