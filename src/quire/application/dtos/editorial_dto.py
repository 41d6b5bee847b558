"""DTOs for the editorial dashboard."""

from dataclasses import dataclass

from quire.domain.editorial import EditorialStatistics, Magazine


@dataclass(frozen=True)
class DraftDashboard:
    """Draft issues plus current statistics, as shown to moderators."""

    magazines: list[Magazine]
    stats: EditorialStatistics
