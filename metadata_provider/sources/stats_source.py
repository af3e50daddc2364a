"""
Statistics source interface and implementations.

This module defines the StatsSource abstract base class, which supplies
table-level and column-level statistics on demand, and two reference
implementations: an in-memory value and a JSON statistics file kept in the
table root.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from metadata_provider.exceptions import StatisticsParseError
from metadata_provider.models.config import ProviderConfig
from metadata_provider.models.statistics import TableStatistics
from metadata_provider.models.table_handle import TableHandle

logger = logging.getLogger(__name__)


class StatsSource(ABC):
    """Abstract interface for table statistics sources.

    A statistics source returns the statistics of one table, or None when
    nothing is known. Consumers treat None as "unknown", never as zero rows.
    """

    @abstractmethod
    def get(self) -> Optional[TableStatistics]:
        """Return the table statistics, or None if they are not known.

        Raises:
            StatisticsParseError: If stored statistics exist but are malformed.
        """


class StaticStatsSource(StatsSource):
    """Statistics source returning statistics held in memory.

    Example:
        >>> StaticStatsSource(TableStatistics(row_count=1000)).get().row_count
        1000
    """

    def __init__(self, statistics: Optional[TableStatistics]) -> None:
        self.statistics = statistics

    def get(self) -> Optional[TableStatistics]:
        return self.statistics

    def __repr__(self) -> str:
        return f"StaticStatsSource(statistics={self.statistics!r})"


class FileStatsSource(StatsSource):
    """Statistics source backed by a JSON statistics file.

    The file layout is::

        {
            "row_count": 1000,
            "columns": {
                "id": {"null_count": 0, "distinct_count": 1000,
                       "min": 1, "max": 1000}
            }
        }

    A missing file yields None. The file is read once and the result is kept
    until ``reload()`` is called.

    Attributes:
        path: Location of the statistics file.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._loaded = False
        self._statistics: Optional[TableStatistics] = None

    @classmethod
    def for_table(
        cls, table: TableHandle, config: Optional[ProviderConfig] = None
    ) -> "FileStatsSource":
        """Create a source reading the statistics file kept in the table root.

        Raises:
            ValueError: If the table handle has no location.
        """
        config = config or ProviderConfig()
        if not table.location:
            raise ValueError(f"Table '{table.name}' has no location")
        return cls(Path(table.location) / config.stats_file_name)

    def get(self) -> Optional[TableStatistics]:
        if not self._loaded:
            self._statistics = self._load()
            self._loaded = True
        return self._statistics

    def reload(self) -> None:
        """Forget the loaded statistics so the next get() reads the file again."""
        self._loaded = False
        self._statistics = None

    def _load(self) -> Optional[TableStatistics]:
        if not self.path.is_file():
            logger.debug("No statistics file at %s", self.path)
            return None

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StatisticsParseError(
                f"Cannot read statistics file {self.path}: {e}",
                source=str(self.path),
            ) from e

        if not isinstance(data, dict):
            raise StatisticsParseError(
                f"Statistics file {self.path} must contain a JSON object",
                source=str(self.path),
            )

        try:
            statistics = TableStatistics.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise StatisticsParseError(
                f"Invalid statistics file {self.path}: {e}", source=str(self.path)
            ) from e

        logger.debug(
            "Loaded statistics from %s (row_count=%s)",
            self.path,
            statistics.row_count,
        )
        return statistics
