"""Browse scope: where the object browser is looking."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BrowseScope:
    """Composite key identifying the (connection, database, schema) being browsed.

    ``database_type`` is not part of the browse key; it only travels along so
    that console drafts can record which dialect they were opened for.
    """

    data_source_id: str | int | None = None
    database_name: str | None = None
    schema_name: str | None = None
    database_type: str | None = None

    @property
    def is_ready(self) -> bool:
        """Whether fetches may be issued for this scope.

        A data source is required. Beyond that either a database or schema
        must be selected, or both must be absent (a source with no
        sub-selector, e.g. SQLite).
        """
        if not self.data_source_id:
            return False
        if self.database_name or self.schema_name:
            return True
        return self.database_name is None and self.schema_name is None

    def describe(self) -> str:
        if not self.data_source_id:
            return "(no data source)"
        parts = [str(self.data_source_id)]
        if self.database_name:
            parts.append(self.database_name)
        if self.schema_name:
            parts.append(self.schema_name)
        return "/".join(parts)


EMPTY_SCOPE = BrowseScope()
