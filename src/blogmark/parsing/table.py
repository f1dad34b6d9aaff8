"""Table assembly for the tree builder.

Tables arrive as a nested event sequence:

    START(TABLE) START(TABLE_HEAD) [cells...] END(TABLE_HEAD)
    START(TABLE_BODY) START(TABLE_ROW) [cells...] END(TABLE_ROW) ...
    END(TABLE_BODY) END(TABLE)

Cells are built on the component stack like any other container. When a cell
closes it moves into the row buffer of the active TableStage; when a row (or
the head, which markdown-it wraps in a row of its own) closes the buffer
becomes the table's headers or one of its rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from blogmark.errors import InvariantError
from blogmark.nodes import Component, Placeholder, Table, blank


@dataclass(slots=True)
class TableStage:
    """Progress through the table that is currently open.

    Attributes:
        header: The next completed row is the header row
        row: Cells of the row being assembled
    """

    header: bool = True
    row: list[Component] = field(default_factory=list)


class TableAssemblyMixin:
    """Mixin sequencing table head, row and cell events.

    Required Host Attributes:
        - _stack: list[Component]
        - _table: TableStage | None
    """

    _stack: list[Component]
    _table: TableStage | None

    def _require_stage(self, event: str) -> TableStage:
        if self._table is None:
            raise InvariantError(f"{event} outside of a table")
        return self._table

    def _begin_table_head(self) -> None:
        self._table = TableStage(header=True, row=[])

    def _end_table_part(self, event: str) -> None:
        """Head and body ends carry no data of their own."""
        self._require_stage(event)

    def _end_table_cell(self) -> None:
        stage = self._require_stage("table cell end")
        if not self._stack:
            raise InvariantError("table cell end with nothing open")
        cell = self._stack.pop()
        stage.row.append(blank() if isinstance(cell, Placeholder) else cell)

    def _nearest_table(self) -> Table:
        for component in reversed(self._stack):
            if isinstance(component, Table):
                return component
        raise InvariantError("table row end with no table open")

    def _end_table_row(self) -> None:
        stage = self._require_stage("table row end")
        table = self._nearest_table()
        row, stage.row = stage.row, []
        if stage.header:
            table.headers = row
            stage.header = False
        else:
            table.rows.append(row)

    def _end_table(self) -> Table:
        self._require_stage("table end")
        self._table = None
        component = self._stack.pop() if self._stack else None
        if not isinstance(component, Table):
            raise InvariantError(f"table end closed {type(component).__name__}")
        return component


__all__ = ["TableAssemblyMixin", "TableStage"]
