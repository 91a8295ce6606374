from typing import Any, ClassVar, List, Optional

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, DataTable, Input, Label

import api.fakestore as fakestore
from api.fakestore import FetchError
from utils.export import ExportError, export_csv, print_report
from utils.logger import get_logger
from utils.pipeline import TablePipeline, TableSpec
from views.base_screen import BaseScreen
from views.tables import ORDERS_TABLE, PRODUCTS_TABLE, USERS_TABLE

_logger = get_logger(__name__)


class TableScreen(BaseScreen):
    """
    Searchable, sortable, paginated view of one FakeStore collection.

    Subclasses set SPEC and implement fetch_records(). Everything shown or
    exported comes from the screen's TablePipeline; exporting never fetches.

    Layout:
    - Search box with Refresh / CSV / PDF buttons.
    - Table of the current page; selecting a header sorts by that column.
    - "Showing a to b of n" and Prev/Next pagination below.
    """

    SPEC: ClassVar[TableSpec]

    BINDINGS = [
        Binding("ctrl+r", "refresh", "Refresh", show=True),
        Binding("ctrl+e", "export_csv", "CSV", show=True),
        Binding("ctrl+o", "export_pdf", "PDF", show=True),
        Binding("pageup", "prev_page", "Prev Page", show=False),
        Binding("pagedown", "next_page", "Next Page", show=False),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.pipeline: TablePipeline = TablePipeline(
            self.SPEC, page_size=self.app.settings.page_size
        )

    def compose(self) -> ComposeResult:
        entity = self.SPEC.entity
        yield from super().compose()
        with Vertical(id="div-table"):
            with Horizontal(id="hort-table-toolbar"):
                yield Input(id="input-search", placeholder=f"Search {entity}...")
                yield Button("Refresh", id="btn-refresh")
                yield Button("CSV", id="btn-export-csv")
                yield Button("PDF", id="btn-export-pdf")
            yield DataTable(id="table-records")
            with Horizontal(id="hort-table-control"):
                yield Label("", id="label-showing")
                yield Button("< Previous", id="btn-prev")
                yield Label("Page 1 of 1", id="label-page")
                yield Button("Next >", id="btn-next")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        self._render_table()
        self.load_records()

    async def fetch_records(self) -> List[Any]:
        raise NotImplementedError

    # ---------------------------
    # Loading
    # ---------------------------

    def action_refresh(self) -> None:
        self.load_records()

    @on(Button.Pressed, "#btn-refresh")
    def handle_refresh(self) -> None:
        self.load_records()

    @work(exclusive=True, group="table-load")
    async def load_records(self) -> None:
        table = self.query_one(DataTable)
        table.loading = True
        try:
            records = await self.fetch_records()
        except FetchError as e:
            # keep showing the last successful load
            _logger.error(str(e))
            self.notify(f"Could not load {self.SPEC.entity}.", severity="error")
            return
        finally:
            table.loading = False

        self.pipeline.load(records)
        self._render_table()

    # ---------------------------
    # Search, sort, pagination
    # ---------------------------

    @on(Input.Changed, "#input-search")
    def handle_search(self, event: Input.Changed) -> None:
        self.pipeline.search(event.value)
        self._render_table()

    @on(DataTable.HeaderSelected)
    def handle_header_selected(self, event: DataTable.HeaderSelected) -> None:
        column = self.SPEC.columns[event.column_index]
        if column.sort_field is None:
            return
        self.pipeline.sort_by(column.sort_field)
        self._render_table()

    @on(Button.Pressed, "#btn-prev")
    def action_prev_page(self) -> None:
        self.pipeline.prev_page()
        self._render_table()

    @on(Button.Pressed, "#btn-next")
    def action_next_page(self) -> None:
        self.pipeline.next_page()
        self._render_table()

    def _column_label(self, index: int) -> str:
        column = self.SPEC.columns[index]
        if column.sort_field is not None and column.sort_field == self.pipeline.sort_field:
            return f"{column.label} {self.pipeline.direction.arrow}"
        return column.label

    def _render_table(self) -> None:
        pipeline = self.pipeline
        table = self.query_one(DataTable)
        table.clear(columns=True)
        table.add_columns(
            *(self._column_label(i) for i in range(len(self.SPEC.columns)))
        )
        table.add_rows(pipeline.table_rows())

        first, last, total = pipeline.showing
        self.query_one("#label-showing", Label).update(
            f"Showing {first} to {last} of {total} {self.SPEC.entity}"
        )
        self.query_one("#label-page", Label).update(
            f"Page {pipeline.page} of {pipeline.total_pages}"
        )
        self.query_one("#btn-prev", Button).disabled = pipeline.page <= 1
        self.query_one("#btn-next", Button).disabled = (
            pipeline.page >= pipeline.total_pages
        )

    # ---------------------------
    # Export
    # ---------------------------

    @on(Button.Pressed, "#btn-export-csv")
    def action_export_csv(self) -> Optional[str]:
        try:
            path = export_csv(
                self.SPEC.entity,
                self.pipeline.csv_headers,
                self.pipeline.csv_rows(),
                self.app.settings.export_dir,
            )
        except ExportError as e:
            _logger.error(str(e))
            self.notify(f"Export failed: {e.reason}", severity="error")
            return None
        if path:
            self.notify(f"Saved {path}")
        else:
            self.notify("Nothing to export.", severity="warning")
        return path

    @on(Button.Pressed, "#btn-export-pdf")
    def action_export_pdf(self) -> None:
        # a blocked browser is not reported to the user
        try:
            print_report(
                self.SPEC.title,
                self.pipeline.report_headers,
                self.pipeline.report_rows(),
                entity=self.SPEC.entity,
            )
        except ExportError as e:
            _logger.error(str(e))
            self.notify(f"Report failed: {e.reason}", severity="error")


class UsersScreen(TableScreen):
    SPEC = USERS_TABLE

    async def fetch_records(self):
        return await fakestore.fetch_users()


class ProductsScreen(TableScreen):
    SPEC = PRODUCTS_TABLE

    async def fetch_records(self):
        return await fakestore.fetch_products()


class OrdersScreen(TableScreen):
    SPEC = ORDERS_TABLE

    async def fetch_records(self):
        return await fakestore.fetch_orders()
