import asyncio

from textual import work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.binding import Binding
from textual.widgets import Label, MarkdownViewer, Sparkline

import api.fakestore as fakestore
from api.fakestore import FetchError
from utils.dashboard import DashboardData, build_dashboard, category_shares
from utils.logger import get_logger
from utils.pure import generate_markdown_table
from views.base_screen import BaseScreen

_logger = get_logger(__name__)


def render_dashboard_markdown(data: DashboardData) -> str:
    stats = data.stats
    cards = generate_markdown_table(
        ["Total Users", "Total Products", "Total Orders*", "Total Revenue*"],
        [
            [
                stats.total_users,
                stats.total_products,
                stats.total_orders,
                f"${stats.total_revenue:,}",
            ]
        ],
        ["c", "c", "c", "c"],
    )
    categories = generate_markdown_table(
        ["Category", "Products", "Share"],
        [[name, count, f"{pct}%"] for name, count, pct in category_shares(data.categories)],
        ["l", "r", "r"],
    )
    monthly = generate_markdown_table(
        ["Month", "Users", "Orders", "Revenue"],
        [[p.month, p.users, p.orders, f"${p.revenue:,}"] for p in data.monthly],
        ["l", "r", "r", "r"],
    )
    return (
        "### Overview\n\n"
        + cards
        + "\n\n*\\* sample figures, not computed from store data*\n\n"
        + "### Product Categories\n\n"
        + categories
        + "\n\n### Monthly Overview (last 6 months, sample data)\n\n"
        + monthly
        + "\n"
    )


class DashboardScreen(BaseScreen):
    """
    Summary cards, product categories and the monthly overview.
    """

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical(id="div-dashboard"):
            yield MarkdownViewer(id="md-dashboard", show_table_of_contents=False)
            with Horizontal(id="hort-sparklines"):
                with Vertical():
                    yield Label("Users / month")
                    yield Sparkline([], id="spark-users")
                with Vertical():
                    yield Label("Orders / month")
                    yield Sparkline([], id="spark-orders")
                with Vertical():
                    yield Label("Revenue / month")
                    yield Sparkline([], id="spark-revenue")

    BINDINGS = [
        Binding("ctrl+r", "refresh", "Refresh", show=True),
    ]

    def on_mount(self) -> None:
        self.load_dashboard()

    def action_refresh(self) -> None:
        self.load_dashboard()

    @work(exclusive=True)
    async def load_dashboard(self) -> None:
        viewer = self.query_one("#md-dashboard", MarkdownViewer)
        viewer.loading = True
        try:
            users, products = await asyncio.gather(
                fakestore.fetch_users(), fakestore.fetch_products()
            )
        except FetchError as e:
            _logger.error(f"Dashboard data unavailable: {e}")
            return
        finally:
            viewer.loading = False

        data = build_dashboard(users, products)
        await viewer.document.update(render_dashboard_markdown(data))
        self.query_one("#spark-users", Sparkline).data = [p.users for p in data.monthly]
        self.query_one("#spark-orders", Sparkline).data = [p.orders for p in data.monthly]
        self.query_one("#spark-revenue", Sparkline).data = [
            p.revenue for p in data.monthly
        ]
