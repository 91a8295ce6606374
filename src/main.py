from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

import api.fakestore as fakestore
from utils.config import Settings, load_settings
from utils.messages import QuitRequestedMessage, UserLogoutMessage
from utils.state import SessionStatus, SessionStore
from views.scr_dashboard import DashboardScreen
from views.scr_login import LoginScreen
from views.scr_table import OrdersScreen, ProductsScreen, UsersScreen


class AdminApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "dashboard": DashboardScreen,
        "users": UsersScreen,
        "products": ProductsScreen,
        "orders": OrdersScreen,
    }

    MENU = {
        "dashboard": "Dashboard",
        "users": "Users",
        "products": "Products",
        "orders": "Orders",
    }

    CSS_PATH = [
        "styles/index.tcss",
        "styles/login.tcss",
        "styles/tables.tcss",
        "styles/dashboard.tcss",
    ]

    settings: Settings
    session: SessionStore

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[SessionStore] = None,
    ):
        super().__init__()
        self.settings = settings or load_settings()
        fakestore.configure(self.settings.api_url, self.settings.http_timeout)
        self.session = session or SessionStore(
            self.settings.session_db, login_delay=self.settings.login_delay
        )

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    @on(UserLogoutMessage)
    @work
    async def handle_user_logout(self):
        await self.session.logout()
        self.notify("Logout successful.")
        self.main_flow()

    @on(QuitRequestedMessage)
    def handle_quit(self):
        # the login is kept for the next run
        self.exit()

    @work(exclusive=True, group="main-flow")
    async def main_flow(self):
        if self.session.status is SessionStatus.UNKNOWN:
            await self.session.restore()

        if not self.session.is_authenticated:
            await self.push_screen_wait(LoginScreen())

        await self.switch_mode("dashboard")


def run() -> None:
    AdminApp().run()


if __name__ == "__main__":
    run()
