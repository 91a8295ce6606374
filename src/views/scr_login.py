from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.widgets import Button, Input, Label

from utils.state import InvalidCredentialsError
from views.base_screen import BaseScreen
from views.modal_dialog import QuitDialogModal


class LoginScreen(BaseScreen):
    """
    Mock login gate. Dismissed with the SessionUser once the session store
    accepted the credentials.
    """

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Login", show_sidebar=False)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical(id="div-login"):
            yield Label("Sign in to the admin panel", id="label-login-title")
            yield Label("Username")
            yield Input(placeholder="admin", id="input-login-username")
            yield Label("Password")
            yield Input(placeholder="*********", password=True, id="input-login-pwd")
            yield Label("", id="label-login-error")
            with Horizontal(id="div-login-btns"):
                yield Button("Quit", id="btn-quit")
                yield Button("Login", id="btn-login", variant="primary")
            yield Label(
                "Demo accounts: admin / admin123, user / user123",
                id="label-login-hint",
            )

    def on_mount(self):
        self.query_one("#input-login-username").focus()

    def on_key(self, event: Key) -> None:
        if event.key == "enter" and self.focused == self.query_one("#input-login-pwd"):
            self.handle_login_submit()

    def _show_error(self, text: str) -> None:
        self.query_one("#label-login-error", Label).update(text)

    @on(Button.Pressed, "#btn-login")
    @work(exclusive=True)
    async def handle_login_submit(self) -> None:
        username = self.query_one("#input-login-username", Input).value.strip()
        pwd = self.query_one("#input-login-pwd", Input).value.strip()

        if not username or not pwd:
            self._show_error("Username or password cannot be empty!")
            return

        btn_login = self.query_one("#btn-login", Button)
        btn_login.disabled = True
        btn_login.label = "Signing in..."
        self._show_error("")
        try:
            user = await self.app.session.login(username, pwd)
        except InvalidCredentialsError as e:
            self._show_error(f"{e}.")
            input_login_pwd = self.query_one("#input-login-pwd", Input)
            input_login_pwd.value = ""
            input_login_pwd.focus()
            input_login_pwd.add_class("-invalid")
            return
        finally:
            btn_login.disabled = False
            btn_login.label = "Login"

        self.notify(f"Hello {user.username}!")
        self.dismiss(user)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit_pressed(self) -> None:
        self.app.push_screen(QuitDialogModal())
