from typing import Dict, Literal, Tuple

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label

from utils.messages import QuitRequestedMessage

Tone = Literal["default", "warning", "error"]
Variant = Literal["primary", "default", "success", "warning", "error"]


class DialogModal(ModalScreen[bool]):
    """
    Yes/no confirmation, dismissed with True when confirmed.
    """

    # (confirm button, cancel button)
    VARIANT_MAP: Dict[Tone, Tuple[Variant, Variant]] = {
        "default": ("primary", "default"),
        "warning": ("warning", "default"),
        "error": ("error", "primary"),
    }

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(
        self,
        caption: str,
        primary_text: str = "OK",
        secondary_text: str = "Cancel",
        tone: Tone = "default",
    ):
        super().__init__()
        self.caption = caption
        self.primary_text = primary_text
        self.secondary_text = secondary_text
        self.tone = tone

    def compose(self) -> ComposeResult:
        confirm_variant, cancel_variant = self.VARIANT_MAP[self.tone]
        with Container(id="div-dialog"):
            yield Label(self.caption, id="caption")
            with Horizontal(id="dialog"):
                yield Button(self.secondary_text, variant=cancel_variant, id="btn-secondary")
                yield Button(self.primary_text, variant=confirm_variant, id="btn-primary")

    def on_mount(self):
        # destructive dialogs default to the safe choice
        if self.tone == "error":
            self.query_one("#btn-secondary").focus()
        else:
            self.query_one("#btn-primary").focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.respond(event.button.id == "btn-primary")

    def action_cancel(self) -> None:
        self.respond(False)

    def respond(self, confirmed: bool) -> None:
        self.dismiss(confirmed)


class QuitDialogModal(DialogModal):
    def __init__(self):
        super().__init__("Are you sure you want to quit?", "Yes", "No", "error")

    def respond(self, confirmed: bool) -> None:
        if confirmed:
            self.app.post_message(QuitRequestedMessage())
        super().respond(confirmed)
