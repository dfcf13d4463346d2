"""Modal prompt for overriding the city."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label

PROMPT_TEXT = "Enter a city name to override the default location"


class CityPrompt(ModalScreen[str | None]):
    """Asks for a city, seeded with the current location name.

    Dismisses with the trimmed city, or None when cancelled or blank.
    """

    DEFAULT_CSS = """
    CityPrompt {
        align: center middle;
    }

    CityPrompt #prompt-dialog {
        width: 60;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    CityPrompt #prompt-label {
        padding: 0 0 1 0;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    def __init__(self, current_city: str = "") -> None:
        super().__init__()
        self.current_city = current_city

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-dialog"):
            yield Label(PROMPT_TEXT, id="prompt-label")
            yield Input(value=self.current_city, placeholder="City", id="prompt-input")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        city = event.value.strip()
        self.dismiss(city or None)

    def action_cancel(self) -> None:
        self.dismiss(None)
