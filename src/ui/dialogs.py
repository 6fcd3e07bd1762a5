"""Modal dialogs for confirming deletes and collecting names"""

from typing import Optional, Tuple

from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label


class DeleteConfirmScreen(ModalScreen[bool]):
    """Modal screen to confirm deleting a session or window"""

    def __init__(self, question: str):
        super().__init__()
        self.question = question

    def compose(self):
        with Vertical(classes="dialog"):
            yield Label(self.question, classes="question")
            yield Label("This action cannot be undone.", classes="warning")
            with Horizontal(classes="buttons"):
                yield Button("Cancel", variant="default", id="cancel")
                yield Button("Delete", variant="error", id="delete")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "delete")

    def key_escape(self) -> None:
        self.dismiss(False)


class NameInputScreen(ModalScreen[Optional[str]]):
    """Prompt for a single name; dismisses with None when cancelled"""

    def __init__(self, title: str, value: str = "", placeholder: str = "Name"):
        super().__init__()
        self.title_text = title
        self.value = value
        self.placeholder = placeholder
        self._input: Optional[Input] = None

    def compose(self):
        with Vertical(classes="dialog"):
            yield Label(self.title_text, classes="question")
            self._input = Input(value=self.value, placeholder=self.placeholder, id="name-input")
            yield self._input
            with Horizontal(classes="buttons"):
                yield Button("Cancel", variant="default", id="cancel")
                yield Button("Save", variant="primary", id="save")

    def on_mount(self) -> None:
        if self._input:
            self._input.focus()
            self._input.cursor_position = len(self._input.value)

    def _submit(self) -> None:
        name = self._input.value.strip() if self._input else ""
        self.dismiss(name or None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self._submit()
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def key_escape(self) -> None:
        self.dismiss(None)


class CreateSessionScreen(ModalScreen[Optional[Tuple[str, str]]]):
    """Prompt for a new session's name and working directory"""

    def __init__(self, default_directory: str = "~"):
        super().__init__()
        self.default_directory = default_directory

    def compose(self):
        with Vertical(classes="dialog tall"):
            yield Label("Create session", classes="question")
            yield Input(placeholder="my-project", id="session-name")
            yield Input(value=self.default_directory, placeholder="~", id="session-directory")
            with Horizontal(classes="buttons"):
                yield Button("Cancel", variant="default", id="cancel")
                yield Button("Create", variant="primary", id="create")

    def on_mount(self) -> None:
        self.query_one("#session-name", Input).focus()

    def _submit(self) -> None:
        name = self.query_one("#session-name", Input).value.strip()
        if not name:
            self.app.notify("Name required", severity="error")
            return
        directory = self.query_one("#session-directory", Input).value.strip()
        self.dismiss((name, directory or self.default_directory))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "create":
            self._submit()
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def key_escape(self) -> None:
        self.dismiss(None)
