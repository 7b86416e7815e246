"""Single-line editable text field."""

from .events import Key, KeyMsg
from .render import styled


class TextInput:
    """Editable value with a cursor; handles the usual readline keys."""

    def __init__(self, placeholder: str = "", value: str = ""):
        self.placeholder = placeholder
        self.value = value
        self.cursor = len(value)

    def set_value(self, value: str):
        self.value = value
        self.cursor = len(value)

    def handle_key(self, msg: KeyMsg) -> bool:
        """Apply an editing key. Returns True if the value changed."""
        before = self.value
        if msg.key in (Key.RUNE, Key.SPACE):
            self.value = self.value[:self.cursor] + msg.text + self.value[self.cursor:]
            self.cursor += len(msg.text)
        elif msg.key == Key.BACKSPACE:
            if self.cursor > 0:
                self.value = self.value[:self.cursor - 1] + self.value[self.cursor:]
                self.cursor -= 1
        elif msg.key == Key.DELETE:
            self.value = self.value[:self.cursor] + self.value[self.cursor + 1:]
        elif msg.key == Key.LEFT:
            self.cursor = max(self.cursor - 1, 0)
        elif msg.key == Key.RIGHT:
            self.cursor = min(self.cursor + 1, len(self.value))
        elif msg.key in (Key.HOME, "ctrl+a"):
            self.cursor = 0
        elif msg.key in (Key.END, "ctrl+e"):
            self.cursor = len(self.value)
        elif msg.key == "ctrl+u":
            self.value = self.value[self.cursor:]
            self.cursor = 0
        elif msg.key == "ctrl+k":
            self.value = self.value[:self.cursor]
        elif msg.key == "ctrl+w":
            head = self.value[:self.cursor].rstrip()
            cut = max(head.rfind(" "), head.rfind("/")) + 1
            self.value = self.value[:cut] + self.value[self.cursor:]
            self.cursor = cut
        return self.value != before

    def view(self, focused: bool, color: int, text_color: int) -> str:
        """Render the value with a block cursor when focused."""
        if not self.value and not focused:
            return styled(self.placeholder, text_color)
        if not focused:
            return styled(self.value, text_color)
        head = self.value[:self.cursor]
        at = self.value[self.cursor:self.cursor + 1] or " "
        tail = self.value[self.cursor + 1:]
        cursor = styled(at, color, reverse=True)
        if not self.value:
            return cursor + styled(self.placeholder, text_color)
        return styled(head, color) + cursor + styled(tail, color)
