from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

MAX_TAGS = 8


class TagItem(ListItem):
    """Individual tag item widget"""

    def __init__(self, tag: str):
        super().__init__()
        self.tag = tag

    def compose(self) -> ComposeResult:
        yield Label(f"#{self.tag}", classes="tag-name", markup=False)


class TagList(Static):
    """Panel of the most used tags; choosing one searches for it"""

    class TagSelected(Message):
        """Message sent when a tag is selected"""

        def __init__(self, tag: str) -> None:
            super().__init__()
            self.tag = tag

    def __init__(self, tags: list[str], **kwargs):
        super().__init__(**kwargs)
        self._tags = tags[:MAX_TAGS]

    def compose(self) -> ComposeResult:
        with Vertical(id="tag-list-container"):
            yield Static("Popular Categories", id="tag-panel-title")
            yield ListView(*(TagItem(tag) for tag in self._tags), id="tag-list-view")

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, TagItem):
            event.stop()
            self.post_message(self.TagSelected(event.item.tag))
