"""
Slide deck navigation state.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Slide:
    id: str
    name: str
    image_path: str
    uploaded_at: datetime = field(default_factory=datetime.now)


class SlideDeck:
    """Ordered slides plus the play position."""

    def __init__(self, slides: Optional[List[Slide]] = None, title: str = ""):
        self.slides: List[Slide] = list(slides or [])
        self.title = title
        self.current_index = 0
        self.is_playing = False

    def __len__(self) -> int:
        return len(self.slides)

    def index_of(self, slide_id: str) -> int:
        """Position of a slide, or -1 if the deck doesn't hold it."""
        for i, slide in enumerate(self.slides):
            if slide.id == slide_id:
                return i
        return -1

    # Playback

    def start(self, index: int = 0) -> None:
        """Play from the given slide; an out-of-range index starts at the first."""
        self.is_playing = True
        if not self.go_to(index):
            self.current_index = 0

    def end(self) -> None:
        self.is_playing = False
        self.current_index = 0

    def next_slide(self) -> bool:
        """Advance one slide. Returns False at the last slide."""
        if self.current_index + 1 < len(self.slides):
            self.current_index += 1
            return True
        return False

    def previous_slide(self) -> bool:
        """Go back one slide. Returns False at the first slide."""
        if self.current_index - 1 >= 0:
            self.current_index -= 1
            return True
        return False

    def go_to(self, index: int) -> bool:
        if 0 <= index < len(self.slides):
            self.current_index = index
            return True
        return False

    @property
    def current_slide(self) -> Optional[Slide]:
        if 0 <= self.current_index < len(self.slides):
            return self.slides[self.current_index]
        return None

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index >= len(self.slides) - 1
