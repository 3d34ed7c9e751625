"""
Tunable settings for live testing and highlighting.
"""

from dataclasses import dataclass

# Highlight palette, one entry per color slot
DEFAULT_PALETTE = (
    (255, 255, 0),
    (0, 255, 255),
    (255, 0, 255),
    (0, 255, 0),
    (255, 165, 0),
)


@dataclass
class TesterConfig:
    """Debounce windows (seconds), marker styling and the live-testing switch."""

    __test__ = False  # not a pytest test class

    html_debounce: float = 0.3
    selector_debounce: float = 0.5
    color_slots: int = len(DEFAULT_PALETTE)
    css_class_prefix: str = "selector-match"
    live: bool = True

    def __post_init__(self):
        if self.color_slots < 1:
            raise ValueError(f"color_slots must be at least 1, got {self.color_slots}")
        if self.html_debounce < 0 or self.selector_debounce < 0:
            raise ValueError("Debounce delays cannot be negative")
