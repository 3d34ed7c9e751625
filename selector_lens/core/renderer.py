"""
Jinja2 rendering of highlighted source as a standalone HTML page.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import jinja2

from .config import DEFAULT_PALETTE, TesterConfig
from .models import HighlightMarker, Selector, TestResult
from .positions import LineIndex

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def marker_segments(text: str, markers: List[HighlightMarker]) -> List[Tuple[str, Optional[str]]]:
    """
    Split text into runs, each tagged with the CSS class of the innermost marker covering it.

    Markers installed later win where ranges nest.

    Returns:
        List of (chunk, css_class or None) tuples that concatenate back to ``text``
    """
    lines = LineIndex(text)
    spans = []
    for order, marker in enumerate(markers):
        start = min(lines.offset(marker.range.start_line, marker.range.start_col), len(text))
        end = min(lines.offset(marker.range.end_line, marker.range.end_col), len(text))
        if start < end:
            spans.append((start, end, order, marker.css_class))

    boundaries = sorted({0, len(text)} | {s for s, _, _, _ in spans} | {e for _, e, _, _ in spans})

    segments: List[Tuple[str, Optional[str]]] = []
    for left, right in zip(boundaries, boundaries[1:]):
        covering = [span for span in spans if span[0] <= left and right <= span[1]]
        css_class = max(covering, key=lambda span: span[2])[3] if covering else None
        if segments and segments[-1][1] == css_class:
            segments[-1] = (segments[-1][0] + text[left:right], css_class)
        else:
            segments.append((text[left:right], css_class))

    return segments


class HighlightRenderer:
    """Render highlighted source and results through Jinja2 templates."""

    def __init__(self, template_dir: Path = None, config: Optional[TesterConfig] = None):
        """
        Initialize the renderer.

        Args:
            template_dir: Directory containing templates (default: bundled templates)
            config: Marker styling (default: TesterConfig())
        """
        self.template_dir = template_dir or TEMPLATE_DIR
        self.config = config or TesterConfig()

        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            autoescape=jinja2.select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["rgba"] = lambda color, alpha: f"rgba({color[0]}, {color[1]}, {color[2]}, {alpha})"

    def render_page(
        self,
        text: str,
        markers: List[HighlightMarker],
        selector: Selector,
        result: TestResult,
        title: str = "Selector matches",
        template_name: str = "highlight.html.j2",
    ) -> str:
        """
        Render a page with the highlighted source and the match table.

        Args:
            text: The source text
            markers: Markers installed for the result
            selector: The tested selector
            result: The test result
            title: Page title
            template_name: Template to render

        Returns:
            Rendered HTML
        """
        palette = [DEFAULT_PALETTE[i % len(DEFAULT_PALETTE)] for i in range(self.config.color_slots)]
        try:
            template = self.env.get_template(template_name)
        except jinja2.TemplateNotFound:
            logger.error(f"Template not found: {template_name}")
            raise

        return template.render(
            title=title,
            prefix=self.config.css_class_prefix,
            palette=palette,
            segments=marker_segments(text, markers),
            selector=selector,
            result=result,
            position_count=len(markers),
        )
