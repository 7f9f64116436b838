from __future__ import annotations

import base64
import io
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw

Point = Tuple[float, float]

INK_COLOR = (0, 0, 128, 255)  # #000080
LINE_WIDTH = 2.5


class SignaturePad:
    """
    Freehand signature surface.

    Strokes are kept in logical (surface-relative) coordinates and rasterized at
    `pixel_ratio` on export. No smoothing, no pressure, no undo.
    """

    def __init__(self, width: int = 600, height: int = 320, *, pixel_ratio: float = 1.0) -> None:
        self.width = int(width)
        self.height = int(height)
        self.pixel_ratio = float(pixel_ratio) if pixel_ratio and pixel_ratio > 0 else 1.0
        self._strokes: List[List[Point]] = []
        self._drawing = False
        self._has_content = False

    @property
    def is_drawing(self) -> bool:
        return self._drawing

    @property
    def has_content(self) -> bool:
        return self._has_content

    @property
    def strokes(self) -> List[List[Point]]:
        return [list(s) for s in self._strokes]

    def pointer_down(self, x: float, y: float) -> None:
        self._strokes.append([(float(x), float(y))])
        self._drawing = True
        self._has_content = True

    def pointer_move(self, x: float, y: float) -> None:
        if not self._drawing or not self._strokes:
            return
        self._strokes[-1].append((float(x), float(y)))

    def pointer_up(self) -> Optional[str]:
        """End the stroke; returns the exported image if anything was drawn."""
        self._drawing = False
        if not self._has_content:
            return None
        return self.to_data_url()

    # Leaving the surface ends the stroke the same way releasing does.
    pointer_leave = pointer_up

    def clear(self) -> None:
        self._strokes.clear()
        self._drawing = False
        self._has_content = False

    def render_png(self) -> bytes:
        ratio = self.pixel_ratio
        w = max(1, int(round(self.width * ratio)))
        h = max(1, int(round(self.height * ratio)))
        img = Image.new("RGBA", (w, h), (0, 0, 0, 0))
        drw = ImageDraw.Draw(img)
        line_w = max(1, int(round(LINE_WIDTH * ratio)))
        cap_r = line_w / 2.0
        for stroke in self._strokes:
            if len(stroke) < 2:
                continue
            poly = [(x * ratio, y * ratio) for x, y in stroke]
            drw.line(poly, fill=INK_COLOR, width=line_w, joint="curve")
            for cx, cy in (poly[0], poly[-1]):
                drw.ellipse((cx - cap_r, cy - cap_r, cx + cap_r, cy + cap_r), fill=INK_COLOR)
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def to_data_url(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.render_png()).decode("ascii")
