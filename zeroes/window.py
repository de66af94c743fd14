"""Window in the complex plane and its pixel grid."""

from __future__ import annotations

import math
from typing import Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Window:
    """A rectangle of the complex plane sampled by an ``xres`` wide pixel grid.

    The height of the grid is derived from the aspect ratio of the window so
    that pixels are square.
    """

    xmin: float
    xmax: float
    ymin: float
    ymax: float
    xres: int
    yres: int = field(init=False)

    def __post_init__(self) -> None:
        if not self.xmax > self.xmin:
            raise ValueError(f"xmax ({self.xmax}) must be greater than xmin ({self.xmin}).")
        if not self.ymax > self.ymin:
            raise ValueError(f"ymax ({self.ymax}) must be greater than ymin ({self.ymin}).")
        if int(self.xres) != self.xres or self.xres <= 0:
            raise ValueError(f"xres must be a positive integer, got {self.xres!r}.")
        yres = int(round(self.xres * (self.ymax - self.ymin) / (self.xmax - self.xmin)))
        if yres <= 0:
            raise ValueError("The window is too flat: the derived image height is zero.")
        object.__setattr__(self, "xres", int(self.xres))
        object.__setattr__(self, "yres", yres)

    @property
    def x_width(self) -> float:
        return self.xmax - self.xmin

    @property
    def y_width(self) -> float:
        return self.ymax - self.ymin

    @property
    def shape(self) -> tuple[int, int]:
        """Shape of the pixel grid as ``(rows, columns)``."""
        return self.yres, self.xres

    def _x_edge(self, x: int) -> float:
        return self.xmin + self.x_width * x / self.xres

    def _y_edge(self, y: int) -> float:
        return self.ymax - self.y_width * y / self.yres

    def to_pixel(self, re: float, im: float) -> Optional[tuple[int, int]]:
        """Map a point of the plane to ``(x, y)`` pixel coordinates.

        The y axis is inverted so that increasing imaginary parts move up the
        image. The result may lie outside the grid; see :meth:`contains`.
        Returns ``None`` for points too far away to have a pixel coordinate.

        Pixel ``(x, y)`` covers ``[_x_edge(x), _x_edge(x + 1))`` along the real
        axis and ``[_y_edge(y), _y_edge(y - 1))`` along the imaginary axis, so
        the corners returned by :meth:`pixel_to_complex` map back exactly.
        """

        fx = self.xres * (re - self.xmin) / self.x_width
        fy = self.yres * (im - self.ymin) / self.y_width
        if not (math.isfinite(fx) and math.isfinite(fy)):
            return None
        x = math.floor(fx)
        y = self.yres - math.floor(fy)

        # Rounding in fx/fy can land one pixel off the edges.
        if re < self._x_edge(x):
            x -= 1
        elif re >= self._x_edge(x + 1):
            x += 1
        if im < self._y_edge(y):
            y += 1
        elif im >= self._y_edge(y - 1):
            y -= 1
        return x, y

    def pixel_to_complex(self, x: int, y: int) -> complex:
        """Return the point of the plane at the lower-left corner of pixel ``(x, y)``."""
        return complex(self._x_edge(x), self._y_edge(y))

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.xres and 0 <= y < self.yres
