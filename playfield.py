from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Playfield:
    """
    Bounded playfield in percentage coordinates: x wraps across [0, width),
    y is capped by the ceiling and the craft touches down at `ground`.
    """
    width: float = 100.0
    ceiling: float = 95.0
    ceiling_damping: float = 0.5  # fraction of vertical speed kept on a ceiling bounce
    ground: float = 12.0           # ground-contact threshold
    pad_left: float = 40.0
    pad_right: float = 60.0

    @property
    def pad_xrange(self) -> Tuple[float, float]:
        return (self.pad_left, self.pad_right)

    @property
    def pad_center(self) -> float:
        return 0.5 * (self.pad_left + self.pad_right)

    def wrap_x(self, x: float) -> float:
        """Teleport x to the opposite edge once it leaves [0, width)."""
        if x >= self.width:
            return 0.0
        if x < 0.0:
            # the left edge re-enters at the far side, kept inside [0, width)
            wrapped = x % self.width
            return wrapped if wrapped < self.width else 0.0
        return x

    def on_pad(self, x: float) -> bool:
        return self.pad_left <= x <= self.pad_right

    def bounce_ceiling(self, y: float, vy: float) -> Tuple[float, float]:
        """Clamp y to the ceiling and send the craft back down at reduced speed."""
        if y > self.ceiling:
            return self.ceiling, -abs(vy) * self.ceiling_damping
        return y, vy

    def touching_ground(self, y: float) -> bool:
        return y <= self.ground

    def nearest_point_on_pad(self, x: float) -> Tuple[float, float]:
        """Project x onto the pad surface and return that point."""
        nx = min(max(x, self.pad_left), self.pad_right)
        return (nx, self.ground)

    def distance_to_pad(self, x: float, y: float) -> float:
        """Euclidean distance from (x,y) to the pad surface."""
        nx, ny = self.nearest_point_on_pad(x)
        dx = x - nx
        dy = y - ny
        return (dx * dx + dy * dy) ** 0.5

    @classmethod
    def from_bounds(
        cls,
        pad_left: float,
        pad_right: float,
        ground: float = 12.0,
        ceiling: float = 95.0,
        width: float = 100.0,
    ) -> "Playfield":
        if width <= 0.0:
            raise ValueError("Playfield width must be positive")
        if pad_left >= pad_right:
            raise ValueError("Landing pad band is empty")
        if pad_left < 0.0 or pad_right > width:
            raise ValueError("Landing pad lies outside the playfield")
        if ceiling <= ground:
            raise ValueError("Ceiling must be above the ground threshold")
        return cls(
            width=float(width),
            ceiling=float(ceiling),
            ground=float(ground),
            pad_left=float(pad_left),
            pad_right=float(pad_right),
        )
