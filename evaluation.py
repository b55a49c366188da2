from __future__ import annotations

import math
from dataclasses import dataclass

from playfield import Playfield

# Touchdown tolerances
MAX_LANDING_SPEED = 1.5
MAX_LANDING_ANGLE = 15.0  # degrees; unrelated to the +/-90 attitude limit


@dataclass(frozen=True)
class ScoreWeights:
    """
    Weights for the landing score. Every bonus term is floored before summing,
    and each one shrinks toward zero as its touchdown margin is used up.
    """
    base: int = 1000
    fuel: float = 10.0
    speed: float = 100.0
    angle: float = 5.0


@dataclass(frozen=True)
class Touchdown:
    on_pad: bool
    soft: bool
    level: bool
    speed: float

    @property
    def landed(self) -> bool:
        return self.on_pad and self.soft and self.level


def judge_touchdown(x: float, vx: float, vy: float, angle: float, playfield: Playfield) -> Touchdown:
    """Classify a ground contact against the pad band and the landing tolerances."""
    speed = math.hypot(vx, vy)
    return Touchdown(
        on_pad=playfield.on_pad(x),
        soft=speed <= MAX_LANDING_SPEED,
        level=abs(angle) <= MAX_LANDING_ANGLE,
        speed=speed,
    )


def landing_score(fuel: float, speed: float, angle: float, weights: ScoreWeights = ScoreWeights()) -> int:
    """
    Score a successful landing. Only meaningful for a touchdown that passed
    judge_touchdown, where neither margin can be negative.
    """
    fuel_bonus = math.floor(fuel * weights.fuel)
    speed_bonus = math.floor((MAX_LANDING_SPEED - speed) * weights.speed)
    angle_bonus = math.floor((MAX_LANDING_ANGLE - abs(angle)) * weights.angle)
    return int(weights.base + fuel_bonus + speed_bonus + angle_bonus)
