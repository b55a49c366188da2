from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from playfield import Playfield
from evaluation import judge_touchdown, landing_score

GRAVITY = 0.015          # downward speed gained per tick
THRUST_POWER = 0.04      # thrust impulse per tick along the nose
ROTATION_SPEED = 3.0     # degrees per tick
FUEL_CONSUMPTION = 0.15  # fuel units per thrusting tick
ANGLE_LIMIT = 90.0       # degrees either side of vertical
TICK_RATE = 60           # ticks per second of simulated time

START_X = 50.0
START_Y = 80.0
START_VX = 0.5
START_FUEL = 100.0

DEFAULT_PLAYFIELD = Playfield()


class Phase(Enum):
    TITLE = "title"
    PLAYING = "playing"
    LANDED = "landed"
    CRASHED = "crashed"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.LANDED, Phase.CRASHED)


@dataclass(frozen=True)
class Controls:
    """One tick's snapshot of the logical controls."""
    thrust: bool = False
    rotate_left: bool = False
    rotate_right: bool = False


@dataclass(frozen=True)
class State:
    """Craft kinematics, resources and mission phase after a tick."""
    x: float
    y: float
    vx: float
    vy: float
    fuel: float
    angle: float  # degrees, measured from vertical; 0 = upright
    controls: Controls = field(default_factory=Controls)
    phase: Phase = Phase.TITLE
    score: int = 0

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def altitude(self, playfield: Playfield = DEFAULT_PLAYFIELD) -> float:
        # HUD scale: ten display units per playfield percent above the ground
        return (self.y - playfield.ground) * 10.0


@dataclass
class Outcome:
    landed: bool
    crashed: bool
    final_state: State
    fuel_used: float
    ticks: int


def fresh_state(phase: Phase = Phase.TITLE) -> State:
    return State(
        x=START_X,
        y=START_Y,
        vx=START_VX,
        vy=0.0,
        fuel=START_FUEL,
        angle=0.0,
        phase=phase,
    )


def step(prev: State, controls: Controls, playfield: Playfield = DEFAULT_PLAYFIELD) -> State:
    """
    Advance a playing mission by one tick: rotate, apply gravity and thrust,
    move, burn fuel, then resolve wrap, ceiling and ground contact.
    """
    if prev.phase is not Phase.PLAYING:
        raise ValueError(f"Cannot step a mission in phase {prev.phase.value!r}")

    thrust = controls.thrust and prev.fuel > 0

    ang = prev.angle
    if controls.rotate_left:
        ang -= ROTATION_SPEED
    if controls.rotate_right:
        ang += ROTATION_SPEED
    ang = max(-ANGLE_LIMIT, min(ANGLE_LIMIT, ang))

    vx = prev.vx
    vy = prev.vy - GRAVITY
    if thrust:
        # Thrust follows the nose, so this tick's rotation already counts
        theta = math.radians(ang)
        vx -= math.sin(theta) * THRUST_POWER
        vy += math.cos(theta) * THRUST_POWER

    # Semi-implicit Euler: move by the already-updated velocity
    x = prev.x + vx
    y = prev.y + vy

    fuel = max(0.0, prev.fuel - FUEL_CONSUMPTION) if thrust else prev.fuel

    x = playfield.wrap_x(x)
    y, vy = playfield.bounce_ceiling(y, vy)

    applied = Controls(thrust=thrust, rotate_left=controls.rotate_left, rotate_right=controls.rotate_right)

    if not playfield.touching_ground(y):
        return State(x=x, y=y, vx=vx, vy=vy, fuel=fuel, angle=ang, controls=applied, phase=Phase.PLAYING)

    touch = judge_touchdown(x, vx, vy, ang, playfield)
    if touch.landed:
        # The touchdown tick's burn is not charged; the fuel bonus counts the tank as it was
        return State(
            x=x,
            y=playfield.ground,
            vx=0.0,
            vy=0.0,
            fuel=prev.fuel,
            angle=ang,
            controls=applied,
            phase=Phase.LANDED,
            score=landing_score(prev.fuel, touch.speed, ang),
        )
    return State(x=x, y=y, vx=vx, vy=vy, fuel=fuel, angle=ang, controls=applied, phase=Phase.CRASHED)


def simulate_controls(
    s0: State,
    controls_seq: Iterable[Controls],
    playfield: Playfield = DEFAULT_PLAYFIELD,
) -> Outcome:
    """
    Step s0 through a sequence of control snapshots until the mission ends or
    the sequence runs out. An unfinished run is neither landed nor crashed.
    """
    fuel_start = s0.fuel
    prev = s0
    ticks = 0
    for controls in controls_seq:
        prev = step(prev, controls, playfield)
        ticks += 1
        if prev.phase.is_terminal:
            break

    return Outcome(
        landed=prev.phase is Phase.LANDED,
        crashed=prev.phase is Phase.CRASHED,
        final_state=prev,
        fuel_used=fuel_start - prev.fuel,
        ticks=ticks,
    )
