from __future__ import annotations

"""
Headless scenario runner

- Drives a Mission tick by tick from a scripted control policy (no wall clock)
- Reports whether the craft landed or crashed, ticks taken, fuel used and score

Usage:
  python run_scenarios.py

Add entries to make_default_scenarios() to try other policies.
"""

import time
from dataclasses import dataclass
from typing import Callable, List

from playfield import Playfield
from physics import DEFAULT_PLAYFIELD, Controls, Outcome, Phase, State, TICK_RATE
from controller import Mission

Policy = Callable[[State, Playfield], Controls]


@dataclass
class Scenario:
    name: str
    policy: Policy
    max_ticks: int = 60 * TICK_RATE
    playfield: Playfield = DEFAULT_PLAYFIELD


def free_fall(s: State, playfield: Playfield) -> Controls:
    return Controls()


def full_burn(s: State, playfield: Playfield) -> Controls:
    return Controls(thrust=True)


def pad_autopilot(s: State, playfield: Playfield) -> Controls:
    """
    Crude attitude/throttle loop: lean against horizontal drift toward the
    pad centre, burn whenever the descent is faster than the glide slope.
    """
    err_x = s.x - playfield.pad_center
    target_angle = max(-20.0, min(20.0, 40.0 * s.vx + 1.5 * err_x))
    rotate_left = s.angle > target_angle + 1.5
    rotate_right = s.angle < target_angle - 1.5

    max_descent = 0.15 + 0.02 * max(0.0, s.y - playfield.ground)
    thrust = s.vy < -max_descent or (abs(s.angle) > 5.0 and s.vy < 0.0)
    return Controls(thrust=thrust, rotate_left=rotate_left, rotate_right=rotate_right)


def make_default_scenarios() -> List[Scenario]:
    return [
        Scenario("FreeFall", free_fall),
        Scenario("FullBurn", full_burn),
        Scenario("PadAutopilot", pad_autopilot),
        Scenario("NarrowPadAutopilot", pad_autopilot, playfield=Playfield.from_bounds(46.0, 54.0)),
    ]


def run_one(scn: Scenario) -> Outcome:
    mission = Mission(scn.playfield)
    s0 = mission.start()
    t0 = time.perf_counter()

    ticks = 0
    while mission.running and ticks < scn.max_ticks:
        mission.tick(scn.policy(mission.state, mission.playfield))
        ticks += 1

    s = mission.state
    out = Outcome(
        landed=s.phase is Phase.LANDED,
        crashed=s.phase is Phase.CRASHED,
        final_state=s,
        fuel_used=s0.fuel - s.fuel,
        ticks=ticks,
    )

    dt = time.perf_counter() - t0
    if out.landed:
        print(f"[OK] {scn.name}: Landed in {ticks} ticks, fuel used {out.fuel_used:.2f}, score {s.score}, time {dt*1000:.1f} ms")
    elif out.crashed:
        miss = mission.playfield.distance_to_pad(s.x, s.y)
        print(f"[X] {scn.name}: Crashed at tick {ticks}, pos=({s.x:.1f}, {s.y:.1f}), {miss:.1f} from pad, speed={s.speed:.2f}, angle={s.angle:.0f}")
    else:
        print(f"[?] {scn.name}: Reached max_ticks without touching down (treat as failure)")
    return out


def main() -> None:
    scenarios = make_default_scenarios()
    for scn in scenarios:
        run_one(scn)


if __name__ == "__main__":
    main()
