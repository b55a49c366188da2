from __future__ import annotations

"""
Mission driver

- Samples held keys once per tick into a Controls snapshot
- Owns the single simulation State and replaces it wholesale each tick
- Runs the fixed 60 Hz cadence only while the mission is playing
- start/restart are phase transitions that always build a fresh state

Run as a script for a headless line protocol on stdin: each line lists the
keys held for one tick ("w a", or an empty line for none), or is one of the
commands "start" / "restart". One status line per tick goes to stdout;
diagnostics go to stderr.
"""

import sys
import time
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Set

from playfield import Playfield
from physics import DEFAULT_PLAYFIELD, TICK_RATE, Controls, Phase, State, fresh_state, step

TICK_DT = 1.0 / TICK_RATE
MAX_SUBSTEPS = 5  # catch-up ticks per frame before the backlog is dropped

KEY_BINDINGS: Dict[str, str] = {
    "arrowup": "thrust",
    "w": "thrust",
    "space": "thrust",
    "arrowleft": "rotate_left",
    "a": "rotate_left",
    "arrowright": "rotate_right",
    "d": "rotate_right",
}


def log_err(msg: str) -> None:
    sys.stderr.write(msg + "\n")
    sys.stderr.flush()


def _normalize_key(key: str) -> str:
    if key == " ":
        return "space"
    return key.strip().lower()


class ControlSource(Protocol):
    def snapshot_controls(self) -> Controls: ...


class HeldKeys:
    """Keys currently held, written by whatever input source is attached."""

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._held: Set[str] = set()
        for k in keys:
            self.press(k)

    def press(self, key: str) -> None:
        self._held.add(_normalize_key(key))

    def release(self, key: str) -> None:
        self._held.discard(_normalize_key(key))

    def clear(self) -> None:
        self._held.clear()

    def __contains__(self, key: str) -> bool:
        return _normalize_key(key) in self._held

    def snapshot_controls(self) -> Controls:
        active = {KEY_BINDINGS[k] for k in frozenset(self._held) if k in KEY_BINDINGS}
        return Controls(
            thrust="thrust" in active,
            rotate_left="rotate_left" in active,
            rotate_right="rotate_right" in active,
        )


Listener = Callable[[State], None]


class Mission:
    """
    Owner of the one simulation State. Physics only happens through tick(),
    and only while the phase is PLAYING.
    """

    def __init__(self, playfield: Playfield = DEFAULT_PLAYFIELD) -> None:
        self.playfield = playfield
        self.state: State = fresh_state()
        self._listeners: List[Listener] = []
        self._looping = False

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def running(self) -> bool:
        return self.state.phase is Phase.PLAYING

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _publish(self) -> None:
        for listener in self._listeners:
            listener(self.state)

    def start(self) -> State:
        if self.state.phase is not Phase.TITLE:
            raise ValueError(f"start() requires the title phase, mission is {self.state.phase.value!r}")
        return self._launch()

    def restart(self) -> State:
        if not self.state.phase.is_terminal:
            raise ValueError(f"restart() requires a finished mission, mission is {self.state.phase.value!r}")
        return self._launch()

    def _launch(self) -> State:
        self.state = fresh_state(Phase.PLAYING)
        log_err("[mission] playing")
        self._publish()
        return self.state

    def tick(self, controls: Controls) -> State:
        prev_phase = self.state.phase
        self.state = step(self.state, controls, self.playfield)
        if self.state.phase is not prev_phase:
            if self.state.phase is Phase.LANDED:
                log_err(f"[mission] landed score={self.state.score} fuel={self.state.fuel:.2f}")
            else:
                log_err(
                    f"[mission] {self.state.phase.value} x={self.state.x:.2f} "
                    f"vx={self.state.vx:.3f} vy={self.state.vy:.3f} angle={self.state.angle:.0f}"
                )
        self._publish()
        return self.state

    def run(
        self,
        source: ControlSource,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        max_ticks: Optional[int] = None,
    ) -> int:
        """
        Drive ticks at TICK_RATE from a real-time accumulator until the phase
        leaves PLAYING (or max_ticks is reached). Returns the ticks run.
        """
        if self._looping:
            raise RuntimeError("Mission cadence is already running")
        self._looping = True
        try:
            ticks = 0
            accumulator = 0.0
            last = clock()

            def more() -> bool:
                return self.running and (max_ticks is None or ticks < max_ticks)

            while more():
                now = clock()
                accumulator += now - last
                last = now

                substeps = 0
                while accumulator >= TICK_DT and substeps < MAX_SUBSTEPS and more():
                    self.tick(source.snapshot_controls())
                    accumulator -= TICK_DT
                    ticks += 1
                    substeps += 1
                if substeps == MAX_SUBSTEPS:
                    # Too far behind real time: drop the backlog
                    accumulator = 0.0

                if more():
                    sleep(max(0.0, TICK_DT - accumulator))
            return ticks
        finally:
            self._looping = False


def format_status(tick: int, s: State) -> str:
    return (
        f"{tick} {s.phase.value} {s.x:.3f} {s.y:.3f} {s.vx:.4f} {s.vy:.4f} "
        f"{s.fuel:.2f} {s.angle:.0f} {s.score}"
    )


def main() -> None:
    mission = Mission()
    keys = HeldKeys()
    ticks = 0

    for line in sys.stdin:
        cmd = line.strip().lower()
        if cmd in ("start", "restart"):
            try:
                getattr(mission, cmd)()
            except ValueError as e:
                log_err(f"[driver] {e}")
            else:
                ticks = 0
            continue

        if not mission.running:
            log_err(f"[driver] ignoring input while mission is {mission.phase.value}")
            continue

        keys.clear()
        for k in cmd.split():
            keys.press(k)
        s = mission.tick(keys.snapshot_controls())
        ticks += 1
        sys.stdout.write(format_status(ticks, s) + "\n")
        sys.stdout.flush()


if __name__ == "__main__":
    main()
