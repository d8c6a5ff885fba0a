"""
Main entry point: replays a flight down a straight corridor.

The plane starts off-center and the TiltController steers it each tick from
the four distances it would measure: to the left and right borders, and
along two forward "eye" rays angled slightly outwards. The tilt acceleration
is integrated into a lateral speed and position. Runs headless; the log
files under logs/ carry one line per tick.

Settings come from the optional ``[replay]`` table of config/flc_config.toml.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, List, Mapping

from flc.config import load_config
from flc.controller import ControllerInput, TiltController
from utils.logger import set_loop_index, setup_logging
from utils.profiler import CodeProfiler

main_log = logging.getLogger("main")

EYE_RAY_SLOPE = 0.2  # sideways run per unit forward
EYE_RAY_FACTOR = math.hypot(1.0, EYE_RAY_SLOPE) / EYE_RAY_SLOPE


@dataclass
class ReplayStep:
    tick: int
    position: float
    speed: float
    tilt: float


def measure(position: float, corridor_width: float) -> ControllerInput:
    """Distances the plane sees at ``position`` (0 is the left border)."""
    left = position
    right = corridor_width - position
    return ControllerInput(
        left_border_distance=left,
        right_border_distance=right,
        left_eye_distance=left * EYE_RAY_FACTOR,
        right_eye_distance=right * EYE_RAY_FACTOR,
    )


def run_replay(controller: TiltController, replay_cfg: Mapping[str, Any]) -> List[ReplayStep]:
    """
    Steps the plane for ``TICKS`` ticks of ``DT`` seconds.

    A tilt of 1 accelerates the plane sideways by ``TILT_GAIN`` units/s^2.
    """
    width = float(replay_cfg.get("CORRIDOR_WIDTH", 40.0))
    ticks = int(replay_cfg.get("TICKS", 200))
    dt = float(replay_cfg.get("DT", 0.05))
    gain = float(replay_cfg.get("TILT_GAIN", 20.0))

    position = float(replay_cfg.get("START_POSITION", 2.0))
    speed = 0.0
    history = []

    for tick in range(ticks):
        set_loop_index(tick)
        tilt = controller.compute_tilt_acceleration(measure(position, width))
        history.append(ReplayStep(tick, position, speed, tilt))
        main_log.debug("pos=%.3f speed=%.3f tilt=%.4f", position, speed, tilt)

        speed += tilt * gain * dt
        position += speed * dt

    return history


def main():
    setup_logging()
    main_log.info("Application starting...")

    cfg = load_config()
    controller = TiltController(cfg)

    with CodeProfiler("Replay", budget_ms=float("inf")) as prof:
        history = run_replay(controller, cfg.get("replay", {}))

    final = history[-1]
    main_log.info(
        "Replayed %d ticks in %.1f ms; final position %.3f (speed %.3f).",
        len(history), prof.elapsed_ms, final.position, final.speed,
    )


if __name__ == "__main__":
    main()
