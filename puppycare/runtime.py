"""
puppycare.runtime
=================
Host process for the engine: owns the PetEngine, both periodic timers
(animation tick and day/night check) and the loop that drives them.
Nothing is rendered; state changes go to the log.
Run with:
    python3 -m puppycare.runtime --config config.yaml --duration 30
"""

import argparse
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Optional

from puppycare.clock.scheduler import ManualScheduler, ThreadScheduler
from puppycare.config import load_config
from puppycare.engine import PetEngine

log = logging.getLogger("puppycare.runtime")


class Runtime:
    """
    Owns the engine and the timers feeding it. The engine is only ever
    touched from the thread that calls run().
    """

    def __init__(self, config_path: Optional[str] = None, threaded: bool = False,
                 seed: Optional[int] = None):
        self.cfg = load_config(config_path)
        if seed is not None:
            self.cfg["engine"]["seed"] = seed

        self._setup_logging()
        self._running = False
        self._tick_handle = None
        self.threaded = threaded

        log.info("Initializing puppycare runtime v0.3.0")

        self.scheduler = ThreadScheduler() if threaded else ManualScheduler()
        self.engine = PetEngine(config=self.cfg, scheduler=self.scheduler)

        self._wire_callbacks()

    def _setup_logging(self):
        cfg = self.cfg.get("logging", {})
        logging.basicConfig(
            level=getattr(logging, str(cfg.get("level", "INFO")).upper(), logging.INFO),
            format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        )

    def _wire_callbacks(self):
        """Connect engine event callbacks."""

        @self.engine.machine.on_transition
        def on_transition(old, new):
            needs = self.engine.needs.snapshot()
            log.info("%s -> %s (hunger=%.1f happiness=%.1f waste=%d)",
                     old.value, new.value, needs.hunger, needs.happiness,
                     self.engine.waste.count)

        @self.engine.daycycle.on_change
        def on_daycycle(is_daytime):
            log.info("it is now %s", "day" if is_daytime else "night")

    @property
    def running(self) -> bool:
        return self._running

    def start(self):
        if self._running:
            return
        log.info("Starting timers")
        self._running = True
        self.engine.resume()
        self._tick_handle = self.scheduler.call_every(
            self.engine.machine.tick_s, self.engine.tick)
        self.engine.start_time_of_day_timer()
        self.engine.greet()

    def pump(self, elapsed_s: float, timeout: float = 0.1) -> None:
        """Let due timer callbacks run on this thread."""
        if self.threaded:
            self.scheduler.drain(timeout=timeout)
        else:
            self.scheduler.advance(elapsed_s)

    def run(self, duration_s: Optional[float] = None):
        self.start()
        signal.signal(signal.SIGINT,  self._on_signal)
        signal.signal(signal.SIGTERM, self._on_signal)

        started = last = time.monotonic()
        try:
            while self._running:
                now = time.monotonic()
                self.pump(now - last)
                last = now
                if duration_s is not None and now - started >= duration_s:
                    break
                if not self.threaded:
                    time.sleep(0.05)
        finally:
            self.stop()

    def _on_signal(self, *_):
        log.info("Signal received, stopping")
        self._running = False

    def stop(self):
        if self._tick_handle is not None:
            self.scheduler.cancel(self._tick_handle)
            self._tick_handle = None
        self.engine.stop_time_of_day_timer()
        if self.threaded:
            self.scheduler.shutdown()
        if self._running:
            self._running = False
            snap = self.engine.snapshot()
            log.info("Stopped in state %s (hunger=%.1f happiness=%.1f waste=%d)",
                     snap.animation.state.value, snap.needs.hunger,
                     snap.needs.happiness, snap.waste.count)


def main():
    parser = argparse.ArgumentParser(description="puppycare engine host")
    parser.add_argument("--config", default=None)
    parser.add_argument("--duration", type=float, default=None,
                        help="stop after this many seconds (default: run until Ctrl-C)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--threaded", action="store_true",
                        help="drive timers from background threads")
    args = parser.parse_args()

    if args.config and not Path(args.config).exists():
        print(f"ERROR: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    rt = Runtime(args.config, threaded=args.threaded, seed=args.seed)
    rt.run(duration_s=args.duration)


if __name__ == "__main__":
    main()
