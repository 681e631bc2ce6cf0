"""
behavior/walk.py

Horizontal wander offset while the puppy is Walking. Purely cosmetic: the
renderer reads x/direction, the engine only cares that it is Walking.
"""


class WalkMotion:

    def __init__(self, stage_width: float = 390.0, edge_margin: float = 80.0,
                 walk_step: float = 5.0, turn_chance: float = 1 / 40,
                 rng=None, **_):
        self._width  = stage_width
        self._margin = min(edge_margin, stage_width / 2)
        self._step   = walk_step
        self._turn   = turn_chance
        self._rng    = rng
        self.x = stage_width / 2
        self.direction = 1     # +1 right, -1 left

    def step(self) -> float:
        if self.x < self._margin:
            self.direction = 1
        elif self.x > self._width - self._margin:
            self.direction = -1
        elif self._rng is not None and self._rng.random() < self._turn:
            self.direction *= -1
        new_x = self.x + self.direction * self._step
        self.x = max(self._margin, min(new_x, self._width - self._margin))
        return self.x
