"""Decay helpers a scheduler can call once per tick.

These apply ``PheromoneCell.decay`` across a whole lattice.  Nothing here
decides *when* to run; the caller's tick loop does.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from antenv.pheromones.stimulus import StimulusType, registered_stimuli
from antenv.world.cell import PheromoneCell
from antenv.world.lattice import Lattice

logger = logging.getLogger(__name__)


def decay_lattice(lattice: Lattice, stimulus: StimulusType) -> None:
    """Apply one tick of ``stimulus`` decay to every pheromone cell.

    Args:
        lattice: Grid to update in place.  Non-pheromone cells are skipped.
        stimulus: Which signal to decay.
    """
    if stimulus.decay_factor == 0.0:
        return
    for cell in lattice:
        if isinstance(cell, PheromoneCell):
            cell.decay(stimulus)


def decay_all(
    lattice: Lattice,
    stimuli: Iterable[StimulusType] | None = None,
) -> None:
    """Apply one tick of decay for several stimuli.

    Args:
        lattice: Grid to update in place.
        stimuli: Signals to decay.  Defaults to every registered type.
    """
    if stimuli is None:
        stimuli = list(registered_stimuli().values())
    names = []
    for stimulus in stimuli:
        decay_lattice(lattice, stimulus)
        names.append(stimulus.name)
    logger.debug("Decayed %s over %d cells", names, len(lattice))


def ticks_to_fade(
    stimulus: StimulusType,
    initial: float,
    threshold: float,
) -> int | None:
    """Return how many decay ticks bring ``initial`` to ``threshold`` or below.

    Args:
        stimulus: The signal whose decay law to use.
        initial: Starting concentration (>= 0).
        threshold: Level considered faded (> 0).

    Returns:
        Number of ticks, 0 if already at or below the threshold, or None
        if the signal never decays.

    Raises:
        ValueError: If ``initial`` is negative or not finite, or
            ``threshold`` is not a finite positive number.
    """
    if not (math.isfinite(initial) and initial >= 0):
        msg = f"initial concentration must be finite and >= 0, got {initial}"
        raise ValueError(msg)
    if not (math.isfinite(threshold) and threshold > 0):
        msg = f"threshold must be finite and > 0, got {threshold}"
        raise ValueError(msg)
    if initial <= threshold:
        return 0
    # A factor too small to move 1.0 leaves concentrations unchanged.
    if 1.0 - stimulus.decay_factor == 1.0:
        return None
    # initial * (1 - f) ** n <= threshold
    log_keep = math.log1p(-stimulus.decay_factor)
    ticks = max(1, math.ceil(math.log(threshold / initial) / log_keep))
    # Rounding can leave the estimate one tick short.
    if initial * math.exp(ticks * log_keep) > threshold:
        ticks += 1
    return ticks
