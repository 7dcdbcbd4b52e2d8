from partyroulette.gui.views.roulette_state import (
    RoulettePhase,
    RouletteViewState,
    fit_slowdown,
)

__all__ = ["RoulettePhase", "RouletteViewState", "fit_slowdown"]
