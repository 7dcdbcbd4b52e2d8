"""PyQt6 desktop interface for Party Roulette."""
