"""polity: emergent alliance, leadership and rivalry detection for agent simulations."""

__version__ = "0.1.0"
