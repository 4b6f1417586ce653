"""Garden planner: plan-editor API for grid-based garden plots."""

__version__ = "0.1.0"
