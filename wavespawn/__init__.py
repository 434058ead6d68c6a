"""Wave-based spawn orchestration and waypoint path following."""

__version__ = "0.1.0"
