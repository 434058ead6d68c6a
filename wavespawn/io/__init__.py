"""Wave-config documents: pydantic schemas and the JSON loader."""

from wavespawn.io.loader import load_plan, parse_plan

__all__ = ["load_plan", "parse_plan"]
