"""Reading and writing floor plans."""

from .plan import load_plan, plan_from_dict, plan_to_dict, save_plan

__all__ = ["load_plan", "plan_from_dict", "plan_to_dict", "save_plan"]
