"""Placement algorithms."""

from .loading_plan import LoadingPlan, order_crates, validate_capacity

__all__ = ["LoadingPlan", "order_crates", "validate_capacity"]
