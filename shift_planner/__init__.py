"""Shift planner: shift validation and weekly schedule aggregation service."""
