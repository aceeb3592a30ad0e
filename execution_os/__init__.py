"""Execution OS: rule-enforcing persistence for projects, tasks and notes."""

__version__ = "0.1.0"
