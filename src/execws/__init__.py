"""exec-ws - run one command across the workspaces of a monorepo."""

from .core import Assignment, assign
from .runner import aggregate_exit_code, dispatch

__version__ = "0.1.0"

__all__ = ["Assignment", "aggregate_exit_code", "assign", "dispatch"]
