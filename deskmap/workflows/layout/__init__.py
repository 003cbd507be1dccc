"""
Layout workflows.
"""

from .ensure_layout_seed_wf import demo_desks, ensure_layout_seed_workflow
from .save_layout_wf import LAYOUT_EVENT, save_layout_workflow, validate_desks

__all__ = [
    "LAYOUT_EVENT",
    "demo_desks",
    "ensure_layout_seed_workflow",
    "save_layout_workflow",
    "validate_desks",
]
