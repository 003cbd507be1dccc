"""
Workflows package.

Workflows combine components and persistence into the multi-step
operations services expose.
"""

from .directory.sync_directory_wf import sync_directory_workflow
from .directory.verify_directory_connection_wf import verify_directory_connection_workflow
from .layout.ensure_layout_seed_wf import ensure_layout_seed_workflow
from .layout.save_layout_wf import save_layout_workflow

__all__ = [
    "ensure_layout_seed_workflow",
    "save_layout_workflow",
    "sync_directory_workflow",
    "verify_directory_connection_workflow",
]
