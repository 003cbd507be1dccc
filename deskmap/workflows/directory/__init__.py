"""
Directory sync workflows.
"""

from .sync_directory_wf import SYNC_FAILED_STATUS, load_directory_settings, sync_directory_workflow
from .verify_directory_connection_wf import TEST_FAILED_STATUS, verify_directory_connection_workflow

__all__ = [
    "SYNC_FAILED_STATUS",
    "TEST_FAILED_STATUS",
    "load_directory_settings",
    "sync_directory_workflow",
    "verify_directory_connection_workflow",
]
