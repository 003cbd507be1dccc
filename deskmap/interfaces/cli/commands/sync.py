"""
Command: sync - Run a directory sync now.
"""

from __future__ import annotations

import argparse

from deskmap.helpers.exceptions import DeskmapError
from deskmap.interfaces.cli.commands._shared import open_directory_service
from deskmap.interfaces.cli.ui import TableDisplay, print_error, print_success, show_spinner


def cmd_sync(args: argparse.Namespace) -> int:
    """
    Pull users from Entra and reassign desk occupants.

    Returns:
        Exit code (0 = success)
    """
    with open_directory_service() as service:
        try:
            result = show_spinner("Syncing directory users...", service.sync)
        except DeskmapError as e:
            print_error(f"Sync failed: {e}")
            return 1

    print_success(f"Synced {result.users} users")
    TableDisplay.show_summary(
        "Directory Sync",
        {
            "Users fetched": result.users,
            "Desks assigned": result.desks_updated,
            "Users without a desk": result.unmatched_users,
        },
    )
    return 0
