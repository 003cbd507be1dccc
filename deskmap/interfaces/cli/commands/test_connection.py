"""
Command: test-connection - Verify the stored Entra credentials.
"""

from __future__ import annotations

import argparse

from deskmap.helpers.exceptions import DeskmapError
from deskmap.interfaces.cli.commands._shared import open_directory_service
from deskmap.interfaces.cli.ui import print_error, print_success, show_spinner


def cmd_test_connection(args: argparse.Namespace) -> int:
    """Fetch a single directory user with the stored credentials."""
    with open_directory_service() as service:
        try:
            show_spinner("Contacting Microsoft Graph...", service.test_connection)
        except DeskmapError as e:
            print_error(f"Connection test failed: {e}")
            return 1

    print_success("Connection to Microsoft Graph works")
    return 0
