"""
Command: manage_password - Manage the admin password.
"""

from __future__ import annotations

import argparse
import getpass

from deskmap.interfaces.cli.commands._shared import open_database
from deskmap.interfaces.cli.ui import print_error, print_info, print_success
from deskmap.services.infrastructure.keys_svc import KeyManagementService

MIN_PASSWORD_LENGTH = 8


def cmd_manage_password(args: argparse.Namespace) -> int:
    """
    Manage the admin password for the layout editor.

    Subcommands:
    - reset: Change the password (invalidates every session)

    Returns:
        Exit code (0 = success)
    """
    with open_database() as db:
        service = KeyManagementService(db)
        if args.password_cmd == "reset":
            return _reset_password(service)
        print_error(f"Unknown password command: {args.password_cmd}")
        return 1


def _reset_password(service: KeyManagementService) -> int:
    """Reset admin password."""
    print_info("Reset admin password for the layout editor")
    print()

    while True:
        password1 = getpass.getpass("Enter new password: ")
        if len(password1) < MIN_PASSWORD_LENGTH:
            print_error(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
            continue

        password2 = getpass.getpass("Confirm new password: ")
        if password1 != password2:
            print_error("Passwords do not match")
            continue

        break

    service.reset_admin_password(password1)

    print()
    print_success("Admin password updated successfully")
    print_info("All existing sessions were logged out")
    return 0
