#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from deskmap.interfaces.cli.commands.manage_password import cmd_manage_password
from deskmap.interfaces.cli.commands.show_config import cmd_show_config
from deskmap.interfaces.cli.commands.sync import cmd_sync
from deskmap.interfaces.cli.commands.test_connection import cmd_test_connection


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="deskmap",
        description="Deskmap - floor map editor with Entra desk assignment",
        epilog="Examples:\n"
        "  deskmap sync                               # Sync Entra users to desks now\n"
        "  deskmap test-connection                    # Check stored Entra credentials\n"
        "  deskmap show-config                        # Show effective settings\n"
        "  deskmap manage-password reset              # Change admin password",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'deskmap <command> --help' for command-specific help)",
    )

    s = sub.add_parser("sync", help="Sync Entra users to desk occupants now")
    s.set_defaults(func=cmd_sync)

    s = sub.add_parser("test-connection", help="Verify the stored Entra credentials")
    s.set_defaults(func=cmd_test_connection)

    s = sub.add_parser("show-config", help="Show server and directory settings (secret masked)")
    s.set_defaults(func=cmd_show_config)

    # manage-password: Admin password management
    s = sub.add_parser("manage-password", help="Manage admin password for the layout editor")
    password_sub = s.add_subparsers(dest="password_cmd", title="password commands", required=True)

    ps = password_sub.add_parser("reset", help="Change admin password")
    ps.set_defaults(func=cmd_manage_password)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
