"""
Command: show-config - Display effective server and directory settings.
"""

from __future__ import annotations

import argparse

from deskmap.interfaces.cli.commands._shared import open_directory_service
from deskmap.interfaces.cli.ui import TableDisplay, print_info
from deskmap.services.infrastructure.config_svc import ConfigService


def cmd_show_config(args: argparse.Namespace) -> int:
    """Print server config and the stored directory config (secret masked)."""
    config = ConfigService().get_config()
    TableDisplay.show_summary(
        "Server",
        {
            "Database": config["db_path"],
            "Listen": f"{config['host']}:{config['port']}",
            "Log level": config["log_level"],
            "Scheduled sync": config["scheduled_sync_enabled"],
            "Graph timeout (s)": config["graph_timeout_seconds"],
        },
    )

    with open_directory_service() as service:
        directory = service.get_config()
        has_secret = service.has_client_secret()

    if directory is None:
        print_info("No Entra directory config saved yet")
        return 0

    TableDisplay.show_summary(
        "Entra Directory",
        {
            "Tenant ID": directory.tenant_id,
            "Client ID": directory.client_id,
            "Client secret": "********" if has_secret else "(not set)",
            "Scopes": directory.scopes,
            "Sync interval (min)": directory.sync_interval_minutes,
            "Mapping prefix": directory.mapping_prefix,
            "Mapping regex": directory.mapping_regex,
            "Auth mode": directory.auth_mode,
            "Last test": directory.last_test_at,
            "Last sync": directory.last_sync_at,
            "Last sync status": directory.last_sync_status,
        },
    )
    return 0
