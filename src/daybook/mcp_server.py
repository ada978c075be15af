"""MCP server for daybook: exposes the productivity tools to AI assistants."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from daybook.config import load_config, setup_logging
from daybook.tools import build_tools
from daybook.workspace import Workspace

logger = logging.getLogger(__name__)

INSTRUCTIONS = """\
daybook keeps tasks, notes, expenses, calendar events and reminders in plain \
JSON files. Every record has an integer id that is unique within its own \
collection (task 1 and note 1 are different records).

Key concepts:
- **Dates**: due dates and expense dates accept YYYY-MM-DD or the keywords \
'today', 'tomorrow' and 'next week'. Anything unrecognised is treated as today.
- **Timestamps**: event start/end times and reminder times take ISO datetimes \
(e.g. 2025-10-06T14:00:00).
- **Agenda**: get_daily_agenda splits open tasks into due today, overdue and \
the next few upcoming ones.
- **Alerts**: list_alerts returns active reminders whose time has passed. \
Nothing fires on its own; check it when the user asks what needs attention.
- Nothing is ever deleted. Use update_task or complete_task instead.

For an end-of-day recap use generate_daily_summary; for a backup use \
export_data with data_type "all".\
"""


def build_server(workspace: Workspace) -> FastMCP:
    """Create a FastMCP server with every tool bound to ``workspace``."""
    mcp = FastMCP("daybook", instructions=INSTRUCTIONS)
    for name, fn in build_tools(workspace).items():
        mcp.add_tool(fn, name=name)
    return mcp


def main():
    """Entry point for the MCP server."""
    config = load_config()
    setup_logging(config.log_level)
    logger.info("Serving daybook tools from %s", config.data_dir)
    build_server(Workspace(config)).run(transport="stdio")


if __name__ == "__main__":
    main()
