#!/usr/bin/env python3
"""
i3finder CLI

Focus or move i3 windows and workspaces chosen through dmenu, or go back to
the previous focus. If no action is given, the chosen item is focused.
"""

import argparse
import asyncio
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import FinderConfig, load_config
from .dispatcher import ActionDispatcher
from .errors import FinderError
from .i3_client import I3Client
from .logging_config import get_logger, log_finder_error, setup_logging
from .menu import MenuSelector
from .models import Action
from .process import ProcessRunner
from .state import StateStore

err_console = Console(stderr=True)


def print_error(error: FinderError) -> None:
    """Print error message in red, with the suggestion if there is one."""
    err_console.print(f"[red]✗[/red] {escape(error.message)}", soft_wrap=True)
    if error.suggestion:
        err_console.print(f"  [dim]→ {escape(error.suggestion)}[/dim]", soft_wrap=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i3finder",
        description=(
            "Focus or move i3 windows and workspaces. If the action argument is "
            "not specified, the chosen item is focused. The dmenu and workspace "
            "prefix arguments already have reasonable defaults, but can be used "
            "to customize the look of the choices in dmenu."
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"i3finder {__version__}"
    )
    parser.add_argument(
        "-a", "--action",
        choices=[a.value for a in Action],
        help="Action to perform (default: focus)"
    )
    parser.add_argument(
        "-m", "--move",
        action="store_true",
        help="Grab element and move it to current workspace (same as --action move)"
    )
    parser.add_argument(
        "-d", "--dmenu",
        help="The dmenu command and arguments (default: dmenu)"
    )
    parser.add_argument(
        "-w", "--workspace-prefix", "--workspacePrefix",
        dest="workspace_prefix",
        help="Workspace display name prefix, to tell them apart from windows (default: 'workspace: ')"
    )
    parser.add_argument(
        "-s", "--show-scratch", "--showScratch",
        dest="show_scratch",
        action="store_true",
        help="Show scratch workspace in list"
    )
    parser.add_argument(
        "-t", "--dont-track-state", "--dontTrackState",
        dest="dont_track_state",
        action="store_true",
        help="Don't bother saving current state"
    )
    parser.add_argument(
        "--ipc-command",
        help="i3 IPC tool and arguments (default: i3-msg, use swaymsg on sway)"
    )
    parser.add_argument(
        "--state-file",
        type=Path,
        help="Where to keep the saved focus state (default: ./lastState.json)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON config file (default: ~/.config/i3finder/config.json)"
    )
    parser.add_argument(
        "--ignore-exit-codes",
        action="store_true",
        help="Don't treat a failing i3-msg exit status as an error"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Append log records (INFO and above, DEBUG with --debug) to this file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (INFO level)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level, includes verbose)"
    )

    return parser


def config_from_args(args: argparse.Namespace) -> FinderConfig:
    """Merge command-line flags over the config file.

    Flags that were not given leave the file (or default) value alone.
    """
    action = Action.MOVE.value if args.move else args.action
    return load_config(
        args.config,
        action=action,
        menu_command=shlex.split(args.dmenu) if args.dmenu else None,
        workspace_prefix=args.workspace_prefix,
        show_scratch=True if args.show_scratch else None,
        track_state=False if args.dont_track_state else None,
        ipc_command=shlex.split(args.ipc_command) if args.ipc_command else None,
        state_file=args.state_file,
        check_exit_codes=False if args.ignore_exit_codes else None,
    )


def build_dispatcher(config: FinderConfig) -> ActionDispatcher:
    """Wire the components for one run."""
    runner = ProcessRunner(check_exit_codes=config.check_exit_codes)
    client = I3Client(runner, config.ipc_command)
    menu = MenuSelector(runner, config.menu_command)
    store = StateStore(
        client,
        config.state_file,
        enabled=config.track_state,
        show_scratch=config.show_scratch,
    )
    return ActionDispatcher(client, menu, store, config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        0 on success or when the menu was cancelled, 1 on error,
        130 when interrupted
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.move and args.action not in (None, Action.MOVE.value):
        parser.error(f"--move conflicts with --action {args.action}")

    setup_logging(verbose=args.verbose, debug=args.debug, log_file=args.log_file)
    logger = get_logger()

    try:
        config = config_from_args(args)
        logger.debug(f"Configuration: {config.model_dump()}")
        asyncio.run(build_dispatcher(config).run())
        return 0
    except KeyboardInterrupt:
        err_console.print("\nInterrupted")
        return 130
    except FinderError as e:
        log_finder_error(e, logger)
        print_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
