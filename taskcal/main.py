#!/usr/bin/env python3
"""
taskcal - Sync tasks into the device calendar.
"""

import argparse
import logging
import sys

from taskcal.utils.macos import set_process_name
from taskcal.core.config import load_config, get_default_config_path
from taskcal.commands import (
    SyncCommand,
    UnsyncCommand,
    OpenCommand,
    CalendarsCommand,
    PermissionCommand,
)


def main(argv=None):
    """Main entry point for taskcal."""
    set_process_name("taskcal")

    parser = argparse.ArgumentParser(
        description="Create, remove and open device calendar events for tasks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  taskcal permission              # Check or request calendar access
  taskcal calendars               # List writable calendars
  taskcal sync                    # Preview calendar changes (dry-run by default)
  taskcal sync --apply            # Write pending tasks to the calendar
  taskcal sync --task-id T1 --apply   # Re-sync one task
  taskcal unsync T1               # Remove a task's calendar events
  taskcal open T1                 # Open a task's event in Calendar
        """
    )

    default_config = get_default_config_path()

    parser.add_argument(
        '--config',
        help=f'Path to configuration file (default: {default_config})',
        default=None
    )

    parser.add_argument(
        '--tasks',
        help='Path to the task file (overrides the configured path)',
        default=None
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Sync command
    sync_parser = subparsers.add_parser('sync', help='Create calendar events for tasks')
    sync_parser.add_argument(
        '--apply',
        action='store_true',
        help='Apply changes (default is dry-run)'
    )
    sync_parser.add_argument(
        '--task-id',
        help='Re-sync a single task (removes and recreates its events)'
    )
    sync_parser.add_argument(
        '--companion',
        help='Companion name to include in event notes'
    )
    sync_parser.add_argument(
        '--assigned-to',
        help='Assignee name to include in event notes'
    )

    # Unsync command
    unsync_parser = subparsers.add_parser('unsync', help="Remove a task's calendar events")
    unsync_parser.add_argument('task_id', help='Task identifier')

    # Open command
    open_parser = subparsers.add_parser('open', help="Open a task's event in the calendar app")
    open_parser.add_argument('task_id', help='Task identifier')

    # Calendars command
    subparsers.add_parser('calendars', help='List calendars that accept new events')

    # Permission command
    subparsers.add_parser('permission', help='Check or request calendar access')

    args = parser.parse_args(argv)

    # Configure logging if verbose mode is enabled
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Show help if no command specified
    if not args.command:
        parser.print_help()
        return 1

    # Load configuration
    config = load_config(args.config)
    if args.tasks:
        config.tasks_path = args.tasks

    if args.verbose:
        actual_config_path = args.config if args.config else get_default_config_path()
        print(f"Using config: {actual_config_path}")
        print(f"Using tasks: {config.tasks_path}")

    # Execute command
    try:
        if args.command == 'sync':
            cmd = SyncCommand(config, verbose=args.verbose)
            success = cmd.run(
                apply_changes=args.apply,
                task_id=args.task_id,
                companion_name=args.companion,
                assigned_to_name=args.assigned_to,
            )

        elif args.command == 'unsync':
            cmd = UnsyncCommand(config, verbose=args.verbose)
            success = cmd.run(task_id=args.task_id)

        elif args.command == 'open':
            cmd = OpenCommand(config, verbose=args.verbose)
            success = cmd.run(task_id=args.task_id)

        elif args.command == 'calendars':
            cmd = CalendarsCommand(config, verbose=args.verbose)
            success = cmd.run()

        elif args.command == 'permission':
            cmd = PermissionCommand(config, verbose=args.verbose)
            success = cmd.run()

        else:
            print(f"Unknown command '{args.command}'.")
            return 1

        return 0 if success else 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 130
    except Exception as e:
        print(f"Error: {e}")
        if not args.verbose:
            print("Re-run with --verbose for more detail.")
        else:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
