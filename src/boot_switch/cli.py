from __future__ import annotations
import argparse
import json
from pathlib import Path
from typing import List

from .config import Settings
from .errors import ToolExecutionError, ValidationError
from .models import ViewEntry
from .service import BootSwitchService, build_service


def format_entries(entries: List[ViewEntry], output: str) -> str:
    if output == 'json':
        return json.dumps([
            {
                'id': e.id,
                'label': e.display_label,
                'description': e.description,
                'hidden': e.is_hidden,
                'is_current': e.is_current,
                'is_next': e.is_next,
            } for e in entries
        ], ensure_ascii=False, indent=2)
    # default: table-like text
    lines = ["ID\tCURRENT\tNEXT\tHIDDEN\tLABEL"]
    for e in entries:
        lines.append(f"{e.id}\t{int(e.is_current)}\t{int(e.is_next)}\t{int(e.is_hidden)}\t{e.display_label}")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='boot-switch', description='Pick the next firmware boot entry and reboot into it')
    sub = p.add_subparsers(dest='cmd', required=False)

    p.add_argument('--cli', action='store_true', help='Run in CLI mode (no GUI)')
    p.add_argument('--platform', choices=['Windows', 'Linux'], help='Override platform detection')
    p.add_argument('--config', help='Path to the override file (config.yaml)')
    p.add_argument('-v', '--verbose', action='store_true', help='Log at INFO level')
    p.add_argument('--debug', action='store_true', help='Log at DEBUG level')

    list_p = sub.add_parser('list', help='List boot entries')
    list_p.add_argument('-o', '--output', choices=['text', 'json'], default='text')
    list_p.add_argument('--all', action='store_true', help='Include hidden entries')

    rename_p = sub.add_parser('rename', help='Set a custom label for an entry')
    rename_p.add_argument('id', help='Entry ID (Linux: 0001; Windows: {GUID})')
    rename_p.add_argument('label')

    hide_p = sub.add_parser('hide', help='Hide an entry from the boot list')
    hide_p.add_argument('id')
    unhide_p = sub.add_parser('unhide', help='Show a hidden entry again')
    unhide_p.add_argument('id')

    boot_p = sub.add_parser('boot', help='Boot into an entry once and reboot now')
    boot_p.add_argument('id')
    boot_p.add_argument('-y', '--yes', action='store_true', help='Do not ask for confirmation')

    serve_p = sub.add_parser('serve', help='Run the local web page')
    serve_p.add_argument('--host')
    serve_p.add_argument('--port', type=int)

    return p


def settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if getattr(args, 'platform', None):
        settings.platform = args.platform
    if getattr(args, 'config', None):
        settings.config_path = Path(args.config).expanduser()
    if getattr(args, 'debug', False):
        settings.log_level = 'DEBUG'
    elif getattr(args, 'verbose', False):
        settings.log_level = 'INFO'
    if getattr(args, 'host', None):
        settings.host = args.host
    if getattr(args, 'port', None):
        settings.port = args.port
    return settings


def _confirm(label: str) -> bool:
    try:
        answer = input(f'Reboot into {label} now? [y/N] ')
    except EOFError:
        # stdin closed: treat as "no"
        print()
        return False
    return answer.strip().lower() in ('y', 'yes')


def run_cli(args: argparse.Namespace, service: BootSwitchService | None = None) -> int:
    service = service or build_service(settings_from_args(args))
    try:
        if args.cmd in (None, 'list'):
            view = service.view()
            entries = view.all() if getattr(args, 'all', False) else view.visible
            print(format_entries(entries, getattr(args, 'output', 'text')))
            return 0
        if args.cmd == 'rename':
            service.rename(args.id, args.label)
            print(f'Renamed {args.id} to {args.label.strip()}')
            return 0
        if args.cmd in ('hide', 'unhide'):
            service.set_hidden(args.id, args.cmd == 'hide')
            print(f'{args.id} is now {"hidden" if args.cmd == "hide" else "visible"}')
            return 0
        if args.cmd == 'boot':
            label = service.target_label(args.id)
            if not args.yes and not _confirm(label):
                print('Aborted')
                return 1
            outcome = service.boot(args.id)
            if outcome.ok:
                print(f'Rebooting to {outcome.target_label}...')
                return 0
            print(f'Failed to schedule boot to {outcome.target_label}:\n{outcome.diagnostic}')
            return 1
    except ValidationError as e:
        print(e)
        return 2
    except ToolExecutionError as e:
        print(f'Running {e.command} failed. Install it and run as admin/root.\n{e.diagnostic}')
        return 2
    return 0
