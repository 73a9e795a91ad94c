import sys

from boot_switch.cli import build_parser, run_cli, settings_from_args
from boot_switch.logging_config import setup_logging


def main():
    # Subcommands and --cli run headless; `serve` starts the web page; otherwise the GUI.
    parser = build_parser()
    args, unknown = parser.parse_known_args()
    settings = settings_from_args(args)
    setup_logging(settings.log_level, settings.log_file)

    if args.cmd == 'serve':
        from boot_switch.web.server import create_app, run_server
        from boot_switch.service import build_service
        sys.exit(run_server(create_app(build_service(settings)), settings.host, settings.port))

    if getattr(args, 'cli', False) or args.cmd:
        sys.exit(run_cli(args))

    from PySide6.QtWidgets import QApplication

    from boot_switch.gui.app import BootSwitchApp
    from boot_switch.platforms.common import elevate_if_needed
    from boot_switch.service import build_service

    # The GUI needs admin/root to change boot settings; relaunch elevated if possible
    if elevate_if_needed(want_gui=True):
        return

    app = QApplication(sys.argv)
    w = BootSwitchApp(build_service(settings))
    w.show()
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
