"""Allow running Deskboard as a module.

    python -m deskboard            # desktop dashboard
    python -m deskboard serve      # REST API server
"""

import argparse
import logging
import sys

from .logging_setup import setup_logging
from .settings import APP_SUPPORT_DIR, load_settings

logger = logging.getLogger("deskboard")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="deskboard", description="Personal productivity dashboard")
    parser.add_argument("command", nargs="?", choices=("app", "serve"), default="app")
    parser.add_argument("--host", help="API server host (serve only)")
    parser.add_argument("--port", type=int, help="API server port (serve only)")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return parser.parse_args(argv)


def run_server(settings) -> None:
    from .api.app import serve

    serve(settings)


def run_app(settings) -> int:
    from PyQt6.QtWidgets import QApplication

    from .app import DashboardWindow

    app = QApplication(sys.argv)
    app.setApplicationName("Deskboard")
    app.setOrganizationName("Deskboard")

    window = DashboardWindow(settings)
    window.show()
    window.load()
    return app.exec()


def main(argv=None) -> None:
    args = _parse_args(argv)
    settings = load_settings()
    if args.host:
        settings.server_host = args.host
    if args.port:
        settings.server_port = args.port
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings.log_level, APP_SUPPORT_DIR / "logs" / "deskboard.log")

    if args.command == "serve":
        run_server(settings)
    else:
        sys.exit(run_app(settings))


if __name__ == "__main__":
    main()
