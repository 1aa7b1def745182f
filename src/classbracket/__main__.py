"""Launch the Class Bracket window.

Usage::

    classbracket --store class.json
"""

# Class Bracket
# Copyright (C) 2025  Class Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import sys

from classbracket import APP_NAME, APP_VERSION
from classbracket.config import load_config, with_overrides
from classbracket.exceptions import ClassBracketException
from classbracket.utils import set_log_level, setup_logger

logger = setup_logger(__name__)


def create_parser():
    parser = argparse.ArgumentParser(
        prog="classbracket", description=f"{APP_NAME} v{APP_VERSION}"
    )
    parser.add_argument("--store", help="JSON file holding the roster and matches")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def main(argv=None) -> int:
    """Main entry point for the classbracket GUI."""
    args = create_parser().parse_args(argv)
    try:
        config = with_overrides(load_config(args.config), args.store, args.log_level)
    except ClassBracketException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    set_log_level(config.log_level)

    # Qt is only needed once the window opens
    from PyQt6 import QtWidgets

    from classbracket.gui.mainwindow import ClassBracketMainWindow

    app = QtWidgets.QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    try:
        window = ClassBracketMainWindow(config)
    except ClassBracketException as e:
        logger.error(f"Could not open tournament: {e}")
        QtWidgets.QMessageBox.critical(None, APP_NAME, str(e))
        return 1
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
