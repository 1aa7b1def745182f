"""Main GUI window for Class Bracket."""

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

import logging
from typing import Optional

from PyQt6 import QtGui, QtWidgets
from PyQt6.QtGui import QAction, QCloseEvent

from classbracket import APP_NAME, APP_VERSION
from classbracket.config import AppConfig
from classbracket.constants import SAVE_FILE_EXTENSION, SAVE_FILE_FILTER
from classbracket.exceptions import ClassBracketException
from classbracket.gui.views.bracket_view import BracketView
from classbracket.gui.views.leaderboard_view import LeaderboardView
from classbracket.gui.views.match_view import MatchView
from classbracket.gui.views.roster_view import RosterView
from classbracket.store import JsonFileStore, open_store
from classbracket.store.base import TournamentStore
from classbracket.utils import setup_logger

logger = setup_logger(__name__)


# --- Main Application Window ---
class ClassBracketMainWindow(QtWidgets.QMainWindow):
    """Main application window for Class Bracket."""

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        super().__init__()
        self.config = config or AppConfig()
        self.store: TournamentStore = open_store(self.config.store_path)
        self._setup_ui()
        self._attach_store(self.store)

    def _setup_ui(self):
        self.setWindowTitle(APP_NAME)
        self.setGeometry(100, 100, 1100, 900)
        self.tabs = QtWidgets.QTabWidget()
        self.setCentralWidget(self.tabs)
        self._setup_menu()
        self.statusBar().showMessage("Ready")
        logging.info(f"{APP_NAME} v{APP_VERSION} started.")

    def _setup_menu(self):
        """Set up the main menu bar."""
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        self.open_action = self._create_action(
            "&Open Tournament...", self.open_tournament, "Ctrl+O"
        )
        self.save_as_action = self._create_action(
            "Save Tournament &As...", self.save_tournament_as, "Ctrl+Shift+S"
        )
        self.exit_action = self._create_action("E&xit", self.close, "Ctrl+Q")
        file_menu.addActions([self.open_action, self.save_as_action])
        file_menu.addSeparator()
        file_menu.addAction(self.exit_action)

        help_menu = menu_bar.addMenu("&Help")
        self.about_action = self._create_action("&About...", self.show_about_dialog)
        help_menu.addAction(self.about_action)

    def _create_action(self, text: str, slot, shortcut: str = "") -> QAction:
        action = QAction(text, self)
        action.triggered.connect(slot)
        if shortcut:
            action.setShortcut(QtGui.QKeySequence(shortcut))
        return action

    def _attach_store(self, store: TournamentStore):
        """Build the tabs for ``store`` and start following it."""
        self.store = store
        self.roster_tab = RosterView(store)
        self.match_tab = MatchView(store)
        self.bracket_tab = BracketView(store, self.config.layout)
        self.leaderboard_tab = LeaderboardView(store)

        for tab in self._store_tabs():
            tab.status_message.connect(self.statusBar().showMessage)

        self.tabs.addTab(self.roster_tab, "Students")
        self.tabs.addTab(self.match_tab, "Matches")
        self.tabs.addTab(self.bracket_tab, "Bracket")
        self.tabs.addTab(self.leaderboard_tab, "Leaderboard")

        for tab in self._store_tabs():
            tab.start()
        self._update_title()

    def _detach_store(self):
        for tab in self._store_tabs():
            tab.stop()
        while self.tabs.count():
            widget = self.tabs.widget(0)
            self.tabs.removeTab(0)
            widget.deleteLater()

    def _store_tabs(self):
        return [self.roster_tab, self.match_tab, self.bracket_tab, self.leaderboard_tab]

    def _update_title(self):
        path = getattr(self.store, "path", None)
        if path is not None:
            self.setWindowTitle(f"{APP_NAME} - {path.name}")
        else:
            self.setWindowTitle(f"{APP_NAME} - unsaved")

    def open_tournament(self):
        filename, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, "Open Tournament", "", SAVE_FILE_FILTER
        )
        if not filename:
            return
        try:
            store = JsonFileStore(filename)
        except ClassBracketException as e:
            logger.exception("Error loading tournament:")
            QtWidgets.QMessageBox.critical(
                self, "Load Error", f"Could not load tournament:\n{e}"
            )
            return

        self._detach_store()
        self._attach_store(store)
        self.statusBar().showMessage(f"Tournament loaded from {filename}")

    def save_tournament_as(self):
        filename, _ = QtWidgets.QFileDialog.getSaveFileName(
            self, "Save Tournament", "", SAVE_FILE_FILTER
        )
        if not filename:
            return
        if not filename.endswith(SAVE_FILE_EXTENSION):
            filename += SAVE_FILE_EXTENSION

        try:
            store = JsonFileStore(
                filename, self.store.list_students(), self.store.list_matches()
            )
        except ClassBracketException as e:
            logger.exception("Error saving tournament:")
            QtWidgets.QMessageBox.critical(
                self, "Save Error", f"Could not save tournament:\n{e}"
            )
            return

        # Later changes go to the new file
        self._detach_store()
        self._attach_store(store)
        self.statusBar().showMessage(f"Tournament saved to {filename}")

    def show_about_dialog(self):
        QtWidgets.QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<b>{APP_NAME}</b> v{APP_VERSION}<br><br>"
            "Classroom rock, paper, scissors elimination tournaments "
            "with a radial bracket.",
        )

    def closeEvent(self, event: QCloseEvent):
        self._detach_store()
        logging.info(f"{APP_NAME} closing.")
        event.accept()
