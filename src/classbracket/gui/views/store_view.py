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

from typing import List, Optional

from PyQt6 import QtWidgets
from PyQt6.QtCore import pyqtSignal

from classbracket.exceptions import ClassBracketException
from classbracket.models import Match, Student
from classbracket.store.base import TournamentStore
from classbracket.type_hints import Disposer
from classbracket.utils import setup_logger

logger = setup_logger(__name__)


class StoreView(QtWidgets.QWidget):
    """Base for tabs that redraw from store snapshots.

    Subclasses implement ``update_snapshot``. Snapshots are re-emitted
    through a signal so they are always handled on the GUI thread.
    """

    status_message = pyqtSignal(str)
    snapshot_ready = pyqtSignal(object, object)

    def __init__(self, store: TournamentStore, parent=None):
        super().__init__(parent)
        self.store = store
        self._dispose: Optional[Disposer] = None
        self.snapshot_ready.connect(self.update_snapshot)

    def start(self):
        if self._dispose is None:
            self._dispose = self.store.subscribe(self.snapshot_ready.emit)

    def stop(self):
        dispose, self._dispose = self._dispose, None
        if dispose is not None:
            dispose()

    def update_snapshot(self, students: List[Student], matches: List[Match]):
        raise NotImplementedError

    def show_error(self, title: str, error: ClassBracketException):
        logger.warning(f"{title}: {error}")
        QtWidgets.QMessageBox.warning(self, title, str(error))
        self.status_message.emit(f"{title}: {error}")
