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

"""
Matches tab.

Pick two active students and the winner; the loser is eliminated. The list
below shows every recorded match, newest first, and deleting one brings its
loser back into the tournament.
"""

from typing import List, Optional

from PyQt6 import QtWidgets
from PyQt6.QtCore import Qt

from classbracket.constants import SLOT_PLAYER1, SLOT_PLAYER2
from classbracket.controllers import MatchRecorder
from classbracket.exceptions import ClassBracketException
from classbracket.gui.views.store_view import StoreView
from classbracket.gui.widgets.header import TabHeader
from classbracket.models import Match, Student
from classbracket.store.base import TournamentStore


class MatchView(StoreView):
    def __init__(self, store: TournamentStore, parent=None):
        super().__init__(store, parent)
        self.recorder = MatchRecorder(store)
        self._setup_ui()

    def _setup_ui(self):
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        layout.addWidget(
            TabHeader("Record Match", "Select two players and who won the match")
        )

        form = QtWidgets.QGridLayout()
        form.addWidget(QtWidgets.QLabel("Player 1"), 0, 0)
        self.player1_combo = QtWidgets.QComboBox()
        form.addWidget(self.player1_combo, 0, 1)
        form.addWidget(QtWidgets.QLabel("Player 2"), 1, 0)
        self.player2_combo = QtWidgets.QComboBox()
        form.addWidget(self.player2_combo, 1, 1)

        form.addWidget(QtWidgets.QLabel("Winner"), 2, 0)
        winner_row = QtWidgets.QHBoxLayout()
        self.player1_radio = QtWidgets.QRadioButton("Player 1")
        self.player2_radio = QtWidgets.QRadioButton("Player 2")
        self.player1_radio.setChecked(True)
        winner_row.addWidget(self.player1_radio)
        winner_row.addWidget(self.player2_radio)
        winner_row.addStretch()
        form.addLayout(winner_row, 2, 1)
        layout.addLayout(form)

        self.record_button = QtWidgets.QPushButton("Record Match")
        self.record_button.clicked.connect(self.record_match)
        layout.addWidget(self.record_button, alignment=Qt.AlignmentFlag.AlignRight)

        results_label = QtWidgets.QLabel("Recent Matches")
        font = results_label.font()
        font.setBold(True)
        results_label.setFont(font)
        layout.addWidget(results_label)

        self.match_table = QtWidgets.QTableWidget(0, 4)
        self.match_table.setHorizontalHeaderLabels(
            ["Time", "Player 1", "Player 2", "Winner"]
        )
        self.match_table.horizontalHeader().setSectionResizeMode(
            QtWidgets.QHeaderView.ResizeMode.Stretch
        )
        self.match_table.setSelectionBehavior(
            QtWidgets.QAbstractItemView.SelectionBehavior.SelectRows
        )
        self.match_table.setEditTriggers(
            QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers
        )
        self.match_table.verticalHeader().setVisible(False)
        layout.addWidget(self.match_table, 1)

        self.delete_button = QtWidgets.QPushButton("Delete Selected Match")
        self.delete_button.clicked.connect(self.delete_selected_match)
        layout.addWidget(self.delete_button, alignment=Qt.AlignmentFlag.AlignRight)

    def update_snapshot(self, students: List[Student], matches: List[Match]):
        active = [s for s in students if not s.eliminated]
        self._fill_combo(self.player1_combo, active)
        self._fill_combo(self.player2_combo, active)
        self.record_button.setEnabled(len(active) >= 2)

        self.match_table.setRowCount(len(matches))
        for row, match in enumerate(matches):
            winner = "Tie" if match.is_tie else (match.winner or "")
            values = [
                match.created_at.strftime("%Y-%m-%d %H:%M"),
                match.player1_name,
                match.player2_name,
                winner,
            ]
            for column, value in enumerate(values):
                item = QtWidgets.QTableWidgetItem(value)
                item.setData(Qt.ItemDataRole.UserRole, match.id)
                self.match_table.setItem(row, column, item)
        self.delete_button.setEnabled(bool(matches))

    def _fill_combo(self, combo: QtWidgets.QComboBox, students: List[Student]):
        """Refill a player combo, keeping the current selection when possible."""
        selected = combo.currentData()
        combo.blockSignals(True)
        combo.clear()
        combo.addItem("Select a player...", None)
        for student in students:
            combo.addItem(student.name, student.id)
        index = combo.findData(selected) if selected else -1
        combo.setCurrentIndex(max(index, 0))
        combo.blockSignals(False)

    def record_match(self):
        player1_id = self.player1_combo.currentData()
        player2_id = self.player2_combo.currentData()
        if not player1_id or not player2_id:
            QtWidgets.QMessageBox.warning(
                self, "Record Match", "Please select both players"
            )
            return

        slot = SLOT_PLAYER1 if self.player1_radio.isChecked() else SLOT_PLAYER2
        try:
            match = self.recorder.record_match_with_winner(player1_id, player2_id, slot)
        except ClassBracketException as e:
            self.show_error("Record Match", e)
            return

        loser = match.player2_name if slot == SLOT_PLAYER1 else match.player1_name
        self.status_message.emit(
            f"Match recorded! {match.winner} wins and {loser} is eliminated."
        )

    def _selected_match_id(self) -> Optional[str]:
        items = self.match_table.selectedItems()
        if not items:
            return None
        return items[0].data(Qt.ItemDataRole.UserRole)

    def delete_selected_match(self):
        match_id = self._selected_match_id()
        if match_id is None:
            return

        reply = QtWidgets.QMessageBox.question(
            self,
            "Delete Match",
            "Delete this match? The eliminated player will be reactivated.",
            QtWidgets.QMessageBox.StandardButton.Yes
            | QtWidgets.QMessageBox.StandardButton.No,
            QtWidgets.QMessageBox.StandardButton.No,
        )
        if reply != QtWidgets.QMessageBox.StandardButton.Yes:
            return

        try:
            self.recorder.delete_match(match_id)
        except ClassBracketException as e:
            self.show_error("Delete Match", e)
            return
        self.status_message.emit("Match deleted and player reactivated.")
