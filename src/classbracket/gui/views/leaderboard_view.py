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

"""Leaderboard tab: standings of the students still in the tournament."""

from typing import List

from PyQt6 import QtWidgets
from PyQt6.QtCore import Qt

from classbracket.controllers import statistics
from classbracket.gui.views.store_view import StoreView
from classbracket.gui.widgets.header import TabHeader
from classbracket.models import Match, Student


class LeaderboardView(StoreView):
    def __init__(self, store, parent=None):
        super().__init__(store, parent)
        self._setup_ui()

    def _setup_ui(self):
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        self.header = TabHeader("Leaderboard", "Active players ranked by wins")
        layout.addWidget(self.header)

        self.status_label = QtWidgets.QLabel()
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = self.status_label.font()
        font.setPointSize(13)
        font.setBold(True)
        self.status_label.setFont(font)
        layout.addWidget(self.status_label)

        self.summary_label = QtWidgets.QLabel()
        self.summary_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.summary_label.setStyleSheet("color: #4b5563;")
        layout.addWidget(self.summary_label)

        self.table = QtWidgets.QTableWidget(0, 4)
        self.table.setHorizontalHeaderLabels(["Rank", "Name", "Wins", "Matches"])
        self.table.horizontalHeader().setSectionResizeMode(
            1, QtWidgets.QHeaderView.ResizeMode.Stretch
        )
        self.table.setEditTriggers(
            QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers
        )
        self.table.verticalHeader().setVisible(False)
        layout.addWidget(self.table, 1)

    def update_snapshot(self, students: List[Student], matches: List[Match]):
        status = statistics.tournament_status(students)
        if status.winner is not None:
            self.status_label.setText(f"🏆 {status.winner.name} wins the tournament!")
        elif status.is_complete:
            self.status_label.setText("Tournament complete")
        else:
            self.status_label.setText(
                f"{status.active_students} of {status.total_students} players remaining"
            )

        participation = statistics.participation_percentage(students, matches)
        self.summary_label.setText(
            f"{len(matches)} matches played • {status.eliminated_students} eliminated"
            f" • {participation:.0f}% participation"
        )

        rows = statistics.leaderboard(students, matches)
        self.table.setRowCount(len(rows))
        for index, row in enumerate(rows):
            values = [
                str(index + 1),
                row.student.name,
                str(row.win_count),
                str(row.match_count),
            ]
            for column, value in enumerate(values):
                item = QtWidgets.QTableWidgetItem(value)
                if column != 1:
                    item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
                self.table.setItem(index, column, item)
