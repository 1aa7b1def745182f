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

"""Students tab: paste in a class list and browse the roster."""

from typing import List

from PyQt6 import QtGui, QtWidgets
from PyQt6.QtCore import Qt

from classbracket.controllers import RosterManager, statistics
from classbracket.controllers.roster import filter_students
from classbracket.exceptions import ClassBracketException
from classbracket.gui.views.store_view import StoreView
from classbracket.gui.widgets.header import TabHeader
from classbracket.models import Match, Student
from classbracket.store.base import TournamentStore


# Column title and sort key, in display order
SORT_COLUMNS = [
    ("Name", statistics.SORT_NAME),
    ("Matches", statistics.SORT_MATCHES),
    ("Status", statistics.SORT_STATUS),
]


class RosterView(StoreView):
    def __init__(self, store: TournamentStore, parent=None):
        super().__init__(store, parent)
        self.roster = RosterManager(store)
        self._students: List[Student] = []
        self._matches: List[Match] = []
        self._sort_key = statistics.SORT_NAME
        self._sort_descending = False
        self._setup_ui()

    def _setup_ui(self):
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        layout.addWidget(TabHeader("Students", "One student name per line"))

        import_group = QtWidgets.QGroupBox("Import Students")
        import_layout = QtWidgets.QVBoxLayout(import_group)
        self.import_edit = QtWidgets.QPlainTextEdit()
        self.import_edit.setPlaceholderText("Alice\nBob\nCarol")
        self.import_edit.setMaximumHeight(140)
        import_layout.addWidget(self.import_edit)
        self.import_button = QtWidgets.QPushButton("Import Students")
        self.import_button.clicked.connect(self.import_students)
        import_layout.addWidget(
            self.import_button, alignment=Qt.AlignmentFlag.AlignRight
        )
        layout.addWidget(import_group)

        search_row = QtWidgets.QHBoxLayout()
        self.search_edit = QtWidgets.QLineEdit()
        self.search_edit.setPlaceholderText("Search students...")
        self.search_edit.textChanged.connect(self._refresh_list)
        search_row.addWidget(self.search_edit)
        self.active_only_check = QtWidgets.QCheckBox("Active only")
        self.active_only_check.toggled.connect(self._refresh_list)
        search_row.addWidget(self.active_only_check)
        layout.addLayout(search_row)

        self.count_label = QtWidgets.QLabel()
        layout.addWidget(self.count_label)

        self.student_table = QtWidgets.QTableWidget(0, len(SORT_COLUMNS))
        self.student_table.setHorizontalHeaderLabels(
            [title for title, _ in SORT_COLUMNS]
        )
        header = self.student_table.horizontalHeader()
        header.setSectionResizeMode(QtWidgets.QHeaderView.ResizeMode.Stretch)
        header.setSectionsClickable(True)
        header.setSortIndicatorShown(True)
        header.sectionClicked.connect(self.sort_by_column)
        self.student_table.setEditTriggers(
            QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers
        )
        self.student_table.verticalHeader().setVisible(False)
        layout.addWidget(self.student_table, 1)

    def import_students(self):
        try:
            created = self.roster.import_students(self.import_edit.toPlainText())
        except ClassBracketException as e:
            self.show_error("Import Error", e)
            return
        self.import_edit.clear()
        self.status_message.emit(f"Successfully imported {len(created)} students")

    def update_snapshot(self, students: List[Student], matches: List[Match]):
        self._students = students
        self._matches = matches
        self._refresh_list()

    def sort_by_column(self, column: int):
        """Sort by a column, toggling the direction when it is already active."""
        key = SORT_COLUMNS[column][1]
        if key == self._sort_key:
            self._sort_descending = not self._sort_descending
        else:
            self._sort_key = key
            self._sort_descending = False
        self._refresh_list()

    def _refresh_list(self):
        shown = filter_students(
            self._students,
            self.search_edit.text(),
            active_only=self.active_only_check.isChecked(),
        )
        rows = statistics.sort_standings(
            statistics.students_with_match_counts(shown, self._matches),
            self._sort_key,
            self._sort_descending,
        )

        self.student_table.setRowCount(len(rows))
        for row_index, row in enumerate(rows):
            status = "Eliminated" if row.student.eliminated else "Active"
            values = [row.student.name, str(row.match_count), status]
            for column, value in enumerate(values):
                item = QtWidgets.QTableWidgetItem(value)
                item.setData(Qt.ItemDataRole.UserRole, row.student.id)
                if row.student.eliminated:
                    font = item.font()
                    font.setStrikeOut(column == 0)
                    item.setFont(font)
                    item.setForeground(QtGui.QColor("#9ca3af"))
                self.student_table.setItem(row_index, column, item)

        column = [key for _, key in SORT_COLUMNS].index(self._sort_key)
        order = (
            Qt.SortOrder.DescendingOrder
            if self._sort_descending
            else Qt.SortOrder.AscendingOrder
        )
        self.student_table.horizontalHeader().setSortIndicator(column, order)

        active = sum(1 for s in self._students if not s.eliminated)
        self.count_label.setText(
            f"{len(self._students)} students ({active} active), {len(rows)} shown"
        )
