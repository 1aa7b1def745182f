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

from PyQt6 import QtWidgets
from PyQt6.QtCore import Qt

ACCENT_COLOUR = "#16a34a"


class TabHeader(QtWidgets.QWidget):
    """
    Header shared by every tab.
    Shows a title, a subtitle line and a row of text action buttons.
    """

    def __init__(self, title: str, subtitle: str = "", parent=None):
        super().__init__(parent)
        self.setProperty("class", "TabHeader")

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 16)
        layout.setSpacing(6)

        top_row = QtWidgets.QHBoxLayout()
        top_row.setSpacing(12)

        self.title_label = QtWidgets.QLabel(title)
        font = self.title_label.font()
        font.setPointSize(20)
        font.setBold(True)
        self.title_label.setFont(font)
        self.title_label.setStyleSheet(f"color: {ACCENT_COLOUR}; padding-top: 4px;")
        top_row.addWidget(self.title_label)

        top_row.addStretch()

        self.actions_layout = QtWidgets.QHBoxLayout()
        self.actions_layout.setSpacing(8)
        top_row.addLayout(self.actions_layout)

        layout.addLayout(top_row)

        self.subtitle_label = QtWidgets.QLabel(subtitle)
        self.subtitle_label.setStyleSheet("color: #4b5563;")
        self.subtitle_label.setVisible(bool(subtitle))
        layout.addWidget(self.subtitle_label)

        line = QtWidgets.QFrame()
        line.setFrameShape(QtWidgets.QFrame.Shape.HLine)
        line.setFrameShadow(QtWidgets.QFrame.Shadow.Sunken)
        line.setStyleSheet("background-color: #e0e0e0; margin-top: 4px;")
        layout.addWidget(line)

    def set_title(self, title: str):
        self.title_label.setText(title)

    def set_subtitle(self, subtitle: str):
        self.subtitle_label.setText(subtitle)
        self.subtitle_label.setVisible(bool(subtitle))

    def add_action_button(
        self, text: str, tooltip: str, callback
    ) -> QtWidgets.QPushButton:
        """Adds an action button to the header."""
        btn = QtWidgets.QPushButton(text)
        btn.setToolTip(tooltip)
        btn.clicked.connect(callback)
        btn.setCursor(Qt.CursorShape.PointingHandCursor)
        btn.setStyleSheet(f"""
            QPushButton {{
                background-color: transparent;
                border: 1px solid {ACCENT_COLOUR};
                border-radius: 4px;
                color: {ACCENT_COLOUR};
                padding: 4px 10px;
            }}
            QPushButton:hover {{
                background-color: #dcfce7;
            }}
            QPushButton:pressed {{
                background-color: #bbf7d0;
            }}
        """)

        self.actions_layout.addWidget(btn)
        return btn
