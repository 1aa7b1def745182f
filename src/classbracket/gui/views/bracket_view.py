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
Bracket tab: draws the radial tournament bracket.

Students sit on concentric rings, one ring per win count, with the most wins
innermost. Green arrows run from a beaten student to the student who beat
them. The drawing is rebuilt from scratch on every store change and swapped
into the view in one step.
"""

import math
from typing import List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets
from PyQt6.QtCore import Qt, pyqtSignal

from classbracket.bracket import BracketEdge, BracketLayout, BracketNode
from classbracket.config import LayoutConfig
from classbracket.constants import (
    CHART_HEIGHT,
    EDGE_COLOUR,
    NODE_COLOURS,
    STATUS_ACTIVE,
    STATUS_CHAMPION,
    STATUS_ELIMINATED,
)
from classbracket.controllers import BracketController
from classbracket.models import Match, Student
from classbracket.store.base import TournamentStore
from classbracket.gui.widgets.header import TabHeader
from classbracket.utils import setup_logger

logger = setup_logger(__name__)

NODE_WIDTH = 170
NODE_HEIGHT = 90
ARROW_SIZE = 14
MIN_ZOOM = 0.1
MAX_ZOOM = 1.5
ZOOM_STEP = 1.15


def clip_to_box(
    centre: QtCore.QPointF, dx: float, dy: float, half_w: float, half_h: float
) -> QtCore.QPointF:
    """Point where a ray towards ``centre`` along (dx, dy) meets the node box."""
    scales = []
    if dx:
        scales.append(half_w / abs(dx))
    if dy:
        scales.append(half_h / abs(dy))
    if not scales:
        return QtCore.QPointF(centre)
    t = min(scales)
    return QtCore.QPointF(centre.x() - dx * t, centre.y() - dy * t)


class BracketGraphicsView(QtWidgets.QGraphicsView):
    """Graphics view with wheel zoom limited to a sensible range."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHints(
            QtGui.QPainter.RenderHint.Antialiasing
            | QtGui.QPainter.RenderHint.TextAntialiasing
        )
        self.setDragMode(QtWidgets.QGraphicsView.DragMode.ScrollHandDrag)
        self.setTransformationAnchor(
            QtWidgets.QGraphicsView.ViewportAnchor.AnchorUnderMouse
        )
        self.setBackgroundBrush(QtGui.QColor("#fafafa"))
        self.setMinimumHeight(CHART_HEIGHT)

    def zoom_level(self) -> float:
        return self.transform().m11()

    def wheelEvent(self, event: QtGui.QWheelEvent):
        factor = ZOOM_STEP if event.angleDelta().y() > 0 else 1 / ZOOM_STEP
        target = self.zoom_level() * factor
        if MIN_ZOOM <= target <= MAX_ZOOM:
            self.scale(factor, factor)

    def fit_contents(self):
        """Fit the whole scene with a 10% margin, never zooming past the limit."""
        scene = self.scene()
        if scene is None:
            return
        rect = scene.itemsBoundingRect()
        if rect.isEmpty():
            return
        margin_x = rect.width() * 0.1
        margin_y = rect.height() * 0.1
        self.fitInView(
            rect.adjusted(-margin_x, -margin_y, margin_x, margin_y),
            Qt.AspectRatioMode.KeepAspectRatio,
        )
        zoom = self.zoom_level()
        if zoom > MAX_ZOOM:
            self.scale(MAX_ZOOM / zoom, MAX_ZOOM / zoom)
        elif zoom < MIN_ZOOM:
            self.scale(MIN_ZOOM / zoom, MIN_ZOOM / zoom)


class BracketScene(QtWidgets.QGraphicsScene):
    """Scene holding one complete bracket layout."""

    def __init__(self, layout: BracketLayout, config: LayoutConfig, parent=None):
        super().__init__(parent)
        self.bracket_layout = layout
        self._draw_rings(config)
        # Edges first so nodes are painted on top of them
        for edge in layout.edges:
            self._draw_edge(edge)
        for node in layout.nodes:
            self._draw_node(node)

    def _draw_rings(self, config: LayoutConfig):
        pen = QtGui.QPen(QtGui.QColor("#e5e7eb"), 2, Qt.PenStyle.DotLine)
        radii = {node.radius for node in self.bracket_layout.nodes}
        for radius in radii:
            if radius <= 0:
                continue
            ring = self.addEllipse(
                config.center_x - radius,
                config.center_y - radius,
                radius * 2,
                radius * 2,
                pen,
            )
            ring.setZValue(-2)

    def _node_centre(self, node: BracketNode) -> QtCore.QPointF:
        return QtCore.QPointF(node.position.x, node.position.y)

    def _draw_node(self, node: BracketNode):
        background, border = NODE_COLOURS[node.status]
        if node.status == STATUS_ELIMINATED:
            pen = QtGui.QPen(QtGui.QColor(border), 2, Qt.PenStyle.DashLine)
        elif node.status == STATUS_CHAMPION:
            pen = QtGui.QPen(QtGui.QColor(border), 3)
        else:
            pen = QtGui.QPen(QtGui.QColor(border), 2)

        centre = self._node_centre(node)
        rect = QtCore.QRectF(
            centre.x() - NODE_WIDTH / 2,
            centre.y() - NODE_HEIGHT / 2,
            NODE_WIDTH,
            NODE_HEIGHT,
        )
        path = QtGui.QPainterPath()
        path.addRoundedRect(rect, 12, 12)
        box = self.addPath(path, pen, QtGui.QBrush(QtGui.QColor(background)))
        box.setToolTip(f"{node.name} ({node.status})")
        if node.status == STATUS_ELIMINATED:
            box.setOpacity(0.7)

        name = node.name
        if node.status == STATUS_CHAMPION:
            name += " 👑"
        name_item = self.addText(name)
        name_font = name_item.font()
        name_font.setBold(True)
        name_font.setStrikeOut(node.status == STATUS_ELIMINATED)
        name_item.setFont(name_font)
        self._centre_text(name_item, centre.x(), rect.top() + 6)

        record = f"W: {node.win_count} • L: {node.loss_count}"
        if node.tie_count > 0:
            record += f" • T: {node.tie_count}"
        record_item = self.addText(record)
        record_item.setDefaultTextColor(QtGui.QColor("#4b5563"))
        self._centre_text(record_item, centre.x(), rect.top() + 32)

        status_item = self.addText(node.status)
        status_font = status_item.font()
        status_font.setBold(True)
        status_font.setPointSizeF(status_font.pointSizeF() * 0.85)
        status_item.setFont(status_font)
        status_item.setDefaultTextColor(QtGui.QColor(border))
        self._centre_text(status_item, centre.x(), rect.top() + 58)

    def _centre_text(self, item: QtWidgets.QGraphicsTextItem, x: float, top: float):
        item.setPos(x - item.boundingRect().width() / 2, top)

    def _draw_edge(self, edge: BracketEdge):
        source = self.bracket_layout.node_for(edge.source_student_id)
        target = self.bracket_layout.node_for(edge.target_student_id)
        if source is None or target is None:
            return

        start = self._node_centre(source)
        end = self._node_centre(target)
        dx = end.x() - start.x()
        dy = end.y() - start.y()
        length = math.hypot(dx, dy)
        if length == 0:
            return

        tip = clip_to_box(end, dx, dy, NODE_WIDTH / 2, NODE_HEIGHT / 2)
        tail = clip_to_box(start, -dx, -dy, NODE_WIDTH / 2, NODE_HEIGHT / 2)

        colour = QtGui.QColor(EDGE_COLOUR)
        line = self.addLine(QtCore.QLineF(tail, tip), QtGui.QPen(colour, 3))
        line.setZValue(-1)

        ux, uy = dx / length, dy / length
        base = QtCore.QPointF(tip.x() - ux * ARROW_SIZE, tip.y() - uy * ARROW_SIZE)
        left = QtCore.QPointF(
            base.x() - uy * ARROW_SIZE / 2, base.y() + ux * ARROW_SIZE / 2
        )
        right = QtCore.QPointF(
            base.x() + uy * ARROW_SIZE / 2, base.y() - ux * ARROW_SIZE / 2
        )
        arrow = self.addPolygon(
            QtGui.QPolygonF([tip, left, right]),
            QtGui.QPen(colour),
            QtGui.QBrush(colour),
        )
        arrow.setZValue(-1)

        label = self.addText(edge.label)
        label.setDefaultTextColor(QtGui.QColor("#15803d"))
        rect = label.boundingRect()
        label.setPos(
            (tail.x() + tip.x()) / 2 - rect.width() / 2,
            (tail.y() + tip.y()) / 2 - rect.height() / 2,
        )


class EmptyStateWidget(QtWidgets.QWidget):
    """Centered title and hint shown instead of the chart."""

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QtWidgets.QVBoxLayout(self)
        layout.addStretch()
        self.title_label = QtWidgets.QLabel()
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = self.title_label.font()
        font.setPointSize(14)
        font.setBold(True)
        self.title_label.setFont(font)
        self.title_label.setStyleSheet("color: #4b5563;")
        layout.addWidget(self.title_label)
        self.hint_label = QtWidgets.QLabel()
        self.hint_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.hint_label.setStyleSheet("color: #6b7280;")
        layout.addWidget(self.hint_label)
        layout.addStretch()

    def set_message(self, title: str, hint: str):
        self.title_label.setText(title)
        self.hint_label.setText(hint)


def _legend_swatch(status: str) -> QtWidgets.QLabel:
    background, border = NODE_COLOURS[status]
    style = "dashed" if status == STATUS_ELIMINATED else "solid"
    swatch = QtWidgets.QLabel()
    swatch.setFixedSize(14, 14)
    swatch.setStyleSheet(
        f"background-color: {background}; border: 2px {style} {border};"
        " border-radius: 3px;"
    )
    return swatch


class BracketView(QtWidgets.QWidget):
    """Bracket tab."""

    status_message = pyqtSignal(str)
    # Carries layouts from store callbacks onto the GUI thread
    layout_ready = pyqtSignal(object, object, object)

    def __init__(
        self,
        store: TournamentStore,
        config: Optional[LayoutConfig] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.config = config or LayoutConfig()
        self.controller = BracketController(store, self.layout_ready.emit, self.config)
        self.layout_ready.connect(self.show_layout)
        self._scene: Optional[BracketScene] = None
        self._setup_ui()

    def _setup_ui(self):
        main_layout = QtWidgets.QVBoxLayout(self)
        main_layout.setContentsMargins(20, 20, 20, 20)

        self.header = TabHeader(
            "Tournament Bracket",
            "Interactive bracket showing match progression and results",
        )
        self.header.add_action_button(
            "Fit", "Fit the whole bracket in view", self._fit_view
        )
        self.header.add_action_button(
            "Refresh Bracket", "Reload students and matches", self.refresh
        )
        main_layout.addWidget(self.header)

        self.summary_label = QtWidgets.QLabel()
        font = self.summary_label.font()
        font.setBold(True)
        self.summary_label.setFont(font)
        main_layout.addWidget(self.summary_label)

        self.stack = QtWidgets.QStackedWidget()
        self.empty_state = EmptyStateWidget()
        self.graphics_view = BracketGraphicsView()
        self.stack.addWidget(self.empty_state)
        self.stack.addWidget(self.graphics_view)
        main_layout.addWidget(self.stack, 1)

        self.legend = QtWidgets.QWidget()
        legend_layout = QtWidgets.QHBoxLayout(self.legend)
        legend_layout.addStretch()
        for status, text in (
            (STATUS_ACTIVE, "Active Players"),
            (STATUS_ELIMINATED, "Eliminated Players"),
            (STATUS_CHAMPION, "Champion"),
        ):
            legend_layout.addWidget(_legend_swatch(status))
            legend_layout.addWidget(QtWidgets.QLabel(text))
            legend_layout.addSpacing(12)
        legend_layout.addStretch()
        main_layout.addWidget(self.legend)

        self.legend_hint = QtWidgets.QLabel(
            "Players arranged in concentric circles by wins - outer circles "
            "have fewer wins, inner circles have more wins"
        )
        self.legend_hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.legend_hint.setStyleSheet("color: #6b7280; font-size: 11px;")
        main_layout.addWidget(self.legend_hint)

    def start(self):
        """Begin following the store."""
        self.controller.start()

    def stop(self):
        self.controller.stop()

    def refresh(self):
        self.controller.refresh()
        self.status_message.emit("Bracket refreshed.")

    def show_layout(
        self, layout: BracketLayout, students: List[Student], matches: List[Match]
    ):
        """Replace the drawing with a newly computed layout."""
        self.summary_label.setText(
            f"{len(students)} Students • {len(matches)} Matches"
        )
        has_matches = bool(matches)
        self.legend.setVisible(has_matches)
        self.legend_hint.setVisible(has_matches)

        if not students:
            self.empty_state.set_message(
                "No students imported yet!",
                "Import students first to see the tournament bracket",
            )
            self.stack.setCurrentWidget(self.empty_state)
            self._replace_scene(None)
            return
        if not matches:
            self.empty_state.set_message(
                "No matches recorded yet!",
                "Record some matches to see the tournament bracket",
            )
            self.stack.setCurrentWidget(self.empty_state)
            self._replace_scene(None)
            return

        self._replace_scene(BracketScene(layout, self.config))
        self.stack.setCurrentWidget(self.graphics_view)
        self._fit_view()
        logger.debug(
            f"Bracket drawn with {len(layout.nodes)} nodes and {len(layout.edges)} edges"
        )

    def _replace_scene(self, scene: Optional[BracketScene]):
        old_scene, self._scene = self._scene, scene
        self.graphics_view.setScene(scene)
        if old_scene is not None:
            old_scene.deleteLater()

    def _fit_view(self):
        self.graphics_view.fit_contents()

