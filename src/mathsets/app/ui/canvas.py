from __future__ import annotations

import math
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPainterPath, QPen, QPolygonF
from PySide6.QtWidgets import QSizePolicy, QWidget

from mathsets.app.render import CORNER_RADIUS, CellGlyph, CellState, EdgeGlyph, FormulaGlyph, Frame, Theme

if TYPE_CHECKING:
    from mathsets.app.state import AnimationController

ARROW_HEAD = 6.0
GLOW_LAYERS = 4
FONT_FAMILY = "Inter"


class PascalCanvas(QWidget):
    """
    Paints the frame produced by the render engine.

    The widget keeps no pixel buffer: every paint event asks the controller for
    a fresh frame at the current widget size, so a resize can never show a
    frame laid out for the old dimensions.
    """
    def __init__(self, controller: AnimationController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._theme = Theme.LIGHT

        self.setMinimumSize(320, 240)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        controller.progress_changed.connect(lambda *_: self.update())
        controller.rows_changed.connect(lambda *_: self.update())

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def theme(self) -> Theme:
        return self._theme

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme
        self.update()

    def current_frame(self) -> Frame:
        return self.controller.render(self.width(), self.height(), self._theme)

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.update()

    def paintEvent(self, event) -> None:
        frame = self.current_frame()
        if frame.is_empty:
            # zero-area viewport; Qt repaints once the widget has a size
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        try:
            painter.fillRect(self.rect(), QColor(frame.background))
            for edge in frame.edges:
                self._draw_edge(painter, edge)
            for glyph in frame.cells:
                self._draw_cell(painter, glyph)
            if frame.formula is not None:
                self._draw_formula(painter, frame.formula)
            self._draw_progress(painter, frame)
        finally:
            painter.end()

    # ------------------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------------------

    @staticmethod
    def _font(pixel_size: float, weight: QFont.Weight) -> QFont:
        font = QFont(FONT_FAMILY)
        font.setPixelSize(max(1, int(pixel_size)))
        font.setWeight(weight)
        return font

    @staticmethod
    def _cell_rect(glyph: CellGlyph, grow: float = 0.0) -> QRectF:
        half = glyph.size / 2 + grow
        return QRectF(glyph.x - half, glyph.y - half, 2 * half, 2 * half)

    def _draw_edge(self, painter: QPainter, edge: EdgeGlyph) -> None:
        color = QColor(edge.color)
        painter.save()
        painter.setOpacity(edge.opacity)
        painter.setPen(QPen(color, edge.width))
        start = QPointF(*edge.start)
        end = QPointF(*edge.end)
        painter.drawLine(start, end)

        angle = math.atan2(end.y() - start.y(), end.x() - start.x())
        head = QPolygonF([
            end,
            QPointF(end.x() - ARROW_HEAD * math.cos(angle - math.pi / 6),
                    end.y() - ARROW_HEAD * math.sin(angle - math.pi / 6)),
            QPointF(end.x() - ARROW_HEAD * math.cos(angle + math.pi / 6),
                    end.y() - ARROW_HEAD * math.sin(angle + math.pi / 6)),
        ])
        painter.setBrush(QBrush(color))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.drawPolygon(head)
        painter.restore()

    def _draw_cell(self, painter: QPainter, glyph: CellGlyph) -> None:
        painter.save()

        if glyph.glow:
            glow = QColor(glyph.border)
            glow.setAlphaF(0.08)
            for i in range(GLOW_LAYERS, 0, -1):
                path = QPainterPath()
                path.addRoundedRect(self._cell_rect(glyph, grow=3.0 * i), CORNER_RADIUS + 2 * i, CORNER_RADIUS + 2 * i)
                painter.fillPath(path, glow)

        path = QPainterPath()
        path.addRoundedRect(self._cell_rect(glyph), CORNER_RADIUS, CORNER_RADIUS)
        painter.fillPath(path, QColor(glyph.fill))
        if glyph.border_width > 0:
            painter.strokePath(path, QPen(QColor(glyph.border), glyph.border_width))

        weight = QFont.Weight.DemiBold if glyph.state is CellState.HIDDEN else QFont.Weight.Bold
        painter.setFont(self._font(glyph.font_size, weight))
        painter.setPen(QColor(glyph.text_color))
        painter.drawText(self._cell_rect(glyph), Qt.AlignmentFlag.AlignCenter, glyph.text)

        painter.restore()

    def _draw_formula(self, painter: QPainter, formula: FormulaGlyph) -> None:
        painter.save()
        painter.setFont(self._font(formula.font_size, QFont.Weight.ExtraBold))
        painter.setPen(QColor(formula.color))
        width = max(200.0, formula.font_size * len(formula.text))
        rect = QRectF(formula.x - width / 2, formula.y, width, formula.font_size * 1.5)
        painter.drawText(rect, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop, formula.text)
        painter.restore()

    def _draw_progress(self, painter: QPainter, frame: Frame) -> None:
        painter.save()
        painter.setFont(self._font(12, QFont.Weight.Medium))
        painter.setPen(QColor(frame.progress_color))
        rect = QRectF(0, 12, frame.width - 16, 20)
        painter.drawText(rect, Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignTop, frame.progress_text)
        painter.restore()
