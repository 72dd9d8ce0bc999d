"""Interactive canvas showing the page panels, the selection and the cut preview."""

from __future__ import annotations

from typing import Optional, Sequence

from PyQt6.QtCore import Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import (
    QBrush,
    QColor,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPainterPath,
    QPen,
    QWheelEvent,
)
from PyQt6.QtWidgets import QGraphicsScene, QGraphicsView

from panelcut.geometry import Point
from panelcut.modes import AnchorMode, GridSnapperMode, SelectMode
from panelcut.session import EditorSession

# Visual constants
CLEAR_COLOR = QColor(238, 238, 238)
POLYGON_COLOR = QColor(34, 34, 34)
SELECTED_COLOR = QColor(125, 177, 255)
SELECTED_FILL = QColor(125, 177, 255, 40)
KNIFE_COLOR = QColor(255, 197, 82)
LINE_COLOR = QColor(0, 255, 255)
AABB_COLOR = QColor(255, 0, 255)
PEN_WIDTH = 2

# Qt reports wheel rotation in eighths of a degree; one notch is 120 units.
WHEEL_NOTCH = 120.0


class CanvasView(QGraphicsView):
    """Zoomable / pannable view of the page that feeds input into the session."""

    polygons_changed = pyqtSignal()  # Emitted after a cut or a deletion
    angle_changed = pyqtSignal(float)  # Emitted when the wheel rotates the knife
    status_message = pyqtSignal(str)

    def __init__(self, session: EditorSession, parent=None) -> None:
        super().__init__(parent)
        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)
        self.setRenderHints(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.viewport().setMouseTracking(True)

        self._session = session
        self._zoom: float = 1.0
        self._panning: bool = False
        self._pan_start: Optional[QPointF] = None

        self.reset_page()

    # ── public API ───────────────────────────────────────────────────────

    def reset_page(self) -> None:
        """Resize the scene to the configured page and fit it in the view."""
        cfg = self._session.config
        self._scene.clear()
        rect = QRectF(0, 0, cfg.width_px, cfg.height_px)
        self._scene.addRect(rect, QPen(Qt.PenStyle.NoPen), QBrush(CLEAR_COLOR))
        self._scene.setSceneRect(rect)
        self.fit_view()

    def set_tool(self, mode_name: str) -> None:
        self._session.set_mode(mode_name)
        if mode_name == SelectMode.name:
            self.setCursor(Qt.CursorShape.ArrowCursor)
        else:
            self.setCursor(Qt.CursorShape.CrossCursor)
        self.viewport().update()

    def refresh(self) -> None:
        self._session.recompute()
        self.viewport().update()

    # ── zoom ─────────────────────────────────────────────────────────────

    def wheelEvent(self, event: QWheelEvent) -> None:  # noqa: N802
        if isinstance(self._session.mode, SelectMode):
            factor = 1.15 if event.angleDelta().y() > 0 else 1 / 1.15
            self.scale(factor, factor)
            self._zoom *= factor
            return
        # Scrolling down (negative angle delta) turns the knife clockwise.
        notches = -event.angleDelta().y() / WHEEL_NOTCH
        if self._session.wheel(notches):
            self.angle_changed.emit(self._session.config.angle)
            self.viewport().update()

    def fit_view(self) -> None:
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)
        self._zoom = self.transform().m11()

    # ── mouse handling ───────────────────────────────────────────────────

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.MiddleButton:
            self._panning = True
            self._pan_start = event.position()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            return

        if event.button() == Qt.MouseButton.LeftButton:
            if self._session.pointer_down():
                self.status_message.emit("Grid frozen – press R to release it.")
                self.viewport().update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if self._panning and self._pan_start is not None:
            delta = event.position() - self._pan_start
            self._pan_start = event.position()
            self.horizontalScrollBar().setValue(
                self.horizontalScrollBar().value() - int(delta.x())
            )
            self.verticalScrollBar().setValue(
                self.verticalScrollBar().value() - int(delta.y())
            )
            return

        pos = self.mapToScene(event.position().toPoint())
        self._session.pointer_move(pos.x(), pos.y())
        self.viewport().update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.MiddleButton and self._panning:
            self._panning = False
            self._pan_start = None
            self.set_tool(self._session.mode.name)

    def leaveEvent(self, event) -> None:  # noqa: N802
        self._session.pointer_leave()
        self.viewport().update()
        super().leaveEvent(event)

    # ── keyboard handling ────────────────────────────────────────────────

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802
        key = event.key()
        if key == Qt.Key.Key_F:
            self._on_apply()
        elif key == Qt.Key.Key_R:
            if self._session.clear():
                self.status_message.emit("Selection reset.")
        elif key in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            if self._session.delete():
                self.polygons_changed.emit()
        else:
            super().keyPressEvent(event)
            return
        self.viewport().update()

    def _on_apply(self) -> None:
        before = len(self._session.polygons)
        was_awaiting_start = (
            isinstance(self._session.mode, AnchorMode) and self._session.mode.start is None
        )
        if not self._session.apply():
            self.status_message.emit("Nothing to cut here.")
            return
        if len(self._session.polygons) != before:
            self.polygons_changed.emit()
        elif was_awaiting_start:
            self.status_message.emit("Anchor set – aim with the mouse, press F to cut.")

    # ── painting overlay ─────────────────────────────────────────────────

    def _to_view(self, point: Point) -> QPointF:
        return QPointF(self.mapFromScene(QPointF(point[0], point[1])))

    def _polygon_path(self, points: Sequence[Point]) -> QPainterPath:
        pts = [self._to_view(p) for p in points]
        path = QPainterPath()
        path.moveTo(pts[0])
        for p in pts[1:]:
            path.lineTo(p)
        path.closeSubpath()
        return path

    def _pen(self, color: QColor) -> QPen:
        pen = QPen(color, PEN_WIDTH)
        pen.setCosmetic(True)
        return pen

    def paintEvent(self, event) -> None:  # noqa: N802
        super().paintEvent(event)
        session = self._session

        painter = QPainter(self.viewport())
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.setPen(self._pen(POLYGON_COLOR))
        for polygon in session.polygons:
            painter.drawPath(self._polygon_path(polygon.points))

        if session.selected is not None:
            path = self._polygon_path(session.selected.points)
            painter.fillPath(path, QBrush(SELECTED_FILL))
            painter.setPen(self._pen(SELECTED_COLOR))
            painter.drawPath(path)
            self._paint_preview(painter)

        box = session.frozen_box
        if box is not None:
            painter.setPen(self._pen(AABB_COLOR))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(QRectF(self._to_view(box.min), self._to_view(box.max)))

        painter.end()

    def _paint_preview(self, painter: QPainter) -> None:
        """Draw the mode-specific cut preview for the selected panel."""
        session = self._session
        guides = session.guides
        mode = session.mode

        painter.setPen(self._pen(LINE_COLOR))
        if isinstance(mode, AnchorMode) and mode.start is None and guides.anchor_point:
            painter.drawLine(self._to_view(guides.anchor_point), self._to_view(session.cursor))
        elif isinstance(mode, GridSnapperMode) and guides.snapped:
            painter.drawLine(self._to_view(guides.snapped), self._to_view(session.cursor))

        if guides.cuttable:
            painter.setPen(self._pen(KNIFE_COLOR))
            for crossings in (guides.left, guides.right):
                painter.drawLine(
                    self._to_view(crossings[0].point), self._to_view(crossings[1].point)
                )
