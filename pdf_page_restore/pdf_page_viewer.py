#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
PDFを1ページずつ表示するビューアウィジェット
"""

from contextlib import contextmanager
import logging
import os

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPixmap, QImage, QPainter
import fitz

log = logging.getLogger(__name__)


class PDFPageViewer(QWidget):
    """PDFのページ表示・ページ移動を行うウィジェット

    set_pdf() の間は aboutToActivate -> modeEntered -> activated の順にシグナルを出す。
    ページ番号は1始まり。
    """

    aboutToActivate = pyqtSignal()
    modeEntered = pyqtSignal()
    activated = pyqtSignal()
    pageChanged = pyqtSignal(int)

    def __init__(self, parent=None, render_zoom: float = 2.0):
        super().__init__(parent)
        self.setMinimumSize(300, 300)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.pdf_path = None
        self.doc = None
        self.pixmap = None  # 原寸画像
        self.render_zoom = render_zoom
        self.scale_factor = 1.0
        self._page_index = 0  # 0始まり

    @contextmanager
    def _activation(self):
        self.aboutToActivate.emit()
        try:
            yield
        finally:
            self.activated.emit()

    def set_pdf(self, pdf_path):
        """PDFをセットして表示

        Args:
            pdf_path: PDFファイルのパス

        Returns:
            bool: PDFの読み込みに成功したかどうか
        """
        with self._activation():
            self.close_pdf()
            if not pdf_path or not os.path.exists(pdf_path):
                return False
            try:
                doc = fitz.open(pdf_path)
            except Exception as e:
                log.warning("%s 読み込み失敗: %s", pdf_path, e)
                return False
            if len(doc) == 0:
                doc.close()
                return False
            self.doc = doc
            self.pdf_path = os.path.abspath(pdf_path)
            self._page_index = 0
            self._render_page()
            self.pageChanged.emit(1)
            self.modeEntered.emit()
            return True

    def close_pdf(self):
        if self.doc is not None:
            self.doc.close()
        self.doc = None
        self.pdf_path = None
        self.pixmap = None
        self._page_index = 0
        self.update()

    def is_viewer_mode(self) -> bool:
        return self.doc is not None

    def page_count(self) -> int:
        return len(self.doc) if self.doc is not None else 0

    def current_page(self) -> int:
        return self._page_index + 1

    def goto_page(self, page: int) -> bool:
        """指定ページへ移動（範囲外は先頭・末尾に丸める）。ページが変わったら True"""
        if self.doc is None:
            return False
        index = min(max(int(page), 1), len(self.doc)) - 1
        if index == self._page_index:
            return False
        self._page_index = index
        self._render_page()
        self.pageChanged.emit(self.current_page())
        return True

    def next_page(self) -> bool:
        return self.goto_page(self.current_page() + 1)

    def prev_page(self) -> bool:
        return self.goto_page(self.current_page() - 1)

    def set_scale(self, scale: float):
        """表示倍率を設定 (1.0 = 100%)"""
        if abs(scale - self.scale_factor) < 0.001:
            return
        self.scale_factor = scale
        self._fit_to_pixmap()
        self.update()

    def _render_page(self):
        page = self.doc.load_page(self._page_index)
        pix = page.get_pixmap(matrix=fitz.Matrix(self.render_zoom, self.render_zoom))
        img = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format.Format_RGB888)
        # pix.samples の寿命に依存しないようコピーを持つ
        self.pixmap = QPixmap.fromImage(img.copy())
        self._fit_to_pixmap()
        self.update()

    def _fit_to_pixmap(self):
        if not self.pixmap:
            return
        self.resize(
            int(self.pixmap.width() * self.scale_factor),
            int(self.pixmap.height() * self.scale_factor),
        )

    def paintEvent(self, event):
        painter = QPainter(self)
        if self.pixmap:
            scaled = self.pixmap.scaled(
                int(self.pixmap.width() * self.scale_factor),
                int(self.pixmap.height() * self.scale_factor),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
            painter.drawPixmap(0, 0, scaled)
        painter.end()

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key.Key_PageDown, Qt.Key.Key_Right):
            self.next_page()
        elif event.key() in (Qt.Key.Key_PageUp, Qt.Key.Key_Left):
            self.prev_page()
        else:
            super().keyPressEvent(event)
