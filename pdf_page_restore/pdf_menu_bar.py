from PyQt6.QtWidgets import QMenuBar, QMenu, QFileDialog
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtCore import pyqtSignal


class PDFMenuBar(QMenuBar):
    fileOpened = pyqtSignal(str)
    prevPageRequested = pyqtSignal()
    nextPageRequested = pyqtSignal()
    forgetPageRequested = pyqtSignal()

    def __init__(self, parent=None, start_dir=""):
        super().__init__(parent)
        self.start_dir = start_dir or ""
        file_menu = QMenu("ファイル", self)
        self.addMenu(file_menu)

        open_file_action = QAction("ファイルを開く...", self)
        open_file_action.setShortcut(QKeySequence.StandardKey.Open)
        open_file_action.triggered.connect(self.open_file)
        file_menu.addAction(open_file_action)

        forget_action = QAction("保存したページを削除", self)
        forget_action.triggered.connect(self.forgetPageRequested)
        file_menu.addAction(forget_action)

        page_menu = QMenu("ページ", self)
        self.addMenu(page_menu)

        prev_action = QAction("前のページ", self)
        prev_action.triggered.connect(self.prevPageRequested)
        page_menu.addAction(prev_action)

        next_action = QAction("次のページ", self)
        next_action.triggered.connect(self.nextPageRequested)
        page_menu.addAction(next_action)

    def open_file(self):
        path, _ = QFileDialog.getOpenFileName(self, "PDFファイルを開く", self.start_dir, "PDF Files (*.pdf)")
        if path:
            self.fileOpened.emit(path)
