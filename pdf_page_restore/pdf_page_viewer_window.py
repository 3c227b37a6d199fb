import sys
import os
import logging
from PyQt6.QtWidgets import QMainWindow, QScrollArea, QMessageBox, QApplication
from pdf_page_restore.pdf_menu_bar import PDFMenuBar
from pdf_page_restore.pdf_page_viewer import PDFPageViewer
from pdf_page_restore.page_restore_controller import setup_page_restore
from pdf_page_restore.path_manager import get_appdata_path

log = logging.getLogger(__name__)

LAST_DIR_FILENAME = "last_pdf_dir.txt"


def load_last_dir(last_dir_file):
    try:
        with open(last_dir_file, "r", encoding="utf-8") as f:
            path = f.read().strip()
            if os.path.isdir(path):
                return path
    except OSError:
        pass
    return None


def save_last_dir(last_dir_file, path):
    try:
        with open(last_dir_file, "w", encoding="utf-8") as f:
            f.write(path)
    except OSError as e:
        log.info("最終フォルダ保存失敗: %s", e)


class PDFPageViewerWindow(QMainWindow):
    def __init__(self, pdf_path=None, config=None, last_dir_file=None):
        super().__init__()
        if last_dir_file is None:
            last_dir_file = get_appdata_path(LAST_DIR_FILENAME)
        self.last_dir_file = last_dir_file
        self.setWindowTitle("PDFビューア")
        self.resize(900, 1000)
        self.viewer = PDFPageViewer()
        # ページ保存・復元はビューアに1回接続するだけでよい
        self.page_restore = setup_page_restore(self.viewer, config)
        self.viewer.pageChanged.connect(self._update_title)
        scroll = QScrollArea(self)
        scroll.setWidget(self.viewer)
        self.setCentralWidget(scroll)
        self.menu_bar = PDFMenuBar(self, start_dir=load_last_dir(last_dir_file))
        self.menu_bar.fileOpened.connect(self.open_pdf)
        self.menu_bar.prevPageRequested.connect(self.viewer.prev_page)
        self.menu_bar.nextPageRequested.connect(self.viewer.next_page)
        self.menu_bar.forgetPageRequested.connect(self.forget_page)
        self.setMenuBar(self.menu_bar)
        if pdf_path:
            self.open_pdf(pdf_path)

    def open_pdf(self, pdf_path):
        if not self.viewer.set_pdf(pdf_path):
            QMessageBox.warning(self, "エラー", f"{pdf_path} を開けませんでした")
            return False
        folder = os.path.dirname(self.viewer.pdf_path)
        save_last_dir(self.last_dir_file, folder)
        self.menu_bar.start_dir = folder
        self._update_title()
        return True

    def forget_page(self):
        self.page_restore.forget()

    def _update_title(self, *args):
        if not self.viewer.is_viewer_mode():
            self.setWindowTitle("PDFビューア")
            return
        name = os.path.basename(self.viewer.pdf_path)
        self.setWindowTitle(
            f"{name} - {self.viewer.current_page()}/{self.viewer.page_count()} - PDFビューア"
        )


if __name__ == "__main__":
    app = QApplication(sys.argv)
    win = PDFPageViewerWindow()
    win.show()
    sys.exit(app.exec())
