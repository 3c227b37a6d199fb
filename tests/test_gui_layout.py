import os

from PyQt6.QtWidgets import QScrollArea

from pdf_page_restore.path_manager import PageRestoreConfig
from pdf_page_restore.pdf_page_viewer_window import PDFPageViewerWindow, load_last_dir


def test_main_window_layout(qapp, tmp_path):
    win = PDFPageViewerWindow(config=PageRestoreConfig(), last_dir_file=str(tmp_path / "last_dir.txt"))
    win.show()

    central_widget = win.centralWidget()
    assert isinstance(central_widget, QScrollArea)
    assert central_widget.widget() is win.viewer
    assert win.menuBar() is win.menu_bar
    assert win.page_restore.attached
    win.close()


def test_window_restores_and_forgets(qapp, tmp_path, make_pdf):
    pdf = make_pdf(tmp_path / "docs" / "report.pdf", pages=6)
    last_dir_file = str(tmp_path / "last_dir.txt")
    win = PDFPageViewerWindow(config=PageRestoreConfig(), last_dir_file=last_dir_file)
    assert win.open_pdf(str(pdf)) is True
    win.menu_bar.nextPageRequested.emit()
    win.menu_bar.nextPageRequested.emit()
    assert win.viewer.current_page() == 3
    assert "3/6" in win.windowTitle()
    assert load_last_dir(last_dir_file) == os.path.dirname(win.viewer.pdf_path)

    again = PDFPageViewerWindow(pdf_path=str(pdf), config=PageRestoreConfig(), last_dir_file=last_dir_file)
    assert again.viewer.current_page() == 3
    again.menu_bar.forgetPageRequested.emit()
    assert again.page_restore.store_for(again.viewer.pdf_path).get_page("report") is None
    win.close()
    again.close()
