"""PDFの最終表示ページを保存し、次に開いたときに復元する。"""

from pdf_page_restore.errors import (
    NotInViewerMode,
    PageRestoreError,
    StorageReadError,
    StorageWriteError,
)
from pdf_page_restore.last_page_manager import LastPageStore
from pdf_page_restore.page_restore_controller import (
    PageRestoreController,
    SaveGuard,
    SaveState,
    document_key,
    setup_page_restore,
)
from pdf_page_restore.path_manager import PageRestoreConfig, load_config

__all__ = [
    "LastPageStore",
    "NotInViewerMode",
    "PageRestoreConfig",
    "PageRestoreController",
    "PageRestoreError",
    "SaveGuard",
    "SaveState",
    "StorageReadError",
    "StorageWriteError",
    "document_key",
    "load_config",
    "setup_page_restore",
]
