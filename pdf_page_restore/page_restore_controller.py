"""
ビューアのライフサイクルシグナルとページ保存を結びつけるコントローラ。

ビューアが文書を開くとき（activation）は、既定ページへの移動が保存されないよう
SaveGuard で保存を止める。順序は次の通り:

    aboutToActivate -> 保存停止
    modeEntered     -> 保存済みページへ移動
    activated       -> 保存再開
    pageChanged     -> 保存（保存再開中のみ）
"""
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
import logging
from typing import Optional

from pdf_page_restore.errors import NotInViewerMode
from pdf_page_restore.last_page_manager import LastPageStore
from pdf_page_restore.path_manager import PageRestoreConfig, load_config, resolve_store_path

log = logging.getLogger(__name__)


class SaveState(Enum):
    SAVE_ENABLED = "save_enabled"
    SAVE_DISABLED = "save_disabled"


class SaveGuard:
    """セッション単位の保存可否フラグ"""

    def __init__(self):
        self.state = SaveState.SAVE_ENABLED

    @property
    def allow_save(self) -> bool:
        return self.state is SaveState.SAVE_ENABLED

    def disable(self):
        self.state = SaveState.SAVE_DISABLED

    def enable(self):
        self.state = SaveState.SAVE_ENABLED

    @contextmanager
    def suspended(self):
        """ブロック内だけ保存を止め、抜けたら元の状態に戻す"""
        previous = self.state
        self.disable()
        try:
            yield self
        finally:
            self.state = previous


def document_key(path) -> str:
    """フォルダと拡張子を除いたファイル名。別フォルダの同名PDFは同じキーになる"""
    return Path(path).stem


class PageRestoreController:
    """ページの自動保存・復元"""

    def __init__(self, viewer, config: Optional[PageRestoreConfig] = None):
        self.viewer = viewer
        self.config = config if config is not None else PageRestoreConfig()
        self.guard = SaveGuard()
        self._attached = False

    def _connections(self):
        return [
            (self.viewer.aboutToActivate, self._on_about_to_activate),
            (self.viewer.modeEntered, self._on_mode_entered),
            (self.viewer.pageChanged, self._on_page_changed),
            (self.viewer.activated, self._on_activated),
        ]

    def attach(self):
        if self._attached:
            return
        for signal, slot in self._connections():
            signal.connect(slot)
        # PyQtはスロットを弱参照で持つため、ビューアから参照して寿命を合わせる
        self.viewer.page_restore_controller = self
        self._attached = True

    def detach(self):
        if not self._attached:
            return
        for signal, slot in self._connections():
            try:
                signal.disconnect(slot)
            except (TypeError, RuntimeError):
                pass
        if getattr(self.viewer, "page_restore_controller", None) is self:
            del self.viewer.page_restore_controller
        self._attached = False
        self.guard.enable()

    @property
    def attached(self) -> bool:
        return self._attached

    def store_for(self, path) -> LastPageStore:
        return LastPageStore(resolve_store_path(path, self.config.store_filename))

    def _current_document(self):
        if not self.viewer.is_viewer_mode() or not self.viewer.pdf_path:
            raise NotInViewerMode("PDFが開かれていません")
        return self.viewer.pdf_path

    def restore(self) -> Optional[int]:
        """保存済みページへ移動する。移動したページ番号を返す"""
        try:
            path = self._current_document()
            page = self.store_for(path).get_page(document_key(path))
            if page is None:
                return None
            # 復元による移動は保存しない
            with self.guard.suspended():
                self.viewer.goto_page(page)
            log.debug("%s: %dページを復元", path, page)
            return page
        except NotInViewerMode:
            return None
        except Exception:
            log.warning("ページ復元失敗", exc_info=True)
            return None

    def save(self, page: Optional[int] = None) -> bool:
        """現在ページを保存する。保存停止中は何もしない"""
        if not self.guard.allow_save:
            return False
        try:
            path = self._current_document()
            if page is None:
                page = self.viewer.current_page()
            return self.store_for(path).set_page(document_key(path), page)
        except NotInViewerMode:
            return False
        except Exception:
            log.warning("ページ保存失敗", exc_info=True)
            return False

    def forget(self) -> bool:
        """表示中のPDFの保存ページを削除する"""
        try:
            path = self._current_document()
            return self.store_for(path).forget_page(document_key(path))
        except NotInViewerMode:
            return False
        except Exception:
            log.warning("保存ページ削除失敗", exc_info=True)
            return False

    # --- シグナル受信 ---
    def _on_about_to_activate(self):
        self.guard.disable()

    def _on_mode_entered(self):
        self.restore()

    def _on_page_changed(self, page):
        self.save(page)

    def _on_activated(self):
        self.guard.enable()


def setup_page_restore(viewer, config: Optional[PageRestoreConfig] = None) -> PageRestoreController:
    """コントローラを作成してビューアに接続する"""
    if config is None:
        config = load_config()
    controller = PageRestoreController(viewer, config)
    controller.attach()
    return controller
