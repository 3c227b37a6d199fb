"""
PDFごとの最終表示ページを1つのJSONファイルに保存・読込する。

ファイル形式は [["文書キー", ページ番号], ...] のリスト。ページ番号は1始まり。
読込・書込のたびにファイル全体を読み直し、書き直す（メモリ上にキャッシュしない）。
"""
from pathlib import Path
import json
import logging
import os
import tempfile
from typing import Dict, Optional

from pdf_page_restore.errors import StorageReadError, StorageWriteError

log = logging.getLogger(__name__)


def _valid_entry(entry) -> bool:
    if not isinstance(entry, (list, tuple)) or len(entry) != 2:
        return False
    key, page = entry
    return (
        isinstance(key, str)
        and key != ""
        and isinstance(page, int)
        and not isinstance(page, bool)
        and page >= 1
    )


class LastPageStore:
    """文書キー -> 最終ページ の対応をファイルに保持する"""

    def __init__(self, path):
        self.path = Path(path)

    def read_pages(self) -> Dict[str, int]:
        """ファイルを厳密に読み込む。失敗時は StorageReadError"""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            raise StorageReadError(f"{self.path}: {e}") from e
        if not isinstance(data, list):
            raise StorageReadError(f"{self.path}: リスト形式ではありません")
        pages = {}
        for entry in data:
            if _valid_entry(entry):
                pages[entry[0]] = entry[1]
            else:
                log.debug("不正なエントリを無視: %r", entry)
        return pages

    def _exists(self) -> bool:
        # ファイル名が長すぎる場合などは存在しないものとして扱う
        try:
            return self.path.exists()
        except OSError:
            return False

    def load(self) -> Dict[str, int]:
        """ファイルがない・壊れている場合は空の辞書を返す"""
        if not self._exists():
            return {}
        try:
            return self.read_pages()
        except StorageReadError as e:
            log.warning("ページ情報読込失敗: %s", e)
            return {}

    def get_page(self, key: str) -> Optional[int]:
        return self.load().get(key)

    def _is_writable(self) -> bool:
        parent = self.path.parent
        try:
            if not parent.is_dir() or not os.access(parent, os.W_OK):
                return False
        except OSError:
            return False
        if self._exists() and not os.access(self.path, os.W_OK):
            return False
        return True

    def write_pages(self, pages: Dict[str, int]) -> None:
        """一時ファイルに書いてから置き換える。失敗時は StorageWriteError"""
        if not self._is_writable():
            raise StorageWriteError(f"{self.path}: 書き込みできません")
        payload = json.dumps(
            [[key, page] for key, page in sorted(pages.items())],
            ensure_ascii=False,
        )
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=self.path.name + ".", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
            raise StorageWriteError(f"{self.path}: {e}") from e

    def _write(self, pages: Dict[str, int]) -> bool:
        try:
            self.write_pages(pages)
        except StorageWriteError as e:
            log.info("ページ情報保存をスキップ: %s", e)
            return False
        return True

    def set_page(self, key: str, page: int) -> bool:
        """key のページを page に更新して保存。保存できたら True"""
        if not isinstance(key, str) or not key:
            raise ValueError(f"文書キーが不正です: {key!r}")
        if not isinstance(page, int) or isinstance(page, bool) or page < 1:
            raise ValueError(f"ページ番号が不正です: {page!r}")
        pages = self.load()
        pages[key] = page
        return self._write(pages)

    def forget_page(self, key: str) -> bool:
        """key の保存ページを削除する。削除して保存できたら True"""
        pages = self.load()
        if key not in pages:
            return False
        del pages[key]
        return self._write(pages)
