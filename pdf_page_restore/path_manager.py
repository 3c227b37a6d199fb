"""
保存ファイルの場所と設定を一元管理するモジュール。
"""
from dataclasses import dataclass, replace
from pathlib import Path
import json
import logging
import os
import sys
from typing import Optional

log = logging.getLogger(__name__)

APP_NAME = "pdf_page_restore"
DEFAULT_STORE_FILENAME = ".pdf-page-restore"
CONFIG_FILENAME = "page_restore_config.json"
STORE_FILENAME_ENV = "PDF_PAGE_RESTORE_FILE"


@dataclass(frozen=True)
class PageRestoreConfig:
    """ページ復元の設定。

    store_filename: 保存ファイル名。相対パスなら表示中のPDFと同じフォルダに置く。
    """
    store_filename: str = DEFAULT_STORE_FILENAME


def get_appdata_dir(create: bool = True) -> str:
    """
    アプリ固有の設定ファイルを保存するディレクトリの絶対パスを返す。
    OSごとに適切な場所（Windows: %APPDATA%、Mac: ~/Library/Application Support、Linux: ~/.config など）
    """
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA", os.path.expanduser("~"))
    elif sys.platform == "darwin":
        base = os.path.expanduser("~/Library/Application Support")
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    path = os.path.join(base, APP_NAME)
    if create:
        os.makedirs(path, exist_ok=True)
    return path


def get_appdata_path(filename: str, create: bool = True) -> str:
    """
    アプリ固有ディレクトリ配下のファイル絶対パスを返す
    """
    return os.path.join(get_appdata_dir(create=create), filename)


def _read_config_file(config_path) -> dict:
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        log.warning("設定ファイル読込失敗 %s: %s", config_path, e)
        return {}
    if not isinstance(data, dict):
        log.warning("設定ファイルの形式が不正です: %s", config_path)
        return {}
    return data


def load_config(config_path: Optional[str] = None, env=None) -> PageRestoreConfig:
    """設定を読み込む。

    優先順位（後勝ち）:
        1. 既定値
        2. appdata配下の page_restore_config.json
        3. 環境変数 PDF_PAGE_RESTORE_FILE
    """
    if env is None:
        env = os.environ
    if config_path is None:
        config_path = get_appdata_path(CONFIG_FILENAME, create=False)
    config = PageRestoreConfig()
    data = _read_config_file(config_path)
    filename = data.get("store_filename")
    if isinstance(filename, str) and filename.strip():
        config = replace(config, store_filename=filename.strip())
    elif filename is not None:
        log.warning("store_filename が不正なため無視します: %r", filename)
    override = env.get(STORE_FILENAME_ENV)
    if override:
        config = replace(config, store_filename=override)
    return config


def resolve_store_path(document_path, store_filename: str = DEFAULT_STORE_FILENAME) -> Path:
    """PDFのパスと設定から保存ファイルの絶対パスを求める"""
    p = Path(store_filename).expanduser()
    if p.is_absolute():
        return p
    return Path(document_path).resolve().parent / p
