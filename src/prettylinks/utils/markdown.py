"""
prettylinks: Markdown ファイル入出力ユーティリティ

Obsidian 形式の Markdown ファイルを行バッファとして読み書きし、
ディレクトリ配下のファイルを一括処理する。
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ..config import ENCODING, MARKDOWN_GLOB
from .buffer import LineBuffer

logger = logging.getLogger(__name__)


class MarkdownFileBuffer(LineBuffer):
    """ファイルに紐づいた行バッファ"""

    def __init__(self, path: Path, lines, endings=None):
        super().__init__(lines, endings)
        self.path = path

    @classmethod
    def open(cls, path: Path) -> Optional["MarkdownFileBuffer"]:
        """
        Markdown ファイルを読み込んで行バッファを作成

        Args:
            path: ファイルパス

        Returns:
            MarkdownFileBuffer、読み込み失敗時は None
        """
        content = read_markdown_file(path)
        if content is None:
            return None
        buf = LineBuffer.from_text(content)
        return cls(path, buf.lines, buf.endings)

    def save(self, dry_run: bool = False) -> bool:
        """
        変更があればファイルに書き戻す

        Returns:
            書き込んだ場合 True（変更なし・dry_run は False）
        """
        if not self.modified or dry_run:
            return False
        if not write_markdown_file(self.path, self.to_text()):
            return False
        self.modified = False
        logger.info(f"Updated: {self.path}")
        return True


def read_markdown_file(file_path: Path) -> Optional[str]:
    """
    Markdown ファイルを読み込み（改行コードはそのまま保持）

    Args:
        file_path: ファイルパス

    Returns:
        ファイル内容、失敗時は None
    """
    try:
        with open(file_path, 'r', encoding=ENCODING, newline='') as f:
            return f.read()
    except (IOError, OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {file_path}: {e}")
        return None


def write_markdown_file(file_path: Path, content: str) -> bool:
    """
    内容をファイルに書き込み

    Args:
        file_path: 出力先パス
        content: 書き込む内容

    Returns:
        成功時 True
    """
    try:
        with open(file_path, 'w', encoding=ENCODING, newline='') as f:
            f.write(content)
        return True
    except (IOError, OSError) as e:
        logger.error(f"Failed to write {file_path}: {e}")
        return False


class MarkdownBatchProcessor:
    """
    複数 Markdown ファイルの一括処理ユーティリティ

    Usage:
        processor = MarkdownBatchProcessor(vault_dir)
        for path in processor.iter_files():
            # 処理
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def iter_files(self, pattern: str = MARKDOWN_GLOB) -> Iterator[Path]:
        """パターンに一致するファイルをパス順に列挙"""
        for file_path in sorted(self.base_dir.glob(pattern)):
            if file_path.is_file():
                yield file_path

    def count_files(self, pattern: str = MARKDOWN_GLOB) -> int:
        """パターンに一致するファイル数をカウント"""
        return sum(1 for _ in self.iter_files(pattern))


def collect_markdown_files(paths: Iterable[Path], pattern: str = MARKDOWN_GLOB) -> list:
    """
    ファイルとディレクトリの混在した指定から対象ファイル一覧を作成

    ディレクトリは pattern で展開し、重複は除外する（指定順を維持）。
    """
    seen = set()
    files = []
    for path in paths:
        if path.is_dir():
            candidates = MarkdownBatchProcessor(path).iter_files(pattern)
        else:
            candidates = [path]
        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                files.append(candidate)
    return files
