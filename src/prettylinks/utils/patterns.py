"""
共通正規表現パターン定義

WikiLink の検出に使うパターンを一元管理する薄いユーティリティ。

設計方針:
- パターンとシンプルなヘルパ関数のみを提供
- ビジネスロジック（ルール適用）は持たない
- rewriter.py と cli.py の双方から安全に使用可能
"""

import re

# ==============================================================================
# WikiLink パターン
# ==============================================================================

# リンク行の事前フィルタに使うマーカー
LINK_MARKER = '[['

# WikiLink トークンのパターン
# [[target]] → target, None
# [[target|alias]] → target, '|alias'
# [[target|]] → target, '|'
# グループ1: リンク先（'|' と ']' を含まない1文字以上）
# グループ2: エイリアス区切りを含むエイリアス部（']' を含まない0文字以上）
WIKILINK_PATTERN = re.compile(r'\[\[([^|\]]+)(\|[^\]]*)?\]\]')

# エイリアス区切り文字
ALIAS_DELIMITER = '|'


def has_link_marker(line: str) -> bool:
    """
    行に WikiLink の開始マーカーが含まれるか

    Args:
        line: 判定対象の行

    Returns:
        '[[' を含む場合 True
    """
    return LINK_MARKER in line


def format_wikilink(target: str, alias: str) -> str:
    """
    エイリアス付き WikiLink を組み立てる

    Examples:
        >>> format_wikilink('My_Page', 'My Page')
        '[[My_Page|My Page]]'
    """
    return f"[[{target}{ALIAS_DELIMITER}{alias}]]"
