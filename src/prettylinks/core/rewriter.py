"""
WikiLink title rewriter

エイリアスのない WikiLink に対して、リンク先にルールパイプラインを
適用した表示名を付与する。

    [[My_Page]]          → [[My_Page|My Page]]   (ルール: '_' → ' ')
    [[My_Page|既存]]     → 変更なし
    [[My_Page|]]         → 変更なし（区切り文字があればエイリアス済み扱い）
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from ..utils.buffer import TextBuffer
from ..utils.patterns import WIKILINK_PATTERN, ALIAS_DELIMITER, format_wikilink, has_link_marker
from .rules import Rule, RuleFailureSink, apply_rules

logger = logging.getLogger(__name__)


@dataclass
class WikiLinkToken:
    """行内の WikiLink 1件（1行の処理中のみ存在）"""
    raw: str
    target: str
    alias: Optional[str]
    span: Tuple[int, int]

    @property
    def has_alias(self) -> bool:
        """区切り文字 '|' があればエイリアス済み（空文字・空白のみを含む）"""
        return self.alias is not None


def _token_from_match(match) -> WikiLinkToken:
    alias_part = match.group(2)
    alias = alias_part[len(ALIAS_DELIMITER):] if alias_part is not None else None
    return WikiLinkToken(
        raw=match.group(0),
        target=match.group(1),
        alias=alias,
        span=match.span(),
    )


def iter_wikilinks(line: str) -> Iterator[WikiLinkToken]:
    """
    行内の WikiLink を左から順に列挙

    Args:
        line: 対象の行

    Yields:
        WikiLinkToken
    """
    for match in WIKILINK_PATTERN.finditer(line):
        yield _token_from_match(match)


def prettify_token(
    token: WikiLinkToken,
    rules: Iterable[Rule],
    on_error: Optional[RuleFailureSink] = None,
) -> str:
    """
    トークン1件の置換後文字列を返す

    エイリアス済みのトークンは元の文字列をそのまま返す。
    """
    if token.has_alias:
        return token.raw
    pretty = apply_rules(token.target, rules, on_error=on_error)
    return format_wikilink(token.target, pretty)


def prettify_line(
    line: str,
    rules: Iterable[Rule],
    on_error: Optional[RuleFailureSink] = None,
) -> str:
    """
    行内のエイリアスなし WikiLink に表示名を付与

    各置換は元の行のマッチ文字列から計算する（同じ行で先に
    書き換えた結果には影響されない）。

    Args:
        line: 対象の行
        rules: 適用するルール（順序どおりに適用）
        on_error: 無効なルールの通知先

    Returns:
        書き換え後の行（リンクがなければ入力と同一）

    Examples:
        >>> prettify_line('See [[My_Page]]', [Rule('_', ' ')])
        'See [[My_Page|My Page]]'
        >>> prettify_line('[[Page|Title]]', [Rule('_', ' ')])
        '[[Page|Title]]'
    """
    if not has_link_marker(line):
        return line

    # パイプラインは行ごとに一度だけ具体化する
    rules = list(rules)
    return WIKILINK_PATTERN.sub(
        lambda m: prettify_token(_token_from_match(m), rules, on_error=on_error),
        line,
    )


def prettify_buffer(
    buffer: TextBuffer,
    rules: Iterable[Rule],
    on_error: Optional[RuleFailureSink] = None,
) -> int:
    """
    バッファ全行の WikiLink を書き換え

    '[[' を含まない行はスキップし、変更があった行のみ set_line する。

    Args:
        buffer: line_count / get_line / set_line を持つテキストバッファ
        rules: 適用するルール
        on_error: 無効なルールの通知先

    Returns:
        変更した行数
    """
    rules = list(rules)
    changed = 0
    for index in range(buffer.line_count()):
        line = buffer.get_line(index)
        if not has_link_marker(line):
            continue
        new_line = prettify_line(line, rules, on_error=on_error)
        if new_line != line:
            buffer.set_line(index, new_line)
            changed += 1
    logger.debug(f"Rewrote {changed} line(s)")
    return changed
