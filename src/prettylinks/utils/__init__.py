"""
prettylinks ユーティリティモジュール
"""

from .patterns import (
    WIKILINK_PATTERN,
    LINK_MARKER,
    has_link_marker,
    format_wikilink,
)
from .buffer import (
    TextBuffer,
    LineBuffer,
)
from .markdown import (
    MarkdownFileBuffer,
    read_markdown_file,
    write_markdown_file,
    MarkdownBatchProcessor,
    collect_markdown_files,
)
from .store import (
    FileRuleStore,
    MemoryRuleStore,
)

__all__ = [
    # patterns
    'WIKILINK_PATTERN',
    'LINK_MARKER',
    'has_link_marker',
    'format_wikilink',
    # buffer
    'TextBuffer',
    'LineBuffer',
    # markdown
    'MarkdownFileBuffer',
    'read_markdown_file',
    'write_markdown_file',
    'MarkdownBatchProcessor',
    'collect_markdown_files',
    # store
    'FileRuleStore',
    'MemoryRuleStore',
]
