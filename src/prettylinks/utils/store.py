"""
ルールの永続化

ルールは {search, replace} レコードの順序付きリストとして保存する。
拡張子が .json の場合は JSON、それ以外は YAML で読み書きする。

    - search: _
      replace: ' '
    - search: ^\\d+-
      replace: ''
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import yaml

from ..config import ENCODING
from ..core.rules import Rule
from ..errors import RuleStoreError

logger = logging.getLogger(__name__)

JSON_SUFFIXES = ('.json',)


class FileRuleStore:
    """
    ファイルベースのルールストア

    Usage:
        store = FileRuleStore(Path('.prettylinks.yaml'))
        rules = store.load() or []
        store.save(rules)
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def is_json(self) -> bool:
        return self.path.suffix.lower() in JSON_SUFFIXES

    def load(self) -> Optional[List[Rule]]:
        """
        ルールを読み込み

        Returns:
            ルールのリスト、ファイルが存在しない場合は None

        Raises:
            RuleStoreError: 読み込み・パースに失敗した場合
        """
        if not self.path.exists():
            logger.debug(f"Rule file not found: {self.path}")
            return None

        try:
            with open(self.path, 'r', encoding=ENCODING) as f:
                if self.is_json:
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (IOError, OSError) as e:
            raise RuleStoreError(self.path, f"cannot read: {e}") from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise RuleStoreError(self.path, f"cannot parse: {e}") from e

        # 空ファイルは空のパイプライン
        if data is None:
            return []
        if not isinstance(data, list):
            raise RuleStoreError(self.path, f"expected a list of rules, got {type(data).__name__}")

        rules = []
        for i, record in enumerate(data, 1):
            try:
                rules.append(Rule.from_dict(record))
            except ValueError as e:
                raise RuleStoreError(self.path, f"rule {i}: {e}") from e

        logger.debug(f"Loaded {len(rules)} rule(s) from {self.path}")
        return rules

    def save(self, rules: List[Rule]) -> None:
        """
        ルールを書き込み

        Raises:
            RuleStoreError: 書き込みに失敗した場合
        """
        records = [rule.to_dict() for rule in rules]
        if self.is_json:
            content = json.dumps(records, ensure_ascii=False, indent=2) + '\n'
        else:
            content = yaml.dump(
                records,
                allow_unicode=True,
                default_flow_style=False,
                sort_keys=False,
            )

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding=ENCODING) as f:
                f.write(content)
        except (IOError, OSError) as e:
            raise RuleStoreError(self.path, f"cannot write: {e}") from e

        logger.info(f"Saved {len(rules)} rule(s) to {self.path}")


class MemoryRuleStore:
    """メモリ上のルールストア（テスト・一時利用向け）"""

    def __init__(self, records: Optional[list] = None):
        self.records = records
        self.save_count = 0

    def load(self) -> Optional[List[Rule]]:
        if self.records is None:
            return None
        return [Rule.from_dict(r) for r in self.records]

    def save(self, rules: List[Rule]) -> None:
        self.records = [rule.to_dict() for rule in rules]
        self.save_count += 1
