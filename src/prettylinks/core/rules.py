"""
Regex substitution rules applied to link targets.

A rule pipeline is an ordered list of (search, replace) pairs. Each rule
is applied to the output of the previous one with ``re.sub`` semantics:
every non-overlapping match is replaced and the replacement template uses
Python group references (``\\1``, ``\\g<1>``, ``\\g<name>``).

A rule whose pattern does not compile, or whose substitution raises, is
skipped and reported to the rule failure sink. The fold then continues
with the next rule.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from ..errors import RuleIndexError

logger = logging.getLogger(__name__)

# (failed pattern, error) -> None
RuleFailureSink = Callable[[str, Exception], None]
RuleObserver = Callable[["RuleSet"], None]


@dataclass
class Rule:
    """One search/replace pair. Identity is its position in the pipeline."""
    search: str = ""
    replace: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"search": self.search, "replace": self.replace}

    @classmethod
    def from_dict(cls, data: Any) -> "Rule":
        """
        Build a rule from a persisted record.

        Raises:
            ValueError: record is not a mapping or a field is not a string
        """
        if not isinstance(data, dict):
            raise ValueError(f"rule record must be a mapping, got {type(data).__name__}")
        search = data.get("search", "")
        replace = data.get("replace", "")
        for name, value in (("search", search), ("replace", replace)):
            if not isinstance(value, str):
                raise ValueError(f"rule field '{name}' must be a string, got {type(value).__name__}")
        return cls(search=search, replace=replace)


def log_rule_failure(pattern: str, error: Exception) -> None:
    """Default failure sink: report through the module logger."""
    logger.warning(f"Invalid regex pattern: {pattern!r}: {error}")


def _report(sink: RuleFailureSink, pattern: str, error: Exception) -> None:
    try:
        sink(pattern, error)
    except Exception as e:
        # A broken sink must not abort the rewrite
        logger.error(f"Rule failure sink raised for {pattern!r}: {type(e).__name__}: {e}")


def apply_rule(text: str, rule: Rule) -> str:
    """Apply a single rule. Raises whatever the regex engine raises."""
    return re.compile(rule.search).sub(rule.replace, text)


def apply_rules(
    text: str,
    rules: Iterable[Rule],
    on_error: Optional[RuleFailureSink] = None,
) -> str:
    """
    Fold text through the rules in order.

    Args:
        text: input text (a link target)
        rules: ordered rules; an empty sequence is the identity
        on_error: failure sink, defaults to log_rule_failure

    Returns:
        the transformed text

    Examples:
        >>> apply_rules('a', [Rule('a', 'b'), Rule('b', 'c')])
        'c'
        >>> apply_rules('a', [Rule('(', 'x'), Rule('a', 'b')], on_error=lambda p, e: None)
        'b'
    """
    sink = on_error or log_rule_failure
    for rule in rules:
        try:
            text = apply_rule(text, rule)
        except Exception as e:
            _report(sink, rule.search, e)
    return text


class RuleSet:
    """
    Ordered, editable rule pipeline owned by the configuration.

    Every mutation is saved through the rule store and then announced to
    the subscribed observers.

    Usage:
        rule_set = RuleSet.load(FileRuleStore(path))
        rule_set.subscribe(lambda rs: refresh_view(rs))
        rule = rule_set.add_rule()
        rule_set.update_rule(0, search='_', replace=' ')
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None, store=None):
        self.rules: List[Rule] = list(rules) if rules is not None else []
        self.store = store
        self._observers: List[RuleObserver] = []

    @classmethod
    def load(cls, store) -> "RuleSet":
        """Load from store; an absent store file yields an empty pipeline."""
        rules = store.load()
        if rules is None:
            logger.debug("No stored rules, starting with an empty pipeline")
            rules = []
        return cls(rules, store=store)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __getitem__(self, index: int) -> Rule:
        return self.rules[index]

    def subscribe(self, observer: RuleObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: RuleObserver) -> None:
        self._observers.remove(observer)

    def add_rule(self, search: str = "", replace: str = "") -> Rule:
        """Append a rule (blank by default) and commit."""
        rule = Rule(search=search, replace=replace)
        self.rules.append(rule)
        self._commit()
        return rule

    def update_rule(
        self,
        index: int,
        search: Optional[str] = None,
        replace: Optional[str] = None,
    ) -> Rule:
        """
        Update fields of the rule at index in place and commit.

        Raises:
            RuleIndexError: index is outside the pipeline
        """
        if not 0 <= index < len(self.rules):
            raise RuleIndexError(f"no rule at position {index} (have {len(self.rules)})")
        rule = self.rules[index]
        if search is not None:
            rule.search = search
        if replace is not None:
            rule.replace = replace
        self._commit()
        return rule

    def apply(self, text: str, on_error: Optional[RuleFailureSink] = None) -> str:
        return apply_rules(text, self.rules, on_error=on_error)

    def save(self) -> None:
        if self.store is not None:
            self.store.save(self.rules)

    def _commit(self) -> None:
        self.save()
        for observer in list(self._observers):
            observer(self)
