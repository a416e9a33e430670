"""Signal registry for managing active eligibility rules."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .models import EligibilityContext, Signal

SignalRule = Callable[[EligibilityContext], list[Signal]]


class SignalRegistry:
    def __init__(self, rules: Iterable[SignalRule] | None = None) -> None:
        self._rules: list[SignalRule] = []
        if rules:
            self.extend(rules)

    def register(self, rule: SignalRule) -> None:
        if rule not in self._rules:
            self._rules.append(rule)

    def extend(self, rules: Iterable[SignalRule]) -> None:
        for rule in rules:
            self.register(rule)

    def active_rules(self) -> Iterable[SignalRule]:
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
