"""
Functions for aggregating language statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .consts import LanguageMap


@dataclass(frozen=True)
class LanguageUsage:
    name: str
    bytes: int


class LanguageUsages:
    """
    Immutable view of aggregated language byte counts.
    """

    def __init__(self, data: Mapping[str, int]) -> None:
        self._data: LanguageMap = dict(data)
        self._total: int = sum(self._data.values())

    def total(self) -> int:
        return self._total

    def get(self, language: str) -> float | None:
        """
        Share of a language in the total byte count.

        Args:
            language: Language name, matched case-insensitively.

        Return:
            float | None: Fraction in (0, 1], or `None` if the language
                          wasn't seen or nothing was counted at all.

        """

        if self._total == 0:
            return None

        wanted = language.lower()
        for name, count in self._data.items():
            if name.lower() == wanted:
                return count / self._total

        return None

    def entries(self) -> list[LanguageUsage]:
        """
        All languages, largest first (ties by name).
        """

        return [
            LanguageUsage(name, count)
            for name, count in sorted(self._data.items(), key=lambda i: (-i[1], i[0]))
        ]

    def top(self, n: int) -> list[LanguageUsage]:
        """
        The `n` largest languages, with the rest folded into `Other`.

        Args:
            n: Number of languages to keep.

        Return:
            list[LanguageUsage]: Up to `n + 1` entries.

        """

        ranked = self.entries()
        head, rest = ranked[:n], ranked[n:]
        other: int = sum(usage.bytes for usage in rest)

        if other > 0:
            head.append(LanguageUsage("Other", other))

        return head

    def as_dict(self) -> LanguageMap:
        return dict(self._data)


class LanguageAggregator:
    """
    Running per-language byte totals folded from per-repository maps.

    Folding is plain addition, so the order repositories arrive in
    never changes the result.
    """

    def __init__(self) -> None:
        self._totals: LanguageMap = {}

    def merge(self, maps: Iterable[Mapping[str, int]]) -> LanguageMap:
        """
        Fold language maps into the running totals.

        Args:
            maps: Language name to byte count, one map per repository.

        Return:
            LanguageMap: Copy of the totals after folding.

        Raises:
            ValueError: A map holds a negative or non-integer count.
                        Nothing from that map is folded.

        """

        for languages in maps:
            validate_language_map(languages)
            for name, count in languages.items():
                self._totals[name] = self._totals.get(name, 0) + count

        return dict(self._totals)

    def total(self) -> int:
        return sum(self._totals.values())

    def percentage(self, language: str) -> float | None:
        return self.usages().get(language)

    def usages(self) -> LanguageUsages:
        return LanguageUsages(self._totals)


def validate_language_map(languages: Mapping[str, int]) -> Mapping[str, int]:
    """
    Check that a map holds language names and non-negative byte counts.

    Args:
        languages: Map to check.

    Return:
        Mapping[str, int]: The same map.

    Raises:
        ValueError: A name isn't a string or a count isn't a non-negative int.

    """

    for name, count in languages.items():
        if not isinstance(name, str):
            msg = f"Language name must be a string, got {name!r}"
            raise ValueError(msg)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            msg = f"Byte count for {name} must be a non-negative integer, got {count!r}"
            raise ValueError(msg)

    return languages
