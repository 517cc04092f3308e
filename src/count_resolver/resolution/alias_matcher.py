"""
Alias resolution and alias learning.

Alias tables map a canonical item to the spoken spellings learned for it.
Tables are always passed in by the caller and never mutated here.
"""
import logging
from typing import Iterator, Optional, Sequence

from ..models import AliasTable, MatchTier, contains_words, normalize_text
from .item_matcher import ItemMatch, ItemMatcher

logger = logging.getLogger(__name__)


def _aliases_of(alias_list) -> Iterator[str]:
    """Normalized, non-empty string aliases; malformed entries are skipped."""
    if not isinstance(alias_list, (list, tuple)):
        return
    for alias in alias_list:
        if not isinstance(alias, str):
            continue
        normalized = normalize_text(alias)
        if normalized:
            yield normalized


def iter_alias_hits(phrase_normalized: str, alias_table: AliasTable) -> Iterator[str]:
    """
    Yield alias-table keys whose aliases occur in the phrase, in table order.
    
    An alias hits when it equals the phrase or occurs in it as whole words.
    """
    if not phrase_normalized or not isinstance(alias_table, dict):
        return
    for canonical, alias_list in alias_table.items():
        if not isinstance(canonical, str):
            continue
        for alias in _aliases_of(alias_list):
            if alias == phrase_normalized or contains_words(alias, phrase_normalized):
                yield canonical
                break


def resolve_alias(phrase_normalized: str, alias_table: AliasTable) -> Optional[str]:
    """
    First canonical item whose alias occurs in the phrase.
    
    :param phrase_normalized: Lowercased, trimmed phrase
    :param alias_table: canonical item -> aliases
    :return: Canonical item key, or None when nothing matches
    """
    return next(iter_alias_hits(phrase_normalized, alias_table), None)


def has_alias(alias_table: AliasTable, canonical: str, alias: str) -> bool:
    """Check whether alias is already registered for canonical (case-insensitive)."""
    target = normalize_text(alias)
    key = normalize_text(canonical)
    for existing_key, alias_list in (alias_table or {}).items():
        if isinstance(existing_key, str) and normalize_text(existing_key) == key:
            if target in _aliases_of(alias_list):
                return True
    return False


def learn_alias(alias_table: AliasTable, canonical: str, alias: str) -> AliasTable:
    """
    Return a copy of alias_table with alias appended for canonical.
    
    Duplicates (case-insensitive) are not appended. The input is not modified.
    """
    updated = {key: list(value) for key, value in (alias_table or {}).items()}
    normalized = normalize_text(alias)
    if not normalized or has_alias(updated, canonical, normalized):
        return updated

    for key in updated:
        if isinstance(key, str) and normalize_text(key) == normalize_text(canonical):
            updated[key].append(normalized)
            break
    else:
        updated[canonical] = [normalized]

    logger.info(f"[Alias] Learned '{normalized}' -> '{canonical}'")
    return updated


class AliasMatcher(ItemMatcher):
    """
    Alias strategy: highest-priority match source.
    
    Alias keys are only honoured when they name a canonical item of the
    current request; stale keys are skipped.
    """

    tier = MatchTier.ALIAS

    def __init__(self, alias_table: Optional[AliasTable] = None):
        self._alias_table = alias_table if isinstance(alias_table, dict) else {}

    def match(
        self,
        text: str,
        canonical_items: Sequence[str],
    ) -> ItemMatch:
        phrase = normalize_text(text or "")
        by_key = {normalize_text(item): item for item in reversed(canonical_items)}

        for key in iter_alias_hits(phrase, self._alias_table):
            item = by_key.get(normalize_text(key))
            if item is None:
                logger.debug(f"[Alias] Ignoring alias key '{key}' not in canonical items")
                continue
            return ItemMatch(
                canonical_value=item,
                confidence=1.0,
                tier=self.tier,
                query=text,
            )

        return ItemMatch.no_match(text, self.tier)
