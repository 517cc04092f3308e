"""
Master-list alignment for scanned count sheets.

Maps item names read off a sheet onto the project's master list. Fuzzy
matches are accepted only at high similarity; anything else is reported
as unmatched (with a suggestion when one is close) rather than corrected.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .config import ResolverConfig
from .models import MatchTier, normalize_text
from .resolution import similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignedItem:
    scanned_name: str
    master_name: str
    match_type: MatchTier
    confidence: float


@dataclass(frozen=True)
class UnmatchedItem:
    scanned_name: str
    suggested_match: Optional[str]
    confidence: float


@dataclass
class AlignmentReport:
    matched: List[AlignedItem] = field(default_factory=list)
    unmatched: List[UnmatchedItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "matched": [
                {
                    "scannedName": item.scanned_name,
                    "masterName": item.master_name,
                    "matchType": item.match_type.value,
                    "confidence": round(item.confidence, 4),
                }
                for item in self.matched
            ],
            "unmatched": [
                {
                    "scannedName": item.scanned_name,
                    "suggestedMatch": item.suggested_match,
                    "confidence": round(item.confidence, 4),
                }
                for item in self.unmatched
            ],
        }


def align_items(
    scanned_items: Sequence[str],
    master_list: Sequence[str],
    config: Optional[ResolverConfig] = None,
) -> AlignmentReport:
    """
    Align scanned item names with the master list.
    
    :param scanned_items: Names read from a sheet
    :param master_list: Canonical item names
    :param config: Supplies fuzzy_accept_threshold and candidate_floor
    :return: AlignmentReport with matched and unmatched items
    """
    config = config or ResolverConfig()
    report = AlignmentReport()

    for scanned in scanned_items:
        scanned_name = normalize_text(scanned)

        exact = next(
            (master for master in master_list if normalize_text(master) == scanned_name),
            None,
        )
        if exact is not None:
            report.matched.append(AlignedItem(scanned, exact, MatchTier.EXACT, 1.0))
            logger.debug(f"[Alignment] EXACT MATCH: '{scanned}' -> '{exact}'")
            continue

        best, best_score = None, 0.0
        for master in master_list:
            score = similarity(scanned_name, normalize_text(master))
            if score > best_score:
                best, best_score = master, score

        if best is not None and best_score >= config.fuzzy_accept_threshold:
            report.matched.append(AlignedItem(scanned, best, MatchTier.FUZZY, best_score))
            logger.debug(f"[Alignment] FUZZY MATCH: '{scanned}' -> '{best}' ({best_score:.0%})")
        else:
            suggestion = best if best_score > config.candidate_floor else None
            report.unmatched.append(UnmatchedItem(scanned, suggestion, best_score))
            logger.debug(f"[Alignment] UNMATCHED: '{scanned}' (best: {best!r} at {best_score:.0%})")

    logger.info(
        f"[Alignment] {len(report.matched)} matched, {len(report.unmatched)} unmatched"
    )
    return report
