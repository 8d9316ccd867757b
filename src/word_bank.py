# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Word bank: normalized clue/answer corpus indexed by answer length.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from models import WordBankEntry
from seeded_random import SeededRandom

logger = logging.getLogger(__name__)

# Answers containing whitespace, hyphens or apostrophes cannot be gridded.
_REJECTED_CHARS = re.compile(r"[\s\-']")


def normalize_answer(raw: Any, min_length: int = 2) -> Optional[str]:
    """
    Normalize a raw answer for the grid.

    Returns:
        The uppercase answer, or None if it cannot be used.
    """
    if not isinstance(raw, str):
        return None
    answer = raw.strip().upper()
    if len(answer) < min_length or _REJECTED_CHARS.search(answer):
        return None
    return answer


class WordBank:
    """
    Read-only, length-indexed collection of WordBankEntry.

    Build one instance per process and pass it to every generation call.
    Candidate lists handed to the solver are always copies.
    """

    def __init__(self, entries: Iterable[WordBankEntry]):
        self._entries: Tuple[WordBankEntry, ...] = tuple(entries)
        index: Dict[int, List[WordBankEntry]] = {}
        for entry in self._entries:
            index.setdefault(entry.length, []).append(entry)
        self._by_length: Dict[int, Tuple[WordBankEntry, ...]] = {
            length: tuple(bucket) for length, bucket in index.items()
        }

    @classmethod
    def load(
        cls,
        raw_corpus: Iterable[Mapping[str, Any]],
        min_length: int = 2,
    ) -> 'WordBank':
        """
        Build a word bank from raw corpus records.

        Each record needs an ``answer`` and a ``clue``; ``answerLength`` is
        ignored since the length is recomputed after normalization.
        Malformed records and duplicate answers (first one wins) are skipped.

        Args:
            raw_corpus: Iterable of {answer, clue, answerLength} mappings
            min_length: Shortest answer accepted

        Returns:
            WordBank instance
        """
        seen = set()
        entries: List[WordBankEntry] = []
        skipped = 0

        for record in raw_corpus:
            if not isinstance(record, Mapping):
                skipped += 1
                continue
            answer = normalize_answer(record.get("answer"), min_length)
            clue = record.get("clue")
            if answer is None or not isinstance(clue, str) or answer in seen:
                skipped += 1
                continue
            seen.add(answer)
            entries.append(WordBankEntry(answer=answer, clue=clue))

        bank = cls(entries)
        logger.info(
            f"Word bank loaded: {len(bank)} entries, "
            f"{len(bank.lengths)} lengths, {skipped} records skipped"
        )
        return bank

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, answer: str) -> bool:
        answer = answer.upper()
        return any(e.answer == answer for e in self._by_length.get(len(answer), ()))

    @property
    def entries(self) -> Tuple[WordBankEntry, ...]:
        return self._entries

    @property
    def lengths(self) -> List[int]:
        return sorted(self._by_length)

    def bucket(self, length: int) -> Tuple[WordBankEntry, ...]:
        """All entries of exactly this length (empty tuple if none)."""
        return self._by_length.get(length, ())

    def length_distribution(self) -> Dict[int, int]:
        return {length: len(self._by_length[length]) for length in self.lengths}

    def candidates_for_attempt(
        self, rng: SeededRandom
    ) -> Dict[int, List[WordBankEntry]]:
        """
        Copy the length index with every bucket independently shuffled.

        Buckets are shuffled in index order, so the result depends only on
        the corpus and the rng state.
        """
        return {
            length: rng.shuffled(bucket)
            for length, bucket in self._by_length.items()
        }
