# rebalance.py
# SPDX-License-Identifier: MIT
"""Split oversized sentences into slide-sized fragments and club small ones.

Sizes are measured in *significant* words (longer than two characters).
A sentence over budget is split on commas into phrases; a phrase still over
budget is cut into near-equal word chunks. Short neighbours are merged
("clubbed") into the previous fragment, but the first phrase or chunk of a
sentence always starts a fresh fragment, and whole sentences are never
clubbed.

The accumulator is a plain list of fragments owned by the caller; clubbing
only ever rewrites its last element.
"""

from __future__ import annotations

from typing import List, MutableSequence, Optional

from .config import SegmentConfig
from .lexical import count_significant, non_empty_words, phrases, sentences
from .log import get_logger

__all__ = [
    "minimum_phrase_parts",
    "split_phrase_parts",
    "sentence_phrases",
    "should_club",
    "rebalance_sentence",
    "rebalance_line",
]

log = get_logger(__name__)

_DEFAULT = SegmentConfig()


def minimum_phrase_parts(phrase: str, max_words: int) -> int:
    """Smallest ``k >= 2`` with ``len(words) // k <= max_words``.

    The division uses the total (non-empty) word count of the phrase, not
    its significant-word count.
    """
    n_words = len(non_empty_words(phrase))
    limit = max(1, int(max_words))
    parts = 2
    while n_words // parts > limit:
        parts += 1
    return parts


def split_phrase_parts(phrase: str, max_words: int) -> List[str]:
    """Cut a phrase into consecutive chunks of ``len(words) // k`` words.

    The leftover words are folded into the last chunk when it stays
    within ``max_words``; otherwise they form one short trailing chunk.
    No chunk exceeds ``max_words`` words, and joining the chunks with
    spaces gives back the phrase's words in order.
    """
    words = non_empty_words(phrase)
    if not words:
        return []
    parts = minimum_phrase_parts(phrase, max_words)
    size = max(1, len(words) // parts)
    chunks = [words[i:i + size] for i in range(0, len(words), size)]
    if len(chunks) > parts and len(chunks[-2]) + len(chunks[-1]) <= max_words:
        tail = chunks.pop()
        chunks[-1] = chunks[-1] + tail
    return [" ".join(chunk) for chunk in chunks]


def sentence_phrases(sentence: str) -> List[str]:
    """Comma phrases of a sentence with their trailing commas restored."""
    parts = phrases(sentence)
    last = len(parts) - 1
    ends_with_comma = sentence.endswith(",")
    out: List[str] = []
    for index, phrase in enumerate(parts):
        if index != last or ends_with_comma:
            phrase = phrase + ","
        out.append(phrase)
    return out


def should_club(fragments: MutableSequence[str], text: str, threshold: int) -> bool:
    """True when ``text`` fits beside the last fragment under ``threshold``."""
    if not fragments:
        return False
    return count_significant(fragments[-1]) + count_significant(text) < threshold


def _club(fragments: MutableSequence[str], text: str, separator: str) -> None:
    fragments[-1] = fragments[-1] + separator + text


def rebalance_sentence(
    sentence: str,
    fragments: MutableSequence[str],
    config: Optional[SegmentConfig] = None,
) -> None:
    """Append one sentence to ``fragments``, splitting and clubbing as needed.

    Args:
        sentence (str): Sentence produced by :func:`lexical.sentences`.
        fragments (MutableSequence[str]): Accumulator of the snippet being
            built; mutated in place.
        config (SegmentConfig | None): Budget and club threshold.
    """
    cfg = config or _DEFAULT
    budget = cfg.max_significant_words
    threshold = cfg.club_threshold

    if count_significant(sentence) <= budget:
        fragments.append(sentence)
        return

    log.debug("SPLITTING sentence <<%s>>: more than %d significant words.", sentence, budget)
    for index, phrase in enumerate(sentence_phrases(sentence)):
        first_phrase = index == 0

        if count_significant(phrase) > budget:
            log.debug("SPLITTING phrase <<%s>>: more than %d significant words.", phrase, budget)
            for part_index, part in enumerate(split_phrase_parts(phrase, budget)):
                if not (first_phrase and part_index == 0) and should_club(fragments, part, threshold):
                    log.debug("CLUBBING phrase part <<%s>> with previous text.", part)
                    _club(fragments, part, " ")
                else:
                    log.debug("DID NOT CLUB phrase part <<%s>>.", part)
                    fragments.append(part)
            continue

        if not first_phrase and should_club(fragments, phrase, threshold):
            log.debug("CLUBBING phrase <<%s>> with previous text.", phrase)
            _club(fragments, phrase, "")
        else:
            log.debug("DID NOT CLUB phrase <<%s>>.", phrase)
            fragments.append(phrase.lstrip())


def rebalance_line(
    line: str,
    fragments: MutableSequence[str],
    config: Optional[SegmentConfig] = None,
) -> None:
    """Run every sentence of a prose line through :func:`rebalance_sentence`."""
    for sentence in sentences(line):
        rebalance_sentence(sentence, fragments, config)
