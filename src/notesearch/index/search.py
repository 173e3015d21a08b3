"""TF-IDF ranking over the notes corpus."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from notesearch.index.scoring import DocumentReadError, contains_term, term_frequency
from notesearch.utils.files import find_notes
from notesearch.utils.text import normalize_term, split_query

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SearchResult:
    path: Path
    score: float

    def as_pair(self) -> Tuple[str, float]:
        return str(self.path), self.score


def inverse_document_frequency(num_documents: int, num_containing: int) -> float:
    """log2(N / df), with a term found nowhere yielding +inf."""
    if num_containing == 0:
        return math.inf
    return math.log2(num_documents / num_containing)


def document_frequency(term: str, documents: Sequence[Path]) -> int:
    """Count documents containing term as a substring.

    Unreadable documents count as not containing it.
    """
    count = 0
    for document in documents:
        try:
            if contains_term(term, document):
                count += 1
        except DocumentReadError as exc:
            LOGGER.warning("%s", exc)
    return count


def score_documents(terms: Sequence[str], documents: Sequence[Path]) -> Dict[Path, float]:
    """Sum tf * idf over terms for every document.

    A term absent from the whole corpus has an infinite idf and zero tf
    everywhere, so every total becomes NaN.
    """
    num_documents = len(documents)
    normalized = [normalize_term(term) for term in terms]
    idf_by_term: Dict[str, float] = {}
    for term in normalized:
        if term not in idf_by_term:
            idf_by_term[term] = inverse_document_frequency(
                num_documents, document_frequency(term, documents)
            )

    scores: Dict[Path, float] = {}
    for document in documents:
        total = 0.0
        for term in normalized:
            try:
                tf = term_frequency(term, document)
            except DocumentReadError as exc:
                LOGGER.warning("%s", exc)
                continue
            total += tf * idf_by_term[term]
        scores[document] = total
    return scores


def rank(scores: Dict[Path, float]) -> List[SearchResult]:
    """Drop NaN totals and sort by score, highest first."""
    results = [
        SearchResult(path=path, score=score)
        for path, score in scores.items()
        if not math.isnan(score)
    ]
    results.sort(key=lambda result: result.score, reverse=True)
    return results


class Searcher:
    """Walks the corpus and ranks it against a query, from scratch on every call."""

    def __init__(self, root: Path) -> None:
        self.root = root.absolute()

    def search(self, query: str) -> List[SearchResult]:
        if not query:
            return []
        documents = find_notes(self.root)
        LOGGER.debug("Scoring %d documents under %s", len(documents), self.root)
        return rank(score_documents(split_query(query), documents))
