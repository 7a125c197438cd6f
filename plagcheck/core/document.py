from dataclasses import dataclass, field
from types import MappingProxyType
from typing import AbstractSet, Mapping, Optional

from .tokenizer import tokenize


@dataclass(frozen=True)
class Document:
    """
    A tokenized document: its name, term counts and retained token total.

    ``term_counts`` keeps the order in which terms first appear in the text
    and is exposed read-only.
    """

    name: str
    term_counts: Mapping[str, int] = field(default_factory=dict)
    total_terms: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'term_counts', MappingProxyType(dict(self.term_counts)))

    @classmethod
    def from_text(cls, name: str, text: str, stopwords: Optional[AbstractSet[str]] = None) -> "Document":
        term_counts, total_terms = tokenize(text, stopwords)
        return cls(name=name, term_counts=term_counts, total_terms=total_terms)

    def tf(self, term: str) -> float:
        """Term frequency: count(term) / total_terms, 0.0 for an empty document."""
        if self.total_terms == 0:
            return 0.0
        return self.term_counts.get(term, 0) / self.total_terms
