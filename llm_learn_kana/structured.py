from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Item:
    """One unit of study: a kana glyph, a vocabulary word or a numeral."""

    identity: str
    prompt: str
    answers: Tuple[str, ...]
    category: Optional[str] = None
    meaning: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.identity:
            raise ValueError("Item identity must not be empty")
        if not self.answers:
            raise ValueError(f"Item '{self.identity}' has no acceptable answers")
        if any(not answer for answer in self.answers):
            raise ValueError(f"Item '{self.identity}' has an empty answer")

    @property
    def primary_answer(self) -> str:
        return self.answers[0]


@dataclass(frozen=True)
class Pool:
    """Immutable, ordered collection of items with unique identities."""

    items: Tuple[Item, ...]
    _index: Dict[str, Item] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("Pool must contain at least one item")
        index: Dict[str, Item] = {}
        for item in self.items:
            if item.identity in index:
                raise ValueError(f"Duplicate item identity in pool: {item.identity}")
            index[item.identity] = item
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __contains__(self, identity: object) -> bool:
        return identity in self._index

    def get(self, identity: str) -> Optional[Item]:
        return self._index.get(identity)

    def identities(self) -> List[str]:
        return [item.identity for item in self.items]

    def by_category(self, *categories: str) -> "Pool":
        return Pool(tuple(item for item in self.items if item.category in categories))

    def subset(self, identities: AbstractSet[str]) -> "Pool":
        """Items whose identity is in ``identities``, in pool order."""
        return Pool(tuple(item for item in self.items if item.identity in identities))

    def union(self, other: "Pool") -> "Pool":
        return Pool(self.items + tuple(item for item in other.items if item.identity not in self._index))


@dataclass
class WordEntry:
    kana: str
    kanji: Optional[str]
    meanings: str
    type: str

    def to_item(self) -> Item:
        from .matcher import to_romaji
        return Item(
            identity=f"word:{self.kana}",
            prompt=self.kana,
            answers=(to_romaji(self.kana),),
            category=self.type,
            meaning=self.meanings,
        )
