from typing import Any, Dict, List, Optional, Tuple

from . import data
from .structured import Item

RECOGNITION_NOTICE = "Handwriting recognition is not available yet. Use Show Answer to check your writing."

Point = Tuple[float, float]


class WritingPractice:
    """Draw a kana from memory, then reveal it. Strokes are kept but never graded."""

    def __init__(self, types: Optional[List[str]] = None) -> None:
        self.types = types or list(data.KANA_TYPES)
        self.current_item: Item = data.get_random_kana(self.types)
        self.answer_shown = False
        self.strokes: List[List[Point]] = []

    def add_stroke(self, points: List[Point]) -> None:
        if points:
            self.strokes.append(list(points))

    def show_answer(self) -> None:
        self.answer_shown = True

    def clear(self) -> None:
        self.strokes = []
        self.answer_shown = False

    def next(self) -> Item:
        self.current_item = data.get_random_kana(self.types)
        self.clear()
        return self.current_item

    def recognize(self) -> str:
        return RECOGNITION_NOTICE

    def snapshot(self) -> Dict[str, Any]:
        item = self.current_item
        return {
            "romaji": item.primary_answer,
            "type": item.category,
            "answer": item.prompt if self.answer_shown else None,
            "show_answer": self.answer_shown,
            "strokes": len(self.strokes),
        }
