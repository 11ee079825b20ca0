"""
Numeral quiz: match a number shown in one form (digit, kanji, kana
reading or romaji) against eight options shown in another form.
"""

import os
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from . import data
from .sampler import sample, sample_distinct
from .session import Feedback, Score
from .structured import Item, Pool

DEBUG_MODE = os.getenv("DEBUG", "0") == "1"

CATEGORIES = ("digit", "kanji", "reading", "romaji")
CATEGORY_LABELS = {
    "digit": "Number",
    "kanji": "Kanji",
    "reading": "Kana",
    "romaji": "Romaji",
}
OPTION_COUNT = 8
MIN_CATEGORIES = 2


class NumbersMode(Enum):
    SELECTION = "selection"
    CHART = "chart"
    SETUP = "setup"
    QUIZ = "quiz"


def display_text(item: Item, category: str) -> str:
    """All forms of a number in one category, readings joined with ' / '."""
    digit, kanji, readings, romaji = data.NUMBER_DETAILS[item.identity]
    if category == "digit":
        return str(digit)
    if category == "kanji":
        return kanji
    if category == "reading":
        return " / ".join(readings)
    if category == "romaji":
        return " / ".join(romaji)
    raise ValueError(f"Unknown number category '{category}'")


def random_display_text(item: Item, category: str) -> str:
    """One randomly chosen form, so multi-reading numbers show a single reading."""
    _digit, _kanji, readings, romaji = data.NUMBER_DETAILS[item.identity]
    if category == "reading":
        return random.choice(readings)
    if category == "romaji":
        return random.choice(romaji)
    return display_text(item, category)


@dataclass
class Option:
    identity: str
    text: str


@dataclass
class Question:
    item: Item
    question_category: str
    answer_category: str
    prompt: str
    options: List[Option]


def generate_question(pool: Pool, categories: List[str], option_count: int = OPTION_COUNT) -> Question:
    if len(categories) < MIN_CATEGORIES:
        raise ValueError(f"At least {MIN_CATEGORIES} categories are required")
    item = sample(pool)
    if item is None:
        raise ValueError("Cannot generate a question from an empty pool")
    question_category = random.choice(categories)
    answer_category = random.choice([c for c in categories if c != question_category])

    distractors = sample_distinct(pool, option_count - 1, exclude={item.identity})
    choices = [item] + distractors
    random.shuffle(choices)

    return Question(
        item=item,
        question_category=question_category,
        answer_category=answer_category,
        prompt=random_display_text(item, question_category),
        options=[Option(choice.identity, random_display_text(choice, answer_category)) for choice in choices],
    )


class NumbersQuiz:
    def __init__(self, pool: Optional[Pool] = None) -> None:
        self.pool = pool or data.number_pool()
        self.mode = NumbersMode.SELECTION
        self.selected_categories: List[str] = list(CATEGORIES)
        self.question: Optional[Question] = None
        self.feedback = Feedback.UNANSWERED
        self.message = ""
        self.correct_answer: Optional[str] = None
        self.score = Score()

    @property
    def can_start(self) -> bool:
        return len(self.selected_categories) >= MIN_CATEGORIES

    @property
    def all_selected(self) -> bool:
        return len(self.selected_categories) == len(CATEGORIES)

    def show_chart(self) -> bool:
        if self.mode is not NumbersMode.SELECTION:
            return False
        self.mode = NumbersMode.CHART
        return True

    def open_setup(self) -> bool:
        if self.mode is not NumbersMode.SELECTION:
            return False
        self.mode = NumbersMode.SETUP
        return True

    def toggle_category(self, category: str) -> bool:
        if self.mode is not NumbersMode.SETUP or category not in CATEGORIES:
            return False
        if category in self.selected_categories:
            self.selected_categories.remove(category)
        else:
            self.selected_categories.append(category)
            self.selected_categories.sort(key=CATEGORIES.index)
        return True

    def toggle_all(self) -> bool:
        """Select All, or Deselect All when everything is already selected."""
        if self.mode is not NumbersMode.SETUP:
            return False
        self.selected_categories = [] if self.all_selected else list(CATEGORIES)
        return True

    def start(self) -> bool:
        if self.mode is not NumbersMode.SETUP or not self.can_start:
            return False
        self.mode = NumbersMode.QUIZ
        self.score.reset()
        self._new_question()
        return True

    def _new_question(self) -> None:
        self.question = generate_question(self.pool, self.selected_categories)
        self.feedback = Feedback.UNANSWERED
        self.message = ""
        self.correct_answer = None
        if DEBUG_MODE:
            print(f"🎯 {self.question.item.identity}: {self.question.question_category} -> {self.question.answer_category}")

    def answer(self, identity: str) -> Optional[bool]:
        """Pick an option; correctness is identity equality, not display text."""
        if self.mode is not NumbersMode.QUIZ or self.question is None:
            return None
        if self.feedback is not Feedback.UNANSWERED:
            return None
        correct = identity == self.question.item.identity
        self.score.record(correct)
        if correct:
            self.feedback = Feedback.CORRECT
            self.message = "Correct!"
        else:
            self.feedback = Feedback.INCORRECT
            self.correct_answer = display_text(self.question.item, self.question.answer_category)
            self.message = f"Incorrect. The answer is {self.correct_answer}"
        return correct

    def next(self) -> bool:
        if self.mode is not NumbersMode.QUIZ or self.feedback is Feedback.UNANSWERED:
            return False
        self._new_question()
        return True

    def back(self) -> bool:
        if self.mode is NumbersMode.SELECTION:
            return False
        self.mode = NumbersMode.SELECTION
        self.question = None
        self.feedback = Feedback.UNANSWERED
        self.message = ""
        self.score.reset()
        return True

    def snapshot(self) -> Dict[str, Any]:
        question = self.question
        return {
            "mode": self.mode.value,
            "categories": [
                {"name": c, "label": CATEGORY_LABELS[c], "selected": c in self.selected_categories}
                for c in CATEGORIES
            ],
            "can_start": self.can_start,
            "question": {
                "prompt": question.prompt,
                "question_category": question.question_category,
                "answer_category": question.answer_category,
                "options": [{"identity": o.identity, "text": o.text} for o in question.options],
            } if question else None,
            "feedback": self.feedback.value,
            "message": self.message,
            "score": {"correct": self.score.correct, "total": self.score.total, "percent": self.score.percent},
        }
