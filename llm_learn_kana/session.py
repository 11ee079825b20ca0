"""
Practice-session state machines for the kana and word drills.

A session owns all of its mutable state (current item, feedback, score,
mastery and mistake bookkeeping, the curated selection and the pending
auto-advance) and is discarded when the learner leaves the section.
Actions that do not apply to the current state are no-ops and return
False; they never raise.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, AbstractSet, Any, Callable, Dict, Optional, Set

from . import data
from .matcher import is_match
from .sampler import EMPTY, sample
from .scheduler import KANA_AUTO_ADVANCE_SECONDS, WORD_AUTO_ADVANCE_SECONDS, AutoAdvance
from .structured import Item, Pool

if TYPE_CHECKING:
    from .lookup import WordPrefetcher

DEBUG_MODE = os.getenv("DEBUG", "0") == "1"

MASTERY_THRESHOLD = 3
LOAD_FAILED_MESSAGE = "Failed to load word. Please try again."


class Mode(Enum):
    SELECTING_MODE = "selecting_mode"
    QUIZZING = "quiz"
    FREE_PRACTICING = "practice_all"
    CURATED_SELECTING = "curated_selecting"
    CURATED_PRACTICING = "practice_selected"
    COMPLETED = "completed"


DRILLING_MODES = (Mode.QUIZZING, Mode.FREE_PRACTICING, Mode.CURATED_PRACTICING)


class Feedback(Enum):
    UNANSWERED = "unanswered"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass
class Score:
    correct: int = 0
    total: int = 0

    def record(self, is_correct: bool) -> None:
        self.total += 1
        if is_correct:
            self.correct += 1

    @property
    def percent(self) -> Optional[int]:
        if self.total == 0:
            return None
        # halves round up: 1/8 -> 13
        return (200 * self.correct + self.total) // (2 * self.total)

    def reset(self) -> None:
        self.correct = 0
        self.total = 0


class DrillSession:
    """
    Shared drill loop: show an item, take one answer, show feedback, advance.

    Subclasses decide which pool is drawn from, what is excluded, and what a
    result does to their bookkeeping.
    """

    def __init__(self, auto_advance: AutoAdvance) -> None:
        self.timer = auto_advance
        self.current_item: Optional[Item] = None
        self.feedback = Feedback.UNANSWERED
        self.message = ""
        self.score = Score()

    # Hooks

    def _is_drilling(self) -> bool:
        raise NotImplementedError

    def _draw(self) -> None:
        raise NotImplementedError

    def _on_result(self, item: Item, correct: bool) -> str:
        raise NotImplementedError

    # Transitions

    @property
    def answered(self) -> bool:
        return self.feedback is not Feedback.UNANSWERED

    def _clear_feedback(self) -> None:
        self.feedback = Feedback.UNANSWERED
        self.message = ""

    def submit(self, user_input: str) -> Optional[bool]:
        """Check an answer; returns whether it was correct, or None when ignored."""
        if not self._is_drilling() or self.answered or self.current_item is None:
            return None
        if not user_input or not user_input.strip():
            return None

        item = self.current_item
        correct = is_match(user_input, item)
        self.score.record(correct)
        self.feedback = Feedback.CORRECT if correct else Feedback.INCORRECT
        self.message = self._on_result(item, correct)
        if DEBUG_MODE:
            print(f"🎯 {item.identity}: '{user_input.strip()}' -> {'correct' if correct else 'incorrect'}")

        self.timer.schedule(self.next)
        return correct

    def skip(self) -> bool:
        if not self._is_drilling() or self.answered or self.current_item is None:
            return False
        self._draw()
        return True

    def next(self) -> bool:
        if not self._is_drilling() or not self.answered:
            return False
        self.timer.cancel()
        self._clear_feedback()
        self._draw()
        return True

    def tick(self) -> bool:
        """Fire the auto-advance if it has come due."""
        return self.timer.poll()


class PracticeSession(DrillSession):
    """
    Kana drill with Quiz, Practice All and Practice Selected modes.

    Quiz mode excludes mastered kana and ends in COMPLETED once every kana in
    the pool is mastered. Practice All draws from the whole pool with repeats.
    Practice Selected drills only the learner's curated selection.
    """

    def __init__(
        self,
        selection: str = "hiragana",
        pool_factory: Callable[[str], Pool] = data.kana_pool,
        full_pool: Pool = data.KANA_POOL,
        auto_advance: Optional[AutoAdvance] = None,
    ) -> None:
        super().__init__(auto_advance or AutoAdvance(KANA_AUTO_ADVANCE_SECONDS))
        pool_factory(selection)  # unknown selection raises ValueError
        self.selection = selection
        self.pool_factory = pool_factory
        self.full_pool = full_pool
        self.mode = Mode.SELECTING_MODE
        self.mastery_counts: Dict[str, int] = {}
        self.mastered_set: Set[str] = set()
        self.mistake_counts: Dict[str, int] = {}
        self.selection_set: Set[str] = set()
        self.curated_set: Set[str] = set()

    @property
    def pool(self) -> Pool:
        return self.pool_factory(self.selection)

    @property
    def mistake_set(self) -> Set[str]:
        return set(self.mistake_counts)

    @property
    def can_start_curated(self) -> bool:
        return bool(self.selection_set)

    def mastery_progress(self, identity: str) -> int:
        return self.mastery_counts.get(identity, 0)

    def _is_drilling(self) -> bool:
        return self.mode in DRILLING_MODES

    def _drill_pool(self) -> Pool:
        if self.mode is Mode.CURATED_PRACTICING:
            return self.full_pool.subset(self.curated_set)
        return self.pool

    def _exclusions(self) -> AbstractSet[str]:
        if self.mode is Mode.QUIZZING:
            return self.mastered_set
        return EMPTY

    def _draw(self) -> None:
        self._clear_feedback()
        self.current_item = sample(self._drill_pool(), self._exclusions())
        if self.current_item is None and self.mode is Mode.QUIZZING:
            self.timer.cancel()
            self.mode = Mode.COMPLETED
            if DEBUG_MODE:
                print(f"✅ All {len(self.pool)} kana mastered")

    def _reset_progress(self) -> None:
        self.score.reset()
        self.mastery_counts.clear()
        self.mastered_set.clear()
        self.mistake_counts.clear()

    def _on_result(self, item: Item, correct: bool) -> str:
        if self.mode is Mode.QUIZZING:
            if correct:
                count = self.mastery_counts.get(item.identity, 0) + 1
                self.mastery_counts[item.identity] = count
                if count >= MASTERY_THRESHOLD:
                    self.mastered_set.add(item.identity)
                    return f'Mastered! "{item.prompt}" = "{item.primary_answer}"'
                return f"Correct! ({count}/{MASTERY_THRESHOLD})"
            self.mistake_counts[item.identity] = self.mistake_counts.get(item.identity, 0) + 1
        if correct:
            return "Correct!"
        return f'Incorrect. The correct answer is "{item.primary_answer}"'

    def _enter(self, mode: Mode) -> None:
        self.timer.cancel()
        self.mode = mode
        self._clear_feedback()
        self._draw()

    # Mode entry

    def enter_quiz(self) -> bool:
        if self.mode is not Mode.SELECTING_MODE:
            return False
        self._reset_progress()
        self._enter(Mode.QUIZZING)
        return True

    def enter_free_practice(self) -> bool:
        if self.mode is not Mode.SELECTING_MODE:
            return False
        self.score.reset()
        self._enter(Mode.FREE_PRACTICING)
        return True

    def enter_curated_selection(self) -> bool:
        if self.mode is not Mode.SELECTING_MODE:
            return False
        self.mode = Mode.CURATED_SELECTING
        return True

    def toggle_selection(self, identity: str) -> bool:
        if self.mode is not Mode.CURATED_SELECTING or identity not in self.full_pool:
            return False
        if identity in self.selection_set:
            self.selection_set.remove(identity)
        else:
            self.selection_set.add(identity)
        return True

    def clear_selection(self) -> bool:
        if self.mode is not Mode.CURATED_SELECTING:
            return False
        self.selection_set.clear()
        return True

    def start_curated(self) -> bool:
        if self.mode is not Mode.CURATED_SELECTING or not self.can_start_curated:
            return False
        self.curated_set = set(self.selection_set)
        self.score.reset()
        self._enter(Mode.CURATED_PRACTICING)
        return True

    # Completion

    def start_over(self) -> bool:
        if self.mode is not Mode.COMPLETED:
            return False
        self._reset_progress()
        self._enter(Mode.QUIZZING)
        return True

    def practice_mistakes(self) -> bool:
        if self.mode is not Mode.COMPLETED or not self.mistake_counts:
            return False
        self.curated_set = self.mistake_set
        self.mistake_counts.clear()
        self.score.reset()
        self._enter(Mode.CURATED_PRACTICING)
        return True

    # Navigation

    def set_selection(self, selection: str) -> bool:
        """Switch hiragana / katakana / mix."""
        pool = self.pool_factory(selection)
        if selection == self.selection:
            return False
        self.selection = selection
        if DEBUG_MODE:
            print(f"🔍 Kana selection -> {selection} ({len(pool)} items)")
        if self.mode in (Mode.QUIZZING, Mode.FREE_PRACTICING, Mode.COMPLETED):
            self._reset_progress()
            self._enter(Mode.QUIZZING if self.mode is Mode.COMPLETED else self.mode)
        elif self.mode is Mode.CURATED_PRACTICING:
            self._reset_progress()
            self._enter(Mode.CURATED_PRACTICING)
        return True

    def back(self) -> bool:
        if self.mode is Mode.SELECTING_MODE:
            return False
        self.timer.cancel()
        self._clear_feedback()
        self.current_item = None
        if self.mode is Mode.CURATED_PRACTICING:
            self.mode = Mode.CURATED_SELECTING
        else:
            self.mode = Mode.SELECTING_MODE
        return True

    def snapshot(self) -> Dict[str, Any]:
        item = self.current_item
        return {
            "mode": self.mode.value,
            "selection": self.selection,
            "item": {"identity": item.identity, "prompt": item.prompt} if item else None,
            "feedback": self.feedback.value,
            "message": self.message,
            "answer": item.primary_answer if item and self.answered else None,
            "score": {"correct": self.score.correct, "total": self.score.total, "percent": self.score.percent},
            "show_score": self.mode in (Mode.QUIZZING, Mode.COMPLETED),
            "mastered": len(self.mastered_set),
            "pool_size": len(self.pool),
            "progress": self.mastery_progress(item.identity) if item else 0,
            "mistakes": sorted(self.mistake_counts),
            "selected": sorted(self.selection_set),
            "can_start": self.can_start_curated,
            "auto_advance_in": self.timer.remaining(),
        }


class WordSession(DrillSession):
    """
    Word drill: type the romaji for a kana word.

    Correctly answered words leave the rotation until every word has been
    answered correctly, then the rotation starts over. Incorrect words stay
    in rotation. With a ``fetcher`` the words come from the lookup service
    instead of the local lists, and rotation does not apply.
    """

    def __init__(
        self,
        selection: str = "hiragana",
        pool_factory: Callable[[str], Pool] = data.word_pool,
        fetcher: Optional["WordPrefetcher"] = None,
        auto_advance: Optional[AutoAdvance] = None,
    ) -> None:
        super().__init__(auto_advance or AutoAdvance(WORD_AUTO_ADVANCE_SECONDS))
        pool_factory(selection)
        self.selection = selection
        self.pool_factory = pool_factory
        self.fetcher = fetcher
        self.answered_correctly: Set[str] = set()
        self.load_failed = False
        self.start()

    @property
    def pool(self) -> Pool:
        return self.pool_factory(self.selection)

    def _is_drilling(self) -> bool:
        return not self.load_failed

    def start(self) -> None:
        self.timer.cancel()
        self.score.reset()
        self.answered_correctly.clear()
        self._clear_feedback()
        if self.fetcher is not None:
            self.fetcher.start(self.selection)
            self._show_fetched(self.fetcher.current)
        else:
            self._draw()

    def _show_fetched(self, entry: Any) -> None:
        if entry is None:
            self.current_item = None
            self.load_failed = True
            self.message = LOAD_FAILED_MESSAGE
            return
        self.load_failed = False
        self.current_item = entry.to_item()

    def _draw(self) -> None:
        self._clear_feedback()
        if self.fetcher is not None:
            self._show_fetched(self.fetcher.advance())
            return
        item = sample(self.pool, self.answered_correctly)
        if item is None:
            if DEBUG_MODE:
                print(f"🔄 All {len(self.pool)} words answered, restarting rotation")
            self.answered_correctly.clear()
            item = sample(self.pool)
        self.current_item = item

    def _on_result(self, item: Item, correct: bool) -> str:
        romaji = item.primary_answer
        if correct:
            self.answered_correctly.add(item.identity)
            return f'Correct! "{item.prompt}" = "{romaji}"'
        return f'Incorrect. "{item.prompt}" = "{romaji}"'

    def retry(self) -> bool:
        """Reload after a failed fetch."""
        if not self.load_failed:
            return False
        self.start()
        return True

    def set_selection(self, selection: str) -> bool:
        self.pool_factory(selection)
        if selection == self.selection:
            return False
        self.selection = selection
        self.start()
        return True

    def snapshot(self) -> Dict[str, Any]:
        item = self.current_item
        return {
            "selection": self.selection,
            "item": {"identity": item.identity, "prompt": item.prompt} if item else None,
            "feedback": self.feedback.value,
            "message": self.message,
            "meaning": item.meaning if item and self.answered else None,
            "load_failed": self.load_failed,
            "score": {"correct": self.score.correct, "total": self.score.total, "percent": self.score.percent},
            "auto_advance_in": self.timer.remaining(),
        }
