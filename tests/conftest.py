from typing import Dict

import pytest

from llm_learn_kana.scheduler import AutoAdvance
from llm_learn_kana.structured import Item, Pool


class FakeClock:
    """Manually advanced time source for the auto-advance timer."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_pools() -> Dict[str, Pool]:
    hiragana = Pool((
        Item("hiragana:あ", "あ", ("a",), "hiragana"),
        Item("hiragana:し", "し", ("shi",), "hiragana"),
        Item("hiragana:つ", "つ", ("tsu",), "hiragana"),
    ))
    katakana = Pool((
        Item("katakana:ア", "ア", ("a",), "katakana"),
        Item("katakana:シ", "シ", ("shi",), "katakana"),
    ))
    return {"hiragana": hiragana, "katakana": katakana, "mix": hiragana.union(katakana)}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timer(clock: FakeClock) -> AutoAdvance:
    return AutoAdvance(10, clock=clock)


@pytest.fixture
def pools() -> Dict[str, Pool]:
    return make_pools()


@pytest.fixture
def pool_factory(pools: Dict[str, Pool]):
    def factory(selection: str) -> Pool:
        if selection not in pools:
            raise ValueError(f"Unknown selection '{selection}'")
        return pools[selection]
    return factory
