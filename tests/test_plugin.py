import click
import pytest
from click.testing import CliRunner

from llm_learn_kana.plugin import register_commands


@pytest.fixture
def cli() -> click.Group:
    @click.group()
    def group() -> None:
        pass

    register_commands(group)
    return group


def test_commands_registered(cli: click.Group) -> None:
    assert {"kana-quiz", "kana-words", "kana-numbers", "kana-chart"} <= set(cli.commands)


def test_kana_chart_hiragana(cli: click.Group) -> None:
    result = CliRunner().invoke(cli, ["kana-chart", "hiragana"])
    assert result.exit_code == 0
    assert "あ a" in result.output
    assert "ぽ po" in result.output


def test_kana_chart_numbers(cli: click.Group) -> None:
    result = CliRunner().invoke(cli, ["kana-chart", "numbers"])
    assert result.exit_code == 0
    assert "七" in result.output
    assert "nana / shichi" in result.output


def test_kana_quiz_quit_prints_score(cli: click.Group) -> None:
    result = CliRunner().invoke(cli, ["kana-quiz", "--type", "katakana"], input=":quit\n")
    assert result.exit_code == 0
    assert "Mastered: 0 / 71" in result.output
    assert "Score: 0 / 0" in result.output


def test_kana_quiz_practice_mode(cli: click.Group) -> None:
    result = CliRunner().invoke(cli, ["kana-quiz", "--practice"], input=":skip\nzzz\n:quit\n")
    assert result.exit_code == 0
    assert "Incorrect. The correct answer is" in result.output
    assert "Mastered:" not in result.output
    assert "Score: 0 / 1 (0%)" in result.output


def test_kana_words_local(cli: click.Group) -> None:
    result = CliRunner().invoke(cli, ["kana-words"], input="zzz\n:quit\n")
    assert result.exit_code == 0
    assert "Meaning:" in result.output
    assert "Score: 0 / 1 (0%)" in result.output


def test_kana_numbers_single_round(cli: click.Group) -> None:
    result = CliRunner().invoke(cli, ["kana-numbers", "--rounds", "1"], input="1\n")
    assert result.exit_code == 0
    assert "8." in result.output
    assert "Score:" in result.output
    assert "/ 1" in result.output
