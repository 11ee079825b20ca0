from typing import Any

import llm  # type: ignore

from . import charts, data

SKIP = ":skip"
QUIT = ":quit"


def _score_line(score: Any) -> str:
    if score.total == 0:
        return "Score: 0 / 0"
    return f"Score: {score.correct} / {score.total} ({score.percent}%)"


@llm.hookimpl  # type: ignore[misc]
def register_commands(cli: Any) -> None:
    import click
    from .lookup import WordPrefetcher
    from .numbers import NumbersQuiz
    from .session import Mode, PracticeSession, WordSession

    selection_choice = click.Choice(list(data.SELECTIONS))

    @cli.command("kana-quiz")  # type: ignore[misc]
    @click.option("--type", "selection", type=selection_choice, default="hiragana", help="Kana to practice")
    @click.option("--practice", is_flag=True, help="Practice All mode: no mastery tracking, unlimited repeats")
    def kana_quiz(selection: str, practice: bool) -> None:
        """Drill kana by typing their romaji. Type :skip to skip, :quit to stop."""
        session = PracticeSession(selection)
        if practice:
            session.enter_free_practice()
        else:
            session.enter_quiz()

        while session.mode is not Mode.COMPLETED and session.current_item is not None:
            item = session.current_item
            answer = click.prompt(f"\n{item.prompt}", type=str, default="", show_default=False)
            if answer.strip() == QUIT:
                break
            if answer.strip() == SKIP or not answer.strip():
                session.skip()
                continue
            session.submit(answer)
            click.echo(session.message)
            session.next()

        if session.mode is Mode.COMPLETED:
            click.echo(f"\n🎉 All {len(session.pool)} kana mastered!")
            if session.mistake_counts:
                missed = ", ".join(session.full_pool.get(i).prompt for i in sorted(session.mistake_counts))
                click.echo(f"Kana you missed along the way: {missed}")
        if not practice:
            click.echo(f"Mastered: {len(session.mastered_set)} / {len(session.pool)}")
        click.echo(_score_line(session.score))

    @cli.command("kana-words")  # type: ignore[misc]
    @click.option("--type", "selection", type=selection_choice, default="hiragana", help="Word script to practice")
    @click.option("--online", is_flag=True, help="Fetch words from the Jisho dictionary instead of the local lists")
    def kana_words(selection: str, online: bool) -> None:
        """Type the romaji for kana words. Type :skip to skip, :quit to stop."""
        session = WordSession(selection, fetcher=WordPrefetcher() if online else None)
        while True:
            if session.load_failed:
                click.echo(f"⚠️  {session.message}")
                break
            item = session.current_item
            if item is None:
                break
            answer = click.prompt(f"\n{item.prompt}", type=str, default="", show_default=False)
            if answer.strip() == QUIT:
                break
            if answer.strip() == SKIP or not answer.strip():
                session.skip()
                continue
            session.submit(answer)
            click.echo(session.message)
            if item.meaning:
                click.echo(f"Meaning: {item.meaning}")
            session.next()
        click.echo(_score_line(session.score))

    @cli.command("kana-numbers")  # type: ignore[misc]
    @click.option("--rounds", default=10, help="Number of questions")
    def kana_numbers(rounds: int) -> None:
        """Multiple-choice quiz matching numbers, kanji, kana and romaji."""
        quiz = NumbersQuiz()
        quiz.open_setup()
        quiz.start()
        for _ in range(rounds):
            question = quiz.question
            if question is None:
                break
            click.echo(f"\n{question.prompt}  ({question.question_category} → {question.answer_category})")
            for index, option in enumerate(question.options, start=1):
                click.echo(f"  {index}. {option.text}")
            choice = click.prompt("Your choice", type=click.IntRange(1, len(question.options)))
            quiz.answer(question.options[choice - 1].identity)
            click.echo(quiz.message)
            quiz.next()
        click.echo(_score_line(quiz.score))

    @cli.command("kana-chart")  # type: ignore[misc]
    @click.argument("chart", type=click.Choice(["hiragana", "katakana", "both", "numbers"]), default="hiragana")
    def kana_chart(chart: str) -> None:
        """Print a kana or number reference chart."""
        if chart == "numbers":
            for digit, kanji, readings, romaji in charts.number_chart():
                click.echo(f"{digit:>2}  {kanji}  {readings}  ({romaji})")
            return
        kinds = list(data.KANA_TYPES) if chart == "both" else [chart]
        for kind in kinds:
            click.echo(kind.capitalize())
            for row in charts.kana_chart(kind):
                click.echo(charts.render_row(row))
