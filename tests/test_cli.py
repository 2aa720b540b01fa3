"""
Tests for the Typer CLI (catalog replaced by an in-memory fake).
"""

import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

import cli.main as cli_main
from adapters.score_store import JsonFileScoreStore
from cli.ui_components import format_feedback
from conftest import FakeCatalog
from core.domain.models import AnswerOutcome, AnswerResult, Breed, Question

runner = CliRunner()


def _patch_catalog(monkeypatch, catalog):
    class _Factory:
        def __init__(self, settings=None, **kwargs):
            self._catalog = catalog

        async def __aenter__(self):
            return self._catalog

        async def __aexit__(self, *exc_info):
            return None

    monkeypatch.setattr(cli_main, "DogApiCatalog", _Factory)


@pytest.fixture
def score_path(tmp_path, monkeypatch):
    path = tmp_path / "score.json"
    monkeypatch.setenv("DOGGIE_QUIZ_SCORE_PATH", str(path))
    return path


class TestPlay:
    """Tests for the interactive game loop."""

    def test_single_round_correct(self, monkeypatch, score_path):
        _patch_catalog(monkeypatch, FakeCatalog([Breed(parent="akita")]))

        result = runner.invoke(cli_main.app, ["play", "--rounds", "1"], input="1\n")

        assert result.exit_code == 0, result.output
        assert "Akita" in result.output
        assert "Correct!" in result.output
        assert "Final score: 1" in result.output
        assert JsonFileScoreStore(score_path).read() == 1

    def test_no_save_keeps_file_untouched(self, monkeypatch, score_path):
        _patch_catalog(monkeypatch, FakeCatalog([Breed(parent="akita")]))

        result = runner.invoke(cli_main.app, ["play", "-n", "1", "--no-save"], input="1\n")

        assert result.exit_code == 0, result.output
        assert not score_path.exists()

    def test_invalid_choice_then_quit(self, monkeypatch, score_path):
        _patch_catalog(monkeypatch, FakeCatalog())

        result = runner.invoke(cli_main.app, ["play"], input="9\nq\n")

        assert result.exit_code == 0, result.output
        assert "Pick a number between 1 and 4" in result.output
        assert "Final score: 0" in result.output

    def test_failure_offers_retry(self, monkeypatch, score_path):
        catalog = FakeCatalog(fail_breeds=True)
        _patch_catalog(monkeypatch, catalog)

        result = runner.invoke(cli_main.app, ["play"], input="r\nq\n")

        assert result.exit_code == 0, result.output
        assert "Failed to load breeds. Please try again." in result.output
        assert catalog.breed_calls == 2

    def test_skip_fetches_new_image(self, monkeypatch, score_path):
        catalog = FakeCatalog()
        _patch_catalog(monkeypatch, catalog)

        result = runner.invoke(cli_main.app, ["play"], input="s\nq\n")

        assert result.exit_code == 0, result.output
        assert len(catalog.image_calls) == 2


class TestBreeds:
    """Tests for the catalog listing."""

    def test_lists_breeds(self, monkeypatch):
        _patch_catalog(monkeypatch, FakeCatalog())

        result = runner.invoke(cli_main.app, ["breeds"])

        assert result.exit_code == 0, result.output
        assert "Retriever (Golden)" in result.output
        assert "shepherd/german" in result.output

    def test_filter(self, monkeypatch):
        _patch_catalog(monkeypatch, FakeCatalog())

        result = runner.invoke(cli_main.app, ["breeds", "--filter", "bull"])

        assert "Bulldog (French)" in result.output
        assert "Retriever" not in result.output

    def test_catalog_down(self, monkeypatch):
        _patch_catalog(monkeypatch, FakeCatalog(fail_breeds=True))

        result = runner.invoke(cli_main.app, ["breeds"])

        assert result.exit_code == 1
        assert "Catalog unavailable" in result.output


class TestScoreCommands:
    """Tests for showing and resetting the score."""

    def test_score(self, score_path):
        JsonFileScoreStore(score_path).write(5)

        result = runner.invoke(cli_main.app, ["score"])

        assert result.exit_code == 0
        assert "Score: 5" in result.output

    def test_reset_with_yes(self, score_path):
        JsonFileScoreStore(score_path).write(5)

        result = runner.invoke(cli_main.app, ["reset-score", "--yes"])

        assert result.exit_code == 0
        assert JsonFileScoreStore(score_path).read() == 0

    def test_reset_declined(self, score_path):
        JsonFileScoreStore(score_path).write(5)

        result = runner.invoke(cli_main.app, ["reset-score"], input="n\n")

        assert result.exit_code != 0
        assert JsonFileScoreStore(score_path).read() == 5


class TestConfigErrors:
    """Invalid settings end the command cleanly."""

    def test_invalid_option_count_exits(self, score_path, monkeypatch):
        monkeypatch.setenv("DOGGIE_QUIZ_OPTION_COUNT", "1")

        result = runner.invoke(cli_main.app, ["score"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert not isinstance(result.exception, ValidationError)


class TestFeedback:
    """Tests for the answer feedback line."""

    def _question(self):
        options = (Breed(parent="akita"), Breed(parent="bulldog"), Breed(parent="pug"))
        return Question(
            image_url="https://images.dog.ceo/breeds/pug/1.jpg",
            correct_breed=options[2],
            options=options,
        )

    def test_incorrect_names_option_number(self):
        question = self._question()
        result = AnswerResult(outcome=AnswerOutcome.INCORRECT, correct_breed=question.correct_breed)

        assert format_feedback(result, question).plain == "Awwww it is: 3. Pug"

    def test_incorrect_without_question(self):
        result = AnswerResult(outcome=AnswerOutcome.INCORRECT, correct_breed=Breed(parent="pug"))

        assert format_feedback(result).plain == "Awwww it is: Pug"

    def test_retry_allowed_hides_answer(self):
        question = self._question()
        result = AnswerResult(
            outcome=AnswerOutcome.INCORRECT_RETRY_ALLOWED,
            correct_breed=question.correct_breed,
        )

        assert format_feedback(result, question).plain == "Try again!"
