import json

from typer.testing import CliRunner

from prompt_refiner.cli import app

runner = CliRunner()

DEV_REQUEST = "사용자 인증이 필요한 웹 api를 만들고 싶어요"


def test_score_intent_json() -> None:
    result = runner.invoke(app, ["score-intent", DEV_REQUEST, "-d", "dev", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["intentScore"] == 32
    assert data["missingSlots"][0] == "core_features"


def test_score_intent_uses_answers() -> None:
    result = runner.invoke(
        app,
        ["score-intent", DEV_REQUEST, "-d", "dev", "-a", "게시판 기능", "-a", "대학생", "--json"],
    )

    assert json.loads(result.stdout)["intentScore"] == 70


def test_score_prompt_table() -> None:
    result = runner.invoke(app, ["score-prompt", "그거 대충 만들어줘"])

    assert result.exit_code == 0
    assert "clarity" in result.stdout
    assert "(D)" in result.stdout


def test_refine_without_questions() -> None:
    result = runner.invoke(app, ["refine", DEV_REQUEST, "-d", "dev", "--no-ask", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["intent"] == {"domain": "dev", "intentScore": 32}
    assert payload["meta"]["stop_reason"] == "finalized_early"
    assert payload["meta"]["turns"] == 0


def test_refine_interactive_until_cutoff() -> None:
    answers = "\n".join(
        ["게시판과 검색", "대학생", "python fastapi", "mvp 먼저, 결제 기능은 제외"]
    )
    result = runner.invoke(app, ["refine", DEV_REQUEST, "-d", "dev"], input=answers + "\n")

    assert result.exit_code == 0
    assert "cutoff_met" in result.stdout
    assert "제외" in result.stdout


def test_refine_stops_at_turn_limit() -> None:
    result = runner.invoke(
        app, ["refine", DEV_REQUEST, "-d", "dev", "--max-turns", "1"], input="\n\n"
    )

    assert result.exit_code == 0
    assert "turn_limit" in result.stdout


def test_refine_rejects_empty_input() -> None:
    result = runner.invoke(app, ["refine", "   ", "-d", "dev"])

    assert result.exit_code == 1
