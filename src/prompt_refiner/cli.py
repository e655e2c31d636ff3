import json
from dataclasses import replace
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from prompt_refiner.config import settings
from prompt_refiner.intent.analyzer import IntentAnalyzer
from prompt_refiner.intent.domain import detect_domain
from prompt_refiner.quality.evaluator import PromptQualityEvaluator
from prompt_refiner.session.loop import Cutoffs, EmptyInputError, RefinementSession

app = typer.Typer(help="Refine a request into a generation prompt, one question at a time.")
console = Console()

_domain_option = typer.Option(
    None, "--domain", "-d", help="image, video or dev. Detected from the text if omitted."
)
_answer_option = typer.Option(
    None, "--answer", "-a", help="Prior answer text. Repeat for several answers."
)
_json_option = typer.Option(False, "--json", help="Print raw JSON instead of a table.")


def _resolve_domain(text: str, domain: Optional[str]) -> str:
    if domain:
        return domain
    guess = detect_domain(text)
    console.print(
        f"Detected domain: [cyan]{guess.primary}[/cyan] "
        f"(confidence {guess.confidence:.2f})"
    )
    return guess.primary


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


@app.command("score-intent")
def score_intent(
    text: str = typer.Argument(..., help="The user's request."),
    domain: Optional[str] = _domain_option,
    answer: Optional[List[str]] = _answer_option,
    as_json: bool = _json_option,
) -> None:
    """Score how much of the domain's slots the text covers."""
    domain = domain or detect_domain(text).primary
    report = IntentAnalyzer(complete_at=settings.INTENT_CUTOFF).analyze(
        text, answer or [], domain
    )
    if as_json:
        _echo_json(
            {
                "domain": report.domain,
                "intentScore": report.intent_score,
                "isComplete": report.is_complete,
                "missingSlots": report.missing_slots,
            }
        )
        return

    table = Table(title=f"Intent coverage ({report.domain}): {report.intent_score}")
    table.add_column("Slot", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("Filled")
    for key, status in report.slot_breakdown.items():
        table.add_row(key, str(status.weight), "yes" if status.filled else "no")
    console.print(table)


@app.command("score-prompt")
def score_prompt(
    prompt: str = typer.Argument(..., help="Draft prompt to evaluate."),
    domain: str = typer.Option("dev", "--domain", "-d"),
    as_json: bool = _json_option,
) -> None:
    """Evaluate a draft prompt against the quality rubric."""
    report = PromptQualityEvaluator(max_length=settings.MAX_PROMPT_LENGTH).evaluate(
        prompt, domain
    )
    if as_json:
        _echo_json(
            {
                "total": report.total,
                "grade": report.grade,
                "criteriaScores": report.criteria_scores,
                "improvementSuggestions": report.improvement_suggestions,
            }
        )
        return

    table = Table(title=f"Prompt quality: {report.total} ({report.grade})")
    table.add_column("Criterion", style="cyan")
    table.add_column("Score", justify="right")
    for name, score in report.criteria_scores.items():
        table.add_row(name, str(score))
    console.print(table)
    for hint in report.improvement_suggestions:
        console.print(f"[yellow]- {hint}[/yellow]")


@app.command()
def refine(
    text: str = typer.Argument(..., help="The user's request."),
    domain: Optional[str] = _domain_option,
    max_turns: Optional[int] = typer.Option(None, "--max-turns", min=0),
    no_ask: bool = typer.Option(
        False, "--no-ask", help="Score once and finalize without asking questions."
    ),
    as_json: bool = _json_option,
) -> None:
    """Ask follow-up questions until both scores reach their cutoffs."""
    cutoffs = Cutoffs.from_settings(settings)
    if max_turns is not None:
        cutoffs = replace(cutoffs, max_turns=max_turns)

    session = RefinementSession(text, _resolve_domain(text, domain), cutoffs=cutoffs)
    try:
        questions = session.start()
    except EmptyInputError:
        console.print("[bold red]Input text is empty.[/bold red]")
        raise typer.Exit(1)

    while questions and not no_ask:
        console.print(
            f"Turn {session.turns + 1}: intent {session.intent.intent_score}, "
            f"prompt {session.quality.total}"
        )
        answers = {
            q.key: typer.prompt(q.question, default="", show_default=False)
            for q in questions
        }
        questions = session.submit_answers(answers)

    payload = session.finalize().to_dict()
    if as_json:
        _echo_json(payload)
        return

    table = Table(title="Refinement result")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Domain", payload["intent"]["domain"])
    table.add_row("Intent score", str(payload["intent"]["intentScore"]))
    table.add_row("Prompt score", str(payload["prompt"]["total"]))
    table.add_row("Turns", str(payload["meta"]["turns"]))
    table.add_row("Stop reason", str(payload["meta"]["stop_reason"]))
    console.print(table)
    console.print(payload["prompt"]["text"])


@app.command()
def serve(
    host: str = typer.Option(settings.api_host, "--host"),
    port: int = typer.Option(settings.api_port, "--port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("prompt_refiner.api.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
