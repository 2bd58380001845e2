"""
Command-line interface for GitGrade.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gitgrade.config import is_fallback_enabled, set_verify_ssl
from gitgrade.exceptions import InvalidInputError, RetrievalError
from gitgrade.http_client import close_http_client
from gitgrade.models import AnalysisReport, Grade, Level
from gitgrade.report import CATEGORY_DISPLAY, assemble, report_to_json
from gitgrade.vcs.github import fetch_repository_record, parse_repository_url

# --- Typer App ---
app = typer.Typer(help="Grade a GitHub repository and plan improvements.")
console = Console()
err_console = Console(stderr=True)

GRADE_COLORS = {
    Grade.A: "green",
    Grade.B_PLUS: "green",
    Grade.B: "yellow",
    Grade.C_PLUS: "red",
}

PRIORITY_COLORS = {
    Level.HIGH: "red",
    Level.MEDIUM: "yellow",
    Level.LOW: "blue",
}

IMPACT_COLORS = {
    Level.HIGH: "green",
    Level.MEDIUM: "yellow",
    Level.LOW: "dim",
}

# --- Helper Functions ---


def _score_color(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def _score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return "█" * filled + "░" * (width - filled)


def load_record_file(path: Path) -> dict:
    """Load a raw repository record from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            record = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Unable to read {path}: {e}") from e
    if not isinstance(record, dict):
        raise ValueError(f"Input file must contain a JSON object: {path}")
    return record


def display_report(report: AnalysisReport, verbose: bool = False):
    """Display the analysis report with rich formatting."""
    grade_color = GRADE_COLORS.get(report.grade, "white")
    console.print(
        Panel(
            f"Grade: [bold {grade_color}]{report.grade.value}[/bold {grade_color}]    "
            f"Overall Score: [{_score_color(report.overall_score)}]"
            f"{report.overall_score}/100[/{_score_color(report.overall_score)}]",
            title=f"📦 [bold cyan]{report.repository}[/bold cyan]",
            expand=False,
        )
    )

    scores_table = Table(title="Category Scores", header_style="bold magenta")
    scores_table.add_column("Category", style="cyan", no_wrap=True)
    scores_table.add_column("Score", justify="center")
    scores_table.add_column("", justify="left")
    for field, score in report.category_scores._asdict().items():
        label, icon = CATEGORY_DISPLAY[field]
        color = _score_color(score)
        scores_table.add_row(
            f"{icon} {label}",
            f"[{color}]{score}/100[/{color}]",
            f"[{color}]{_score_bar(score)}[/{color}]",
        )
    console.print(scores_table)

    console.print("\n[bold green]Strengths[/bold green]")
    for strength in report.strengths:
        console.print(f"  ✓ {strength}")

    console.print("\n[bold yellow]Improvements[/bold yellow]")
    for improvement in report.improvements:
        console.print(f"  → {improvement}")

    roadmap_table = Table(
        title="\nImprovement Roadmap", show_header=True, header_style="bold magenta"
    )
    roadmap_table.add_column("#", justify="right", style="dim")
    roadmap_table.add_column("Priority", justify="left")
    roadmap_table.add_column("Action", justify="left", style="bold", no_wrap=True)
    roadmap_table.add_column("Impact", justify="left")
    roadmap_table.add_column("Details", justify="left")
    for index, item in enumerate(report.roadmap, start=1):
        priority_color = PRIORITY_COLORS[item.priority]
        impact_color = IMPACT_COLORS[item.impact]
        roadmap_table.add_row(
            str(index),
            f"[{priority_color}]{item.priority.value}[/{priority_color}]",
            item.title,
            f"[{impact_color}]{item.impact.value}[/{impact_color}]",
            item.description,
        )
    console.print(roadmap_table)

    if verbose:
        metrics_table = Table(title="\nRepository Metrics", show_header=False)
        metrics_table.add_column("Metric", style="cyan", no_wrap=True)
        metrics_table.add_column("Value")
        metrics_table.add_row("Commit frequency", report.metrics.commit_frequency)
        metrics_table.add_row(
            "Estimated contributors", str(report.metrics.contributor_estimate)
        )
        metrics_table.add_row("Issue response time", report.metrics.issue_response)
        metrics_table.add_row("Code complexity", report.metrics.complexity)
        console.print(metrics_table)
        console.print(f"[dim]Generated at {report.generated_at.isoformat()}[/dim]")


@app.callback()
def main():
    """GitGrade repository quality assessment."""


@app.command()
def analyze(
    repository: str = typer.Argument(
        ...,
        help="Repository to grade: a GitHub URL (https://github.com/owner/repo) or 'owner/repo'.",
    ),
    input_file: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="Read the repository record from a JSON file instead of the GitHub API.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as a JSON document.",
    ),
    no_fallback: bool = typer.Option(
        False,
        "--no-fallback",
        help="Fail instead of grading the fallback profile when the GitHub API is unavailable.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Display derived repository metrics.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
):
    """Analyze a repository and print its grade, insights and roadmap."""
    try:
        owner, repo = parse_repository_url(repository)
    except ValueError as e:
        err_console.print(f"[yellow]⚠️  {escape(str(e))}[/yellow]")
        raise typer.Exit(code=1) from None

    if input_file:
        try:
            record = load_record_file(input_file)
        except ValueError as e:
            err_console.print(f"[yellow]⚠️  {escape(str(e))}[/yellow]")
            raise typer.Exit(code=1) from None
        # Explicit nulls get the identity from the argument too
        if record.get("name") is None:
            record["name"] = repo
        if record.get("owner") is None:
            record["owner"] = {"login": owner}
    else:
        set_verify_ssl(not insecure)
        try:
            use_fallback = not no_fallback and is_fallback_enabled()
        except ValueError as e:
            err_console.print(f"[yellow]⚠️  {escape(str(e))}[/yellow]")
            raise typer.Exit(code=1) from None
        if not as_json:
            err_console.print(f"🔍 Fetching [bold]{owner}/{repo}[/bold]...")
        try:
            record = fetch_repository_record(owner, repo, use_fallback=use_fallback)
        except RetrievalError as e:
            err_console.print(
                f"[yellow]⚠️  Unable to fetch {owner}/{repo}: {escape(str(e))}[/yellow]"
            )
            raise typer.Exit(code=1) from None
        finally:
            close_http_client()

    now = datetime.now(timezone.utc)
    try:
        report = assemble(record, now)
    except InvalidInputError as e:
        err_console.print(
            f"[yellow]⚠️  Unable to grade {owner}/{repo}: {escape(str(e))}[/yellow]"
        )
        raise typer.Exit(code=1) from None

    if as_json:
        typer.echo(report_to_json(report))
    else:
        display_report(report, verbose=verbose)


if __name__ == "__main__":
    app()
