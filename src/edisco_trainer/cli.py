"""Typer CLI entry points for the review trainer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click
import typer
from loguru import logger

from .coding_store import CodingPersistenceError, CodingStore
from .filters import filter_options
from .formatting import format_display_date, format_saved_status
from .log import DEFAULT_LOG_LEVEL, LOG_LEVEL_CHOICES, configure_logger
from .schemas.coding import PRIVILEGE_CODES, RESPONSIVENESS_CODES, CodingForm
from .schemas.documents import Document
from .schemas.review import FILTER_FIELDS, FilterCriteria
from .session import ReviewSession
from .stores import DirectoryStore
from .synth_corpus import DEFAULT_CORPUS_SIZE, generate_corpus, load_corpus, write_corpus

DATA_DIR = Path("data")
DEFAULT_STORE_DIR = DATA_DIR / "store"
DEFAULT_CORPUS_PATH = DATA_DIR / "corpus.jsonl"

RESET_PROMPT = "This clears all saved coding in the store directory. Continue?"
SHORTCUTS = {"j": "next", "k": "prev"}
REVIEW_HELP = (
    "Commands: j next | k prev | g ID select | / TEXT query | f FIELD=VALUE filter | "
    "c clear filters | s save coding | e export | r reset coding | ? help | q quit"
)

app = typer.Typer(help="Mini e-discovery review trainer CLI.")


@dataclass
class CliState:
    store_dir: Path
    count: int
    corpus_path: Optional[Path] = None

    def open_session(self) -> ReviewSession:
        store = CodingStore(DirectoryStore(self.store_dir))
        if self.corpus_path is not None:
            corpus = load_corpus(self.corpus_path)
        else:
            corpus = generate_corpus(self.count)
        return ReviewSession(corpus, store)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _check_code(value: str, choices: tuple[str, ...], name: str) -> str:
    if value not in choices:
        raise typer.BadParameter(f"{name} must be one of: {', '.join(choices)}")
    return value


def _render_row(session: ReviewSession, doc: Document) -> str:
    marker = ">" if doc.id == session.selected_id else " "
    return " | ".join(
        [
            f"{marker} {doc.id}",
            doc.title,
            doc.custodian,
            doc.doctype,
            format_display_date(doc.date),
            doc.tag,
            session.coding_summary(doc.id),
        ]
    )


def _render_document(session: ReviewSession, doc: Document) -> None:
    typer.echo(f"[{doc.id}] {doc.title}")
    typer.echo(
        f"Custodian: {doc.custodian} • Type: {doc.doctype} • Date: {format_display_date(doc.date)}"
    )
    typer.echo(
        f"Training Tag: {doc.tag} • Training Privilege: {doc.privilege} • "
        f"Training Responsive: {doc.responsive}"
    )
    typer.echo("")
    typer.echo(doc.body)
    typer.echo("")
    typer.echo(format_saved_status(session.store.get(doc.id)))


def _render_selection(session: ReviewSession) -> None:
    doc = session.selected_document
    if doc is None:
        typer.echo("Select a document.")
        return
    _render_document(session, doc)


def _save(session: ReviewSession, form: CodingForm) -> None:
    try:
        record = session.save_coding(form)
    except CodingPersistenceError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    if record is None:
        typer.echo("No document selected; nothing saved.")
        return
    typer.echo(f"{session.selected_id}: {format_saved_status(record)}")


def _reset(session: ReviewSession, skip_confirm: bool = False) -> None:
    def confirm() -> bool:
        return skip_confirm or typer.confirm(RESET_PROMPT)

    try:
        cleared = session.reset_coding(confirm)
    except CodingPersistenceError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo("Coding cleared." if cleared else "Reset cancelled.")


def _export(session: ReviewSession, output: Path | None) -> Path | None:
    """Write the CSV export; report failures and return None."""
    export = session.export_csv()
    target = output or Path(export.filename)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(export.content, encoding="utf-8", newline="")
    except OSError as exc:
        logger.error("cli:export_error | path={} | {}", target, exc)
        typer.echo(f"Error: could not write {target}: {exc}", err=True)
        return None
    typer.echo(f"Wrote {len(session.corpus)} rows to {target}")
    return target


@app.callback()
def main(
    ctx: typer.Context,
    store_dir: Path = typer.Option(
        DEFAULT_STORE_DIR,
        "--store-dir",
        "-s",
        file_okay=False,
        dir_okay=True,
        help="Directory holding the saved coding.",
    ),
    count: int = typer.Option(
        DEFAULT_CORPUS_SIZE,
        "--count",
        "-n",
        min=0,
        help="Number of mock documents in the corpus.",
    ),
    corpus_path: Optional[Path] = typer.Option(
        None,
        "--corpus",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Review a corpus JSONL written by synth-corpus instead of generating one.",
    ),
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL,
        "--log-level",
        help=f"Log verbosity ({', '.join(LOG_LEVEL_CHOICES)}).",
        case_sensitive=False,
    ),
) -> None:
    """Mini e-discovery review trainer CLI."""
    if log_level.upper() not in LOG_LEVEL_CHOICES:
        raise typer.BadParameter(f"Unsupported log level '{log_level}'.")
    configure_logger(log_level)
    logger.debug("cli:start | store_dir={} | count={}", store_dir, count)
    ctx.obj = CliState(store_dir=store_dir, count=count, corpus_path=corpus_path)


@app.command("synth-corpus")
def synth_corpus_cli(
    ctx: typer.Context,
    output: Path = typer.Option(
        DEFAULT_CORPUS_PATH,
        "--output",
        "-o",
        file_okay=True,
        dir_okay=False,
        writable=True,
        resolve_path=True,
        help="Destination JSONL file.",
    ),
) -> None:
    """Write the mock corpus as JSON Lines."""
    corpus = write_corpus(output, count=_state(ctx).count)
    typer.echo(f"Wrote {len(corpus)} documents to {output}")


@app.command("list")
def list_cli(
    ctx: typer.Context,
    query: str = typer.Option("", "--query", "-q", help="Free-text search over id, title and body."),
    custodian: str = typer.Option("", "--custodian", help="Exact custodian."),
    doctype: str = typer.Option("", "--doctype", help="Exact document type."),
    tag: str = typer.Option("", "--tag", help="Exact training tag."),
    privilege: str = typer.Option("", "--privilege", help="Privilege ground truth."),
    responsive: str = typer.Option("", "--responsive", help="Responsiveness ground truth."),
) -> None:
    """List documents matching the filters."""
    session = _state(ctx).open_session()
    session.set_criteria(
        FilterCriteria(
            query=query,
            custodian=custodian,
            doctype=doctype,
            tag=tag,
            privilege=privilege,
            responsive=responsive,
        )
    )
    for doc in session.filtered_view:
        typer.echo(_render_row(session, doc))
    typer.echo(session.list_meta())


@app.command("options")
def options_cli(ctx: typer.Context) -> None:
    """Show the values available to each filter."""
    session = _state(ctx).open_session()
    for field, values in filter_options(session.corpus).items():
        typer.echo(f"{field}: {', '.join(values)}")


@app.command("show")
def show_cli(ctx: typer.Context, doc_id: str = typer.Argument(..., help="Document id, e.g. DOC-0001.")) -> None:
    """Display one document with its coding status."""
    session = _state(ctx).open_session()
    doc = session.get_document(doc_id)
    if doc is None:
        raise typer.BadParameter(f"Unknown document '{doc_id}'.")
    _render_document(session, doc)


@app.command("code")
def code_cli(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., help="Document id to code."),
    resp: str = typer.Option("Unreviewed", "--resp", help="Responsiveness code."),
    priv: str = typer.Option("Unreviewed", "--priv", help="Privilege code."),
    issues: str = typer.Option("", "--issues", help="Issue tags."),
    notes: str = typer.Option("", "--notes", help="Reviewer notes."),
) -> None:
    """Save coding for a document."""
    session = _state(ctx).open_session()
    if not session.select(doc_id):
        raise typer.BadParameter(f"Unknown document '{doc_id}'.")
    form = CodingForm(
        resp=_check_code(resp, RESPONSIVENESS_CODES, "--resp"),
        priv=_check_code(priv, PRIVILEGE_CODES, "--priv"),
        issues=issues,
        notes=notes,
    )
    _save(session, form)


@app.command("stats")
def stats_cli(ctx: typer.Context) -> None:
    """Show corpus size and coded count."""
    stats = _state(ctx).open_session().stats
    typer.echo(f"Showing: {stats.showing}/{stats.total}")
    typer.echo(f"Coded: {stats.coded}")


@app.command("export")
def export_cli(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        dir_okay=False,
        help="Destination CSV. Defaults to a dated file in the current directory.",
    ),
) -> None:
    """Export every document with its coding as CSV."""
    session = _state(ctx).open_session()
    if _export(session, output) is None:
        raise typer.Exit(code=1)


@app.command("reset")
def reset_cli(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Clear all saved coding."""
    session = _state(ctx).open_session()
    _reset(session, skip_confirm=yes)


def _apply_field_filter(session: ReviewSession, argument: str) -> None:
    field, sep, value = argument.partition("=")
    field = field.strip()
    if not sep or field not in FILTER_FIELDS:
        typer.echo(f"Usage: f FIELD=VALUE with FIELD in {', '.join(FILTER_FIELDS)}")
        return
    session.set_criteria(session.criteria.model_copy(update={field: value.strip()}))


def _prompt_form(session: ReviewSession) -> CodingForm:
    current = session.form_for(session.selected_id) if session.selected_id else CodingForm()
    resp = typer.prompt(
        "Responsiveness",
        default=current.resp,
        type=click.Choice(list(RESPONSIVENESS_CODES)),
    )
    priv = typer.prompt(
        "Privilege",
        default=current.priv,
        type=click.Choice(list(PRIVILEGE_CODES)),
    )
    issues = typer.prompt("Issues", default=current.issues, show_default=bool(current.issues))
    notes = typer.prompt("Notes", default=current.notes, show_default=bool(current.notes))
    return CodingForm(resp=resp, priv=priv, issues=issues, notes=notes)


@app.command("review")
def review_cli(ctx: typer.Context) -> None:
    """Interactive review loop with j/k navigation."""
    session = _state(ctx).open_session()
    typer.echo(REVIEW_HELP)
    _render_selection(session)

    while True:
        stats = session.stats
        raw = typer.prompt(
            f"[{stats.showing}/{stats.total} shown, {stats.coded} coded]",
            default="",
            show_default=False,
        ).strip()
        if not raw:
            continue
        command, _, argument = raw.partition(" ")
        argument = argument.strip()

        if command in SHORTCUTS:
            getattr(session, SHORTCUTS[command])()
            _render_selection(session)
        elif command == "g":
            if session.select(argument):
                _render_selection(session)
            else:
                typer.echo(f"Unknown document '{argument}'.")
        elif command == "/":
            session.set_criteria(session.criteria.model_copy(update={"query": argument}))
            typer.echo(session.list_meta())
        elif command == "f":
            _apply_field_filter(session, argument)
            typer.echo(session.list_meta())
        elif command == "c":
            session.clear_criteria()
            typer.echo(session.list_meta())
        elif command == "s":
            if session.selected_id is None:
                typer.echo("No document selected; nothing saved.")
                continue
            _save(session, _prompt_form(session))
        elif command == "e":
            _export(session, None)
        elif command == "r":
            _reset(session)
        elif command == "?":
            typer.echo(REVIEW_HELP)
        elif command == "q":
            break
        else:
            typer.echo(f"Unknown command '{raw}'. Type ? for help.")


def run() -> None:
    """Entrypoint when invoking via `python -m` or the console script."""
    app()


if __name__ == "__main__":
    run()
