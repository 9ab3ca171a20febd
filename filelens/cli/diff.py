"""CLI for aligning two corpus files side by side."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from filelens.cli.common import init_settings, load_corpus_or_exit
from filelens.errors import InvalidArgumentError
from filelens.utils.io import ensure_parent_dir
from filelens.viz.diffview import Alignment, LineRecord, align

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Show an aligned side-by-side diff of two corpus files.",
)

_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

_MARKERS = {
    "same": " ",
    "removed": "-",
    "added": "+",
    "changed": "~",
}


@app.callback()
def diff(
    corpus: Path = typer.Option(..., "--corpus", exists=True, readable=True, path_type=Path, help="Corpus JSON"),
    left: str = typer.Option(..., "--left", help="Path of the left file inside the corpus"),
    right: str = typer.Option(..., "--right", help="Path of the right file inside the corpus"),
    mode: Optional[str] = typer.Option(None, "--mode", help="lcs, pairwise or auto"),
    html: Optional[Path] = typer.Option(None, "--html", path_type=Path, help="Write an HTML report to this path"),
    width: int = typer.Option(60, "--width", min=8, help="Column width of the text view"),
    config: Optional[Path] = typer.Option(None, "--config", path_type=Path, help="Settings YAML"),
) -> None:
    """Align ``left`` against ``right``."""

    settings = init_settings(config)
    data = load_corpus_or_exit(corpus)

    for path in (left, right):
        if path not in data:
            typer.secho(f"[ERROR] Path '{path}' is not in the corpus", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    try:
        alignment = align(
            data[left],
            data[right],
            mode=mode or settings.align_mode,
            lcs_cell_limit=settings.lcs_cell_limit,
        )
    except InvalidArgumentError as exc:
        typer.secho(f"[ERROR] {exc.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if html is not None:
        _render_html(_build_report_payload(left, right, alignment), html)
        typer.echo(f"HTML diff written to {html}")
        return

    typer.echo(render_text(alignment, width=width))


def render_text(alignment: Alignment, *, width: int = 60) -> str:
    """Render ``alignment`` as two fixed-width columns."""

    lines: List[str] = []
    for left_record, right_record in alignment.rows():
        lines.append(f"{_cell(left_record, width)} | {_cell(right_record, width)}".rstrip())
    return "\n".join(lines)


def _cell(record: LineRecord, width: int) -> str:
    if record.is_placeholder:
        return "".ljust(width)
    text = record.text.expandtabs(4)
    if len(text) > width - 2:
        text = text[: width - 3] + "…"
    return f"{_MARKERS.get(record.kind, ' ')} {text}".ljust(width)


def _build_report_payload(left_path: str, right_path: str, alignment: Alignment) -> Dict[str, Any]:
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "left_path": left_path,
        "right_path": right_path,
        "mode": alignment.mode,
        "stats": alignment.stats(),
        "rows": alignment.rows(),
    }


def _render_html(report_payload: Dict[str, Any], destination: Path) -> None:
    try:
        template = _ENV.get_template("diff.html.j2")
    except TemplateNotFound as exc:
        typer.echo("Error: missing template diff.html.j2", err=True)
        raise typer.Exit(code=1) from exc
    output = template.render(report=report_payload)
    path = ensure_parent_dir(destination)
    path.write_text(output, encoding="utf-8")


__all__ = ["app", "diff", "render_text"]
