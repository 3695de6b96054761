"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import BuildReport, StepResult
from core.domain.recipe import Recipe
from core.services.site_check import SiteCheckResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivarlo con `--quiet` en CI.
    """

    title = Text("blog-pipeline", style="bold cyan")
    subtitle = Text("styles • site • package • deploy", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(0, 4)))


def build_recipes_table() -> Table:
    table = Table(title="Available recipes")
    table.add_column("Recipe", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    for recipe in Recipe:
        table.add_row(recipe.value, recipe.description())
    return table


def step_status(result: StepResult) -> Text:
    if result.ok:
        return Text("OK", style="green")
    if result.timed_out:
        return Text("TIMEOUT", style="red")
    return Text(f"FAIL ({result.returncode})", style="red")


def build_report_table(report: BuildReport) -> Table:
    table = Table(title=f"Recipe: {report.recipe.value}")
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Time", justify="right", style="dim")
    table.add_column("Command", style="magenta")
    for step in report.steps:
        table.add_row(step.name, step_status(step), f"{step.duration_seconds:.2f}s", " ".join(step.argv))
    return table


def build_check_panel(result: SiteCheckResult) -> Panel:
    body = Text()
    body.append(f"Pages scanned: {result.audit.pages_scanned}\n")
    body.append(f"Classes used: {len(result.audit.classes_used)}\n")
    body.append(f"Files: {len(result.manifest)}  digest {result.manifest.digest[:16]}\n")

    if result.audit.missing_classes:
        body.append("\nClasses missing from the stylesheet:\n", style="bold red")
        for cls, pages in result.audit.missing_classes.items():
            shown = ", ".join(pages[:3]) + (" …" if len(pages) > 3 else "")
            body.append(f"- {cls}  ({shown})\n")

    if result.drift is not None:
        if result.drift.identical:
            body.append("\nOutput identical to the reference manifest\n", style="green")
        else:
            body.append("\nOutput differs from the reference manifest:\n", style="bold red")
            for label, paths in (("+", result.drift.added), ("-", result.drift.removed), ("~", result.drift.changed)):
                for path in paths:
                    body.append(f"{label} {path}\n")

    for note in result.notes:
        body.append(f"\n{note}", style="yellow")

    border = "green" if result.ok else "red"
    return Panel(body, title=Text("Site check", style="bold"), border_style=border)
