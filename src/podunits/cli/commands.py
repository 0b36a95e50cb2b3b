"""Command implementations for CLI."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from podunits.errors import PodunitsError
from podunits.generator.config import ConfigManager
from podunits.generator.engine import GenerationEngine
from podunits.generator.units import container_unit_name, pod_unit_name


console = Console()


def validate_config(manager: ConfigManager):
    """Validate configuration by running the full link step."""
    linked = GenerationEngine.from_manager(manager).link()

    console.print("[green]✓[/green] Configuration is valid")
    console.print(f"  Pods: {len(manager.pods)}")
    console.print(f"  Containers: {len(linked.containers)}")


def list_resources(manager: ConfigManager):
    """List pods and containers with formatted output."""
    linked = GenerationEngine.from_manager(manager).link()

    table = Table(title="Pods")
    table.add_column("Name", style="cyan")
    table.add_column("Unit")
    table.add_column("Members", style="magenta")
    table.add_column("Published", style="dim")

    for name in sorted(manager.pods):
        pod = manager.pods[name]
        table.add_row(
            name,
            pod_unit_name(name),
            ", ".join(sorted(pod.containers)) or "-",
            escape(", ".join(pod.publish)) or "-",
        )

    console.print(table)
    console.print()

    table = Table(title="Containers")
    table.add_column("Name", style="cyan")
    table.add_column("Unit")
    table.add_column("Image", style="magenta")
    table.add_column("Depends On")
    table.add_column("Autostart")

    for name in sorted(linked.containers):
        container = linked.containers[name]
        table.add_row(
            name,
            container_unit_name(name),
            escape(container.image),
            ", ".join(container.depends_on) or "-",
            "[green]●[/green]" if container.autostart else "[red]○[/red]",
        )

    console.print(table)


def show_units(manager: ConfigManager, unit: Optional[str] = None):
    """Print rendered unit files."""
    rendered = GenerationEngine.from_manager(manager).render()

    if unit:
        if not unit.endswith(".service"):
            unit = f"{unit}.service"
        if unit not in rendered:
            raise PodunitsError(f"Unit {unit} not found")
        rendered = {unit: rendered[unit]}

    for name, content in rendered.items():
        console.print(f"[bold]{name}[/bold]")
        console.print(content, markup=False, highlight=False, soft_wrap=True, end="")


def generate_units(manager: ConfigManager, output: Optional[Path] = None):
    """Write unit files to the output directory."""
    output_dir = Path(output or manager.config.generator.output_dir)
    result = GenerationEngine.from_manager(manager).write(output_dir)

    for path in result.written:
        console.print(f"  [green]✓[/green] {path.name}")
    console.print(
        f"[green]✓[/green] Wrote {len(result.written)} unit(s) to {output_dir}, "
        f"{len(result.unchanged)} unchanged"
    )
