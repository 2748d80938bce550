"""Main CLI interface using Typer."""

from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..api import AdvisorService
from ..config import DEFAULT_CLUSTER_ID, AdvisorSettings
from ..core import ImpactReporter
from ..model.assessment import ImpactLevel
from ..model.report import ReportFormat
from ..utils.logger import get_logger

# Create CLI app
app = typer.Typer(
    name="kube-upgrade-advisor",
    help="Assess Kubernetes upgrade impact and plan remediation",
    add_completion=True,
)

console = Console()
logger = get_logger(__name__)

RISK_COLORS = {
    ImpactLevel.NONE: "green",
    ImpactLevel.LOW: "green",
    ImpactLevel.MEDIUM: "yellow",
    ImpactLevel.HIGH: "red",
    ImpactLevel.CRITICAL: "bold red",
}

EXTENSIONS = {
    ReportFormat.TEXT: "txt",
    ReportFormat.JSON: "json",
    ReportFormat.YAML: "yaml",
}

InventoryOption = typer.Option(
    ...,
    "--inventory",
    "-i",
    envvar="INVENTORY_PATH",
    help="Inventory snapshot file (YAML or JSON)",
)
ClusterOption = typer.Option(
    DEFAULT_CLUSTER_ID, "--cluster", "-c", envvar="CLUSTER_ID", help="Cluster id to analyze"
)
ApiKnowledgeOption = typer.Option(
    None,
    "--api-knowledge",
    envvar="API_KNOWLEDGE_PATH",
    help="API deprecation knowledge base (default: built-in data)",
)
ChartKnowledgeOption = typer.Option(
    None,
    "--chart-knowledge",
    envvar="CHART_KNOWLEDGE_PATH",
    help="Chart compatibility knowledge base (default: built-in data)",
)


def _build_service(
    inventory: Path,
    cluster: str = DEFAULT_CLUSTER_ID,
    api_knowledge: Optional[Path] = None,
    chart_knowledge: Optional[Path] = None,
) -> AdvisorService:
    settings = AdvisorSettings.from_env().model_copy(
        update={
            "inventory_path": inventory,
            "default_cluster_id": cluster,
            "api_knowledge_path": api_knowledge,
            "chart_knowledge_path": chart_knowledge,
        }
    )
    return AdvisorService(settings)


@app.command()
def impact(
    target: str = typer.Option(..., "--target", "-t", help="Target Kubernetes version"),
    inventory: Path = InventoryOption,
    cluster: str = ClusterOption,
    api_knowledge: Optional[Path] = ApiKnowledgeOption,
    chart_knowledge: Optional[Path] = ChartKnowledgeOption,
    format: ReportFormat = typer.Option(
        ReportFormat.TEXT, "--format", "-f", help="Format for the impact report"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory to save the report in"
    ),
):
    """Analyze upgrade impact and print the report with its upgrade plan."""
    try:
        service = _build_service(inventory, cluster, api_knowledge, chart_knowledge)
        result = service.plan(target, cluster)

        report_content = ImpactReporter().render(result, result.upgrade_plan, format)

        if output:
            output.mkdir(parents=True, exist_ok=True)
            report_path = output / f"impact-report.{EXTENSIONS[format]}"
            with open(report_path, "w") as f:
                f.write(report_content)
            console.print(f"[green]✓[/green] Report saved to: [cyan]{report_path}[/cyan]")

        typer.echo(report_content)

    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def plan(
    target: str = typer.Option(..., "--target", "-t", help="Target Kubernetes version"),
    inventory: Path = InventoryOption,
    cluster: str = ClusterOption,
    api_knowledge: Optional[Path] = ApiKnowledgeOption,
    chart_knowledge: Optional[Path] = ChartKnowledgeOption,
    show_actions: bool = typer.Option(
        False, "--actions/--no-actions", help="List the actions of each step"
    ),
):
    """Print the ordered upgrade plan."""
    try:
        service = _build_service(inventory, cluster, api_knowledge, chart_knowledge)
        result = service.plan(target, cluster)
        upgrade_plan = result.upgrade_plan

        color = RISK_COLORS.get(result.overall_risk, "white")
        console.print(
            f"\n[bold]Upgrade plan:[/bold] {upgrade_plan.from_version} → {upgrade_plan.to_version}"
        )
        console.print(f"Overall risk: [{color}]{result.overall_risk.value.upper()}[/{color}]")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Step", style="green")
        table.add_column("Type", style="white")
        table.add_column("Impact", style="white")
        table.add_column("Depends On", style="dim")

        for step in upgrade_plan.steps:
            impact_color = RISK_COLORS.get(step.impact, "white")
            table.add_row(
                str(step.order + 1),
                step.description,
                step.type.value,
                f"[{impact_color}]{step.impact.value}[/{impact_color}]",
                ", ".join(step.dependencies),
            )
        console.print(table)

        if show_actions:
            for step in upgrade_plan.steps:
                console.print(f"\n[bold]{step.order + 1}. {step.id}[/bold]")
                for action in step.actions:
                    console.print(f"  ➤ {action.command}  [dim]{action.description}[/dim]")

        console.print(f"\nEstimated timeline: [cyan]{upgrade_plan.timeline}[/cyan]")

    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def clusters(inventory: Path = InventoryOption):
    """List clusters in the inventory snapshot."""
    try:
        service = _build_service(inventory)
        inventories = service.list_clusters()

        if not inventories:
            console.print("[yellow]No clusters found in inventory[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="green")
        table.add_column("Version", style="white")
        table.add_column("Helm Releases", justify="right")
        table.add_column("CRDs", justify="right")
        table.add_column("Manifest APIs", justify="right")

        for cluster in inventories:
            table.add_row(
                cluster.cluster_id,
                cluster.name or "",
                cluster.current_version,
                str(len(cluster.helm_releases)),
                str(len(cluster.crds)),
                str(len(cluster.manifest_apis)),
            )
        console.print(table)

    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command(name="inventory")
def show_inventory(inventory: Path = InventoryOption, cluster: str = ClusterOption):
    """Show the inventory of one cluster."""
    try:
        service = _build_service(inventory, cluster)
        cluster_inventory = service.get_cluster(cluster)

        console.print(f"[bold]Cluster:[/bold] {cluster_inventory.cluster_id}")
        console.print(f"[bold]Version:[/bold] {cluster_inventory.current_version}\n")

        console.print(f"[bold]Helm Releases ({len(cluster_inventory.helm_releases)}):[/bold]")
        for release in cluster_inventory.helm_releases:
            console.print(
                f"  - {release.namespace}/{release.release_name} "
                f"(chart: {release.chart_name}-{release.current_chart_version})"
            )

        console.print(f"\n[bold]CRDs ({len(cluster_inventory.crds)}):[/bold]")
        for crd in cluster_inventory.crds:
            console.print(
                f"  - {crd.name} (group: {crd.group}, kind: {crd.kind}, "
                f"served: {', '.join(crd.served_versions)})"
            )

        api_counts = Counter()
        for usage in cluster_inventory.manifest_apis:
            group_version = f"{usage.group}/{usage.version}" if usage.group else usage.version
            api_counts[f"{group_version} {usage.kind}"] += usage.count

        console.print(f"\n[bold]Manifest APIs ({len(api_counts)}):[/bold]")
        for api, count in api_counts.items():
            console.print(f"  - {api} (count: {count})")

    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    console.print("[bold]kube-upgrade-advisor[/bold] version 0.1.0")
    console.print("Kubernetes upgrade impact analysis and remediation planning")


if __name__ == "__main__":
    app()
