"""
Cosmos DB Geospatial Demo - console entry point.

Subcommands:
    setup                 Provision database/container and import the dataset
    query <scenario>      Run one canned spatial query
    menu                  Interactive scenario menu (default)

Examples:
  # Interactive menu
  cosmos-geospatial

  # Provision and import
  COSMOS_CONNECTION_STRING="AccountEndpoint=...;AccountKey=..." \\
  GEOSPATIAL_DATA_FILE=data/meteorites.json cosmos-geospatial setup

  # One query
  cosmos-geospatial query proximity
"""

import argparse
import sys
from typing import Callable, Dict, Optional, Sequence

from azure.cosmos.exceptions import CosmosHttpResponseError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config import AppConfig, get_config
from core.models import QueryScenario, SetupReport, QueryResult
from core.spatial_queries import build_query
from exceptions import BusinessLogicError, ConfigurationError
from infrastructure import RepositoryFactory
from services import ProvisioningService, QueryService
from util_logger import LoggerFactory, ComponentType, format_elapsed

logger = LoggerFactory.create_logger(ComponentType.CONSOLE, "DemoConsole")

console = Console()

RULE = "-" * 69

MENU_CHOICES = {
    "0": ("Scenario 0: Setup Cosmos resources and import data", None),
    "1": ("Scenario 1: Perform a proximity query against spatial data", QueryScenario.PROXIMITY),
    "2": ("Scenario 2: Perform a query to check if a point lies within a Polygon", QueryScenario.POLYGON),
    "3": ("Scenario 3: Perform a query to check if a spatial object is valid", QueryScenario.VALIDATE),
    "4": ("Scenario 4: Perform a query to validate a Polygon that is not closed", QueryScenario.VALIDATE_DETAILED),
}

EXIT_KEYS = {"q", "esc", "exit", "quit"}


# ─── Rendering ──────────────────────────────────────────────────────────────

def print_prompt() -> None:
    console.print(RULE)
    console.print("\nPress for demo scenario:\n")
    for key, (label, _) in MENU_CHOICES.items():
        console.print(f"{key} - {label}")
    console.print(RULE)
    console.print("\nType q to exit.\n")


def render_setup(report: SetupReport) -> None:
    batch = report.batch
    console.print(f"\tImport of items into {report.container_name} container completed "
                  f"with total time: {format_elapsed(batch.elapsed_seconds)}")
    console.print(f"\tSubmitted {batch.submitted} items")
    console.print(f"\tInserted {batch.succeeded} items", style="green")
    if batch.failed:
        console.print(f"\tFailed {batch.failed} items", style="red")
        table = Table(title="First failures", show_lines=False)
        table.add_column("id")
        table.add_column("error")
        for outcome in batch.failures[:10]:
            table.add_row(outcome.record_id, outcome.error or "")
        console.print(table)
    if batch.cancelled:
        console.print(f"\tImport cancelled with {batch.unresolved} items unresolved", style="yellow")
    if report.final_throughput is not None:
        console.print(f"\tScaled container down to minimum {report.final_throughput} RU/s\n")


def render_query(result: QueryResult, container_name: str, display_text: Optional[str] = None) -> None:
    """Print the query (parameters inlined when display_text is given) and its results."""
    console.print(Panel(
        Text(display_text or result.query_text),
        title=f"Query against container {container_name}",
        style="blue"
    ))
    for item in result.items:
        console.print_json(data=item)
    console.print(f"\tQuery returned {result.count} results", style="green")
    console.print(f"\tTotal time: {format_elapsed(result.elapsed_seconds)}", style="green")
    console.print(f"\tTotal Request Units consumed: {result.request_charge}\n", style="green")


# ─── Actions ────────────────────────────────────────────────────────────────

class DemoActions:
    """Binds configuration and a store to the menu actions."""

    def __init__(self, config: AppConfig, store=None):
        self.config = config
        self.store = store or RepositoryFactory.create_cosmos_repository(config.cosmos)

    def setup(self) -> SetupReport:
        console.print("Running setup...\n", style="yellow on blue")
        console.print("\nStarting data import: this will take a few seconds...\n", style="yellow on blue")
        report = ProvisioningService(self.store, self.config).setup_resources()
        render_setup(report)
        return report

    def query(self, scenario: QueryScenario) -> QueryResult:
        query = build_query(scenario)
        result = QueryService(self.store, self.config.query).run_query(query)
        render_query(result, self.config.cosmos.container_name, query.rendered())
        return result


def run_menu(actions: DemoActions, read_choice: Optional[Callable[[], str]] = None) -> None:
    """
    Loop over the scenario menu until an exit key is entered.

    A failing scenario is reported and the loop continues.
    """
    read_choice = read_choice or (lambda: console.input("> "))
    while True:
        print_prompt()
        try:
            choice = read_choice().strip().lower()
        except EOFError:
            # stdin closed
            choice = "q"

        if choice in EXIT_KEYS:
            console.print("Exiting...")
            return
        if choice not in MENU_CHOICES:
            console.print("Select choice")
            continue

        _, scenario = MENU_CHOICES[choice]
        try:
            if scenario is None:
                actions.setup()
            else:
                actions.query(scenario)
        except (BusinessLogicError, CosmosHttpResponseError) as e:
            report_error(e)
        except KeyboardInterrupt:
            console.print("Interrupted - back to menu", style="yellow")


def report_error(error: Exception) -> None:
    if isinstance(error, CosmosHttpResponseError):
        console.print(f"{error.status_code} error occurred: {error.message}", style="red")
    else:
        console.print(f"Error: {error}", style="red")
    logger.error(f"Scenario failed: {type(error).__name__}: {error}")


# ─── CLI ────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cosmos-geospatial",
        description="Azure Cosmos DB geospatial demo - spatial indexing, bulk import, spatial queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if "Examples:" in __doc__ else None,
    )
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("setup", help="Provision resources and import the dataset")
    query = sub.add_parser("query", help="Run one canned spatial query")
    query.add_argument("scenario", choices=[s.value for s in QueryScenario])
    sub.add_parser("menu", help="Interactive scenario menu")
    return parser


def main(argv: Optional[Sequence[str]] = None, actions: Optional[DemoActions] = None) -> int:
    args = build_parser().parse_args(argv)
    command = args.command or "menu"

    try:
        actions = actions or DemoActions(get_config())
    except ConfigurationError as e:
        console.print(f"Configuration error: {e}", style="red")
        return 2

    handlers: Dict[str, Callable[[], object]] = {
        "setup": actions.setup,
        "query": lambda: actions.query(QueryScenario(args.scenario)),
        "menu": lambda: run_menu(actions),
    }

    try:
        handlers[command]()
    except (BusinessLogicError, CosmosHttpResponseError) as e:
        report_error(e)
        return 1
    except KeyboardInterrupt:
        console.print("Interrupted", style="yellow")
        return 130
    finally:
        console.print("End of demo.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
