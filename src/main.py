"""
Command-line front end for TreeDown family trees.

1) Read an indented TreeDown text file.
2) Parse it into individuals and relationship edges.
3) Validate the result and report warnings.
4) Explore derived views: root, family/ancestor/descendant trees, unions,
   kinship between two people, and name search.

This is the only module that touches the filesystem or the terminal.
"""

import json
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.tree import Tree
import typer

from assembler import import_text
from graph import select_root
from kinship import find_kinship
from models import Individual, ParseResult, TreeNode
from search import search_individuals
from unions import format_union_date_range, resolve_unions, union_label
from validation import validate_graph
from views import ancestor_subgraph, descendant_subgraph, family_tree


app = typer.Typer(
    name="treedown",
    help="TreeDown - parse indented family trees and explore relationships",
    add_completion=False,
)
console = Console()

MAX_WARNINGS_SHOWN = 10


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def load(path: Path) -> ParseResult:
    """Read and parse a TreeDown file, exiting if it names nobody."""
    result = import_text(path.read_text(encoding="utf-8"))
    if not result.individuals:
        for warning in result.warnings:
            console.print(f"[red]{warning}[/red]")
        raise typer.Exit(1)
    return result


def find_person(result: ParseResult, name: str) -> Individual:
    """Resolve a name typed on the command line to exactly one individual."""
    exact = [p for p in result.individuals if p.display_name.casefold() == name.casefold()]
    if len(exact) == 1:
        return exact[0]

    matches = exact or [m.individual for m in search_individuals(result.individuals, name)]
    if not matches:
        console.print(f"[red]Nobody named {name!r} in this tree.[/red]")
        raise typer.Exit(1)
    if len(matches) > 1:
        console.print(f"[yellow]{name!r} is ambiguous:[/yellow]")
        for p in matches:
            console.print(f"  {p.id}  {describe(p)}")
        raise typer.Exit(1)
    return matches[0]


def describe(person: Individual) -> str:
    if person.birth_year is None and person.death_year is None:
        return person.display_name
    birth = person.birth_year if person.birth_year is not None else "?"
    death = person.death_year if person.death_year is not None else ""
    return f"{person.display_name} ({birth}-{death})"


def add_branches(branch: Tree, nodes: list[TreeNode]) -> None:
    stack = [(branch, node) for node in reversed(nodes)]
    while stack:
        parent, node = stack.pop()
        label = node.name
        if node.union_with is not None:
            label = f"[dim]{union_label(node.union_type)}[/dim] {node.name}"
        child_branch = parent.add(label)
        stack.extend((child_branch, child) for child in reversed(node.children))


def print_forest(title: str, nodes: list[TreeNode]) -> None:
    if not nodes:
        console.print("[dim]Nothing to show.[/dim]")
        return
    root = Tree(f"[bold]{title}[/bold]")
    add_branches(root, nodes)
    console.print(root)


@app.command("import")
def import_file(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="TreeDown text file"),
    as_json: bool = typer.Option(False, "--json", help="Print the parse result as JSON"),
) -> None:
    """Parse a TreeDown file and report what was found."""
    result = load(path)

    if as_json:
        typer.echo(json.dumps(result.as_dict(), indent=2))
        return

    console.print(
        f"Found {len(result.individuals)} individuals and {len(result.edges)} relationships"
    )

    findings = result.warnings + validate_graph(result.individuals, result.edges)
    if findings:
        console.print(f"[yellow]{len(findings)} warnings:[/yellow]")
        for warning in findings[:MAX_WARNINGS_SHOWN]:
            console.print(f"  - {warning}")
        if len(findings) > MAX_WARNINGS_SHOWN:
            console.print(f"  ... and {len(findings) - MAX_WARNINGS_SHOWN} more")
    else:
        console.print("[green]No validation issues found[/green]")


@app.command()
def root(path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Show the person chosen as the top of the family tree."""
    result = load(path)
    root_id = select_root(result.individuals, result.edges)
    people = {p.id: p for p in result.individuals}
    console.print(describe(people[root_id]))


@app.command()
def tree(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    focus: str | None = typer.Option(None, "--focus", "-f", help="Center the view on this person"),
    ancestors: bool = typer.Option(
        False, "--ancestors", help="With --focus, show ancestors instead of descendants"
    ),
) -> None:
    """Print the family tree, or one person's ancestors or descendants."""
    result = load(path)

    if focus is None:
        print_forest("Family tree", family_tree(result.individuals, result.edges))
        return

    person = find_person(result, focus)
    if ancestors:
        nodes = ancestor_subgraph(result.individuals, result.edges, person.id)
        print_forest(f"Ancestors of {person.display_name}", nodes)
    else:
        nodes = descendant_subgraph(result.individuals, result.edges, person.id)
        print_forest(f"Descendants of {person.display_name}", nodes)


@app.command()
def unions(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    name: str = typer.Argument(..., help="Person whose unions to list"),
) -> None:
    """List a person's marriages and partnerships in order."""
    result = load(path)
    person = find_person(result, name)

    found = resolve_unions(result.individuals, result.edges, person.id)
    if not found:
        console.print(f"[dim]{person.display_name} has no recorded unions.[/dim]")
        return

    table = Table(title=f"Unions of {person.display_name}")
    table.add_column("Partner")
    table.add_column("Status")
    table.add_column("Dates")
    for union in found:
        dates = format_union_date_range(union.start_year, union.end_year) or ""
        table.add_row(union.partner.display_name, union.label, dates)
    console.print(table)


@app.command()
def kinship(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    name_a: str = typer.Argument(..., help="First person"),
    name_b: str = typer.Argument(..., help="Second person"),
) -> None:
    """Explain how the second person is related to the first."""
    result = load(path)
    person_a = find_person(result, name_a)
    person_b = find_person(result, name_b)

    found = find_kinship(result.individuals, result.edges, person_a.id, person_b.id)
    if found is None:
        console.print(
            f"No connection found between {person_a.display_name} and {person_b.display_name}"
        )
        return

    people = {p.id: p for p in result.individuals}
    console.print(
        f"[bold]{person_b.display_name}[/bold] is {person_a.display_name}'s "
        f"[bold]{found.label}[/bold]"
    )
    console.print(f"Common ancestor: {people[found.common_ancestor_id].display_name}")
    console.print("  " + " -> ".join(people[pid].display_name for pid in found.path_a))
    console.print("  " + " -> ".join(people[pid].display_name for pid in found.path_b))


@app.command()
def search(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    query: str = typer.Argument(..., help="Part of a name"),
) -> None:
    """Find people whose name contains the query."""
    result = load(path)
    matches = search_individuals(result.individuals, query)
    if not matches:
        console.print("[dim]No matches.[/dim]")
        return
    for match in matches:
        console.print(f"{match.individual.id}  {describe(match.individual)}")


if __name__ == "__main__":
    app()
