"""
Command-line interface for pdfinspect.
"""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from . import __version__
from .context import DEFAULT_CONFIG, InspectionContext
from .core.exceptions import PdfInspectError
from .core.objects import ObjectKind
from .core.progress import RichProgressSink
from .core.store import ObjectStore
from .nodetypes import NodeVariant, ObjectTreeNode, TreeNodeFactory

console = Console()

KIND_STYLES = {
    ObjectKind.INDIRECT_REFERENCE: "cyan",
    ObjectKind.DICTIONARY: "bold",
    ObjectKind.STREAM: "magenta",
    ObjectKind.ARRAY: "blue",
    ObjectKind.NAME: "green",
    ObjectKind.STRING: "yellow",
    ObjectKind.NULL: "dim",
}


class StoreReceiver:
    """Keeps the outcome of a background load for the command."""

    def __init__(self) -> None:
        self.store: ObjectStore | None = None
        self.error: Exception | None = None
        self.done = False

    def update(self, store: ObjectStore) -> None:
        self.store = store
        self.done = True

    def load_failed(self, error: Exception) -> None:
        self.error = error
        self.done = True


def load_store(context: InspectionContext) -> ObjectStore:
    """Load the document of ``context`` and wait for the finished store."""

    reader = context.open_reader()
    receiver = StoreReceiver()
    if not context.coordinator.load_document(receiver, reader):
        raise PdfInspectError("Another document is still loading.")
    context.foreground.run_until(lambda: receiver.done)
    if receiver.error is not None:
        raise receiver.error
    return receiver.store


def node_label(node: ObjectTreeNode) -> Text:
    label = Text(node.caption, style=KIND_STYLES.get(node.kind, ""))
    if node.variant is NodeVariant.PAGE:
        label.append("  (page)", style="dim")
    elif node.variant is NodeVariant.PAGE_TREE:
        label.append("  (page tree)", style="dim")
    if node.recursive:
        ancestor = node.get_ancestor()
        label.append(f"  ↺ recursive, see {ancestor.caption}", style="red")
    return label


def add_branch(branch: Tree, node: ObjectTreeNode, depth: int) -> None:
    sub = branch.add(node_label(node))
    if depth <= 0 or node.recursive:
        return
    for child in node.children:
        add_branch(sub, child, depth - 1)


def _make_context(input_pdf: str, password: str | None, depth: int | None = None) -> InspectionContext:
    config = {} if depth is None else {"max_depth": depth}
    return InspectionContext(
        input_path=input_pdf,
        password=password,
        config=config,
        progress_factory=lambda: RichProgressSink(console=console),
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log loading details")
def cli(verbose):
    """
    pdfinspect - browse the object graph of a PDF file.
    """
    if verbose:
        logging.getLogger("pdfinspect").setLevel(logging.DEBUG)


@cli.command(name="tree")
@click.argument("input_pdf", type=click.Path(exists=True))
@click.option(
    "--object", "-n", "number",
    default=None,
    help="Show the tree of this indirect object instead of the trailer",
    type=int,
)
@click.option(
    "--depth", "-d",
    default=DEFAULT_CONFIG["max_depth"],
    help="Number of levels to expand",
    type=int,
)
@click.option("--password", default=None, help="Password of an encrypted PDF", type=str)
def tree(input_pdf, number, depth, password):
    """
    Print the object tree of a PDF file.

    Examples:

        pdfinspect tree input.pdf

        pdfinspect tree input.pdf --object 3 --depth 5
    """
    try:
        context = _make_context(input_pdf, password, depth)
        store = load_store(context)
        factory = TreeNodeFactory(store)
        root = factory.trailer_node() if number is None else factory.get_node(number)

        output = Tree(node_label(root))
        if context.max_depth > 0:
            for child in root.children:
                add_branch(output, child, context.max_depth - 1)
        console.print(output)
    except (PdfInspectError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name="objects")
@click.argument("input_pdf", type=click.Path(exists=True))
@click.option("--password", default=None, help="Password of an encrypted PDF", type=str)
def objects(input_pdf, password):
    """
    List the indirect objects of a PDF file.
    """
    try:
        store = load_store(_make_context(input_pdf, password))
        factory = TreeNodeFactory(store)

        table = Table(title=f"{store.current} indirect objects")
        table.add_column("Number", justify="right", style="cyan")
        table.add_column("Kind", style="green")
        table.add_column("Caption")
        for number in store.numbers():
            node = factory.get_node(number)
            table.add_row(str(number), node.kind.value, Text(node.caption))
        console.print(table)
    except (PdfInspectError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)


def main() -> None:  # pragma: no cover
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
