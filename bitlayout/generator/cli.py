"""Command-line interface for bitlayout code generation."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from bitlayout.generator import bitfield, python
from bitlayout.generator.errors import GeneratorError
from bitlayout.generator.frames import FRAMES, Frame
from bitlayout.generator.sizes import calculate_sizes
from bitlayout.generator.util import hex_literal

_logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_frame(name: str) -> Frame:
    if name not in FRAMES:
        print(f"Unknown frame: {name}")
        sys.exit(1)
    return FRAMES[name]()


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log what is being rendered")
def cli(verbose: bool) -> None:
    """Bitlayout register and structure code generator."""
    _configure_logging(verbose)


@cli.command()
@click.option("--frame", "-f", "frame_name", required=True, help="Frame to generate (mac, frame-control)")
@click.option("--output", "-o", "output_file", required=True, help="Output file")
@click.option(
    "--runtime-import",
    "runtime_import",
    is_flag=False,
    flag_value="bitlayout.runtime",
    default=None,
    help="Import path for runtime. No value=bitlayout.runtime, omit=bitlayout_runtime",
)
def gen(frame_name: str, output_file: str, runtime_import: str | None) -> None:
    """Generate accessor code for a frame."""
    frame = _load_frame(frame_name)

    # Default to a vendored "bitlayout_runtime" if not specified
    import_path = runtime_import if runtime_import is not None else "bitlayout_runtime"
    try:
        generated_file = frame.render(runtime_import=import_path)
    except GeneratorError as e:
        _logger.error("Error rendering %s: %s", frame_name, e)
        sys.exit(1)

    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generated_file, encoding="utf-8")


@cli.command()
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--name", default="bitlayout_runtime", help="Runtime folder name")
def runtime(output_path: str, name: str) -> None:
    """Generate runtime support code."""
    runtime_dir = Path(output_path) / name
    runtime_dir.mkdir(parents=True, exist_ok=True)
    for filename, content in python.runtime().items():
        (runtime_dir / filename).write_text(content)
    print(f"Generated Python runtime in {runtime_dir}")


@cli.command()
@click.option("--frame", "-f", "frame_name", required=True, help="Frame to describe")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(frame_name: str, output_json: bool) -> None:
    """Display bit offsets, masks and structure sizes of a frame."""
    frame = _load_frame(frame_name)

    try:
        bitfields = {b.name: b for b in frame.bitfields}
        for s in frame.structures:
            for member in s.bitfield_members:
                bitfields.setdefault(member.bitfield.name, member.bitfield)
        layouts = [bitfield.layout(b) for b in bitfields.values()]
        structures = [*frame.registry.option_structures(), *frame.structures]
        sizes = calculate_sizes(structures, frame.registry)
    except GeneratorError as e:
        _logger.error("Error describing %s: %s", frame_name, e)
        sys.exit(1)

    if output_json:
        _output_json(layouts, sizes)
    else:
        _output_plain(layouts, sizes)


def _output_json(layouts: list[bitfield.BitfieldLayout], sizes: dict) -> None:
    """Output frame info as JSON."""
    data: dict = {
        "bitfields": [layout.to_dict() for layout in layouts],
        "structs": {name: info.size.to_dict() for name, info in sizes.items()},
    }
    print(json.dumps(data, indent=2))


def _output_plain(layouts: list[bitfield.BitfieldLayout], sizes: dict) -> None:
    """Output frame info using rich text formatting."""
    console = Console()

    for layout in layouts:
        console.print(
            f"[bold cyan]{layout.type_name}[/bold cyan] "
            f"[dim]({layout.total_width} bits in a {layout.register_width}-bit register)[/dim]"
        )
        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Field", style="white")
        table.add_column("Offset", style="yellow", justify="right")
        table.add_column("Width", style="yellow", justify="right")
        table.add_column("Mask", style="green", justify="right")
        table.add_column("Variants", style="dim")

        for f in layout.fields:
            variants = ", ".join(f"{v.ident}={v.value}" for v in f.variants)
            table.add_row(
                f.ident, str(f.offset), str(f.width), hex_literal(f.shifted_mask), variants
            )

        console.print(table)
        console.print()

    if not sizes:
        return

    console.print("[bold cyan]Structs[/bold cyan]")
    struct_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    struct_table.add_column("Name", style="white")
    struct_table.add_column("Size", style="yellow", justify="right")
    struct_table.add_column("Kind", style="dim")

    for name, struct_info in sizes.items():
        min_size = struct_info.size.min_size
        max_size = struct_info.size.max_size
        if min_size == max_size:
            size_str = f"{min_size} bytes"
        else:
            size_str = f"{min_size}-{max_size} bytes"
        struct_table.add_row(name, size_str, struct_info.size.kind.value)

    console.print(struct_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
