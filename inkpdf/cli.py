"""
Command-line interface for inkpdf.
"""

import logging
import os
import sys
import uuid

import click
from rich.console import Console
from rich.table import Table

from inkpdf import __version__
from inkpdf.annotations import create_pdf_generator
from inkpdf.archive import create_zip_document, make_thumbnail, read_archive
from inkpdf.background import inspect_background
from inkpdf.config import load_settings
from inkpdf.exceptions import InkPdfError
from inkpdf.model import GeneratorOptions
from inkpdf.utils import atomic_output, get_logger

console = Console()


def _fail(error):
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    inkpdf - Export handwritten annotation archives to PDF.
    """
    logger = get_logger("inkpdf")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@cli.command(name="export")
@click.argument('archive', type=click.Path(exists=True, dir_okay=False))
@click.argument('output', type=click.Path(dir_okay=False))
@click.option('--page-numbers', is_flag=True, help='Draw the page number on each page')
@click.option('--all-pages', is_flag=True, help='Keep pages without annotations as blank pages')
@click.option('--annotations-only', is_flag=True, help='Ignore the background PDF')
def export(archive, output, page_numbers, all_pages, annotations_only):
    """
    Export the annotations of ARCHIVE to the PDF file OUTPUT.

    Examples:

        inkpdf export notes.zip notes.pdf

        inkpdf export paper.zip paper.pdf --annotations-only --page-numbers
    """
    options = GeneratorOptions(
        add_page_numbers=page_numbers,
        all_pages=all_pages,
        annotations_only=annotations_only,
    )
    try:
        with console.status("[bold cyan]Rendering annotations...[/bold cyan]"):
            generator = create_pdf_generator(archive, output, options, settings=load_settings())
            result = generator.generate()
    except InkPdfError as e:
        _fail(e)

    console.print("\n[bold green]✓ Exported annotations[/bold green]")
    console.print(f"[dim]Output file: {result}[/dim]\n")


@cli.command(name="inspect")
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
def inspect_command(input_file):
    """
    Display information about a PDF or annotation archive.

    Example:

        inkpdf inspect background.pdf
    """
    try:
        if input_file.lower().endswith(".zip"):
            archive = read_archive(input_file)
            table = Table(title=f"Archive: {os.path.basename(input_file)}")
            table.add_column("Property", style="cyan", no_wrap=True)
            table.add_column("Value", style="green")
            table.add_row("Document ID", archive.uuid)
            table.add_row("Type", archive.file_type or "notebook")
            table.add_row("Pages", str(len(archive.document)))
            annotated = sum(1 for page in archive.document.pages if page.has_content)
            table.add_row("Annotated pages", str(annotated))
            table.add_row("Background", "Yes" if archive.payload else "No")
            templates = list(dict.fromkeys(page.template for page in archive.document.pages if page.template))
            table.add_row("Templates", ", ".join(templates) or "none")
            if "lastOpenedPage" in archive.content:
                table.add_row("Last opened page", str(archive.content["lastOpenedPage"]))
        else:
            with open(input_file, 'rb') as handle:
                info = inspect_background(handle.read())
            table = Table(title=f"PDF Information: {os.path.basename(input_file)}")
            table.add_column("Property", style="cyan", no_wrap=True)
            table.add_column("Value", style="green")
            table.add_row("File Path", os.path.abspath(input_file))
            table.add_row("Number of Pages", "unknown" if info.num_pages is None else str(info.num_pages))
            table.add_row("Encrypted", "Yes" if info.encrypted else "No")
            if info.page_sizes:
                width, height = info.page_sizes[0]
                table.add_row("First Page Size", f"{width:.0f} x {height:.0f} pt")
    except InkPdfError as e:
        _fail(e)

    console.print()
    console.print(table)
    console.print()


@cli.command(name="pack")
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.option('--id', 'doc_id', default=None, help='Document ID (defaults to a new UUID)')
@click.option('--thumbnails/--no-thumbnails', default=None, help='Render a first-page thumbnail for PDFs')
def pack(source, doc_id, thumbnails):
    """
    Pack a PDF, EPUB or lines file into an annotation archive.

    Example:

        inkpdf pack paper.pdf --thumbnails
    """
    doc_id = doc_id or str(uuid.uuid4())
    try:
        zip_path = create_zip_document(doc_id, source, thumbnails=thumbnails)
    except InkPdfError as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Packed document {doc_id}[/bold green]")
    console.print(f"[dim]Archive: {zip_path}[/dim]\n")


@cli.command(name="thumbnail")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.argument('output', type=click.Path(dir_okay=False))
def thumbnail(input_pdf, output):
    """
    Render the first page of INPUT_PDF as a JPEG thumbnail.

    Example:

        inkpdf thumbnail paper.pdf cover.jpg
    """
    try:
        with open(input_pdf, 'rb') as handle:
            data = make_thumbnail(handle.read())
        with atomic_output(output) as sink:
            sink.write(data)
    except InkPdfError as e:
        _fail(e)

    console.print(f"\n[bold green]✓ Thumbnail written to {output}[/bold green]\n")


if __name__ == '__main__':  # pragma: no cover
    cli()
