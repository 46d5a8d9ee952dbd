"""cloudpub CLI - Main commands."""
import asyncio
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from cloudpub.core.logging import get_logger

app = typer.Typer(
    name="cloudpub",
    help="Unsigned media upload CLI",
    add_completion=False
)
console = Console()
logger = get_logger('cli')


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def parse_context(entries: Optional[List[str]]) -> Optional[Dict[str, str]]:
    """Parse ``key=value`` options into an ordered mapping."""
    if not entries:
        return None
    context = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Context entries must look like key=value, got {entry!r}")
        context[key] = value
    return context


def build_source(
    file_path: Optional[Path],
    url: Optional[str],
    public_id: Optional[str],
    folder: Optional[str],
    tags: Optional[List[str]],
    context: Optional[List[str]],
    resource_type: str = "auto",
):
    """Build an upload source from CLI options."""
    from cloudpub import UploadSource, ResourceType

    if (file_path is None) == (url is None):
        console.print("[red]Give either a file path or --url, not both[/red]")
        raise typer.Exit(1)

    options = dict(
        public_id=public_id,
        folder=folder,
        tags=tags or None,
        context=parse_context(context),
        resource_type=ResourceType(resource_type),
    )
    if url:
        return UploadSource.from_url(url, **options)
    return UploadSource.from_file(file_path, **options)


@app.command()
def plan(
    file_path: Path = typer.Argument(..., help="Local file to plan", exists=True, dir_okay=False),
    chunk_size: int = typer.Option(20_000_000, "--chunk-size", "-c", help="Maximum chunk size in bytes"),
):
    """Show the byte ranges a chunked upload would send."""
    from cloudpub import UploadSource, plan_chunks

    source = UploadSource.from_file(file_path)
    total_size = run_async(source.byte_size())
    try:
        ranges = plan_chunks(total_size, chunk_size)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{source.identifier} ({total_size:,} bytes)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Size", justify="right", style="cyan")
    table.add_column("Content-Range", style="dim")

    for index, chunk in enumerate(ranges):
        table.add_row(
            str(index), f"{chunk.start:,}", f"{chunk.end:,}", f"{chunk.size:,}",
            f"bytes {chunk.content_range}/{total_size}"
        )

    console.print(table)


@app.command()
def form(
    file_path: Optional[Path] = typer.Argument(None, help="Local file"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="External URL instead of a file"),
    preset: str = typer.Option(..., "--preset", "-p", envvar="CLOUDINARY_UPLOAD_PRESET", help="Upload preset"),
    public_id: Optional[str] = typer.Option(None, "--public-id", help="Destination public id"),
    folder: Optional[str] = typer.Option(None, "--folder", "-f", help="Destination folder"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    context: Optional[List[str]] = typer.Option(None, "--context", "-x", help="key=value context (repeatable)"),
):
    """Print the form fields that accompany an upload."""
    source = build_source(file_path, url, public_id, folder, tags, context)

    table = Table()
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for name, value in source.describe_metadata(preset).items():
        table.add_row(name, value)
    console.print(table)


@app.command()
def upload(
    file_path: Optional[Path] = typer.Argument(None, help="Local file to upload"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="External URL instead of a file"),
    cloud_name: str = typer.Option(..., "--cloud-name", "-n", envvar="CLOUDINARY_CLOUD_NAME", help="Cloud name"),
    preset: str = typer.Option(..., "--preset", "-p", envvar="CLOUDINARY_UPLOAD_PRESET", help="Upload preset"),
    chunk_size: int = typer.Option(20_000_000, "--chunk-size", "-c", help="Maximum chunk size in bytes"),
    resource_type: str = typer.Option("auto", "--resource-type", "-r", help="auto, image, video or raw"),
    public_id: Optional[str] = typer.Option(None, "--public-id", help="Destination public id"),
    folder: Optional[str] = typer.Option(None, "--folder", "-f", help="Destination folder"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    context: Optional[List[str]] = typer.Option(None, "--context", "-x", help="key=value context (repeatable)"),
):
    """Upload a file or an external URL, chunking large files."""
    import aiohttp
    from cloudpub import UploadFacade, UploadConfig, CloudPubError

    source = build_source(file_path, url, public_id, folder, tags, context, resource_type)
    config = UploadConfig(cloud_name=cloud_name, upload_preset=preset, chunk_size=chunk_size)

    async def do_upload():
        async with UploadFacade(config) as uploader:
            return await uploader.upload_file_in_chunks(source)

    try:
        with console.status(f"Uploading {source.identifier}..."):
            result = run_async(do_upload())
    except (CloudPubError, aiohttp.ClientError, OSError) as e:
        logger.error(f"Upload of {source.identifier} failed: {e}")
        console.print(f"[red]Upload failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Uploaded:[/green] {source.identifier}")
    for key in ("public_id", "secure_url", "bytes"):
        if key in result:
            console.print(f"{key}: {result[key]}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
