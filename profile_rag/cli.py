"""
Command-line interface for profile-rag.

Provides commands to ingest profile exports, search stored documents,
build LLM context and inspect backend status.

Usage:
    profile-rag ingest export.json --username jane --platform instagram
    profile-rag search "travel posts" --username jane --platform instagram
    profile-rag context "what performs best?" --username jane --platform instagram
    profile-rag stats instagram
    profile-rag health
"""

import asyncio
import json
import sys
from pathlib import Path

import click

from profile_rag.config.settings import get_settings
from profile_rag.observability.logging import setup_logging
from profile_rag.observability.metrics import get_metrics


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Profile RAG - social-media profile retrieval for LLM context."""
    if debug:
        import os
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    setup_logging()

    settings = get_settings()
    if settings.metrics_enabled:
        get_metrics().start_server()


@main.command()
@click.argument("export_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--username", required=True, help="Identity to store the export under")
@click.option("--platform", required=True, help="Platform tag (instagram, twitter, ...)")
def ingest(export_file: Path, username: str, platform: str) -> None:
    """Ingest a profile export JSON file."""
    from profile_rag.services.profile_rag_service import ProfileRAGService

    async def run() -> bool:
        async with ProfileRAGService() as service:
            stored = await service.store_profile_data(username, platform, export_file.read_text(encoding="utf-8"))
            stats = await service.get_stats(platform)

        if stored:
            click.echo(click.style(f"✓ Stored {username} on {platform}", fg="green"))
            click.echo(f"  {platform}: {stats['totalDocuments']} documents ({stats['status']})")
        else:
            click.echo(click.style(f"✗ Failed to store {username} on {platform}", fg="red"))
        return stored

    if not asyncio.run(run()):
        sys.exit(1)


@main.command()
@click.argument("query")
@click.option("--username", required=True, help="Identity to search")
@click.option("--platform", required=True, help="Platform of the identity")
@click.option("--limit", default=5, type=click.IntRange(1, 100), help="Maximum results")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def search(query: str, username: str, platform: str, limit: int, as_json: bool) -> None:
    """Search an identity's stored documents."""
    from profile_rag.services.profile_rag_service import ProfileRAGService

    async def run():
        async with ProfileRAGService() as service:
            return await service.semantic_search(query, username, platform, limit)

    results = asyncio.run(run())

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        click.echo("No results")
        return

    click.echo(f"\nResults for {username} on {platform}:")
    click.echo("-" * 40)
    for i, result in enumerate(results, 1):
        first_line = result.content.split("\n", 1)[0]
        click.echo(f"{i}. [{result.doc_type}] relevance={result.relevance:.2f} similarity={result.similarity:.2f}")
        click.echo(f"   {first_line}")


@main.command()
@click.argument("query")
@click.option("--username", required=True, help="Identity to build context for")
@click.option("--platform", required=True, help="Platform of the identity")
def context(query: str, username: str, platform: str) -> None:
    """Print the LLM context for a query."""
    from profile_rag.services.profile_rag_service import ProfileRAGService

    async def run():
        async with ProfileRAGService() as service:
            return await service.create_enhanced_context(query, username, platform)

    text = asyncio.run(run())
    if text is None:
        click.echo("No stored data for this identity")
        sys.exit(1)
    click.echo(text)


@main.command()
@click.argument("platform")
def stats(platform: str) -> None:
    """Show stored document count and backend status for a platform."""
    from profile_rag.services.profile_rag_service import ProfileRAGService

    async def run():
        async with ProfileRAGService() as service:
            return await service.get_stats(platform)

    result = asyncio.run(run())
    click.echo(json.dumps(result, indent=2))
    if result["status"] == "error":
        sys.exit(1)


@main.command()
def health() -> None:
    """Check the primary vector backend."""
    import structlog
    logger = structlog.get_logger()

    from profile_rag.vectorstore.chroma_store import ChromaVectorStore
    from profile_rag.vectorstore.config import VectorStoreConfig

    async def check() -> dict[str, bool | str]:
        config = VectorStoreConfig()
        results: dict[str, bool | str] = {}

        store = ChromaVectorStore(config)
        try:
            version = await store.ping()
            results["chroma"] = True
            results["chroma_version"] = version
        except Exception as e:
            results["chroma"] = False
            logger.error("Chroma health check failed", error=str(e))
        finally:
            await store.close()

        results["fallback_dir"] = str(Path(config.fallback_dir).resolve())
        return results

    results = asyncio.run(check())

    click.echo("\nHealth Check Results:")
    click.echo("-" * 40)
    for name, status in results.items():
        ok = status is not False
        icon = "✓" if ok else "✗"
        color = "green" if ok else "red"
        click.echo(click.style(f"  {icon} {name}: {status}", fg=color))
    click.echo("-" * 40)

    if results["chroma"]:
        click.echo(click.style("Primary backend healthy!", fg="green"))
        sys.exit(0)
    else:
        click.echo(click.style("Primary backend unavailable, file fallback will be used", fg="yellow"))
        sys.exit(1)


if __name__ == "__main__":
    main()
