"""
Campaign commands for Buyside CLI
"""

import asyncio
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from ..core.models import Campaign, CampaignDraft
from ..pipelines.campaign_creation import (
    PIPELINE_NODES,
    CampaignCreationError,
    CampaignCreationOrchestrator,
)
from ..pipelines.campaign_creation.dependencies import CampaignCreationDeps
from ..pipelines.metadata import describe_graph
from ..services.campaign_repository import CampaignRepository
from ..utils.media import is_supported_image


def _echo_campaign(campaign: Campaign) -> None:
    policy = campaign.review_policy
    click.echo(f"📣 {campaign.name}  [{policy.status.value}]")
    click.echo(f"   ID: {campaign.id}")
    click.echo(f"   Budget: ${campaign.budget:,}")
    if policy.reason:
        click.echo(f"   Policy: {policy.reason}")
    if campaign.keywords:
        click.echo(f"   Keywords: {', '.join(campaign.keywords)}")
    if campaign.ad_image_url:
        click.echo(f"   Image: {campaign.ad_image_url}")
    if campaign.semantic_description:
        click.echo(f"   Semantic: {campaign.semantic_description}")
    click.echo(f"   Created: {campaign.created_at.isoformat()[:19]}")
    click.echo()


@click.group('campaign')
def campaign_group():
    """Manage ad campaigns"""
    pass


@campaign_group.command('list')
@click.option('--search', 'search_term', default=None, help='Filter by name or keyword')
@click.option('--refresh/--cached', default=True, help='Reload from Supabase (default) or use the local cache only')
def list_campaigns(search_term: Optional[str], refresh: bool):
    """
    List campaigns, newest first

    Examples:
        buyside campaign list
        buyside campaign list --search shoes --cached
    """
    repository = CampaignRepository()

    try:
        if refresh:
            repository.refresh()
        else:
            repository.load_cached()
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise SystemExit(1)

    campaigns = repository.search(search_term) if search_term else list(repository.campaigns)

    if not campaigns:
        click.echo("No campaigns found.")
        click.echo("\nCreate your first campaign with: buyside campaign create --name ... --text ...")
        return

    click.echo(f"\n{'='*60}")
    click.echo(f"📋 Campaigns ({len(campaigns)})")
    click.echo(f"{'='*60}\n")

    for campaign in campaigns:
        _echo_campaign(campaign)


@campaign_group.command('create')
@click.option('--name', required=True, help='Campaign name')
@click.option('--budget', type=int, default=1000, show_default=True, help='Budget in dollars (>= 1)')
@click.option('--text', 'ad_text', required=True, help='Ad text content')
@click.option('--image', 'image_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help='Optional creative image')
@click.option('--parallel/--sequential', default=None,
              help='Run the enrichment calls concurrently (default: PARALLEL_ENRICHMENT env)')
def create_campaign(name: str, budget: int, ad_text: str, image_path: Optional[Path], parallel: Optional[bool]):
    """
    Create a campaign through the AI enrichment pipeline

    Examples:
        buyside campaign create --name "Summer Sale" --budget 500 --text "50% off all shoes"
        buyside campaign create --name "Launch" --text "New arrivals" --image hero.jpg
    """
    image_bytes = image_path.read_bytes() if image_path else None
    if image_path and not is_supported_image(image_path.name, image_bytes):
        click.echo(f"❌ Unsupported image: {image_path.name} (use a JPEG, PNG, GIF or WebP file)", err=True)
        raise SystemExit(2)

    try:
        draft = CampaignDraft(
            name=name,
            budget=budget,
            ad_text_content=ad_text,
            ad_image_bytes=image_bytes,
            ad_image_filename=image_path.name if image_path else None,
        )
    except ValidationError as e:
        click.echo(f"❌ Invalid campaign: {e}", err=True)
        raise SystemExit(2)

    def on_progress(step: str, message: str) -> None:
        click.echo(f"⏳ {message}")

    orchestrator = CampaignCreationOrchestrator(
        CampaignCreationDeps.create(on_progress=on_progress),
        parallel_enrichment=parallel,
    )

    try:
        campaign = asyncio.run(orchestrator.submit(draft))
    except CampaignCreationError as e:
        click.echo(f"❌ Failed to create campaign: {e}", err=True)
        raise SystemExit(1)

    click.echo("\n✅ Campaign created\n")
    _echo_campaign(campaign)


@campaign_group.command('pipeline')
def show_pipeline():
    """Show the creation pipeline's stages and how each one fails"""
    click.echo(f"\n{'='*60}")
    click.echo("🔧 Campaign creation pipeline")
    click.echo(f"{'='*60}\n")

    for name, meta in describe_graph(PIPELINE_NODES).items():
        click.echo(f"{name}")
        click.echo(f"   Reads: {', '.join(meta['inputs']) or '-'}")
        click.echo(f"   Writes: {', '.join(meta['outputs']) or '-'}")
        if meta['uses_llm']:
            click.echo(f"   LLM: {meta['llm']} ({meta['llm_purpose']})")
        if meta['fatal']:
            click.echo("   On failure: abort, no campaign created")
        elif meta['fallback']:
            click.echo(f"   On failure: {meta['fallback']}")
        click.echo()
