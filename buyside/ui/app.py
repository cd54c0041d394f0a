"""
Streamlit UI - Buyside campaign dashboard.

Views:
- Login: stubbed sign-in (any non-empty email and password)
- Dashboard: headline stats, search, campaign card grid
- Create: campaign form with live pipeline progress

Run with:
    streamlit run buyside/ui/app.py

Environment variables:
    SUPABASE_URL / SUPABASE_ANON_KEY: Supabase project (campaigns table, campaign-assets bucket)
    GEMINI_API_KEY: Google Gemini API key for enrichment
"""

import asyncio
import logging

import streamlit as st
from pydantic import ValidationError

from buyside.core.config import Config
from buyside.core.models import Campaign, CampaignDraft
from buyside.core.observability import setup_logging
from buyside.pipelines.campaign_creation import CampaignCreationError, CampaignCreationOrchestrator
from buyside.pipelines.campaign_creation.dependencies import CampaignCreationDeps
from buyside.services.campaign_repository import CampaignRepository
from buyside.ui.utils import filter_campaigns, policy_badge, split_keywords, summarize_campaigns
from buyside.utils.media import is_supported_image

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Buyside", page_icon="📣", layout="wide")


@st.cache_resource
def init_app() -> bool:
    """Logging + config check, once per process."""
    setup_logging()
    Config.validate()
    return True


def get_repository() -> CampaignRepository:
    """Session campaign list: cached copy first, then Supabase."""
    if "repository" not in st.session_state:
        repository = CampaignRepository()
        repository.load_cached()
        try:
            repository.refresh()
        except Exception as e:
            logger.warning(f"Could not load campaigns from Supabase: {e}")
            st.session_state.load_warning = "Showing cached campaigns; Supabase is unreachable."
        st.session_state.repository = repository
    return st.session_state.repository


def render_login():
    st.header("Welcome to Buyside")
    st.markdown("Sign in to manage your ad campaigns.")

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign In", type="primary", use_container_width=True)

        if submitted:
            if not email or not password:
                st.error("Please enter both email and password")
            else:
                st.session_state.authenticated = True
                st.session_state.user_email = email
                st.rerun()


def render_campaign_card(campaign: Campaign):
    with st.container(border=True):
        if campaign.ad_image_url:
            st.image(campaign.ad_image_url, use_container_width=True)

        label, color = policy_badge(campaign.review_policy.status)
        st.markdown(f"**{campaign.name}** &nbsp; :{color}[{label}]")
        st.caption(f"${campaign.budget:,} · {campaign.created_at.strftime('%Y-%m-%d')}")

        if campaign.review_policy.reason:
            st.caption(f"Policy: {campaign.review_policy.reason}")

        shown, hidden = split_keywords(campaign.keywords)
        if shown:
            chips = " ".join(f"`{k}`" for k in shown)
            if hidden:
                chips += f" `+{hidden}`"
            st.markdown(chips)

        st.text(campaign.ad_text_content)
        if campaign.semantic_description:
            with st.expander("Semantic description"):
                st.write(campaign.semantic_description)


def render_dashboard():
    repository = get_repository()
    campaigns = list(repository.campaigns)

    header_col, action_col = st.columns([4, 1])
    with header_col:
        st.title("Campaigns")
    with action_col:
        if st.button("➕ New Campaign", type="primary", use_container_width=True):
            st.session_state.view = "CREATE"
            st.rerun()

    load_warning = st.session_state.pop("load_warning", None)
    if load_warning:
        st.warning(load_warning)

    summary = summarize_campaigns(campaigns)
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Campaigns", summary.total_campaigns)
    c2.metric("Total Budget", f"${summary.total_budget:,}")
    c3.metric("Approval Rate", f"{summary.approval_rate}%")

    search = st.text_input("Search campaigns or keywords...", label_visibility="collapsed",
                           placeholder="Search campaigns or keywords...")
    visible = filter_campaigns(campaigns, search)

    if not visible:
        st.info("No campaigns found. Create one to get started.")
        return

    columns = st.columns(3)
    for i, campaign in enumerate(visible):
        with columns[i % 3]:
            render_campaign_card(campaign)


def render_create():
    st.title("New Campaign")
    if st.button("Cancel"):
        st.session_state.view = "DASHBOARD"
        st.rerun()

    with st.form("create_campaign_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        name = col1.text_input("Campaign Name", placeholder="e.g. Summer Sale 2025")
        budget = col2.number_input("Budget ($)", min_value=1, value=1000, step=1)
        ad_text = st.text_area("Ad Text Content", height=120)
        image_file = st.file_uploader("Creative Image (optional)", type=["png", "jpg", "jpeg", "gif", "webp"])
        submitted = st.form_submit_button("Launch Campaign", type="primary", use_container_width=True)

    if not submitted:
        return

    if image_file and not is_supported_image(image_file.name, image_file.getvalue()):
        st.error("Please upload a JPEG, PNG, GIF or WebP image.")
        return

    try:
        draft = CampaignDraft(
            name=name,
            budget=int(budget),
            ad_text_content=ad_text,
            ad_image_bytes=image_file.getvalue() if image_file else None,
            ad_image_filename=image_file.name if image_file else None,
        )
    except ValidationError:
        st.error("Please provide a campaign name and a budget of at least $1.")
        return

    repository = get_repository()

    with st.status("Processing Campaign", expanded=True) as status:
        def on_progress(step: str, message: str) -> None:
            status.update(label=message)
            status.write(message)

        orchestrator = CampaignCreationOrchestrator(
            CampaignCreationDeps.create(on_progress=on_progress, campaigns=repository)
        )

        try:
            campaign = asyncio.run(orchestrator.submit(draft))
        except CampaignCreationError as e:
            logger.error(f"Campaign creation failed: {e}")
            status.update(label="Failed to create campaign", state="error")
            st.error("Failed to create campaign. Please try again.")
            return

        status.update(label=f"Campaign '{campaign.name}' created", state="complete")

    st.session_state.view = "DASHBOARD"
    st.rerun()


def main():
    init_app()

    if not st.session_state.get("authenticated"):
        render_login()
        return

    with st.sidebar:
        st.markdown("## 📣 Buyside")
        if st.button("Campaigns", use_container_width=True):
            st.session_state.view = "DASHBOARD"
            st.rerun()
        st.divider()
        st.caption(st.session_state.get("user_email", "Demo User"))
        if st.button("Sign Out", use_container_width=True):
            st.session_state.clear()
            st.rerun()

    if st.session_state.get("view", "DASHBOARD") == "CREATE":
        render_create()
    else:
        render_dashboard()


main()
