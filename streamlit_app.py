"""
Streamlit entry point for the Proposal Outline Studio.

Paste a freelance project description, press generate, and the app cleans the
description, researches a grounded proposal outline and renders it as HTML.
One controller is kept per browser session so its busy flag guards that
session's in-flight request.
"""

from __future__ import annotations

import asyncio
import logging
import streamlit as st
from dotenv import load_dotenv

from agents import OutlineGenerator, Summarizer
from proposal_controller import ProposalController
from proposal_renderer import ResultsRenderer, ResultsView

# Ensure environment variables from .env are loaded before the agents read them.
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
LOGGER = logging.getLogger(__name__)

RESULTS_CSS = """
<style>
.results .result-section { margin-bottom: 1.5rem; }
.results .tech-stack ul { display: flex; flex-wrap: wrap; gap: 0.5rem; list-style: none; padding: 0; }
.results .tech-stack li { background: #eef2ff; border-radius: 999px; padding: 0.2rem 0.8rem; }
.results .sources-section { font-size: 0.9rem; }
.results.error { color: #b91c1c; border: 1px solid #fecaca; background: #fef2f2; padding: 1rem; border-radius: 0.5rem; }
</style>
"""


def _get_controller() -> ProposalController:
    """Create one controller per browser session."""
    if "controller" not in st.session_state:
        st.session_state.controller = ProposalController(
            summarizer=Summarizer(),
            outline_generator=OutlineGenerator(),
            renderer=ResultsRenderer(),
        )
    return st.session_state.controller


def _render_sidebar(controller: ProposalController) -> None:
    with st.sidebar:
        st.header("Session Controls")
        if st.button("Clear results", use_container_width=True, disabled=controller.busy):
            controller.renderer.clear()
        st.divider()
        st.caption(
            "Outlines are grounded with Google Search. Sources the model relied on "
            "are listed beneath each outline."
        )


def main() -> None:
    st.set_page_config(page_title="Proposal Outline Studio", layout="wide")

    st.title("Proposal Outline Studio")
    st.caption("Turn a raw project posting into a researched proposal outline.")

    controller = _get_controller()
    _render_sidebar(controller)

    description = st.text_area(
        "Project description",
        key="project_description",
        height=240,
        placeholder="Paste the full project description here...",
    )
    clicked = st.button("Generate Outline", type="primary", disabled=controller.busy)

    loading_placeholder = st.empty()
    results_placeholder = st.empty()

    def _draw(view: ResultsView) -> None:
        if view.loading:
            loading_placeholder.info(f"⏳ {view.loading_message}")
        else:
            loading_placeholder.empty()
        if view.html:
            css_class = "results error" if view.is_error else "results"
            results_placeholder.markdown(
                f'{RESULTS_CSS}<div class="{css_class}">{view.html}</div>',
                unsafe_allow_html=True,
            )
        else:
            results_placeholder.empty()

    controller.renderer.bind(_draw)

    if clicked:
        LOGGER.info("Generate triggered (%d chars)", len(description or ""))
        asyncio.run(controller.handle_generate(description))


if __name__ == "__main__":
    main()
