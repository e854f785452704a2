"""Streamlit UI for the roadmap builder - chat on the left, roadmap on the right.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio  # noqa: E402

import streamlit as st  # noqa: E402

from backend.app.roadmap.errors import RoadmapError  # noqa: E402
from ui.helpers import (  # noqa: E402
    EXAMPLE_PROMPTS,
    build_activity_lines,
    build_chat_rows,
    build_map_points,
    create_session,
    format_day_heading,
    get_dev_token,
)

# Configuration
BACKEND_URL = "http://localhost:8000"

# Page config
st.set_page_config(
    page_title="Wanderlust",
    page_icon="✈️",
    layout="wide",
)

# Initialize session state
if "session" not in st.session_state:
    st.session_state.session = create_session(BACKEND_URL, get_dev_token())
if "error" not in st.session_state:
    st.session_state.error = None

session = st.session_state.session

st.title("✈️ Wanderlust")
st.caption("Describe your trip, then refine it in the chat.")

col_chat, col_roadmap = st.columns([1, 2])

# =============================================================================
# LEFT COLUMN - CHAT
# =============================================================================
with col_chat:
    st.subheader("💬 Chat")

    for role, content in build_chat_rows(session.current_transcript()):
        with st.chat_message(role):
            st.markdown(content)

    if not session.current_transcript():
        st.caption("Try: " + " · ".join(EXAMPLE_PROMPTS))

    if st.session_state.error:
        st.error(f"❌ {st.session_state.error}")

    prompt = st.chat_input("Ask anything about your trip...")
    if prompt:
        st.session_state.error = None
        with st.spinner("⏳ Planning your trip..."):
            try:
                asyncio.run(session.submit(prompt))
            except RoadmapError as e:
                st.session_state.error = str(e)
        st.rerun()

# =============================================================================
# RIGHT COLUMN - ROADMAP
# =============================================================================
with col_roadmap:
    itinerary = session.current_itinerary()

    if itinerary is None:
        st.info("👈 Describe your trip in the chat to see your roadmap here.")
    else:
        st.subheader(f"🗺️ {itinerary.title}")
        if itinerary.description:
            st.markdown(f"_{itinerary.description}_")

        points = build_map_points(itinerary)
        if points:
            zoom = int(itinerary.map_viewport.zoom) if itinerary.map_viewport else None
            st.map(points, zoom=zoom)

        for day in itinerary.days:
            with st.expander(format_day_heading(day), expanded=day.day == 1):
                for line in build_activity_lines(day):
                    st.markdown(line)
