import logging
from functools import partial

import streamlit as st

from portfolio_page.client import load_json_source
from portfolio_page.comments import CommentPanelController, create_controller
from portfolio_page.config import load_settings
from portfolio_page.greeting import pick_greeting, show_composition_demo
from portfolio_page.happiness import render_happiness_chart
from portfolio_page.travel_map import render_travel_map

settings = load_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("portfolio_page.app")

st.set_page_config(page_title="Portfolio", page_icon="👋", layout="wide")
st.markdown("""
<style>
#greeting-container{ font-size:1.6rem; font-weight:700; margin:0 0 8px 0; }
#comments p{ margin:0 0 4px 0; padding:6px 10px; border-radius:8px; background:rgba(127,127,127,.10); }
#comments:empty::after{ content:"No comments yet."; opacity:.6; }
</style>
""", unsafe_allow_html=True)


def get_controller() -> CommentPanelController:
    if "comments" not in st.session_state:
        st.session_state["comments"] = create_controller(settings, notify=st.toast)
    return st.session_state["comments"]


@st.cache_data(show_spinner=False)
def happiness_payload(source: str, timeout: float) -> dict:
    return load_json_source(source, timeout=timeout)


def comments_panel(controller: CommentPanelController) -> None:
    st.markdown(f'<div id="comments">{controller.panel.to_html()}</div>', unsafe_allow_html=True)


# Greeting and composition demo run once per session
if "greeting" not in st.session_state:
    st.session_state["greeting"] = pick_greeting()
    show_composition_demo(st.toast)

st.title("Welcome to my portfolio")
st.markdown(f'<div id="greeting-container">{st.session_state["greeting"]}</div>', unsafe_allow_html=True)

controller = get_controller()

st.header("Comments")
c1, c2, c3 = st.columns([2, 1, 1], vertical_alignment="bottom")
with c1:
    st.number_input("Max comments", min_value=0, step=1, value=controller.preference, key="maxComments")
with c2:
    st.button("Update", on_click=lambda: controller.update_preference(st.session_state["maxComments"]),
              use_container_width=True)
with c3:
    st.button("Delete all comments", on_click=controller.delete_all_comments, use_container_width=True)

if settings.refresh_seconds:
    @st.fragment(run_every=settings.refresh_seconds)
    def live_comments():
        controller.refresh()
        comments_panel(controller)

    live_comments()
else:
    comments_panel(controller)

with st.form("comment-form", clear_on_submit=True):
    st.text_area("Leave a comment", key="comment_text")
    st.form_submit_button("Post", on_click=lambda: controller.submit_comment(st.session_state["comment_text"]))

st.header("Where I've been")
render_travel_map()

st.header("Happiest countries")
render_happiness_chart(
    settings.happiness_url,
    notify=st.warning,
    loader=partial(happiness_payload, timeout=settings.request_timeout),
)
