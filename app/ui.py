# Run from project root: streamlit run app/ui.py
# UI talks to the gateway (GET /api/search). Agent state lives in st.session_state, one controller per browser session.

import os
import sys
import time
from pathlib import Path

# Ensure project root is on path (Streamlit may run with cwd != project root)
_root_from_file = Path(__file__).resolve().parent.parent
_cwd = os.getcwd()
for _root in (_root_from_file, _cwd):
    _root = str(_root)
    if _root not in sys.path:
        sys.path.insert(0, _root)

import streamlit as st

from app.agent.client import SearchClient
from app.agent.controller import AgentController
from app.agent.state import AgentStatus
from app.core.config import API_BASE

# No speech engines are wired into this page; pass recognizer/synthesizer here to enable voice.
if "agent" not in st.session_state:
    st.session_state.agent = AgentController(SearchClient(API_BASE))
agent: AgentController = st.session_state.agent
state = agent.state

st.title("Personal Web Agent")
st.caption("Speak or type what you need. I'll search Google and read the highlights back to you.")

with st.form("agent_form"):
    query = st.text_input(
        "Your request",
        value=state.query,
        placeholder="Find me the latest news on AI...",
        disabled=agent.is_busy,
    )
    submitted = st.form_submit_button(agent.action_label, disabled=agent.is_busy)

if submitted:
    agent.set_query(query)
    with st.spinner("Searching..."):
        agent.submit()
    st.rerun()

if st.button(agent.voice_label, disabled=not agent.speech_supported or agent.is_busy, key="voice_btn"):
    agent.toggle_listening()
    st.rerun()
if not agent.speech_supported:
    st.caption("Voice input is not supported in this client.")
if state.transcript and state.status is not AgentStatus.LISTENING:
    st.caption(f"Captured voice: {state.transcript}")

if state.error:
    st.error(state.error)

st.divider()
header, count = st.columns([3, 1])
header.subheader("Agent Findings")
if state.results:
    count.caption(f"{len(state.results)} results")
    for item in state.results:
        with st.container(border=True):
            st.markdown(f"**[{item.title}]({item.link})**")
            if item.display_link:
                st.caption(item.display_link)
            st.write(item.snippet)
else:
    st.info("Ask me anything and I'll gather the most relevant answers for you.")

# The responding timer flips the state off the script thread; rerun once it has had time to fire.
if state.status is AgentStatus.RESPONDING:
    time.sleep(agent.responding_delay)
    st.rerun()
