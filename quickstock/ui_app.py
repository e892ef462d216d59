# quickstock/ui_app.py
import os
import requests
import pandas as pd
import streamlit as st

# -------------------- Config --------------------
API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
SYSTEM_ERROR = "System error: Unable to process query. Please check connection and try again."

st.set_page_config(page_title="QuickStock AI", layout="wide")
st.title("⚡ QuickStock AI: Hyderabad Demand Intelligence")

# -------------------- HTTP helpers --------------------
def req_get(path: str, **kwargs):
    url = f"{API_BASE}{path}"
    try:
        r = requests.get(url, timeout=15, **kwargs)
        r.raise_for_status()
        return r.json()
    except Exception as e:
        st.error(f"GET {url} failed: {e}")
        return None

def req_post(path: str, payload):
    url = f"{API_BASE}{path}"
    try:
        r = requests.post(url, json=payload, timeout=60)
        if r.status_code >= 400:
            st.error(f"POST {url} failed [{r.status_code}]: {r.text}")
            return None
        return r.json()
    except Exception as e:
        st.error(f"POST {url} failed: {e}")
        return None

# -------------------- Chart helper --------------------
def render_chart(chart: dict):
    if not chart:
        return
    st.markdown(f"**{chart.get('title', '')}**")
    if chart.get("type") == "signals":
        for s in chart.get("data") or []:
            st.info(f"**{s.get('type', 'signal')}**: {s.get('signal', '')}")
        return
    bars = chart.get("bars") or []
    rows = chart.get("data") or []
    if not bars or not rows:
        st.caption("No chart data.")
        return
    df = pd.DataFrame(rows).set_index(chart["xKey"])
    df = df[[b["key"] for b in bars]].rename(columns={b["key"]: b["name"] for b in bars})
    st.bar_chart(df, color=[b["color"] for b in bars], height=260)

# -------------------- Header / Health --------------------
colH1, colH2, colH3 = st.columns([1, 1, 2])
with colH1:
    h = req_get("/health")
    st.metric("API status", "OK" if h and h.get("status") == "ok" else "Down")

info_hdr = req_get("/info") or {}
with colH2:
    st.metric("AI provider", info_hdr.get("provider") or "-")

with colH3:
    st.caption(f"Region: `{info_hdr.get('aws_region', '-')}` · API base: `{API_BASE}`")

tab_forecast, tab_chat, tab_whatif = st.tabs(["📈 Forecasting", "💬 AI Intelligence", "🌧️ What-if"])

# =========================================================
# Forecasting Tab
# =========================================================
with tab_forecast:
    st.subheader("Generate Demand Forecast")
    c1, c2 = st.columns([1, 2])

    with c1:
        with st.form("form_forecast"):
            product_id = st.text_input("Product ID", value="tomato_1kg")
            pincode = st.text_input("Pincode", value="500001")
            days = st.number_input("Horizon (days)", min_value=1, max_value=90, value=7, step=1)
            submitted = st.form_submit_button("Run forecast")
        if submitted:
            with st.spinner("Forecasting..."):
                fc = req_post("/api/v1/forecast", {"product_id": product_id, "pincode": pincode, "days": int(days)})
            if fc is not None:
                st.session_state.last_forecast = fc

    with c2:
        fc = st.session_state.get("last_forecast")
        if not fc:
            st.info("Run a forecast to see P10 / P50 / P90 bands.")
        else:
            pd_ = fc.get("predicted_demand") or {}
            m1, m2, m3, m4 = st.columns(4)
            m1.metric("P10", pd_.get("p10", "-"))
            m2.metric("P50", pd_.get("p50", "-"))
            m3.metric("P90", pd_.get("p90", "-"))
            m4.metric("Confidence", f"{float(fc.get('confidence_score') or 0):.0%}")

            ts = fc.get("time_series") or []
            if ts:
                st.line_chart(pd.DataFrame(ts).set_index("date")[["p10", "p50", "p90"]], height=240)

            for tip in fc.get("actionable_insights") or []:
                st.write(f"- {tip}")

            if st.button("Get AI recommendations", key="fc_recs_btn"):
                with st.spinner("Thinking..."):
                    res = req_post("/api/v1/Intelligence/recommendations", {"forecast": fc})
                if res:
                    st.caption(f"Provider: {res.get('provider_used')}")
                    for line in res.get("recommendations") or []:
                        st.markdown(line)

# =========================================================
# AI Intelligence Tab
# =========================================================
with tab_chat:
    st.subheader("Ask QuickStock AI")

    if "messages" not in st.session_state:
        st.session_state.messages = []

    quick = st.columns(4)
    questions = [
        "Which nodes need restocking?",
        "Show the 3 day forecast",
        "What is the weekly demand trend?",
        "How will Bathukamma affect demand?",
    ]
    for col, text in zip(quick, questions):
        if col.button(text, key=f"quick_{text}"):
            st.session_state.chat_question = text

    q = st.text_input("Ask a question", key="chat_question")

    if st.button("Ask", key="chat_ask_btn"):
        if not q.strip():
            st.error("Please enter a question.")
        else:
            with st.spinner("Thinking..."):
                res = req_post("/api/v1/Intelligence/query", {"query": q})
            st.session_state.messages.append({"role": "user", "content": q})
            if res is None:
                st.session_state.messages.append({"role": "assistant", "content": SYSTEM_ERROR})
            else:
                st.session_state.messages.append({
                    "role": "assistant",
                    "content": res.get("response") or "",
                    "chart": res.get("chart"),
                    "provider": res.get("provider_used"),
                })

    for msg in reversed(st.session_state.messages):
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])
            if msg.get("provider"):
                st.caption(f"Provider: {msg['provider']}")
            render_chart(msg.get("chart"))

# =========================================================
# What-if Tab
# =========================================================
with tab_whatif:
    st.subheader("Scenario Planning")
    scenario_type = st.selectbox("Scenario", ["rain", "festival", "heatwave"], key="wi_type")
    notes = st.text_area("Details (optional)", key="wi_notes")

    if st.button("Analyze scenario", key="wi_btn"):
        scenario = {"type": scenario_type}
        if notes.strip():
            scenario["details"] = notes.strip()
        with st.spinner("Analyzing..."):
            res = req_post("/api/v1/Intelligence/what-if", {"scenario": scenario})
        if res:
            st.caption(f"Provider: {res.get('provider_used')}")
            st.markdown(res.get("impact_analysis") or "")
        else:
            st.warning(SYSTEM_ERROR)
