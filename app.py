"""
Lotto Weekly AI -- Streamlit Dashboard

Interactive view of the statistics engine output: frequencies with hot/cold
highlighting, the recent window, overdue numbers, top pairs, draw patterns
and a preview of the Telegram report.

Run with: streamlit run app.py
"""
import os
import sys

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from lotto_ai.config import CSV_PATH, HIGHLIGHT_COUNT, LAST_N_DRAWS
from lotto_ai.errors import LottoError
from lotto_ai.loader import load_draws, records_to_frame
from lotto_ai.patterns import pattern_summary
from lotto_ai.report import build_final_message, fmt_recency, format_stats_message
from lotto_ai.stats import StatsConfig, compute

# -- Page Config ----------------------------------------------------------

st.set_page_config(
    page_title="Lotto Weekly AI",
    page_icon="🎯",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        font-weight: 700;
        text-align: center;
        padding: 1rem 0;
    }
    .number-ball {
        display: inline-block;
        width: 44px;
        height: 44px;
        border-radius: 50%;
        text-align: center;
        line-height: 44px;
        font-size: 1.1rem;
        font-weight: 700;
        margin: 4px;
        color: white;
    }
    .ball-main { background: linear-gradient(135deg, #FF6B6B, #EE5A24); }
    .ball-strong { background: linear-gradient(135deg, #4ECDC4, #2ECC71); }
</style>
""", unsafe_allow_html=True)


# -- Data Loading (Cached) ------------------------------------------------

@st.cache_data(ttl=3600)
def get_draws(path, last_n):
    return load_draws(path, last_n=last_n)


def balls_html(numbers, strong):
    main = "".join(f'<span class="number-ball ball-main">{n}</span>' for n in numbers)
    return main + f'<span class="number-ball ball-strong">{strong}</span>'


# -- Sidebar --------------------------------------------------------------

st.sidebar.markdown("## Lotto Weekly AI")

page = st.sidebar.radio("Navigate", ["Dashboard", "Pairs & Patterns", "Report Preview"])

st.sidebar.markdown("---")
csv_path = st.sidebar.text_input("Draw history CSV", os.environ.get("LOTTO_CSV_PATH", CSV_PATH))
last_n = st.sidebar.number_input("Draws to analyze", min_value=10, max_value=10000,
                                 value=LAST_N_DRAWS, step=50)
window = st.sidebar.slider("Recent window", min_value=10, max_value=1000, value=200, step=10)
top_pairs = st.sidebar.slider("Top pairs", min_value=5, max_value=50, value=15)
include_unseen = st.sidebar.checkbox("Rank never-seen numbers as overdue", value=True)

st.sidebar.markdown("---")
st.sidebar.markdown(
    "**Disclaimer:** The lottery is random. These statistics have no "
    "predictive value."
)


# -- Load Data ------------------------------------------------------------

try:
    draws = get_draws(csv_path, int(last_n))
    config = StatsConfig(recent_window_size=window, top_pair_count=top_pairs,
                         include_unseen_overdue=include_unseen)
    digest = compute(draws, config)
except LottoError as e:
    st.error(str(e))
    st.stop()

patterns = pattern_summary(draws, digest.max_number)
freq_df = digest.frequency_frame()


# ==========================================================================
# PAGE 1: DASHBOARD
# ==========================================================================

if page == "Dashboard":
    st.markdown('<div class="main-header">Statistical Analysis Dashboard</div>', unsafe_allow_html=True)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Draws Analyzed", digest.total_draws)
    with col2:
        st.metric("Recent Window", digest.window_size)
    with col3:
        st.metric("Expected / Number", f"{digest.expected_per_number:.2f}",
                  help=f"sd = {digest.std_dev_per_number:.2f}")
    with col4:
        st.metric("Chi-square", f"{digest.chi_square:.2f}", help=f"df = {digest.degrees_of_freedom}")

    latest = digest.latest
    st.markdown(f"**Latest draw #{latest.sequence_id}** {latest.date or ''}")
    st.markdown(balls_html(latest.main_numbers, latest.strong_number), unsafe_allow_html=True)

    st.markdown("---")

    # -- 1. Frequency Bar Chart -------------------------------------------
    st.subheader("Main Number Frequency")

    hot = set(s.number for s in digest.hot_all[:HIGHLIGHT_COUNT])
    cold = set(s.number for s in digest.cold_all[:HIGHLIGHT_COUNT])
    colors = ["#2ECC71" if n in hot else "#E74C3C" if n in cold else "#3498DB"
              for n in freq_df["number"]]

    fig = go.Figure(go.Bar(
        x=freq_df["number"],
        y=freq_df["count"],
        marker_color=colors,
        hovertemplate="Number %{x}<br>Count: %{y}<extra></extra>",
    ))
    fig.add_hline(y=digest.expected_per_number, line_dash="dash",
                  annotation_text="Expected", annotation_position="top left")
    fig.update_layout(
        title=f"Main Number Frequency (All {digest.total_draws} Draws)",
        xaxis_title="Number",
        yaxis_title="Frequency",
        template="plotly_dark",
        height=400,
    )
    fig.add_annotation(x=0.02, y=0.98, xref="paper", yref="paper",
                       text="Green=Hot | Blue=Normal | Red=Cold",
                       showarrow=False, font=dict(size=11))
    st.plotly_chart(fig, use_container_width=True)

    # -- 2. Recent Window -------------------------------------------------
    st.subheader(f"Last {digest.window_size} Draws")

    fig = px.bar(freq_df, x="number", y="recent_count",
                 title=f"Frequency in the Last {digest.window_size} Draws",
                 template="plotly_dark", color="recent_count",
                 color_continuous_scale="YlOrRd")
    fig.update_layout(height=350)
    st.plotly_chart(fig, use_container_width=True)

    # -- 3. Hot / Cold / Overdue Tables -----------------------------------
    col_hot, col_cold, col_over = st.columns(3)
    with col_hot:
        st.markdown("**Hot (all)**")
        st.dataframe(pd.DataFrame([
            {"Number": s.number, "Count": s.count, "z": round(s.z, 2)}
            for s in digest.hot_all[:HIGHLIGHT_COUNT]
        ]), hide_index=True)
    with col_cold:
        st.markdown("**Cold (all)**")
        st.dataframe(pd.DataFrame([
            {"Number": s.number, "Count": s.count, "z": round(s.z, 2)}
            for s in digest.cold_all[:HIGHLIGHT_COUNT]
        ]), hide_index=True)
    with col_over:
        st.markdown("**Most overdue**")
        st.dataframe(pd.DataFrame([
            {"Number": s.number, "Draws since": fmt_recency(s.recency), "Count": s.count}
            for s in digest.overdue[:HIGHLIGHT_COUNT]
        ]), hide_index=True)

    # -- 4. Strong Number -------------------------------------------------
    st.subheader("Strong Number")
    strong_df = pd.DataFrame([
        {"Strong": n, "Count": c} for n, c in digest.frequency_strong.items()
    ])
    fig = px.bar(strong_df, x="Strong", y="Count", template="plotly_dark",
                 title=f"Strong Number Frequency (chi-square {digest.chi_square_strong:.2f}, "
                       f"df {digest.degrees_of_freedom_strong})")
    fig.add_hline(y=digest.expected_per_strong, line_dash="dash")
    fig.update_layout(height=300)
    st.plotly_chart(fig, use_container_width=True)


# ==========================================================================
# PAGE 2: PAIRS & PATTERNS
# ==========================================================================

elif page == "Pairs & Patterns":
    st.markdown('<div class="main-header">Pairs & Draw Patterns</div>', unsafe_allow_html=True)

    st.subheader("Top Pair Frequencies")
    if digest.top_pairs:
        pair_df = pd.DataFrame([
            {"Pair": f"{p.a}-{p.b}", "Frequency": p.count} for p in digest.top_pairs
        ])
        fig = px.bar(pair_df, x="Pair", y="Frequency",
                     title=f"Top {len(pair_df)} Most Frequent Number Pairs",
                     template="plotly_dark", color="Frequency",
                     color_continuous_scale="YlOrRd")
        fig.update_layout(height=400)
        st.plotly_chart(fig, use_container_width=True)

    col_oe, col_hl = st.columns(2)

    with col_oe:
        st.subheader("Odd/Even Distribution")
        oe = patterns["odd_even"]
        oe_df = pd.DataFrame([
            {"Split": f"{k[0]}O/{k[1]}E", "Count": v}
            for k, v in oe["distribution"].items() if v
        ])
        fig = px.pie(oe_df, names="Split", values="Count",
                     title=f"Odd/Even Split (even share {oe['even_ratio']:.1%})",
                     template="plotly_dark",
                     color_discrete_sequence=px.colors.qualitative.Set2)
        st.plotly_chart(fig, use_container_width=True)

    with col_hl:
        st.subheader("Low/High Distribution")
        hl = patterns["high_low"]
        hl_df = pd.DataFrame([
            {"Split": f"{k[0]}L/{k[1]}H", "Count": v}
            for k, v in hl["distribution"].items() if v
        ])
        fig = px.pie(hl_df, names="Split", values="Count",
                     title=f"Low (1-{hl['low_bound']}) / High Split",
                     template="plotly_dark",
                     color_discrete_sequence=px.colors.qualitative.Pastel)
        st.plotly_chart(fig, use_container_width=True)

    st.subheader("Sum Range Analysis")
    sr = patterns["sum_range"]
    fig = go.Figure()
    fig.add_trace(go.Histogram(x=sr["sums_series"].tolist(), nbinsx=40,
                               name="Draw Sums", marker_color="#3498DB"))
    fig.add_vrect(x0=sr["zone_70"][0], x1=sr["zone_70"][1],
                  fillcolor="green", opacity=0.15,
                  annotation_text="70% Zone", annotation_position="top")
    fig.update_layout(
        title=f"Sum of 6 Numbers (Mean={sr['stats']['mean']:.0f}, Std={sr['stats']['std']:.1f})",
        xaxis_title="Sum", yaxis_title="Count",
        template="plotly_dark", height=400,
    )
    st.plotly_chart(fig, use_container_width=True)

    st.subheader("Decade Groups")
    ds = patterns["decade_spread"]
    st.dataframe(pd.DataFrame([
        {"Group": label, "Count": count} for label, count in ds["group_counts"].items()
    ]), hide_index=True)
    st.markdown(f"**Most common spread per draw:** {ds['most_common_spread']}")


# ==========================================================================
# PAGE 3: REPORT PREVIEW
# ==========================================================================

elif page == "Report Preview":
    st.markdown('<div class="main-header">Report Preview</div>', unsafe_allow_html=True)

    st.subheader("Console summary")
    st.code(format_stats_message(digest), language="markdown")

    st.subheader("Telegram message (HTML)")
    st.code(build_final_message(digest, patterns), language="html")

    st.subheader("Draw history")
    st.dataframe(records_to_frame(draws), hide_index=True)
