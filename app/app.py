# Project: cloudy-life
# Owner: GreenUnicorn
"""
app.py — Streamlit "How cloudy was your life?" dashboard.

Run with:
    streamlit run app/app.py

Requires: pip install -e ".[ui]"
Data source: ERA5 reanalysis via Open-Meteo Historical Weather API (free, no key).
"""

import sys
from pathlib import Path

# Ensure the src/ package is importable when running from the project root
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from datetime import date

import plotly.graph_objects as go
import streamlit as st

from cloudy_life.categories import (
    CLEAR_COLOR,
    CLOUDY_COLOR,
    MIN_YEAR,
    CloudCoverCategory,
    color_for_value,
    report_title,
    rgb_string,
)
from cloudy_life.config import default_config
from cloudy_life.geocode import LocationNotFoundError, search_locations
from cloudy_life.periods import InvalidPeriodError, next_period_defaults
from cloudy_life.pipeline import build_report
from cloudy_life.report import fun_fact, is_reliable, period_phrase


# ─────────────────────────────────────────────────────────────
# Page config — must be first Streamlit call
# ─────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="How Cloudy Was Your Life?",
    page_icon="☁️",
    layout="wide",
    initial_sidebar_state="collapsed",
)


# ─────────────────────────────────────────────────────────────
# CSS injection
# ─────────────────────────────────────────────────────────────

CUSTOM_CSS = """
<style>
  /* ── Reset Streamlit chrome ── */
  #MainMenu, footer, header { visibility: hidden; }
  .block-container { padding-top: 2rem; padding-bottom: 4rem; max-width: 960px; }

  /* ── Typography & base ── */
  html, body, [class*="css"] {
    font-family: -apple-system, BlinkMacSystemFont, "SF Pro Display",
                 "SF Pro Text", "Segoe UI", Roboto, sans-serif;
    background-color: #0a0a0a;
    color: #f5f5f7;
  }

  /* ── Primary button ── */
  .stButton > button {
    background: #0a84ff !important;
    color: #ffffff !important;
    border: none !important;
    border-radius: 980px !important;
    font-weight: 600 !important;
    padding: 0.6rem 2rem !important;
  }
  .stButton > button:hover { opacity: 0.85; }

  /* ── Hero value ── */
  .hero-value {
    font-size: 6rem;
    font-weight: 700;
    letter-spacing: -0.04em;
    line-height: 1;
    text-align: center;
    background: linear-gradient(180deg, #ffffff 60%, #8e8e93 100%);
    -webkit-background-clip: text;
    -webkit-text-fill-color: transparent;
    background-clip: text;
  }
  .hero-label {
    font-size: 1rem;
    color: #8e8e93;
    text-align: center;
    margin-top: 0.25rem;
  }

  /* ── Stat pills ── */
  .stat-pill {
    background: #2c2c2e;
    border-radius: 12px;
    padding: 14px 18px;
    display: inline-block;
    width: 100%;
  }
  .stat-label {
    font-size: 0.68rem;
    text-transform: uppercase;
    letter-spacing: 0.08em;
    color: #8e8e93;
    font-weight: 500;
  }
  .stat-value {
    font-size: 1.6rem;
    font-weight: 700;
    letter-spacing: -0.03em;
    color: #f5f5f7;
    line-height: 1.2;
  }
  .stat-unit { font-size: 0.9rem; color: #8e8e93; font-weight: 400; }

  /* ── Warning / error cards ── */
  .error-card {
    background: rgba(255, 69, 58, 0.1);
    border: 1px solid rgba(255, 69, 58, 0.3);
    border-radius: 12px;
    color: #ff453a;
    padding: 20px 24px;
    text-align: center;
    margin: 1rem 0;
  }
  .warning-card {
    background: rgba(255, 159, 10, 0.1);
    border: 1px solid rgba(255, 159, 10, 0.3);
    border-radius: 8px;
    color: #ff9f0a;
    font-size: 0.9rem;
    padding: 8px 16px;
    margin: 0.5rem 0;
  }

  /* ── Text ── */
  .condition-line {
    color: #8e8e93;
    font-size: 0.95rem;
    margin-top: 1rem;
    text-align: center;
  }
  .section-label {
    font-size: 0.72rem;
    text-transform: uppercase;
    letter-spacing: 0.1em;
    color: #636366;
    font-weight: 600;
    margin: 2rem 0 0.75rem;
  }
  .location-resolved { color: #8e8e93; font-size: 0.85rem; }

  /* ── Footer ── */
  .wa-footer {
    text-align: center;
    color: #48484a;
    font-size: 0.8rem;
    padding: 3rem 0 1rem;
  }
</style>
"""

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────
# Plotly base layout (dark, no background)
# ─────────────────────────────────────────────────────────────

PLOTLY_LAYOUT = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(
        family="-apple-system, BlinkMacSystemFont, 'SF Pro Display', sans-serif",
        color="#8e8e93",
        size=12,
    ),
    margin=dict(l=8, r=8, t=32, b=8),
    legend=dict(bgcolor="rgba(0,0,0,0)", font=dict(color="#8e8e93")),
    xaxis=dict(showgrid=False, zeroline=False, tickfont=dict(color="#636366")),
    yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
)

BAND_COLORS = ["#fda085", "#f6d365", "#a1b5c8", "#556677"]
GAP_COLOR = "#3a3a3c"


# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────


def stat_html(label: str, value: str, unit: str = "") -> str:
    """Render a stat pill as HTML."""
    return f"""
    <div class="stat-pill">
      <div class="stat-label">{label}</div>
      <div class="stat-value">{value}<span class="stat-unit"> {unit}</span></div>
    </div>
    """


@st.cache_data(ttl=3600)
def load_suggestions(query: str) -> list[dict]:
    """Autocomplete suggestions for a partial place name (empty on error)."""
    try:
        return search_locations(query)
    except RuntimeError:
        return []


@st.cache_data(ttl=86400)
def load_report(periods: list[dict], min_days_per_year: int) -> dict:
    """Run the whole pipeline for the submitted periods.

    Returns {"report": dict} or, on any error, {"error": str}.
    """
    config = default_config()
    config["report"]["min_days_per_year"] = min_days_per_year
    try:
        return {"report": build_report(periods, config=config)}
    except InvalidPeriodError as exc:
        return {"error": str(exc)}
    except LocationNotFoundError as exc:
        return {"error": str(exc)}
    except RuntimeError as exc:
        message = f"An error occurred while fetching weather data: {exc}"
        if "internet" not in message:
            message += " Please check your internet connection and try again."
        return {"error": message}


# ─────────────────────────────────────────────────────────────
# Session state initialisation
# ─────────────────────────────────────────────────────────────

if "period_ids" not in st.session_state:
    st.session_state.period_ids = [0]    # one form block per id, in order
    st.session_state.next_id = 1
if "coords" not in st.session_state:
    st.session_state.coords = {}         # period id -> selected location dict
if "result" not in st.session_state:
    st.session_state.result = None
if "add_warning" not in st.session_state:
    st.session_state.add_warning = None


def collect_periods() -> list[dict]:
    """Read the current form values into period dicts, in form order."""
    periods = []
    for pid in st.session_state.period_ids:
        location = st.session_state.get(f"location-{pid}", "")
        coords = st.session_state.coords.get(pid)
        # Drop a stale autocomplete selection if the text was edited afterwards
        if coords and coords["display_name"] != location:
            coords = None
        periods.append({
            "start": st.session_state.get(f"start-{pid}"),
            "end": st.session_state.get(f"end-{pid}"),
            "location": location,
            "coords": coords,
        })
    return periods


def add_period() -> None:
    today = date.today()
    try:
        defaults = next_period_defaults(collect_periods(), today=today)
    except InvalidPeriodError as exc:
        st.session_state.add_warning = str(exc)
        return
    st.session_state.add_warning = None
    pid = st.session_state.next_id
    st.session_state.next_id += 1
    st.session_state.period_ids.append(pid)
    if defaults["start"] is not None:
        st.session_state[f"start-{pid}"] = defaults["start"]
    st.session_state[f"end-{pid}"] = defaults["end"]


def remove_period(pid: int) -> None:
    if len(st.session_state.period_ids) > 1:
        st.session_state.period_ids.remove(pid)
        st.session_state.coords.pop(pid, None)


def select_suggestion(pid: int) -> None:
    choice = st.session_state.get(f"suggest-{pid}")
    if choice:
        st.session_state.coords[pid] = choice
        st.session_state[f"location-{pid}"] = choice["display_name"]


# ─────────────────────────────────────────────────────────────
# SECTION 1: Periods form
# ─────────────────────────────────────────────────────────────

st.markdown(
    '<h1 style="text-align:center;letter-spacing:-0.03em;">How Cloudy Was Your Life?</h1>'
    '<div class="condition-line" style="margin-top:0;margin-bottom:2rem;">'
    "Tell us where you have lived and we'll add up every day of sky above you"
    "</div>",
    unsafe_allow_html=True,
)

today = date.today()
first_day = date(MIN_YEAR, 1, 1)

for index, pid in enumerate(st.session_state.period_ids):
    is_first = index == 0
    st.session_state.setdefault(f"start-{pid}", None)
    st.session_state.setdefault(f"end-{pid}", today)
    head_col, remove_col = st.columns([6, 1])
    with head_col:
        st.markdown(f'<div class="section-label">Location {index + 1}</div>', unsafe_allow_html=True)
    with remove_col:
        if len(st.session_state.period_ids) > 1:
            st.button("×", key=f"remove-{pid}", on_click=remove_period, args=(pid,))

    start_col, end_col = st.columns(2)
    with start_col:
        st.date_input(
            "Start date",
            min_value=first_day,
            max_value=today,
            key=f"start-{pid}",
            help="From 1970 onwards" if is_first else "When you moved here",
        )
    with end_col:
        st.date_input(
            "End date",
            min_value=first_day,
            max_value=today,
            key=f"end-{pid}",
            help="Defaults to today" if is_first else "When you left",
        )

    location_text = st.text_input(
        "Location",
        placeholder="e.g., London, Tokyo, New York",
        key=f"location-{pid}",
    )

    selected = st.session_state.coords.get(pid)
    if selected and selected["display_name"] == location_text:
        st.markdown(
            f'<div class="location-resolved">📍 {selected["display_name"]} &nbsp;·&nbsp; '
            f'{selected["latitude"]:.2f}, {selected["longitude"]:.2f}</div>',
            unsafe_allow_html=True,
        )
    elif len(location_text.strip()) >= 2:
        suggestions = load_suggestions(location_text.strip())
        if suggestions:
            st.selectbox(
                "Suggestions",
                options=suggestions,
                index=None,
                format_func=lambda loc: f'{loc["display_name"]} ({loc["latitude"]:.2f}, {loc["longitude"]:.2f})',
                key=f"suggest-{pid}",
                on_change=select_suggestion,
                args=(pid,),
                placeholder="Pick a suggestion or keep your text",
            )
        else:
            st.caption("No locations found. Try a different search term.")

if len(st.session_state.period_ids) == 1:
    st.markdown(
        '<div class="condition-line">🌍 Lived in multiple cities? '
        "Add them to see your complete weather story!</div>",
        unsafe_allow_html=True,
    )

if st.session_state.add_warning:
    st.markdown(
        f'<div class="warning-card">⚠️ {st.session_state.add_warning}</div>',
        unsafe_allow_html=True,
    )

add_col, submit_col = st.columns(2)
with add_col:
    st.button("➕ Add Another Location", use_container_width=True, on_click=add_period)
with submit_col:
    submitted = st.button("Analyse My Skies", use_container_width=True)

config = default_config()
min_days_per_year = config["report"]["min_days_per_year"]
min_total_days = config["report"]["min_total_days"]

if submitted:
    with st.spinner("Fetching decades of cloud cover…"):
        st.session_state.result = load_report(collect_periods(), min_days_per_year)


# ─────────────────────────────────────────────────────────────
# SECTION 2: Results
# ─────────────────────────────────────────────────────────────

result = st.session_state.result

if result and "error" in result:
    st.markdown(f'<div class="error-card">⚠️ {result["error"]}</div>', unsafe_allow_html=True)

elif result and not is_reliable(result["report"], min_total_days):
    st.markdown(
        '<div class="condition-line" style="padding:3rem 0;">'
        "Insufficient data to generate reliable results. Please ensure your "
        f"date range includes at least {min_total_days} days of data."
        "</div>",
        unsafe_allow_html=True,
    )

elif result:
    report = result["report"]
    avg = report["average_cloud_cover"]

    # ── Hero ─────────────────────────────────────────────────
    st.markdown(
        f'<h2 style="text-align:center;margin-top:2rem;">{report_title(avg)}</h2>'
        f'<div class="hero-value">{avg:.1f}%</div>'
        f'<div class="hero-label">Average Cloud Cover</div>'
        f'<div class="condition-line">{report["total_days"]:,} days analyzed '
        f"{period_phrase(report)}</div>",
        unsafe_allow_html=True,
    )

    pill_cols = st.columns(4)
    for col, category in zip(pill_cols, CloudCoverCategory):
        with col:
            st.markdown(
                stat_html(
                    category.label,
                    f'{report[f"{category.value}_days"]:,}',
                    f'days · {report[f"{category.value}_percentage"]:.1f}%',
                ),
                unsafe_allow_html=True,
            )

    # ── Sky conditions breakdown (stacked bar) ───────────────
    st.markdown('<div class="section-label">Sky Conditions Breakdown</div>', unsafe_allow_html=True)

    fig_breakdown = go.Figure()
    for band, color in zip(report["breakdown"], BAND_COLORS):
        fig_breakdown.add_trace(
            go.Bar(
                x=[band["percentage"]],
                y=["sky"],
                orientation="h",
                name=f'{band["label"]} ({band["range"]})',
                marker_color=color,
                marker_line_width=0,
                text=f'{band["percentage"]:.1f}%',
                textposition="inside",
                hovertemplate=f'{band["label"]}: {band["days"]:,} days<extra></extra>',
            )
        )
    fig_breakdown.update_layout(**{
        **PLOTLY_LAYOUT,
        "barmode": "stack",
        "height": 160,
        "xaxis": dict(**PLOTLY_LAYOUT["xaxis"], range=[0, 100], ticksuffix="%"),
        "legend": dict(**PLOTLY_LAYOUT["legend"], orientation="h", y=-0.4),
    })
    st.plotly_chart(fig_breakdown, use_container_width=True, config={"displayModeBar": False})

    # ── Lifetime timeline (heatmap stripes) ──────────────────
    st.markdown('<div class="section-label">Your Lifetime Cloud Timeline</div>', unsafe_allow_html=True)

    timeline = report["timeline"]
    value_range = report["color_range"]

    if not timeline:
        st.markdown('<div class="condition-line">No data available</div>', unsafe_allow_html=True)
    elif value_range is None:
        st.markdown(
            '<div class="condition-line">Insufficient data per year '
            f"(need at least {min_days_per_year} days per year)</div>",
            unsafe_allow_html=True,
        )
    else:
        low, high = value_range
        colors, hover = [], []
        for y in timeline:
            if y["sufficient"]:
                colors.append(rgb_string(color_for_value(y["average_cloud_cover"], low, high)))
                where = f' in {", ".join(y["locations"])}' if y["locations"] else ""
                hover.append(f'{y["year"]}{where}: {y["average_cloud_cover"]:.1f}% cloud cover')
            else:
                colors.append(GAP_COLOR)
                hover.append(f'{y["year"]}: Insufficient data (&lt;{min_days_per_year} days)')

        fig_timeline = go.Figure(
            go.Bar(
                x=[str(y["year"]) for y in timeline],
                y=[1] * len(timeline),
                marker_color=colors,
                marker_line_width=0,
                hovertext=hover,
                hoverinfo="text",
            )
        )
        fig_timeline.update_layout(**{**PLOTLY_LAYOUT, "height": 180, "bargap": 0})
        st.plotly_chart(fig_timeline, use_container_width=True, config={"displayModeBar": False})

        st.markdown(
            f'<div style="height:10px;border-radius:5px;background:linear-gradient(to right, '
            f'{rgb_string(CLEAR_COLOR)}, {rgb_string(CLOUDY_COLOR)});"></div>'
            f'<div style="display:flex;justify-content:space-between;color:#8e8e93;font-size:0.8rem;">'
            f"<span>{low:.1f}% (clearest year)</span><span>{high:.1f}% (cloudiest year)</span></div>",
            unsafe_allow_html=True,
        )
        if any(not y["sufficient"] for y in timeline):
            st.caption(f"⚠️ Gray stripes indicate years with insufficient data (<{min_days_per_year} days)")

    # ── Locations table ──────────────────────────────────────
    if len(report["periods"]) > 1:
        st.markdown('<div class="section-label">Locations</div>', unsafe_allow_html=True)

        import pandas as pd  # local import — pandas is optional/heavy

        df_periods = pd.DataFrame([
            {
                "Location": f'{p["location"]}, {p["country"]}' if p["country"] else p["location"],
                "Days": p["total_days"],
                "Avg cloud cover": f'{p["average_cloud_cover"]:.1f}%',
                "Cloud-free days": p["clear_days"],
                "Overcast days": p["overcast_days"],
            }
            for p in report["periods"]
        ])
        st.dataframe(df_periods, use_container_width=True, hide_index=True)

    st.markdown(f'<div class="condition-line">{fun_fact(report)}</div>', unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────
# Footer
# ─────────────────────────────────────────────────────────────

st.markdown(
    '<div class="wa-footer">'
    'Powered by <a href="https://open-meteo.com" style="color:#0a84ff;'
    'text-decoration:none;">Open-Meteo</a> Historical Weather API'
    " &nbsp;·&nbsp; ERA5 reanalysis &nbsp;·&nbsp; No API key required"
    "</div>",
    unsafe_allow_html=True,
)
