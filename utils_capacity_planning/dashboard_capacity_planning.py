# dashboard_capacity_planning.py

import calendar

import numpy as np
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from utils_capacity_planning.aggregation_capacity import daily_frame, input_frequency_stats, metric_trend
from utils_capacity_planning.calendar_capacity import (
    WEEKDAY_LABELS,
    available_months,
    day_detail,
    default_month,
    month_grid,
    shift_month,
)
from utils_capacity_planning.settings_capacity import COMPANY_BLUES, NETWORK_DIVISOR, POWER_DIVISOR

# ---- Visual defaults (Company Blue & White) ----
px.defaults.template = "plotly_white"
px.defaults.color_discrete_sequence = COMPANY_BLUES

LEVEL_SCALE = {"none": 0, "low": 1, "medium": 2, "high": 3, "peak": 4}

# ---- Key namespace helper (avoid collisions with other pages) ----
KEY_NS = "cpdash_"
def k(name: str) -> str:
    return f"{KEY_NS}{name}"


def _delta(trend):
    return None if trend is None else f"{trend.change_pct:+.1f}% vs prior week"


# =========================
# Sections
# =========================
def metric_cards(views):
    s = views.summary
    st.markdown("### 🔹 Key Metrics")
    k1, k2, k3, k4, k5 = st.columns(5)
    k1.metric("Total Records", f"{s.total_records:,}", help=f"{s.start_date} → {s.end_date}" if s.start_date else None)
    k2.metric("Avg Daily Inputs", f"{s.daily_inputs:,.0f}")
    k3.metric("Avg CPU Usage", f"{s.avg_cpu:.1f}%", _delta(metric_trend(views.daily, "cpu")), delta_color="inverse")
    k4.metric("Avg Memory Usage", f"{s.avg_memory:.1f}%", _delta(metric_trend(views.daily, "memory")), delta_color="inverse")
    k5.metric("Avg Power", f"{s.avg_power / POWER_DIVISOR:.2f} KW", _delta(metric_trend(views.daily, "power")), delta_color="inverse")
    st.caption(
        f"Network average: {s.avg_network / NETWORK_DIVISOR:.2f} MB/s  |  "
        f"Date range: {s.start_date or '-'} to {s.end_date or '-'}"
    )


def resource_chart(views):
    st.markdown("### 📈 Resource Utilization Trends")
    if not views.daily:
        st.info("No data available. Please upload a CSV file.")
        return
    df = daily_frame(views.daily).rename(columns={
        "cpu": "CPU Usage (%)",
        "memory": "Memory Usage (%)",
        "network": "Network Traffic (MB/s)",
        "power": "Power Consumption (KW)",
    })
    fig = px.line(
        df, x="date",
        y=["CPU Usage (%)", "Memory Usage (%)", "Network Traffic (MB/s)", "Power Consumption (KW)"],
        markers=True, title="Daily Average Resource Utilization",
        labels={"date": "Date", "value": "Value", "variable": "Metric"},
    )
    fig.update_layout(height=420, legend_title_text="")
    st.plotly_chart(fig, use_container_width=True, key=k("resource_chart"))


def input_frequency_chart(views):
    st.markdown("### 📊 Daily Input Frequency")
    if not views.counts:
        st.info("No data available. Please upload a CSV file.")
        return
    avg, peak = input_frequency_stats(views.counts)
    c1, c2 = st.columns(2)
    c1.caption(f"Avg: {avg:,} inputs/day")
    c2.caption(f"Peak: {peak:,} inputs/day")
    fig = px.bar(
        x=[c.date for c in views.counts], y=[c.inputs for c in views.counts],
        labels={"x": "Date", "y": "Daily Inputs"}, title="Inputs per Day",
    )
    fig.update_traces(hovertemplate="%{x}<br>Daily Inputs: %{y:,}<extra></extra>")
    fig.update_layout(height=380)
    st.plotly_chart(fig, use_container_width=True, key=k("input_chart"))


def _calendar_figure(grid, title):
    z = np.full((len(grid), 7), np.nan)
    text = [["" for _ in range(7)] for _ in grid]
    hover = [["" for _ in range(7)] for _ in grid]
    for w, week in enumerate(grid):
        for d, cell in enumerate(week):
            if cell is None:
                continue
            z[w, d] = LEVEL_SCALE[cell.level]
            text[w][d] = str(cell.day)
            hover[w][d] = f"{cell.date_key}: {cell.input_count} inputs" if cell.input_count else f"{cell.date_key}: No data"
    fig = go.Figure(go.Heatmap(
        z=z, x=WEEKDAY_LABELS, y=[f"W{i + 1}" for i in range(len(grid))],
        text=text, texttemplate="%{text}", hovertext=hover, hoverinfo="text",
        zmin=0, zmax=4, xgap=3, ygap=3, showscale=False,
        colorscale=[[0, "#F2F6FB"], [0.25, "#CFE6FF"], [0.5, "#66B2FF"], [0.75, "#007ACC"], [1, "#004C99"]],
    ))
    fig.update_yaxes(autorange="reversed", showticklabels=False)
    fig.update_layout(title=title, height=360, margin=dict(l=10, r=10, t=50, b=10))
    return fig


def forecast_calendar(views, state):
    st.markdown("### 🗓️ Activity Calendar")
    groups = views.groups
    if "cal_month" not in st.session_state or st.session_state.get("cal_dataset") != (state.dataset and state.dataset.dataset_id):
        st.session_state.cal_month = default_month(groups)
        st.session_state.cal_dataset = state.dataset and state.dataset.dataset_id

    c1, c2, c3 = st.columns([1, 3, 1])
    if c1.button("◀ Prev", key=k("cal_prev")):
        st.session_state.cal_month = shift_month(*st.session_state.cal_month, -1)
    if c3.button("Next ▶", key=k("cal_next")):
        st.session_state.cal_month = shift_month(*st.session_state.cal_month, 1)
    year, month = st.session_state.cal_month
    c2.markdown(f"**{calendar.month_name[month]} {year}**")

    stats = {(m.year, m.month): m for m in views.monthly}.get((year, month))
    if stats:
        m1, m2, m3, m4, m5 = st.columns(5)
        m1.metric("Inputs", f"{stats.total_inputs:,}")
        m2.metric("Avg CPU", f"{stats.cpu}%")
        m3.metric("Avg Memory", f"{stats.memory}%")
        m4.metric("Avg Network", f"{stats.network} MB/s")
        m5.metric("Avg Power", f"{stats.power} KW")
    elif available_months(groups):
        st.caption("No data for this month.")

    grid = month_grid(groups, year, month)
    st.plotly_chart(_calendar_figure(grid, "Activity Level: Low · Medium · High · Peak"),
                    use_container_width=True, key=k("calendar"))

    dated = [cell.date_key for week in grid for cell in week if cell is not None and cell.input_count]
    options = ["(none)"] + dated
    current = state.selected_date if state.selected_date in dated else "(none)"
    choice = st.selectbox("Inspect a day", options, index=options.index(current), key=k("cal_pick"))
    state.select_date(None if choice == "(none)" else choice)

    detail = day_detail(groups, state.selected_date)
    if detail is not None:
        d1, d2, d3, d4, d5 = st.columns(5)
        d1.metric("Inputs", f"{detail.input_count:,}")
        d2.metric("CPU", f"{detail.cpu}%")
        d3.metric("Memory", f"{detail.memory}%")
        d4.metric("Network", f"{detail.network} MB/s")
        d5.metric("Power", f"{detail.power} KW")


# =========================
# Main
# =========================
def dashboard_capacity_planning(views, state):
    st.markdown("## 🧮 Database Capacity Planning: Executive Visual Dashboard")
    if views.is_empty:
        st.info("No dated records in this file. Upload a CSV with a `date` column to see charts.")
        metric_cards(views)
        return

    metric_cards(views)
    st.markdown("---")
    resource_chart(views)
    input_frequency_chart(views)
    st.markdown("---")
    forecast_calendar(views, state)
