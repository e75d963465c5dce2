import pandas as pd
import plotly.express as px
import streamlit as st

from utils_capacity_planning.maintenance_capacity import BACKUP, INDEX_REBUILD, STORAGE_RECLAIM, alerts_frame
from utils_capacity_planning.settings_capacity import INDEX_REBUILD_MIN_CPU, MAX_ALERTS, STORAGE_RECLAIM_MIN_ROWS

ICONS = {STORAGE_RECLAIM: "🗄️", BACKUP: "✅", INDEX_REBUILD: "⚠️"}
SEVERITY_BADGE = {"high": "🔴 HIGH", "medium": "🟠 MEDIUM", "low": "⚪ LOW"}


def maintenance_schedule(alerts):
    st.subheader("1️⃣ Maintenance Schedule & Alerts")

    if not alerts:
        st.info("No maintenance alerts generated yet. Upload CSV data to see predictions.")
        return

    for a in alerts:
        with st.container(border=True):
            left, right = st.columns([5, 1])
            left.markdown(f"{ICONS.get(a.kind, '📅')} **{a.title}**  ·  {SEVERITY_BADGE[a.severity]}")
            left.caption(a.description)
            left.caption(f"📅 {a.scheduled_date.isoformat()}   ⏱ {a.estimated_duration}   · {a.status}")
            right.caption(f"from {a.source_date}")

    with st.expander("🔎 Detailed Insights: Alert Timeline"):
        df = alerts_frame(alerts)
        fig = px.scatter(
            df, x="Scheduled", y="Task", color="Severity", symbol="Status",
            title=f"Next {MAX_ALERTS} Maintenance Windows",
            color_discrete_map={"HIGH": "#E15F99", "MEDIUM": "#FF9F1C", "LOW": "#007ACC"},
        )
        fig.update_traces(marker=dict(size=14))
        st.plotly_chart(fig, use_container_width=True, key="cp_alert_timeline")
        st.dataframe(df, use_container_width=True, hide_index=True)

        st.markdown("### 🔍 How these are produced")
        st.table(pd.DataFrame({
            "Rule": [
                f"More than {STORAGE_RECLAIM_MIN_ROWS} inputs in a day",
                "Every 7th distinct date (1st, 8th, 15th, …)",
                f"Daily average CPU above {INDEX_REBUILD_MIN_CPU}%",
            ],
            "Task": ["Storage reclaim (+3 days)", "Full backup (+7 days)", "Index rebuild (+1 day)"],
            "Severity": ["Medium", "Medium", "High"],
        }))

        st.markdown("### 🗣 Explanation for Non-Analytic Users")
        st.markdown("""
        These are **scheduling suggestions from fixed rules**, not a trained forecast.  
        - Busy days fill storage faster, so a cleanup is suggested a few days later.  
        - Backups follow a steady weekly rhythm through the data.  
        - Sustained high CPU often points at stale indexes, so a rebuild is suggested the next day.  
        """)
