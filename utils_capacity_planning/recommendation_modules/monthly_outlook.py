import plotly.express as px
import streamlit as st

from utils_capacity_planning.aggregation_capacity import monthly_frame


def monthly_outlook(monthly):
    st.subheader("2️⃣ Monthly Resource Outlook")

    with st.expander("🔎 Detailed Insights: Month by Month"):
        if not monthly:
            st.info("No monthly statistics available.")
            return

        df = monthly_frame(monthly)
        fig = px.bar(
            df, x="month", y=["cpu", "memory"], barmode="group",
            labels={"month": "Month", "value": "Average (%)", "variable": "Metric"},
            title="Average CPU and Memory by Month (mean of daily averages)",
        )
        st.plotly_chart(fig, use_container_width=True, key="cp_monthly_util")

        st.dataframe(
            df.rename(columns={
                "month": "Month", "cpu": "CPU (%)", "memory": "Memory (%)",
                "network": "Network (MB/s)", "power": "Power (KW)",
                "days": "Days", "total_inputs": "Inputs",
            }),
            use_container_width=True, hide_index=True,
        )

        busiest = max(monthly, key=lambda m: m.total_inputs)
        hottest = max(monthly, key=lambda m: m.cpu)
        st.markdown("### 🔍 Analysis")
        st.markdown(f"""
        - **{busiest.key}** carried the most traffic with **{busiest.total_inputs:,}** inputs over {busiest.days} day(s).  
        - **{hottest.key}** ran hottest at **{hottest.cpu}%** average CPU.  
        - Monthly figures average each day equally, so a single very busy day does not dominate its month.
        """)
