import io
import logging
import re
import datetime as _dt

import streamlit as st
import plotly.io as pio

from file_manager import file_manager_ui

from utils_capacity_planning.data_cleaning_capacity_planning import data_cleaning_capacity_planning
from utils_capacity_planning.recommendation_capacity_planning import recommendation_capacity_planning
from utils_capacity_planning.dashboard_capacity_planning import dashboard_capacity_planning
from utils_capacity_planning.report_capacity_planning import report_capacity_planning
from utils_capacity_planning.aggregation_capacity import daily_frame
from utils_capacity_planning.errors_capacity import CapacityDataError
from utils_capacity_planning.settings_capacity import COMPANY_BLUES

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

#---------------------------------------------------------------------------------------------------------------

pio.templates["mesiniaga_white"] = pio.templates["plotly_white"]
pio.templates["mesiniaga_white"]["layout"].update({
    "colorway": COMPANY_BLUES,
    "font": {"color": "black"},
    "paper_bgcolor": "white",
    "plot_bgcolor": "white",
})
pio.templates.default = "mesiniaga_white"


# Set page config
st.set_page_config(page_title="Database Capacity Planning", layout="wide")
st.title("🗄️ Database Capacity Planning")
st.markdown("Upload resource-utilization samples to view key metrics, daily trends, an activity calendar and maintenance scheduling.")

#-------------------------------------------------------------------------------------------------------------------------------------------

state = file_manager_ui("📂 Data Upload")

if state.loaded_without_rows:
    st.warning(f"`{state.dataset.name}` contains no data rows. Upload a file with at least one row below the header.")
    st.stop()

if not state.has_data:
    st.info("Upload a CSV file from the sidebar to proceed. Expected format: date column + cpu_usage, memory_usage, network_traffic, power_consumption")
    st.stop()

dataset = state.dataset
views = state.views()

st.sidebar.caption(f"Distinct dates: {len(views.groups)}")

#------------------------------------------------------------------------------------------------------------------------------------------------------------

# =========================
# Export UI + Caching
# =========================

@st.cache_data(show_spinner=False)
def _generate_report_cached(_records, dataset_id, client_name, period, logo_path):
    """
    Leading underscore on `_records` tells Streamlit NOT to hash it; `dataset_id` keys the cache.
    """
    return report_capacity_planning(
        _records,
        client_name=client_name,
        period=period,
        logo_path=logo_path,
    )

def _make_filename(default_filename: str | None, client_name: str | None, period: str | None, ext: str) -> str:
    """Build a safe filename given defaults/client/period and the desired extension."""
    if default_filename and str(default_filename).strip():
        base = str(default_filename).strip()
    else:
        cn = (client_name or "Report").strip()
        pr = (period or "period").strip()
        base = f"{cn}_{pr}"
    base = re.sub(r"\s+", "_", base)
    base = re.sub(r"[^A-Za-z0-9._-]", "_", base)
    if not base.lower().endswith(f".{ext}"):
        base = f"{base}.{ext}"
    return base

def export_report_ui(
    dataset,
    client_name: str,
    period: str,
    logo_path: str | None = None,
    *,
    default_filename: str | None = None,
    key_prefix: str = "export_report",
):
    """Renders buttons to export PDF/DOCX for the active dataset."""
    st.markdown("### 📄 Export: Executive Report")

    try:
        pdf_bytes, docx_bytes = _generate_report_cached(
            dataset.records, dataset.dataset_id, client_name, period, logo_path
        )
    except CapacityDataError as e:
        st.warning(str(e))
        return

    st.download_button(
        label="⬇️ Download PDF",
        data=pdf_bytes,
        file_name=_make_filename(default_filename, client_name, period, "pdf"),
        mime="application/pdf",
        key=f"{key_prefix}_pdf",
    )
    st.download_button(
        label="⬇️ Download DOCX",
        data=docx_bytes,
        file_name=_make_filename(default_filename, client_name, period, "docx"),
        mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        key=f"{key_prefix}_docx",
    )

def _infer_period(views) -> str:
    """Human-friendly period label from the dataset's date range."""
    months = [(m.year, m.month) for m in views.monthly]
    if not months:
        return _dt.date.today().strftime("%b %Y")
    first = _dt.date(months[0][0], months[0][1], 1)
    last = _dt.date(months[-1][0], months[-1][1], 1)
    if first == last:
        return first.strftime("%b %Y")
    if first.year == last.year:
        return f"{first.strftime('%b')}-{last.strftime('%b %Y')}"
    return f"{first.strftime('%b %Y')}-{last.strftime('%b %Y')}"

# ---------------------------------------------------------------------------
# Define client_name / period inputs once
_default_client = st.session_state.get("client_name_default", "UEMS")
_default_period = _infer_period(views)
client_name = st.sidebar.text_input("Client Name", value=_default_client, key="ui_client_name").strip() or "Client"
period = st.sidebar.text_input("Report Period Label", value=_default_period, key=f"ui_report_period_{dataset.dataset_id}").strip() or _default_period
st.session_state["client_name_default"] = client_name

#-----------------------------------------------------------------------------------------------------------------------------------

tab1, tab2, tab3, tab4 = st.tabs([
    "🧺 Upload Summary",
    "📊 Dashboard Overview",
    "📈 Maintenance & Recommendation",
    "📅 Export"
])

with tab1:
    data_cleaning_capacity_planning(dataset, views)

with tab2:
    dashboard_capacity_planning(views, state)

with tab3:
    recommendation_capacity_planning(views)

with tab4:
    st.subheader("📅 Download Daily Aggregates")
    output = io.BytesIO()
    daily_frame(views.daily).drop(columns=["day"]).to_csv(output, index=False)
    output.seek(0)
    st.download_button("📅 Download CSV", output, file_name="daily_capacity_aggregates.csv", mime="text/csv")

    export_report_ui(
        dataset,
        client_name=client_name,
        period=period,
        logo_path="logo.png",
        default_filename="Database_Capacity_Planning_Report",
    )
