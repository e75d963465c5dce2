import pandas as pd
import streamlit as st

from utils_capacity_planning.records_capacity import parse_number
from utils_capacity_planning.settings_capacity import METRIC_COLUMNS


def raw_frame(dataset) -> pd.DataFrame:
    columns = list(dataset.columns) or None
    return pd.DataFrame([r.fields for r in dataset.records], columns=columns)


def coercion_summary(dataset) -> pd.DataFrame:
    """Per metric column: how many values are missing or not numeric (counted as 0)."""
    rows = []
    total = len(dataset.records)
    for col in METRIC_COLUMNS:
        present = sum(1 for r in dataset.records if (r.fields.get(col) or "").strip())
        numeric = sum(1 for r in dataset.records if parse_number(r.fields.get(col)) is not None)
        rows.append({
            "Column": col,
            "Present": present,
            "Missing": total - present,
            "Non-numeric": present - numeric,
            "Counted as 0": total - numeric,
        })
    return pd.DataFrame(rows)


def data_cleaning_capacity_planning(dataset, views):
    st.success("✅ File successfully loaded!")
    st.subheader("🔍 Upload Overview")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Number of Rows", len(dataset.records))
    col2.metric("Number of Columns", len(dataset.columns))
    col3.metric("Distinct Dates", len(views.groups))
    col4.metric("Rows Without Date", views.dateless)

    missing = [c for c in METRIC_COLUMNS if c not in dataset.columns]
    if "date" not in dataset.columns and "dates" not in dataset.columns:
        st.warning("No `date` or `dates` column found. Daily, monthly and alert views will be empty.")
    if missing:
        st.warning(f"Missing metric columns (treated as 0): {', '.join(missing)}")
    if views.dateless:
        st.info(f"{views.dateless} row(s) have no date. They count toward totals and averages only.")

    st.write("**Numeric Coercion:**")
    st.dataframe(coercion_summary(dataset), use_container_width=True, hide_index=True)

    extra = [c for c in dataset.columns if c not in METRIC_COLUMNS + ("date", "dates")]
    if extra:
        st.caption(f"Other columns kept but not aggregated: {', '.join(extra)}")

    df = raw_frame(dataset)
    st.write("**Sample Data:**")
    st.dataframe(df.head())

    with st.expander("🔎 Click to view full table"):
        st.dataframe(df)

    return df
