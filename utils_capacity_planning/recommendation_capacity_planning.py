import streamlit as st

from utils_capacity_planning.recommendation_modules.maintenance_schedule import maintenance_schedule
from utils_capacity_planning.recommendation_modules.monthly_outlook import monthly_outlook

def recommendation_capacity_planning(views):
    st.header("📈 Maintenance Insights & Recommendations")

    maintenance_schedule(views.alerts)
    monthly_outlook(views.monthly)
