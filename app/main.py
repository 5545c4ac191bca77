import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

import streamlit as st
import pandas as pd
import plotly.express as px

from budgetr import config
from budgetr.domain import Frequency
from budgetr.errors import InvalidInput
from budgetr.events import EventBus, EXPENDITURES_UPDATED, SETTINGS_CHANGED
from budgetr.frequency import convert_monthly_amount, format_money, frequency_label, normalize_frequency
from budgetr.services import BudgetService
from budgetr.stores import InMemoryRecordStore, InMemorySettingsStore, FREQUENCY_KEY
from budgetr.transforms import load_seed, record_to_dict

config.configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Budgetr", layout="wide")


def money(amount):
    return format_money(amount, config.CURRENCY_SYMBOL)


def log_change(event, payload):
    st.session_state.event_history.append({"event": event.name, "ts": event.ts, **payload})


if "service" not in st.session_state:
    records, seed_settings = load_seed(config.SEED_PATH)
    seed_settings.setdefault(FREQUENCY_KEY, config.DEFAULT_FREQUENCY)

    bus = EventBus()
    bus.subscribe(EXPENDITURES_UPDATED, log_change)
    bus.subscribe(SETTINGS_CHANGED, log_change)

    st.session_state.event_history = []
    st.session_state.service = BudgetService(
        InMemorySettingsStore(seed_settings, bus=bus),
        InMemoryRecordStore(records, bus=bus),
    )
    logger.info("loaded %d expenditures from %s", len(records), config.SEED_PATH)

service: BudgetService = st.session_state.service
settings = service.settings()

st.sidebar.markdown("### ⚙️ Settings")
frequencies = [f.value for f in Frequency]
current = normalize_frequency(settings.frequency)
chosen = st.sidebar.selectbox("Show amounts", frequencies, index=frequencies.index(current), format_func=frequency_label)
if chosen != current:
    service.set_frequency(chosen)
    st.rerun()

with st.sidebar.form("settings_form"):
    net = st.number_input("Net monthly income", min_value=0.0, value=float(settings.net_monthly_income), step=100.0)
    saved = st.number_input("Current savings", min_value=0.0, value=float(settings.current_savings), step=100.0)
    if st.form_submit_button("Save"):
        service.update_settings(net_monthly_income=net, current_savings=saved)
        st.rerun()

menu = st.sidebar.radio("Menu", ["🏠 Dashboard", "🧾 Expenditures", "🎯 Goals"])
label = frequency_label(settings.frequency)

if menu == "🏠 Dashboard":
    st.title("🏠 Dashboard")
    summary = service.dashboard()

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric(f"Total spent ({label})", money(summary.total_spent))
    with k2:
        st.metric(f"Net income ({label})", money(summary.net_income))
    with k3:
        st.metric(f"Remaining ({label})", money(summary.remaining))
    st.caption(f"Average monthly spend: {money(summary.average_monthly)}")
    top = service.top_categories(3)
    if top:
        st.caption("Top categories: " + ", ".join(f"{name} ({money(amount)}/month)" for name, amount in top))

    shares = service.categories()
    if shares:
        df_cat = pd.DataFrame([s.__dict__ for s in shares])
        fig_cat = px.pie(df_cat, values="amount", names="category", title="Spending by Category")
        fig_cat.update_layout(height=320)
        st.plotly_chart(fig_cat, use_container_width=True)

        for s in shares:
            st.write(f"**{s.category}** · {money(s.amount)} · {s.percent}%")
            st.progress(min(100, s.percent) / 100)
    else:
        st.info("No expenditures yet")

    buckets = service.monthly_totals()
    if buckets:
        fig_m = px.bar(
            x=list(buckets.keys()),
            y=list(buckets.values()),
            labels={"x": "Month", "y": "Spent (monthly base)"},
            title="Spending per Month",
        )
        st.plotly_chart(fig_m, use_container_width=True)

elif menu == "🧾 Expenditures":
    st.title("🧾 Expenditures")

    with st.form("add_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            description = st.text_input("Description")
            amount = st.number_input("Amount (monthly)", min_value=0.0, step=10.0, format="%.2f")
            date = st.date_input("Date")
        with col2:
            category = st.text_input("Category", placeholder="Uncategorized")
            priority = st.number_input("Priority", min_value=1, value=99, step=1)
        if st.form_submit_button("Add expenditure"):
            try:
                service.add_expenditure({
                    "description": description,
                    "amount": amount,
                    "category": category,
                    "priority": priority,
                    "date": date,
                })
            except InvalidInput:
                st.error("Please add description and amount")
            else:
                st.rerun()

    items = service.expenditures()
    if not items:
        st.info("No expenditures")
    else:
        df = pd.DataFrame([record_to_dict(r) for r in items])
        df["date"] = pd.to_datetime(df["date"], errors="coerce").dt.strftime("%Y-%m-%d")
        df["shown"] = [money(convert_monthly_amount(r.amount, settings.frequency)) for r in items]
        st.dataframe(
            df[["description", "category", "shown", "priority", "date"]].rename(columns={"shown": f"Cost ({label})"}),
            use_container_width=True,
        )
        st.download_button("⬇ Download CSV", df.to_csv(index=False), file_name="expenditures.csv", mime="text/csv")

        to_delete = st.selectbox(
            "Delete entry",
            options=[r.id for r in items],
            format_func=lambda rid: next(f"{r.description} ({money(r.amount)})" for r in items if r.id == rid),
        )
        if st.button("Delete"):
            service.delete_expenditure(to_delete)
            st.rerun()

elif menu == "🎯 Goals":
    st.title("🎯 Savings Goal")

    col1, col2 = st.columns(2)
    with col1:
        goal_amount = st.number_input("Goal amount", min_value=0.0, step=100.0)
    with col2:
        goal_date = st.date_input("Goal date", value=None)
    use_avg = st.checkbox("Subtract average monthly expenses", value=True)

    if st.button("Calculate"):
        try:
            result = service.project_goal(goal_amount, goal_date, use_average_expenses=use_avg)
        except InvalidInput:
            st.warning("Set goal amount and date")
        else:
            m1, m2, m3, m4 = st.columns(4)
            m1.metric("Months", result.months_remaining)
            m2.metric("Remaining", money(result.amount_remaining))
            m3.metric("Required / month", money(result.required_monthly))
            m4.metric("Estimated available / month", money(result.estimated_available_monthly))
            if result.on_track:
                st.success("On track ✅")
            else:
                st.error(f"Shortfall of {money(result.shortfall)} per month, consider trimming")

    if st.session_state.event_history:
        with st.expander("📜 Change history"):
            st.dataframe(pd.DataFrame(st.session_state.event_history), use_container_width=True)
