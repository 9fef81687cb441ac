"""
Streamlit Frontend for SubScan

The dashboard a user looks at to see what their subscriptions cost.

DESIGN PRINCIPLES:
1. The store is the only source of truth; the UI never keeps its own copy
2. Totals shown are always recomputed from the store's snapshot
3. Validation errors are shown next to the form, in plain language
4. The animated total is decoration and always lands on the real figure
"""

import html
import time

import streamlit as st

from subscan.aggregation import monthly_cost, summarize
from subscan.config import get_settings, validate_all_settings
from subscan.display import (
    burn_ratio,
    counter_frames,
    cycle_suffix,
    format_amount,
    frame_interval,
)
from subscan.errors import (
    CorruptStateError,
    InvalidSubscriptionError,
    PersistenceError,
    UnknownCategoryError,
)
from subscan.models import (
    BillingCycle,
    SubscriptionCategory,
    available_presets,
    color_for,
)
from subscan.orchestrator import create_app_components
from subscan.store import SubscriptionStore


# Page configuration
st.set_page_config(
    page_title="SubScan",
    page_icon="💳",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for the cards
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .sub-card {
        padding: 16px;
        border-radius: 10px;
        border-left: 5px solid var(--accent);
        background-color: #111827;
        color: #f9fafb;
        margin: 8px 0;
    }
    .sub-category {
        font-size: 0.8em;
        letter-spacing: 0.1em;
        color: var(--accent);
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_store() -> SubscriptionStore:
    """Get or create the loaded store (cached across reruns and sessions)."""
    store, _ = create_app_components()
    return store


def main():
    """Main application entry point."""
    try:
        store = get_store()
    except CorruptStateError as e:
        st.error(
            f"Your saved subscriptions could not be read ({e.reason}). "
            "Set SUBSCAN_ON_CORRUPT_STATE=reset to back them up and start fresh."
        )
        st.stop()
    except PersistenceError as e:
        st.error(f"Storage is unavailable: {e}")
        st.stop()

    st.sidebar.title("💳 SubScan")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "➕ Add Subscription", "⚙️ Settings"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard_page(store)
    elif page == "➕ Add Subscription":
        render_add_page(store)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_totals(store: SubscriptionStore):
    """Render the monthly burn, yearly total and count."""
    app_settings = get_settings().app
    symbol = app_settings.currency_symbol
    summary = summarize(store.all())

    col1, col2, col3 = st.columns(3)

    with col1:
        st.markdown("**MONTHLY BURN**")
        placeholder = st.empty()
        previous = st.session_state.get("shown_monthly_total")
        if previous != summary.monthly_total:
            delay = frame_interval(app_settings.counter_duration_ms, app_settings.counter_steps)
            for value in counter_frames(summary.monthly_total, app_settings.counter_steps):
                placeholder.markdown(
                    f'<div class="big-number">{format_amount(value, symbol)}</div>',
                    unsafe_allow_html=True,
                )
                time.sleep(delay)
            st.session_state.shown_monthly_total = summary.monthly_total
        placeholder.markdown(
            f'<div class="big-number">{format_amount(summary.monthly_total, symbol)}</div>',
            unsafe_allow_html=True,
        )
        st.progress(burn_ratio(summary.monthly_total, app_settings.budget_ceiling))

    with col2:
        st.markdown("**YEARLY TOTAL**")
        st.markdown(f"### {format_amount(summary.yearly_total, symbol)}")

    with col3:
        st.markdown("**ACTIVE SUBS**")
        st.markdown(f"### {summary.subscription_count}")


def render_presets(store: SubscriptionStore):
    """Quick-add buttons for presets not tracked yet."""
    presets = available_presets(store.all())
    if not presets:
        return

    st.markdown("### Quick Add")
    symbol = get_settings().app.currency_symbol
    columns = st.columns(min(len(presets), 3))
    for index, preset in enumerate(presets):
        with columns[index % len(columns)]:
            label = f"+ {preset.name} ({format_amount(preset.cost, symbol)}/mo)"
            if st.button(label, key=f"preset-{preset.name}"):
                try:
                    store.add_from_preset(preset)
                except PersistenceError as e:
                    st.error(f"Could not save: {e}")
                else:
                    st.rerun()


def render_dashboard_page(store: SubscriptionStore):
    """Render totals and the subscription cards."""
    st.title("📊 Your Subscriptions")
    render_totals(store)
    st.markdown("---")

    subscriptions = store.all()
    if not subscriptions:
        st.info("No subscriptions tracked yet. Add one, or pick a preset below.")
        render_presets(store)
        return

    symbol = get_settings().app.currency_symbol
    st.markdown(f"**{len(subscriptions)} TRACKED**")

    for sub in subscriptions:
        card, action = st.columns([5, 1])
        with card:
            st.markdown(f"""
            <div class="sub-card" style="--accent: {sub.color}">
                <div class="sub-category">{sub.category.value.upper()}</div>
                <h4>{html.escape(sub.name)}</h4>
                <span>{format_amount(sub.cost, symbol)}/{cycle_suffix(sub.billing_cycle)}</span>
                <small> ≈ {format_amount(monthly_cost(sub), symbol)}/mo</small>
            </div>
            """, unsafe_allow_html=True)
        with action:
            if st.button("✕ Remove", key=f"remove-{sub.id}"):
                try:
                    store.remove(sub.id)
                except PersistenceError as e:
                    st.error(f"Could not save: {e}")
                else:
                    st.rerun()

    st.markdown("---")
    render_presets(store)


def render_add_page(store: SubscriptionStore):
    """Render the new subscription form."""
    st.title("➕ Add Subscription")

    with st.form("new_subscription", clear_on_submit=True):
        name = st.text_input("Service name", placeholder="Netflix, Spotify...")
        col1, col2 = st.columns(2)
        with col1:
            cost = st.text_input("Cost", placeholder="9.99")
        with col2:
            billing_cycle = st.selectbox(
                "Cycle",
                options=list(BillingCycle),
                format_func=lambda c: c.value.title(),
            )
        category = st.selectbox(
            "Category",
            options=list(SubscriptionCategory),
            format_func=lambda c: c.value,
        )
        st.markdown(
            f'<div class="sub-card" style="--accent: {color_for(category)}">'
            f'<span class="sub-category">{category.value.upper()}</span></div>',
            unsafe_allow_html=True,
        )
        submitted = st.form_submit_button("Add Subscription", type="primary")

    if not submitted:
        return

    try:
        sub = store.add(name, cost, billing_cycle, category)
    except InvalidSubscriptionError as e:
        for issue in e.issues:
            st.error(f"{issue.field.replace('_', ' ').title()}: {issue.message}")
    except UnknownCategoryError as e:
        st.error(str(e))
    except PersistenceError as e:
        st.error(f"Could not save: {e}")
    else:
        st.success(f"Added {sub.name}.")


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    for name, key in [("Storage", "storage"), ("Application", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    if status.get("storage"):
        storage_settings = get_settings().storage
        st.markdown(f"**Backend:** `{storage_settings.backend}`")
        st.markdown(f"**Data directory:** `{storage_settings.data_dir}`")
        st.markdown(f"**State key:** `{storage_settings.state_key}`")

    st.markdown("---")
    st.markdown(
        "Configure SubScan with `SUBSCAN_*` environment variables or a `.env` file. "
        "See `.env.example` for the available settings."
    )


if __name__ == "__main__":
    main()
