import logging

import streamlit as st

from display import (
    build_cost_donut, cost_row_html, field_text, format_count, format_currency,
    format_percent, profit_card_class, theme_css,
)
from profit_model import (
    CalculatorInputs, compute, distribute, distribution_frame, get_default_inputs,
    update_inputs,
)
from theme_prefs import ThemePreference

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

st.set_page_config(layout="wide", page_title="E-com Profit Pro", page_icon="🧮")

prefs = ThemePreference()

ORDER_FLOW_FIELDS = [
    ('cancelledOverCall', "Cancelled Call", ""),
    ('rtoPercentage', "RTO Rate (%)", "%"),
]
UNIT_ECONOMICS_FIELDS = [
    ('sellingPrice', "Selling Price", "₹"),
    ('productCost', "Product Cost", "₹"),
    ('adCostPerOrder', "Marketing (CPA)", "₹"),
    ('adGstPercentage', "Ad GST (%)", "%"),
    ('shippingCost', "Forward Ship", "₹"),
    ('rtoShippingCost', "RTO Shipping", "₹"),
    ('packingCost', "Packing Cost", "₹"),
    ('productDamageRtoPercentage', "RTO Damage (%)", "%"),
    ('miscellaneous', "Other Exp.", "₹"),
]
TEXT_FIELDS = [f for f, _, _ in ORDER_FLOW_FIELDS + UNIT_ECONOMICS_FIELDS]


def widget_key(field):
    return f"{field}_input"


# --- Initialize Session State ---
if 'initialized' not in st.session_state:
    st.session_state.inputs = get_default_inputs().to_dict()
    st.session_state.dark_mode = prefs.load()
    for field in TEXT_FIELDS:
        st.session_state[widget_key(field)] = field_text(st.session_state.inputs[field])
    st.session_state.initialized = True
    logger.info("New session, dark mode=%s", st.session_state.dark_mode)


def current_inputs():
    return CalculatorInputs.from_dict(st.session_state.inputs)


# --- Callbacks ---
def on_field_change(field):
    key = widget_key(field)
    inputs = update_inputs(current_inputs(), field, st.session_state[key])
    st.session_state.inputs = inputs.to_dict()
    st.session_state[key] = field_text(getattr(inputs, field))


def step_orders(delta):
    value = current_inputs().totalOrders
    new_value = max(0, value - 1) if delta < 0 else value + 1
    st.session_state.inputs = update_inputs(current_inputs(), 'totalOrders', new_value).to_dict()


def reset_inputs():
    st.session_state.inputs = get_default_inputs().to_dict()
    for field in TEXT_FIELDS:
        st.session_state[widget_key(field)] = field_text(st.session_state.inputs[field])
    logger.info("Inputs reset to defaults")


def toggle_theme():
    st.session_state.dark_mode = prefs.toggle(st.session_state.dark_mode)


# --- Perform Calculations with current session state values ---
dark = st.session_state.dark_mode
results = compute(current_inputs())
chart_data = distribute(results)

st.markdown(theme_css(dark), unsafe_allow_html=True)

# --- Header ---
col_title, col_theme, col_reset = st.columns([10, 1, 1])
with col_title:
    st.title("🧮 E-com Profit Pro")
with col_theme:
    st.button("☀️" if dark else "🌙", on_click=toggle_theme,
              help="Switch to Light Mode" if dark else "Switch to Dark Mode")
with col_reset:
    st.button("🔄", on_click=reset_inputs, help="Reset Inputs")

col_inputs, col_results = st.columns([7, 5], gap="large")

# --- Left Pane: Order Flow & Unit Economics ---
with col_inputs:
    st.subheader("📦 Order Flow")
    st.caption("TOTAL ORDERS RECEIVED")
    col_minus, col_count, col_plus = st.columns([1, 3, 1])
    with col_minus:
        st.button("➖", on_click=step_orders, args=(-1,), key="orders_minus", use_container_width=True)
    with col_count:
        st.markdown(f"<h2 style='text-align:center;margin:0'>{current_inputs().totalOrders:g}</h2>",
                    unsafe_allow_html=True)
    with col_plus:
        st.button("➕", on_click=step_orders, args=(1,), key="orders_plus", use_container_width=True)

    order_cols = st.columns(2)
    for col, (field, label, unit) in zip(order_cols, ORDER_FLOW_FIELDS):
        with col:
            st.text_input(label, key=widget_key(field),
                          on_change=on_field_change, args=(field,))

    st.subheader("👛 Unit Economics")
    cost_cols = st.columns(2)
    for i, (field, label, unit) in enumerate(UNIT_ECONOMICS_FIELDS):
        with cost_cols[i % 2]:
            st.text_input(f"{label} ({unit})" if unit == "₹" else label, key=widget_key(field),
                          on_change=on_field_change, args=(field,))

# --- Right Pane: Results ---
with col_results:
    st.markdown(f'''
    <div class="row-2">
      <div class="card"><div class="label">🛒 Delivered</div><div class="value">{format_count(results.deliveredOrders)}</div></div>
      <div class="card"><div class="label">₹ Gross Sales</div><div class="value">{format_currency(results.totalRevenue)}</div></div>
    </div>''', unsafe_allow_html=True)

    st.markdown(f'''
    <div class="{profit_card_class(results.netProfit)}">
      <div class="label">Your Net Profit</div>
      <div class="value">{format_currency(results.netProfit)}</div>
      <div class="split">
        <div><div class="label">Profit Margin</div><div class="sub">{format_percent(results.profitMargin)}</div></div>
        <div style="text-align:right"><div class="label">Total Expenses</div><div class="sub"><i>{format_currency(results.totalExpenses)}</i></div></div>
      </div>
    </div>''', unsafe_allow_html=True)

    st.subheader("📊 Cost Breakdown")
    if chart_data:
        st.plotly_chart(build_cost_donut(chart_data, results.totalExpenses, dark), use_container_width=True)
    else:
        st.info("No expenses to chart.")

    st.caption("DETAILED BREAKDOWN (% OF REVENUE)")
    st.markdown("".join(cost_row_html(d) for d in chart_data), unsafe_allow_html=True)
    st.markdown('''
    <div class="note">ℹ️ Percentages are shown relative to your Gross Revenue. A higher percentage in Ads
    or Product cost usually indicates lower net margins.</div>''', unsafe_allow_html=True)

    with st.expander("Detailed breakdown table"):
        st.dataframe(distribution_frame(chart_data).round(2), use_container_width=True, hide_index=True)

# --- Summary Bar ---
sign_class = "positive" if results.netProfit >= 0 else "negative"
st.markdown(f'''
<div class="summary-bar">
  <div><div class="card-label" style="font-size:.66rem;font-weight:900;color:var(--muted)">NET PROFIT</div>
  <div class="value {sign_class}" style="font-size:1.6rem;font-weight:900">{format_currency(results.netProfit)}</div></div>
  <div><span style="font-size:.66rem;font-weight:900;color:var(--muted)">MARGIN</span>
  <span class="value {sign_class}" style="font-weight:900">{format_percent(results.profitMargin)}</span></div>
</div>''', unsafe_allow_html=True)
