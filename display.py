"""Formatting, styling and chart helpers for the calculator screen.

No Streamlit import here, so everything can be exercised without a running app.
"""
from __future__ import annotations

import math
from typing import List

import plotly.graph_objects as go

from profit_model import ChartDatum

CURRENCY = "₹"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_currency(value: float) -> str:
    amount = round_half_up(value)
    if amount < 0:
        return f"-{CURRENCY}{abs(amount):,}"
    return f"{CURRENCY}{amount:,}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def format_count(value: float) -> str:
    return f"{value:.1f}"


def expense_center_label(total_expenses: float) -> str:
    # Thousands, shown in the middle of the donut
    return f"{CURRENCY}{round_half_up(total_expenses / 1000)}k"


def bar_width(percentage_of_revenue: float) -> float:
    # Doubled so small shares stay visible, capped at full width
    return min(100, percentage_of_revenue * 2)


def profit_card_class(net_profit: float) -> str:
    return "card profit positive" if net_profit >= 0 else "card profit negative"


def hover_text(datum: ChartDatum) -> str:
    return f"{format_currency(datum.value)} ({datum.percentageOfExpenses:.1f}% of Exp)"


# --- Theme ---
THEMES = {
    False: {
        "bg": "#FDFDFF",
        "panel": "#ffffff",
        "border": "#f1f5f9",
        "text": "#0f172a",
        "muted": "#94a3b8",
        "track": "#f8fafc",
        "tooltip": "#ffffff",
    },
    True: {
        "bg": "#0f172a",
        "panel": "#1e293b",
        "border": "#334155",
        "text": "#f8fafc",
        "muted": "#94a3b8",
        "track": "#334155",
        "tooltip": "#1e293b",
    },
}


def theme_css(dark: bool) -> str:
    t = THEMES[bool(dark)]
    return f"""
<style>
:root{{
  --bg:{t['bg']}; --panel:{t['panel']}; --border:{t['border']};
  --text:{t['text']}; --muted:{t['muted']}; --track:{t['track']};
  --indigo:#4F46E5; --red:#EF4444;
}}
html, body, .stApp, .block-container{{background:var(--bg); color:var(--text);}}
.block-container{{padding-top:1.6rem; padding-bottom:2rem;}}

.row-2{{display:grid;grid-template-columns:repeat(2,1fr);gap:14px;margin:0 0 14px}}
.card{{
  border-radius:22px; background:var(--panel); border:1px solid var(--border);
  padding:18px 20px; box-shadow:0 1px 2px rgba(0,0,0,.04);
}}
.card .label{{font-size:.66rem; font-weight:900; color:var(--muted); text-transform:uppercase; letter-spacing:.08em}}
.card .value{{font-size:1.6rem; font-weight:900; color:var(--text); line-height:1.15}}
.card.profit{{color:#fff; border:none; margin-bottom:14px}}
.card.profit .label, .card.profit .value, .card.profit .sub{{color:#fff}}
.card.profit .value{{font-size:2.3rem}}
.card.profit.positive{{background:var(--indigo); box-shadow:0 16px 30px rgba(79,70,229,.2)}}
.card.profit.negative{{background:var(--red); box-shadow:0 16px 30px rgba(239,68,68,.2)}}
.card .split{{display:flex; justify-content:space-between; border-top:1px solid rgba(255,255,255,.15); margin-top:14px; padding-top:12px}}
.card .sub{{font-size:1.05rem; font-weight:900}}

.cost-row{{display:flex; justify-content:space-between; align-items:flex-end; margin:10px 4px 4px}}
.cost-row .name{{font-size:.78rem; font-weight:700; color:var(--text)}}
.cost-row .dot{{display:inline-block; width:10px; height:10px; border-radius:999px; margin-right:8px}}
.cost-row .pct{{font-size:.66rem; font-weight:900; color:var(--indigo); text-align:right}}
.cost-row .amt{{font-size:.66rem; font-weight:700; color:var(--muted); text-align:right}}
.track{{width:100%; height:6px; border-radius:999px; background:var(--track); overflow:hidden}}
.track .fill{{height:100%; border-radius:999px; opacity:.6}}
.note{{margin-top:18px; padding:12px 14px; border-radius:18px; border:1px solid var(--border);
  font-size:.72rem; font-weight:700; color:#64748b}}
.summary-bar{{display:flex; justify-content:space-between; align-items:center;
  border-top:1px solid var(--border); margin-top:24px; padding-top:14px}}
.summary-bar .value.positive{{color:var(--indigo)}}
.summary-bar .value.negative{{color:var(--red)}}
</style>
"""


# --- Charts ---
def build_cost_donut(chart_data: List[ChartDatum], total_expenses: float, dark: bool = False) -> go.Figure:
    t = THEMES[bool(dark)]
    fig = go.Figure()
    fig.add_trace(go.Pie(
        labels=[d.name for d in chart_data],
        values=[d.value for d in chart_data],
        marker=dict(colors=[d.color for d in chart_data], line=dict(width=0)),
        hole=0.72,
        sort=False,
        direction='clockwise',
        textinfo='none',
        hovertext=[hover_text(d) for d in chart_data],
        hoverinfo='label+text',
    ))
    fig.update_layout(
        showlegend=False,
        height=280,
        margin=dict(l=10, r=10, t=10, b=10),
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        hoverlabel=dict(bgcolor=t['tooltip'], font=dict(color=t['text'])),
        annotations=[dict(
            text=f"<span style='font-size:10px;color:{t['muted']}'>EXPENSES</span><br><b>{expense_center_label(total_expenses)}</b>",
            x=0.5, y=0.5, showarrow=False, font=dict(color=t['text'], size=14),
        )],
    )
    return fig


def cost_row_html(datum: ChartDatum) -> str:
    return f'''
    <div class="cost-row">
      <div><span class="dot" style="background:{datum.color}"></span><span class="name">{datum.name}</span></div>
      <div><div class="pct">{format_percent(datum.percentageOfRevenue)}</div><div class="amt">{format_currency(datum.value)}</div></div>
    </div>
    <div class="track"><div class="fill" style="background:{datum.color}; width:{bar_width(datum.percentageOfRevenue)}%"></div></div>'''


def field_text(value: float) -> str:
    # Text boxes show an empty field for 0
    if not value:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
