from __future__ import annotations

import pandas as pd
import plotly.express as px
import requests
import streamlit as st

from radar.analytics.stats import rsi_condition
from radar.analytics.timeframe import TimeFrame
from radar.coins import AVAILABLE_COINS
from radar.config import settings

API_BASE = settings.resolved_api_base_url.rstrip("/")
MAX_CHART_POINTS = 100

st.set_page_config(page_title="Boom or Doom Radar", layout="wide")
st.title("🚀 Boom or Doom Radar")
st.caption("Meme coin price history, indicators and a Boom or Doom score")
st.markdown(
    """
    <style>
    body, input, select, textarea {font-family: 'Inter', 'Helvetica', sans-serif !important;}
    h1, h2, h3, h4 {font-weight: 700;}
    .stMetric {background: #0b1221; border-radius: 12px; padding: 12px;}
    [data-testid="stSidebar"] {background: #0f172a; color: #e2e8f0;}
    </style>
    """,
    unsafe_allow_html=True,
)


@st.cache_data(ttl=60)
def load_series(symbol: str, time_frame: str) -> dict:
    resp = requests.get(f"{API_BASE}/series/{symbol}", params={"time_frame": time_frame}, timeout=30)
    resp.raise_for_status()
    return resp.json()


@st.cache_data(ttl=60)
def load_stats(symbol: str, time_frame: str) -> dict:
    resp = requests.get(f"{API_BASE}/stats/{symbol}", params={"time_frame": time_frame}, timeout=30)
    resp.raise_for_status()
    return resp.json()


def to_frame(records: list[dict]) -> pd.DataFrame:
    df = pd.DataFrame(records)
    if df.empty:
        return df
    df["as_of"] = pd.to_datetime(df["timestamp"], unit="ms", utc=True)
    # Thin long series so the charts stay responsive.
    if len(df) > MAX_CHART_POINTS:
        df = df.iloc[:: len(df) // MAX_CHART_POINTS]
    return df


def render_price_chart(df: pd.DataFrame, symbol: str) -> None:
    columns = {
        "price": "Price",
        "ema_6h": "EMA 6H",
        "ma_6h": "MA 6H",
        "bollinger_upper": "Upper Band",
        "bollinger_lower": "Lower Band",
    }
    if df["forecast_price"].notna().any():
        columns["forecast_price"] = "Forecast"

    long_df = df.melt(id_vars="as_of", value_vars=list(columns), var_name="series", value_name="value")
    long_df["series"] = long_df["series"].map(columns)
    fig = px.line(
        long_df.dropna(subset=["value"]),
        x="as_of",
        y="value",
        color="series",
        title=f"{symbol} price",
        color_discrete_map={
            "Price": "#0ea5e9",
            "EMA 6H": "#22c55e",
            "MA 6H": "#a855f7",
            "Upper Band": "#9ca3af",
            "Lower Band": "#9ca3af",
            "Forecast": "#f59e0b",
        },
    )
    fig.update_layout(hovermode="x unified", legend_title_text="")
    fig.update_yaxes(title_text="Price (USD)")
    st.plotly_chart(fig, use_container_width=True)


def render_rsi_chart(df: pd.DataFrame) -> None:
    fig = px.area(df, x="as_of", y="rsi", title=f"RSI ({rsi_condition(df['rsi'].iloc[-1])})")
    fig.add_hline(y=70, line_dash="dash", line_color="#ef4444")
    fig.add_hline(y=30, line_dash="dash", line_color="#22c55e")
    fig.update_yaxes(range=[0, 100])
    st.plotly_chart(fig, use_container_width=True)


def render_stats(stats: dict) -> None:
    summary = stats["summary"]
    display = stats["display"]
    col1, col2, col3 = st.columns(3)
    with col1:
        st.subheader("Key Stats")
        st.metric("24H High", display["high_24h"])
        st.metric("24H Low", display["low_24h"])
        st.metric("Market Cap", display["market_cap"], summary["market_cap_change"])
        st.metric("Volume (24H)", display["volume"], summary["volume_change"])
        if summary.get("lifecycle_stage"):
            st.caption(f"Current life stage: {summary['lifecycle_stage']}")
    with col2:
        st.subheader("Whale Activity (24H)")
        st.metric("Whale transactions", summary["whale_transactions_24h"])
        st.write(summary["whale_label"])
    with col3:
        st.subheader("Boom or Doom Score")
        score = summary["score"]
        st.markdown("## " + ("🚀" * score if score else "DOOM"))
        st.write(summary["score_label"])


with st.sidebar:
    st.subheader("Coin")
    labels = {f"{coin.icon_glyph} {coin.symbol} · {coin.display_name}": coin.symbol for coin in AVAILABLE_COINS}
    default_index = next(
        (i for i, symbol in enumerate(labels.values()) if symbol == settings.default_symbol.upper()), 0
    )
    choice = st.selectbox("Search meme coins", options=list(labels), index=default_index)
    frames = [frame.value for frame in TimeFrame]
    time_frame = st.radio(
        "Time frame",
        options=frames,
        index=frames.index(TimeFrame.parse(settings.default_time_frame).value),
        horizontal=True,
    )
    if st.button("Refresh data"):
        st.cache_data.clear()
        st.rerun()

symbol = labels[choice]
try:
    series = load_series(symbol, time_frame)
    stats = load_stats(symbol, time_frame)
except requests.RequestException as exc:
    st.error(f"Could not fetch data from the API: {exc}")
    st.stop()

coin = series["coin"]
st.header(f"{coin['icon_glyph']} {coin['display_name']} ({coin['symbol']})")
if series["using_synthetic"]:
    st.warning(f"Using synthetic data: {series['notice']}")
elif series.get("notice"):
    st.caption(series["notice"])

df = to_frame(series["records"])
if df.empty:
    st.info(f"No data available for {coin['symbol']}. Try searching for a different coin.")
    st.stop()

st.metric("Price", stats["display"]["latest_price"])
render_price_chart(df, coin["symbol"])
render_rsi_chart(df)
render_stats(stats)
