# quickstock/intelligence/charts.py
"""
Pick the chart shown next to an AI answer.

Rules are tried top to bottom and the first one whose keyword appears in the
(lower-cased) query wins, so "forecast stock levels" gets the forecast chart
even though it also mentions stock.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .context import LiveContext


class BarSeries(BaseModel):
    key: str
    name: str
    color: str


class BarChart(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["bar"] = "bar"
    title: str
    x_key: str = Field(alias="xKey")
    bars: List[BarSeries]
    data: List[Dict[str, Any]]


class SignalsChart(BaseModel):
    type: Literal["signals"] = "signals"
    title: str
    data: List[Dict[str, Any]]


ChartDescriptor = Union[BarChart, SignalsChart]


def _short_item(key: str) -> str:
    # "tomato_1kg_500001" -> "tomato 1kg"
    return " ".join(key.replace("_", " ").split(" ")[:2])


def _node_id(node: str) -> str:
    # "500001 (Gachibowli)" -> "500001"
    return node.split(" ")[0]


def forecast_chart(ctx: LiveContext) -> BarChart:
    return BarChart(
        title="3-Day Demand Forecast (P10 / P50 / P90)",
        x_key="item",
        bars=[
            BarSeries(key="p10", name="P10 (Conservative)", color="#06b6d4"),
            BarSeries(key="p50", name="P50 (Expected)", color="#10b981"),
            BarSeries(key="p90", name="P90 (Peak)", color="#8b5cf6"),
        ],
        data=[
            {"item": _short_item(k), "p10": v.p10, "p50": v.p50, "p90": v.p90}
            for k, v in ctx.next_3day_forecast.items()
        ],
    )


def demand_chart(ctx: LiveContext) -> BarChart:
    return BarChart(
        title="7-Day Average Demand by SKU",
        x_key="sku",
        bars=[BarSeries(key="avg_demand", name="Avg Daily Demand (units)", color="#8b5cf6")],
        data=[
            {"sku": sku.replace("_", " "), "avg_demand": d.recent_7d_avg, "trend": d.trend}
            for sku, d in ctx.demand_trends.items()
        ],
    )


def stock_chart(ctx: LiveContext) -> BarChart:
    return BarChart(
        title="Live Inventory Levels vs Reorder Point",
        x_key="node",
        bars=[
            BarSeries(key="current_stock", name="Current Stock", color="#10b981"),
            BarSeries(key="reorder_point", name="Reorder Point", color="#ef4444"),
        ],
        data=[
            {"node": _node_id(n.node), "current_stock": n.current_stock_units, "reorder_point": n.reorder_point}
            for n in ctx.active_nodes
        ],
    )


def signals_chart(ctx: LiveContext) -> SignalsChart:
    return SignalsChart(
        title="Active Live Signals",
        data=[s.model_dump() for s in ctx.live_signals],
    )


def overview_chart(ctx: LiveContext) -> BarChart:
    return BarChart(
        title="Inventory Overview by Node",
        x_key="node",
        bars=[BarSeries(key="current_stock", name="Current Stock Units", color="#10b981")],
        data=[{"node": _node_id(n.node), "current_stock": n.current_stock_units} for n in ctx.active_nodes],
    )


@dataclass(frozen=True)
class ChartRule:
    name: str
    keywords: Tuple[str, ...]
    build: Callable[[LiveContext], ChartDescriptor]

    def matches(self, query: str) -> bool:
        return any(k in query for k in self.keywords)


# Order matters: first match wins.
CHART_RULES: Tuple[ChartRule, ...] = (
    ChartRule("forecast", ("forecast", "produce", "p50", "p10", "p90", "3 day", "next"), forecast_chart),
    ChartRule("demand", ("demand", "trend", "weekly", "average"), demand_chart),
    ChartRule("stock", ("stock", "inventory", "node", "reorder", "optimize"), stock_chart),
    ChartRule("signals", ("festival", "rain", "weather", "bathukamma", "signal", "what if"), signals_chart),
)


def select_chart(query: str, ctx: LiveContext) -> ChartDescriptor:
    q = (query or "").lower()
    for rule in CHART_RULES:
        if rule.matches(q):
            return rule.build(ctx)
    return overview_chart(ctx)
