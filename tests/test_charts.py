import pytest

from quickstock.intelligence.charts import CHART_RULES, BarChart, SignalsChart, select_chart
from quickstock.intelligence.context import StaticContextSource


@pytest.fixture
def ctx():
    return StaticContextSource().fetch()


FORECAST = "3-Day Demand Forecast (P10 / P50 / P90)"
DEMAND = "7-Day Average Demand by SKU"
STOCK = "Live Inventory Levels vs Reorder Point"
SIGNALS = "Active Live Signals"
OVERVIEW = "Inventory Overview by Node"


@pytest.mark.parametrize("query,title", [
    ("What should we produce for tomorrow?", FORECAST),
    ("P90 for milk", FORECAST),
    ("next 3 day outlook", FORECAST),
    ("Weekly demand trend", DEMAND),
    ("average sales per sku", DEMAND),
    ("Which nodes need a reorder?", STOCK),
    ("optimize my INVENTORY", STOCK),
    ("How will Bathukamma affect us?", SIGNALS),
    ("weather update", SIGNALS),
    ("random unrelated text", OVERVIEW),
    ("", OVERVIEW),
])
def test_keyword_routing(ctx, query, title):
    assert select_chart(query, ctx).title == title


def test_forecast_beats_stock(ctx):
    chart = select_chart("forecast stock levels", ctx)
    assert chart.title == FORECAST


def test_demand_beats_signals(ctx):
    # "festival demand" mentions both; demand rule is earlier.
    assert select_chart("festival demand", ctx).title == DEMAND


def test_rule_order_is_explicit():
    assert [r.name for r in CHART_RULES] == ["forecast", "demand", "stock", "signals"]


def test_forecast_chart_rows(ctx):
    chart = select_chart("forecast", ctx)
    assert isinstance(chart, BarChart)
    assert chart.x_key == "item"
    assert [b.key for b in chart.bars] == ["p10", "p50", "p90"]
    assert [b.color for b in chart.bars] == ["#06b6d4", "#10b981", "#8b5cf6"]
    assert chart.data[0] == {"item": "tomato 1kg", "p10": 110, "p50": 135, "p90": 165}
    assert [row["item"] for row in chart.data] == ["tomato 1kg", "onion 1kg", "milk 1L"]


def test_demand_chart_rows(ctx):
    chart = select_chart("trend", ctx)
    assert chart.x_key == "sku"
    assert len(chart.bars) == 1
    assert chart.data[0] == {"sku": "tomato 1kg", "avg_demand": 126, "trend": "+8% vs last week"}


def test_stock_chart_rows(ctx):
    chart = select_chart("stock", ctx)
    assert [b.key for b in chart.bars] == ["current_stock", "reorder_point"]
    assert chart.data[3] == {"node": "500016", "current_stock": 90, "reorder_point": 200}


def test_signals_are_verbatim(ctx):
    chart = select_chart("What if it rains tomorrow?", ctx)
    assert isinstance(chart, SignalsChart)
    assert chart.type == "signals"
    assert chart.data == [s.model_dump() for s in ctx.live_signals]


def test_default_is_stock_only(ctx):
    chart = select_chart("hello", ctx)
    assert chart.type == "bar"
    assert [b.key for b in chart.bars] == ["current_stock"]
    assert all(set(row) == {"node", "current_stock"} for row in chart.data)
    assert len(chart.data) == len(ctx.active_nodes)


def test_wire_format_uses_xkey(ctx):
    dumped = select_chart("stock", ctx).model_dump(by_alias=True)
    assert dumped["xKey"] == "node"
    assert "x_key" not in dumped
