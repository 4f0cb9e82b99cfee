import plotly.graph_objects as go

from teldim.sizing.sizer import dimension, sweep
from teldim.ui.charts import SITE_ICON, bar_data, bar_figure, pie_data, pie_figure, site_icons, sweep_figure


def test_pie_data_uses_computed_coverage():
    df = pie_data(dimension("optique", {"distance": 200, "power": 0}))
    assert list(df["name"]) == ["Couverture", "Capacité", "Qualité", "Disponibilité"]
    assert list(df["value"]) == [50, 85, 92, 98]


def test_bar_data_reports_cost_in_millions():
    df = bar_data(dimension("gsm"))
    assert list(df["value"]) == [38, 3420.0]


def test_chart_data_without_results():
    assert pie_data(None)["value"].iloc[0] == 0
    assert list(bar_data(None)["value"]) == [0, 0.0]


def test_figures():
    r = dimension("lte")
    assert isinstance(pie_figure(r), go.Figure)
    assert len(bar_figure(r).data) == 1

    df = sweep("lte", {}, "area", [7, 70, 700])
    fig = sweep_figure(df, "area", "sites")
    assert list(fig.data[0].y) == [1, 10, 100]


def test_site_icons_are_capped_at_16():
    assert site_icons(dimension("hertzien")) == [SITE_ICON, SITE_ICON]
    assert len(site_icons(dimension("gsm"))) == 16
    assert site_icons(dimension("lte", {"area": 0})) == []
    assert site_icons(None) == []
