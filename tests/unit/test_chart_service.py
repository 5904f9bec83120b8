"""Unit tests for chart rendering"""

from services.chart_service import ChartService
from services.period_aggregator import category_breakdown, project_monthly_series

PNG_SIGNATURE = b"\x89PNG"


def test_render_bar(sample_state, now):
    """Test projection chart data renders to a PNG"""
    data = project_monthly_series(sample_state, now, 6).to_chart_data()
    buf = ChartService().render_bar(data, "Proyección")

    assert buf.read(4) == PNG_SIGNATURE


def test_render_pie(sample_state):
    """Test category breakdown renders to a PNG"""
    buf = ChartService().render_pie(category_breakdown(sample_state).to_chart_data(), "Categorías")

    assert buf.read(4) == PNG_SIGNATURE


def test_empty_chart_data():
    """Test nothing is rendered without data"""
    service = ChartService()

    assert service.render_bar({"labels": [], "datasets": []}, "x") is None
    assert service.render_pie({"labels": [], "values": []}, "x") is None


def test_render_pie_leaves_out_negative_slices():
    """Test categories netted below zero are not drawn"""
    service = ChartService()

    buf = service.render_pie({"labels": ["Salud", "Hogar"], "values": [-60, 40]}, "Categorías")
    assert buf.read(4) == PNG_SIGNATURE
    assert service.render_pie({"labels": ["Salud"], "values": [-60]}, "Categorías") is None
