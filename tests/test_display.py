import unittest

import plotly.graph_objects as go

from display import (
    bar_width, build_cost_donut, cost_row_html, expense_center_label, field_text,
    format_count, format_currency, format_percent, hover_text, profit_card_class,
    theme_css,
)
from profit_model import compute, distribute, get_default_inputs


class TestFormatting(unittest.TestCase):
    def test_format_currency(self):
        self.assertEqual(format_currency(5400), "₹5,400")
        self.assertEqual(format_currency(2642.5), "₹2,643")
        self.assertEqual(format_currency(0), "₹0")
        self.assertEqual(format_currency(-5), "-₹5")
        self.assertEqual(format_currency(-1234.4), "-₹1,234")

    def test_percent_and_count(self):
        self.assertEqual(format_percent(48.9444), "48.9%")
        self.assertEqual(format_count(9), "9.0")

    def test_expense_center_label(self):
        self.assertEqual(expense_center_label(2757), "₹3k")
        self.assertEqual(expense_center_label(5), "₹0k")

    def test_bar_width_is_capped(self):
        self.assertEqual(bar_width(10), 20)
        self.assertEqual(bar_width(75), 100)

    def test_profit_card_class(self):
        self.assertIn("positive", profit_card_class(0))
        self.assertIn("negative", profit_card_class(-0.01))

    def test_field_text(self):
        self.assertEqual(field_text(0), "")
        self.assertEqual(field_text(600.0), "600")
        self.assertEqual(field_text(12.5), "12.5")


class TestRendering(unittest.TestCase):
    def setUp(self):
        self.results = compute(get_default_inputs())
        self.data = distribute(self.results)

    def test_hover_text(self):
        self.assertEqual(hover_text(self.data[1]), "₹1,180 (42.8% of Exp)")

    def test_cost_row_html(self):
        html = cost_row_html(self.data[0])
        self.assertIn("Product", html)
        self.assertIn(self.data[0].color, html)
        self.assertIn("16.7%", html)

    def test_donut_keeps_distribution_order_and_colors(self):
        fig = build_cost_donut(self.data, self.results.totalExpenses)
        self.assertIsInstance(fig, go.Figure)
        pie = fig.data[0]
        self.assertEqual(list(pie.labels), [d.name for d in self.data])
        self.assertEqual(list(pie.marker.colors), [d.color for d in self.data])
        self.assertFalse(pie.sort)
        self.assertIn("₹3k", fig.layout.annotations[0].text)

    def test_theme_css(self):
        self.assertIn("#0f172a", theme_css(True))
        self.assertIn("#FDFDFF", theme_css(False))


if __name__ == "__main__":
    unittest.main()
