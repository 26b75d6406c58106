"""Spendwise analytics engine: category breakdowns, trends, anomalies and forecasts."""
