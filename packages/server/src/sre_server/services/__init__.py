"""Forecasting and presentation services."""
