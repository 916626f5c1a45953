"""Readers turning spreadsheet exports into RowInput values."""
