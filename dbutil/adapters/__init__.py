"""Vendor driver adapters."""
