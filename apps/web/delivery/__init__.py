"""Delivery platform integration - the remote menu gateway."""
