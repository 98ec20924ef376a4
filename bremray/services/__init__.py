"""Pricing, drafts, photo checks and integration health."""
