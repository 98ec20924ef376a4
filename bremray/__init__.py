"""Bremray Electrical job-management client."""
