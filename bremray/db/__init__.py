"""Local persistence: engine helpers and preference storage."""
