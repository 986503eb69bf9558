"""Streak, achievement and schedule services."""
