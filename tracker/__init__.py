"""Savings progress tracker for a fixed sequence of car targets."""
