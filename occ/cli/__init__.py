"""CLI module for occ."""
