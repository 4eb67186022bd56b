"""Logging and text helpers shared by the sync pipelines."""
