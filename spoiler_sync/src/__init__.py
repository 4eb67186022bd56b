"""Spoiler sync pipelines."""

from .config import SyncConfig, load_config
from .pipeline import ReviewPipeline, SyncPipeline

__all__ = ["SyncConfig", "load_config", "ReviewPipeline", "SyncPipeline"]
