"""Utility modules for icemold."""

from icemold.utils.logging import PipelineLogger, PipelineStats, configure_logging

__all__ = ["PipelineLogger", "PipelineStats", "configure_logging"]
