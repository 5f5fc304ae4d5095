"""Clean, reshape and summarize the Alaska commercial salmon catch table."""
from salmon_catch.pipeline import PipelineResult, clean_and_summarize, run_pipeline

__version__ = "0.1.0"

__all__ = ["PipelineResult", "clean_and_summarize", "run_pipeline"]
