"""Step chaining and output parsing."""

from .chain import Chain, PipelineStep
from .output_parser import OutputParser, ParseOutcome

__all__ = ["Chain", "PipelineStep", "OutputParser", "ParseOutcome"]
