"""
Timed Trial Engine

Runs short interactive games for behavioral-research studies under a
wall-clock budget, records every participant action as a replayable log,
and scores the outcomes with deterministic simulation algorithms.
"""

__version__ = "0.1.0"
