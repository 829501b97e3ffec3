"""Strip secret source locations from .utracy profiler captures."""

__version__ = "0.1.0"
