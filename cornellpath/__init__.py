"""A small pure-Python path tracer with a Disney-style BRDF and a Cornell box scene."""

__version__ = "0.1.0"