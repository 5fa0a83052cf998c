"""Structured logging building blocks: fields, array and error fields, buffers and an encoder registry."""

__version__ = "0.1.0"
__all__ = ["buffer", "field", "arrays", "errfields", "anyfield", "encoders"]