"""Generic ROS-style interfaces, an in-memory mock backend, and code generation helpers."""

__version__ = "0.15.0"
__all__ = ["errors", "messages", "traits", "mock", "spec", "helpers"]