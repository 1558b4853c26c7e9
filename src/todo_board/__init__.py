"""Todo board - to-do list client for a json-server tasks resource."""

__version__ = "0.1.0"
