"""PyLenient: present canonical JS/JSON files in a lenient dialect inside the editor."""

__version__ = "0.1.0"
