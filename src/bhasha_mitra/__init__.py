"""Bengali writing assistant that reconciles model suggestions with a live document."""

__version__ = "0.1.0"
