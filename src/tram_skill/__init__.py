"""Voice assistant webhook for next-tram departures."""

__version__ = "0.1.0"
