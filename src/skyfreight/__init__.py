"""skyfreight: shipment and flight record store for the tracking dashboard."""

__version__ = "0.1.0"
