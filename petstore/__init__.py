"""Pet catalog service: domain, ports and adapters."""

__version__ = "0.1.0"
