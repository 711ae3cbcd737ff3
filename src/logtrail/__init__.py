"""logtrail — incremental log tailing with regex field extraction."""

__version__ = "0.1.0"
