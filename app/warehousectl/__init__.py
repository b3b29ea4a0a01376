"""warehousectl - maintenance operations for set-top devices."""

__version__ = "0.4.0"
