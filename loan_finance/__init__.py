"""loan-finance: payment, portfolio and display calculations for lending dashboards."""

__version__ = "0.1.0"
