"""predpricer - AMM outcome pricing, odds formats, chart history and trade-tape books for a prediction-market client."""

__version__ = "0.1.0"
