"""
edgar-risk-panel: firm-year risk-factor text measures from SEC 10-K filings
"""
__version__ = "0.1.0"
