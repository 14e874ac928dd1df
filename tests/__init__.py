"""
Test suite for the Wynwood concierge API.
"""
