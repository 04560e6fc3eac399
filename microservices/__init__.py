"""
User Directory and Order Ledger microservices.

Two Flask services talking JSON over HTTP: the directory owns user records,
the ledger owns orders and checks with the directory before accepting one.
"""

__version__ = "1.0.0"
