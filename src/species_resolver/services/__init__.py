"""
Shared service utilities.

- http.py - requests session factory (connection retry, default timeout, User-Agent)
"""
