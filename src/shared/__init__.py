"""
Shared kernel: configuration, logging, error contract, domain and database
building blocks used by every bounded context.
"""
