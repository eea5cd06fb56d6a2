"""
Websites infrastructure adapters (record store, oracle, identity provider).
"""
