"""
Edge service for the Asal Media site
"""
