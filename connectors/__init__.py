"""
connectors — clients for external services.

Currently a single provider:
  • ``GNewsClient`` — news headlines and search (API key kept server-side)
"""
