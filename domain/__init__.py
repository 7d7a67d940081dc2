"""
Domain layer for the card scanner.

Pure models, independent of storage, HTTP and the vision model.
"""
