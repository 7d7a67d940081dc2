"""
Application layer for the card scanner.

This package contains:
- ports/: Protocols for the scanner's collaborators (sheet, vision model, storage)
"""
