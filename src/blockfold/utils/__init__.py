"""Utility modules for blockfold."""
