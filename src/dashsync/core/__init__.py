"""Core reconciliation logic for dashsync."""
