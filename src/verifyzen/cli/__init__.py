"""Command line interface for VerifyZen."""
