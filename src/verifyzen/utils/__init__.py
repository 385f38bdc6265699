"""Shared utilities for VerifyZen."""

from verifyzen.utils.logging import LogContext, setup_logging

__all__ = ["LogContext", "setup_logging"]
