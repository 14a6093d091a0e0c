"""Core domain package for linkfix.

Core contains link extraction, rewriting, and the per-message pipeline without
any Telegram or HTTP-specific code, keeping the business logic portable.
"""
