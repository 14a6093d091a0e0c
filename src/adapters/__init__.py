"""Integration adapters for linkfix.

Adapters translate between Telethon/aiohttp and the core ports so the core
never imports a third-party client.
"""
