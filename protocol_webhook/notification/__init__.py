"""Notification delivery package.

Sends the ``protocol_completed`` webhook when a protocol is closed.
"""
