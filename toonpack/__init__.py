"""
Toonpack

Cartoon sticker packs for Telegram, generated from a single selfie.
"""

__version__ = "0.1.0"
