"""
Flask backend for totp_core: a stateless JSON API over otpauth URIs.
"""

from .app import app

__all__ = ['app']
