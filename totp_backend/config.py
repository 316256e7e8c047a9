"""
Backend configuration, read from environment variables (and a .env file
if one exists in the working directory).
"""
import os

from dotenv import load_dotenv

from totp_core.engine import DEFAULT_DIGITS, DEFAULT_PERIOD

load_dotenv()


class Config:
    DEFAULT_ISSUER = os.getenv('OTP_DEFAULT_ISSUER', 'otp-tool')
    DEFAULT_DIGITS = int(os.getenv('OTP_DEFAULT_DIGITS', DEFAULT_DIGITS))
    DEFAULT_PERIOD = int(os.getenv('OTP_DEFAULT_PERIOD', DEFAULT_PERIOD))
    VERIFY_WINDOW = int(os.getenv('OTP_VERIFY_WINDOW', 0))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    HOST = os.getenv('OTP_HOST', '0.0.0.0')
    PORT = int(os.getenv('OTP_PORT', 5000))
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')
