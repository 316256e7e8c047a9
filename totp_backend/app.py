"""
FLASK APP MAIN ENTRY POINT - OTP BACKEND SERVER

Sets up the Flask app, CORS, logging, the OTP blueprint and the mapping
from totp_core errors to HTTP 400 responses.

Run with:  python -m totp_backend.app
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from totp_core.errors import OTPError

from .config import Config
from .routes import otp_bp

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_object(Config)

# frontend may be served from another origin
CORS(app, origins=Config.CORS_ORIGINS)

app.register_blueprint(otp_bp)


@app.errorhandler(OTPError)
def handle_otp_error(e):
    logger.warning("Rejected request: %s: %s", type(e).__name__, e)
    return jsonify({
        "error": str(e),
        "type": type(e).__name__,
        "field": e.field,
    }), 400


@app.route('/', methods=['GET'])
def index():
    """Service info and available endpoints."""
    return jsonify({
        "service": "otpauth-totp",
        "endpoints": {
            "POST /api/credentials": "create a credential with a random secret",
            "POST /api/credentials/parse": "parse an otpauth://totp/ URI",
            "POST /api/totp": "current TOTP code for a URI",
            "POST /api/verify": "verify a TOTP code against a URI",
        },
    })


if __name__ == '__main__':
    app.run(host=Config.HOST, port=Config.PORT)
