"""
OTP BACKEND API ROUTES - FLASK BLUEPRINT

Stateless endpoints: nothing is stored server-side, every request carries
the otpauth URI it works on.

curl -X POST http://localhost:5000/api/credentials -H "Content-Type: application/json" -d '{"issuer": "Test Corp", "account": "testuser"}'
curl -X POST http://localhost:5000/api/totp -H "Content-Type: application/json" -d '{"uri": "otpauth://totp/..."}'
curl -X POST http://localhost:5000/api/verify -H "Content-Type: application/json" -d '{"uri": "otpauth://totp/...", "code": "123456"}'
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from totp_core.credential import new_credential, parse_uri
from totp_core.engine import totp, verify_code

logger = logging.getLogger(__name__)

otp_bp = Blueprint('otp', __name__, url_prefix='/api')


def _number_or_none(data, key):
    value = data.get(key)
    if value is None or (isinstance(value, (int, float)) and not isinstance(value, bool)):
        return value, None
    return None, (jsonify({"error": f"'{key}' must be a number"}), 400)


@otp_bp.route('/credentials', methods=['POST'])
def create_credential():
    """
    Create a credential with a fresh secret.

    Input: {"account": "alice", "issuer": "MyApp", "digits": 6, "period": 30}
    Output: 201 with the credential fields and its otpauth URI
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'account' not in data:
        return jsonify({"error": "Account is required"}), 400

    cfg = current_app.config
    issuer = data.get('issuer', cfg['DEFAULT_ISSUER'])
    if not isinstance(issuer, str) or not isinstance(data['account'], str):
        return jsonify({"error": "Issuer and account must be strings"}), 400

    cred = new_credential(
        issuer,
        data['account'],
        digits=data.get('digits', cfg['DEFAULT_DIGITS']),
        period=data.get('period', cfg['DEFAULT_PERIOD']),
    )
    logger.info("Issued credential %s:%s (secret %s...)", cred.issuer, cred.account, cred.secret[:4])
    return jsonify(cred.to_dict()), 201


@otp_bp.route('/credentials/parse', methods=['POST'])
def parse_credential():
    """Input: {"uri": "otpauth://totp/..."}; output: the credential fields."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'uri' not in data:
        return jsonify({"error": "URI is required"}), 400

    cred = parse_uri(data['uri'])
    return jsonify(cred.to_dict())


@otp_bp.route('/totp', methods=['POST'])
def current_code():
    """
    Input: {"uri": "otpauth://totp/...", "timestamp": 1234567890}
    Output: {"code": "123456", "remaining": 12}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'uri' not in data:
        return jsonify({"error": "URI is required"}), 400
    timestamp, error = _number_or_none(data, 'timestamp')
    if error:
        return error

    cred = parse_uri(data['uri'])
    code, remaining = totp(cred, timestamp)
    return jsonify({"code": code, "remaining": remaining, "period": cred.period})


@otp_bp.route('/verify', methods=['POST'])
def verify():
    """
    Input: {"uri": "otpauth://totp/...", "code": "123456", "timestamp": ..., "window": 0}
    Output: {"valid": true} or {"valid": false}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'uri' not in data or 'code' not in data:
        return jsonify({"error": "URI and code are required"}), 400
    timestamp, error = _number_or_none(data, 'timestamp')
    if error:
        return error
    window = data.get('window', current_app.config['VERIFY_WINDOW'])
    if not isinstance(window, int) or isinstance(window, bool):
        return jsonify({"error": "'window' must be an integer"}), 400

    cred = parse_uri(data['uri'])
    valid = verify_code(cred, data['code'], now=timestamp, window=window)
    logger.info("Verification for %s:%s -> %s", cred.label.issuer_prefix, cred.account, valid)
    return jsonify({"valid": valid})
