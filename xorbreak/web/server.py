"""Flask JSON API for xorbreak"""
import dataclasses
import logging
import math
from typing import Dict, Any, Optional

from flask import Flask, request, jsonify

from xorbreak.__version__ import __version__
from xorbreak.analysis.single_byte import detect_single_byte_xor
from xorbreak.breaker import RepeatingKeyXORBreaker
from xorbreak.config import BreakerConfig, DetectionConfig
from xorbreak.error_handling import (
    ErrorCategory,
    InputError,
    InvalidArgumentError,
    XorBreakError,
)
from xorbreak.input_handler import InputHandler
from xorbreak.utils.xor_tools import XORTools

logger = logging.getLogger(__name__)

# HTTP status for each error category
STATUS_CODES = {
    ErrorCategory.INVALID_ARGUMENT: 400,
    ErrorCategory.MALFORMED_INPUT: 400,
    ErrorCategory.INPUT_ERROR: 400,
    ErrorCategory.CONFIGURATION_ERROR: 400,
    ErrorCategory.NO_CANDIDATE_FOUND: 422,
}

# JSON field -> BreakerConfig field
_BREAK_OVERRIDES = {
    'chi2_threshold': ('chi2_threshold', float),
    'candidates': ('candidate_keysizes', int),
    'printable_ratio': ('printable_ratio', float),
    'min_keysize': ('min_keysize', int),
    'max_keysize': ('max_keysize', int),
    'sample_pairs': ('sample_pairs', int),
}


def _text(data: bytes) -> str:
    return data.decode('utf-8', errors='replace')


def _score(score: float) -> Optional[float]:
    # Keys that decode to nothing English-like score inf, which JSON cannot carry
    return score if math.isfinite(score) else None


class WebAPIServer:
    """JSON API exposing the cryptanalysis pipeline over HTTP"""

    def __init__(self, config: Optional[BreakerConfig] = None,
                 detection_config: Optional[DetectionConfig] = None,
                 port: int = 8000):
        """
        Args:
            config: Default parameters for /api/break
            detection_config: Default parameters for /api/detect
            port: Port used by start() unless it is given one
        """
        self.app = Flask(__name__)
        self.app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024
        self.config = (config or BreakerConfig()).validate()
        self.detection_config = (detection_config or DetectionConfig()).validate()
        self.input_handler = InputHandler(show_stats=False)
        self.port = port

        self._register_routes()

    def _json_body(self) -> Dict[str, Any]:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise InputError("Request body must be a JSON object")
        return payload

    def _break_config(self, payload: Dict[str, Any]) -> BreakerConfig:
        overrides = {}
        for field_name, (config_name, cast) in _BREAK_OVERRIDES.items():
            if field_name in payload:
                try:
                    overrides[config_name] = cast(payload[field_name])
                except (TypeError, ValueError) as e:
                    raise InvalidArgumentError(
                        f"Invalid value for {field_name}: {payload[field_name]!r}"
                    ) from e
        return dataclasses.replace(self.config, **overrides)

    def _detection_config(self, payload: Dict[str, Any]) -> DetectionConfig:
        try:
            config = DetectionConfig(
                chi2_threshold=float(payload.get('chi2_threshold', self.detection_config.chi2_threshold)),
                printable_ratio=float(payload.get('printable_ratio', self.detection_config.printable_ratio)),
            )
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError("Detection thresholds must be numbers") from e
        return config.validate()

    def _register_routes(self):
        """Register all Flask routes"""

        @self.app.errorhandler(XorBreakError)
        def handle_xorbreak_error(error: XorBreakError):
            status = STATUS_CODES.get(error.category, 500)
            logger.warning(f"{error.category.value}: {error}")
            body = {'error': str(error), 'category': error.category.value}
            if error.suggestion:
                body['suggestion'] = error.suggestion
            return jsonify(body), status

        @self.app.route('/api/health')
        def api_health():
            return jsonify({'status': 'ok', 'version': __version__})

        @self.app.route('/api/break', methods=['POST'])
        def api_break():
            """Break repeating-key XOR ciphertext"""
            payload = self._json_body()
            encoding = payload.get('encoding', 'base64')
            ciphertext = self.input_handler.decode(str(payload.get('ciphertext', '')), encoding)

            breaker = RepeatingKeyXORBreaker(self._break_config(payload))
            result = breaker.analyze(ciphertext)

            return jsonify({
                'key': _text(result.key),
                'key_hex': result.key.hex(),
                'key_score': _score(result.key_score),
                'plaintext': _text(result.plaintext),
                'plaintext_hex': result.plaintext.hex(),
                'keysizes': [
                    {'keysize': c.keysize, 'distance': c.distance}
                    for c in result.keysizes
                ],
                'reconstructions': [
                    {
                        'keysize': r.keysize,
                        'succeeded': r.succeeded,
                        'key_hex': r.key.hex(),
                        'failed_column': r.failed_column,
                    }
                    for r in result.reconstructions
                ],
            })

        @self.app.route('/api/encrypt', methods=['POST'])
        def api_encrypt():
            """Repeating-key XOR of plaintext with key"""
            payload = self._json_body()
            plaintext = str(payload.get('plaintext', '')).encode('utf-8')
            key = str(payload.get('key', '')).encode('utf-8')
            ciphertext = XORTools.repeating_key_xor(plaintext, key)
            return jsonify({'ciphertext_hex': ciphertext.hex()})

        @self.app.route('/api/detect', methods=['POST'])
        def api_detect():
            """Find single-byte XOR lines among hex ciphertexts"""
            payload = self._json_body()
            lines = payload.get('lines')
            if not isinstance(lines, list):
                raise InputError("'lines' must be a list of hex strings")

            config = self._detection_config(payload)
            detections = detect_single_byte_xor(
                [str(line) for line in lines],
                score_threshold=config.chi2_threshold,
                printable_ratio_threshold=config.printable_ratio,
            )
            return jsonify({
                'detections': [
                    {
                        'line': d.line_number,
                        'key': d.key,
                        'score': d.score,
                        'plaintext': _text(d.plaintext),
                    }
                    for d in detections
                ]
            })

    def start(self, port: Optional[int] = None, debug: bool = False):
        """
        Start the Flask web server.

        Args:
            port: Port number to listen on (default: the server's port)
            debug: Enable debug mode
        """
        port = port or self.port
        print(f"Starting xorbreak API on http://localhost:{port}")
        print("Press Ctrl+C to stop the server")
        self.app.run(host='127.0.0.1', port=port, debug=debug)


def create_app(config: Optional[BreakerConfig] = None) -> Flask:
    """Flask application factory"""
    return WebAPIServer(config).app
