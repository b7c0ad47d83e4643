from flask import Blueprint, jsonify, request


def create_auth_blueprint(auth_service):
    auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

    @auth_bp.route("/register", methods=["POST"])
    def register():
        payload = request.get_json(silent=True)
        return jsonify(auth_service.register(payload if isinstance(payload, dict) else {})), 201

    @auth_bp.route("/login", methods=["POST"])
    def login():
        payload = request.get_json(silent=True)
        return jsonify(auth_service.login(payload if isinstance(payload, dict) else {}))

    return auth_bp
