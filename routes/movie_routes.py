from flask import Blueprint, jsonify, request

from routes.guard import token_required


def _json_body():
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def create_movie_blueprint(movie_service, tokens):
    movie_bp = Blueprint("movies", __name__, url_prefix="/api/movies")
    login_required = token_required(tokens)

    @movie_bp.route("", methods=["GET"])
    @login_required
    def list_movies(principal):
        return jsonify(movie_service.list(principal))

    @movie_bp.route("/<movie_id>", methods=["GET"])
    @login_required
    def get_movie(movie_id, principal):
        return jsonify(movie_service.get(principal, movie_id))

    @movie_bp.route("", methods=["POST"])
    @login_required
    def create_movie(principal):
        return jsonify(movie_service.create(principal, _json_body())), 201

    @movie_bp.route("/<movie_id>", methods=["PUT"])
    @login_required
    def update_movie(movie_id, principal):
        return jsonify(movie_service.update(principal, movie_id, _json_body()))

    @movie_bp.route("/<movie_id>", methods=["DELETE"])
    @login_required
    def delete_movie(movie_id, principal):
        movie_service.delete(principal, movie_id)
        return "", 204

    @movie_bp.route("/<movie_id>/favorite", methods=["PATCH"])
    @login_required
    def toggle_favorite(movie_id, principal):
        return jsonify(movie_service.toggle_favorite(principal, movie_id))

    @movie_bp.route("/<movie_id>/rating", methods=["PATCH"])
    @login_required
    def set_rating(movie_id, principal):
        return jsonify(movie_service.set_rating(principal, movie_id, _json_body()))

    return movie_bp
