from functools import wraps
from flask import g, jsonify
from flask_jwt_extended import get_jwt

def holding_required(fn):
    """
    Requires the JWT to belong to the holding resolved from X-Holding-ID.
    Must run after jwt_required().
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        holding = getattr(g, "current_holding", None)
        if not holding:
            return jsonify({"error": "Holding context missing"}), 400

        claims = get_jwt()
        if claims.get("holding_id") != holding.id:
            return jsonify({"error": "Holding mismatch"}), 403

        g.current_actor_id = claims.get("sub")
        return fn(*args, **kwargs)
    return wrapper
