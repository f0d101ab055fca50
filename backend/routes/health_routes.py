from flask import Blueprint, jsonify

from backend.models.task_model import isoformat, utcnow
from backend.utils.db import get_store


health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health():
    """Liveness probe. Always 200; reports whether the task store is reachable."""
    connected = get_store().ping()
    return jsonify(
        status="UP",
        database="Connected" if connected else "Disconnected",
        timestamp=isoformat(utcnow()),
    ), 200
