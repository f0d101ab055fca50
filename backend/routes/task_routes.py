from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from backend.errors import NotFound, ValidationError
from backend.utils.db import get_store


tasks_bp = Blueprint("tasks", __name__)


def _json_body():
    if not request.get_data():
        return {}
    try:
        payload = request.get_json(force=True)
    except BadRequest:
        raise ValidationError("Request body must be valid JSON") from None
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


@tasks_bp.errorhandler(ValidationError)
def handle_validation_error(exc):
    return jsonify(message=exc.message), 400


@tasks_bp.errorhandler(NotFound)
def handle_not_found(exc):
    return jsonify(message=exc.message), 404


@tasks_bp.get("")
def list_tasks():
    tasks = get_store().list()
    return jsonify([task.to_dict() for task in tasks]), 200


@tasks_bp.post("")
def create_task():
    payload = _json_body()
    task = get_store().create(
        payload.get("title"),
        description=payload.get("description"),
        completed=payload.get("completed", False),
    )
    current_app.logger.info("Created task %s", task.id)
    return jsonify(task.to_dict()), 201


@tasks_bp.get("/<task_id>")
def get_task(task_id):
    task = get_store().get(task_id)
    return jsonify(task.to_dict()), 200


@tasks_bp.put("/<task_id>")
def update_task(task_id):
    payload = _json_body()
    task = get_store().update(task_id, payload)
    return jsonify(task.to_dict()), 200


@tasks_bp.delete("/<task_id>")
def delete_task(task_id):
    get_store().delete(task_id)
    current_app.logger.info("Deleted task %s", task_id)
    return jsonify(message="Task deleted successfully"), 200
