from backend.app import create_app


# Expose a module-level `app` for WSGI servers (gunicorn expects `app:app`).
# This calls the factory at import time so `gunicorn app:app` works.
app = create_app()


if __name__ == "__main__":
    # Local development only: run the built-in server.
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])
