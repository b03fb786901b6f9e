# Uvicorn/Gunicorn entry point
from recipelens.app import create_app

app = create_app()
