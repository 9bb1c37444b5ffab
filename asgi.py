"""
asgi.py -- Application assembly for DesignDesk.

Adds the static mount that serves uploaded images on top of the API app.
api/main.py only hands out URLs under UPLOAD_URL_PREFIX; this file makes
those URLs resolve.

Run with:  uvicorn asgi:app --reload
"""

from fastapi.staticfiles import StaticFiles

from api.main import app
from core.config import get_settings

_settings = get_settings()

# check_dir=False: the blob store creates the directory on first upload.
app.mount(
    _settings.upload_url_prefix,
    StaticFiles(directory=_settings.upload_dir, check_dir=False),
    name="uploads",
)
