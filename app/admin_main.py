# app/admin_main.py
import os

import uvicorn

from app.api import create_admin_app
from app.data.bootstrap import init_db

init_db()

app = create_admin_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("ADMIN_PORT", 8001)))
