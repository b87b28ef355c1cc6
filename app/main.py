# app/main.py
from dotenv import load_dotenv

# Load the root .env before Settings reads the environment.
load_dotenv()

from app.backend.main import create_app  # noqa: E402

app = create_app()
