"""웹 앱 (FastAPI)."""
