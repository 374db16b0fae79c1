"""Product cache service: FastAPI app with cache-aside CRUD over SQLAlchemy and Redis."""
