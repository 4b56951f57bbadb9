# SQLAlchemy models (sql backend only)
