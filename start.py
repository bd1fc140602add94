#!/usr/bin/env python3
import os
import sys
from dotenv import load_dotenv
from sqlalchemy import text
from barangay_api import create_app, db

# Load environment variables
load_dotenv()

# Create the Flask application
app = create_app()

# Fail fast when the database is unreachable, then create missing tables
with app.app_context():
    try:
        db.session.execute(text("SELECT 1"))
    except Exception as e:
        app.logger.critical(f"Database connection failed, shutting down: {e}")
        sys.exit(1)

    app.logger.info("Attempting to create database tables...")
    app.logger.info(f"Tables known to SQLAlchemy metadata before create_all: {list(db.metadata.tables.keys())}")
    db.create_all()
    app.logger.info("Database tables check/creation complete.")

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5001))
    app.run(host="0.0.0.0", port=port, debug=app.config["APP_ENV"] == "development")
