#!/usr/bin/env python3
"""Report database connectivity and which application tables are missing."""
import sys
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from barangay_api import create_app, db

app = create_app()
with app.app_context():
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        print(f"Failed to connect to the database: {e}")
        sys.exit(1)

    print(f"Connected to {db.engine.url.render_as_string(hide_password=True)}")

    existing = set(inspect(db.engine).get_table_names())
    missing = [name for name in db.metadata.tables if name not in existing]
    if missing:
        print(f"Missing tables: {', '.join(sorted(missing))}")
        print("Run start.py to create them.")
        sys.exit(2)

    print(f"All {len(db.metadata.tables)} tables present.")
