"""
Database initialization script.
"""
from mn.core.config import settings
from mn.db.session import init_db


def main():
    print(f"Initializing database at {settings.DATABASE_URL}...")
    init_db()
    print("Database initialized successfully!")


if __name__ == "__main__":
    main()
